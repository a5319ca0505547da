"""Staff management API endpoints."""

import logging
import uuid
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_db
from models.reference import Society
from models.staff import Staff
from schemas import StaffCreate, StaffUpdate, StaffResponse, AgentBrief
from services.errors import ConflictError, StaffNotFound
from services.passwords import hash_password

router = APIRouter()
logger = logging.getLogger(__name__)


async def _get_staff(db: AsyncSession, staff_id: uuid.UUID) -> Staff:
    result = await db.execute(
        select(Staff).where(Staff.id == staff_id).execution_options(populate_existing=True)
    )
    staff = result.scalar_one_or_none()
    if not staff:
        raise StaffNotFound("Staff not found.")
    return staff


async def _societies(db: AsyncSession, society_ids: list[uuid.UUID]) -> list[Society]:
    if not society_ids:
        return []
    result = await db.execute(select(Society).where(Society.id.in_(society_ids)))
    return list(result.scalars().all())


async def _commit_unique(db: AsyncSession):
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("This phone is already registered. Please use a different one.") from e


@router.get("/", response_model=list[StaffResponse])
async def list_staff(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Staff).order_by(Staff.name))
    return result.scalars().all()


@router.get("/agents", response_model=list[AgentBrief])
async def list_agents(db: AsyncSession = Depends(get_db)):
    """All staff, for pickup/delivery agent drop-downs."""
    result = await db.execute(select(Staff).order_by(Staff.name))
    return result.scalars().all()


@router.post("/", response_model=StaffResponse, status_code=201)
async def create_staff(data: StaffCreate, db: AsyncSession = Depends(get_db)):
    staff = Staff(
        name=data.name,
        email=data.email or None,
        phone=data.phone,
        password_hash=hash_password(data.password),
        role_id=data.role_id,
        societies=await _societies(db, data.society_ids),
    )
    db.add(staff)
    await _commit_unique(db)
    logger.info("Staff created: %s (%s)", data.name, data.phone)
    return await _get_staff(db, staff.id)


@router.put("/{staff_id}", response_model=StaffResponse)
async def update_staff(staff_id: uuid.UUID, data: StaffUpdate, db: AsyncSession = Depends(get_db)):
    staff = await _get_staff(db, staff_id)

    if data.name is not None:
        staff.name = data.name
    if "email" in data.model_fields_set:
        staff.email = data.email or None
    if data.phone is not None:
        staff.phone = data.phone
    if data.password:
        staff.password_hash = hash_password(data.password)
    if data.role_id is not None:
        staff.role_id = data.role_id
    if data.society_ids is not None:
        staff.societies = await _societies(db, data.society_ids)

    await _commit_unique(db)
    logger.info("Staff updated: id=%s", staff_id)
    return await _get_staff(db, staff_id)


@router.delete("/{staff_id}")
async def delete_staff(staff_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    staff = await _get_staff(db, staff_id)
    await db.delete(staff)
    await db.commit()
    return {"message": "Staff deleted successfully."}
