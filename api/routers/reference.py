"""Reference data endpoints for drop-downs."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_db
from models.reference import Role, Society
from schemas import RoleResponse, SocietyResponse

router = APIRouter()


@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Role).order_by(Role.role_name))
    return result.scalars().all()


@router.get("/societies", response_model=list[SocietyResponse])
async def list_societies(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Society).order_by(Society.name))
    return result.scalars().all()
