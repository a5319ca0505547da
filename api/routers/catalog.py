"""Service catalog API endpoints."""

import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_db
from models.service import Service
from schemas import ServiceResponse, ServiceUpdate
from services.catalog import definition_from_record
from services.errors import InvalidServiceDefinition

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[ServiceResponse])
async def list_services(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Service).order_by(Service.category_name))
    return result.scalars().all()


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(service_id: uuid.UUID, data: ServiceUpdate, db: AsyncSession = Depends(get_db)):
    """Edit rates, items or TATs; the result must still be a valid catalog entry."""
    result = await db.execute(select(Service).where(Service.id == service_id))
    service = result.scalar_one_or_none()
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")

    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(service, field, value)

    try:
        definition_from_record(service)
    except InvalidServiceDefinition:
        await db.rollback()
        raise

    await db.commit()
    await db.refresh(service)
    logger.info("Service updated: %s fields=%s", service.category_name, sorted(changes))
    return service
