# app/routers/warehouse/zone_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.enums.zone_type import ZoneType
from app.schemas.warehouse.zone_schemas import ZoneCreate, ZoneUpdate, ZoneOut, ZoneStats
from app.services.warehouse.zone_service import (
    list_zones,
    get_zone_stats,
    get_zone,
    create_zone,
    update_zone,
    delete_zone,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/zones", tags=["Zones"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[ZoneOut]])
async def list_zones_api(
    warehouse_id: Optional[UUID] = Query(None),
    zone_type: Optional[ZoneType] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info(
        "List zones",
        extra={"warehouse_id": str(warehouse_id) if warehouse_id else None},
    )
    data = await list_zones(db, user, warehouse_id=warehouse_id, zone_type=zone_type)
    return success_response("Zones retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[ZoneStats])
async def zone_stats_api(
    warehouse_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_zone_stats(db, user, warehouse_id=warehouse_id)
    return success_response("Zone statistics retrieved successfully", stats)


@router.get("/{zone_id}", response_model=APIResponse[ZoneOut])
async def get_zone_api(
    zone_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    zone = await get_zone(db, user, zone_id)
    return success_response("Zone retrieved successfully", zone)


@router.post("", response_model=APIResponse[ZoneOut], status_code=201)
async def create_zone_api(
    payload: ZoneCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info(
        "Create zone",
        extra={"zone_code": payload.zone_code, "warehouse_id": str(payload.warehouse_id)},
    )
    zone = await create_zone(db, payload, user)
    return success_response("Zone created successfully", zone)


@router.put("/{zone_id}", response_model=APIResponse[ZoneOut])
async def update_zone_api(
    zone_id: UUID,
    payload: ZoneUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update zone", extra={"zone_id": str(zone_id)})
    zone = await update_zone(db, zone_id, payload, user)
    return success_response("Zone updated successfully", zone)


@router.delete("/{zone_id}", response_model=APIResponse[dict])
async def delete_zone_api(
    zone_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete zone", extra={"zone_id": str(zone_id)})
    data = await delete_zone(db, zone_id, user)
    return success_response("Zone deleted successfully", data)
