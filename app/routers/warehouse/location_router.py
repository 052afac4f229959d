# app/routers/warehouse/location_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.enums.location_type import LocationType
from app.schemas.warehouse.location_schemas import (
    LocationCreate,
    LocationUpdate,
    LocationOut,
    LocationStats,
)
from app.services.warehouse.location_service import (
    list_locations,
    get_location_stats,
    get_location,
    create_location,
    update_location,
    delete_location,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/locations", tags=["Locations"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[LocationOut]])
async def list_locations_api(
    warehouse_id: Optional[UUID] = Query(None),
    zone_id: Optional[UUID] = Query(None),
    location_type: Optional[LocationType] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info(
        "List locations",
        extra={
            "warehouse_id": str(warehouse_id) if warehouse_id else None,
            "zone_id": str(zone_id) if zone_id else None,
            "search": search,
        },
    )
    data = await list_locations(
        db,
        user,
        warehouse_id=warehouse_id,
        zone_id=zone_id,
        location_type=location_type,
        search=search,
    )
    return success_response("Locations retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[LocationStats])
async def location_stats_api(
    warehouse_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_location_stats(db, user, warehouse_id=warehouse_id)
    return success_response("Location statistics retrieved successfully", stats)


@router.get("/{location_id}", response_model=APIResponse[LocationOut])
async def get_location_api(
    location_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    location = await get_location(db, user, location_id)
    return success_response("Location retrieved successfully", location)


@router.post("", response_model=APIResponse[LocationOut], status_code=201)
async def create_location_api(
    payload: LocationCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Create location", extra={"location_code": payload.location_code})
    location = await create_location(db, payload, user)
    return success_response("Location created successfully", location)


@router.put("/{location_id}", response_model=APIResponse[LocationOut])
async def update_location_api(
    location_id: UUID,
    payload: LocationUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update location", extra={"location_id": str(location_id)})
    location = await update_location(db, location_id, payload, user)
    return success_response("Location updated successfully", location)


@router.delete("/{location_id}", response_model=APIResponse[dict])
async def delete_location_api(
    location_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete location", extra={"location_id": str(location_id)})
    data = await delete_location(db, location_id, user)
    return success_response("Location deleted successfully", data)
