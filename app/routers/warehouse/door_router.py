# app/routers/warehouse/door_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.enums.door_type import DoorType
from app.schemas.warehouse.door_schemas import DoorCreate, DoorUpdate, DoorOut, DoorStats
from app.services.warehouse.door_service import (
    list_doors,
    get_door_stats,
    get_door,
    create_door,
    update_door,
    delete_door,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/doors", tags=["Doors"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[DoorOut]])
async def list_doors_api(
    warehouse_id: Optional[UUID] = Query(None),
    door_type: Optional[DoorType] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    data = await list_doors(db, user, warehouse_id=warehouse_id, door_type=door_type)
    return success_response("Doors retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[DoorStats])
async def door_stats_api(
    warehouse_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_door_stats(db, user, warehouse_id=warehouse_id)
    return success_response("Door statistics retrieved successfully", stats)


@router.get("/{door_id}", response_model=APIResponse[DoorOut])
async def get_door_api(
    door_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    door = await get_door(db, user, door_id)
    return success_response("Door retrieved successfully", door)


@router.post("", response_model=APIResponse[DoorOut], status_code=201)
async def create_door_api(
    payload: DoorCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info(
        "Create door",
        extra={"door_number": payload.door_number, "warehouse_id": str(payload.warehouse_id)},
    )
    door = await create_door(db, payload, user)
    return success_response("Door created successfully", door)


@router.put("/{door_id}", response_model=APIResponse[DoorOut])
async def update_door_api(
    door_id: UUID,
    payload: DoorUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update door", extra={"door_id": str(door_id)})
    door = await update_door(db, door_id, payload, user)
    return success_response("Door updated successfully", door)


@router.delete("/{door_id}", response_model=APIResponse[dict])
async def delete_door_api(
    door_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete door", extra={"door_id": str(door_id)})
    data = await delete_door(db, door_id, user)
    return success_response("Door deleted successfully", data)
