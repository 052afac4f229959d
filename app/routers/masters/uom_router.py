# app/routers/masters/uom_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.uom_schemas import UOMCreate, UOMUpdate, UOMOut, UOMStats
from app.services.masters.uom_service import (
    list_uoms,
    get_uom_stats,
    get_uom,
    create_uom,
    update_uom,
    delete_uom,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/uoms", tags=["Units of Measure"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[UOMOut]])
async def list_uoms_api(
    item_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    data = await list_uoms(db, user, item_id=item_id)
    return success_response("UOMs retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[UOMStats])
async def uom_stats_api(
    item_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_uom_stats(db, user, item_id=item_id)
    return success_response("UOM statistics retrieved successfully", stats)


@router.get("/{uom_id}", response_model=APIResponse[UOMOut])
async def get_uom_api(
    uom_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    uom = await get_uom(db, user, uom_id)
    return success_response("UOM retrieved successfully", uom)


@router.post("", response_model=APIResponse[UOMOut], status_code=201)
async def create_uom_api(
    payload: UOMCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info(
        "Create UOM",
        extra={"uom_code": payload.uom_code, "item_id": str(payload.item_id)},
    )
    uom = await create_uom(db, payload, user)
    return success_response("UOM created successfully", uom)


@router.put("/{uom_id}", response_model=APIResponse[UOMOut])
async def update_uom_api(
    uom_id: UUID,
    payload: UOMUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update UOM", extra={"uom_id": str(uom_id)})
    uom = await update_uom(db, uom_id, payload, user)
    return success_response("UOM updated successfully", uom)


@router.delete("/{uom_id}", response_model=APIResponse[dict])
async def delete_uom_api(
    uom_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete UOM", extra={"uom_id": str(uom_id)})
    data = await delete_uom(db, uom_id, user)
    return success_response("UOM deleted successfully", data)
