# app/routers/warehouse/warehouse_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.warehouse.warehouse_schemas import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehouseOut,
    WarehouseStats,
)
from app.services.warehouse.warehouse_service import (
    list_warehouses,
    get_warehouse_stats,
    get_warehouse,
    create_warehouse,
    update_warehouse,
    delete_warehouse,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/warehouses", tags=["Warehouses"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[WarehouseOut]])
async def list_warehouses_api(
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("List warehouses", extra={"search": search, "is_active": is_active})
    data = await list_warehouses(db, user, search=search, is_active=is_active)
    return success_response("Warehouses retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[WarehouseStats])
async def warehouse_stats_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_warehouse_stats(db, user)
    return success_response("Warehouse statistics retrieved successfully", stats)


@router.get("/{warehouse_id}", response_model=APIResponse[WarehouseOut])
async def get_warehouse_api(
    warehouse_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    warehouse = await get_warehouse(db, user, warehouse_id)
    return success_response("Warehouse retrieved successfully", warehouse)


@router.post("", response_model=APIResponse[WarehouseOut], status_code=201)
async def create_warehouse_api(
    payload: WarehouseCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Create warehouse", extra={"warehouse_code": payload.warehouse_code})
    warehouse = await create_warehouse(db, payload, user)
    return success_response("Warehouse created successfully", warehouse)


@router.put("/{warehouse_id}", response_model=APIResponse[WarehouseOut])
async def update_warehouse_api(
    warehouse_id: UUID,
    payload: WarehouseUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update warehouse", extra={"warehouse_id": str(warehouse_id)})
    warehouse = await update_warehouse(db, warehouse_id, payload, user)
    return success_response("Warehouse updated successfully", warehouse)


@router.delete("/{warehouse_id}", response_model=APIResponse[dict])
async def delete_warehouse_api(
    warehouse_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete warehouse", extra={"warehouse_id": str(warehouse_id)})
    data = await delete_warehouse(db, warehouse_id, user)
    return success_response("Warehouse deleted successfully", data)
