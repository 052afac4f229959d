# app/routers/masters/supplier_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.enums.record_status import RecordStatus
from app.schemas.masters.supplier_schemas import (
    SupplierCreate,
    SupplierUpdate,
    SupplierOut,
    SupplierStats,
)
from app.services.masters.supplier_service import (
    list_suppliers,
    get_supplier_stats,
    get_supplier,
    create_supplier,
    update_supplier,
    delete_supplier,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[SupplierOut]])
async def list_suppliers_api(
    customer_id: Optional[UUID] = Query(None),
    status: Optional[RecordStatus] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info(
        "List suppliers",
        extra={"customer_id": str(customer_id) if customer_id else None, "search": search},
    )
    data = await list_suppliers(
        db, user, customer_id=customer_id, status=status, search=search
    )
    return success_response("Suppliers retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[SupplierStats])
async def supplier_stats_api(
    customer_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_supplier_stats(db, user, customer_id=customer_id)
    return success_response("Supplier statistics retrieved successfully", stats)


@router.get("/{supplier_id}", response_model=APIResponse[SupplierOut])
async def get_supplier_api(
    supplier_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    supplier = await get_supplier(db, user, supplier_id)
    return success_response("Supplier retrieved successfully", supplier)


@router.post("", response_model=APIResponse[SupplierOut], status_code=201)
async def create_supplier_api(
    payload: SupplierCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Create supplier", extra={"customer_id": str(payload.customer_id)})
    supplier = await create_supplier(db, payload, user)
    return success_response("Supplier created successfully", supplier)


@router.put("/{supplier_id}", response_model=APIResponse[SupplierOut])
async def update_supplier_api(
    supplier_id: UUID,
    payload: SupplierUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update supplier", extra={"supplier_id": str(supplier_id)})
    supplier = await update_supplier(db, supplier_id, payload, user)
    return success_response("Supplier updated successfully", supplier)


@router.delete("/{supplier_id}", response_model=APIResponse[dict])
async def delete_supplier_api(
    supplier_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete supplier", extra={"supplier_id": str(supplier_id)})
    data = await delete_supplier(db, supplier_id, user)
    return success_response("Supplier deleted successfully", data)
