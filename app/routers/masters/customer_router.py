# app/routers/masters/customer_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerOut,
    CustomerStats,
)
from app.services.masters.customer_service import (
    list_customers,
    get_customer_stats,
    get_customer,
    create_customer,
    update_customer,
    delete_customer,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/customers", tags=["Customers"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[CustomerOut]])
async def list_customers_api(
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("List customers", extra={"search": search, "is_active": is_active})
    data = await list_customers(db, user, search=search, is_active=is_active)
    return success_response("Customers retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[CustomerStats])
async def customer_stats_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_customer_stats(db, user)
    return success_response("Customer statistics retrieved successfully", stats)


@router.get("/{customer_id}", response_model=APIResponse[CustomerOut])
async def get_customer_api(
    customer_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("Get customer", extra={"customer_id": str(customer_id)})
    customer = await get_customer(db, user, customer_id)
    return success_response("Customer retrieved successfully", customer)


@router.post("", response_model=APIResponse[CustomerOut], status_code=201)
async def create_customer_api(
    payload: CustomerCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Create customer", extra={"customer_code": payload.customer_code})
    customer = await create_customer(db, payload, user)
    return success_response("Customer created successfully", customer)


@router.put("/{customer_id}", response_model=APIResponse[CustomerOut])
async def update_customer_api(
    customer_id: UUID,
    payload: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update customer", extra={"customer_id": str(customer_id)})
    customer = await update_customer(db, customer_id, payload, user)
    return success_response("Customer updated successfully", customer)


@router.delete("/{customer_id}", response_model=APIResponse[dict])
async def delete_customer_api(
    customer_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete customer", extra={"customer_id": str(customer_id)})
    data = await delete_customer(db, customer_id, user)
    return success_response("Customer deleted successfully", data)
