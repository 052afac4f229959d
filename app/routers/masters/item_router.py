# app/routers/masters/item_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.enums.item_enums import ItemStatus
from app.schemas.masters.item_schemas import ItemCreate, ItemUpdate, ItemOut, ItemStats
from app.services.masters.item_service import (
    list_items,
    get_item_stats,
    get_item,
    create_item,
    update_item,
    delete_item,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/items", tags=["Items"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[ItemOut]])
async def list_items_api(
    customer_id: Optional[UUID] = Query(None),
    status: Optional[ItemStatus] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info(
        "List items",
        extra={
            "customer_id": str(customer_id) if customer_id else None,
            "status": status.value if status else None,
            "search": search,
        },
    )
    data = await list_items(
        db, user, customer_id=customer_id, status=status, search=search
    )
    return success_response("Items retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[ItemStats])
async def item_stats_api(
    customer_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_item_stats(db, user, customer_id=customer_id)
    return success_response("Item statistics retrieved successfully", stats)


@router.get("/{item_id}", response_model=APIResponse[ItemOut])
async def get_item_api(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    item = await get_item(db, user, item_id)
    return success_response("Item retrieved successfully", item)


@router.post("", response_model=APIResponse[ItemOut], status_code=201)
async def create_item_api(
    payload: ItemCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info(
        "Create item",
        extra={"item_code": payload.item_code, "customer_id": str(payload.customer_id)},
    )
    item = await create_item(db, payload, user)
    return success_response("Item created successfully", item)


@router.put("/{item_id}", response_model=APIResponse[ItemOut])
async def update_item_api(
    item_id: UUID,
    payload: ItemUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update item", extra={"item_id": str(item_id)})
    item = await update_item(db, item_id, payload, user)
    return success_response("Item updated successfully", item)


@router.delete("/{item_id}", response_model=APIResponse[dict])
async def delete_item_api(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete item", extra={"item_id": str(item_id)})
    data = await delete_item(db, item_id, user)
    return success_response("Item deleted successfully", data)
