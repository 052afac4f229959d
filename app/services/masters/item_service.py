# app/services/masters/item_service.py
"""Customer-owned item master. Items reach their tenant through the customer."""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.enums.item_enums import ItemStatus
from app.models.masters.customer_models import Customer
from app.models.masters.item_models import Item
from app.models.masters.uom_models import UOM
from app.schemas.auth.auth_context import AuthContext
from app.schemas.masters.item_schemas import ItemCreate, ItemUpdate, ItemOut, ItemStats
from app.services.common.scoping import (
    owned_items,
    get_owned_item,
    get_owned_customer,
    ensure_unique,
    ensure_no_dependents,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger
from app.utils.numbers import to_float

logger = get_logger(__name__)

DUPLICATE_CODE = "Item code already exists for this customer"


def _map_item(item: Item) -> ItemOut:
    return ItemOut(
        id=item.id,
        customer_id=item.customer_id,
        code=item.item_code,
        customer_item_code=item.customer_item_code,
        name=item.name,
        description=item.description,
        brand=item.brand,
        model=item.model,
        sku=item.sku,
        upc=item.upc,
        ean=item.ean,
        type=item.item_type,
        status=item.status,
        unit_cost=to_float(item.unit_cost),
        unit_price=to_float(item.unit_price),
        currency=item.currency,
        weight=to_float(item.weight),
        weight_unit=item.weight_unit,
        dimensions=item.dimensions or {},
        volume=to_float(item.volume),
        volume_unit=item.volume_unit,
        hazmat=item.hazmat,
        hazmat_class=item.hazmat_class,
        temperature_controlled=item.temperature_controlled,
        temperature_min=to_float(item.temperature_min),
        temperature_max=to_float(item.temperature_max),
        expiration_required=item.expiration_required,
        shelf_life_days=item.shelf_life_days,
        lot_tracking=item.lot_tracking,
        serial_tracking=item.serial_tracking,
        reorder_point=item.reorder_point,
        reorder_quantity=item.reorder_quantity,
        safety_stock=item.safety_stock,
        max_stock=item.max_stock,
        abc_classification=item.abc_classification,
        velocity_classification=item.velocity_classification,
        image_url=item.image_url,
        attributes=item.attributes or {},
        is_active=item.is_active,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


# =========================
# LIST / STATS / GET
# =========================
async def list_items(
    db: AsyncSession,
    auth: AuthContext,
    *,
    customer_id: Optional[UUID] = None,
    status: Optional[ItemStatus] = None,
    search: Optional[str] = None,
) -> list[ItemOut]:
    query = owned_items(auth.tenant_id)

    if customer_id:
        query = query.where(Item.customer_id == customer_id)
    if status:
        query = query.where(Item.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Item.item_code.ilike(pattern),
                Item.name.ilike(pattern),
                Item.sku.ilike(pattern),
                Item.upc.ilike(pattern),
            )
        )

    result = await db.execute(query.order_by(Item.created_at.desc()))
    return [_map_item(i) for i in result.scalars().all()]


async def get_item_stats(
    db: AsyncSession,
    auth: AuthContext,
    *,
    customer_id: Optional[UUID] = None,
) -> ItemStats:
    count = func.count(Item.id)
    query = (
        select(
            count,
            count.filter(Item.status == ItemStatus.active),
            count.filter(Item.status == ItemStatus.inactive),
            count.filter(Item.status == ItemStatus.discontinued),
            count.filter(Item.lot_tracking.is_(True)),
            count.filter(Item.serial_tracking.is_(True)),
        )
        .join(Customer, Item.customer_id == Customer.id)
        .where(Customer.tenant_id == auth.tenant_id)
    )
    if customer_id:
        query = query.where(Item.customer_id == customer_id)

    row = (await db.execute(query)).one()
    return ItemStats(
        totalItems=row[0],
        activeItems=row[1],
        inactiveItems=row[2],
        discontinuedItems=row[3],
        lotTrackedItems=row[4],
        serialTrackedItems=row[5],
    )


async def get_item(db: AsyncSession, auth: AuthContext, item_id: UUID) -> ItemOut:
    return _map_item(await get_owned_item(db, auth.tenant_id, item_id))


# =========================
# CREATE
# =========================
async def create_item(db: AsyncSession, payload: ItemCreate, auth: AuthContext) -> ItemOut:
    customer = await get_owned_customer(
        db, auth.tenant_id, payload.customer_id, as_reference=True
    )

    await ensure_unique(
        db,
        Item,
        Item.customer_id == customer.id,
        Item.item_code == payload.item_code,
        message=DUPLICATE_CODE,
        error_code=ErrorCode.ITEM_CODE_EXISTS,
    )

    item = Item(**payload.model_dump())
    db.add(item)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.ITEM_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_ITEM,
        target_name=item.name,
        target_code=item.item_code,
    )

    await db.commit()
    await db.refresh(item)
    return _map_item(item)


# =========================
# UPDATE
# =========================
async def update_item(
    db: AsyncSession,
    item_id: UUID,
    payload: ItemUpdate,
    auth: AuthContext,
) -> ItemOut:
    item = await get_owned_item(db, auth.tenant_id, item_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    target_customer_id = changes.get("customer_id", item.customer_id)
    if target_customer_id != item.customer_id:
        await get_owned_customer(db, auth.tenant_id, target_customer_id, as_reference=True)

    target_code = changes.get("item_code", item.item_code)
    if target_customer_id != item.customer_id or target_code != item.item_code:
        await ensure_unique(
            db,
            Item,
            Item.customer_id == target_customer_id,
            Item.item_code == target_code,
            exclude_id=item.id,
            message=DUPLICATE_CODE,
            error_code=ErrorCode.ITEM_CODE_EXISTS,
        )

    low = changes.get("temperature_min", item.temperature_min)
    high = changes.get("temperature_max", item.temperature_max)
    if low is not None and high is not None and low > high:
        raise AppException(
            400,
            "temperature_min must be less than or equal to temperature_max",
            ErrorCode.VALIDATION_ERROR,
        )

    before = {field: getattr(item, field) for field in changes}
    for field, value in changes.items():
        setattr(item, field, value)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.ITEM_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_ITEM,
        target_code=item.item_code,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(item)
    return _map_item(item)


# =========================
# DELETE
# =========================
async def delete_item(db: AsyncSession, item_id: UUID, auth: AuthContext) -> dict:
    item = await get_owned_item(db, auth.tenant_id, item_id)

    await ensure_no_dependents(
        db,
        resource="item",
        parent_id=item.id,
        dependents=[(UOM.item_id, "UOMs")],
        error_code=ErrorCode.ITEM_HAS_DEPENDENTS,
    )

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_ITEM,
        target_code=item.item_code,
    )

    await db.delete(item)
    await db.commit()
    return {"id": item_id}
