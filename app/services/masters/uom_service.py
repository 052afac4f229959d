# app/services/masters/uom_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.masters.customer_models import Customer
from app.models.masters.item_models import Item
from app.models.masters.uom_models import UOM
from app.schemas.auth.auth_context import AuthContext
from app.schemas.common import status_from_flag
from app.schemas.masters.uom_schemas import UOMCreate, UOMUpdate, UOMOut, UOMStats
from app.services.common.scoping import (
    owned_uoms,
    fetch_owned,
    get_owned_item,
    ensure_unique,
    ensure_no_dependents,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger
from app.utils.numbers import to_float

logger = get_logger(__name__)

DUPLICATE_CODE = "UOM code already exists for this item"


def _map_uom(uom: UOM) -> UOMOut:
    return UOMOut(
        id=uom.id,
        item_id=uom.item_id,
        code=uom.uom_code,
        name=uom.name,
        description=uom.description,
        type=uom.uom_type,
        conversion_factor=to_float(uom.conversion_factor),
        base_uom_id=uom.base_uom_id,
        is_base_uom=uom.is_base_uom,
        is_default=uom.is_default,
        dimensions=uom.dimensions or {},
        weight=to_float(uom.weight),
        weight_unit=uom.weight_unit,
        barcode=uom.barcode,
        gtin=uom.gtin,
        is_sellable=uom.is_sellable,
        is_purchasable=uom.is_purchasable,
        is_trackable=uom.is_trackable,
        sort_order=uom.sort_order,
        status=status_from_flag(uom.is_active),
        is_active=uom.is_active,
        created_at=uom.created_at,
        updated_at=uom.updated_at,
    )


async def _get_owned_uom(db: AsyncSession, auth: AuthContext, uom_id: UUID) -> UOM:
    return await fetch_owned(
        db,
        owned_uoms(auth.tenant_id).where(UOM.id == uom_id),
        message="UOM not found",
        error_code=ErrorCode.UOM_NOT_FOUND,
    )


async def _check_base_uom(
    db: AsyncSession,
    auth: AuthContext,
    base_uom_id: UUID,
    item_id: UUID,
    self_id: Optional[UUID] = None,
):
    if self_id is not None and base_uom_id == self_id:
        raise AppException(400, "A UOM cannot be its own base UOM", ErrorCode.VALIDATION_ERROR)

    base = await fetch_owned(
        db,
        owned_uoms(auth.tenant_id).where(UOM.id == base_uom_id, UOM.item_id == item_id),
        message="Base UOM not found or does not belong to the specified item",
        error_code=ErrorCode.UOM_NOT_FOUND,
        status_code=400,
    )

    # conversions are one level deep: a base is always a root
    if base.base_uom_id is not None:
        raise AppException(
            400,
            "Base UOM must not reference another base UOM",
            ErrorCode.VALIDATION_ERROR,
        )

    if self_id is not None:
        derived = await db.scalar(select(UOM.id).where(UOM.base_uom_id == self_id).limit(1))
        if derived is not None:
            raise AppException(
                400,
                "A UOM used as a base by other UOMs cannot reference a base UOM",
                ErrorCode.VALIDATION_ERROR,
            )


async def _clear_other_defaults(db: AsyncSession, uom: UOM):
    others = await db.execute(
        select(UOM).where(
            UOM.item_id == uom.item_id,
            UOM.id != uom.id,
            UOM.is_default.is_(True),
        )
    )
    for other in others.scalars().all():
        other.is_default = False


# =========================
# LIST / STATS / GET
# =========================
async def list_uoms(
    db: AsyncSession,
    auth: AuthContext,
    *,
    item_id: Optional[UUID] = None,
) -> list[UOMOut]:
    query = owned_uoms(auth.tenant_id)
    if item_id:
        query = query.where(UOM.item_id == item_id)

    result = await db.execute(query.order_by(UOM.sort_order, UOM.uom_code))
    return [_map_uom(u) for u in result.scalars().all()]


async def get_uom_stats(
    db: AsyncSession,
    auth: AuthContext,
    *,
    item_id: Optional[UUID] = None,
) -> UOMStats:
    count = func.count(UOM.id)
    query = (
        select(
            count,
            count.filter(UOM.is_active.is_(True)),
            count.filter(UOM.is_base_uom.is_(True)),
            count.filter(UOM.is_default.is_(True)),
        )
        .join(Item, UOM.item_id == Item.id)
        .join(Customer, Item.customer_id == Customer.id)
        .where(Customer.tenant_id == auth.tenant_id)
    )
    if item_id:
        query = query.where(UOM.item_id == item_id)

    row = (await db.execute(query)).one()
    return UOMStats(
        totalUOMs=row[0],
        activeUOMs=row[1],
        baseUOMs=row[2],
        defaultUOMs=row[3],
    )


async def get_uom(db: AsyncSession, auth: AuthContext, uom_id: UUID) -> UOMOut:
    return _map_uom(await _get_owned_uom(db, auth, uom_id))


# =========================
# CREATE
# =========================
async def create_uom(db: AsyncSession, payload: UOMCreate, auth: AuthContext) -> UOMOut:
    item = await get_owned_item(db, auth.tenant_id, payload.item_id, as_reference=True)

    if payload.base_uom_id:
        await _check_base_uom(db, auth, payload.base_uom_id, item.id)

    await ensure_unique(
        db,
        UOM,
        UOM.item_id == item.id,
        UOM.uom_code == payload.uom_code,
        message=DUPLICATE_CODE,
        error_code=ErrorCode.UOM_CODE_EXISTS,
    )

    uom = UOM(**payload.model_dump())
    db.add(uom)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.UOM_CODE_EXISTS)

    if uom.is_default:
        await _clear_other_defaults(db, uom)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_UOM,
        target_code=uom.uom_code,
        item_code=item.item_code,
    )

    await db.commit()
    await db.refresh(uom)
    return _map_uom(uom)


# =========================
# UPDATE
# =========================
async def update_uom(
    db: AsyncSession,
    uom_id: UUID,
    payload: UOMUpdate,
    auth: AuthContext,
) -> UOMOut:
    uom = await _get_owned_uom(db, auth, uom_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    target_base = changes.get("base_uom_id", uom.base_uom_id)
    target_is_base = changes.get("is_base_uom", uom.is_base_uom)
    if target_is_base and target_base is not None:
        raise AppException(
            400,
            "A base UOM cannot reference another base UOM",
            ErrorCode.VALIDATION_ERROR,
        )
    if "base_uom_id" in changes and target_base is not None:
        await _check_base_uom(db, auth, target_base, uom.item_id, self_id=uom.id)

    new_code = changes.get("uom_code")
    if new_code and new_code != uom.uom_code:
        await ensure_unique(
            db,
            UOM,
            UOM.item_id == uom.item_id,
            UOM.uom_code == new_code,
            exclude_id=uom.id,
            message=DUPLICATE_CODE,
            error_code=ErrorCode.UOM_CODE_EXISTS,
        )

    before = {field: getattr(uom, field) for field in changes}
    for field, value in changes.items():
        setattr(uom, field, value)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.UOM_CODE_EXISTS)

    if changes.get("is_default"):
        await _clear_other_defaults(db, uom)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_UOM,
        target_code=uom.uom_code,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(uom)
    return _map_uom(uom)


# =========================
# DELETE
# =========================
async def delete_uom(db: AsyncSession, uom_id: UUID, auth: AuthContext) -> dict:
    uom = await _get_owned_uom(db, auth, uom_id)

    await ensure_no_dependents(
        db,
        resource="UOM",
        parent_id=uom.id,
        dependents=[(UOM.base_uom_id, "derived UOMs")],
        error_code=ErrorCode.UOM_HAS_DEPENDENTS,
    )

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_UOM,
        target_code=uom.uom_code,
    )

    await db.delete(uom)
    await db.commit()
    return {"id": uom_id}
