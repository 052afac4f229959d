# app/services/common/scoping.py
"""Tenant scoping and referential checks shared by every resource service.

Each tenant-owned table reaches its tenant through a chain of parent
foreign keys. The ``owned_*`` selects walk the full chain so a row is only
visible when its root tenant matches the caller's, even when the immediate
parent id is supplied by the client.
"""

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import select, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.masters.contact_models import Contact
from app.models.masters.customer_models import Customer
from app.models.masters.item_models import Item
from app.models.masters.supplier_models import Supplier
from app.models.masters.uom_models import UOM
from app.models.users.user_models import User
from app.models.warehouse.door_models import Door
from app.models.warehouse.location_models import Location
from app.models.warehouse.warehouse_models import Warehouse
from app.models.warehouse.zone_models import Zone
from app.utils.logger import get_logger

logger = get_logger(__name__)


# =========================
# SCOPED SELECTS
# =========================
def owned_warehouses(tenant_id: UUID) -> Select:
    return select(Warehouse).where(Warehouse.tenant_id == tenant_id)


def owned_zones(tenant_id: UUID) -> Select:
    return (
        select(Zone)
        .join(Warehouse, Zone.warehouse_id == Warehouse.id)
        .where(Warehouse.tenant_id == tenant_id)
    )


def owned_locations(tenant_id: UUID) -> Select:
    return (
        select(Location)
        .join(Warehouse, Location.warehouse_id == Warehouse.id)
        .where(Warehouse.tenant_id == tenant_id)
    )


def owned_doors(tenant_id: UUID) -> Select:
    return (
        select(Door)
        .join(Warehouse, Door.warehouse_id == Warehouse.id)
        .where(Warehouse.tenant_id == tenant_id)
    )


def owned_customers(tenant_id: UUID) -> Select:
    return select(Customer).where(Customer.tenant_id == tenant_id)


def owned_suppliers(tenant_id: UUID) -> Select:
    # both the direct tenant column and the customer's tenant must agree
    return (
        select(Supplier)
        .join(Customer, Supplier.customer_id == Customer.id)
        .where(
            Supplier.tenant_id == tenant_id,
            Customer.tenant_id == tenant_id,
        )
    )


def owned_contacts(tenant_id: UUID) -> Select:
    return (
        select(Contact)
        .join(Customer, Contact.customer_id == Customer.id)
        .where(Customer.tenant_id == tenant_id)
    )


def owned_items(tenant_id: UUID) -> Select:
    return (
        select(Item)
        .join(Customer, Item.customer_id == Customer.id)
        .where(Customer.tenant_id == tenant_id)
    )


def owned_uoms(tenant_id: UUID) -> Select:
    return (
        select(UOM)
        .join(Item, UOM.item_id == Item.id)
        .join(Customer, Item.customer_id == Customer.id)
        .where(Customer.tenant_id == tenant_id)
    )


def owned_users(tenant_id: UUID) -> Select:
    return select(User).where(User.tenant_id == tenant_id)


# =========================
# SCOPED FETCH
# =========================
async def fetch_owned(
    db: AsyncSession,
    query: Select,
    *,
    message: str,
    error_code: ErrorCode,
    status_code: int = 404,
):
    """Return the single row matched by a scoped select or raise.

    404 is used when the row is the target of the request; 400 when it is a
    foreign key supplied in the payload.
    """
    row = (await db.execute(query.limit(1))).scalars().first()
    if row is None:
        raise AppException(status_code, message, error_code)
    return row


async def get_owned_warehouse(
    db: AsyncSession, tenant_id: UUID, warehouse_id: UUID, *, as_reference: bool = False
) -> Warehouse:
    if as_reference:
        return await fetch_owned(
            db,
            owned_warehouses(tenant_id).where(Warehouse.id == warehouse_id),
            message="Warehouse not found or does not belong to your tenant",
            error_code=ErrorCode.WAREHOUSE_NOT_FOUND,
            status_code=400,
        )
    return await fetch_owned(
        db,
        owned_warehouses(tenant_id).where(Warehouse.id == warehouse_id),
        message="Warehouse not found",
        error_code=ErrorCode.WAREHOUSE_NOT_FOUND,
    )


async def get_owned_zone(db: AsyncSession, tenant_id: UUID, zone_id: UUID) -> Zone:
    return await fetch_owned(
        db,
        owned_zones(tenant_id).where(Zone.id == zone_id),
        message="Zone not found",
        error_code=ErrorCode.ZONE_NOT_FOUND,
    )


async def get_zone_in_warehouse(
    db: AsyncSession, tenant_id: UUID, zone_id: UUID, warehouse_id: UUID
) -> Zone:
    return await fetch_owned(
        db,
        owned_zones(tenant_id).where(
            Zone.id == zone_id,
            Zone.warehouse_id == warehouse_id,
        ),
        message="Zone not found or does not belong to the specified warehouse",
        error_code=ErrorCode.ZONE_NOT_FOUND,
        status_code=400,
    )


async def get_owned_customer(
    db: AsyncSession, tenant_id: UUID, customer_id: UUID, *, as_reference: bool = False
) -> Customer:
    if as_reference:
        return await fetch_owned(
            db,
            owned_customers(tenant_id).where(Customer.id == customer_id),
            message="Invalid customer ID",
            error_code=ErrorCode.CUSTOMER_NOT_FOUND,
            status_code=400,
        )
    return await fetch_owned(
        db,
        owned_customers(tenant_id).where(Customer.id == customer_id),
        message="Customer not found",
        error_code=ErrorCode.CUSTOMER_NOT_FOUND,
    )


async def get_owned_item(
    db: AsyncSession, tenant_id: UUID, item_id: UUID, *, as_reference: bool = False
) -> Item:
    if as_reference:
        return await fetch_owned(
            db,
            owned_items(tenant_id).where(Item.id == item_id),
            message="Item not found or does not belong to your tenant",
            error_code=ErrorCode.ITEM_NOT_FOUND,
            status_code=400,
        )
    return await fetch_owned(
        db,
        owned_items(tenant_id).where(Item.id == item_id),
        message="Item not found",
        error_code=ErrorCode.ITEM_NOT_FOUND,
    )


# =========================
# UNIQUENESS (PRE-FLIGHT)
# =========================
async def ensure_unique(
    db: AsyncSession,
    model,
    *conditions,
    exclude_id: UUID | None = None,
    message: str,
    error_code: ErrorCode,
):
    """Pre-flight duplicate check inside the column's logical scope.

    The database unique constraint stays authoritative; see flush_or_raise.
    """
    query = select(model.id).where(*conditions)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)

    if await db.scalar(query.limit(1)) is not None:
        raise AppException(400, message, error_code)


async def flush_or_raise(db: AsyncSession, *, message: str, error_code: ErrorCode):
    """Flush pending writes, turning a constraint race into the friendly error."""
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.warning("Constraint rejected write", extra={"error_code": error_code.value})
        raise AppException(400, message, error_code)


# =========================
# DEPENDENCY CHECK (DELETE)
# =========================
def _human_join(labels: Sequence[str]) -> str:
    if len(labels) == 1:
        return labels[0]
    return f"{', '.join(labels[:-1])} and {labels[-1]}"


async def ensure_no_dependents(
    db: AsyncSession,
    *,
    resource: str,
    parent_id: UUID,
    dependents: Iterable[tuple],
    error_code: ErrorCode,
):
    """Block a delete while any child row still references the parent.

    ``dependents`` is a sequence of ``(fk_column, label)`` pairs.
    """
    blocking = []
    for fk_column, label in dependents:
        found = await db.scalar(select(exists().where(fk_column == parent_id)))
        if found:
            blocking.append(label)

    if blocking:
        names = _human_join(blocking)
        raise AppException(
            400,
            f"Cannot delete {resource} with associated {names}. "
            f"Please delete all {names} first.",
            error_code,
            details={"dependencies": blocking},
        )


def no_changes() -> AppException:
    return AppException(400, "No changes provided", ErrorCode.NO_CHANGES)
