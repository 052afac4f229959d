# app/services/masters/supplier_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.enums.record_status import RecordStatus
from app.models.masters.customer_models import Customer
from app.models.masters.supplier_models import Supplier
from app.schemas.auth.auth_context import AuthContext
from app.schemas.masters.supplier_schemas import (
    SupplierCreate,
    SupplierUpdate,
    SupplierOut,
    SupplierStats,
)
from app.services.common.scoping import (
    owned_suppliers,
    fetch_owned,
    get_owned_customer,
    ensure_unique,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.dates import start_of_current_month
from app.utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_EMAIL = "A supplier with this email already exists for this customer"


# =========================
# MAPPER
# =========================
def _map_supplier(supplier: Supplier, customer_name: Optional[str] = None) -> SupplierOut:
    return SupplierOut(
        id=supplier.id,
        customer_id=supplier.customer_id,
        customer_name=customer_name,
        name=supplier.name,
        email=supplier.email,
        phone=supplier.phone,
        address=supplier.address,
        contact_person=supplier.contact_person,
        payment_terms=supplier.payment_terms,
        status=supplier.status,
        is_active=supplier.is_active,
        created_at=supplier.created_at,
        updated_at=supplier.updated_at,
    )


async def _get_owned_supplier(db: AsyncSession, auth: AuthContext, supplier_id: UUID) -> Supplier:
    return await fetch_owned(
        db,
        owned_suppliers(auth.tenant_id).where(Supplier.id == supplier_id),
        message="Supplier not found",
        error_code=ErrorCode.SUPPLIER_NOT_FOUND,
    )


# =========================
# LIST / STATS / GET
# =========================
async def list_suppliers(
    db: AsyncSession,
    auth: AuthContext,
    *,
    customer_id: Optional[UUID] = None,
    status: Optional[RecordStatus] = None,
    search: Optional[str] = None,
) -> list[SupplierOut]:
    query = owned_suppliers(auth.tenant_id).add_columns(Customer.name)

    if customer_id:
        query = query.where(Supplier.customer_id == customer_id)
    if status:
        query = query.where(Supplier.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Supplier.name.ilike(pattern),
                Supplier.email.ilike(pattern),
                Supplier.contact_person.ilike(pattern),
            )
        )

    rows = (await db.execute(query.order_by(Supplier.created_at.desc()))).all()
    return [_map_supplier(supplier, customer_name) for supplier, customer_name in rows]


async def get_supplier_stats(
    db: AsyncSession,
    auth: AuthContext,
    *,
    customer_id: Optional[UUID] = None,
) -> SupplierStats:
    count = func.count(Supplier.id)
    query = (
        select(
            count,
            count.filter(Supplier.status == RecordStatus.active),
            count.filter(Supplier.status == RecordStatus.inactive),
            count.filter(Supplier.created_at >= start_of_current_month()),
        )
        .join(Customer, Supplier.customer_id == Customer.id)
        .where(
            Supplier.tenant_id == auth.tenant_id,
            Customer.tenant_id == auth.tenant_id,
        )
    )
    if customer_id:
        query = query.where(Supplier.customer_id == customer_id)

    row = (await db.execute(query)).one()
    return SupplierStats(
        totalSuppliers=row[0],
        activeSuppliers=row[1],
        inactiveSuppliers=row[2],
        thisMonth=row[3],
    )


async def get_supplier(db: AsyncSession, auth: AuthContext, supplier_id: UUID) -> SupplierOut:
    row = (
        await db.execute(
            owned_suppliers(auth.tenant_id)
            .add_columns(Customer.name)
            .where(Supplier.id == supplier_id)
        )
    ).first()
    if row is None:
        raise AppException(404, "Supplier not found", ErrorCode.SUPPLIER_NOT_FOUND)
    supplier, customer_name = row
    return _map_supplier(supplier, customer_name)


# =========================
# CREATE
# =========================
async def create_supplier(
    db: AsyncSession,
    payload: SupplierCreate,
    auth: AuthContext,
) -> SupplierOut:
    customer = await get_owned_customer(
        db, auth.tenant_id, payload.customer_id, as_reference=True
    )

    await ensure_unique(
        db,
        Supplier,
        Supplier.tenant_id == auth.tenant_id,
        Supplier.customer_id == customer.id,
        Supplier.email == payload.email,
        message=DUPLICATE_EMAIL,
        error_code=ErrorCode.SUPPLIER_EMAIL_EXISTS,
    )

    supplier = Supplier(
        tenant_id=auth.tenant_id,
        **payload.model_dump(),
        is_active=payload.status == RecordStatus.active,
    )
    db.add(supplier)

    await flush_or_raise(db, message=DUPLICATE_EMAIL, error_code=ErrorCode.SUPPLIER_EMAIL_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_SUPPLIER,
        target_name=supplier.name,
    )

    await db.commit()
    await db.refresh(supplier)
    return _map_supplier(supplier, customer.name)


# =========================
# UPDATE
# =========================
async def update_supplier(
    db: AsyncSession,
    supplier_id: UUID,
    payload: SupplierUpdate,
    auth: AuthContext,
) -> SupplierOut:
    supplier = await _get_owned_supplier(db, auth, supplier_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    target_customer_id = changes.get("customer_id", supplier.customer_id)
    customer = await get_owned_customer(
        db, auth.tenant_id, target_customer_id, as_reference=True
    )

    target_email = changes.get("email", supplier.email)
    if target_customer_id != supplier.customer_id or target_email != supplier.email:
        await ensure_unique(
            db,
            Supplier,
            Supplier.tenant_id == auth.tenant_id,
            Supplier.customer_id == target_customer_id,
            Supplier.email == target_email,
            exclude_id=supplier.id,
            message=DUPLICATE_EMAIL,
            error_code=ErrorCode.SUPPLIER_EMAIL_EXISTS,
        )

    before = {field: getattr(supplier, field) for field in changes}
    for field, value in changes.items():
        setattr(supplier, field, value)
    if "status" in changes:
        supplier.is_active = changes["status"] == RecordStatus.active

    await flush_or_raise(db, message=DUPLICATE_EMAIL, error_code=ErrorCode.SUPPLIER_EMAIL_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_SUPPLIER,
        target_name=supplier.name,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(supplier)
    return _map_supplier(supplier, customer.name)


# =========================
# DELETE
# =========================
async def delete_supplier(db: AsyncSession, supplier_id: UUID, auth: AuthContext) -> dict:
    supplier = await _get_owned_supplier(db, auth, supplier_id)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_SUPPLIER,
        target_name=supplier.name,
    )

    await db.delete(supplier)
    await db.commit()
    return {"id": supplier_id}
