# app/services/masters/customer_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.models.masters.contact_models import Contact
from app.models.masters.customer_models import Customer
from app.models.masters.item_models import Item
from app.models.masters.supplier_models import Supplier
from app.schemas.auth.auth_context import AuthContext
from app.schemas.common import address_label, status_from_flag
from app.schemas.masters.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerOut,
    CustomerStats,
)
from app.services.common.scoping import (
    owned_customers,
    get_owned_customer,
    ensure_unique,
    ensure_no_dependents,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.dates import start_of_current_month
from app.utils.logger import get_logger
from app.utils.numbers import to_float

logger = get_logger(__name__)

DUPLICATE_CODE = "Customer code already exists"


def _map_customer(customer: Customer) -> CustomerOut:
    return CustomerOut(
        id=customer.id,
        code=customer.customer_code,
        name=customer.name,
        contact_name=customer.contact_name,
        email=customer.contact_email,
        phone=customer.contact_phone,
        # shipping address wins when both are filled in
        location=address_label(customer.shipping_address)
        or address_label(customer.billing_address),
        billing_address=customer.billing_address or {},
        shipping_address=customer.shipping_address or {},
        payment_terms=customer.payment_terms,
        credit_limit=to_float(customer.credit_limit),
        notes=customer.notes,
        status=status_from_flag(customer.is_active),
        is_active=customer.is_active,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


# =========================
# LIST / STATS / GET
# =========================
async def list_customers(
    db: AsyncSession,
    auth: AuthContext,
    *,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> list[CustomerOut]:
    query = owned_customers(auth.tenant_id)

    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Customer.name.ilike(pattern),
                Customer.customer_code.ilike(pattern),
                Customer.contact_email.ilike(pattern),
            )
        )
    if is_active is not None:
        query = query.where(Customer.is_active.is_(is_active))

    result = await db.execute(query.order_by(Customer.created_at.desc()))
    return [_map_customer(c) for c in result.scalars().all()]


async def get_customer_stats(db: AsyncSession, auth: AuthContext) -> CustomerStats:
    count = func.count(Customer.id)
    row = (
        await db.execute(
            select(
                count,
                count.filter(Customer.is_active.is_(True)),
                count.filter(Customer.is_active.is_(False)),
                count.filter(Customer.created_at >= start_of_current_month()),
            ).where(Customer.tenant_id == auth.tenant_id)
        )
    ).one()

    return CustomerStats(
        totalCustomers=row[0],
        activeCustomers=row[1],
        inactiveCustomers=row[2],
        thisMonth=row[3],
    )


async def get_customer(db: AsyncSession, auth: AuthContext, customer_id: UUID) -> CustomerOut:
    return _map_customer(await get_owned_customer(db, auth.tenant_id, customer_id))


# =========================
# CREATE
# =========================
async def create_customer(
    db: AsyncSession,
    payload: CustomerCreate,
    auth: AuthContext,
) -> CustomerOut:
    await ensure_unique(
        db,
        Customer,
        Customer.tenant_id == auth.tenant_id,
        Customer.customer_code == payload.customer_code,
        message=DUPLICATE_CODE,
        error_code=ErrorCode.CUSTOMER_CODE_EXISTS,
    )

    data = payload.model_dump()
    data["billing_address"] = data["billing_address"] or {}
    data["shipping_address"] = data["shipping_address"] or {}

    customer = Customer(tenant_id=auth.tenant_id, **data)
    db.add(customer)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.CUSTOMER_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_CUSTOMER,
        target_name=customer.name,
        target_code=customer.customer_code,
    )

    await db.commit()
    await db.refresh(customer)
    return _map_customer(customer)


# =========================
# UPDATE
# =========================
async def update_customer(
    db: AsyncSession,
    customer_id: UUID,
    payload: CustomerUpdate,
    auth: AuthContext,
) -> CustomerOut:
    customer = await get_owned_customer(db, auth.tenant_id, customer_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    new_code = changes.get("customer_code")
    if new_code and new_code != customer.customer_code:
        await ensure_unique(
            db,
            Customer,
            Customer.tenant_id == auth.tenant_id,
            Customer.customer_code == new_code,
            exclude_id=customer.id,
            message=DUPLICATE_CODE,
            error_code=ErrorCode.CUSTOMER_CODE_EXISTS,
        )

    before = {field: getattr(customer, field) for field in changes}
    for field, value in changes.items():
        setattr(customer, field, value)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.CUSTOMER_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_CUSTOMER,
        target_name=customer.name,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(customer)
    return _map_customer(customer)


# =========================
# DELETE
# =========================
async def delete_customer(db: AsyncSession, customer_id: UUID, auth: AuthContext) -> dict:
    customer = await get_owned_customer(db, auth.tenant_id, customer_id)

    await ensure_no_dependents(
        db,
        resource="customer",
        parent_id=customer.id,
        dependents=[
            (Contact.customer_id, "contacts"),
            (Supplier.customer_id, "suppliers"),
            (Item.customer_id, "items"),
        ],
        error_code=ErrorCode.CUSTOMER_HAS_DEPENDENTS,
    )

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_CUSTOMER,
        target_name=customer.name,
    )

    await db.delete(customer)
    await db.commit()
    return {"id": customer_id}
