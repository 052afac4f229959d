# app/services/masters/contact_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.models.enums.record_status import RecordStatus
from app.models.masters.contact_models import Contact
from app.models.masters.customer_models import Customer
from app.schemas.auth.auth_context import AuthContext
from app.schemas.masters.contact_schemas import (
    ContactCreate,
    ContactUpdate,
    ContactOut,
    ContactStats,
)
from app.services.common.scoping import (
    owned_contacts,
    fetch_owned,
    get_owned_customer,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _map_contact(contact: Contact) -> ContactOut:
    return ContactOut(
        id=contact.id,
        customer_id=contact.customer_id,
        first_name=contact.first_name,
        last_name=contact.last_name,
        full_name=f"{contact.first_name} {contact.last_name}",
        email=contact.email,
        phone=contact.phone,
        title=contact.title,
        department=contact.department,
        is_primary=contact.is_primary,
        notes=contact.notes,
        status=contact.status,
        is_active=contact.is_active,
        created_at=contact.created_at,
        updated_at=contact.updated_at,
    )


async def _get_owned_contact(db: AsyncSession, auth: AuthContext, contact_id: UUID) -> Contact:
    return await fetch_owned(
        db,
        owned_contacts(auth.tenant_id).where(Contact.id == contact_id),
        message="Contact not found",
        error_code=ErrorCode.CONTACT_NOT_FOUND,
    )


async def _clear_other_primaries(db: AsyncSession, customer_id: UUID, keep_id: UUID):
    # one primary contact per customer
    await db.execute(
        update(Contact)
        .where(
            Contact.customer_id == customer_id,
            Contact.id != keep_id,
            Contact.is_primary.is_(True),
        )
        .values(is_primary=False)
    )


async def list_contacts(
    db: AsyncSession,
    auth: AuthContext,
    *,
    customer_id: Optional[UUID] = None,
) -> list[ContactOut]:
    query = owned_contacts(auth.tenant_id)
    if customer_id:
        query = query.where(Contact.customer_id == customer_id)

    result = await db.execute(
        query.order_by(Contact.is_primary.desc(), Contact.last_name, Contact.first_name)
    )
    return [_map_contact(c) for c in result.scalars().all()]


async def get_contact_stats(
    db: AsyncSession,
    auth: AuthContext,
    *,
    customer_id: Optional[UUID] = None,
) -> ContactStats:
    count = func.count(Contact.id)
    query = (
        select(
            count,
            count.filter(Contact.status == RecordStatus.active),
            count.filter(Contact.status == RecordStatus.inactive),
            count.filter(Contact.is_primary.is_(True)),
        )
        .join(Customer, Contact.customer_id == Customer.id)
        .where(Customer.tenant_id == auth.tenant_id)
    )
    if customer_id:
        query = query.where(Contact.customer_id == customer_id)

    row = (await db.execute(query)).one()
    return ContactStats(
        totalContacts=row[0],
        activeContacts=row[1],
        inactiveContacts=row[2],
        primaryContacts=row[3],
    )


async def get_contact(db: AsyncSession, auth: AuthContext, contact_id: UUID) -> ContactOut:
    return _map_contact(await _get_owned_contact(db, auth, contact_id))


async def create_contact(db: AsyncSession, payload: ContactCreate, auth: AuthContext) -> ContactOut:
    customer = await get_owned_customer(
        db, auth.tenant_id, payload.customer_id, as_reference=True
    )

    contact = Contact(
        **payload.model_dump(),
        is_active=payload.status == RecordStatus.active,
    )
    db.add(contact)

    await flush_or_raise(db, message="Invalid contact data", error_code=ErrorCode.VALIDATION_ERROR)

    if contact.is_primary:
        await _clear_other_primaries(db, customer.id, contact.id)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_CONTACT,
        target_name=f"{contact.first_name} {contact.last_name}",
        customer_name=customer.name,
    )

    await db.commit()
    await db.refresh(contact)
    return _map_contact(contact)


async def update_contact(
    db: AsyncSession,
    contact_id: UUID,
    payload: ContactUpdate,
    auth: AuthContext,
) -> ContactOut:
    contact = await _get_owned_contact(db, auth, contact_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    if changes.get("customer_id", contact.customer_id) != contact.customer_id:
        await get_owned_customer(db, auth.tenant_id, changes["customer_id"], as_reference=True)

    before = {field: getattr(contact, field) for field in changes}
    for field, value in changes.items():
        setattr(contact, field, value)
    if "status" in changes:
        contact.is_active = changes["status"] == RecordStatus.active

    await flush_or_raise(db, message="Invalid contact data", error_code=ErrorCode.VALIDATION_ERROR)

    if contact.is_primary:
        await _clear_other_primaries(db, contact.customer_id, contact.id)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_CONTACT,
        target_name=f"{contact.first_name} {contact.last_name}",
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(contact)
    return _map_contact(contact)


async def delete_contact(db: AsyncSession, contact_id: UUID, auth: AuthContext) -> dict:
    contact = await _get_owned_contact(db, auth, contact_id)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_CONTACT,
        target_name=f"{contact.first_name} {contact.last_name}",
    )

    await db.delete(contact)
    await db.commit()
    return {"id": contact_id}
