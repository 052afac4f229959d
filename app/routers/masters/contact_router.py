# app/routers/masters/contact_router.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.masters.contact_schemas import (
    ContactCreate,
    ContactUpdate,
    ContactOut,
    ContactStats,
)
from app.services.masters.contact_service import (
    list_contacts,
    get_contact_stats,
    get_contact,
    create_contact,
    update_contact,
    delete_contact,
)
from app.utils.check_roles import require_role, WRITE_ROLES
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/contacts", tags=["Contacts"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[ContactOut]])
async def list_contacts_api(
    customer_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    data = await list_contacts(db, user, customer_id=customer_id)
    return success_response("Contacts retrieved successfully", data)


@router.get("/stats", response_model=APIResponse[ContactStats])
async def contact_stats_api(
    customer_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_contact_stats(db, user, customer_id=customer_id)
    return success_response("Contact statistics retrieved successfully", stats)


@router.get("/{contact_id}", response_model=APIResponse[ContactOut])
async def get_contact_api(
    contact_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    contact = await get_contact(db, user, contact_id)
    return success_response("Contact retrieved successfully", contact)


@router.post("", response_model=APIResponse[ContactOut], status_code=201)
async def create_contact_api(
    payload: ContactCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Create contact", extra={"customer_id": str(payload.customer_id)})
    contact = await create_contact(db, payload, user)
    return success_response("Contact created successfully", contact)


@router.put("/{contact_id}", response_model=APIResponse[ContactOut])
async def update_contact_api(
    contact_id: UUID,
    payload: ContactUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Update contact", extra={"contact_id": str(contact_id)})
    contact = await update_contact(db, contact_id, payload, user)
    return success_response("Contact updated successfully", contact)


@router.delete("/{contact_id}", response_model=APIResponse[dict])
async def delete_contact_api(
    contact_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(WRITE_ROLES)),
):
    logger.info("Delete contact", extra={"contact_id": str(contact_id)})
    data = await delete_contact(db, contact_id, user)
    return success_response("Contact deleted successfully", data)
