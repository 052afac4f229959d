from datetime import datetime
from typing import ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.models.enums.record_status import RecordStatus
from app.schemas.common import PartialUpdate


class SupplierCreate(BaseModel):
    customer_id: UUID
    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    contact_person: Optional[str] = Field(None, max_length=255)
    payment_terms: Optional[str] = Field(None, max_length=100)
    status: RecordStatus = RecordStatus.active


class SupplierUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = ("customer_id", "name", "email", "status")

    customer_id: Optional[UUID] = None
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    contact_person: Optional[str] = Field(None, max_length=255)
    payment_terms: Optional[str] = Field(None, max_length=100)
    status: Optional[RecordStatus] = None


class SupplierOut(BaseModel):
    id: UUID
    customer_id: UUID
    customer_name: Optional[str] = None
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    payment_terms: Optional[str] = None
    status: RecordStatus
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class SupplierStats(BaseModel):
    totalSuppliers: int
    activeSuppliers: int
    inactiveSuppliers: int
    thisMonth: int
