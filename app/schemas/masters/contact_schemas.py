from datetime import datetime
from typing import ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.models.enums.record_status import RecordStatus
from app.schemas.common import PartialUpdate


class ContactCreate(BaseModel):
    customer_id: UUID
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    title: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    is_primary: bool = False
    notes: Optional[str] = None
    status: RecordStatus = RecordStatus.active


class ContactUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "customer_id",
        "first_name",
        "last_name",
        "is_primary",
        "status",
    )

    customer_id: Optional[UUID] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    title: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    is_primary: Optional[bool] = None
    notes: Optional[str] = None
    status: Optional[RecordStatus] = None


class ContactOut(BaseModel):
    id: UUID
    customer_id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    title: Optional[str] = None
    department: Optional[str] = None
    is_primary: bool
    notes: Optional[str] = None
    status: RecordStatus
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class ContactStats(BaseModel):
    totalContacts: int
    activeContacts: int
    inactiveContacts: int
    primaryContacts: int
