# app/schemas/masters/customer_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.schemas.common import PartialUpdate


class CustomerCreate(BaseModel):
    customer_code: str = Field(min_length=2, max_length=50)
    name: str = Field(min_length=2, max_length=255)
    contact_name: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=50)
    billing_address: Optional[dict[str, Any]] = None
    shipping_address: Optional[dict[str, Any]] = None
    payment_terms: Optional[str] = Field(None, max_length=100)
    credit_limit: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    notes: Optional[str] = None
    is_active: bool = True


class CustomerUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "customer_code",
        "name",
        "billing_address",
        "shipping_address",
        "is_active",
    )

    customer_code: Optional[str] = Field(None, min_length=2, max_length=50)
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    contact_name: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, max_length=50)
    billing_address: Optional[dict[str, Any]] = None
    shipping_address: Optional[dict[str, Any]] = None
    payment_terms: Optional[str] = Field(None, max_length=100)
    credit_limit: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=2)
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class CustomerOut(BaseModel):
    id: UUID
    code: str
    name: str
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: str
    billing_address: dict[str, Any]
    shipping_address: dict[str, Any]
    payment_terms: Optional[str] = None
    credit_limit: Optional[float] = None
    notes: Optional[str] = None
    status: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class CustomerStats(BaseModel):
    totalCustomers: int
    activeCustomers: int
    inactiveCustomers: int
    thisMonth: int
