from datetime import datetime
from typing import Any, ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.schemas.common import PartialUpdate


class WarehouseCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    warehouse_code: str = Field(min_length=2, max_length=50)
    description: Optional[str] = None
    address: Optional[dict[str, Any]] = None
    manager_name: Optional[str] = Field(None, max_length=255)
    manager_email: Optional[EmailStr] = None
    manager_phone: Optional[str] = Field(None, max_length=50)
    operating_hours: Optional[dict[str, Any]] = None
    timezone: Optional[str] = Field(None, max_length=50)
    total_capacity: Optional[int] = Field(None, ge=0)
    capacity_unit: Optional[str] = Field(None, max_length=20)
    is_active: bool = True


class WarehouseUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "name",
        "warehouse_code",
        "address",
        "operating_hours",
        "timezone",
        "capacity_unit",
        "is_active",
    )

    name: Optional[str] = Field(None, min_length=2, max_length=255)
    warehouse_code: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = None
    address: Optional[dict[str, Any]] = None
    manager_name: Optional[str] = Field(None, max_length=255)
    manager_email: Optional[EmailStr] = None
    manager_phone: Optional[str] = Field(None, max_length=50)
    operating_hours: Optional[dict[str, Any]] = None
    timezone: Optional[str] = Field(None, max_length=50)
    total_capacity: Optional[int] = Field(None, ge=0)
    capacity_unit: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None


class WarehouseOut(BaseModel):
    id: UUID
    name: str
    code: str
    location: str
    status: str
    description: Optional[str] = None
    manager_name: Optional[str] = None
    manager_email: Optional[str] = None
    manager_phone: Optional[str] = None
    total_capacity: Optional[int] = None
    capacity_unit: str
    timezone: str
    operating_hours: dict[str, Any]
    address: dict[str, Any]
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class WarehouseStats(BaseModel):
    totalWarehouses: int
    activeWarehouses: int
    inactiveWarehouses: int
