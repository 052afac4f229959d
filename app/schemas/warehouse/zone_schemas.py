from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.enums.zone_type import ZoneType
from app.schemas.common import PartialUpdate


def _check_range(model, low: str, high: str):
    lo, hi = getattr(model, low), getattr(model, high)
    if lo is not None and hi is not None and lo > hi:
        raise ValueError(f"{low} must be less than or equal to {high}")


class ZoneCreate(BaseModel):
    warehouse_id: UUID
    zone_code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=2, max_length=255)
    zone_type: ZoneType
    description: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    capacity_unit: Optional[str] = Field(None, max_length=20)
    temperature_controlled: bool = False
    temperature_min: Optional[Decimal] = Field(None, max_digits=5, decimal_places=2)
    temperature_max: Optional[Decimal] = Field(None, max_digits=5, decimal_places=2)
    humidity_controlled: bool = False
    humidity_min: Optional[Decimal] = Field(None, ge=0, le=100)
    humidity_max: Optional[Decimal] = Field(None, ge=0, le=100)
    restrictions: Optional[dict[str, Any]] = None
    is_active: bool = True

    @model_validator(mode="after")
    def check_ranges(self):
        _check_range(self, "temperature_min", "temperature_max")
        _check_range(self, "humidity_min", "humidity_max")
        return self


class ZoneUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "warehouse_id",
        "zone_code",
        "name",
        "zone_type",
        "capacity_unit",
        "temperature_controlled",
        "humidity_controlled",
        "restrictions",
        "is_active",
    )

    warehouse_id: Optional[UUID] = None
    zone_code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    zone_type: Optional[ZoneType] = None
    description: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    capacity_unit: Optional[str] = Field(None, max_length=20)
    temperature_controlled: Optional[bool] = None
    temperature_min: Optional[Decimal] = Field(None, max_digits=5, decimal_places=2)
    temperature_max: Optional[Decimal] = Field(None, max_digits=5, decimal_places=2)
    humidity_controlled: Optional[bool] = None
    humidity_min: Optional[Decimal] = Field(None, ge=0, le=100)
    humidity_max: Optional[Decimal] = Field(None, ge=0, le=100)
    restrictions: Optional[dict[str, Any]] = None
    is_active: Optional[bool] = None


class ZoneOut(BaseModel):
    id: UUID
    warehouse_id: UUID
    code: str
    name: str
    type: ZoneType
    description: Optional[str] = None
    capacity: Optional[int] = None
    capacity_unit: str
    temperature_controlled: bool
    temperature_min: Optional[float] = None
    temperature_max: Optional[float] = None
    humidity_controlled: bool
    humidity_min: Optional[float] = None
    humidity_max: Optional[float] = None
    restrictions: dict[str, Any]
    status: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class ZoneStats(BaseModel):
    totalZones: int
    activeZones: int
    inactiveZones: int
    storageZones: int
    receivingZones: int
    shippingZones: int
    stagingZones: int
