from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.enums.location_type import LocationType
from app.schemas.common import PartialUpdate


class LocationCreate(BaseModel):
    warehouse_id: UUID
    zone_id: Optional[UUID] = None
    location_code: str = Field(min_length=1, max_length=50)
    name: Optional[str] = Field(None, max_length=255)
    location_type: LocationType = LocationType.floor
    aisle: Optional[str] = Field(None, max_length=20)
    bay: Optional[str] = Field(None, max_length=20)
    level: Optional[str] = Field(None, max_length=20)
    position: Optional[str] = Field(None, max_length=20)
    coordinates: Optional[dict[str, Any]] = None
    dimensions: Optional[dict[str, Any]] = None
    capacity: Optional[int] = Field(None, ge=0)
    capacity_unit: Optional[str] = Field(None, max_length=20)
    weight_limit: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    weight_unit: Optional[str] = Field(None, max_length=10)
    barcode: Optional[str] = Field(None, max_length=100)
    qr_code: Optional[str] = Field(None, max_length=100)
    picking_sequence: Optional[int] = None
    is_pickable: bool = True
    is_bulk_location: bool = False
    restrictions: Optional[dict[str, Any]] = None
    is_active: bool = True


class LocationUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "warehouse_id",
        "location_code",
        "location_type",
        "coordinates",
        "dimensions",
        "capacity_unit",
        "weight_unit",
        "is_pickable",
        "is_bulk_location",
        "restrictions",
        "is_active",
    )

    warehouse_id: Optional[UUID] = None
    zone_id: Optional[UUID] = None
    location_code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, max_length=255)
    location_type: Optional[LocationType] = None
    aisle: Optional[str] = Field(None, max_length=20)
    bay: Optional[str] = Field(None, max_length=20)
    level: Optional[str] = Field(None, max_length=20)
    position: Optional[str] = Field(None, max_length=20)
    coordinates: Optional[dict[str, Any]] = None
    dimensions: Optional[dict[str, Any]] = None
    capacity: Optional[int] = Field(None, ge=0)
    capacity_unit: Optional[str] = Field(None, max_length=20)
    weight_limit: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    weight_unit: Optional[str] = Field(None, max_length=10)
    barcode: Optional[str] = Field(None, max_length=100)
    qr_code: Optional[str] = Field(None, max_length=100)
    picking_sequence: Optional[int] = None
    is_pickable: Optional[bool] = None
    is_bulk_location: Optional[bool] = None
    restrictions: Optional[dict[str, Any]] = None
    is_active: Optional[bool] = None


class LocationOut(BaseModel):
    id: UUID
    warehouse_id: UUID
    zone_id: Optional[UUID] = None
    code: str
    name: Optional[str] = None
    type: LocationType
    aisle: Optional[str] = None
    bay: Optional[str] = None
    level: Optional[str] = None
    position: Optional[str] = None
    coordinates: dict[str, Any]
    dimensions: dict[str, Any]
    capacity: Optional[int] = None
    capacity_unit: str
    weight_limit: Optional[float] = None
    weight_unit: str
    barcode: Optional[str] = None
    qr_code: Optional[str] = None
    picking_sequence: Optional[int] = None
    is_pickable: bool
    is_bulk_location: bool
    restrictions: dict[str, Any]
    status: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class LocationStats(BaseModel):
    totalLocations: int
    activeLocations: int
    inactiveLocations: int
    pickableLocations: int
    bulkLocations: int
    floorLocations: int
    rackLocations: int
    shelfLocations: int
    binLocations: int
