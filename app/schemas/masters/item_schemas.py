# app/schemas/masters/item_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.enums.item_enums import (
    ItemType,
    ItemStatus,
    AbcClassification,
    VelocityClassification,
)
from app.schemas.common import PartialUpdate


class ItemFields(BaseModel):
    """Optional attributes shared by create and update payloads."""

    customer_item_code: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    sku: Optional[str] = Field(None, max_length=100)
    upc: Optional[str] = Field(None, max_length=20)
    ean: Optional[str] = Field(None, max_length=20)

    unit_cost: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=4)
    unit_price: Optional[Decimal] = Field(None, ge=0, max_digits=15, decimal_places=4)

    weight: Optional[Decimal] = Field(None, ge=0)
    volume: Optional[Decimal] = Field(None, ge=0)

    hazmat_class: Optional[str] = Field(None, max_length=20)
    temperature_min: Optional[Decimal] = None
    temperature_max: Optional[Decimal] = None

    shelf_life_days: Optional[int] = Field(None, ge=0)
    reorder_point: Optional[int] = Field(None, ge=0)
    reorder_quantity: Optional[int] = Field(None, ge=0)
    safety_stock: Optional[int] = Field(None, ge=0)
    max_stock: Optional[int] = Field(None, ge=0)

    abc_classification: Optional[AbcClassification] = None
    velocity_classification: Optional[VelocityClassification] = None
    image_url: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_temperature_range(self):
        if (
            self.temperature_min is not None
            and self.temperature_max is not None
            and self.temperature_min > self.temperature_max
        ):
            raise ValueError("temperature_min must be less than or equal to temperature_max")
        return self


class ItemCreate(ItemFields):
    customer_id: UUID
    item_code: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=2, max_length=255)
    item_type: ItemType = ItemType.finished_good
    status: ItemStatus = ItemStatus.active
    currency: str = Field("USD", min_length=3, max_length=3)
    weight_unit: str = Field("lbs", max_length=10)
    volume_unit: str = Field("cubic_feet", max_length=20)
    dimensions: dict[str, Any] = Field(default_factory=dict)
    attributes: dict[str, Any] = Field(default_factory=dict)
    hazmat: bool = False
    temperature_controlled: bool = False
    expiration_required: bool = False
    lot_tracking: bool = False
    serial_tracking: bool = False
    is_active: bool = True


class ItemUpdate(ItemFields, PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "customer_id",
        "item_code",
        "name",
        "item_type",
        "status",
        "currency",
        "weight_unit",
        "volume_unit",
        "dimensions",
        "attributes",
        "hazmat",
        "temperature_controlled",
        "expiration_required",
        "lot_tracking",
        "serial_tracking",
        "is_active",
    )

    customer_id: Optional[UUID] = None
    item_code: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    item_type: Optional[ItemType] = None
    status: Optional[ItemStatus] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    weight_unit: Optional[str] = Field(None, max_length=10)
    volume_unit: Optional[str] = Field(None, max_length=20)
    dimensions: Optional[dict[str, Any]] = None
    attributes: Optional[dict[str, Any]] = None
    hazmat: Optional[bool] = None
    temperature_controlled: Optional[bool] = None
    expiration_required: Optional[bool] = None
    lot_tracking: Optional[bool] = None
    serial_tracking: Optional[bool] = None
    is_active: Optional[bool] = None


class ItemOut(BaseModel):
    id: UUID
    customer_id: UUID
    code: str
    customer_item_code: Optional[str] = None
    name: str
    description: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    sku: Optional[str] = None
    upc: Optional[str] = None
    ean: Optional[str] = None
    type: ItemType
    status: ItemStatus
    unit_cost: Optional[float] = None
    unit_price: Optional[float] = None
    currency: str
    weight: Optional[float] = None
    weight_unit: str
    dimensions: dict[str, Any]
    volume: Optional[float] = None
    volume_unit: str
    hazmat: bool
    hazmat_class: Optional[str] = None
    temperature_controlled: bool
    temperature_min: Optional[float] = None
    temperature_max: Optional[float] = None
    expiration_required: bool
    shelf_life_days: Optional[int] = None
    lot_tracking: bool
    serial_tracking: bool
    reorder_point: Optional[int] = None
    reorder_quantity: Optional[int] = None
    safety_stock: Optional[int] = None
    max_stock: Optional[int] = None
    abc_classification: Optional[AbcClassification] = None
    velocity_classification: Optional[VelocityClassification] = None
    image_url: Optional[str] = None
    attributes: dict[str, Any]
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class ItemStats(BaseModel):
    totalItems: int
    activeItems: int
    inactiveItems: int
    discontinuedItems: int
    lotTrackedItems: int
    serialTrackedItems: int
