from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.enums.uom_type import UOMType
from app.schemas.common import PartialUpdate


class UOMCreate(BaseModel):
    item_id: UUID
    uom_code: str = Field(min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    uom_type: UOMType = UOMType.base
    conversion_factor: Decimal = Field(Decimal("1"), gt=0, max_digits=15, decimal_places=6)
    base_uom_id: Optional[UUID] = None
    is_base_uom: bool = False
    is_default: bool = False
    dimensions: dict[str, Any] = Field(default_factory=dict)
    weight: Optional[Decimal] = Field(None, ge=0)
    weight_unit: str = Field("lbs", max_length=10)
    barcode: Optional[str] = Field(None, max_length=100)
    gtin: Optional[str] = Field(None, max_length=20)
    is_sellable: bool = True
    is_purchasable: bool = True
    is_trackable: bool = True
    sort_order: int = 0
    is_active: bool = True

    @model_validator(mode="after")
    def base_uom_has_no_parent(self):
        if self.is_base_uom and self.base_uom_id is not None:
            raise ValueError("A base UOM cannot reference another base UOM")
        return self


class UOMUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "uom_code",
        "name",
        "uom_type",
        "conversion_factor",
        "is_base_uom",
        "is_default",
        "dimensions",
        "weight_unit",
        "is_sellable",
        "is_purchasable",
        "is_trackable",
        "sort_order",
        "is_active",
    )

    uom_code: Optional[str] = Field(None, min_length=1, max_length=20)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    uom_type: Optional[UOMType] = None
    conversion_factor: Optional[Decimal] = Field(None, gt=0, max_digits=15, decimal_places=6)
    base_uom_id: Optional[UUID] = None
    is_base_uom: Optional[bool] = None
    is_default: Optional[bool] = None
    dimensions: Optional[dict[str, Any]] = None
    weight: Optional[Decimal] = Field(None, ge=0)
    weight_unit: Optional[str] = Field(None, max_length=10)
    barcode: Optional[str] = Field(None, max_length=100)
    gtin: Optional[str] = Field(None, max_length=20)
    is_sellable: Optional[bool] = None
    is_purchasable: Optional[bool] = None
    is_trackable: Optional[bool] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class UOMOut(BaseModel):
    id: UUID
    item_id: UUID
    code: str
    name: str
    description: Optional[str] = None
    type: UOMType
    conversion_factor: float
    base_uom_id: Optional[UUID] = None
    is_base_uom: bool
    is_default: bool
    dimensions: dict[str, Any]
    weight: Optional[float] = None
    weight_unit: str
    barcode: Optional[str] = None
    gtin: Optional[str] = None
    is_sellable: bool
    is_purchasable: bool
    is_trackable: bool
    sort_order: int
    status: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class UOMStats(BaseModel):
    totalUOMs: int
    activeUOMs: int
    baseUOMs: int
    defaultUOMs: int
