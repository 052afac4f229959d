from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Boolean,
    Numeric,
    JSON,
    Enum,
    ForeignKey,
    Uuid,
    UniqueConstraint,
    CheckConstraint,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from app.models.enums.uom_type import UOMType


class UOM(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "uoms"

    item_id = Column(
        Uuid, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    uom_code = Column(String(20), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    uom_type = Column(Enum(UOMType, name="uom_type"), nullable=False, default=UOMType.base)

    conversion_factor = Column(Numeric(15, 6), nullable=False, default=Decimal("1"))
    base_uom_id = Column(
        Uuid, ForeignKey("uoms.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_base_uom = Column(Boolean, nullable=False, default=False)
    is_default = Column(Boolean, nullable=False, default=False)

    dimensions = Column(JSON, nullable=False, default=dict)
    weight = Column(Numeric(10, 4), nullable=True)
    weight_unit = Column(String(10), nullable=False, default="lbs")
    barcode = Column(String(100), nullable=True)
    gtin = Column(String(20), nullable=True)

    is_sellable = Column(Boolean, nullable=False, default=True)
    is_purchasable = Column(Boolean, nullable=False, default=True)
    is_trackable = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("item_id", "uom_code", name="uq_uoms_item_code"),
        CheckConstraint("length(uom_code) >= 1", name="ck_uoms_code_len"),
        CheckConstraint("conversion_factor > 0", name="ck_uoms_conversion_factor"),
        CheckConstraint("weight IS NULL OR weight >= 0", name="ck_uoms_weight"),
    )

    def __repr__(self):
        return f"<UOM id={self.id} code={self.uom_code} factor={self.conversion_factor}>"
