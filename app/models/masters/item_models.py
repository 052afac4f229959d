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
    Index,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from app.models.enums.item_enums import (
    ItemType,
    ItemStatus,
    AbcClassification,
    VelocityClassification,
)

NON_NEGATIVE_COLUMNS = (
    "unit_cost",
    "unit_price",
    "weight",
    "volume",
    "shelf_life_days",
    "reorder_point",
    "reorder_quantity",
    "safety_stock",
    "max_stock",
)


class Item(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "items"

    customer_id = Column(
        Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_code = Column(String(100), nullable=False)
    customer_item_code = Column(String(100), nullable=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    brand = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    sku = Column(String(100), nullable=True, index=True)
    upc = Column(String(20), nullable=True)
    ean = Column(String(20), nullable=True)

    item_type = Column(
        Enum(ItemType, name="item_type"), nullable=False, default=ItemType.finished_good
    )
    status = Column(
        Enum(ItemStatus, name="item_status"), nullable=False, default=ItemStatus.active
    )

    unit_cost = Column(Numeric(15, 4), nullable=True)
    unit_price = Column(Numeric(15, 4), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")

    weight = Column(Numeric(10, 4), nullable=True)
    weight_unit = Column(String(10), nullable=False, default="lbs")
    dimensions = Column(JSON, nullable=False, default=dict)
    volume = Column(Numeric(10, 4), nullable=True)
    volume_unit = Column(String(20), nullable=False, default="cubic_feet")

    hazmat = Column(Boolean, nullable=False, default=False)
    hazmat_class = Column(String(20), nullable=True)
    temperature_controlled = Column(Boolean, nullable=False, default=False)
    temperature_min = Column(Numeric(5, 2), nullable=True)
    temperature_max = Column(Numeric(5, 2), nullable=True)

    expiration_required = Column(Boolean, nullable=False, default=False)
    shelf_life_days = Column(Integer, nullable=True)
    lot_tracking = Column(Boolean, nullable=False, default=False)
    serial_tracking = Column(Boolean, nullable=False, default=False)

    reorder_point = Column(Integer, nullable=True)
    reorder_quantity = Column(Integer, nullable=True)
    safety_stock = Column(Integer, nullable=True)
    max_stock = Column(Integer, nullable=True)

    abc_classification = Column(
        Enum(AbcClassification, name="abc_classification"), nullable=True
    )
    velocity_classification = Column(
        Enum(VelocityClassification, name="velocity_classification"), nullable=True
    )
    image_url = Column(String(500), nullable=True)
    attributes = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("customer_id", "item_code", name="uq_items_customer_code"),
        CheckConstraint("length(item_code) >= 1", name="ck_items_code_len"),
        CheckConstraint("length(name) >= 2", name="ck_items_name_len"),
        *(
            CheckConstraint(f"{col} IS NULL OR {col} >= 0", name=f"ck_items_{col}")
            for col in NON_NEGATIVE_COLUMNS
        ),
        Index("ix_items_customer_status", "customer_id", "status"),
    )

    def __repr__(self):
        return f"<Item id={self.id} code={self.item_code} status={self.status}>"
