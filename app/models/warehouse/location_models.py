from sqlalchemy import (
    Column,
    String,
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
from app.models.enums.location_type import LocationType


class Location(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "locations"

    warehouse_id = Column(
        Uuid, ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    zone_id = Column(
        Uuid, ForeignKey("zones.id", ondelete="SET NULL"), nullable=True, index=True
    )
    location_code = Column(String(50), nullable=False)
    name = Column(String(255), nullable=True)
    location_type = Column(
        Enum(LocationType, name="location_type"),
        nullable=False,
        default=LocationType.floor,
        index=True,
    )

    aisle = Column(String(20), nullable=True)
    bay = Column(String(20), nullable=True)
    level = Column(String(20), nullable=True)
    position = Column(String(20), nullable=True)
    coordinates = Column(JSON, nullable=False, default=dict)
    dimensions = Column(JSON, nullable=False, default=dict)

    capacity = Column(Integer, nullable=True)
    capacity_unit = Column(String(20), nullable=False, default="units")
    weight_limit = Column(Numeric(10, 2), nullable=True)
    weight_unit = Column(String(10), nullable=False, default="lbs")

    # globally unique, not per warehouse
    barcode = Column(String(100), nullable=True, unique=True)
    qr_code = Column(String(100), nullable=True, unique=True)

    picking_sequence = Column(Integer, nullable=True)
    is_pickable = Column(Boolean, nullable=False, default=True)
    is_bulk_location = Column(Boolean, nullable=False, default=False)
    restrictions = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("warehouse_id", "location_code", name="uq_locations_warehouse_code"),
        CheckConstraint("length(location_code) >= 1", name="ck_locations_code_len"),
        CheckConstraint("capacity IS NULL OR capacity >= 0", name="ck_locations_capacity"),
        CheckConstraint(
            "weight_limit IS NULL OR weight_limit >= 0",
            name="ck_locations_weight_limit",
        ),
    )

    def __repr__(self):
        return f"<Location id={self.id} code={self.location_code} type={self.location_type}>"
