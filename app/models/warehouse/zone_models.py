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
from app.models.enums.zone_type import ZoneType


class Zone(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "zones"

    warehouse_id = Column(
        Uuid, ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    zone_code = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    zone_type = Column(Enum(ZoneType, name="zone_type"), nullable=False, index=True)
    description = Column(Text, nullable=True)

    capacity = Column(Integer, nullable=True)
    capacity_unit = Column(String(20), nullable=False, default="pallets")

    temperature_controlled = Column(Boolean, nullable=False, default=False)
    temperature_min = Column(Numeric(5, 2), nullable=True)
    temperature_max = Column(Numeric(5, 2), nullable=True)
    humidity_controlled = Column(Boolean, nullable=False, default=False)
    humidity_min = Column(Numeric(5, 2), nullable=True)
    humidity_max = Column(Numeric(5, 2), nullable=True)

    restrictions = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("warehouse_id", "zone_code", name="uq_zones_warehouse_code"),
        CheckConstraint("length(zone_code) >= 1", name="ck_zones_code_len"),
        CheckConstraint("length(name) >= 2", name="ck_zones_name_len"),
        CheckConstraint("capacity IS NULL OR capacity >= 0", name="ck_zones_capacity"),
        CheckConstraint(
            "temperature_min IS NULL OR temperature_max IS NULL "
            "OR temperature_min <= temperature_max",
            name="ck_zones_temperature_range",
        ),
        CheckConstraint(
            "humidity_min IS NULL OR humidity_max IS NULL "
            "OR humidity_min <= humidity_max",
            name="ck_zones_humidity_range",
        ),
    )

    def __repr__(self):
        return f"<Zone id={self.id} code={self.zone_code} type={self.zone_type}>"
