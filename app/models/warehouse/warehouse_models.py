from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Boolean,
    JSON,
    ForeignKey,
    Uuid,
    UniqueConstraint,
    CheckConstraint,
    Index,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Warehouse(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "warehouses"

    tenant_id = Column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    warehouse_code = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(JSON, nullable=False, default=dict)

    manager_name = Column(String(255), nullable=True)
    manager_email = Column(String(255), nullable=True)
    manager_phone = Column(String(50), nullable=True)

    operating_hours = Column(JSON, nullable=False, default=dict)
    timezone = Column(String(50), nullable=False, default="UTC")
    total_capacity = Column(Integer, nullable=True)
    capacity_unit = Column(String(20), nullable=False, default="square_feet")
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "warehouse_code", name="uq_warehouses_tenant_code"),
        CheckConstraint("length(warehouse_code) >= 2", name="ck_warehouses_code_len"),
        CheckConstraint("length(name) >= 2", name="ck_warehouses_name_len"),
        CheckConstraint(
            "total_capacity IS NULL OR total_capacity >= 0",
            name="ck_warehouses_capacity",
        ),
        Index("ix_warehouses_tenant_active", "tenant_id", "is_active"),
    )

    def __repr__(self):
        return f"<Warehouse id={self.id} code={self.warehouse_code}>"
