from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    Boolean,
    JSON,
    Enum,
    ForeignKey,
    Uuid,
    UniqueConstraint,
    CheckConstraint,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from app.models.enums.door_type import DoorType
from app.models.enums.record_status import RecordStatus


class Door(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "doors"

    warehouse_id = Column(
        Uuid, ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    door_number = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(Enum(DoorType, name="door_type"), nullable=False, default=DoorType.inbound)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    dimensions = Column(JSON, nullable=False, default=dict)
    equipment = Column(JSON, nullable=False, default=list)
    capacity = Column(Integer, nullable=True)
    status = Column(
        Enum(RecordStatus, name="door_status"), nullable=False, default=RecordStatus.active
    )
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("warehouse_id", "door_number", name="uq_doors_warehouse_number"),
        CheckConstraint("length(door_number) >= 1", name="ck_doors_number_len"),
        CheckConstraint("capacity IS NULL OR capacity >= 0", name="ck_doors_capacity"),
    )

    def __repr__(self):
        return f"<Door id={self.id} number={self.door_number} type={self.type}>"
