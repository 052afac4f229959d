from datetime import datetime
from typing import Any, ClassVar, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.enums.door_type import DoorType
from app.models.enums.record_status import RecordStatus
from app.schemas.common import PartialUpdate


class DoorCreate(BaseModel):
    warehouse_id: UUID
    door_number: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    type: DoorType = DoorType.inbound
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    dimensions: Optional[dict[str, Any]] = None
    equipment: Optional[list[str]] = None
    capacity: Optional[int] = Field(None, ge=0)
    status: RecordStatus = RecordStatus.active


class DoorUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "warehouse_id",
        "door_number",
        "name",
        "type",
        "dimensions",
        "equipment",
        "status",
    )

    warehouse_id: Optional[UUID] = None
    door_number: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[DoorType] = None
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    dimensions: Optional[dict[str, Any]] = None
    equipment: Optional[list[str]] = None
    capacity: Optional[int] = Field(None, ge=0)
    status: Optional[RecordStatus] = None


class DoorOut(BaseModel):
    id: UUID
    warehouse_id: UUID
    door_number: str
    name: str
    type: DoorType
    description: Optional[str] = None
    location: Optional[str] = None
    dimensions: dict[str, Any]
    equipment: list[str]
    capacity: Optional[int] = None
    status: RecordStatus
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class DoorStats(BaseModel):
    totalDoors: int
    activeDoors: int
    inboundDoors: int
    outboundDoors: int
    stagingDoors: int
