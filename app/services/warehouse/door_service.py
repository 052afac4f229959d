# app/services/warehouse/door_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.models.enums.door_type import DoorType
from app.models.enums.record_status import RecordStatus
from app.models.warehouse.door_models import Door
from app.models.warehouse.warehouse_models import Warehouse
from app.schemas.auth.auth_context import AuthContext
from app.schemas.warehouse.door_schemas import DoorCreate, DoorUpdate, DoorOut, DoorStats
from app.services.common.scoping import (
    owned_doors,
    fetch_owned,
    get_owned_warehouse,
    ensure_unique,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_NUMBER = "Door number already exists in this warehouse"


def _map_door(door: Door) -> DoorOut:
    return DoorOut(
        id=door.id,
        warehouse_id=door.warehouse_id,
        door_number=door.door_number,
        name=door.name,
        type=door.type,
        description=door.description,
        location=door.location,
        dimensions=door.dimensions or {},
        equipment=door.equipment or [],
        capacity=door.capacity,
        status=door.status,
        is_active=door.is_active,
        created_at=door.created_at,
        updated_at=door.updated_at,
    )


async def _get_owned_door(db: AsyncSession, auth: AuthContext, door_id: UUID) -> Door:
    return await fetch_owned(
        db,
        owned_doors(auth.tenant_id).where(Door.id == door_id),
        message="Door not found",
        error_code=ErrorCode.DOOR_NOT_FOUND,
    )


async def list_doors(
    db: AsyncSession,
    auth: AuthContext,
    *,
    warehouse_id: Optional[UUID] = None,
    door_type: Optional[DoorType] = None,
) -> list[DoorOut]:
    query = owned_doors(auth.tenant_id)
    if warehouse_id:
        query = query.where(Door.warehouse_id == warehouse_id)
    if door_type:
        query = query.where(Door.type == door_type)

    result = await db.execute(query.order_by(Door.door_number))
    return [_map_door(d) for d in result.scalars().all()]


async def get_door_stats(
    db: AsyncSession,
    auth: AuthContext,
    *,
    warehouse_id: Optional[UUID] = None,
) -> DoorStats:
    count = func.count(Door.id)
    query = (
        select(
            count,
            count.filter(Door.is_active.is_(True)),
            count.filter(Door.type == DoorType.inbound),
            count.filter(Door.type == DoorType.outbound),
            count.filter(Door.type == DoorType.staging),
        )
        .join(Warehouse, Door.warehouse_id == Warehouse.id)
        .where(Warehouse.tenant_id == auth.tenant_id)
    )
    if warehouse_id:
        query = query.where(Door.warehouse_id == warehouse_id)

    row = (await db.execute(query)).one()
    return DoorStats(
        totalDoors=row[0],
        activeDoors=row[1],
        inboundDoors=row[2],
        outboundDoors=row[3],
        stagingDoors=row[4],
    )


async def get_door(db: AsyncSession, auth: AuthContext, door_id: UUID) -> DoorOut:
    return _map_door(await _get_owned_door(db, auth, door_id))


async def create_door(db: AsyncSession, payload: DoorCreate, auth: AuthContext) -> DoorOut:
    warehouse = await get_owned_warehouse(
        db, auth.tenant_id, payload.warehouse_id, as_reference=True
    )

    await ensure_unique(
        db,
        Door,
        Door.warehouse_id == warehouse.id,
        Door.door_number == payload.door_number,
        message=DUPLICATE_NUMBER,
        error_code=ErrorCode.DOOR_NUMBER_EXISTS,
    )

    data = payload.model_dump()
    data["dimensions"] = data["dimensions"] or {}
    data["equipment"] = data["equipment"] or []

    door = Door(**data, is_active=payload.status == RecordStatus.active)
    db.add(door)

    await flush_or_raise(db, message=DUPLICATE_NUMBER, error_code=ErrorCode.DOOR_NUMBER_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_DOOR,
        target_code=door.door_number,
        warehouse_code=warehouse.warehouse_code,
    )

    await db.commit()
    await db.refresh(door)
    return _map_door(door)


async def update_door(
    db: AsyncSession,
    door_id: UUID,
    payload: DoorUpdate,
    auth: AuthContext,
) -> DoorOut:
    door = await _get_owned_door(db, auth, door_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    target_warehouse_id = changes.get("warehouse_id", door.warehouse_id)
    moving = target_warehouse_id != door.warehouse_id
    if moving:
        await get_owned_warehouse(db, auth.tenant_id, target_warehouse_id, as_reference=True)

    target_number = changes.get("door_number", door.door_number)
    if moving or target_number != door.door_number:
        await ensure_unique(
            db,
            Door,
            Door.warehouse_id == target_warehouse_id,
            Door.door_number == target_number,
            exclude_id=door.id,
            message=DUPLICATE_NUMBER,
            error_code=ErrorCode.DOOR_NUMBER_EXISTS,
        )

    before = {field: getattr(door, field) for field in changes}
    for field, value in changes.items():
        setattr(door, field, value)
    if "status" in changes:
        door.is_active = changes["status"] == RecordStatus.active

    await flush_or_raise(db, message=DUPLICATE_NUMBER, error_code=ErrorCode.DOOR_NUMBER_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_DOOR,
        target_code=door.door_number,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(door)
    return _map_door(door)


async def delete_door(db: AsyncSession, door_id: UUID, auth: AuthContext) -> dict:
    door = await _get_owned_door(db, auth, door_id)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_DOOR,
        target_code=door.door_number,
    )

    await db.delete(door)
    await db.commit()
    return {"id": door_id}
