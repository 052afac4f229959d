# app/services/warehouse/zone_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.enums.zone_type import ZoneType
from app.models.warehouse.location_models import Location
from app.models.warehouse.warehouse_models import Warehouse
from app.models.warehouse.zone_models import Zone
from app.schemas.auth.auth_context import AuthContext
from app.schemas.common import status_from_flag
from app.schemas.warehouse.zone_schemas import ZoneCreate, ZoneUpdate, ZoneOut, ZoneStats
from app.services.common.scoping import (
    owned_zones,
    get_owned_zone,
    get_owned_warehouse,
    ensure_unique,
    ensure_no_dependents,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger
from app.utils.numbers import to_float

logger = get_logger(__name__)

DUPLICATE_CODE = "Zone code already exists in this warehouse"


def _map_zone(zone: Zone) -> ZoneOut:
    return ZoneOut(
        id=zone.id,
        warehouse_id=zone.warehouse_id,
        code=zone.zone_code,
        name=zone.name,
        type=zone.zone_type,
        description=zone.description,
        capacity=zone.capacity,
        capacity_unit=zone.capacity_unit,
        temperature_controlled=zone.temperature_controlled,
        temperature_min=to_float(zone.temperature_min),
        temperature_max=to_float(zone.temperature_max),
        humidity_controlled=zone.humidity_controlled,
        humidity_min=to_float(zone.humidity_min),
        humidity_max=to_float(zone.humidity_max),
        restrictions=zone.restrictions or {},
        status=status_from_flag(zone.is_active),
        is_active=zone.is_active,
        created_at=zone.created_at,
        updated_at=zone.updated_at,
    )


# =========================
# LIST / STATS / GET
# =========================
async def list_zones(
    db: AsyncSession,
    auth: AuthContext,
    *,
    warehouse_id: Optional[UUID] = None,
    zone_type: Optional[ZoneType] = None,
) -> list[ZoneOut]:
    query = owned_zones(auth.tenant_id)
    if warehouse_id:
        query = query.where(Zone.warehouse_id == warehouse_id)
    if zone_type:
        query = query.where(Zone.zone_type == zone_type)

    result = await db.execute(query.order_by(Zone.created_at.desc()))
    return [_map_zone(z) for z in result.scalars().all()]


async def get_zone_stats(
    db: AsyncSession,
    auth: AuthContext,
    *,
    warehouse_id: Optional[UUID] = None,
) -> ZoneStats:
    count = func.count(Zone.id)
    query = (
        select(
            count,
            count.filter(Zone.is_active.is_(True)),
            count.filter(Zone.is_active.is_(False)),
            count.filter(Zone.zone_type == ZoneType.storage),
            count.filter(Zone.zone_type == ZoneType.receiving),
            count.filter(Zone.zone_type == ZoneType.shipping),
            count.filter(Zone.zone_type == ZoneType.staging),
        )
        .join(Warehouse, Zone.warehouse_id == Warehouse.id)
        .where(Warehouse.tenant_id == auth.tenant_id)
    )
    if warehouse_id:
        query = query.where(Zone.warehouse_id == warehouse_id)

    row = (await db.execute(query)).one()
    return ZoneStats(
        totalZones=row[0],
        activeZones=row[1],
        inactiveZones=row[2],
        storageZones=row[3],
        receivingZones=row[4],
        shippingZones=row[5],
        stagingZones=row[6],
    )


async def get_zone(db: AsyncSession, auth: AuthContext, zone_id: UUID) -> ZoneOut:
    return _map_zone(await get_owned_zone(db, auth.tenant_id, zone_id))


# =========================
# CREATE
# =========================
async def create_zone(db: AsyncSession, payload: ZoneCreate, auth: AuthContext) -> ZoneOut:
    warehouse = await get_owned_warehouse(
        db, auth.tenant_id, payload.warehouse_id, as_reference=True
    )

    await ensure_unique(
        db,
        Zone,
        Zone.warehouse_id == warehouse.id,
        Zone.zone_code == payload.zone_code,
        message=DUPLICATE_CODE,
        error_code=ErrorCode.ZONE_CODE_EXISTS,
    )

    data = payload.model_dump()
    data["capacity_unit"] = data["capacity_unit"] or "pallets"
    data["restrictions"] = data["restrictions"] or {}

    zone = Zone(**data)
    db.add(zone)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.ZONE_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_ZONE,
        target_code=zone.zone_code,
        warehouse_code=warehouse.warehouse_code,
    )

    await db.commit()
    await db.refresh(zone)
    return _map_zone(zone)


# =========================
# UPDATE
# =========================
async def update_zone(
    db: AsyncSession,
    zone_id: UUID,
    payload: ZoneUpdate,
    auth: AuthContext,
) -> ZoneOut:
    zone = await get_owned_zone(db, auth.tenant_id, zone_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    target_warehouse_id = changes.get("warehouse_id", zone.warehouse_id)
    moving = target_warehouse_id != zone.warehouse_id

    if moving:
        await get_owned_warehouse(db, auth.tenant_id, target_warehouse_id, as_reference=True)
        has_locations = await db.scalar(
            select(Location.id).where(Location.zone_id == zone.id).limit(1)
        )
        if has_locations:
            raise AppException(
                400,
                "Cannot move zone with associated locations to another warehouse",
                ErrorCode.ZONE_HAS_DEPENDENTS,
            )

    target_code = changes.get("zone_code", zone.zone_code)
    if moving or target_code != zone.zone_code:
        await ensure_unique(
            db,
            Zone,
            Zone.warehouse_id == target_warehouse_id,
            Zone.zone_code == target_code,
            exclude_id=zone.id,
            message=DUPLICATE_CODE,
            error_code=ErrorCode.ZONE_CODE_EXISTS,
        )

    # min/max may arrive separately from the stored bound
    for low, high in (("temperature_min", "temperature_max"), ("humidity_min", "humidity_max")):
        lo = changes.get(low, getattr(zone, low))
        hi = changes.get(high, getattr(zone, high))
        if lo is not None and hi is not None and lo > hi:
            raise AppException(
                400,
                f"{low} must be less than or equal to {high}",
                ErrorCode.VALIDATION_ERROR,
            )

    before = {field: getattr(zone, field) for field in changes}
    for field, value in changes.items():
        setattr(zone, field, value)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.ZONE_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_ZONE,
        target_code=zone.zone_code,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(zone)
    return _map_zone(zone)


# =========================
# DELETE
# =========================
async def delete_zone(db: AsyncSession, zone_id: UUID, auth: AuthContext) -> dict:
    zone = await get_owned_zone(db, auth.tenant_id, zone_id)

    await ensure_no_dependents(
        db,
        resource="zone",
        parent_id=zone.id,
        dependents=[(Location.zone_id, "locations")],
        error_code=ErrorCode.ZONE_HAS_DEPENDENTS,
    )

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_ZONE,
        target_code=zone.zone_code,
    )

    await db.delete(zone)
    await db.commit()
    return {"id": zone_id}
