# app/services/warehouse/location_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.models.enums.location_type import LocationType
from app.models.warehouse.location_models import Location
from app.models.warehouse.warehouse_models import Warehouse
from app.schemas.auth.auth_context import AuthContext
from app.schemas.common import status_from_flag
from app.schemas.warehouse.location_schemas import (
    LocationCreate,
    LocationUpdate,
    LocationOut,
    LocationStats,
)
from app.services.common.scoping import (
    owned_locations,
    fetch_owned,
    get_owned_warehouse,
    get_zone_in_warehouse,
    ensure_unique,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger
from app.utils.numbers import to_float

logger = get_logger(__name__)

DUPLICATE_CODE = "Location code already exists in this warehouse"
DUPLICATE_BARCODE = "Barcode already exists"
DUPLICATE_QR = "QR code already exists"
DUPLICATE_ANY = "Location code, barcode or QR code already exists"


def _map_location(location: Location) -> LocationOut:
    return LocationOut(
        id=location.id,
        warehouse_id=location.warehouse_id,
        zone_id=location.zone_id,
        code=location.location_code,
        name=location.name,
        type=location.location_type,
        aisle=location.aisle,
        bay=location.bay,
        level=location.level,
        position=location.position,
        coordinates=location.coordinates or {},
        dimensions=location.dimensions or {},
        capacity=location.capacity,
        capacity_unit=location.capacity_unit,
        weight_limit=to_float(location.weight_limit),
        weight_unit=location.weight_unit,
        barcode=location.barcode,
        qr_code=location.qr_code,
        picking_sequence=location.picking_sequence,
        is_pickable=location.is_pickable,
        is_bulk_location=location.is_bulk_location,
        restrictions=location.restrictions or {},
        status=status_from_flag(location.is_active),
        is_active=location.is_active,
        created_at=location.created_at,
        updated_at=location.updated_at,
    )


async def _get_owned_location(db: AsyncSession, auth: AuthContext, location_id: UUID) -> Location:
    return await fetch_owned(
        db,
        owned_locations(auth.tenant_id).where(Location.id == location_id),
        message="Location not found",
        error_code=ErrorCode.LOCATION_NOT_FOUND,
    )


async def _ensure_scan_codes_unique(
    db: AsyncSession,
    *,
    barcode: Optional[str],
    qr_code: Optional[str],
    exclude_id: Optional[UUID] = None,
):
    # barcode / qr_code are unique across all warehouses, not per parent
    if barcode:
        await ensure_unique(
            db,
            Location,
            Location.barcode == barcode,
            exclude_id=exclude_id,
            message=DUPLICATE_BARCODE,
            error_code=ErrorCode.LOCATION_BARCODE_EXISTS,
        )
    if qr_code:
        await ensure_unique(
            db,
            Location,
            Location.qr_code == qr_code,
            exclude_id=exclude_id,
            message=DUPLICATE_QR,
            error_code=ErrorCode.LOCATION_QR_CODE_EXISTS,
        )


# =========================
# LIST / STATS / GET
# =========================
async def list_locations(
    db: AsyncSession,
    auth: AuthContext,
    *,
    warehouse_id: Optional[UUID] = None,
    zone_id: Optional[UUID] = None,
    location_type: Optional[LocationType] = None,
    search: Optional[str] = None,
) -> list[LocationOut]:
    query = owned_locations(auth.tenant_id)
    if warehouse_id:
        query = query.where(Location.warehouse_id == warehouse_id)
    if zone_id:
        query = query.where(Location.zone_id == zone_id)
    if location_type:
        query = query.where(Location.location_type == location_type)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Location.location_code.ilike(pattern),
                Location.name.ilike(pattern),
                Location.barcode.ilike(pattern),
            )
        )

    result = await db.execute(
        query.order_by(Location.picking_sequence.asc().nulls_last(), Location.location_code)
    )
    return [_map_location(loc) for loc in result.scalars().all()]


async def get_location_stats(
    db: AsyncSession,
    auth: AuthContext,
    *,
    warehouse_id: Optional[UUID] = None,
) -> LocationStats:
    count = func.count(Location.id)
    query = (
        select(
            count,
            count.filter(Location.is_active.is_(True)),
            count.filter(Location.is_active.is_(False)),
            count.filter(Location.is_pickable.is_(True)),
            count.filter(Location.is_bulk_location.is_(True)),
            count.filter(Location.location_type == LocationType.floor),
            count.filter(Location.location_type == LocationType.rack),
            count.filter(Location.location_type == LocationType.shelf),
            count.filter(Location.location_type == LocationType.bin),
        )
        .join(Warehouse, Location.warehouse_id == Warehouse.id)
        .where(Warehouse.tenant_id == auth.tenant_id)
    )
    if warehouse_id:
        query = query.where(Location.warehouse_id == warehouse_id)

    row = (await db.execute(query)).one()
    return LocationStats(
        totalLocations=row[0],
        activeLocations=row[1],
        inactiveLocations=row[2],
        pickableLocations=row[3],
        bulkLocations=row[4],
        floorLocations=row[5],
        rackLocations=row[6],
        shelfLocations=row[7],
        binLocations=row[8],
    )


async def get_location(db: AsyncSession, auth: AuthContext, location_id: UUID) -> LocationOut:
    return _map_location(await _get_owned_location(db, auth, location_id))


# =========================
# CREATE
# =========================
async def create_location(
    db: AsyncSession,
    payload: LocationCreate,
    auth: AuthContext,
) -> LocationOut:
    warehouse = await get_owned_warehouse(
        db, auth.tenant_id, payload.warehouse_id, as_reference=True
    )
    if payload.zone_id:
        await get_zone_in_warehouse(db, auth.tenant_id, payload.zone_id, warehouse.id)

    await ensure_unique(
        db,
        Location,
        Location.warehouse_id == warehouse.id,
        Location.location_code == payload.location_code,
        message=DUPLICATE_CODE,
        error_code=ErrorCode.LOCATION_CODE_EXISTS,
    )
    await _ensure_scan_codes_unique(db, barcode=payload.barcode, qr_code=payload.qr_code)

    data = payload.model_dump()
    data["coordinates"] = data["coordinates"] or {}
    data["dimensions"] = data["dimensions"] or {}
    data["restrictions"] = data["restrictions"] or {}
    data["capacity_unit"] = data["capacity_unit"] or "units"
    data["weight_unit"] = data["weight_unit"] or "lbs"

    location = Location(**data)
    db.add(location)

    await flush_or_raise(db, message=DUPLICATE_ANY, error_code=ErrorCode.LOCATION_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_LOCATION,
        target_code=location.location_code,
        warehouse_code=warehouse.warehouse_code,
    )

    await db.commit()
    await db.refresh(location)
    return _map_location(location)


# =========================
# UPDATE
# =========================
async def update_location(
    db: AsyncSession,
    location_id: UUID,
    payload: LocationUpdate,
    auth: AuthContext,
) -> LocationOut:
    location = await _get_owned_location(db, auth, location_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    target_warehouse_id = changes.get("warehouse_id", location.warehouse_id)
    target_zone_id = changes.get("zone_id", location.zone_id)
    moving = target_warehouse_id != location.warehouse_id

    if moving:
        await get_owned_warehouse(db, auth.tenant_id, target_warehouse_id, as_reference=True)

    # a kept zone must still sit in the (possibly new) warehouse
    if target_zone_id and (moving or "zone_id" in changes):
        await get_zone_in_warehouse(db, auth.tenant_id, target_zone_id, target_warehouse_id)

    target_code = changes.get("location_code", location.location_code)
    if moving or target_code != location.location_code:
        await ensure_unique(
            db,
            Location,
            Location.warehouse_id == target_warehouse_id,
            Location.location_code == target_code,
            exclude_id=location.id,
            message=DUPLICATE_CODE,
            error_code=ErrorCode.LOCATION_CODE_EXISTS,
        )

    await _ensure_scan_codes_unique(
        db,
        barcode=changes.get("barcode") if changes.get("barcode") != location.barcode else None,
        qr_code=changes.get("qr_code") if changes.get("qr_code") != location.qr_code else None,
        exclude_id=location.id,
    )

    before = {field: getattr(location, field) for field in changes}
    for field, value in changes.items():
        setattr(location, field, value)

    await flush_or_raise(db, message=DUPLICATE_ANY, error_code=ErrorCode.LOCATION_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_LOCATION,
        target_code=location.location_code,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(location)
    return _map_location(location)


# =========================
# DELETE
# =========================
async def delete_location(db: AsyncSession, location_id: UUID, auth: AuthContext) -> dict:
    location = await _get_owned_location(db, auth, location_id)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_LOCATION,
        target_code=location.location_code,
    )

    await db.delete(location)
    await db.commit()
    return {"id": location_id}
