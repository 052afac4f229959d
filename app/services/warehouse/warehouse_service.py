# app/services/warehouse/warehouse_service.py

from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.models.warehouse.door_models import Door
from app.models.warehouse.location_models import Location
from app.models.warehouse.warehouse_models import Warehouse
from app.models.warehouse.zone_models import Zone
from app.schemas.auth.auth_context import AuthContext
from app.schemas.common import address_label, status_from_flag
from app.schemas.warehouse.warehouse_schemas import (
    WarehouseCreate,
    WarehouseUpdate,
    WarehouseOut,
    WarehouseStats,
)
from app.services.common.scoping import (
    owned_warehouses,
    get_owned_warehouse,
    ensure_unique,
    ensure_no_dependents,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_CODE = "Warehouse code already exists"


# =========================
# MAPPER
# =========================
def _map_warehouse(warehouse: Warehouse) -> WarehouseOut:
    return WarehouseOut(
        id=warehouse.id,
        name=warehouse.name,
        code=warehouse.warehouse_code,
        location=address_label(warehouse.address),
        status=status_from_flag(warehouse.is_active),
        description=warehouse.description,
        manager_name=warehouse.manager_name,
        manager_email=warehouse.manager_email,
        manager_phone=warehouse.manager_phone,
        total_capacity=warehouse.total_capacity,
        capacity_unit=warehouse.capacity_unit,
        timezone=warehouse.timezone,
        operating_hours=warehouse.operating_hours or {},
        address=warehouse.address or {},
        is_active=warehouse.is_active,
        created_at=warehouse.created_at,
        updated_at=warehouse.updated_at,
    )


# =========================
# LIST / STATS / GET
# =========================
async def list_warehouses(
    db: AsyncSession,
    auth: AuthContext,
    *,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> list[WarehouseOut]:
    query = owned_warehouses(auth.tenant_id)

    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Warehouse.name.ilike(pattern),
                Warehouse.warehouse_code.ilike(pattern),
            )
        )

    if is_active is not None:
        query = query.where(Warehouse.is_active.is_(is_active))

    result = await db.execute(query.order_by(Warehouse.created_at.desc()))
    return [_map_warehouse(w) for w in result.scalars().all()]


async def get_warehouse_stats(db: AsyncSession, auth: AuthContext) -> WarehouseStats:
    row = (
        await db.execute(
            select(
                func.count(Warehouse.id),
                func.count(Warehouse.id).filter(Warehouse.is_active.is_(True)),
                func.count(Warehouse.id).filter(Warehouse.is_active.is_(False)),
            ).where(Warehouse.tenant_id == auth.tenant_id)
        )
    ).one()

    return WarehouseStats(
        totalWarehouses=row[0],
        activeWarehouses=row[1],
        inactiveWarehouses=row[2],
    )


async def get_warehouse(db: AsyncSession, auth: AuthContext, warehouse_id: UUID) -> WarehouseOut:
    warehouse = await get_owned_warehouse(db, auth.tenant_id, warehouse_id)
    return _map_warehouse(warehouse)


# =========================
# CREATE
# =========================
async def create_warehouse(
    db: AsyncSession,
    payload: WarehouseCreate,
    auth: AuthContext,
) -> WarehouseOut:
    await ensure_unique(
        db,
        Warehouse,
        Warehouse.tenant_id == auth.tenant_id,
        Warehouse.warehouse_code == payload.warehouse_code,
        message=DUPLICATE_CODE,
        error_code=ErrorCode.WAREHOUSE_CODE_EXISTS,
    )

    warehouse = Warehouse(
        tenant_id=auth.tenant_id,
        name=payload.name,
        warehouse_code=payload.warehouse_code,
        description=payload.description,
        address=payload.address or {},
        manager_name=payload.manager_name,
        manager_email=payload.manager_email,
        manager_phone=payload.manager_phone,
        operating_hours=payload.operating_hours or {},
        timezone=payload.timezone or "UTC",
        total_capacity=payload.total_capacity,
        capacity_unit=payload.capacity_unit or "square_feet",
        is_active=payload.is_active,
    )
    db.add(warehouse)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.WAREHOUSE_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_WAREHOUSE,
        target_name=warehouse.name,
        target_code=warehouse.warehouse_code,
    )

    await db.commit()
    await db.refresh(warehouse)

    logger.info("Warehouse created", extra={"warehouse_id": str(warehouse.id)})
    return _map_warehouse(warehouse)


# =========================
# UPDATE
# =========================
async def update_warehouse(
    db: AsyncSession,
    warehouse_id: UUID,
    payload: WarehouseUpdate,
    auth: AuthContext,
) -> WarehouseOut:
    warehouse = await get_owned_warehouse(db, auth.tenant_id, warehouse_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    new_code = changes.get("warehouse_code")
    if new_code and new_code != warehouse.warehouse_code:
        await ensure_unique(
            db,
            Warehouse,
            Warehouse.tenant_id == auth.tenant_id,
            Warehouse.warehouse_code == new_code,
            exclude_id=warehouse.id,
            message=DUPLICATE_CODE,
            error_code=ErrorCode.WAREHOUSE_CODE_EXISTS,
        )

    before = {field: getattr(warehouse, field) for field in changes}
    for field, value in changes.items():
        setattr(warehouse, field, value)

    await flush_or_raise(db, message=DUPLICATE_CODE, error_code=ErrorCode.WAREHOUSE_CODE_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_WAREHOUSE,
        target_name=warehouse.name,
        target_code=warehouse.warehouse_code,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(warehouse)
    return _map_warehouse(warehouse)


# =========================
# DELETE
# =========================
async def delete_warehouse(db: AsyncSession, warehouse_id: UUID, auth: AuthContext) -> dict:
    warehouse = await get_owned_warehouse(db, auth.tenant_id, warehouse_id)

    await ensure_no_dependents(
        db,
        resource="warehouse",
        parent_id=warehouse.id,
        dependents=[
            (Door.warehouse_id, "doors"),
            (Zone.warehouse_id, "zones"),
            (Location.warehouse_id, "locations"),
        ],
        error_code=ErrorCode.WAREHOUSE_HAS_DEPENDENTS,
    )

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_WAREHOUSE,
        target_name=warehouse.name,
        target_code=warehouse.warehouse_code,
    )

    await db.delete(warehouse)
    await db.commit()

    logger.info("Warehouse deleted", extra={"warehouse_id": str(warehouse_id)})
    return {"id": warehouse_id}
