# app/services/users/user_services.py

from typing import Literal, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.enums.user_role import (
    UserRole,
    ROLE_DISPLAY,
    CUSTOMER_DISPLAY_ROLES,
    SYSTEM_ROLES,
    CUSTOMER_ROLES,
)
from app.models.users.user_models import User
from app.schemas.auth.auth_context import AuthContext
from app.schemas.common import status_from_flag
from app.schemas.users.user_schemas import UserCreate, UserUpdate, UserOut, UserStats
from app.services.common.scoping import (
    owned_users,
    fetch_owned,
    ensure_unique,
    flush_or_raise,
    no_changes,
)
from app.utils.activity_helpers import emit_activity, describe_changes
from app.utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_EMAIL = "User with this email already exists"


def map_user(user: User) -> UserOut:
    display_role = ROLE_DISPLAY.get(user.role, ROLE_DISPLAY[UserRole.operator])
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=display_role,
        user_type="customer" if display_role in CUSTOMER_DISPLAY_ROLES else "system",
        status=status_from_flag(user.is_active),
        is_active=user.is_active,
        phone=user.phone,
        last_login=user.last_login_at,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


async def _get_owned_user(db: AsyncSession, auth: AuthContext, user_id: UUID) -> User:
    return await fetch_owned(
        db,
        owned_users(auth.tenant_id).where(User.id == user_id),
        message="User not found",
        error_code=ErrorCode.USER_NOT_FOUND,
    )


# =========================
# LIST USERS
# =========================
async def list_users(
    db: AsyncSession,
    auth: AuthContext,
    *,
    user_type: Optional[Literal["system", "customer"]] = None,
) -> list[UserOut]:
    query = owned_users(auth.tenant_id)

    if user_type == "system":
        query = query.where(User.role.in_(SYSTEM_ROLES))
    elif user_type == "customer":
        query = query.where(User.role.in_(CUSTOMER_ROLES))

    result = await db.execute(query.order_by(User.created_at.desc()))
    return [map_user(u) for u in result.scalars().all()]


# =========================
# STATS
# =========================
async def get_user_stats(db: AsyncSession, auth: AuthContext) -> UserStats:
    count = func.count(User.id)
    row = (
        await db.execute(
            select(
                count,
                count.filter(User.is_active.is_(True)),
                count.filter(User.is_active.is_(False)),
                count.filter(User.role == UserRole.admin),
                count.filter(User.role.in_(SYSTEM_ROLES)),
                count.filter(User.role.in_(CUSTOMER_ROLES)),
            ).where(User.tenant_id == auth.tenant_id)
        )
    ).one()

    return UserStats(
        totalUsers=row[0],
        activeUsers=row[1],
        inactiveUsers=row[2],
        administrators=row[3],
        systemUsers=row[4],
        customerUsers=row[5],
    )


async def get_user(db: AsyncSession, auth: AuthContext, user_id: UUID) -> UserOut:
    return map_user(await _get_owned_user(db, auth, user_id))


# =========================
# CREATE USER
# =========================
async def create_user(db: AsyncSession, payload: UserCreate, auth: AuthContext) -> UserOut:
    # email is unique across tenants since it links to the identity provider
    await ensure_unique(
        db,
        User,
        func.lower(User.email) == payload.email.lower(),
        message=DUPLICATE_EMAIL,
        error_code=ErrorCode.USER_EMAIL_EXISTS,
    )

    user = User(
        tenant_id=auth.tenant_id,
        email=payload.email.lower(),
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
        phone=payload.phone,
        is_active=payload.is_active if payload.status == "active" else False,
    )
    db.add(user)

    await flush_or_raise(db, message=DUPLICATE_EMAIL, error_code=ErrorCode.USER_EMAIL_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.CREATE_USER,
        target_email=user.email,
        target_role=user.role.value.capitalize(),
    )

    await db.commit()
    await db.refresh(user)

    logger.info("User created", extra={"user_id": str(user.id)})
    return map_user(user)


# =========================
# UPDATE USER
# =========================
async def update_user(
    db: AsyncSession,
    user_id: UUID,
    payload: UserUpdate,
    auth: AuthContext,
) -> UserOut:
    user = await _get_owned_user(db, auth, user_id)

    changes = payload.changes()
    if not changes:
        raise no_changes()

    status = changes.pop("status", None)
    if status is not None and "is_active" not in changes:
        changes["is_active"] = status == "active"

    if "email" in changes:
        changes["email"] = changes["email"].lower()
        if changes["email"] != user.email:
            await ensure_unique(
                db,
                User,
                func.lower(User.email) == changes["email"],
                exclude_id=user.id,
                message=DUPLICATE_EMAIL,
                error_code=ErrorCode.USER_EMAIL_EXISTS,
            )

    before = {field: getattr(user, field) for field in changes}
    for field, value in changes.items():
        setattr(user, field, value)

    await flush_or_raise(db, message=DUPLICATE_EMAIL, error_code=ErrorCode.USER_EMAIL_EXISTS)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.UPDATE_USER,
        target_email=user.email,
        changes=describe_changes(before, changes),
    )

    await db.commit()
    await db.refresh(user)
    return map_user(user)


# =========================
# DELETE USER
# =========================
async def delete_user(db: AsyncSession, user_id: UUID, auth: AuthContext) -> dict:
    if user_id == auth.user_id:
        raise AppException(
            400,
            "You cannot delete your own account",
            ErrorCode.CANNOT_DELETE_SELF,
        )

    user = await _get_owned_user(db, auth, user_id)

    await emit_activity(
        db,
        actor=auth,
        code=ActivityCode.DELETE_USER,
        target_email=user.email,
    )

    await db.delete(user)
    await db.commit()

    logger.info("User deleted", extra={"user_id": str(user_id)})
    return {"id": user_id}
