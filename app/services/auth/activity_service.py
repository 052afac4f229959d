# app/services/auth/activity_service.py

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.support.activity_models import UserActivity
from app.schemas.auth.activity_schemas import (
    UserActivityFilters,
    UserActivityOut,
    UserActivityPage,
)
from app.schemas.auth.auth_context import AuthContext
from app.utils.logger import get_logger

logger = get_logger(__name__)

SORT_FIELDS = {
    "created_at": UserActivity.created_at,
    "username": UserActivity.username_snapshot,
}


async def list_user_activities(
    *,
    db: AsyncSession,
    auth: AuthContext,
    filters: UserActivityFilters,
) -> UserActivityPage:
    # -------------------------
    # Tenant scope + filters
    # -------------------------
    conditions = [UserActivity.tenant_id == auth.tenant_id]

    if filters.user_id:
        conditions.append(UserActivity.user_id == filters.user_id)
    if filters.username:
        conditions.append(UserActivity.username_snapshot.ilike(f"%{filters.username}%"))
    if filters.code:
        conditions.append(UserActivity.code == filters.code.upper())

    # -------------------------
    # Sorting + pagination
    # -------------------------
    order_fn = desc if filters.sort_order == "desc" else asc
    offset = (filters.page - 1) * filters.page_size

    query = (
        select(UserActivity)
        .where(*conditions)
        .order_by(order_fn(SORT_FIELDS[filters.sort_by]), order_fn(UserActivity.id))
        .limit(filters.page_size)
        .offset(offset)
    )

    total = await db.scalar(select(func.count(UserActivity.id)).where(*conditions))
    activities = (await db.execute(query)).scalars().all()

    logger.info(
        "User activities fetched",
        extra={
            "total": total,
            "page": filters.page,
            "page_size": filters.page_size,
        },
    )

    return UserActivityPage(
        total=total or 0,
        page=filters.page,
        page_size=filters.page_size,
        items=[UserActivityOut.model_validate(a) for a in activities],
    )
