from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.users.user_schemas import UserCreate, UserUpdate, UserOut, UserStats
from app.services.users.user_services import (
    list_users,
    get_user_stats,
    get_user,
    create_user,
    update_user,
    delete_user,
)
from app.utils.check_roles import require_role, ADMIN_ONLY
from app.utils.get_user import get_current_user
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/users", tags=["Users"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[list[UserOut]])
async def list_users_api(
    user_type: Optional[Literal["system", "customer"]] = Query(None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    logger.info("List users request", extra={"user_type": user_type})
    users = await list_users(db, user, user_type=user_type)
    return success_response("Users retrieved successfully", users)


@router.get("/stats", response_model=APIResponse[UserStats])
async def user_stats_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    stats = await get_user_stats(db, user)
    return success_response("User statistics retrieved successfully", stats)


@router.get("/{user_id}", response_model=APIResponse[UserOut])
async def get_user_api(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    found = await get_user(db, user, user_id)
    return success_response("User retrieved successfully", found)


@router.post("", response_model=APIResponse[UserOut], status_code=201)
async def create_user_api(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Create user request", extra={"email": payload.email})
    created = await create_user(db, payload, admin)
    return success_response("User created successfully", created)


@router.put("/{user_id}", response_model=APIResponse[UserOut])
async def update_user_api(
    user_id: UUID,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Update user request", extra={"user_id": str(user_id)})
    updated = await update_user(db, user_id, payload, admin)
    return success_response("User updated successfully", updated)


@router.delete("/{user_id}", response_model=APIResponse[dict])
async def delete_user_api(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Delete user request", extra={"user_id": str(user_id)})
    data = await delete_user(db, user_id, admin)
    return success_response("User deleted successfully", data)
