# app/routers/auth/activity_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.auth.activity_schemas import UserActivityFilters, UserActivityPage
from app.services.auth.activity_service import list_user_activities
from app.utils.check_roles import require_role, AUDIT_ROLES
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/activities", tags=["User Activities"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[UserActivityPage])
async def list_user_activities_api(
    filters: UserActivityFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(AUDIT_ROLES)),
):
    logger.info(
        "List user activities requested",
        extra=filters.model_dump(mode="json", exclude_none=True),
    )

    result = await list_user_activities(db=db, auth=user, filters=filters)

    return success_response(
        "User activities fetched successfully",
        result,
    )
