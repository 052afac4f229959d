from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.error_codes import ErrorCode
from app.core.config import SUPABASE_JWT_SECRET
from app.core.db import get_db
from app.core.exceptions import AppException, IdentityProviderError
from app.core.identity import SupabaseAuthClient, get_identity_provider
from app.core.security import (
    decode_access_token,
    extract_bearer_token,
    identity_from_claims,
)
from app.models.users.user_models import User
from app.schemas.auth.auth_context import AuthContext
from app.utils.logger import get_logger

logger = get_logger("auth.guard")


async def _verify_token(token: str, identity: SupabaseAuthClient) -> dict:
    if SUPABASE_JWT_SECRET:
        return identity_from_claims(decode_access_token(token, secret=SUPABASE_JWT_SECRET))

    try:
        provider_user = await identity.get_user(token)
    except IdentityProviderError as exc:
        if exc.status_code is None:
            raise AppException(
                500,
                "Authentication failed",
                ErrorCode.IDENTITY_PROVIDER_ERROR,
            )
        logger.info("Provider rejected token", extra={"status": exc.status_code})
        raise AppException(401, "Invalid or expired token", ErrorCode.TOKEN_INVALID)

    if not provider_user or not provider_user.get("id"):
        raise AppException(401, "Invalid or expired token", ErrorCode.TOKEN_INVALID)

    return provider_user


def build_auth_context(user: User, provider_user: dict, token: str) -> AuthContext:
    return AuthContext(
        user_id=user.id,
        tenant_id=user.tenant_id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        provider_user_id=provider_user["id"],
        identity=provider_user,
        access_token=token,
    )


async def resolve_auth_context(
    token: str,
    db: AsyncSession,
    identity: SupabaseAuthClient,
) -> AuthContext:
    provider_user = await _verify_token(token, identity)

    user = await db.scalar(
        select(User).where(
            User.supabase_user_id == provider_user["id"],
            User.is_active.is_(True),
        )
    )
    if not user:
        logger.warning(
            "No active local user for provider identity",
            extra={"provider_user_id": provider_user["id"]},
        )
        raise AppException(401, "User not found or inactive", ErrorCode.USER_INACTIVE)

    return build_auth_context(user, provider_user, token)


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    identity: SupabaseAuthClient = Depends(get_identity_provider),
) -> AuthContext:
    token = extract_bearer_token(authorization)
    if not token:
        logger.warning("Missing bearer token", extra={"path": request.url.path})
        raise AppException(401, "No token provided", ErrorCode.TOKEN_MISSING)

    auth = await resolve_auth_context(token, db, identity)
    request.state.user = auth
    return auth


async def get_optional_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    identity: SupabaseAuthClient = Depends(get_identity_provider),
) -> Optional[AuthContext]:
    token = extract_bearer_token(authorization)
    if not token:
        return None

    try:
        auth = await resolve_auth_context(token, db, identity)
    except AppException:
        return None

    request.state.user = auth
    return auth
