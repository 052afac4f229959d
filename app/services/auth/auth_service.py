# app/services/auth/auth_service.py
"""Identity provider proxy.

Credentials and sessions live with the provider. This module only keeps the
local ``users`` row in step with the provider identity so requests can be
resolved to a tenant.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants.activity_codes import ActivityCode
from app.constants.error_codes import ErrorCode
from app.core.config import DEFAULT_TENANT_SLUG, FRONTEND_URL
from app.core.exceptions import AppException, IdentityProviderError
from app.core.identity import OAUTH_PROVIDERS, SupabaseAuthClient
from app.models.enums.user_role import UserRole
from app.models.tenancy.tenant_models import Tenant
from app.models.users.user_models import User
from app.schemas.auth.auth_context import AuthContext
from app.schemas.auth.auth_schemas import (
    AuthPayload,
    MeOut,
    OAuthCallbackRequest,
    OAuthUrlOut,
    ProfileOut,
    SessionOut,
    SignupRequest,
    TenantSummary,
)
from app.services.users.user_services import map_user
from app.utils.activity_helpers import emit_activity
from app.utils.get_user import build_auth_context
from app.utils.logger import get_logger

logger = get_logger("auth.service")


# =====================================================
# HELPERS
# =====================================================
def _provider_failure(exc: IdentityProviderError, status_code: int, error_code: ErrorCode):
    if exc.status_code is None:
        return AppException(500, "Identity provider unavailable", ErrorCode.IDENTITY_PROVIDER_ERROR)
    return AppException(status_code, exc.message, error_code)


def _auth_payload(data: dict) -> AuthPayload:
    """Normalise a provider token/signup response into ``{user, session}``."""
    session = None
    if data.get("access_token"):
        session = SessionOut(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type") or "bearer",
            expires_in=data.get("expires_in"),
            expires_at=data.get("expires_at"),
        )
    user = data.get("user")
    if user is None and data.get("id"):
        # signup without auto-confirm returns the bare user
        user = data
    return AuthPayload(user=user, session=session)


def _names_from_identity(provider_user: dict) -> tuple[str, str]:
    meta = provider_user.get("user_metadata") or {}
    first = meta.get("first_name")
    last = meta.get("last_name")
    if first and last:
        return first, last

    full_name = (meta.get("full_name") or meta.get("name") or "").strip()
    if full_name:
        parts = full_name.split(" ", 1)
        return parts[0], parts[1] if len(parts) > 1 else parts[0]

    local_part = (provider_user.get("email") or "user").split("@")[0]
    return local_part, local_part


async def _default_tenant(db: AsyncSession) -> Tenant:
    tenant = await db.scalar(select(Tenant).where(Tenant.slug == DEFAULT_TENANT_SLUG))
    if not tenant:
        logger.error("Default tenant missing", extra={"slug": DEFAULT_TENANT_SLUG})
        raise AppException(
            500,
            f'Default tenant not found. Create a tenant with slug "{DEFAULT_TENANT_SLUG}"',
            ErrorCode.DEFAULT_TENANT_MISSING,
        )
    return tenant


async def _user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    return await db.scalar(select(User).where(func.lower(User.email) == email.lower()))


async def _link_local_user(
    db: AsyncSession,
    provider_user: dict,
    provider: str,
    *,
    provision: bool = True,
) -> tuple[User, bool]:
    """Find the local user for a provider identity, linking by email if needed.

    Returns the user and whether a link was made. With ``provision`` an
    unknown identity gets an operator account in the default tenant.
    """
    user = await db.scalar(select(User).where(User.supabase_user_id == provider_user["id"]))
    if user:
        return user, False

    email = provider_user.get("email")
    user = await _user_by_email(db, email) if email else None
    if user and user.supabase_user_id is None:
        user.supabase_user_id = provider_user["id"]
        logger.info(
            "Linked provider identity to local user",
            extra={"user_id": str(user.id), "provider": provider},
        )
        return user, True

    if user:
        # email already bound to a different provider identity
        raise AppException(400, "User with this email already exists", ErrorCode.USER_EMAIL_EXISTS)

    if not provision:
        logger.warning(
            "No local user for provider identity",
            extra={"provider_user_id": provider_user["id"]},
        )
        raise AppException(401, "User not found or inactive", ErrorCode.USER_INACTIVE)

    if not email:
        raise AppException(401, "Provider identity has no email", ErrorCode.INVALID_CREDENTIALS)

    tenant = await _default_tenant(db)
    first_name, last_name = _names_from_identity(provider_user)
    user = User(
        tenant_id=tenant.id,
        supabase_user_id=provider_user["id"],
        email=email.lower(),
        first_name=first_name,
        last_name=last_name,
        role=UserRole.operator,
    )
    db.add(user)
    await db.flush()
    logger.info(
        "Provisioned local user for provider identity",
        extra={"user_id": str(user.id), "provider": provider},
    )
    return user, True


async def _record_login(
    db: AsyncSession,
    user: User,
    provider_user: dict,
    access_token: str,
):
    if not user.is_active:
        logger.warning("Inactive user login blocked", extra={"user_id": str(user.id)})
        raise AppException(401, "User not found or inactive", ErrorCode.USER_INACTIVE)

    user.last_login_at = datetime.now(timezone.utc)
    await emit_activity(
        db,
        actor=build_auth_context(user, provider_user, access_token),
        code=ActivityCode.LOGIN,
    )


# =====================================================
# SIGNUP
# =====================================================
async def signup(
    db: AsyncSession,
    identity: SupabaseAuthClient,
    payload: SignupRequest,
) -> AuthPayload:
    existing = await _user_by_email(db, payload.email)
    if existing and existing.supabase_user_id:
        raise AppException(400, "User with this email already exists", ErrorCode.USER_EMAIL_EXISTS)

    tenant = await _default_tenant(db)

    try:
        data = await identity.sign_up(
            payload.email,
            payload.password,
            {
                "first_name": payload.first_name,
                "last_name": payload.last_name,
                "full_name": f"{payload.first_name} {payload.last_name}",
            },
        )
    except IdentityProviderError as exc:
        raise _provider_failure(exc, 400, ErrorCode.IDENTITY_PROVIDER_ERROR)

    result = _auth_payload(data)
    if not result.user or not result.user.get("id"):
        raise AppException(500, "Identity provider returned no user", ErrorCode.IDENTITY_PROVIDER_ERROR)

    if existing:
        existing.supabase_user_id = result.user["id"]
        user = existing
        tenant = await db.get(Tenant, user.tenant_id)
    else:
        user = User(
            tenant_id=tenant.id,
            supabase_user_id=result.user["id"],
            email=payload.email.lower(),
            first_name=payload.first_name,
            last_name=payload.last_name,
            role=UserRole.operator,
        )
        db.add(user)

    await db.flush()

    await emit_activity(
        db,
        actor=build_auth_context(user, result.user, ""),
        code=ActivityCode.SIGNUP,
        tenant_name=tenant.name,
    )
    await db.commit()

    logger.info("Signup completed", extra={"user_id": str(user.id)})
    return result


# =====================================================
# LOGIN
# =====================================================
async def login(
    db: AsyncSession,
    identity: SupabaseAuthClient,
    email: str,
    password: str,
) -> AuthPayload:
    logger.info("Authenticating user", extra={"email": email})

    try:
        data = await identity.sign_in_with_password(email, password)
    except IdentityProviderError as exc:
        logger.warning("Invalid credentials", extra={"email": email})
        raise _provider_failure(exc, 401, ErrorCode.INVALID_CREDENTIALS)

    result = _auth_payload(data)
    provider_user = result.user or {}
    if not provider_user.get("id") or result.session is None:
        raise AppException(401, "Invalid login credentials", ErrorCode.INVALID_CREDENTIALS)

    user, linked = await _link_local_user(db, provider_user, "email", provision=False)
    await _record_login(db, user, provider_user, result.session.access_token)
    await db.commit()

    logger.info("Login successful", extra={"user_id": str(user.id), "linked": linked})
    return result


# =====================================================
# LOGOUT
# =====================================================
async def logout(db: AsyncSession, identity: SupabaseAuthClient, auth: AuthContext):
    try:
        await identity.sign_out(auth.access_token)
    except IdentityProviderError as exc:
        raise _provider_failure(exc, 400, ErrorCode.IDENTITY_PROVIDER_ERROR)

    await emit_activity(db, actor=auth, code=ActivityCode.LOGOUT)
    await db.commit()

    logger.info("Logout successful", extra={"user_id": str(auth.user_id)})


# =====================================================
# CURRENT USER
# =====================================================
async def me(db: AsyncSession, auth: AuthContext) -> MeOut:
    user = await db.get(User, auth.user_id)
    tenant = await db.get(Tenant, auth.tenant_id)
    return MeOut(
        user=auth.identity,
        local_user=map_user(user),
        tenant=TenantSummary(id=tenant.id, name=tenant.name, slug=tenant.slug),
    )


def profile(auth: AuthContext) -> ProfileOut:
    user_meta = auth.identity.get("user_metadata") or {}
    app_meta = auth.identity.get("app_metadata") or {}
    return ProfileOut(
        id=auth.provider_user_id,
        email=auth.identity.get("email") or auth.email,
        full_name=user_meta.get("full_name"),
        avatar_url=user_meta.get("avatar_url"),
        provider=app_meta.get("provider") or "email",
        created_at=auth.identity.get("created_at"),
        updated_at=auth.identity.get("updated_at"),
    )


# =====================================================
# OAUTH
# =====================================================
def _check_provider(provider: str):
    if provider not in OAUTH_PROVIDERS:
        supported = ", ".join(sorted(OAUTH_PROVIDERS))
        raise AppException(
            400,
            f"Invalid OAuth provider. Supported providers: {supported}",
            ErrorCode.UNSUPPORTED_PROVIDER,
        )


def oauth_url(
    identity: SupabaseAuthClient,
    provider: str,
    redirect_to: Optional[str] = None,
) -> OAuthUrlOut:
    _check_provider(provider)
    result = identity.oauth_url(provider, redirect_to or f"{FRONTEND_URL}/auth/callback")
    return OAuthUrlOut(**result)


async def oauth_callback(
    db: AsyncSession,
    identity: SupabaseAuthClient,
    payload: OAuthCallbackRequest,
) -> AuthPayload:
    _check_provider(payload.provider)

    try:
        data = await identity.exchange_code_for_session(payload.code, payload.code_verifier)
    except IdentityProviderError as exc:
        raise _provider_failure(exc, 401, ErrorCode.INVALID_CREDENTIALS)

    result = _auth_payload(data)
    provider_user = result.user or {}
    if not provider_user.get("id") or result.session is None:
        raise AppException(401, "OAuth authentication failed", ErrorCode.INVALID_CREDENTIALS)

    user, linked = await _link_local_user(db, provider_user, payload.provider)
    token = result.session.access_token

    if linked:
        await emit_activity(
            db,
            actor=build_auth_context(user, provider_user, token),
            code=ActivityCode.LINK_IDENTITY,
            provider=payload.provider,
        )
    await _record_login(db, user, provider_user, token)
    await db.commit()

    return result


# =====================================================
# REFRESH
# =====================================================
async def refresh(identity: SupabaseAuthClient, refresh_token: str) -> AuthPayload:
    logger.info("Refreshing token")
    try:
        data = await identity.refresh_session(refresh_token)
    except IdentityProviderError as exc:
        logger.warning("Refresh rejected by provider")
        raise _provider_failure(exc, 401, ErrorCode.TOKEN_INVALID)

    return _auth_payload(data)
