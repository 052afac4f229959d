from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.identity import SupabaseAuthClient, get_identity_provider
from app.schemas.auth.auth_context import AuthContext
from app.schemas.auth.auth_schemas import (
    AuthPayload,
    LoginRequest,
    MeOut,
    OAuthCallbackRequest,
    OAuthStartRequest,
    OAuthUrlOut,
    ProfileOut,
    RefreshRequest,
    SignupRequest,
)
from app.services.auth import auth_service
from app.utils.get_user import get_current_user
from app.utils.logger import get_logger
from app.utils.response import APIResponse, success_response

logger = get_logger("auth.router")

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=APIResponse[AuthPayload], status_code=201)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db),
    identity: SupabaseAuthClient = Depends(get_identity_provider),
):
    logger.info("Signup attempt", extra={"email": payload.email})
    result = await auth_service.signup(db, identity, payload)
    return success_response(
        "User created successfully. Please check your email for verification.",
        result,
    )


@router.post("/login", response_model=APIResponse[AuthPayload])
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    identity: SupabaseAuthClient = Depends(get_identity_provider),
):
    logger.info("Login attempt", extra={"email": payload.email})
    result = await auth_service.login(db, identity, payload.email, payload.password)
    return success_response("Login successful", result)


@router.post("/logout", response_model=APIResponse)
async def logout(
    db: AsyncSession = Depends(get_db),
    identity: SupabaseAuthClient = Depends(get_identity_provider),
    current_user: AuthContext = Depends(get_current_user),
):
    logger.info(
        "Logout request",
        extra={"user_id": str(current_user.user_id), "email": current_user.email},
    )
    await auth_service.logout(db, identity, current_user)
    return success_response("Logout successful")


@router.get("/me", response_model=APIResponse[MeOut])
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    data = await auth_service.me(db, current_user)
    return success_response("User retrieved successfully", data)


@router.get("/profile", response_model=APIResponse[ProfileOut])
async def profile(current_user: AuthContext = Depends(get_current_user)):
    return success_response("Profile retrieved successfully", auth_service.profile(current_user))


# declared before /oauth/{provider} so "callback" is not taken as a provider name
@router.post("/oauth/callback", response_model=APIResponse[AuthPayload])
async def oauth_callback(
    payload: OAuthCallbackRequest,
    db: AsyncSession = Depends(get_db),
    identity: SupabaseAuthClient = Depends(get_identity_provider),
):
    logger.info("OAuth callback", extra={"provider": payload.provider})
    result = await auth_service.oauth_callback(db, identity, payload)
    return success_response("OAuth authentication successful", result)


@router.post("/oauth/{provider}", response_model=APIResponse[OAuthUrlOut])
async def oauth_start(
    provider: str,
    payload: OAuthStartRequest | None = None,
    identity: SupabaseAuthClient = Depends(get_identity_provider),
):
    redirect_to = payload.redirect_to if payload else None
    logger.info("OAuth initiation", extra={"provider": provider})
    data = auth_service.oauth_url(identity, provider, redirect_to)
    return success_response("OAuth URL generated successfully", data)


@router.post("/refresh", response_model=APIResponse[AuthPayload])
async def refresh(
    payload: RefreshRequest,
    identity: SupabaseAuthClient = Depends(get_identity_provider),
):
    logger.info("Token refresh attempt")
    result = await auth_service.refresh(identity, payload.refresh_token)
    return success_response("Token refreshed successfully", result)
