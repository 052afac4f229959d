# app/schemas/auth/auth_schemas.py

from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from app.schemas.users.user_schemas import UserOut

OAuthProvider = Literal["google", "azure"]


# =========================
# REQUESTS
# =========================
class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class OAuthStartRequest(BaseModel):
    redirect_to: Optional[str] = None


class OAuthCallbackRequest(BaseModel):
    code: str = Field(min_length=1)
    provider: OAuthProvider
    code_verifier: str = Field(min_length=1)


# =========================
# RESPONSES
# =========================
class SessionOut(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    expires_at: Optional[int] = None


class AuthPayload(BaseModel):
    """Provider user and session as returned by the identity provider."""

    user: Optional[dict[str, Any]] = None
    session: Optional[SessionOut] = None


class OAuthUrlOut(BaseModel):
    url: str
    code_verifier: str


class TenantSummary(BaseModel):
    id: UUID
    name: str
    slug: str


class MeOut(BaseModel):
    user: dict[str, Any]
    local_user: UserOut
    tenant: TenantSummary


class ProfileOut(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    provider: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
