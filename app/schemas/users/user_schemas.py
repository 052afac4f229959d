# app/schemas/users/user_schemas.py

from datetime import datetime
from typing import ClassVar, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.enums.user_role import UserRole, DISPLAY_TO_ROLE
from app.schemas.common import PartialUpdate


def parse_role(value) -> UserRole:
    """Accept either a display role or an internal role name.

    Unrecognised values fall back to ``operator``.
    """
    if isinstance(value, UserRole):
        return value
    if value in DISPLAY_TO_ROLE:
        return DISPLAY_TO_ROLE[value]
    try:
        return UserRole(str(value).lower())
    except ValueError:
        return UserRole.operator


# =========================
# CREATE / UPDATE
# =========================
class UserCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    role: UserRole
    phone: Optional[str] = Field(None, max_length=50)
    status: Literal["active", "inactive"] = "active"
    is_active: bool = True

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        return parse_role(value)


class UserUpdate(PartialUpdate):
    non_nullable: ClassVar[tuple[str, ...]] = (
        "email",
        "first_name",
        "last_name",
        "role",
        "status",
        "is_active",
    )

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[UserRole] = None
    phone: Optional[str] = Field(None, max_length=50)
    status: Optional[Literal["active", "inactive"]] = None
    is_active: Optional[bool] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        return None if value is None else parse_role(value)


# =========================
# RESPONSE SCHEMAS
# =========================
class UserOut(BaseModel):
    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    user_type: Literal["system", "customer"]
    status: str
    is_active: bool
    phone: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserStats(BaseModel):
    totalUsers: int
    activeUsers: int
    inactiveUsers: int
    administrators: int
    systemUsers: int
    customerUsers: int
