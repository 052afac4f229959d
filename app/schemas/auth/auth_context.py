# app/schemas/auth/auth_context.py

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums.user_role import UserRole


class AuthContext(BaseModel):
    """Resolved caller identity attached to every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    tenant_id: UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    provider_user_id: str
    identity: dict[str, Any] = Field(default_factory=dict)
    access_token: str = Field(repr=False)

    @property
    def username(self) -> str:
        return f"{self.first_name.lower()}.{self.last_name.lower()}"

    @property
    def actor(self) -> dict:
        """Activity template context for the acting user."""
        return {
            "actor_role": self.role.value.capitalize(),
            "actor_email": self.email,
        }
