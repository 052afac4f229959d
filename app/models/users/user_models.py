from sqlalchemy import (
    Column,
    String,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Uuid,
    CheckConstraint,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from app.models.enums.user_role import UserRole


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"

    tenant_id = Column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Supabase auth.users id; null until the account signs in for the first time
    supabase_user_id = Column(String(64), unique=True, nullable=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.operator)
    phone = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("length(first_name) >= 1", name="ck_users_first_name_len"),
        CheckConstraint("length(last_name) >= 1", name="ck_users_last_name_len"),
    )

    @property
    def username(self) -> str:
        return f"{self.first_name.lower()}.{self.last_name.lower()}"

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
