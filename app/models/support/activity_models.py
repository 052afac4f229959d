from sqlalchemy import Column, String, ForeignKey, Index, Uuid
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class UserActivity(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Immutable audit log. APPEND-ONLY. Never updated, never deleted."""

    __tablename__ = "user_activity"

    tenant_id = Column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    username_snapshot = Column(String(255), nullable=False, index=True)
    code = Column(String(50), nullable=False, index=True)
    message = Column(String, nullable=False)

    __table_args__ = (
        Index("ix_user_activity_tenant_created", "tenant_id", "created_at"),
    )

    def __repr__(self):
        return f"<UserActivity id={self.id} user={self.username_snapshot} code={self.code}>"
