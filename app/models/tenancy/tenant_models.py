from sqlalchemy import Column, String, Boolean, JSON, CheckConstraint
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Tenant(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Root scoping entity. Every other row resolves to exactly one tenant."""

    __tablename__ = "tenants"

    name = Column(String(255), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    address = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("length(name) >= 2", name="ck_tenants_name_len"),
        CheckConstraint("length(slug) >= 2", name="ck_tenants_slug_len"),
    )

    def __repr__(self):
        return f"<Tenant id={self.id} slug={self.slug}>"
