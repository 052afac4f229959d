from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Numeric,
    JSON,
    ForeignKey,
    Uuid,
    UniqueConstraint,
    CheckConstraint,
    Index,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Customer(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "customers"

    tenant_id = Column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_code = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False, index=True)

    contact_name = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)

    billing_address = Column(JSON, nullable=False, default=dict)
    shipping_address = Column(JSON, nullable=False, default=dict)

    payment_terms = Column(String(100), nullable=True)
    credit_limit = Column(Numeric(15, 2), nullable=True)
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "customer_code", name="uq_customers_tenant_code"),
        CheckConstraint("length(customer_code) >= 2", name="ck_customers_code_len"),
        CheckConstraint("length(name) >= 2", name="ck_customers_name_len"),
        CheckConstraint(
            "credit_limit IS NULL OR credit_limit >= 0",
            name="ck_customers_credit_limit",
        ),
        Index("ix_customers_tenant_active", "tenant_id", "is_active"),
    )

    def __repr__(self):
        return f"<Customer id={self.id} code={self.customer_code} name={self.name}>"
