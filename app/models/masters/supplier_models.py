from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Enum,
    ForeignKey,
    Uuid,
    UniqueConstraint,
    CheckConstraint,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from app.models.enums.record_status import RecordStatus


class Supplier(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "suppliers"

    tenant_id = Column(
        Uuid, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    customer_id = Column(
        Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    contact_person = Column(String(255), nullable=True)
    payment_terms = Column(String(100), nullable=True)
    status = Column(
        Enum(RecordStatus, name="supplier_status"), nullable=False, default=RecordStatus.active
    )
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "customer_id", "email", name="uq_suppliers_tenant_customer_email"
        ),
        CheckConstraint("length(name) >= 2", name="ck_suppliers_name_len"),
    )

    def __repr__(self):
        return f"<Supplier id={self.id} name={self.name} email={self.email}>"
