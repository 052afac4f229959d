from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Enum,
    ForeignKey,
    Uuid,
    CheckConstraint,
)
from app.core.db import Base
from app.models.base.mixins import UUIDPrimaryKeyMixin, TimestampMixin
from app.models.enums.record_status import RecordStatus


class Contact(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "contacts"

    customer_id = Column(
        Uuid, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    title = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    status = Column(
        Enum(RecordStatus, name="contact_status"), nullable=False, default=RecordStatus.active
    )
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("length(first_name) >= 1", name="ck_contacts_first_name_len"),
        CheckConstraint("length(last_name) >= 1", name="ck_contacts_last_name_len"),
    )

    def __repr__(self):
        return f"<Contact id={self.id} name={self.first_name} {self.last_name}>"
