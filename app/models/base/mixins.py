import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.sql import func


class UUIDPrimaryKeyMixin:
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
