"""
Common mixins for persisted models
"""
from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.sql import func
from datetime import datetime, timezone
from uuid import uuid4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdentityMixin:
    """Opaque identity assigned by the backend on insert"""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, index=True)


class TimestampMixin:
    """Mixin for models that need timestamp tracking"""

    # Python-side default keeps sub-second ordering ("most recent first" listings)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)


class BaseMixin(IdentityMixin, TimestampMixin):
    """Identity + timestamps, used by every business table"""
