"""SQLAlchemy model mixins for common columns."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from .uuid7 import UUID7, uuid7


class UUIDMixin:
    """Mixin providing a UUID7 primary key.

    Example:
        class Folder(UUIDMixin, Base):
            __tablename__ = "folders"
            name: Mapped[str] = mapped_column(String(255))
    """

    id: Mapped[uuid.UUID] = mapped_column(
        UUID7,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
