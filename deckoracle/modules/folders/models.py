"""
Модели SQLAlchemy для папок.

Папки группируют колоды пользователя. CRUD папок живет вне этого
сервиса; здесь модель нужна для проверки целевой папки при импорте.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from deckoracle.core.database import Base
from deckoracle.shared.mixins import TimestampMixin, UUIDMixin
from deckoracle.shared.uuid7 import UUID7


class Folder(UUIDMixin, TimestampMixin, Base):
    """
    Папка с колодами.

    Attributes:
        id: Уникальный идентификатор (UUID7)
        owner_id: UUID владельца
        name: Название папки
        parent_folder_id: Родительская папка (опционально)
        position: Порядок среди соседних папок
    """

    __tablename__ = "folders"

    owner_id: Mapped[UUID] = mapped_column(UUID7, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_folder_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=True,
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
