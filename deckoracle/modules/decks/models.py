"""
Модели SQLAlchemy для колод.

Основные компоненты:
    - Deck: колода пользователя
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deckoracle.core.database import Base
from deckoracle.shared.mixins import TimestampMixin, UUIDMixin
from deckoracle.shared.uuid7 import UUID7

if TYPE_CHECKING:
    from deckoracle.modules.cards.models import Card


class Deck(UUIDMixin, TimestampMixin, Base):
    """
    Модель колоды.

    Название колоды уникально в пределах владельца: импорт опирается
    на это ограничение, чтобы обнаруживать дубликаты даже при
    параллельных запросах.

    Attributes:
        id: Уникальный идентификатор (UUID7)
        owner_id: UUID владельца (пользователи живут в сервисе аутентификации)
        folder_id: UUID папки (опционально)
        title: Название колоды
        description: Описание колоды (опционально)
        is_public: Видна ли колода другим пользователям
        cards: Карточки колоды
    """

    __tablename__ = "decks"

    owner_id: Mapped[UUID] = mapped_column(UUID7, nullable=False, index=True)
    folder_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    cards: Mapped[list[Card]] = relationship(
        back_populates="deck",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (UniqueConstraint("owner_id", "title", name="uq_decks_owner_title"),)
