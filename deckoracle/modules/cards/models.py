"""
Модели SQLAlchemy для карточек.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deckoracle.core.database import Base
from deckoracle.shared.mixins import TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from deckoracle.modules.decks.models import Deck


class Card(UUIDMixin, TimestampMixin, Base):
    """
    Модель карточки.

    Attributes:
        id: Уникальный идентификатор (UUID7)
        deck_id: UUID колоды
        front: Вопрос
        back: Ответ
        position: Порядковый номер в колоде (с нуля)
        source_id: Идентификатор карточки в импортированном документе;
            повторный импорт того же документа не создает дубликатов
    """

    __tablename__ = "cards"

    deck_id: Mapped[UUID] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    front: Mapped[str] = mapped_column(Text, nullable=False)
    back: Mapped[str] = mapped_column(Text, nullable=False, default="")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    source_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    deck: Mapped[Deck] = relationship(back_populates="cards", lazy="raise")

    __table_args__ = (
        Index("ix_cards_deck_position", "deck_id", "position"),
        UniqueConstraint("deck_id", "source_id", name="uq_cards_deck_source"),
    )
