"""
Сервис карточек.

Основные компоненты:
    - CardService: упорядоченное чтение карточек и вставка с позициями
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Card

logger = logging.getLogger(__name__)


class CardService:
    """
    Сервис карточек колоды.

    Позиции внутри колоды плотные и начинаются с нуля; новые карточки
    всегда добавляются в конец.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_deck(self, deck_id: UUID) -> list[Card]:
        """
        Получить карточки колоды в порядке позиций.

        Совпадающие позиции упорядочиваются по порядку вставки.
        """
        stmt = (
            select(Card)
            .where(Card.deck_id == deck_id)
            .order_by(Card.position, Card.created_at, Card.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def next_position(self, deck_id: UUID) -> int:
        """Позиция для следующей карточки: max + 1, или 0 для пустой колоды."""
        stmt = select(func.max(Card.position)).where(Card.deck_id == deck_id)
        result = await self._session.execute(stmt)
        current_max = result.scalar_one_or_none()
        return 0 if current_max is None else current_max + 1

    async def existing_hints(self, deck_id: UUID, hints: Iterable[str]) -> set[str]:
        """
        Вернуть те идентификаторы из ``hints``, которые уже есть в колоде.

        Идентификатор совпадает, если он равен ``source_id`` карточки или
        строковому виду ее собственного ``id``.
        """
        wanted = {hint for hint in hints if hint}
        if not wanted:
            return set()

        card_ids = []
        for hint in wanted:
            try:
                card_ids.append(UUID(hint))
            except ValueError:
                continue

        conditions = [Card.source_id.in_(sorted(wanted))]
        if card_ids:
            conditions.append(Card.id.in_(card_ids))

        stmt = select(Card.id, Card.source_id).where(Card.deck_id == deck_id, or_(*conditions))
        result = await self._session.execute(stmt)

        found: set[str] = set()
        for card_id, source_id in result.all():
            if source_id in wanted:
                found.add(source_id)
            for hint in wanted:
                if hint not in found and _same_uuid(hint, card_id):
                    found.add(hint)
        return found

    async def add(
        self,
        deck_id: UUID,
        front: str,
        back: str,
        position: int,
        *,
        source_id: str | None = None,
    ) -> Card:
        """Добавить карточку в текущую транзакцию."""
        card = Card(
            deck_id=deck_id,
            front=front,
            back=back,
            position=position,
            source_id=source_id,
        )
        self._session.add(card)
        await self._session.flush()
        return card


def _same_uuid(hint: str, card_id: UUID) -> bool:
    try:
        return UUID(hint) == card_id
    except ValueError:
        return False
