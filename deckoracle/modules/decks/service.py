"""
Сервис управления колодами.

Основные компоненты:
    - DeckService: создание колод и чтение с проверкой владельца
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from deckoracle.core.exceptions import DuplicateDeckError

from .models import Deck
from .schemas import DeckCreate

logger = logging.getLogger(__name__)

# Имена, по которым нарушение уникальности (owner_id, title) узнается
# в сообщениях PostgreSQL и SQLite
_TITLE_CONSTRAINT_MARKERS = ("uq_decks_owner_title", "decks.owner_id, decks.title")


def is_duplicate_title_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return any(marker in message for marker in _TITLE_CONSTRAINT_MARKERS)


class DeckService:
    """
    Сервис управления колодами.

    Example:
        async with db_manager.session_factory() as session, session.begin():
            service = DeckService(session)
            deck = await service.create(user_id, DeckCreate(title="Spanish"))
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, owner_id: UUID, data: DeckCreate) -> Deck:
        """
        Создать новую колоду.

        Колода попадает в текущую транзакцию и видна другим только
        после ее фиксации.

        Args:
            owner_id: UUID пользователя-владельца
            data: Данные для создания колоды

        Returns:
            Созданный экземпляр Deck

        Raises:
            DuplicateDeckError: У пользователя уже есть колода с таким названием
        """
        deck = Deck(
            title=data.title,
            description=data.description,
            owner_id=owner_id,
            folder_id=data.folder_id,
            is_public=data.is_public,
        )
        self._session.add(deck)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_duplicate_title_violation(e):
                raise DuplicateDeckError(
                    f"Deck '{data.title}' already exists",
                    details={"field": "title", "value": data.title},
                ) from e
            raise

        await self._session.refresh(deck)

        logger.info(
            "Created deck %s for user %s",
            deck.id,
            owner_id,
            extra={"deck_id": str(deck.id), "owner_id": str(owner_id)},
        )
        return deck

    async def get_by_id_for_user(self, deck_id: UUID, user_id: UUID) -> Deck | None:
        """
        Получить колоду по ID с проверкой владельца.

        Returns:
            Экземпляр Deck если найден и принадлежит пользователю, None в противном случае
        """
        stmt = select(Deck).where(Deck.id == deck_id, Deck.owner_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_title(self, owner_id: UUID, title: str) -> Deck | None:
        """Получить колоду пользователя по точному названию."""
        stmt = select(Deck).where(Deck.owner_id == owner_id, Deck.title == title)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_ids_for_user(
        self,
        deck_ids: Sequence[UUID],
        user_id: UUID,
    ) -> list[Deck]:
        """
        Получить колоды пользователя в порядке переданных ID.

        Отсутствующие и чужие колоды пропускаются; вызывающий код
        сравнивает длины, если нужна полнота.
        """
        if not deck_ids:
            return []
        stmt = select(Deck).where(Deck.id.in_(deck_ids), Deck.owner_id == user_id)
        result = await self._session.execute(stmt)
        by_id = {deck.id: deck for deck in result.scalars()}
        return [by_id[deck_id] for deck_id in deck_ids if deck_id in by_id]
