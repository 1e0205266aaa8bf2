"""Deck export: stored decks into encoded payloads."""

import logging
from collections.abc import Mapping, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from deckoracle.core.exceptions import DeckNotFoundError, InvalidInputError
from deckoracle.modules.cards.models import Card
from deckoracle.modules.cards.service import CardService
from deckoracle.modules.decks.models import Deck
from deckoracle.modules.decks.service import DeckService
from deckoracle.shared.logging import log_export_completed

from .codecs import Codec, get_codec
from .progress import NullProgressSource, ProgressSource
from .schemas import CardProgressData, ExportPayload, TransferFormat

logger = logging.getLogger(__name__)

BULK_EXPORT_STEM = "decks_export"


class DeckExporter:
    """Serialize a user's decks with a format codec.

    Cards are exported in position order. Progress, when requested, is
    joined by card id; media is never attached.
    """

    def __init__(
        self,
        session: AsyncSession,
        progress_source: ProgressSource | None = None,
    ) -> None:
        self._decks = DeckService(session)
        self._cards = CardService(session)
        self._progress = progress_source or NullProgressSource()

    async def export_deck(
        self,
        user_id: UUID,
        deck_id: UUID,
        format: str | TransferFormat,
        *,
        include_progress: bool = False,
        include_media: bool = False,
    ) -> ExportPayload:
        """
        Export one deck.

        Raises:
            UnsupportedFormatError: Unknown format.
            DeckNotFoundError: Deck does not exist or belongs to someone else.
        """
        codec = get_codec(format)
        deck = await self._decks.get_by_id_for_user(deck_id, user_id)
        if deck is None:
            raise DeckNotFoundError(
                details={"resource_type": "deck", "resource_id": str(deck_id)},
            )

        content, total_cards = await self._encode(codec, user_id, deck, include_progress)
        log_export_completed(str(user_id), [str(deck_id)], codec.format, total_cards, len(content))

        return ExportPayload(
            content=content,
            content_type=codec.content_type,
            extension=codec.extension,
            filename=codec.filename(f"deck_{deck_id}"),
        )

    async def export_decks(
        self,
        user_id: UUID,
        deck_ids: Sequence[UUID],
        format: str | TransferFormat,
        *,
        include_progress: bool = False,
        include_media: bool = False,
    ) -> ExportPayload:
        """
        Export several decks into one payload, in the order given.

        Raises:
            InvalidInputError: ``deck_ids`` is empty.
            UnsupportedFormatError: Unknown format.
            DeckNotFoundError: Any of the decks is missing; nothing is exported.
        """
        if not deck_ids:
            raise InvalidInputError("No deck IDs provided", details={"field": "deck_ids"})

        codec = get_codec(format)
        decks = await self._decks.list_by_ids_for_user(deck_ids, user_id)
        found = {deck.id for deck in decks}
        missing = [str(deck_id) for deck_id in deck_ids if deck_id not in found]
        if missing:
            raise DeckNotFoundError(
                f"Decks not found: {', '.join(missing)}",
                details={"resource_type": "deck", "resource_id": ",".join(missing)},
            )

        documents: list[bytes] = []
        total_cards = 0
        for deck in decks:
            document, card_count = await self._encode(codec, user_id, deck, include_progress)
            documents.append(document)
            total_cards += card_count

        content = codec.encode_many(documents)
        log_export_completed(
            str(user_id),
            [str(deck_id) for deck_id in deck_ids],
            codec.format,
            total_cards,
            len(content),
        )

        return ExportPayload(
            content=content,
            content_type=codec.content_type,
            extension=codec.extension,
            filename=codec.filename(BULK_EXPORT_STEM),
        )

    async def _encode(
        self,
        codec: Codec,
        user_id: UUID,
        deck: Deck,
        include_progress: bool,
    ) -> tuple[bytes, int]:
        cards = await self._cards.list_for_deck(deck.id)
        progress = await self._load_progress(user_id, cards) if include_progress else None
        return codec.encode(deck, cards, progress), len(cards)

    async def _load_progress(
        self,
        user_id: UUID,
        cards: Sequence[Card],
    ) -> Mapping[UUID, CardProgressData]:
        if not cards:
            return {}
        return await self._progress.get_progress(user_id, [card.id for card in cards])
