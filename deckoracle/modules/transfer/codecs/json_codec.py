"""Structured JSON deck documents."""

import json
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from deckoracle.modules.cards.models import Card
from deckoracle.modules.decks.models import Deck

from ..exceptions import DecodeError
from ..schemas import (
    DecodedCard,
    DecodedDeck,
    ExportedCard,
    ExportedDeck,
    ExportMetadata,
    TransferFormat,
)
from .base import Codec, ProgressMap, describe_validation_error


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _dump(document: Any) -> bytes:
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")


class JsonCodec(Codec):
    """Pretty-printed ``ExportedDeck`` documents.

    Card ids are exported as the card's ``source_id`` when it has one, so a
    deck imported from a document and exported again keeps the original
    identities and re-importing either document is idempotent.
    """

    format = TransferFormat.JSON
    content_type = "application/json"
    extension = "json"

    def __init__(
        self,
        platform: str = "DeckOracle",
        version: str = "1.0",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._platform = platform
        self._version = version
        self._clock = clock

    def encode(
        self,
        deck: Deck,
        cards: Sequence[Card],
        progress: ProgressMap | None = None,
    ) -> bytes:
        exported_cards = [
            ExportedCard(
                id=card.source_id or (str(card.id) if card.id else None),
                front=card.front,
                back=card.back,
                created_at=card.created_at,
                updated_at=card.updated_at,
                progress=progress.get(card.id) if progress is not None else None,
            )
            for card in cards
        ]
        document = ExportedDeck(
            id=str(deck.id) if deck.id else None,
            title=deck.title,
            description=deck.description,
            created_at=deck.created_at,
            updated_at=deck.updated_at,
            cards=exported_cards,
            metadata=ExportMetadata(
                version=self._version,
                exported_at=self._clock(),
                platform=self._platform,
                format=self.format.value,
                total_cards=len(exported_cards),
                includes_progress=progress is not None,
                includes_media=False,
            ),
        )
        return _dump(document.model_dump(mode="json"))

    def encode_many(self, documents: Sequence[bytes]) -> bytes:
        return _dump([json.loads(document) for document in documents])

    def decode(self, data: bytes) -> DecodedDeck:
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON format: {e}") from e

        if not isinstance(raw, dict):
            raise DecodeError("Invalid JSON format: expected a single deck object")

        try:
            document = ExportedDeck.model_validate(raw)
        except ValidationError as e:
            raise DecodeError(f"Invalid JSON format: {describe_validation_error(e)}") from e

        return DecodedDeck(
            title=document.title,
            description=document.description,
            tags=list(document.tags),
            cards=[
                DecodedCard(
                    front=card.front,
                    back=card.back,
                    explanation=card.explanation,
                    tags=list(card.tags),
                    difficulty=card.difficulty,
                    source_id=card.id or None,
                )
                for card in document.cards
            ],
        )
