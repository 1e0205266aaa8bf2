"""Codec contract shared by all transfer formats."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import ClassVar
from uuid import UUID

from pydantic import ValidationError

from deckoracle.modules.cards.models import Card
from deckoracle.modules.decks.models import Deck

from ..schemas import CardProgressData, DecodedDeck, TransferFormat

ProgressMap = Mapping[UUID, CardProgressData]


class Codec(ABC):
    """Encoder/decoder for one external deck representation.

    ``encode`` is deterministic for a given deck and card list (JSON's
    ``exported_at`` aside). ``decode`` returns a ``DecodedDeck`` for
    well-formed input and raises ``DecodeError`` otherwise; it never
    touches storage.

    ``progress`` is None when progress was not requested, and a mapping
    keyed by card id (possibly empty) when it was.
    """

    format: ClassVar[TransferFormat]
    content_type: ClassVar[str]
    extension: ClassVar[str]

    @abstractmethod
    def encode(
        self,
        deck: Deck,
        cards: Sequence[Card],
        progress: ProgressMap | None = None,
    ) -> bytes: ...

    @abstractmethod
    def decode(self, data: bytes) -> DecodedDeck: ...

    @abstractmethod
    def encode_many(self, documents: Sequence[bytes]) -> bytes:
        """Combine per-deck documents produced by ``encode`` into one payload."""

    def filename(self, stem: str) -> str:
        return f"{stem}.{self.extension}"


def describe_validation_error(error: ValidationError, limit: int = 3) -> str:
    """Short human-readable summary of a pydantic error, e.g. ``cards.1.back: Field required``."""
    parts = []
    for item in error.errors()[:limit]:
        location = ".".join(str(loc) for loc in item["loc"]) or "document"
        parts.append(f"{location}: {item['msg']}")
    extra = error.error_count() - limit
    if extra > 0:
        parts.append(f"and {extra} more")
    return "; ".join(parts)
