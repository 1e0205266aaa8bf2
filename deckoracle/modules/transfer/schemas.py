"""Schemas for deck import and export.

Three groups live here:

- wire documents written and read by the codecs (``ExportedDeck``,
  ``AnkiDeck`` and their parts);
- the codec-neutral intermediate every decoder produces (``DecodedDeck``);
- API results (``ImportResult``, ``ImportValidationResult``) and the
  export payload handed to the HTTP layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import Field

from deckoracle.shared.schemas import BaseSchema


class TransferFormat(StrEnum):
    """Supported import/export formats."""

    JSON = "json"
    CSV = "csv"
    ANKI = "anki"
    MARKDOWN = "markdown"


# ==================== Progress ====================


class CardProgressData(BaseSchema):
    """Study progress of one card, as supplied by the progress tracker."""

    review_count: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    last_reviewed: datetime | None = None
    next_review: datetime | None = None
    ease_factor: float = Field(default=2.5, ge=1.0)
    interval_days: int = Field(default=0, ge=0)


# ==================== JSON document ====================


class MediaAttachment(BaseSchema):
    """Media reference; exports always carry an empty list."""

    id: str
    filename: str
    content_type: str
    data: str | None = None
    url: str | None = None


class ExportMetadata(BaseSchema):
    """Export envelope metadata.

    Attributes:
        version: Document format version.
        exported_at: Moment of export (UTC).
        platform: Producing platform name.
        format: Format discriminator of the document.
        total_cards: Number of cards serialized.
        includes_progress: Whether progress was requested.
        includes_media: Always false, media is never attached.
    """

    version: str
    exported_at: datetime
    platform: str
    format: str
    total_cards: int
    includes_progress: bool
    includes_media: bool = False


class ExportedCard(BaseSchema):
    """Card inside a JSON deck document.

    On import only ``front`` and ``back`` are required; ``id`` becomes the
    identity hint used to skip cards already present in the target deck.
    """

    id: str | None = Field(default=None, max_length=255)
    front: str
    back: str
    explanation: str | None = None
    tags: list[str] = Field(default_factory=list)
    difficulty: int | None = None
    media: list[MediaAttachment] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    progress: CardProgressData | None = None


class ExportedDeck(BaseSchema):
    """JSON deck document. Only ``title`` is required on import."""

    id: str | None = None
    title: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    cards: list[ExportedCard] = Field(default_factory=list)
    metadata: ExportMetadata | None = None


# ==================== Anki-JSON document ====================


class AnkiField(BaseSchema):
    name: str
    ord: int


class AnkiTemplate(BaseSchema):
    name: str
    qfmt: str
    afmt: str


class AnkiModel(BaseSchema):
    """Note type; exports always use the two-field "Basic" model."""

    id: int
    name: str
    flds: list[AnkiField] = Field(default_factory=list)
    tmpls: list[AnkiTemplate] = Field(default_factory=list)


class AnkiNote(BaseSchema):
    id: int
    guid: str = ""
    mid: int = 1
    fields: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class AnkiCard(BaseSchema):
    """Scheduling data of a note's card.

    ``factor`` is the ease factor multiplied by 1000, ``ivl`` the interval
    in days and ``reps`` the number of reviews.
    """

    nid: int
    ord: int = 0
    did: int = 1
    due: int = 0
    ivl: int = 0
    factor: int = 2500
    reps: int = 0
    lapses: int = 0


class AnkiDeck(BaseSchema):
    """Simplified Anki deck: notes, cards and note types in one JSON object."""

    name: str
    desc: str = ""
    cards: list[AnkiCard] = Field(default_factory=list)
    notes: list[AnkiNote] = Field(default_factory=list)
    models: list[AnkiModel] = Field(default_factory=list)


# ==================== Decoded intermediate ====================


@dataclass
class DecodedCard:
    """Card produced by a decoder.

    Attributes:
        front: Question text.
        back: Answer text, empty when the source had none.
        explanation: Optional explanation (CSV/JSON only).
        tags: Card tags.
        difficulty: Optional difficulty rating.
        source_id: Identity hint carried by the source document.
    """

    front: str
    back: str = ""
    explanation: str | None = None
    tags: list[str] = field(default_factory=list)
    difficulty: int | None = None
    source_id: str | None = None


@dataclass
class DecodedDeck:
    """Codec-neutral deck produced by every decoder.

    Attributes:
        title: Deck title, None when the format carries none (CSV).
        description: Optional description.
        tags: Deck tags.
        cards: Cards in document order.
        warnings: Non-fatal problems found while decoding.
    """

    title: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    cards: list[DecodedCard] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# ==================== Results ====================


class ImportedDeck(BaseSchema):
    """Deck touched by an import."""

    id: UUID = Field(description="UUID of the created or merged deck")
    title: str = Field(description="Deck title")
    card_count: int = Field(description="Number of cards inserted")
    was_merged: bool = Field(description="Whether cards were added to an existing deck")


class ImportResult(BaseSchema):
    """Result of an import call."""

    success: bool = Field(description="Whether anything was committed")
    imported_decks: list[ImportedDeck] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    total_cards_imported: int = Field(default=0, description="Cards inserted")
    total_decks_imported: int = Field(default=0, description="Decks created or merged")
    skipped_cards: int = Field(
        default=0,
        description="Cards not inserted because they already exist in the deck",
    )


class ImportValidationResult(BaseSchema):
    """Structural check of an import payload; nothing is persisted."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    deck_count: int = 0
    card_count: int = 0


@dataclass(frozen=True)
class ExportPayload:
    """Encoded export ready to be sent as an attachment."""

    content: bytes
    content_type: str
    extension: str
    filename: str
