"""Simplified Anki deck as JSON.

Not an ``.apkg`` package: the deck, its notes, their cards and a single
two-field "Basic" note type serialized as one compact JSON object.
"""

import json
from collections.abc import Sequence

from pydantic import ValidationError

from deckoracle.modules.cards.models import Card
from deckoracle.modules.decks.models import Deck

from ..exceptions import DecodeError
from ..schemas import (
    AnkiCard,
    AnkiDeck,
    AnkiField,
    AnkiModel,
    AnkiNote,
    AnkiTemplate,
    DecodedCard,
    DecodedDeck,
    TransferFormat,
)
from .base import Codec, ProgressMap, describe_validation_error

BASIC_MODEL_ID = 1
DEFAULT_DECK_ID = 1

BASIC_MODEL = AnkiModel(
    id=BASIC_MODEL_ID,
    name="Basic",
    flds=[AnkiField(name="Front", ord=0), AnkiField(name="Back", ord=1)],
    tmpls=[
        AnkiTemplate(
            name="Card 1",
            qfmt="{{Front}}",
            afmt='{{FrontSide}}<hr id="answer">{{Back}}',
        )
    ],
)


def _compact(document: object) -> bytes:
    return json.dumps(document, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class AnkiCodec(Codec):
    """Anki-JSON codec.

    Notes and cards are numbered from 1 in card order; scheduling fields
    come from progress when available (``factor`` is the ease factor
    times 1000), otherwise Anki's defaults for a new card.
    """

    format = TransferFormat.ANKI
    content_type = "application/json"
    extension = "json"

    def encode(
        self,
        deck: Deck,
        cards: Sequence[Card],
        progress: ProgressMap | None = None,
    ) -> bytes:
        notes: list[AnkiNote] = []
        anki_cards: list[AnkiCard] = []

        for number, card in enumerate(cards, start=1):
            notes.append(
                AnkiNote(
                    id=number,
                    guid=str(card.id) if card.id else "",
                    mid=BASIC_MODEL_ID,
                    fields=[card.front, card.back],
                )
            )
            card_progress = progress.get(card.id) if progress else None
            if card_progress is None:
                anki_cards.append(AnkiCard(nid=number, did=DEFAULT_DECK_ID))
                continue
            anki_cards.append(
                AnkiCard(
                    nid=number,
                    ord=0,
                    did=DEFAULT_DECK_ID,
                    due=0,
                    ivl=card_progress.interval_days,
                    factor=round(card_progress.ease_factor * 1000),
                    reps=card_progress.review_count,
                    lapses=0,
                )
            )

        document = AnkiDeck(
            name=deck.title,
            desc=deck.description or "",
            cards=anki_cards,
            notes=notes,
            models=[BASIC_MODEL],
        )
        return _compact(document.model_dump(mode="json"))

    def encode_many(self, documents: Sequence[bytes]) -> bytes:
        return b"[" + b",".join(documents) + b"]"

    def decode(self, data: bytes) -> DecodedDeck:
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise DecodeError(f"Invalid Anki format: {e}") from e

        if not isinstance(raw, dict):
            raise DecodeError("Invalid Anki format: expected a single deck object")

        try:
            document = AnkiDeck.model_validate(raw)
        except ValidationError as e:
            raise DecodeError(f"Invalid Anki format: {describe_validation_error(e)}") from e

        decoded = DecodedDeck(title=document.name, description=document.desc or None)
        for note in document.notes:
            if len(note.fields) < 2:
                decoded.warnings.append(
                    f"Note {note.id} has {len(note.fields)} field(s), expected 2; skipped"
                )
                continue
            # Only the first two fields map onto a two-sided card
            decoded.cards.append(
                DecodedCard(front=note.fields[0], back=note.fields[1], tags=list(note.tags))
            )
        return decoded
