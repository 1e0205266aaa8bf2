"""Tabular CSV: one card per row."""

import csv
import io
from collections.abc import Sequence

from deckoracle.modules.cards.models import Card
from deckoracle.modules.decks.models import Deck

from ..exceptions import DecodeError
from ..schemas import DecodedCard, DecodedDeck, TransferFormat
from .base import Codec, ProgressMap

HEADER = ("front", "back", "tags", "explanation", "difficulty")


def _split_tags(value: str) -> list[str]:
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def _is_header(row: list[str]) -> bool:
    return [cell.strip().lower() for cell in row[:2]] == ["front", "back"]


class CsvCodec(Codec):
    """``front,back,tags,explanation,difficulty`` rows with ``\\n`` line endings.

    CSV carries no deck title; decoding leaves it to the importer. Any
    broken row fails the whole document.
    """

    format = TransferFormat.CSV
    content_type = "text/csv"
    extension = "csv"

    def encode(
        self,
        deck: Deck,
        cards: Sequence[Card],
        progress: ProgressMap | None = None,
    ) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(HEADER)
        for card in cards:
            writer.writerow([card.front, card.back, "", "", ""])
        return buffer.getvalue().encode("utf-8")

    def encode_many(self, documents: Sequence[bytes]) -> bytes:
        header = ",".join(HEADER).encode("utf-8") + b"\n"
        rows = [document.split(b"\n", 1)[1] if b"\n" in document else b"" for document in documents]
        return header + b"".join(rows)

    def decode(self, data: bytes) -> DecodedDeck:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid CSV format: file is not valid UTF-8 ({e.reason})") from e

        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        decoded = DecodedDeck(description="Imported from CSV")
        first_row = True

        try:
            for row in reader:
                if not row or (len(row) == 1 and not row[0].strip()):
                    continue
                if first_row:
                    first_row = False
                    if len(row) >= 2 and _is_header(row):
                        continue
                if len(row) < 2:
                    raise DecodeError(
                        f"Invalid CSV format: line {reader.line_num} has "
                        f"{len(row)} field(s), expected at least 2"
                    )
                decoded.cards.append(self._card_from_row(row, reader.line_num, decoded))
        except csv.Error as e:
            raise DecodeError(f"Invalid CSV format: line {reader.line_num}: {e}") from e

        return decoded

    def _card_from_row(self, row: list[str], line_num: int, decoded: DecodedDeck) -> DecodedCard:
        cells = row + [""] * (len(HEADER) - len(row))
        front, back, tags, explanation, difficulty = cells[: len(HEADER)]

        rating: int | None = None
        if difficulty.strip():
            try:
                rating = int(difficulty.strip())
            except ValueError:
                decoded.warnings.append(
                    f"Line {line_num}: difficulty '{difficulty.strip()}' is not an integer; "
                    "the difficulty column is not stored on import"
                )

        return DecodedCard(
            front=front,
            back=back,
            explanation=explanation or None,
            tags=_split_tags(tags),
            difficulty=rating,
        )
