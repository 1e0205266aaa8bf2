"""Templated Markdown dialect.

    # Title

    Optional description.

    ---

    ## Card 1

    **Front:** question

    **Back:** answer

    ---
"""

from collections.abc import Sequence

from deckoracle.modules.cards.models import Card
from deckoracle.modules.decks.models import Deck

from ..exceptions import DecodeError
from ..schemas import DecodedCard, DecodedDeck, TransferFormat
from .base import Codec, ProgressMap

TITLE_PREFIX = "# "
CARD_PREFIX = "## Card"
FRONT_PREFIX = "**Front:**"
BACK_PREFIX = "**Back:**"
DEFAULT_TITLE = "Imported from Markdown"


class MarkdownCodec(Codec):
    """Markdown codec.

    Decoding is line-oriented and forgiving: unknown lines are ignored,
    the last ``# `` heading names the deck and a card without a Back line
    gets an empty back. Front/Back values are single lines.
    """

    format = TransferFormat.MARKDOWN
    content_type = "text/markdown"
    extension = "md"

    def encode(
        self,
        deck: Deck,
        cards: Sequence[Card],
        progress: ProgressMap | None = None,
    ) -> bytes:
        parts = [f"{TITLE_PREFIX}{deck.title}\n"]
        if deck.description:
            parts.append(f"\n{deck.description}\n\n")
        parts.append("---\n\n")

        for number, card in enumerate(cards, start=1):
            parts.append(f"{CARD_PREFIX} {number}\n")
            parts.append(f"\n{FRONT_PREFIX} {card.front}\n")
            parts.append(f"\n{BACK_PREFIX} {card.back}\n")
            parts.append("\n---\n\n")

        return "".join(parts).encode("utf-8")

    def encode_many(self, documents: Sequence[bytes]) -> bytes:
        return b"\n".join(documents)

    def decode(self, data: bytes) -> DecodedDeck:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("Invalid UTF-8 encoding in Markdown file") from e

        title = DEFAULT_TITLE
        cards: list[DecodedCard] = []
        current: DecodedCard | None = None

        for line in text.splitlines():
            if line.startswith(TITLE_PREFIX):
                title = line[len(TITLE_PREFIX) :].strip()
            elif line.startswith(CARD_PREFIX):
                if current is not None:
                    cards.append(current)
                current = DecodedCard(front="", back="")
            elif current is None:
                continue
            elif line.startswith(FRONT_PREFIX):
                current.front = line[len(FRONT_PREFIX) :].strip()
            elif line.startswith(BACK_PREFIX):
                current.back = line[len(BACK_PREFIX) :].strip()

        if current is not None:
            cards.append(current)

        return DecodedDeck(title=title, cards=cards)
