"""Deck import: decoded documents into persisted decks and cards."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from deckoracle.core.config import TransferConfig, settings
from deckoracle.core.database import unit_of_work
from deckoracle.core.exceptions import (
    AppError,
    DuplicateDeckError,
    FolderNotFoundError,
    InvalidInputError,
    safe,
)
from deckoracle.modules.cards.service import CardService
from deckoracle.modules.decks.models import Deck
from deckoracle.modules.decks.schemas import DeckCreate
from deckoracle.modules.decks.service import DeckService
from deckoracle.modules.folders.service import FolderService
from deckoracle.shared.logging import log_import_completed, log_import_failed, log_import_started

from . import validator
from .schemas import DecodedDeck, ImportedDeck, ImportResult, TransferFormat

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255


def _today() -> date:
    return datetime.now(UTC).date()


@dataclass
class _AppliedImport:
    deck: Deck
    was_merged: bool
    inserted: int
    skipped: int


class DeckImporter:
    """Import one deck per call inside a single unit of work.

    Steps:
        1. Validate and decode the payload (nothing is written when invalid).
        2. Check the target folder belongs to the user.
        3. Resolve the title and the duplicate policy: a deck with the same
           title either fails the import or, with ``merge_duplicates``,
           receives the cards.
        4. Append cards after the deck's current last position, skipping
           cards whose identity hint already exists in the deck.

    Steps 2-4 share one transaction; any error rolls all of them back.

    Example:
        importer = DeckImporter(session)
        result = await importer.import_deck(data, "json", user_id, merge_duplicates=True)
    """

    def __init__(
        self,
        session: AsyncSession,
        config: TransferConfig | None = None,
        today: Callable[[], date] = _today,
    ) -> None:
        self._session = session
        self._config = config or settings.transfer
        self._today = today

    @safe
    async def import_deck(
        self,
        data: bytes,
        format: str | TransferFormat,
        user_id: UUID,
        *,
        folder_id: UUID | None = None,
        merge_duplicates: bool = False,
        title: str | None = None,
    ) -> ImportResult:
        """
        Import a deck document.

        Returns:
            ``ImportResult`` with ``success=False`` and the validation errors
            when the payload is invalid, otherwise the processed deck.

        Raises:
            DuplicateDeckError: Title taken and ``merge_duplicates`` is off.
            FolderNotFoundError: ``folder_id`` is not one of the user's folders.
        """
        log_import_started(
            str(user_id),
            str(format),
            len(data),
            merge_duplicates=merge_duplicates,
            folder_id=str(folder_id) if folder_id else None,
        )
        started = time.perf_counter()

        outcome = validator.check(data, format)
        if not outcome.result.is_valid or outcome.decoded is None:
            log_import_failed(
                str(user_id),
                str(format),
                "; ".join(outcome.result.errors),
                error_type="validation",
            )
            return ImportResult(
                success=False,
                errors=outcome.result.errors,
                warnings=outcome.result.warnings,
            )

        try:
            async with unit_of_work(self._session) as tx:
                applied = await self._apply(
                    tx,
                    outcome.decoded,
                    user_id,
                    folder_id=folder_id,
                    merge_duplicates=merge_duplicates,
                    title=title,
                )
        except AppError as e:
            log_import_failed(
                str(user_id),
                str(format),
                e.message,
                error_type=e.code,
                status_code=e.status_code,
            )
            raise
        except Exception as e:
            log_import_failed(str(user_id), str(format), str(e), error_type=type(e).__name__)
            raise

        warnings = list(outcome.result.warnings)
        if applied.skipped:
            warnings.append(f"{applied.skipped} card(s) already present in the deck were skipped")

        log_import_completed(
            str(user_id),
            str(applied.deck.id),
            applied.inserted,
            int((time.perf_counter() - started) * 1000),
            was_merged=applied.was_merged,
            skipped_cards=applied.skipped,
        )

        return ImportResult(
            success=True,
            imported_decks=[
                ImportedDeck(
                    id=applied.deck.id,
                    title=applied.deck.title,
                    card_count=applied.inserted,
                    was_merged=applied.was_merged,
                )
            ],
            warnings=warnings,
            total_cards_imported=applied.inserted,
            total_decks_imported=1,
            skipped_cards=applied.skipped,
        )

    def resolve_title(self, decoded: DecodedDeck, title: str | None = None) -> str:
        """Explicit title, else the document's, else ``"<default> YYYY-MM-DD"``."""
        for candidate in (title, decoded.title):
            if candidate and candidate.strip():
                return candidate.strip()
        return f"{self._config.default_deck_title} {self._today().isoformat()}"

    async def _apply(
        self,
        tx: AsyncSessionTransaction,
        decoded: DecodedDeck,
        user_id: UUID,
        *,
        folder_id: UUID | None,
        merge_duplicates: bool,
        title: str | None,
    ) -> _AppliedImport:
        session = tx.session

        if folder_id is not None:
            folder = await FolderService(session).get_for_owner(folder_id, user_id)
            if folder is None:
                raise FolderNotFoundError(
                    details={"resource_type": "folder", "resource_id": str(folder_id)},
                )

        deck, was_merged = await self._resolve_target(
            tx, decoded, user_id, folder_id, merge_duplicates, title
        )
        inserted, skipped = await self._insert_cards(tx, deck, decoded, was_merged)
        return _AppliedImport(deck=deck, was_merged=was_merged, inserted=inserted, skipped=skipped)

    async def _resolve_target(
        self,
        tx: AsyncSessionTransaction,
        decoded: DecodedDeck,
        user_id: UUID,
        folder_id: UUID | None,
        merge_duplicates: bool,
        title: str | None,
    ) -> tuple[Deck, bool]:
        decks = DeckService(tx.session)
        deck_title = self.resolve_title(decoded, title)
        if len(deck_title) > MAX_TITLE_LENGTH:
            raise InvalidInputError(
                f"Deck title is longer than {MAX_TITLE_LENGTH} characters",
                details={"field": "title", "limit": MAX_TITLE_LENGTH},
            )

        existing = await decks.get_by_title(user_id, deck_title)
        if existing is not None:
            if not merge_duplicates:
                raise DuplicateDeckError(
                    f"Deck '{deck_title}' already exists",
                    details={"field": "title", "value": deck_title},
                )
            logger.info("Merging import into existing deck %s", existing.id)
            return existing, True

        deck = await decks.create(
            user_id,
            DeckCreate(
                title=deck_title,
                description=decoded.description,
                folder_id=folder_id,
                is_public=False,
            ),
        )
        return deck, False

    async def _insert_cards(
        self,
        tx: AsyncSessionTransaction,
        deck: Deck,
        decoded: DecodedDeck,
        was_merged: bool,
    ) -> tuple[int, int]:
        cards = CardService(tx.session)

        position = await cards.next_position(deck.id) if was_merged else 0
        seen: set[str] = set()
        if was_merged:
            seen = await cards.existing_hints(
                deck.id, (card.source_id for card in decoded.cards if card.source_id)
            )

        inserted = skipped = 0
        for card in decoded.cards:
            if card.source_id and card.source_id in seen:
                skipped += 1
                continue
            await cards.add(
                deck.id,
                card.front,
                card.back,
                position,
                source_id=card.source_id,
            )
            if card.source_id:
                seen.add(card.source_id)
            position += 1
            inserted += 1

        return inserted, skipped
