"""DeckOracle - Event Logger.

Structured events emitted by the import/export engine.
"""

from loguru import logger


def log_import_started(
    user_id: str,
    format: str,
    size_bytes: int,
    *,
    merge_duplicates: bool = False,
    folder_id: str | None = None,
) -> None:
    """Log the start of a deck import.

    Args:
        user_id: Acting user
        format: Format discriminator (json, csv, anki, markdown)
        size_bytes: Size of the uploaded payload
        merge_duplicates: Whether merging into an existing deck is allowed
        folder_id: Optional target folder
    """
    logger.info(
        "Deck import started",
        event="transfer.import.started",
        user_id=user_id,
        format=format,
        size_bytes=size_bytes,
        merge_duplicates=merge_duplicates,
        folder_id=folder_id,
    )


def log_import_completed(
    user_id: str,
    deck_id: str,
    cards_imported: int,
    duration_ms: int,
    *,
    was_merged: bool = False,
    skipped_cards: int = 0,
) -> None:
    """Log a committed import."""
    logger.info(
        "Deck import completed",
        event="transfer.import.completed",
        user_id=user_id,
        deck_id=deck_id,
        cards_imported=cards_imported,
        duration_ms=duration_ms,
        was_merged=was_merged,
        skipped_cards=skipped_cards,
    )


def log_import_failed(
    user_id: str,
    format: str,
    error: str,
    *,
    error_type: str | None = None,
    status_code: int | None = None,
) -> None:
    """Log an import that was rejected or rolled back.

    Validation failures and client errors (4xx) are expected and logged as
    warnings; anything else (storage errors) as errors.
    """
    expected = error_type in (None, "validation") or (
        status_code is not None and status_code < 500
    )
    log = logger.warning if expected else logger.error
    log(
        "Deck import failed",
        event="transfer.import.failed",
        user_id=user_id,
        format=format,
        error=error,
        error_type=error_type,
    )


def log_export_completed(
    user_id: str,
    deck_ids: list[str],
    format: str,
    total_cards: int,
    size_bytes: int,
) -> None:
    logger.info(
        "Deck export completed",
        event="transfer.export.completed",
        user_id=user_id,
        deck_ids=deck_ids,
        format=format,
        total_cards=total_cards,
        size_bytes=size_bytes,
    )
