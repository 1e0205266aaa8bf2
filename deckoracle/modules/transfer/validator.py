"""Structural validation of import payloads.

Runs a format's decoder and reports the outcome; nothing is persisted.
The importer uses ``check`` so that a payload is decoded exactly once.
"""

import logging
from dataclasses import dataclass

from deckoracle.core.exceptions import UnsupportedFormatError

from .codecs import get_codec
from .exceptions import DecodeError
from .schemas import DecodedDeck, ImportValidationResult, TransferFormat

logger = logging.getLogger(__name__)

EMPTY_DECK_WARNING = "Deck contains no cards"


@dataclass
class ValidationOutcome:
    """Validation report plus the decoded deck when decoding succeeded."""

    result: ImportValidationResult
    decoded: DecodedDeck | None = None


def _invalid(message: str) -> ValidationOutcome:
    return ValidationOutcome(result=ImportValidationResult(is_valid=False, errors=[message]))


def check(data: bytes, format: str | TransferFormat) -> ValidationOutcome:
    """Decode ``data`` as ``format`` and describe the result.

    - unknown format, empty payload or decode failure: invalid, counts 0;
    - zero cards: valid with a warning, ``deck_count=1``;
    - decode-time warnings (skipped notes, ignored cells) are copied through.
    """
    try:
        codec = get_codec(format)
    except UnsupportedFormatError as e:
        return _invalid(e.message)

    if not data or not data.strip():
        return _invalid("File is empty")

    try:
        decoded = codec.decode(data)
    except DecodeError as e:
        logger.debug("Payload rejected by %s decoder: %s", codec.format, e)
        return _invalid(str(e))

    warnings = list(decoded.warnings)
    if not decoded.cards:
        warnings.append(EMPTY_DECK_WARNING)

    result = ImportValidationResult(
        is_valid=True,
        warnings=warnings,
        deck_count=1,
        card_count=len(decoded.cards),
    )
    return ValidationOutcome(result=result, decoded=decoded)


def validate(data: bytes, format: str | TransferFormat) -> ImportValidationResult:
    """Preview an import without touching storage."""
    return check(data, format).result
