"""Import/export engine: codecs, validation, importer and exporter."""

from .exceptions import DecodeError
from .exporter import DeckExporter
from .importer import DeckImporter
from .progress import NullProgressSource, ProgressSource
from .schemas import (
    CardProgressData,
    DecodedCard,
    DecodedDeck,
    ExportPayload,
    ImportResult,
    ImportValidationResult,
    TransferFormat,
)
from .templates import get_template
from .validator import validate

__all__ = [
    "CardProgressData",
    "DecodeError",
    "DecodedCard",
    "DecodedDeck",
    "DeckExporter",
    "DeckImporter",
    "ExportPayload",
    "ImportResult",
    "ImportValidationResult",
    "NullProgressSource",
    "ProgressSource",
    "TransferFormat",
    "get_template",
    "validate",
]
