"""Codec registry keyed by transfer format."""

from functools import lru_cache

from deckoracle.core.config import settings
from deckoracle.core.exceptions import UnsupportedFormatError

from ..schemas import TransferFormat
from .anki_codec import AnkiCodec
from .base import Codec
from .csv_codec import CsvCodec
from .json_codec import JsonCodec
from .markdown_codec import MarkdownCodec

__all__ = [
    "AnkiCodec",
    "Codec",
    "CsvCodec",
    "JsonCodec",
    "MarkdownCodec",
    "get_codec",
    "parse_format",
]


@lru_cache
def _registry() -> dict[TransferFormat, Codec]:
    codecs: list[Codec] = [
        JsonCodec(
            platform=settings.transfer.platform,
            version=settings.transfer.format_version,
        ),
        CsvCodec(),
        AnkiCodec(),
        MarkdownCodec(),
    ]
    return {codec.format: codec for codec in codecs}


def parse_format(value: str | TransferFormat) -> TransferFormat:
    """Convert a format discriminator, raising 400 for unknown ones."""
    try:
        return TransferFormat(str(value).strip().lower())
    except ValueError as e:
        raise UnsupportedFormatError(
            f"Unsupported format '{value}'",
            details={"format": str(value)},
        ) from e


def get_codec(value: str | TransferFormat) -> Codec:
    """Codec for a format discriminator (``json``, ``csv``, ``anki``, ``markdown``)."""
    return _registry()[parse_format(value)]
