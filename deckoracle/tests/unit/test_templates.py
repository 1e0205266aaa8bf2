"""Unit tests for import templates and the codec registry."""

import pytest

from deckoracle.core.exceptions import UnsupportedFormatError
from deckoracle.modules.transfer import TransferFormat, get_template, validate
from deckoracle.modules.transfer.codecs import get_codec, parse_format


# ==================== Registry Tests ====================


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("json", TransferFormat.JSON),
        ("CSV", TransferFormat.CSV),
        (" anki ", TransferFormat.ANKI),
        (TransferFormat.MARKDOWN, TransferFormat.MARKDOWN),
    ],
)
def test_parse_format(value, expected):
    assert parse_format(value) is expected


def test_parse_format_unknown():
    """Test that an unknown discriminator is a 400 error."""
    with pytest.raises(UnsupportedFormatError) as exc_info:
        parse_format("pdf")

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "UNSUPPORTED_FORMAT"
    assert exc_info.value.details["format"] == "pdf"


@pytest.mark.parametrize(
    ("format", "content_type", "extension"),
    [
        ("json", "application/json", "json"),
        ("csv", "text/csv", "csv"),
        ("anki", "application/json", "json"),
        ("markdown", "text/markdown", "md"),
    ],
)
def test_codec_media_types(format, content_type, extension):
    codec = get_codec(format)

    assert codec.content_type == content_type
    assert codec.extension == extension


# ==================== Template Tests ====================


@pytest.mark.parametrize("format", ["json", "csv", "anki", "markdown"])
def test_template_is_importable(format):
    """Test that every template passes validation with two cards."""
    template = get_template(format)

    result = validate(template.content, format)

    assert result.is_valid is True
    assert result.card_count == 2


def test_template_filename_and_type():
    template = get_template("markdown")

    assert template.filename == "import_template.md"
    assert template.content_type == "text/markdown"


def test_csv_template_content():
    """Test the CSV template bytes."""
    template = get_template("csv")

    assert template.content.startswith(b"Front,Back,Tags,Explanation,Difficulty\n")
    assert template.filename == "import_template.csv"


def test_template_unknown_format():
    with pytest.raises(UnsupportedFormatError):
        get_template("docx")
