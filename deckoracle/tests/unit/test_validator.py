"""Unit tests for import validation.

Validation never touches storage, so these tests need no session at all.
"""

import pytest

from deckoracle.modules.transfer import validate
from deckoracle.modules.transfer.validator import EMPTY_DECK_WARNING, check
from deckoracle.tests.fixtures.sample_data import (
    ANKI_DECK,
    CAPITALS_CSV,
    EMPTY_JSON_DECK,
    MARKDOWN_DECK,
    SPANISH_JSON,
)


@pytest.mark.parametrize(
    ("data", "format", "card_count"),
    [
        (SPANISH_JSON, "json", 2),
        (CAPITALS_CSV, "csv", 3),
        (ANKI_DECK, "anki", 2),
        (MARKDOWN_DECK, "markdown", 2),
    ],
)
def test_validate_valid_payloads(data, format, card_count):
    """Test that well-formed payloads of every format validate."""
    result = validate(data, format)

    assert result.is_valid is True
    assert result.errors == []
    assert result.deck_count == 1
    assert result.card_count == card_count


def test_validate_minimal_csv():
    """Test a two-column CSV without the optional columns."""
    result = validate(b"front,back\nQ1,A1\nQ2,A2", "csv")

    assert result.is_valid is True
    assert result.deck_count == 1
    assert result.card_count == 2


def test_validate_accepts_uppercase_format():
    assert validate(SPANISH_JSON, "JSON").is_valid is True


def test_validate_malformed_json():
    """Test that a decode failure is reported, not raised."""
    result = validate(b'{"title": ', "json")

    assert result.is_valid is False
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Invalid JSON format")
    assert result.deck_count == 0
    assert result.card_count == 0


def test_validate_empty_deck_warns():
    """Test that a deck without cards is valid with a warning."""
    result = validate(EMPTY_JSON_DECK, "json")

    assert result.is_valid is True
    assert result.warnings == [EMPTY_DECK_WARNING]
    assert result.deck_count == 1
    assert result.card_count == 0


@pytest.mark.parametrize("data", [b"", b"   \n\t"])
def test_validate_empty_payload(data):
    result = validate(data, "csv")

    assert result.is_valid is False
    assert result.errors == ["File is empty"]


def test_validate_unknown_format():
    """Test that an unsupported format is a validation error here."""
    result = validate(SPANISH_JSON, "xml")

    assert result.is_valid is False
    assert "xml" in result.errors[0]


def test_validate_copies_decoder_warnings():
    result = validate(b"front,back,tags,explanation,difficulty\nQ,A,,,hard\n", "csv")

    assert result.is_valid is True
    assert len(result.warnings) == 1


def test_check_returns_decoded_deck():
    """Test that check hands the decoded deck to the importer."""
    outcome = check(SPANISH_JSON, "json")

    assert outcome.decoded is not None
    assert outcome.decoded.title == "Spanish"


def test_check_invalid_has_no_decoded_deck():
    outcome = check(b"not json", "json")

    assert outcome.result.is_valid is False
    assert outcome.decoded is None
