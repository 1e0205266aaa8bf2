"""Unit tests for CsvCodec."""

import csv
import io

import pytest

from deckoracle.modules.transfer.codecs import CsvCodec
from deckoracle.modules.transfer.exceptions import DecodeError
from deckoracle.tests.factories import CardFactory
from deckoracle.tests.fixtures.sample_data import CAPITALS_CSV, CSV_WITH_TAGS


@pytest.fixture
def codec() -> CsvCodec:
    return CsvCodec()


# ==================== encode Tests ====================


def test_encode_header_and_rows(codec, sample_deck, sample_cards):
    """Test the exact CSV layout with LF line endings."""
    content = codec.encode(sample_deck, sample_cards)

    assert content == (
        b"front,back,tags,explanation,difficulty\n"
        b"hola,hello,,,\n"
        b"adios,bye,,,\n"
    )


def test_encode_quotes_special_characters(codec, sample_deck, sample_cards):
    """Test that commas, quotes and newlines survive a CSV round trip."""
    sample_cards[0].front = 'Say "hi", please'
    sample_cards[0].back = "line one\nline two"

    content = codec.encode(sample_deck, sample_cards)
    rows = list(csv.reader(io.StringIO(content.decode("utf-8"))))

    assert rows[1][:2] == ['Say "hi", please', "line one\nline two"]


def test_encode_empty_deck_is_header_only(codec, sample_deck):
    assert codec.encode(sample_deck, []) == b"front,back,tags,explanation,difficulty\n"


def test_encode_many_single_header(codec, sample_deck, sample_cards):
    """Test that bulk CSV keeps one header and all rows in deck order."""
    first = codec.encode(sample_deck, sample_cards[:1])
    second = codec.encode(sample_deck, sample_cards[1:])
    empty = codec.encode(sample_deck, [])

    combined = codec.encode_many([first, empty, second])

    assert combined == (
        b"front,back,tags,explanation,difficulty\n"
        b"hola,hello,,,\n"
        b"adios,bye,,,\n"
    )


# ==================== decode Tests ====================


def test_decode_rows(codec):
    """Test that each data row becomes a card and the header is skipped."""
    decoded = codec.decode(CAPITALS_CSV)

    assert decoded.title is None
    assert decoded.description == "Imported from CSV"
    assert [(card.front, card.back) for card in decoded.cards] == [
        ("Q1", "A1"),
        ("Q2", "A2"),
        ("Q3", "A3"),
    ]


def test_decode_optional_columns(codec):
    """Test tags, explanation and difficulty parsing with a capitalized header."""
    decoded = codec.decode(CSV_WITH_TAGS)

    card = decoded.cards[0]
    assert card.front == "Capital of France"
    assert card.back == "Paris"
    assert card.tags == ["geo", "europe"]
    assert card.explanation == "Largest city"
    assert card.difficulty == 2


def test_decode_without_header(codec):
    """Test that the first row is data when it is not a header."""
    decoded = codec.decode(b"Q1,A1\nQ2,A2\n")

    assert len(decoded.cards) == 2


def test_decode_skips_blank_lines(codec):
    decoded = codec.decode(b"front,back\n\nQ1,A1\n\n")

    assert len(decoded.cards) == 1


def test_decode_keeps_rows_with_empty_cells(codec):
    """Test that a row of empty fields is a card, not a blank line."""
    decoded = codec.decode(b"front,back\nQ1,A1\n,\nQ3,A3\n")

    assert [(card.front, card.back) for card in decoded.cards] == [
        ("Q1", "A1"),
        ("", ""),
        ("Q3", "A3"),
    ]


def test_round_trip_keeps_empty_card(codec, sample_deck, sample_cards):
    """Test that a card with empty front and back survives encode and decode."""
    sample_cards.insert(1, CardFactory.build(deck_id=sample_deck.id, front="", back="", position=1))

    decoded = codec.decode(codec.encode(sample_deck, sample_cards))

    assert [(card.front, card.back) for card in decoded.cards] == [
        ("hola", "hello"),
        ("", ""),
        ("adios", "bye"),
    ]


def test_decode_strips_bom(codec):
    """Test that a UTF-8 BOM does not break header detection."""
    decoded = codec.decode(b"\xef\xbb\xbffront,back\nQ1,A1\n")

    assert [card.front for card in decoded.cards] == ["Q1"]


def test_decode_crlf_line_endings(codec):
    decoded = codec.decode(b"front,back\r\nQ1,A1\r\nQ2,A2\r\n")

    assert [card.back for card in decoded.cards] == ["A1", "A2"]


def test_decode_bad_difficulty_is_warning(codec):
    """Test that a non-numeric difficulty is dropped with a warning."""
    decoded = codec.decode(b"front,back,tags,explanation,difficulty\nQ1,A1,,,hard\n")

    assert decoded.cards[0].difficulty is None
    assert len(decoded.warnings) == 1
    assert "hard" in decoded.warnings[0]
    assert "not stored" in decoded.warnings[0]


def test_decode_header_only(codec):
    """Test that a header without rows decodes to an empty deck."""
    decoded = codec.decode(b"front,back,tags,explanation,difficulty\n")

    assert decoded.cards == []


def test_decode_row_with_one_field(codec):
    """Test that a short row fails the whole document."""
    with pytest.raises(DecodeError, match="line 3"):
        codec.decode(b"front,back\nQ1,A1\nlonely\n")


def test_decode_unterminated_quote(codec):
    with pytest.raises(DecodeError, match="Invalid CSV format"):
        codec.decode(b'front,back\n"Q1,A1\n')


def test_decode_invalid_utf8(codec):
    with pytest.raises(DecodeError, match="UTF-8"):
        codec.decode(b"front,back\n\xff\xfe,A1\n")
