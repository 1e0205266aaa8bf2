"""Integration tests for DeckExporter.

Tests cover:
- single-deck export in every format
- ownership checks
- bulk export layout and failure on missing decks
- progress joined from a progress source
"""

import csv
import io
import json
from collections.abc import Mapping, Sequence
from uuid import UUID

import pytest

from deckoracle.core.exceptions import DeckNotFoundError, InvalidInputError, UnsupportedFormatError
from deckoracle.modules.transfer import CardProgressData, DeckExporter, DeckImporter
from deckoracle.shared.uuid7 import uuid7
from deckoracle.tests.factories import CardFactory, DeckFactory
from deckoracle.tests.fixtures.sample_data import SPANISH_JSON_WITH_IDS

pytestmark = pytest.mark.integration


class StaticProgressSource:
    """Progress source returning fixed data and recording calls."""

    def __init__(self, progress: Mapping[UUID, CardProgressData]) -> None:
        self.progress = progress
        self.calls: list[tuple[UUID, list[UUID]]] = []

    async def get_progress(
        self,
        user_id: UUID,
        card_ids: Sequence[UUID],
    ) -> Mapping[UUID, CardProgressData]:
        self.calls.append((user_id, list(card_ids)))
        return {card_id: self.progress[card_id] for card_id in card_ids if card_id in self.progress}


# ==================== Fixtures ====================


@pytest.fixture
async def spanish_deck(db_session, user_id):
    """Deck with two cards stored out of insertion order."""
    deck = await DeckFactory.create_async(
        db_session, owner_id=user_id, title="Spanish", description="Basic words"
    )
    await CardFactory.create_async(db_session, deck_id=deck.id, front="adios", back="bye", position=1)
    await CardFactory.create_async(db_session, deck_id=deck.id, front="hola", back="hello", position=0)
    return deck


@pytest.fixture
async def french_deck(db_session, user_id):
    deck = await DeckFactory.create_async(db_session, owner_id=user_id, title="French")
    await CardFactory.create_async(
        db_session, deck_id=deck.id, front="bonjour", back="hello", position=0
    )
    return deck


@pytest.fixture
def exporter(db_session) -> DeckExporter:
    return DeckExporter(db_session)


# ==================== export_deck Tests ====================


@pytest.mark.asyncio
async def test_export_json(exporter, spanish_deck, user_id):
    """Test JSON export with cards in position order."""
    payload = await exporter.export_deck(user_id, spanish_deck.id, "json")

    assert payload.content_type == "application/json"
    assert payload.filename == f"deck_{spanish_deck.id}.json"
    document = json.loads(payload.content)
    assert document["title"] == "Spanish"
    assert [card["front"] for card in document["cards"]] == ["hola", "adios"]
    assert document["metadata"]["total_cards"] == 2
    assert document["metadata"]["includes_progress"] is False
    assert document["metadata"]["includes_media"] is False


@pytest.mark.asyncio
async def test_export_csv(exporter, spanish_deck, user_id):
    payload = await exporter.export_deck(user_id, spanish_deck.id, "csv")

    assert payload.content_type == "text/csv"
    assert payload.filename == f"deck_{spanish_deck.id}.csv"
    assert payload.content == (
        b"front,back,tags,explanation,difficulty\n"
        b"hola,hello,,,\n"
        b"adios,bye,,,\n"
    )


@pytest.mark.asyncio
async def test_export_anki(exporter, spanish_deck, user_id):
    payload = await exporter.export_deck(user_id, spanish_deck.id, "anki")

    assert payload.filename == f"deck_{spanish_deck.id}.json"
    document = json.loads(payload.content)
    assert [note["fields"] for note in document["notes"]] == [["hola", "hello"], ["adios", "bye"]]


@pytest.mark.asyncio
async def test_export_markdown(exporter, spanish_deck, user_id):
    payload = await exporter.export_deck(user_id, spanish_deck.id, "markdown")

    assert payload.content_type == "text/markdown"
    assert payload.filename == f"deck_{spanish_deck.id}.md"
    content = payload.content.decode("utf-8")
    assert content.startswith("# Spanish\n\nBasic words\n\n---\n\n## Card 1\n")
    assert content.index("hola") < content.index("adios")


@pytest.mark.asyncio
async def test_export_empty_deck(exporter, db_session, user_id):
    deck = await DeckFactory.create_async(db_session, owner_id=user_id, title="Empty")

    payload = await exporter.export_deck(user_id, deck.id, "csv")

    assert payload.content == b"front,back,tags,explanation,difficulty\n"


@pytest.mark.asyncio
async def test_export_deck_of_other_user(exporter, spanish_deck, other_user_id):
    """Test that another user's deck looks missing."""
    with pytest.raises(DeckNotFoundError):
        await exporter.export_deck(other_user_id, spanish_deck.id, "json")


@pytest.mark.asyncio
async def test_export_missing_deck(exporter, user_id):
    with pytest.raises(DeckNotFoundError) as exc_info:
        await exporter.export_deck(user_id, uuid7(), "json")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_export_unknown_format(exporter, spanish_deck, user_id):
    with pytest.raises(UnsupportedFormatError):
        await exporter.export_deck(user_id, spanish_deck.id, "pdf")


@pytest.mark.asyncio
async def test_export_then_reimport_is_idempotent(db_session, user_id):
    """Test that exporting an imported deck and importing it back adds nothing."""
    importer = DeckImporter(db_session)
    imported = await importer.import_deck(SPANISH_JSON_WITH_IDS, "json", user_id)
    deck_id = imported.imported_decks[0].id

    payload = await DeckExporter(db_session).export_deck(user_id, deck_id, "json")
    result = await importer.import_deck(payload.content, "json", user_id, merge_duplicates=True)

    assert [card["id"] for card in json.loads(payload.content)["cards"]] == ["es-1", "es-2"]
    assert result.total_cards_imported == 0
    assert result.skipped_cards == 2


# ==================== Progress Tests ====================


@pytest.mark.asyncio
async def test_export_with_progress(db_session, user_id):
    deck = await DeckFactory.create_async(db_session, owner_id=user_id, title="Progress")
    card = await CardFactory.create_async(db_session, deck_id=deck.id, position=0)
    source = StaticProgressSource(
        {card.id: CardProgressData(review_count=5, ease_factor=2.6, interval_days=9)}
    )
    exporter = DeckExporter(db_session, progress_source=source)

    payload = await exporter.export_deck(user_id, deck.id, "anki", include_progress=True)

    anki_card = json.loads(payload.content)["cards"][0]
    assert (anki_card["ivl"], anki_card["factor"], anki_card["reps"]) == (9, 2600, 5)
    assert source.calls == [(user_id, [card.id])]


@pytest.mark.asyncio
async def test_export_progress_not_requested(db_session, spanish_deck, user_id):
    """Test that the progress source is not queried unless asked."""
    source = StaticProgressSource({})
    exporter = DeckExporter(db_session, progress_source=source)

    await exporter.export_deck(user_id, spanish_deck.id, "json")

    assert source.calls == []


@pytest.mark.asyncio
async def test_export_progress_without_tracker(exporter, spanish_deck, user_id):
    """Test the default null source: progress requested but none known."""
    payload = await exporter.export_deck(user_id, spanish_deck.id, "json", include_progress=True)

    document = json.loads(payload.content)
    assert document["metadata"]["includes_progress"] is True
    assert all(card["progress"] is None for card in document["cards"])


# ==================== export_decks Tests ====================


@pytest.mark.asyncio
async def test_bulk_json_is_array_in_requested_order(exporter, spanish_deck, french_deck, user_id):
    payload = await exporter.export_decks(user_id, [french_deck.id, spanish_deck.id], "json")

    assert payload.filename == "decks_export.json"
    documents = json.loads(payload.content)
    assert [document["title"] for document in documents] == ["French", "Spanish"]


@pytest.mark.asyncio
async def test_bulk_csv_has_single_header(exporter, spanish_deck, french_deck, user_id):
    payload = await exporter.export_decks(user_id, [spanish_deck.id, french_deck.id], "csv")

    rows = list(csv.reader(io.StringIO(payload.content.decode("utf-8"))))
    assert rows[0] == ["front", "back", "tags", "explanation", "difficulty"]
    assert [row[0] for row in rows[1:]] == ["hola", "adios", "bonjour"]
    assert payload.filename == "decks_export.csv"


@pytest.mark.asyncio
async def test_bulk_markdown(exporter, spanish_deck, french_deck, user_id):
    payload = await exporter.export_decks(user_id, [spanish_deck.id, french_deck.id], "markdown")

    content = payload.content.decode("utf-8")
    assert content.index("# Spanish") < content.index("# French")
    assert payload.filename == "decks_export.md"


@pytest.mark.asyncio
async def test_bulk_anki(exporter, spanish_deck, french_deck, user_id):
    payload = await exporter.export_decks(user_id, [spanish_deck.id, french_deck.id], "anki")

    assert [deck["name"] for deck in json.loads(payload.content)] == ["Spanish", "French"]


@pytest.mark.asyncio
async def test_bulk_missing_deck_fails_whole_export(exporter, spanish_deck, user_id):
    missing_id = uuid7()

    with pytest.raises(DeckNotFoundError) as exc_info:
        await exporter.export_decks(user_id, [spanish_deck.id, missing_id], "json")

    assert str(missing_id) in exc_info.value.message


@pytest.mark.asyncio
async def test_bulk_foreign_deck_fails_whole_export(
    exporter, db_session, spanish_deck, user_id, other_user_id
):
    foreign = await DeckFactory.create_async(db_session, owner_id=other_user_id)

    with pytest.raises(DeckNotFoundError):
        await exporter.export_decks(user_id, [spanish_deck.id, foreign.id], "json")


@pytest.mark.asyncio
async def test_bulk_empty_id_list(exporter, user_id):
    with pytest.raises(InvalidInputError):
        await exporter.export_decks(user_id, [], "json")
