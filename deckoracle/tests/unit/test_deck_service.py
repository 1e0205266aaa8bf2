"""Unit tests for DeckService with mocked database sessions.

These tests use unittest.mock to mock AsyncSession and avoid real database interactions.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from deckoracle.core.exceptions import DuplicateDeckError
from deckoracle.modules.decks.schemas import DeckCreate
from deckoracle.modules.decks.service import DeckService, is_duplicate_title_violation
from deckoracle.tests.factories import DeckFactory


# ==================== Fixtures ====================


@pytest.fixture
def deck_service(mock_session):
    """Create DeckService instance with mocked session."""
    return DeckService(mock_session)


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO decks", {}, Exception(message))


# ==================== create Tests ====================


@pytest.mark.asyncio
async def test_create_deck_success(deck_service, mock_session, user_id):
    """Test successful deck creation."""
    deck = await deck_service.create(user_id, DeckCreate(title="Spanish"))

    mock_session.add.assert_called_once_with(deck)
    mock_session.flush.assert_awaited_once()
    mock_session.refresh.assert_awaited_once_with(deck)
    assert deck.title == "Spanish"
    assert deck.owner_id == user_id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "message",
    [
        'duplicate key value violates unique constraint "uq_decks_owner_title"',
        "UNIQUE constraint failed: decks.owner_id, decks.title",
    ],
)
async def test_create_deck_duplicate_title(deck_service, mock_session, user_id, message):
    """Test that a concurrent duplicate title becomes DuplicateDeckError."""
    mock_session.flush.side_effect = _integrity_error(message)

    with pytest.raises(DuplicateDeckError) as exc_info:
        await deck_service.create(user_id, DeckCreate(title="Spanish"))

    assert exc_info.value.details["value"] == "Spanish"


@pytest.mark.asyncio
async def test_create_deck_other_integrity_error(deck_service, mock_session, user_id):
    """Test that unrelated integrity errors propagate unchanged."""
    mock_session.flush.side_effect = _integrity_error("FOREIGN KEY constraint failed")

    with pytest.raises(IntegrityError):
        await deck_service.create(user_id, DeckCreate(title="Spanish"))


def test_is_duplicate_title_violation():
    assert is_duplicate_title_violation(_integrity_error("uq_decks_owner_title"))
    assert not is_duplicate_title_violation(_integrity_error("uq_cards_deck_source"))


# ==================== read Tests ====================


@pytest.mark.asyncio
async def test_get_by_id_for_user_not_found(deck_service, mock_session, user_id):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute.return_value = mock_result

    result = await deck_service.get_by_id_for_user(user_id, user_id)

    assert result is None


@pytest.mark.asyncio
async def test_list_by_ids_keeps_requested_order(deck_service, mock_session, user_id):
    """Test that decks come back in the caller's order, missing ones dropped."""
    first = DeckFactory.build(owner_id=user_id)
    second = DeckFactory.build(owner_id=user_id)
    missing = DeckFactory.build(owner_id=user_id)
    mock_result = MagicMock()
    mock_result.scalars.return_value = [first, second]
    mock_session.execute.return_value = mock_result

    result = await deck_service.list_by_ids_for_user([second.id, missing.id, first.id], user_id)

    assert result == [second, first]


@pytest.mark.asyncio
async def test_list_by_ids_empty(deck_service, mock_session, user_id):
    assert await deck_service.list_by_ids_for_user([], user_id) == []
    mock_session.execute.assert_not_awaited()
