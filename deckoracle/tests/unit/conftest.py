"""Pytest configuration for unit tests.

Fixtures here build detached model instances and mocked sessions; nothing
touches a database.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from deckoracle.modules.cards.models import Card
from deckoracle.modules.decks.models import Deck
from deckoracle.tests.factories import CardFactory, DeckFactory

FIXED_TIME = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def mock_session():
    """Create a mock AsyncSession for testing."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def sample_deck(user_id: UUID) -> Deck:
    """Detached deck with a description."""
    return DeckFactory.build(
        owner_id=user_id,
        title="Spanish",
        description="Basic words",
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


@pytest.fixture
def sample_cards(sample_deck: Deck) -> list[Card]:
    """Two detached cards in position order."""
    return [
        CardFactory.build(
            deck_id=sample_deck.id,
            front="hola",
            back="hello",
            position=0,
            created_at=FIXED_TIME,
            updated_at=FIXED_TIME,
        ),
        CardFactory.build(
            deck_id=sample_deck.id,
            front="adios",
            back="bye",
            position=1,
            created_at=FIXED_TIME,
            updated_at=FIXED_TIME,
        ),
    ]
