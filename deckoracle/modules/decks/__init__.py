"""Decks module."""

from .models import Deck
from .schemas import DeckCreate
from .service import DeckService

__all__ = ["Deck", "DeckCreate", "DeckService"]
