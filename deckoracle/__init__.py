"""DeckOracle: import and export of flashcard decks."""

__version__ = "1.0.0"
