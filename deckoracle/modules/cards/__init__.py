"""Cards module."""

from .models import Card
from .service import CardService

__all__ = ["Card", "CardService"]
