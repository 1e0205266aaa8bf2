"""API routers package."""

from deckoracle.api import system, transfer

__all__ = [
    "system",
    "transfer",
]
