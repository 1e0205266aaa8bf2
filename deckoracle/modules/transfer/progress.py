"""Study progress lookup used by exports.

Progress is owned by the study-tracking service; exports only read it
through this protocol, keyed by card id.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol
from uuid import UUID

from .schemas import CardProgressData


class ProgressSource(Protocol):
    async def get_progress(
        self,
        user_id: UUID,
        card_ids: Sequence[UUID],
    ) -> Mapping[UUID, CardProgressData]:
        """Progress of ``user_id`` for the given cards; unknown cards are omitted."""
        ...


class NullProgressSource:
    """Progress source for deployments without study tracking."""

    async def get_progress(
        self,
        user_id: UUID,
        card_ids: Sequence[UUID],
    ) -> Mapping[UUID, CardProgressData]:
        return {}


def get_progress_source() -> ProgressSource:
    """FastAPI dependency; override to plug in a real tracker."""
    return NullProgressSource()
