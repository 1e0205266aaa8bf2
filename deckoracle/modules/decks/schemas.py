"""Схемы Pydantic для операций с колодами."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from deckoracle.shared.schemas import BaseSchema


class DeckCreate(BaseSchema):
    """Схема для создания новой колоды."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Название колоды",
        examples=["Spanish"],
    )
    description: str | None = Field(
        default=None,
        description="Описание колоды (опционально)",
    )
    folder_id: UUID | None = Field(
        default=None,
        description="ID папки, в которую помещается колода",
    )
    is_public: bool = Field(
        default=False,
        description="Видна ли колода другим пользователям",
    )
