"""Базовые схемы Pydantic для API запросов и ответов."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Базовая схема с общей конфигурацией.

    Все схемы наследуются от этого класса для единообразного
    поведения в приложении.
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        populate_by_name=True,
    )


class HealthResponse(BaseSchema):
    """Схема ответа проверки работоспособности."""

    status: str = Field(
        ...,
        description="Общий статус работоспособности",
        examples=["healthy", "unhealthy"],
    )
    version: str | None = Field(
        default=None,
        description="Версия приложения",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Временная метка проверки",
    )
    dependencies: dict[str, str] | None = Field(
        default=None,
        description="Статус отдельных зависимостей",
    )
