"""
Конфигурация приложения.
Все значения из переменных окружения.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    """Конфигурация подключения к PostgreSQL."""

    model_config = SettingsConfigDict(env_prefix="DB_", env_file=".env", extra="ignore")

    host: str = "localhost"
    port: int = 5432
    user: str = "deckoracle"
    password: str = "deckoracle"
    name: str = "deckoracle"
    pool_size: int = 5
    max_overflow: int = 10
    # Полный URL перекрывает host/port/user (например, sqlite+aiosqlite для тестов)
    url: str = ""

    @property
    def async_url(self) -> str:
        """URL для asyncpg драйвера."""
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"
        )


class JWTConfig(BaseSettings):
    """Конфигурация JWT токенов."""

    model_config = SettingsConfigDict(env_prefix="JWT_", env_file=".env", extra="ignore")

    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30


class LoggingConfig(BaseSettings):
    """Конфигурация логирования."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = "INFO"
    # "json" включает структурированный вывод для продакшена
    format: str = "console"


class TransferConfig(BaseSettings):
    """Конфигурация импорта и экспорта колод."""

    model_config = SettingsConfigDict(env_prefix="TRANSFER_", env_file=".env", extra="ignore")

    max_upload_bytes: int = 10 * 1024 * 1024
    platform: str = "DeckOracle"
    format_version: str = "1.0"
    # Название колоды, если формат не содержит заголовка (CSV)
    default_deck_title: str = "Imported Deck"


class AppConfig(BaseSettings):
    """Общая конфигурация приложения."""

    model_config = SettingsConfigDict(env_prefix="APP_", env_file=".env", extra="ignore")

    name: str = "DeckOracle"
    version: str = "1.0.0"
    debug: bool = False
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        """Список CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",")]


class Settings:
    """Агрегатор всех конфигураций."""

    def __init__(self) -> None:
        self.db = DatabaseConfig()
        self.jwt = JWTConfig()
        self.logging = LoggingConfig()
        self.transfer = TransferConfig()
        self.app = AppConfig()


@lru_cache
def get_settings() -> Settings:
    """Получить синглтон настроек (кешируется)."""
    return Settings()


settings = get_settings()
