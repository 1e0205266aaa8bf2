"""
Асинхронная настройка SQLAlchemy с пулом соединений.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Self

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    AsyncSessionTransaction,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from .config import settings

# Соглашения об именовании для constraints
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Базовый класс для всех моделей."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        columns = ", ".join(
            f"{col.name}={getattr(self, col.name)!r}" for col in self.__table__.columns
        )
        return f"{self.__class__.__name__}({columns})"


class DatabaseManager:
    """Менеджер базы данных с поддержкой пула соединений."""

    _instance: Self | None = None
    _engine: AsyncEngine | None = None
    _session_factory: async_sessionmaker[AsyncSession] | None = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def engine(self) -> AsyncEngine:
        """Получить движок базы данных."""
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Получить фабрику сессий."""
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._session_factory

    def init(self) -> None:
        """Инициализировать подключение к базе данных."""
        if self._engine is not None:
            return

        engine_options: dict[str, object] = {
            "pool_pre_ping": True,
            "echo": settings.app.debug,
        }
        if settings.db.async_url.startswith("postgresql"):
            engine_options.update(
                pool_size=settings.db.pool_size,
                max_overflow=settings.db.max_overflow,
                pool_recycle=3600,
            )

        self._engine = create_async_engine(settings.db.async_url, **engine_options)

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
            autocommit=False,
        )

    async def close(self) -> None:
        """Закрыть все соединения."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Генератор сессий для FastAPI Depends."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """Проверка работоспособности базы данных."""
        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception:
            return False


# Глобальный экземпляр менеджера БД
db_manager = DatabaseManager()


@asynccontextmanager
async def unit_of_work(session: AsyncSession) -> AsyncGenerator[AsyncSessionTransaction, None]:
    """Открыть транзакцию, которая фиксируется только при успешном выходе из блока.

    Если сессия уже находится в транзакции (например, в рамках запроса),
    используется SAVEPOINT: при ошибке откатываются только изменения блока.

    Yields:
        Дескриптор транзакции.
    """
    if session.in_transaction():
        async with session.begin_nested() as tx:
            yield tx
    else:
        async with session.begin() as tx:
            yield tx


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency для получения сессии базы данных."""
    async for session in db_manager.get_session():
        yield session
