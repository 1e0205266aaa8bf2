"""Доступ к папкам пользователя."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Folder


class FolderService:
    """Чтение папок с проверкой владельца."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_owner(self, folder_id: UUID, owner_id: UUID) -> Folder | None:
        """Получить папку, если она принадлежит пользователю."""
        stmt = select(Folder).where(Folder.id == folder_id, Folder.owner_id == owner_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
