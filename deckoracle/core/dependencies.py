"""
FastAPI зависимости (dependencies).
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from .exceptions import AuthenticationError
from .security import extract_user_id

_bearer_scheme = HTTPBearer(auto_error=False)


# ==================== Database Dependency ====================

DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


# ==================== Authentication Dependencies ====================


async def get_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """
    Извлечь bearer токен из заголовка Authorization.

    Raises:
        AuthenticationError: Токен не предоставлен.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authorization header is required")
    return credentials.credentials


async def get_current_user_id(token: str = Depends(get_token)) -> UUID:
    """
    Получить ID текущего пользователя из токена.

    Raises:
        TokenExpiredError: Токен истек.
        TokenInvalidError: Токен невалиден.
    """
    return extract_user_id(token)


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
