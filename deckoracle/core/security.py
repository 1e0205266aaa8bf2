"""
Безопасность: проверка JWT токенов.

Токены выпускает внешний сервис аутентификации; здесь только
проверка подписи и извлечение ID пользователя. ``create_access_token``
нужен тестам и служебным скриптам.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from pydantic import BaseModel

from .config import settings
from .exceptions import TokenExpiredError, TokenInvalidError

ACCESS_TOKEN_TYPE = "access"


class TokenPayload(BaseModel):
    """Payload JWT токена."""

    sub: str  # user_id
    type: str
    exp: datetime
    iat: datetime


def create_access_token(
    user_id: UUID | str,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """
    Создать access токен.

    Args:
        user_id: ID пользователя.
        expires_delta: Время жизни токена (по умолчанию из настроек).
        additional_claims: Дополнительные claims.

    Returns:
        Закодированный JWT токен.
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt.access_token_expire_minutes)

    payload: dict[str, Any] = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "exp": now + expires_delta,
        "iat": now,
    }
    if additional_claims:
        payload.update(additional_claims)

    return jwt.encode(payload, settings.jwt.secret_key, algorithm=settings.jwt.algorithm)


def decode_token(token: str) -> TokenPayload:
    """
    Декодировать и валидировать JWT токен.

    Raises:
        TokenExpiredError: Токен истек.
        TokenInvalidError: Подпись или структура токена невалидны.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt.secret_key,
            algorithms=[settings.jwt.algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError() from e

    return TokenPayload(
        sub=payload["sub"],
        type=payload.get("type", ACCESS_TOKEN_TYPE),
        exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
        iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
    )


def verify_access_token(token: str) -> TokenPayload:
    """Проверить, что токен валиден и является access токеном."""
    payload = decode_token(token)
    if payload.type != ACCESS_TOKEN_TYPE:
        raise TokenInvalidError("Expected access token")
    return payload


def extract_user_id(token: str) -> UUID:
    """Получить UUID пользователя из access токена."""
    payload = verify_access_token(token)
    try:
        return UUID(payload.sub)
    except ValueError as e:
        raise TokenInvalidError("Token subject is not a user id") from e
