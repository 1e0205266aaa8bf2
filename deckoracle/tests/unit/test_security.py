"""Unit tests for JWT verification and the auth dependency."""

from datetime import timedelta

import jwt
import pytest

from deckoracle.core.config import settings
from deckoracle.core.dependencies import get_token
from deckoracle.core.exceptions import AuthenticationError, TokenExpiredError, TokenInvalidError
from deckoracle.core.security import (
    create_access_token,
    decode_token,
    extract_user_id,
    verify_access_token,
)


def test_extract_user_id_roundtrip(user_id):
    token = create_access_token(user_id)

    assert extract_user_id(token) == user_id


def test_decode_token_payload(user_id):
    token = create_access_token(user_id)

    payload = decode_token(token)

    assert payload.sub == str(user_id)
    assert payload.type == "access"
    assert payload.exp > payload.iat


def test_expired_token(user_id):
    token = create_access_token(user_id, expires_delta=timedelta(seconds=-1))

    with pytest.raises(TokenExpiredError) as exc_info:
        decode_token(token)

    assert exc_info.value.status_code == 401


def test_wrong_signature(user_id):
    token = jwt.encode({"sub": str(user_id)}, "another-secret", algorithm="HS256")

    with pytest.raises(TokenInvalidError):
        decode_token(token)


def test_garbage_token():
    with pytest.raises(TokenInvalidError):
        decode_token("not-a-jwt")


def test_missing_required_claims(user_id):
    token = jwt.encode(
        {"sub": str(user_id)},
        settings.jwt.secret_key,
        algorithm=settings.jwt.algorithm,
    )

    with pytest.raises(TokenInvalidError):
        decode_token(token)


def test_refresh_token_is_not_access_token(user_id):
    token = create_access_token(user_id, additional_claims={"type": "refresh"})

    with pytest.raises(TokenInvalidError, match="Expected access token"):
        verify_access_token(token)


def test_subject_must_be_uuid():
    token = create_access_token("not-a-uuid")

    with pytest.raises(TokenInvalidError):
        extract_user_id(token)


@pytest.mark.asyncio
async def test_get_token_requires_credentials():
    with pytest.raises(AuthenticationError):
        await get_token(None)
