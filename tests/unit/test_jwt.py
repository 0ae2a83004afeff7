"""Tests for bearer token verification."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from taskflow.core.config import get_settings
from taskflow.infrastructure.security import verify_token


def _encode(claims: dict, key: str | None = None) -> str:
    settings = get_settings()
    return jwt.encode(
        claims,
        key or settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )


def test_valid_token_returns_payload() -> None:
    token = _encode({"sub": "7", "exp": datetime.now(UTC) + timedelta(minutes=5)})
    assert verify_token(token)["sub"] == "7"


def test_expired_token_rejected() -> None:
    token = _encode({"sub": "7", "exp": datetime.now(UTC) - timedelta(minutes=5)})
    with pytest.raises(ValueError, match="Invalid token"):
        verify_token(token)


def test_token_without_exp_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token(_encode({"sub": "7"}))


def test_token_without_sub_rejected() -> None:
    token = _encode({"exp": datetime.now(UTC) + timedelta(minutes=5)})
    with pytest.raises(ValueError):
        verify_token(token)


def test_token_signed_with_other_key_rejected() -> None:
    token = _encode(
        {"sub": "7", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        key="some-other-key",
    )
    with pytest.raises(ValueError, match="Invalid token"):
        verify_token(token)


def test_garbage_token_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token("not-a-jwt")
