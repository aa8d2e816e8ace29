"""
Tests for password hashing, token signing and the session cookie helpers.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import Response

from session_auth.auth_service.auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from session_auth.auth_service.config import settings
from session_auth.auth_service.cookies import clear_cookie, set_cookie
from session_auth.auth_service.errors import HashingError, InvalidToken

CLAIMS = {"id": 7, "email": "alice@example.com", "role": "user"}


def test_hash_is_salted_and_verifiable():
    first = hash_password("password123")
    second = hash_password("password123")

    assert first != second
    assert verify_password("password123", first)
    assert verify_password("password123", second)
    assert not verify_password("password124", first)


def test_hash_uses_configured_rounds():
    assert f"$pbkdf2-sha256${settings.HASH_ROUNDS}$" in hash_password("password123")


def test_hash_rejects_non_string():
    with pytest.raises(HashingError):
        hash_password(None)


def test_verify_malformed_hash_raises():
    with pytest.raises(HashingError):
        verify_password("password123", "plaintext-in-the-db")


def test_token_round_trip():
    token = create_access_token(dict(CLAIMS, name="Alice Smith"))
    assert decode_access_token(token) == CLAIMS


def test_token_carries_expiry():
    token = create_access_token(CLAIMS)
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])

    assert payload["exp"] - payload["iat"] == settings.JWT_EXPIRES_IN
    assert "name" not in payload


def test_expired_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(days=2)
    token = jwt.encode(
        dict(CLAIMS, iat=past, exp=past + timedelta(days=1)),
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_tampered_token_is_rejected():
    token = create_access_token(CLAIMS)
    forged = jwt.encode(
        jwt.decode(token, options={"verify_signature": False}) | {"role": "admin"},
        "not-the-server-secret",
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        decode_access_token(forged)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidToken):
        decode_access_token("definitely.not.ajwt")


def test_token_missing_claims_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"id": 1, "iat": now, "exp": now + timedelta(minutes=5)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_set_cookie_attributes():
    response = Response()
    set_cookie(response, "user", "token-value")
    header = response.headers["set-cookie"]

    assert header.startswith("user=token-value")
    assert "HttpOnly" in header
    assert "SameSite=strict" in header
    assert f"Max-Age={settings.JWT_EXPIRES_IN}" in header
    assert "Secure" not in header


def test_set_cookie_secure_in_production(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    response = Response()
    set_cookie(response, "user", "token-value")
    assert "Secure" in response.headers["set-cookie"]


def test_clear_cookie_expires_immediately():
    response = Response()
    clear_cookie(response, "user")
    header = response.headers["set-cookie"]

    assert header.startswith('user=""')
    assert "Max-Age=0" in header
    assert "HttpOnly" in header
