from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
import logging
import jwt

from .config import settings
from .errors import HashingError, InvalidToken

logger = logging.getLogger(__name__)

CLAIM_KEYS = ("id", "email", "role")

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=settings.HASH_ROUNDS,
)

# Verified against when an email is unknown so both signin failures cost one hash
DUMMY_PASSWORD_HASH = pwd_context.hash("unknown-user-placeholder")


def hash_password(password: str) -> str:
    try:
        return pwd_context.hash(password)
    except (TypeError, ValueError) as e:
        logger.error("Hash password error: %s", e)
        raise HashingError() from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (TypeError, ValueError) as e:
        logger.error("Compare password error: %s", e)
        raise HashingError("Error comparing passwords") from e


def create_access_token(claims: Dict[str, Any]) -> str:
    """
    Sign the identity claims of a user into a JWT.

    Args:
        claims: Mapping holding at least ``id``, ``email`` and ``role``

    Returns:
        Encoded token string carrying the claims plus ``iat`` and ``exp``
    """
    now = datetime.now(timezone.utc)
    payload = {key: claims[key] for key in CLAIM_KEYS}
    payload["iat"] = now
    payload["exp"] = now + timedelta(seconds=settings.JWT_EXPIRES_IN)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a token and return its identity claims.

    Raises:
        InvalidToken: If the token is expired, tampered with, or lacks a claim
    """
    try:
        data = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc

    missing = [key for key in CLAIM_KEYS if key not in data]
    if missing:
        raise InvalidToken(f"Token is missing claims: {', '.join(missing)}")
    return {key: data[key] for key in CLAIM_KEYS}
