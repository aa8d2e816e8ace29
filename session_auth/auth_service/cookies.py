"""
Session cookie helpers.

The cookie carries the signed token as an opaque value; its attributes come
from configuration and nothing is stored server-side.
"""
from fastapi import Response

from .config import settings


def cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "strict",
        "path": "/",
    }


def set_cookie(response: Response, name: str, token: str) -> None:
    response.set_cookie(
        key=name,
        value=token,
        max_age=settings.JWT_EXPIRES_IN,
        **cookie_options(),
    )


def clear_cookie(response: Response, name: str) -> None:
    response.delete_cookie(key=name, **cookie_options())
