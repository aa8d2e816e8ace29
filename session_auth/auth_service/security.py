"""
Rate limiting and bot/attack screening.

SecurityGuard is the policy engine: given a request and the role it runs
under, it answers with a Decision. SecurityMiddleware asks the guard before
any handler runs and turns denials into 403 responses.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional
from urllib.parse import unquote
import logging
import re

from fastapi import Request, status
from fastapi.responses import JSONResponse
from limits import RateLimitItemPerMinute
from limits.storage import MemoryStorage, Storage
from limits.strategies import MovingWindowRateLimiter
from starlette.types import ASGIApp, Receive, Scope, Send

from .auth import decode_access_token
from .config import settings
from .errors import InvalidToken
from .utils.event_logger import get_client_ip, log_security_event

logger = logging.getLogger(__name__)

BOT = "bot"
SHIELD = "shield"
RATE_LIMIT = "rate_limit"

DENIAL_MESSAGES = {
    BOT: "Automated requests are not allowed.",
    SHIELD: "Request blocked by security policy.",
    RATE_LIMIT: "Rate limit exceeded. Slow down.",
}

DENIAL_EVENTS = {
    BOT: "Bot detected",
    SHIELD: "Shield blocked request",
    RATE_LIMIT: "Rate limit exceeded",
}

# Common injection / traversal signatures checked against path and query string
SHIELD_PATTERNS = [
    re.compile(r"<\s*script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"\bunion\b.+\bselect\b", re.IGNORECASE),
    re.compile(r"'\s*or\s+'?\d*'?\s*=\s*'?\d*", re.IGNORECASE),
    re.compile(r";\s*drop\s+table", re.IGNORECASE),
    re.compile(r"\.\./"),
]


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(False, reason)

    @property
    def message(self) -> Optional[str]:
        return DENIAL_MESSAGES.get(self.reason)


class SecurityGuard:
    """
    Per-role sliding window quotas plus user-agent and payload screening.

    Quotas are counted per role and client IP over a moving one-minute
    window.
    """

    def __init__(
        self,
        limits_per_minute: Optional[Dict[str, int]] = None,
        bot_user_agents: Optional[Iterable[str]] = None,
        storage: Optional[Storage] = None,
    ):
        self.limits_per_minute = limits_per_minute or {
            "admin": settings.RATE_LIMIT_ADMIN,
            "user": settings.RATE_LIMIT_USER,
            "guest": settings.RATE_LIMIT_GUEST,
        }
        self.bot_user_agents = [
            agent.lower() for agent in (bot_user_agents or settings.BOT_USER_AGENTS)
        ]
        self.limiter = MovingWindowRateLimiter(storage or MemoryStorage())

    def quota_for(self, role: str) -> int:
        return self.limits_per_minute.get(role, self.limits_per_minute["guest"])

    def is_bot(self, request: Request) -> bool:
        user_agent = (request.headers.get("user-agent") or "").lower()
        if not user_agent:
            return True
        return any(agent in user_agent for agent in self.bot_user_agents)

    def is_attack(self, request: Request) -> bool:
        target = unquote(request.url.path)
        if request.url.query:
            target += "?" + unquote(request.url.query)
        return any(pattern.search(target) for pattern in SHIELD_PATTERNS)

    def evaluate(self, request: Request, role: str) -> Decision:
        if self.is_bot(request):
            return Decision.deny(BOT)
        if self.is_attack(request):
            return Decision.deny(SHIELD)

        item = RateLimitItemPerMinute(self.quota_for(role))
        key = get_client_ip(request) or "unknown"
        if not self.limiter.hit(item, f"{role}-rate-limit", key):
            return Decision.deny(RATE_LIMIT)
        return Decision.allow()


def role_from_request(request: Request) -> str:
    """Role carried by a valid session cookie, ``guest`` otherwise."""
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        return "guest"
    try:
        return decode_access_token(token)["role"]
    except InvalidToken:
        return "guest"


class SecurityMiddleware:
    """Raw ASGI middleware; the request body is never read or wrapped."""

    def __init__(self, app: ASGIApp, guard_factory: Callable[[Request], SecurityGuard]):
        self.app = app
        self.guard_factory = guard_factory

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        role = "guest"
        try:
            role = role_from_request(request)
            decision = self.guard_factory(request).evaluate(request, role)
        except Exception:
            logger.exception("Security middleware error: path=%s role=%s", request.url.path, role)
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal server error"},
            )
            await response(scope, receive, send)
            return

        if not decision.allowed:
            log_security_event(
                DENIAL_EVENTS[decision.reason],
                request,
                role,
                include_method=decision.reason == SHIELD,
            )
            response = JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": "Forbidden", "message": decision.message},
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
