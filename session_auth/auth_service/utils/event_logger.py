"""
Logging setup and security event logging for the auth service.
"""
from typing import Optional
from fastapi import Request
import sys
import logging
import os

from ..config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("session_auth.security")


def configure_logging(log_dir: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    Configure root logging: stdout always, plus combined.log and error.log
    in ``log_dir`` when the directory can be created.
    """
    log_dir = log_dir or settings.LOG_DIR
    level = (level or settings.LOG_LEVEL).upper()

    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handlers, but continue without them if directory creation fails
    try:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(log_dir, "combined.log")))
        error_handler = logging.FileHandler(os.path.join(log_dir, "error.log"))
        error_handler.setLevel(logging.ERROR)
        handlers.append(error_handler)
    except (OSError, PermissionError) as e:
        print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def get_client_ip(request: Request) -> Optional[str]:
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # Check for X-Forwarded-For header (proxy/load balancer scenarios)
    if not ip_address and request.headers.get("x-forwarded-for"):
        # X-Forwarded-For can contain multiple IPs, take the first one
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()

    return ip_address


def log_security_event(
    event: str,
    request: Request,
    role: str,
    include_method: bool = False,
) -> None:
    """
    Log a security event with the caller's context.

    Args:
        event: Short description, e.g. "Bot detected"
        request: Incoming request
        role: Role the request was evaluated under
        include_method: Also log the HTTP method
    """
    context = {
        "ip": get_client_ip(request),
        "role": role,
        "user_agent": request.headers.get("user-agent"),
        "path": request.url.path,
    }
    if include_method:
        context["method"] = request.method

    logger.warning(
        "%s %s", event, " ".join(f"{key}={value}" for key, value in context.items())
    )
