"""
Health check endpoints for the auth service
"""
from fastapi import APIRouter, HTTPException, status
from datetime import datetime
from typing import Dict, Any
import time

from ..db import check_db_connection

router = APIRouter(tags=["health"])

STARTED_AT = time.monotonic()


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        dict: Health status, timestamp and process uptime in seconds
    """
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_check() -> Dict[str, Any]:
    """
    Readiness check endpoint with database status.

    Raises:
        HTTPException: 503 if the database is unreachable
    """
    db_connected = check_db_connection()

    response = {
        "status": "ready" if db_connected else "not_ready",
        "database": "connected" if db_connected else "disconnected",
        "timestamp": datetime.utcnow().isoformat(),
    }

    if not db_connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response
        )

    return response


@router.get("/api")
def api_root() -> Dict[str, str]:
    return {"message": "Auth API is running"}
