"""
Signup, signin and signout endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from ..auth import create_access_token
from ..config import settings
from ..cookies import clear_cookie, set_cookie
from ..errors import DuplicateEmail, InvalidPassword, UserNotFound
from ..schemas import AuthResponse, MessageResponse, SigninRequest, SignupRequest
from ..service import AuthService, get_auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _internal_error(operation: str, exc: Exception) -> HTTPException:
    logger.error("%s error: %r", operation, exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


def _issue_session(response: Response, user: dict) -> None:
    token = create_access_token(user)
    set_cookie(response, settings.COOKIE_NAME, token)


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    try:
        user = service.register(payload.name, payload.email, payload.password, payload.role)
        _issue_session(response, user)
    except DuplicateEmail as e:
        logger.warning("Signup rejected: email=%s already registered", payload.email)
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"message": str(e)})
    except Exception as e:
        raise _internal_error("Signup", e) from e

    logger.info("User signed up: %s with role: %s", payload.email, payload.role)
    return {"message": "User signed up successfully", "user": user}


@router.post("/signin", response_model=AuthResponse)
def signin(
    payload: SigninRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    try:
        user = service.authenticate(payload.email, payload.password)
        _issue_session(response, user)
    except (UserNotFound, InvalidPassword) as e:
        # Same response for both so callers cannot probe which factor failed
        logger.warning("Signin rejected: email=%s reason=%s", payload.email, e)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": INVALID_CREDENTIALS},
        )
    except Exception as e:
        raise _internal_error("Signin", e) from e

    logger.info("User signed in: %s", payload.email)
    return {"message": "User signed in successfully", "user": user}


@router.post("/signout", response_model=MessageResponse)
def signout(response: Response):
    try:
        clear_cookie(response, settings.COOKIE_NAME)
    except Exception as e:
        raise _internal_error("Signout", e) from e

    logger.info("User signed out")
    return {"message": "User signed out successfully"}
