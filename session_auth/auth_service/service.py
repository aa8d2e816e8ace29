"""
Core authentication logic.

AuthService ties the user repository to the password hasher. UserNotFound,
InvalidPassword and DuplicateEmail propagate unchanged so the HTTP layer can
map them; every other failure is logged with its detail here and re-raised as
a generic error that keeps the original as its cause.
"""
import logging

from fastapi import Depends

from .auth import DUMMY_PASSWORD_HASH, hash_password, verify_password
from .errors import (
    AuthenticationFailed,
    DuplicateEmail,
    InvalidPassword,
    RegistrationFailed,
    UserNotFound,
)
from .repository import UserRepository, get_user_repository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserRepository):
        self.users = users

    def authenticate(self, email: str, password: str) -> dict:
        """
        Check an email/password pair.

        Args:
            email: Normalized email address
            password: Plaintext password

        Returns:
            Sanitized user view

        Raises:
            UserNotFound: No user has this email
            InvalidPassword: The password does not match
            AuthenticationFailed: Lookup or hash verification failed
        """
        try:
            user = self.users.find_by_email(email)
            if user is None:
                verify_password(password, DUMMY_PASSWORD_HASH)
                raise UserNotFound()

            if not verify_password(password, user.password):
                raise InvalidPassword()

            logger.info("User authenticated: %s", email)
            return user.to_view()
        except (UserNotFound, InvalidPassword):
            raise
        except Exception as e:
            logger.error("Authenticate user error: email=%s error=%r", email, e)
            raise AuthenticationFailed() from e

    def register(self, name: str, email: str, password: str, role: str = "user") -> dict:
        """
        Create a user after checking that the email is free.

        Raises:
            DuplicateEmail: The email is already registered
            RegistrationFailed: Hashing or storage failed
        """
        try:
            if self.users.find_by_email(email) is not None:
                raise DuplicateEmail()

            hashed = hash_password(password)
            user = self.users.insert(name, email, hashed, role)

            logger.info("New user created: %s with role: %s", email, role)
            return user
        except DuplicateEmail:
            raise
        except Exception as e:
            logger.error("Create user error: email=%s error=%r", email, e)
            raise RegistrationFailed() from e


def get_auth_service(users: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(users)
