"""
User persistence on top of a SQLAlchemy session.
"""
from typing import Optional
import logging

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .db import get_db
from .errors import DuplicateEmail
from .models import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def insert(self, name: str, email: str, hashed_password: str, role: str = "user") -> dict:
        """
        Insert a user row and return its sanitized view.

        The unique constraint on ``users.email`` is the final word on
        uniqueness: a violation here is reported as DuplicateEmail even when
        the caller's pre-check passed.
        """
        user = User(name=name, email=email, password=hashed_password, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Unique constraint rejected insert for email=%s", email)
            raise DuplicateEmail() from e
        self.db.refresh(user)
        return user.to_view()


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
