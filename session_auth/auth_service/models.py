from sqlalchemy import Column, Integer, String, DateTime, Enum
from datetime import datetime
from .db import Base

USER_ROLES = ("user", "admin")


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(Enum(*USER_ROLES, name="user_role"), default="user", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def to_view(self) -> dict:
        """
        Sanitized projection of the user record.

        Returns:
            Dictionary with every public field; the password hash is never included.
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "created_at": self.created_at,
        }
