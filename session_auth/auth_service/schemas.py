from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from typing import Annotated, Literal


def _normalize_email(value):
    if isinstance(value, str):
        value = value.strip().lower()
        if "<" in value or ">" in value:
            raise ValueError("Email must be a plain address")
        if len(value) < 5:
            raise ValueError("Email is required")
        if len(value) > 255:
            raise ValueError("Email is too long")
    return value


class SignupRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=6, max_length=255)]
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    role: Literal["user", "admin"] = "user"

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class SigninRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    message: str
    user: UserOut


class MessageResponse(BaseModel):
    message: str
