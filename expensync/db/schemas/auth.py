from typing import Optional

from pydantic import field_validator

from .base import CamelModel
from .users import User

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


class SignupRequest(CamelModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        cleaned = (v or "").strip()
        if not cleaned:
            raise ValueError("Name is required")
        if len(cleaned) > 100:
            raise ValueError("Name must be at most 100 characters")
        return cleaned

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str):
        cleaned = normalize_email(v) or ""
        local, _, domain = cleaned.partition("@")
        if not local or "." not in domain or " " in cleaned:
            raise ValueError("Invalid email address")
        return cleaned

    @field_validator("password")
    @classmethod
    def _validate_password(cls, v: str):
        if len(v or "") < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v


class LoginRequest(CamelModel):
    email: str
    password: str


class RefreshRequest(CamelModel):
    refresh_token: Optional[str] = None


class SignupResponse(CamelModel):
    message: str
    user: User


class LoginResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: User


class AccessTokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
