"""
Postboard Backend — User & Session Schemas
============================================

What:  API contract for registration, login and the session token.
Who:   routes/users.py (request bodies and response models),
       UserService (return types).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def normalize_email(value: str) -> str:
    """Login credentials compare case-insensitively and ignore surrounding blanks."""
    return value.strip().lower()


class UserCredentials(BaseModel):
    """
    What:  Body of POST /api/user/login.
    Why:   Only format is checked here; whether the pair is correct is the
           service's job.
    """
    email: str = Field(min_length=3, max_length=255, description="Login e-mail")
    password: str = Field(min_length=1, max_length=128, description="Plaintext password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = normalize_email(v)
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("email must look like name@domain")
        return v


class UserCreate(UserCredentials):
    """
    What:  Body of POST /api/user/ (registration).
    Rules: password 6–128 chars; name optional.
    """
    password: str = Field(min_length=6, max_length=128, description="Plaintext password")
    name: Optional[str] = Field(default=None, max_length=100, description="Display name")


class UserResponse(BaseModel):
    """Public view of a user. Returned by registration and inside the login response."""
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """
    What:  The session token issued by login.
    How:   Send it back as `Authorization: Bearer <access_token>`.
    """
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserResponse
