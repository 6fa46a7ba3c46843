"""
Postboard Backend — Post Schemas
==================================

What:  API contract for creating, updating, deleting and listing posts.
Who:   routes/posts.py, routes/users.py (myPosts), PostService.

Note:
    The owner is never part of a request body; it always comes from the
    session token. PostUpdate/PostDelete carry the post id in the body to
    match the fixed `/api/post/update` and `/api/post/delete` paths.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PostCreate(BaseModel):
    """Body of POST /api/post/create."""
    title: str = Field(min_length=1, max_length=200)
    body: str = Field(min_length=1, max_length=20000)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("body")
    @classmethod
    def reject_blank_body(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("body must not be blank")
        return v


class PostUpdate(BaseModel):
    """
    Body of PUT /api/post/update.

    At least one of title/body must be present; the service rejects an
    update that changes nothing.
    """
    id: uuid.UUID
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    body: Optional[str] = Field(default=None, min_length=1, max_length=20000)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("body")
    @classmethod
    def reject_blank_body(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("body must not be blank")
        return v


class PostDelete(BaseModel):
    """Body of DELETE /api/post/delete."""
    id: uuid.UUID


class PostResponse(BaseModel):
    """A post as returned by create, update and myPosts."""
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    body: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AckResponse(BaseModel):
    """Minimal success acknowledgment (delete)."""
    message: str
    id: uuid.UUID
