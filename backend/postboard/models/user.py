"""
Postboard Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` collection.
Who:   Written by UserService.register, read by UserService.authenticate and
       by the session-token dependency.

Table Design:
    - id: UUID primary key, referenced by posts.user_id
    - email: the login credential; stored normalized (stripped, lower-case)
      and protected by a unique index
    - hashed_password: werkzeug salted hash, never the plaintext
    - created_at: UTC
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base

if TYPE_CHECKING:
    from postboard.models.post import Post


class User(Base):
    """A registered account. Not mutated or deleted after registration."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Unique login credential
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, default=None)

    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # One user → many posts
    posts: Mapped[List["Post"]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
