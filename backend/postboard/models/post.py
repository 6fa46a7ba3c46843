"""
Postboard Backend — Post SQLAlchemy Model
===========================================

What:  ORM model for the `posts` collection.
Who:   Written by PostService (create/update/delete), read by
       UserService.list_posts ("my posts").

Table Design:
    - user_id: owner; set from the verified session token at creation and
      never changed afterwards
    - created_at / updated_at: UTC; updated_at is refreshed on every update
    - idx_posts_user_created: serves "my posts, newest first"
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base

if TYPE_CHECKING:
    from postboard.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """A blog post owned by exactly one user."""

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    author: Mapped["User"] = relationship(back_populates="posts")

    __table_args__ = (
        Index("idx_posts_user_created", "user_id", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
