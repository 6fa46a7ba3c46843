"""
Postboard Backend — Post Service
==================================

What:  Create, update and delete posts on behalf of the calling user.
Who:   routes/posts.py.

Ownership:
    Enforced here, at the data layer. Lookups for update/delete filter on
    both the post id and the caller's user id, so a post that belongs to
    someone else behaves exactly like one that does not exist (404). The
    response never tells a caller that another user's post id is valid.

Writes are committed before a method returns; a failed commit surfaces as
DatabaseError (500) instead of a success response.
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import DatabaseError, NotFoundError, ValidationError
from postboard.models.post import Post
from postboard.models.user import User
from postboard.schemas.post import AckResponse, PostCreate, PostResponse, PostUpdate

logger = logging.getLogger(__name__)


class PostService:
    """Stateless; every method receives the session and the authenticated user."""

    async def create(self, db: AsyncSession, user: User, data: PostCreate) -> PostResponse:
        try:
            post = Post(user_id=user.id, title=data.title, body=data.body)
            db.add(post)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the post. Please try again.",
                context={"user_id": str(user.id)},
            )

        logger.info("Post %s created by %s", post.id, user.id)
        return PostResponse.model_validate(post)

    async def update(self, db: AsyncSession, user: User, data: PostUpdate) -> PostResponse:
        """
        Apply the given fields to one of the caller's posts.

        Raises:
            ValidationError: neither title nor body supplied
            NotFoundError: no post with that id owned by the caller
        """
        if data.title is None and data.body is None:
            raise ValidationError(message="Provide at least one of 'title' or 'body'")

        post = await self._get_owned(db, user, data.id)
        if data.title is not None:
            post.title = data.title
        if data.body is not None:
            post.body = data.body
        post.updated_at = datetime.now(timezone.utc)

        try:
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", data.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post. Please try again.",
                context={"post_id": str(data.id)},
            )

        logger.info("Post %s updated by %s", post.id, user.id)
        return PostResponse.model_validate(post)

    async def delete(self, db: AsyncSession, user: User, post_id: uuid.UUID) -> AckResponse:
        """
        Remove one of the caller's posts.

        Raises:
            NotFoundError: no post with that id owned by the caller
        """
        post = await self._get_owned(db, user, post_id)
        try:
            await db.delete(post)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the post. Please try again.",
                context={"post_id": str(post_id)},
            )

        logger.info("Post %s deleted by %s", post_id, user.id)
        return AckResponse(message="Post deleted", id=post_id)

    async def _get_owned(self, db: AsyncSession, user: User, post_id: uuid.UUID) -> Post:
        try:
            result = await db.execute(
                select(Post).where(Post.id == post_id, Post.user_id == user.id)
            )
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": str(post_id)},
            )

        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post


post_service = PostService()
