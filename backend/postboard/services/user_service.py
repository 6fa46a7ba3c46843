"""
Postboard Backend — User Service
==================================

What:  Registration, login, token resolution and "my posts".
Who:   routes/users.py and the `get_current_user` dependency.

Flow (login):
    credentials ──▶ lookup by normalized email ──▶ verify hash ──▶ JWT
    Any mismatch ──▶ InvalidCredentialsError (same message either way)
"""

import logging
import uuid
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.config import Settings
from postboard.exceptions import (
    DatabaseError,
    DuplicateUserError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from postboard.models.post import Post
from postboard.models.user import User
from postboard.schemas.post import PostResponse
from postboard.schemas.user import TokenResponse, UserCreate, UserCredentials, UserResponse
from postboard.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for accounts and sessions.

    Error Handling Strategy:
        Domain failures raise their own exception type. Driver errors are
        wrapped in DatabaseError so no SQL reaches the client.
    """

    async def register(self, db: AsyncSession, data: UserCreate) -> UserResponse:
        """
        Create a user if the e-mail is unused.

        Raises:
            DuplicateUserError: e-mail already registered (checked up front and
                again via the unique index for concurrent registrations)
            DatabaseError: insert failed for any other reason
        """
        try:
            existing = await db.execute(select(User.id).where(User.email == data.email))
            if existing.scalar_one_or_none() is not None:
                raise DuplicateUserError(email=data.email)

            user = User(
                email=data.email,
                name=data.name,
                hashed_password=hash_password(data.password),
            )
            db.add(user)
            await db.flush()
            await db.commit()
        except DuplicateUserError:
            raise
        except IntegrityError:
            # Lost a race with a concurrent registration of the same e-mail
            await db.rollback()
            raise DuplicateUserError(email=data.email)
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: %s", user.id)
        return UserResponse.model_validate(user)

    async def authenticate(self, db: AsyncSession, credentials: UserCredentials) -> User:
        """
        Return the user matching the credentials.

        Raises:
            InvalidCredentialsError: unknown e-mail or wrong password
        """
        try:
            result = await db.execute(select(User).where(User.email == credentials.email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not sign in. Please try again.")

        if user is None or not verify_password(credentials.password, user.hashed_password):
            logger.info("Failed login attempt for %s", credentials.email)
            raise InvalidCredentialsError()
        return user

    async def login(
        self, db: AsyncSession, credentials: UserCredentials, settings: Settings
    ) -> TokenResponse:
        """Verify credentials and issue a session token."""
        user = await self.authenticate(db, credentials)
        token = create_access_token(user.id, settings)
        logger.info("User logged in: %s", user.id)
        return TokenResponse(
            access_token=token,
            expires_in=settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )

    async def resolve_token(self, db: AsyncSession, token: str, settings: Settings) -> User:
        """
        Map a session token to its user.

        Raises:
            UnauthorizedError: token invalid/expired, or its user no longer exists
        """
        user_id = decode_access_token(token, settings)
        try:
            user = await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error resolving session: %s", str(e), exc_info=True)
            raise DatabaseError()
        if user is None:
            raise UnauthorizedError(message="Session user no longer exists")
        return user

    async def list_posts(self, db: AsyncSession, user_id: uuid.UUID) -> List[PostResponse]:
        """All posts owned by `user_id`, newest first."""
        try:
            result = await db.execute(
                select(Post)
                .where(Post.user_id == user_id)
                .order_by(desc(Post.created_at))
            )
            posts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts for %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"user_id": str(user_id)},
            )
        return [PostResponse.model_validate(post) for post in posts]


user_service = UserService()
