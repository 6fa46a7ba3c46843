"""
Postboard Backend — Password Hashing & Session Tokens
=======================================================

What:  Hashes/verifies passwords and issues/decodes session tokens.
How:   Passwords: werkzeug.security salted hashes (the method and salt are
       stored inside the hash string, so old hashes keep verifying if the
       default method changes).
       Tokens: JWT signed with python-jose; `sub` holds the user id and
       `exp` the expiry. Anything that fails to decode is UnauthorizedError.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from postboard.config import Settings
from postboard.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return check_password_hash(hashed_password, plain_password)


def create_access_token(
    user_id: uuid.UUID,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Issue a signed token identifying `user_id`."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> uuid.UUID:
    """
    Return the user id carried by `token`.

    Raises:
        UnauthorizedError: expired, tampered, malformed, or missing `sub`.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise UnauthorizedError(message="Session token has expired")
    except JWTError as e:
        logger.debug("Rejected session token: %s", str(e))
        raise UnauthorizedError(message="Could not validate session token")

    subject = payload.get("sub")
    if subject is None:
        raise UnauthorizedError(message="Could not validate session token")
    try:
        return uuid.UUID(subject)
    except (TypeError, ValueError):
        raise UnauthorizedError(message="Could not validate session token")
