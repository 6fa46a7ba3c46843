"""
Postboard Backend — User Route Handlers
=========================================

What:  Registration, login and "my posts" under /api/user/.
Who:   The front-end's REGISTER, LOGIN and MYPOSTS endpoints.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.config import Settings
from postboard.database import get_db_session
from postboard.dependencies import body_openapi, get_current_user, get_settings, json_or_form
from postboard.models.user import User
from postboard.schemas.common import ErrorResponse
from postboard.schemas.post import PostResponse
from postboard.schemas.user import TokenResponse, UserCreate, UserCredentials, UserResponse
from postboard.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["Users"])


@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Malformed credentials", "model": ErrorResponse},
        409: {"description": "E-mail already registered", "model": ErrorResponse},
    },
    summary="Register a new user",
    openapi_extra=body_openapi(UserCreate),
)
async def register(
    data: UserCreate = Depends(json_or_form(UserCreate)),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.register(db, data)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"description": "Malformed credentials", "model": ErrorResponse},
        401: {"description": "Wrong e-mail or password", "model": ErrorResponse},
    },
    summary="Log in and receive a session token",
    openapi_extra=body_openapi(UserCredentials),
)
async def login(
    credentials: UserCredentials = Depends(json_or_form(UserCredentials)),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    return await user_service.login(db, credentials, settings)


@router.get(
    "/myPosts",
    response_model=List[PostResponse],
    responses={401: {"description": "Missing or invalid session", "model": ErrorResponse}},
    summary="List the caller's posts, newest first",
)
async def my_posts(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await user_service.list_posts(db, current_user.id)
