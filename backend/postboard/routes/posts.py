"""
Postboard Backend — Post Route Handlers
=========================================

What:  Create/update/delete under /api/post/. Every route requires a session.
Why the id is in the body: the paths are fixed (`/update`, `/delete`), as
       the front-end's UPDATEPOST/DELETEPOST constants expect.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.dependencies import body_openapi, get_current_user, json_or_form
from postboard.models.user import User
from postboard.schemas.common import ErrorResponse
from postboard.schemas.post import AckResponse, PostCreate, PostDelete, PostResponse, PostUpdate
from postboard.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/post",
    tags=["Posts"],
    responses={401: {"description": "Missing or invalid session", "model": ErrorResponse}},
)


@router.post(
    "/create",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid post fields", "model": ErrorResponse}},
    summary="Create a post owned by the caller",
    openapi_extra=body_openapi(PostCreate),
)
async def create_post(
    current_user: User = Depends(get_current_user),
    data: PostCreate = Depends(json_or_form(PostCreate)),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create(db, current_user, data)


@router.put(
    "/update",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid or empty update", "model": ErrorResponse},
        404: {"description": "No such post owned by the caller", "model": ErrorResponse},
    },
    summary="Update one of the caller's posts",
    openapi_extra=body_openapi(PostUpdate),
)
async def update_post(
    current_user: User = Depends(get_current_user),
    data: PostUpdate = Depends(json_or_form(PostUpdate)),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.update(db, current_user, data)


@router.delete(
    "/delete",
    response_model=AckResponse,
    responses={404: {"description": "No such post owned by the caller", "model": ErrorResponse}},
    summary="Delete one of the caller's posts",
    openapi_extra=body_openapi(PostDelete),
)
async def delete_post(
    current_user: User = Depends(get_current_user),
    data: PostDelete = Depends(json_or_form(PostDelete)),
    db: AsyncSession = Depends(get_db_session),
) -> AckResponse:
    return await post_service.delete(db, current_user, data.id)
