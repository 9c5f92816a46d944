"""
Blog API — Post Route Handlers
================================

What:  CRUD for blog posts.
Who:   Reads are public; writes go through the `require_identity` guard,
       and the owner always comes from the verified token.

Status mapping:
    GET    /posts?user_id=   200 list (ascending id)
    GET    /posts/{id}       200 | 404
    POST   /posts            200
    PATCH  /posts/{id}       200 | 404
    DELETE /posts/{id}       200 | 404 (missing and not-owned look the same)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.database import get_db_session
from blogapi.dependencies import require_identity
from blogapi.schemas.auth import Identity
from blogapi.schemas.common import ErrorResponse
from blogapi.schemas.post import (
    MessageResponse,
    PostMutationResponse,
    PostResponse,
    PostWrite,
)
from blogapi.services.post_store import post_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

_AUTH_RESPONSES = {
    401: {"description": "No token provided", "model": ErrorResponse},
    403: {"description": "Invalid token", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[PostResponse],
    responses={400: {"description": "Missing or non-integer user_id", "model": ErrorResponse}},
    summary="List a user's posts",
)
async def list_posts(
    user_id: int = Query(..., description="Owner whose posts to list"),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    posts = await post_store.list_for_user(db, user_id)
    return [PostResponse.model_validate(p) for p in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={404: {"description": "Blog post not found", "model": ErrorResponse}},
    summary="Get a single post",
)
async def get_post(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    post = await post_store.get(db, post_id)
    return PostResponse.model_validate(post)


@router.post(
    "",
    status_code=200,
    response_model=PostMutationResponse,
    responses=_AUTH_RESPONSES,
    summary="Create a post owned by the caller",
)
async def create_post(
    body: PostWrite,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PostMutationResponse:
    post = await post_store.create(db, identity.id, body.title, body.content)
    return PostMutationResponse(
        message="Blog post added successfully",
        blog=PostResponse.model_validate(post),
    )


@router.patch(
    "/{post_id}",
    response_model=PostMutationResponse,
    responses={**_AUTH_RESPONSES, 404: {"description": "Blog post not found", "model": ErrorResponse}},
    summary="Replace a post's title and content",
)
async def update_post(
    post_id: int,
    body: PostWrite,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PostMutationResponse:
    """
    Overwrite title and content. Ownership is not checked; the caller
    becomes the post's owner.
    """
    post = await post_store.update(db, post_id, identity.id, body.title, body.content)
    return PostMutationResponse(
        message="Blog post updated successfully",
        blog=PostResponse.model_validate(post),
    )


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={
        **_AUTH_RESPONSES,
        404: {"description": "Blog post not found or not authorized to delete", "model": ErrorResponse},
    },
    summary="Delete one of the caller's posts",
)
async def delete_post(
    post_id: int,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await post_store.delete_owned(db, post_id, identity.id)
    return MessageResponse(message="Blog post deleted successfully")
