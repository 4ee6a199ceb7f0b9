"""
SocialHub Backend - Posts Route Handlers
==========================================

What:  The /api/posts surface: create, list, get, delete, like, unlike,
       comment, uncomment.
How:   Every route requires a bearer token (get_current_user_id), delegates
       to PostService, and renders a Rejection as an error envelope.
       Body validation happens in the schemas before any handler runs.

Route Inventory:
    POST   /api/posts                               → 200 Post
    GET    /api/posts                               → 200 [Post]
    GET    /api/posts/{post_id}                     → 200 Post
    DELETE /api/posts/{post_id}                     → 200 {msg}
    PUT    /api/posts/like/{post_id}                → 200 [Like]
    PUT    /api/posts/unlike/{post_id}              → 200 [Like]
    POST   /api/posts/comment/{post_id}             → 200 [Comment]
    DELETE /api/posts/comment/{post_id}/{comment_id} → 200 [Comment]

Path ids are plain strings: a malformed id must come back as "not found"
from the service, not as FastAPI's 422.
"""

import logging
import uuid
from typing import Any, List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.database import get_db_session
from socialhub.middleware.request_id import request_id_var
from socialhub.schemas.common import ErrorResponse
from socialhub.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    MessageResponse,
    PostCreate,
    PostResponse,
)
from socialhub.security import get_current_user_id
from socialhub.services.post_service import post_service
from socialhub.services.rejections import Rejection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["Posts"])

_AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}


def render_rejection(rejection: Rejection) -> JSONResponse:
    """Turns a service Rejection into the shared error envelope."""
    return JSONResponse(
        status_code=rejection.status_code,
        content={
            "error": rejection.kind.value,
            "message": rejection.message,
            "request_id": request_id_var.get(""),
        },
    )


def respond(result: Any) -> Any:
    if isinstance(result, Rejection):
        return render_rejection(result)
    return result


@router.post(
    "",
    response_model=PostResponse,
    responses={
        400: {"description": "Text is required", "model": ErrorResponse},
        **_AUTH_ERRORS,
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a post",
)
@router.post("/", response_model=PostResponse, include_in_schema=False)
async def create_post(
    body: PostCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return respond(await post_service.create_post(db, user_id=user_id, text=body.text))


@router.get(
    "",
    response_model=List[PostResponse],
    responses={**_AUTH_ERRORS, 500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all posts, newest first",
)
@router.get("/", response_model=List[PostResponse], include_in_schema=False)
async def list_posts(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return await post_service.list_posts(db)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={
        404: {"description": "Post not found", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Get a post by id",
)
async def get_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return respond(await post_service.get_post(db, post_id))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Post not found", "model": ErrorResponse},
        401: {"description": "Missing token, or not the post's author", "model": ErrorResponse},
    },
    summary="Delete a post (author only)",
)
async def delete_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return respond(await post_service.delete_post(db, user_id=user_id, post_id=post_id))


@router.put(
    "/like/{post_id}",
    response_model=List[LikeResponse],
    responses={
        400: {"description": "Post not found, or already liked", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Like a post",
)
async def like_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return respond(await post_service.like_post(db, user_id=user_id, post_id=post_id))


@router.put(
    "/unlike/{post_id}",
    response_model=List[LikeResponse],
    responses={
        400: {"description": "Post not found, or not yet liked", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Remove your like from a post",
)
async def unlike_post(
    post_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return respond(await post_service.unlike_post(db, user_id=user_id, post_id=post_id))


@router.post(
    "/comment/{post_id}",
    response_model=List[CommentResponse],
    responses={
        400: {"description": "Text is required, or post not found", "model": ErrorResponse},
        **_AUTH_ERRORS,
    },
    summary="Comment on a post",
)
async def add_comment(
    post_id: str,
    body: CommentCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return respond(
        await post_service.add_comment(db, user_id=user_id, post_id=post_id, text=body.text)
    )


@router.delete(
    "/comment/{post_id}/{comment_id}",
    response_model=List[CommentResponse],
    responses={
        400: {"description": "Post not found", "model": ErrorResponse},
        404: {"description": "Comment does not exist", "model": ErrorResponse},
        401: {"description": "Missing token, or not the comment's author", "model": ErrorResponse},
    },
    summary="Delete your comment from a post",
)
async def delete_comment(
    post_id: str,
    comment_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    return respond(
        await post_service.delete_comment(
            db, user_id=user_id, post_id=post_id, comment_id=comment_id
        )
    )
