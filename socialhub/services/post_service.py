"""
SocialHub Backend - Post Service (Business Logic)
===================================================

What:  The eight post operations: create, list, get, delete, like, unlike,
       comment, uncomment.
How:   Each mutating operation is one read-modify-write of a single Post
       (with its likes and comments) followed by one commit:

    ┌──────────┐    ┌──────────┐    ┌──────────────┐    ┌──────────┐
    │  Load    │───▶│  Guard   │───▶│  Mutate in   │───▶│  Commit  │
    │  Post    │    │  checks  │    │  memory      │    │          │
    └──────────┘    └──────────┘    └──────────────┘    └──────────┘
                         │
                         └──▶ Rejection (returned, nothing written)

Who:   Called by routes/posts.py; receives the session per call.

Return convention:
    Every operation returns either its result (response schema) or a
    Rejection. Expected outcomes never raise. Only driver failures raise,
    wrapped as PersistenceError with the detail kept in server logs.

Concurrency:
    Two requests mutating the same post may race (last commit wins for the
    in-memory list; the unique (post_id, user_id) index still refuses a
    second like row). No locking is attempted.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only

from socialhub.exceptions import PersistenceError
from socialhub.models.post import Comment, Like, Post
from socialhub.models.user import User
from socialhub.schemas.post import (
    CommentResponse,
    LikeResponse,
    MessageResponse,
    PostResponse,
)
from socialhub.services import rejections
from socialhub.services.rejections import Rejection

logger = logging.getLogger(__name__)


def parse_object_id(raw: str) -> Optional[uuid.UUID]:
    """Parses a path identifier; malformed ids come back as None (same as absent)."""
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        return None


class PostService:
    """
    Business logic layer for posts.

    Stateless: the session is passed to each call, so one instance serves
    all requests.
    """

    # ── Reads ─────────────────────────────────────────────────────────────

    async def _get_post(self, db: AsyncSession, post_id: str) -> Optional[Post]:
        """Loads a post with likes and comments, or None if absent or malformed."""
        pid = parse_object_id(post_id)
        if pid is None:
            logger.debug("Malformed post id %r treated as not found", post_id)
            return None
        try:
            result = await db.execute(select(Post).where(Post.id == pid))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e), exc_info=True)
            raise PersistenceError(context={"post_id": post_id, "error_type": type(e).__name__})

    async def _get_author(self, db: AsyncSession, user_id: uuid.UUID) -> Optional[User]:
        """Loads the acting user's name and avatar only; the password column stays unread."""
        try:
            result = await db.execute(
                select(User)
                .options(load_only(User.id, User.name, User.avatar))
                .where(User.id == user_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e), exc_info=True)
            raise PersistenceError(context={"user_id": str(user_id), "error_type": type(e).__name__})

    async def _commit(self, db: AsyncSession, action: str, post_id: object) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error on %s for post %s: %s", action, post_id, str(e), exc_info=True)
            raise PersistenceError(context={"action": action, "error_type": type(e).__name__})

    # ── Operations ────────────────────────────────────────────────────────

    async def create_post(
        self, db: AsyncSession, user_id: uuid.UUID, text: str
    ) -> Union[PostResponse, Rejection]:
        """
        Create a post authored by the acting user.

        The author's current name and avatar are copied onto the post; later
        profile edits do not change it.
        """
        author = await self._get_author(db, user_id)
        if author is None:
            return Rejection.not_found("User not found")

        post = Post(
            id=uuid.uuid4(),
            user_id=user_id,
            text=text,
            name=author.name,
            avatar=author.avatar,
            likes=[],
            comments=[],
            date=datetime.now(timezone.utc),
        )
        db.add(post)
        await self._commit(db, "create", post.id)
        logger.info("Post %s created by user %s", post.id, user_id)
        return PostResponse.model_validate(post)

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """All posts, most recent first."""
        try:
            result = await db.execute(select(Post).order_by(Post.date.desc()))
            posts = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise PersistenceError(context={"error_type": type(e).__name__})
        return [PostResponse.model_validate(post) for post in posts]

    async def get_post(self, db: AsyncSession, post_id: str) -> Union[PostResponse, Rejection]:
        post = await self._get_post(db, post_id)
        if post is None:
            return Rejection.not_found()
        return PostResponse.model_validate(post)

    async def delete_post(
        self, db: AsyncSession, user_id: uuid.UUID, post_id: str
    ) -> Union[MessageResponse, Rejection]:
        """Delete a post. Only its author may do so."""
        post = await self._get_post(db, post_id)
        if post is None:
            return Rejection.not_found()

        rejection = rejections.check_post_owner(post, user_id)
        if rejection:
            logger.info("User %s refused deletion of post %s: %s", user_id, post.id, rejection.message)
            return rejection

        await db.delete(post)
        await self._commit(db, "delete", post.id)
        logger.info("Post %s removed by user %s", post.id, user_id)
        return MessageResponse(msg="Post removed")

    async def like_post(
        self, db: AsyncSession, user_id: uuid.UUID, post_id: str
    ) -> Union[List[LikeResponse], Rejection]:
        post = await self._get_post(db, post_id)
        if post is None:
            return Rejection.not_found(status_code=400)

        rejection = rejections.check_not_liked(post, user_id)
        if rejection:
            logger.info("Like on post %s by user %s rejected: %s", post.id, user_id, rejection.message)
            return rejection

        post.likes.insert(0, Like(id=uuid.uuid4(), user_id=user_id))
        await self._commit(db, "like", post.id)
        logger.info("Post %s liked by user %s", post.id, user_id)
        return [LikeResponse.model_validate(like) for like in post.likes]

    async def unlike_post(
        self, db: AsyncSession, user_id: uuid.UUID, post_id: str
    ) -> Union[List[LikeResponse], Rejection]:
        post = await self._get_post(db, post_id)
        if post is None:
            return Rejection.not_found(status_code=400)

        rejection = rejections.check_liked(post, user_id)
        if rejection:
            logger.info("Unlike on post %s by user %s rejected: %s", post.id, user_id, rejection.message)
            return rejection

        like = next(like for like in post.likes if like.user_id == user_id)
        post.likes.remove(like)
        await self._commit(db, "unlike", post.id)
        logger.info("Post %s unliked by user %s", post.id, user_id)
        return [LikeResponse.model_validate(like) for like in post.likes]

    async def add_comment(
        self, db: AsyncSession, user_id: uuid.UUID, post_id: str, text: str
    ) -> Union[List[CommentResponse], Rejection]:
        """Prepend a comment carrying the author's current name and avatar."""
        author = await self._get_author(db, user_id)
        if author is None:
            return Rejection.not_found("User not found")

        post = await self._get_post(db, post_id)
        if post is None:
            return Rejection.not_found(status_code=400)

        comment = Comment(
            id=uuid.uuid4(),
            user_id=user_id,
            text=text,
            name=author.name,
            avatar=author.avatar,
            date=datetime.now(timezone.utc),
        )
        post.comments.insert(0, comment)
        await self._commit(db, "comment", post.id)
        logger.info("Comment %s added to post %s by user %s", comment.id, post.id, user_id)
        return [CommentResponse.model_validate(c) for c in post.comments]

    async def delete_comment(
        self, db: AsyncSession, user_id: uuid.UUID, post_id: str, comment_id: str
    ) -> Union[List[CommentResponse], Rejection]:
        """
        Remove one comment, located by its own id.

        Rejections, in order: post missing (400), comment missing (404),
        acting user is not the comment's author (401).
        """
        post = await self._get_post(db, post_id)
        if post is None:
            return Rejection.not_found(status_code=400)

        comment = rejections.find_comment(post, comment_id)
        if comment is None:
            return Rejection.not_found("Comment does not exist", status_code=404)

        rejection = rejections.check_comment_owner(comment, user_id)
        if rejection:
            logger.info("User %s refused deletion of comment %s: %s", user_id, comment.id, rejection.message)
            return rejection

        post.comments.remove(comment)
        await self._commit(db, "uncomment", post.id)
        logger.info("Comment %s removed from post %s by user %s", comment.id, post.id, user_id)
        return [CommentResponse.model_validate(c) for c in post.comments]


# Stateless; shared by all requests
post_service = PostService()
