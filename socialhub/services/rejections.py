"""
SocialHub Backend - Business Rejections and Guard Clauses
===========================================================

What:  Tagged values describing an expected "no" from the post service
       (post missing, not the owner, already liked, ...), plus the guard
       functions that produce them.
How:   A guard inspects a loaded Post and returns a Rejection or None.
       Service methods return the first Rejection they get before touching
       any state; routes render it as an error response.
Who:   Used by PostService; rendered by routes/posts.py.

Kinds and their HTTP rendering:
    NOT_FOUND     → 404 (or 400 on the like/unlike/comment routes)
    UNAUTHORIZED  → 401
    CONFLICT      → 400 (duplicate like, missing prior like)
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from socialhub.models.post import Comment, Post


class RejectionKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class Rejection:
    """An expected business outcome that ends the request without a write."""

    kind: RejectionKind
    message: str
    status_code: int

    @classmethod
    def not_found(cls, message: str = "Post not found", status_code: int = 404) -> "Rejection":
        return cls(RejectionKind.NOT_FOUND, message, status_code)

    @classmethod
    def unauthorized(cls, message: str = "User not authorized") -> "Rejection":
        return cls(RejectionKind.UNAUTHORIZED, message, 401)

    @classmethod
    def conflict(cls, message: str) -> "Rejection":
        return cls(RejectionKind.CONFLICT, message, 400)


# ══════════════════════════════════════════════════════════════════════════
# Guards
# ══════════════════════════════════════════════════════════════════════════


def has_liked(post: Post, user_id: uuid.UUID) -> bool:
    return any(like.user_id == user_id for like in post.likes)


def check_post_owner(post: Post, user_id: uuid.UUID) -> Optional[Rejection]:
    if post.user_id != user_id:
        return Rejection.unauthorized()
    return None


def check_not_liked(post: Post, user_id: uuid.UUID) -> Optional[Rejection]:
    if has_liked(post, user_id):
        return Rejection.conflict("Post already liked")
    return None


def check_liked(post: Post, user_id: uuid.UUID) -> Optional[Rejection]:
    if not has_liked(post, user_id):
        return Rejection.conflict("Post has not yet been liked")
    return None


def find_comment(post: Post, comment_id: str) -> Optional[Comment]:
    """Returns the comment whose own id matches, or None (malformed ids included)."""
    try:
        wanted = uuid.UUID(comment_id)
    except ValueError:
        return None
    return next((c for c in post.comments if c.id == wanted), None)


def check_comment_owner(comment: Comment, user_id: uuid.UUID) -> Optional[Rejection]:
    if comment.user_id != user_id:
        return Rejection.unauthorized()
    return None
