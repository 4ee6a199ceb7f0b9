"""
SocialHub Backend - Post, Like and Comment SQLAlchemy Models
==============================================================

What:  ORM models for the `posts`, `post_likes` and `post_comments` tables.
How:   A Post owns its likes and comments (cascade delete-orphan). Both
       collections are eagerly loaded with the post (selectin), so a post is
       read, mutated and saved as one unit, the way a document would be.
Who:   Used by PostService for every operation and by Alembic for the schema.

Table Design:
    - UUID primary keys everywhere; comment ids are what clients delete by
    - name / avatar are snapshots of the author at creation time. They are
      intentionally not foreign-keyed to the user's live profile.
    - likes and comments are ordered newest first. New entries are inserted
      at index 0 in memory and carry a creation timestamp that reproduces
      the same order when loaded back.

Indexes:
    posts(date DESC): the feed is always read newest first
    post_likes(post_id, user_id) UNIQUE: one like per user per post
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from socialhub.database import Base
from socialhub.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    A user-authored text post with its likes and comments.

    Lifecycle:
        1. Created by its author with likes=[] and comments=[]
        2. Mutated by like/unlike and comment add/remove
        3. Deleted only by its author; likes and comments go with it
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(User.id, ondelete="CASCADE"),
        nullable=False,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Author snapshot ───────────────────────────────────────────────────
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    likes: Mapped[List["Like"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Like.date.desc()",
    )

    comments: Mapped[List["Comment"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Comment.date.desc()",
    )

    __table_args__ = (
        Index("idx_posts_date", date.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, user_id={self.user_id}, "
            f"likes={len(self.likes)}, comments={len(self.comments)})>"
        )


class Like(Base):
    """A user's approval of a post. Unique per (post, user)."""

    __tablename__ = "post_likes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(Post.id, ondelete="CASCADE"),
        nullable=False,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    post: Mapped[Post] = relationship(back_populates="likes")

    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
    )

    def __repr__(self) -> str:
        return f"<Like(post_id={self.post_id}, user_id={self.user_id})>"


class Comment(Base):
    """A text reply on a post, owned by the user who wrote it."""

    __tablename__ = "post_comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey(Post.id, ondelete="CASCADE"),
        nullable=False,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    post: Mapped[Post] = relationship(back_populates="comments")

    __table_args__ = (
        Index("idx_post_comments_post_id", "post_id"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id}, user_id={self.user_id})>"
