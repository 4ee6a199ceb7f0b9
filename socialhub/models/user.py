"""
SocialHub Backend - User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Who:   Read by PostService to snapshot the author's name and avatar.
       Registration and profile editing live outside this service.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from socialhub.database import Base


class User(Base):
    """
    An account that can author posts, likes and comments.

    The `password` column holds a hash and is never loaded by the post
    service (queries use load_only on name/avatar).
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Gravatar-style URL; copied onto posts and comments at creation time
    avatar: Mapped[str | None] = mapped_column(String(512), nullable=True)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
