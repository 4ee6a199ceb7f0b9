"""
SocialHub Backend - Post Request/Response Schemas
===================================================

What:  Pydantic models defining the posts API contract.
How:   FastAPI validates request bodies against these models before any
       database access, and serializes ORM objects through the response
       models (from_attributes=True).

Wire names follow the public contract: the owning user is exposed as
`user` (read from the ORM attribute `user_id`) and timestamps as `date`.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TextBody(BaseModel):
    """
    Body shared by POST /api/posts and POST /api/posts/comment/{id}.

    `text` must contain something other than whitespace. It is stored as sent;
    trimming only decides emptiness.
    """
    text: str = Field(description="Body of the post or comment")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("text_required", "Text is required")
        return v


class PostCreate(TextBody):
    pass


class CommentCreate(TextBody):
    pass


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class LikeResponse(BaseModel):
    """One entry of a post's `likes` sequence."""
    id: uuid.UUID = Field(description="Like identifier")
    user: uuid.UUID = Field(
        validation_alias="user_id",
        description="User who liked the post",
    )

    model_config = {"from_attributes": True}


class CommentResponse(BaseModel):
    """One entry of a post's `comments` sequence (newest first)."""
    id: uuid.UUID = Field(description="Comment identifier, used to delete it")
    user: uuid.UUID = Field(validation_alias="user_id", description="Comment author")
    text: str
    name: Optional[str] = Field(default=None, description="Author name at comment time")
    avatar: Optional[str] = Field(default=None, description="Author avatar at comment time")
    date: datetime

    model_config = {"from_attributes": True}


class PostResponse(BaseModel):
    """
    Full post document.

    Example:
        {
            "id": "9b1d...",
            "user": "5f2c...",
            "text": "Hello world",
            "name": "Jane Doe",
            "avatar": "//www.gravatar.com/avatar/...",
            "likes": [{"id": "...", "user": "..."}],
            "comments": [],
            "date": "2024-01-15T12:00:00Z"
        }
    """
    id: uuid.UUID
    user: uuid.UUID = Field(validation_alias="user_id", description="Post author")
    text: str
    name: Optional[str] = Field(default=None, description="Author name at post time")
    avatar: Optional[str] = Field(default=None, description="Author avatar at post time")
    likes: List[LikeResponse] = Field(default_factory=list)
    comments: List[CommentResponse] = Field(default_factory=list)
    date: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Confirmation payload, e.g. {"msg": "Post removed"}."""
    msg: str
