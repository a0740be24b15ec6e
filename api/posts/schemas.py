"""
Pydantic schemas for post endpoints.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from core.errors import FieldError


class PostInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    text: str


class Creator(BaseModel):
    id: int
    first_name: str
    last_name: str


class Post(BaseModel):
    id: int
    title: str
    text: str
    text_snippet: str
    creator_id: int
    creator_name: str
    created_at: datetime
    updated_at: datetime
    creator: Creator | None = None


class PaginatedPosts(BaseModel):
    posts: list[Post]
    has_more: bool
    next_cursor: str | None = None


class PostLookup(BaseModel):
    post: Post | None = None


class PostResponse(BaseModel):
    post: Post | None = None
    errors: list[FieldError] | None = None


class WriteOutcome(str, Enum):
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


class UpdateResult(BaseModel):
    outcome: WriteOutcome | None = None
    post: Post | None = None
    errors: list[FieldError] | None = None


class DeleteResult(BaseModel):
    # Deleting is idempotent for callers; `outcome` says what actually happened.
    ok: bool = True
    outcome: WriteOutcome | None = None
    errors: list[FieldError] | None = None
