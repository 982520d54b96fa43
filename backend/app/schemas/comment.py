"""Pydantic schemas for comments."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.common import CamelModel, UserSummary


class CommentCreate(CamelModel):
    text: Optional[str] = Field(default=None, max_length=5000)
    parent_comment_id: Optional[str] = None


class ChildCommentOut(CamelModel):
    comment_id: str
    parent_comment_id: Optional[str] = None
    author: Optional[UserSummary] = None
    text: Optional[str] = None
    created_at: Optional[datetime] = None


class CommentOut(CamelModel):
    """A root comment; replies are referenced by id and, where resolved, listed in ``child_comments``."""

    comment_id: str
    author: Optional[UserSummary] = None
    text: Optional[str] = None
    child_comment_ids: list[str] = []
    child_comments: list[ChildCommentOut] = []
    created_at: Optional[datetime] = None
