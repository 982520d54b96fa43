"""Comment ORM model.

A comment is either a *root* (embedded in an event, ordered by ``position``)
or a *child* (a standalone reply whose id is listed in its root's
``child_comment_ids``). Only one level of nesting exists: children never
receive children of their own.
"""
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Integer, DateTime, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.database import Base


class CommentKind(str, enum.Enum):
    root = "root"
    child = "child"


class Comment(Base):
    __tablename__ = "comments"

    comment_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    kind = Column(SAEnum(CommentKind), nullable=False, default=CommentKind.root)
    event_id = Column(String(36), ForeignKey("events.event_id", ondelete="CASCADE"), nullable=True, index=True)
    parent_comment_id = Column(String(36), ForeignKey("comments.comment_id"), nullable=True, index=True)
    position = Column(Integer, nullable=True)
    author_id = Column(String(36), ForeignKey("users.user_id"), nullable=True)
    text = Column(Text, nullable=True)
    child_comment_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    event = relationship("Event", back_populates="comments")
    author = relationship("User", lazy="joined")

    @property
    def is_root(self) -> bool:
        return self.kind == CommentKind.root
