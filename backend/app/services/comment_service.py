"""Comment threads: root comments on an event, one level of standalone replies."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.errors import NotFoundError, parse_id
from app.models.comment import Comment, CommentKind
from app.models.event import Event
from app.schemas.comment import ChildCommentOut, CommentOut
from app.services.event_service import get_event

logger = logging.getLogger(__name__)


def add_comment(
    db: Session,
    event_id: str,
    user_id: Optional[str],
    text: Optional[str],
    parent_comment_id: Optional[str] = None,
) -> list[Comment]:
    """Add a root comment, or a reply to one of the event's root comments.

    Returns the event's full root comment sequence.
    """
    event = get_event(db, event_id)

    if parent_comment_id is None:
        event.comments.append(Comment(kind=CommentKind.root, author_id=user_id, text=text, child_comment_ids=[]))
        db.commit()
        logger.info("User %s commented on event %s", user_id, event.event_id)
    else:
        parent_comment_id = parse_id(parent_comment_id, "comment")
        parent = next((c for c in event.comments if c.comment_id == parent_comment_id), None)
        if parent is None:
            raise NotFoundError("Parent comment not found")

        child = Comment(
            kind=CommentKind.child,
            parent_comment_id=parent.comment_id,
            author_id=user_id,
            text=text,
            child_comment_ids=[],
        )
        db.add(child)
        db.flush()
        # Reassign rather than mutate in place so the JSON column is marked dirty
        parent.child_comment_ids = list(parent.child_comment_ids or []) + [child.comment_id]
        db.commit()
        logger.info("User %s replied to comment %s on event %s", user_id, parent.comment_id, event.event_id)

    db.refresh(event)
    return list(event.comments)


def resolve_children(db: Session, roots: list[Comment]) -> list[CommentOut]:
    """Serialize root comments with their replies resolved one level deep, in reference order."""
    ids = [cid for root in roots for cid in (root.child_comment_ids or [])]
    children = {}
    if ids:
        children = {c.comment_id: c for c in db.query(Comment).filter(Comment.comment_id.in_(ids)).all()}

    resolved = []
    for root in roots:
        out = CommentOut.model_validate(root)
        out.child_comments = [
            ChildCommentOut.model_validate(children[cid])
            for cid in (root.child_comment_ids or [])
            if cid in children
        ]
        resolved.append(out)
    return resolved


def resolve_event_comments(db: Session, event: Event) -> list[CommentOut]:
    return resolve_children(db, list(event.comments))
