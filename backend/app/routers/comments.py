"""Comment API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.comment import CommentCreate, CommentOut
from app.security import get_current_user
from app.services import comment_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{event_id}/comments", response_model=list[CommentOut], status_code=status.HTTP_201_CREATED)
def add_comment(
    event_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a root comment, or a reply when ``parentCommentId`` is given."""
    roots = comment_service.add_comment(
        db,
        event_id,
        current_user.user_id,
        payload.text,
        parent_comment_id=payload.parent_comment_id,
    )
    return comment_service.resolve_children(db, roots)
