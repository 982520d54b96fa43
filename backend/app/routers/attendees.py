"""Attendance API routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.event import AttendanceOut
from app.security import get_current_user
from app.services import attendance_service
from app.errors import parse_id

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{event_id}/attend", response_model=AttendanceOut)
def attend_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Join an event."""
    attendees = attendance_service.attend(db, event_id, current_user.user_id)
    return {"event_id": parse_id(event_id), "attendees": attendees}


@router.delete("/{event_id}/attend", response_model=AttendanceOut)
def leave_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Leave an event. Leaving an event you are not attending is not an error."""
    attendees = attendance_service.unattend(db, event_id, current_user.user_id)
    return {"event_id": parse_id(event_id), "attendees": attendees}
