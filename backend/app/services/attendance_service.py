"""Event membership: join and leave."""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import ConflictError
from app.models.attendee import EventAttendee
from app.services.event_service import get_event

logger = logging.getLogger(__name__)


def _attendee_ids(db: Session, event_id: str) -> list[str]:
    rows = (
        db.query(EventAttendee.user_id)
        .filter(EventAttendee.event_id == event_id)
        .order_by(EventAttendee.joined_at)
        .all()
    )
    return [user_id for (user_id,) in rows]


def attend(db: Session, event_id: str, user_id: str) -> list[str]:
    """Add ``user_id`` to the event. Returns the updated attendee ids."""
    event = get_event(db, event_id)
    if user_id in event.attendee_ids:
        raise ConflictError("You are already attending this event")

    # Insert the row directly; the (event_id, user_id) key rejects a concurrent duplicate
    db.add(EventAttendee(event_id=event.event_id, user_id=user_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("You are already attending this event")

    logger.info("User %s joined event %s", user_id, event.event_id)
    return _attendee_ids(db, event.event_id)


def unattend(db: Session, event_id: str, user_id: str) -> list[str]:
    """Remove ``user_id`` from the event; removing a non-member is a no-op."""
    event = get_event(db, event_id)
    removed = (
        db.query(EventAttendee)
        .filter(EventAttendee.event_id == event.event_id, EventAttendee.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    if removed:
        logger.info("User %s left event %s", user_id, event.event_id)
    return _attendee_ids(db, event.event_id)
