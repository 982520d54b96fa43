"""Event API routes: delegates to event_service for validation and persistence rules."""
import logging
from datetime import date, datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_geocoder, get_now
from app.models.user import User
from app.schemas.common import Message
from app.schemas.event import EventCreate, EventUpdate, EventOut, LocationOut
from app.security import get_current_user
from app.services import event_service
from app.services.comment_service import resolve_event_comments
from app.services.geocoding import GeocodingClient

logger = logging.getLogger(__name__)
router = APIRouter()


def _serialize(db: Session, event) -> EventOut:
    """Event with its comments; replies are resolved one level deep."""
    out = EventOut.model_validate(event)
    out.comments = resolve_event_comments(db, event)
    return out


@router.get("/", response_model=list[EventOut])
def list_events(
    category: Optional[str] = Query(None, description="Comma separated categories, e.g. Football,Tennis"),
    time: Optional[str] = Query(None, description="Comma separated: today, tomorrow, thisWeek, nextWeek"),
    day: Optional[date] = Query(None, description="Calendar date, e.g. 2024-03-15"),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    """List events with optional category, time and day filters."""
    events = event_service.list_events(db, now, category=category, time=time, day=day)
    return [_serialize(db, e) for e in events]


@router.get("/locations/map", response_model=list[LocationOut])
def locations_map(db: Session = Depends(get_db)):
    """One entry per distinct location, for the map view."""
    return event_service.locations_summary(db)


@router.get("/{event_id}", response_model=EventOut)
def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Fetch a single event with attendees and comments."""
    return _serialize(db, event_service.get_event(db, event_id))


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    """Create a new event; the creator automatically attends."""
    event = event_service.create_event(db, current_user, payload.model_dump(), geocoder=geocoder)
    return _serialize(db, event)


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    """Partially update an event (creator only)."""
    updates = payload.model_dump(exclude_unset=True)
    event = event_service.update_event(db, event_id, current_user, updates, geocoder=geocoder)
    return _serialize(db, event)


@router.delete("/{event_id}", response_model=Message)
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete an event (creator only) together with its comments."""
    event_service.delete_event(db, event_id, current_user)
    return {"message": "Deleted event"}
