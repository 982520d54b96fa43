"""Core event service: validation and persistence rules for events.

Responsibilities:
- Creation: creator reference plus a display-name snapshot, best-effort geocoding
- Authorization hook: only the creator may update/delete
- Partial updates with required-field revalidation
- Deletion, including the root comments and the standalone replies they reference
- Location summary for the map view

The creator ∈ attendees rule is enforced on every flush by the hook in
``app.models.event``.
"""
import logging
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.errors import ForbiddenError, NotFoundError, ValidationError, parse_id
from app.models.comment import Comment
from app.models.event import Event
from app.models.user import User
from app.services.event_query import build_event_filter
from app.services.geocoding import GeocodingClient
from app.services.time_windows import to_local_naive

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "category", "description", "date", "location")
UPDATABLE_FIELDS = REQUIRED_FIELDS + ("image", "min_players", "max_players")


def _check_authorization(event: Event, actor: User) -> None:
    """Only the creator may modify or delete the event."""
    if event.created_by != actor.user_id:
        raise ForbiddenError("Only the creator may modify this event")


def _apply_geocoding(event: Event, geocoder: Optional[GeocodingClient]) -> None:
    """Attach coordinates when the lookup succeeds; otherwise leave them unset."""
    event.latitude = None
    event.longitude = None
    if geocoder is None:
        return
    result = geocoder.geocode(event.location)
    if result.ok:
        event.latitude = result.coordinates.latitude
        event.longitude = result.coordinates.longitude
    else:
        logger.warning("Geocoding failed for location %r: %s", event.location, result.error.reason)


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == parse_id(event_id)).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def list_events(
    db: Session,
    now: datetime,
    category: Optional[str] = None,
    time: Optional[str] = None,
    day: Optional[date] = None,
) -> list[Event]:
    """List events matching the optional category, time and day filters, ordered by date."""
    criteria = build_event_filter(category, time, now, day=day)
    return db.query(Event).filter(criteria).order_by(Event.date).all()


def create_event(
    db: Session,
    creator: User,
    data: dict[str, Any],
    geocoder: Optional[GeocodingClient] = None,
) -> Event:
    """Create an event owned by ``creator``; the creator is added to the attendees on flush."""
    event = Event(
        title=data["title"],
        category=data["category"],
        image=data.get("image"),
        description=data["description"],
        date=to_local_naive(data["date"], settings.TIMEZONE),
        location=data["location"],
        min_players=data.get("min_players"),
        max_players=data.get("max_players"),
        created_by=creator.user_id,
        created_by_name=creator.full_name,
    )
    _apply_geocoding(event, geocoder)

    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by %s", event.title, event.event_id, creator.user_id)
    return event


def update_event(
    db: Session,
    event_id: str,
    actor: User,
    updates: dict[str, Any],
    geocoder: Optional[GeocodingClient] = None,
) -> Event:
    """Apply a partial update. Required fields cannot be cleared."""
    event = get_event(db, event_id)
    _check_authorization(event, actor)

    cleared = [f for f in REQUIRED_FIELDS if f in updates and updates[f] is None]
    if cleared:
        raise ValidationError(f"Required field cannot be empty: {', '.join(cleared)}")

    min_players = updates.get("min_players", event.min_players)
    max_players = updates.get("max_players", event.max_players)
    if min_players is not None and max_players is not None and min_players > max_players:
        raise ValidationError("minPlayers cannot exceed maxPlayers")

    location_changed = "location" in updates and updates["location"] != event.location
    for field, value in updates.items():
        if field not in UPDATABLE_FIELDS:
            continue
        if field == "date":
            value = to_local_naive(value, settings.TIMEZONE)
        setattr(event, field, value)

    if location_changed:
        _apply_geocoding(event, geocoder)

    # An update with no applicable fields leaves the event clean, so the flush hook would not run
    event.ensure_creator_attends()
    db.commit()
    db.refresh(event)
    logger.info("Updated event %s (%s)", event.event_id, ", ".join(sorted(updates)) or "no fields")
    return event


def delete_event(db: Session, event_id: str, actor: User) -> None:
    """Delete an event with its memberships, root comments and their replies."""
    event = get_event(db, event_id)
    _check_authorization(event, actor)

    child_ids = [cid for root in event.comments for cid in (root.child_comment_ids or [])]
    if child_ids:
        db.query(Comment).filter(Comment.comment_id.in_(child_ids)).delete(synchronize_session=False)

    db.delete(event)
    db.commit()
    logger.info("Deleted event %s (%d replies removed)", event_id, len(child_ids))


def locations_summary(db: Session) -> list[dict[str, Any]]:
    """One entry per distinct location string, with the first-created event's coordinates."""
    rows = (
        db.query(Event.location, Event.latitude, Event.longitude)
        .order_by(Event.created_at, Event.event_id)
        .all()
    )
    seen: dict[str, dict[str, Any]] = {}
    for location, latitude, longitude in rows:
        if location not in seen:
            seen[location] = {"location": location, "latitude": latitude, "longitude": longitude}
    return list(seen.values())
