"""Event ORM model."""
import enum
import logging
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, Integer, Float, ForeignKey, Enum as SAEnum, event
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Session, relationship
from app.database import Base
from app.models.attendee import EventAttendee

logger = logging.getLogger(__name__)


class Category(str, enum.Enum):
    football = "Football"
    badminton = "Badminton"
    tennis = "Tennis"
    padel = "Padel"
    spikeball = "Spikeball"
    basket = "Basket"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    category = Column(SAEnum(Category, values_callable=lambda e: [c.value for c in e]), nullable=False, index=True)
    image = Column(String(500), nullable=True)
    description = Column(Text, nullable=False)
    # Naive wall-clock time in settings.TIMEZONE
    date = Column(DateTime, nullable=False, index=True)
    location = Column(String(500), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    min_players = Column(Integer, nullable=True)
    max_players = Column(Integer, nullable=True)
    created_by = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    # Snapshot of the creator's name at creation time; never refreshed
    created_by_name = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    creator = relationship("User", lazy="joined")
    attendees = relationship(
        "EventAttendee",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventAttendee.joined_at",
    )
    comments = relationship(
        "Comment",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Comment.position",
        collection_class=ordering_list("position"),
    )

    @property
    def attendee_ids(self) -> list[str]:
        return [a.user_id for a in self.attendees]

    def ensure_creator_attends(self) -> bool:
        """Append the creator to the attendees if missing. Returns True when healed."""
        if self.created_by is None or self.created_by in self.attendee_ids:
            return False
        self.attendees.append(EventAttendee(user_id=self.created_by))
        return True


@event.listens_for(Session, "before_flush")
def _creator_always_attends(session, flush_context, instances):
    for obj in list(session.new) + list(session.dirty):
        if isinstance(obj, Event) and obj not in session.deleted:
            if obj.ensure_creator_attends():
                logger.debug("Added creator %s to attendees of event %s", obj.created_by, obj.event_id)
