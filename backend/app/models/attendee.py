"""EventAttendee ORM model: one membership row per (event, user)."""
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class EventAttendee(Base):
    __tablename__ = "event_attendees"

    # The composite primary key is what makes "add if absent" atomic
    event_id = Column(String(36), ForeignKey("events.event_id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), primary_key=True)
    joined_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    event = relationship("Event", back_populates="attendees")
    user = relationship("User", lazy="joined")
