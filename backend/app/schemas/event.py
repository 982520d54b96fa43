"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator, model_validator

from app.models.event import Category
from app.schemas.comment import CommentOut
from app.schemas.common import CamelModel, UserSummary


class EventCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    category: Category
    image: Optional[str] = None
    description: str = Field(min_length=1)
    date: datetime
    location: str = Field(min_length=1, max_length=500)
    min_players: Optional[int] = Field(default=None, ge=0)
    max_players: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _players_range(self):
        if self.min_players is not None and self.max_players is not None and self.min_players > self.max_players:
            raise ValueError("minPlayers cannot exceed maxPlayers")
        return self


class EventUpdate(CamelModel):
    """Partial update; only the fields sent are applied. Creator fields are not updatable."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[Category] = None
    image: Optional[str] = None
    description: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=500)
    min_players: Optional[int] = Field(default=None, ge=0)
    max_players: Optional[int] = Field(default=None, ge=0)


class EventOut(CamelModel):
    event_id: str
    title: str
    category: Category
    image: Optional[str] = None
    description: str
    date: datetime
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    created_by: str
    created_by_name: Optional[str] = None
    creator: Optional[UserSummary] = None
    attendees: list[UserSummary] = []
    comments: list[CommentOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("attendees", mode="before")
    @classmethod
    def _attendee_users(cls, value):
        # Membership rows carry the user; project them to the display summary
        return [getattr(a, "user", a) for a in value or []]


class AttendanceOut(CamelModel):
    event_id: str
    attendees: list[str]


class LocationOut(CamelModel):
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class EmailPayload(CamelModel):
    to: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    subject: str = Field(min_length=1, max_length=255)
    text: str = Field(min_length=1)
    html: Optional[str] = None
