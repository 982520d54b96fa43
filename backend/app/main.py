"""FastAPI application entry point."""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import Base, engine
from app.errors import register_exception_handlers

# Import routers
from app.routers import users, events, attendees, comments, mail

# Import all models so Base.metadata knows about them
from app.models.user import User                # noqa: F401
from app.models.event import Event              # noqa: F401
from app.models.attendee import EventAttendee   # noqa: F401
from app.models.comment import Comment          # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Sports Events",
    description="Create pickup sports events, join them and discuss them in threaded comments",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

# Register routers
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(mail.router, prefix="/events", tags=["Email"])
app.include_router(events.router, prefix="/events", tags=["Events"])
app.include_router(attendees.router, prefix="/events", tags=["Attendees"])
app.include_router(comments.router, prefix="/events", tags=["Comments"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/health")
def health_check():
    return {"status": "ok"}
