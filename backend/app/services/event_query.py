"""Compose the optional list filters (category set, time windows, calendar day) into one predicate."""
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, or_, true

from app.errors import ValidationError
from app.models.event import Category, Event
from app.services.time_windows import parse_time_tokens, resolve_day, resolve_windows

logger = logging.getLogger(__name__)


def parse_categories(raw: Optional[str]) -> list[Category]:
    categories: list[Category] = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            category = Category(part)
        except ValueError:
            raise ValidationError(f"Unknown category: {part}")
        if category not in categories:
            categories.append(category)
    return categories


def build_event_filter(
    category: Optional[str],
    time: Optional[str],
    now: datetime,
    day: Optional[date] = None,
):
    """AND of the facets that are present; a missing facet restricts nothing."""
    clauses = []

    categories = parse_categories(category)
    if categories:
        clauses.append(Event.category.in_(categories))

    windows = resolve_windows(parse_time_tokens(time), now)
    if windows:
        clauses.append(or_(*(Event.date.between(start, end) for start, end in windows)))

    if day is not None:
        start, end = resolve_day(day)
        clauses.append(Event.date.between(start, end))

    if not clauses:
        return true()
    logger.debug("Event filter: categories=%s windows=%s day=%s", categories, windows, day)
    return and_(*clauses)
