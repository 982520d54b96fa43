"""Resolve symbolic time tokens into concrete [start, end] ranges.

All arithmetic happens on the calendar of the ``now`` value passed in; the
caller decides which timezone that is (routers use settings.TIMEZONE).
"""
import enum
import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional

import pytz

logger = logging.getLogger(__name__)


class TimeToken(str, enum.Enum):
    today = "today"
    tomorrow = "tomorrow"
    this_week = "thisWeek"
    next_week = "nextWeek"


Window = tuple[datetime, datetime]


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=999000)


def start_of_week(dt: datetime) -> datetime:
    """Monday 00:00 of the week containing ``dt`` (Sunday is the 7th day)."""
    return start_of_day(dt) - timedelta(days=dt.isoweekday() - 1)


def resolve_window(token: TimeToken, now: datetime) -> Window:
    if token == TimeToken.today:
        return start_of_day(now), end_of_day(now)
    if token == TimeToken.tomorrow:
        day = now + timedelta(days=1)
        return start_of_day(day), end_of_day(day)
    monday = start_of_week(now)
    if token == TimeToken.this_week:
        return monday, end_of_day(monday + timedelta(days=6))
    if token == TimeToken.next_week:
        next_monday = monday + timedelta(days=7)
        return next_monday, end_of_day(next_monday + timedelta(days=6))
    raise ValueError(f"Unknown time token: {token}")


def parse_time_tokens(raw: Optional[str]) -> list[TimeToken]:
    """Parse a comma separated token list, dropping blanks, duplicates and unknown values."""
    tokens: list[TimeToken] = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            token = TimeToken(part)
        except ValueError:
            logger.debug("Ignoring unrecognized time token %r", part)
            continue
        if token not in tokens:
            tokens.append(token)
    return tokens


def resolve_windows(tokens: Iterable[TimeToken], now: datetime) -> list[Window]:
    return [resolve_window(token, now) for token in tokens]


def resolve_day(day: date) -> Window:
    """Start and end of a single calendar date."""
    midnight = datetime.combine(day, time())
    return start_of_day(midnight), end_of_day(midnight)


def to_local_naive(dt: datetime, tz_name: str) -> datetime:
    """Convert an aware datetime to naive wall-clock time in ``tz_name``; naive input is returned as is."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.timezone(tz_name)).replace(tzinfo=None)


def local_now(tz_name: str) -> datetime:
    return datetime.now(pytz.timezone(tz_name)).replace(tzinfo=None)
