"""Tests for the list filter builder against a real session."""
from datetime import date, datetime

import pytest

from app.errors import ValidationError
from app.models.event import Category, Event
from app.services.event_query import build_event_filter, parse_categories
from app.services.event_service import list_events
from tests.conftest import FIXED_NOW, create_test_event, make_event, make_user, register_user


def _titles(events):
    return sorted(e.title for e in events)


@pytest.fixture
def seeded(db):
    creator = make_user(db)
    make_event(db, creator, title="football today", category=Category.football, date=datetime(2024, 3, 15, 18, 0))
    make_event(db, creator, title="tennis tomorrow", category=Category.tennis, date=datetime(2024, 3, 16, 9, 0))
    make_event(db, creator, title="padel next week", category=Category.padel, date=datetime(2024, 3, 20, 19, 0))
    make_event(db, creator, title="football last month", category=Category.football, date=datetime(2024, 2, 1, 19, 0))
    return creator


class TestParseCategories:

    def test_parses_and_deduplicates(self):
        assert parse_categories("Football, Tennis,Football") == [Category.football, Category.tennis]

    def test_unknown_category_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_categories("Football,Curling")


class TestBuildEventFilter:

    def test_no_facets_matches_everything(self, db, seeded):
        assert len(db.query(Event).filter(build_event_filter(None, None, FIXED_NOW)).all()) == 4

    def test_category_only_ignores_dates(self, db, seeded):
        events = list_events(db, FIXED_NOW, category="Football,Tennis")
        assert _titles(events) == ["football last month", "football today", "tennis tomorrow"]

    def test_time_tokens_are_ored(self, db, seeded):
        events = list_events(db, FIXED_NOW, time="today,tomorrow")
        assert _titles(events) == ["football today", "tennis tomorrow"]

    def test_next_week(self, db, seeded):
        events = list_events(db, FIXED_NOW, time="nextWeek")
        assert _titles(events) == ["padel next week"]

    def test_facets_are_anded(self, db, seeded):
        events = list_events(db, FIXED_NOW, category="Football", time="thisWeek")
        assert _titles(events) == ["football today"]

    def test_unrecognized_time_tokens_add_no_constraint(self, db, seeded):
        assert len(list_events(db, FIXED_NOW, time="someday")) == 4

    def test_results_ordered_by_date(self, db, seeded):
        dates = [e.date for e in list_events(db, FIXED_NOW)]
        assert dates == sorted(dates)

    def test_day_facet(self, db, seeded):
        events = list_events(db, FIXED_NOW, day=date(2024, 3, 16))
        assert _titles(events) == ["tennis tomorrow"]

    def test_day_is_anded_with_category(self, db, seeded):
        assert list_events(db, FIXED_NOW, category="Football", day=date(2024, 3, 16)) == []
        events = list_events(db, FIXED_NOW, category="Football", day=date(2024, 2, 1))
        assert _titles(events) == ["football last month"]

    def test_day_covers_the_whole_calendar_day(self, db):
        creator = make_user(db)
        make_event(db, creator, title="midnight", date=datetime(2024, 3, 16, 0, 0))
        make_event(db, creator, title="late", date=datetime(2024, 3, 16, 23, 59, 59))
        make_event(db, creator, title="next day", date=datetime(2024, 3, 17, 0, 0))
        events = list_events(db, FIXED_NOW, day=date(2024, 3, 16))
        assert _titles(events) == ["late", "midnight"]


class TestDayQueryParameter:

    def test_list_filters_by_day(self, client):
        _, headers = register_user(client)
        create_test_event(client, headers, title="Saturday", date="2024-03-16T09:00:00")
        create_test_event(client, headers, title="Sunday", date="2024-03-17T09:00:00")
        resp = client.get("/events/", params={"day": "2024-03-17"})
        assert resp.status_code == 200
        assert [e["title"] for e in resp.json()] == ["Sunday"]

    def test_malformed_day_is_bad_request(self, client):
        resp = client.get("/events/", params={"day": "next tuesday"})
        assert resp.status_code == 400
