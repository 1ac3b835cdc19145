"""Shared test fixtures."""

import pytest

from dbconn import QueryFacade, profile_from_url

SCHEMA = [
    "CREATE TABLE timezones (id INTEGER PRIMARY KEY, value TEXT NOT NULL)",
    "CREATE TABLE blah (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL UNIQUE)",
]
TIMEZONES = [(5, "America/New_York"), (13, "Europe/Paris"), (42, "Asia/Tokyo"), (77, "GMT")]


@pytest.fixture
def profiles(tmp_path):
    """Profile table with a SQLite-backed "website" profile in tmp_path."""
    db_path = tmp_path / "website.db"
    return {"website": profile_from_url("website", f"sqlite:///{db_path}")}


@pytest.fixture
def db(profiles):
    """Provide a fresh QueryFacade with the timezones and blah tables seeded."""
    facade = QueryFacade("website", profiles)
    for statement in SCHEMA:
        facade.execute(statement)
    for tz_id, value in TIMEZONES:
        facade.execute("INSERT INTO timezones (id, value) VALUES (?, ?)", [tz_id, value])
    yield facade
    facade.close()
