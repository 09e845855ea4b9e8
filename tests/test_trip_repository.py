"""Trip repository and demo seed tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from trip_timeline.db import DEMO_TRIP_ID, SQLiteReadClient, seed_demo_trip
from trip_timeline.repositories.trip_repository import TripRepository
from trip_timeline.services.timeline_service import get_timeline

UTC = ZoneInfo("UTC")


@pytest.fixture
def seeded_db(tmp_path: Path) -> Path:
    db_path = tmp_path / "trips.db"
    assert seed_demo_trip(db_path) == DEMO_TRIP_ID
    return db_path


@pytest.fixture(autouse=True)
def _clear_layout_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TRIP_TIMELINE_DB_PATH",
        "TRIP_TIMELINE_TZ",
        "TRIP_TIMELINE_PIXELS_PER_HOUR",
        "TRIP_TIMELINE_MIN_HEIGHT_PX",
        "TRIP_TIMELINE_ALL_DAY_HEIGHT_PX",
    ):
        monkeypatch.delenv(name, raising=False)


def test_fetch_trip(seeded_db: Path) -> None:
    repository = TripRepository(SQLiteReadClient(seeded_db))

    trip = repository.fetch_trip(DEMO_TRIP_ID)

    assert trip == {
        "trip_id": DEMO_TRIP_ID,
        "trip_name": "San Diego Weekend Getaway",
        "start_date": "2026-06-10T00:00:00Z",
        "end_date": "2026-06-12T23:59:59Z",
    }
    assert repository.fetch_trip("missing") is None


def test_fetch_entry_rows_includes_ideas(seeded_db: Path) -> None:
    repository = TripRepository(SQLiteReadClient(seeded_db))

    rows = repository.fetch_entry_rows(DEMO_TRIP_ID)

    assert {category: len(category_rows) for category, category_rows in rows.items()} == {
        "flight": 2,
        "lodging": 1,
        "carRental": 1,
        "restaurant": 3,
        "activity": 4,
    }
    assert rows["carRental"][0]["is_idea"] == 1
    assert rows["carRental"][0]["pickup_at"] is None
    assert rows["flight"][0]["entry_id"] == "flight-outbound"
    assert rows["activity"][-1]["start_time"] == "09:00"


def test_fetch_entry_rows_for_unknown_trip_is_empty(seeded_db: Path) -> None:
    repository = TripRepository(SQLiteReadClient(seeded_db))
    rows = repository.fetch_entry_rows("missing")
    assert all(category_rows == [] for category_rows in rows.values())


def test_seed_is_repeatable(seeded_db: Path) -> None:
    seed_demo_trip(seeded_db)
    repository = TripRepository(SQLiteReadClient(seeded_db))
    assert len(repository.fetch_flights(DEMO_TRIP_ID)) == 2


def test_get_timeline_from_seeded_database(seeded_db: Path) -> None:
    timeline = get_timeline(trip_id=DEMO_TRIP_ID, db_path=str(seeded_db), timezone_name="UTC")

    assert timeline.trip_name == "San Diego Weekend Getaway"
    assert len(timeline.items) == 8
    assert {item.item_id for item in timeline.items}.isdisjoint(
        {"car-enterprise", "restaurant-juniper", "activity-midway"}
    )
    assert [day.day_start for day in timeline.days] == [
        datetime(2026, 6, 10, tzinfo=UTC),
        datetime(2026, 6, 11, tzinfo=UTC),
        datetime(2026, 6, 12, tzinfo=UTC),
    ]

    second_day = {bar.item.item_id: bar for bar in timeline.days[1].timed_bars}
    assert set(second_day) == {"restaurant-puesto", "activity-zoo", "activity-balboa"}
    assert second_day["activity-zoo"].total_columns == 2
    assert second_day["restaurant-puesto"].column == 1
    assert (second_day["activity-balboa"].column, second_day["activity-balboa"].total_columns) == (0, 1)


def test_get_timeline_uses_scale_from_environment(seeded_db: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIP_TIMELINE_PIXELS_PER_HOUR", "60")

    timeline = get_timeline(trip_id=DEMO_TRIP_ID, db_path=str(seeded_db), timezone_name="UTC")

    zoo = next(bar for bar in timeline.days[1].timed_bars if bar.item.item_id == "activity-zoo")
    assert zoo.top == 9 * 60
    assert zoo.height == 5 * 60
