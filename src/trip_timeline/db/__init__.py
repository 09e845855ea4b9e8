"""Database helpers."""

from trip_timeline.db.seed import DEMO_TRIP_ID, seed_demo_trip
from trip_timeline.db.sqlite_client import DatabaseReadError, SQLiteReadClient

__all__ = ["DEMO_TRIP_ID", "DatabaseReadError", "SQLiteReadClient", "seed_demo_trip"]
