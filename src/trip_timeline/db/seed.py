"""演示数据写入。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from trip_timeline.db.schema import ENTRY_TABLES, create_sqlite_engine, metadata, trip_table

logger = logging.getLogger(__name__)

DEMO_TRIP_ID = "trip-san-diego"

DEMO_ROWS: dict[str, list[dict[str, Any]]] = {
    "Flight": [
        {
            "id": "flight-outbound",
            "isIdea": False,
            "airline": "Southwest Airlines",
            "flightNumber": "WN1523",
            "departureDate": "2026-06-10T08:30:00Z",
            "arrivalDate": "2026-06-10T10:45:00Z",
        },
        {
            "id": "flight-return",
            "isIdea": False,
            "airline": "Southwest Airlines",
            "flightNumber": "WN2847",
            "departureDate": "2026-06-12T18:20:00Z",
            "arrivalDate": "2026-06-12T22:45:00Z",
        },
    ],
    "Lodging": [
        {
            "id": "lodging-coronado",
            "isIdea": False,
            "name": "Hotel del Coronado",
            "checkIn": "2026-06-10T15:00:00Z",
            "checkOut": "2026-06-12T11:00:00Z",
        },
    ],
    "CarRental": [
        {
            "id": "car-enterprise",
            "isIdea": True,
            "company": "Enterprise",
            "pickupDate": None,
            "dropoffDate": None,
        },
    ],
    "Restaurant": [
        {
            "id": "restaurant-fish-market",
            "isIdea": False,
            "name": "The Fish Market",
            "date": "2026-06-10T00:00:00Z",
            "time": "19:00",
        },
        {
            "id": "restaurant-puesto",
            "isIdea": False,
            "name": "Puesto Mexican Street Food",
            "date": "2026-06-11T00:00:00Z",
            "time": "12:30",
        },
        {
            "id": "restaurant-juniper",
            "isIdea": True,
            "name": "Juniper & Ivy",
            "date": None,
            "time": None,
        },
    ],
    "Activity": [
        {
            "id": "activity-zoo",
            "isIdea": False,
            "name": "San Diego Zoo",
            "date": "2026-06-11T00:00:00Z",
            "startTime": "09:00",
            "endTime": "14:00",
        },
        {
            "id": "activity-balboa",
            "isIdea": False,
            "name": "Balboa Park Exploration",
            "date": "2026-06-11T00:00:00Z",
            "startTime": "15:00",
            "endTime": "18:00",
        },
        {
            "id": "activity-la-jolla",
            "isIdea": False,
            "name": "La Jolla Cove & Beach",
            "date": "2026-06-12T00:00:00Z",
            "startTime": "09:00",
            "endTime": "12:00",
        },
        {
            "id": "activity-midway",
            "isIdea": True,
            "name": "USS Midway Museum",
            "date": None,
            "startTime": None,
            "endTime": None,
        },
    ],
}


def seed_demo_trip(db_path: Path) -> str:
    """重建行程表并写入演示行程，返回行程 id。"""

    engine = create_sqlite_engine(db_path)
    tables = {table.name: table for table in ENTRY_TABLES}
    try:
        metadata.drop_all(engine)
        metadata.create_all(engine)
        with engine.begin() as connection:
            connection.execute(
                trip_table.insert(),
                {
                    "id": DEMO_TRIP_ID,
                    "name": "San Diego Weekend Getaway",
                    "startDate": "2026-06-10T00:00:00Z",
                    "endDate": "2026-06-12T23:59:59Z",
                },
            )
            for table_name, rows in DEMO_ROWS.items():
                connection.execute(
                    tables[table_name].insert(),
                    [{**row, "tripId": DEMO_TRIP_ID} for row in rows],
                )
                logger.info("Seeded %d %s row(s)", len(rows), table_name)
    finally:
        engine.dispose()
    return DEMO_TRIP_ID
