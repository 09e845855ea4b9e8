"""行程数据仓储。"""

from __future__ import annotations

from typing import Any

from trip_timeline.db.sqlite_client import SQLiteReadClient
from trip_timeline.domain.timeline_types import EntryCategory


class TripRepository:
    """封装行程与条目查询 SQL。"""

    def __init__(self, client: SQLiteReadClient) -> None:
        self._client = client

    def fetch_trip(self, trip_id: str) -> dict[str, Any] | None:
        """查询行程及其起止日期。"""

        sql = """
        SELECT
            t.id AS trip_id,
            t.name AS trip_name,
            t.startDate AS start_date,
            t.endDate AS end_date
        FROM Trip t
        WHERE t.id = :trip_id;
        """
        return self._client.fetch_one(sql, {"trip_id": trip_id})

    def fetch_flights(self, trip_id: str) -> list[dict[str, Any]]:
        """查询航班，包括尚无日期的想法条目。"""

        sql = """
        SELECT
            f.id AS entry_id,
            f.isIdea AS is_idea,
            f.airline AS airline,
            f.flightNumber AS flight_number,
            f.departureDate AS departure_at,
            f.arrivalDate AS arrival_at
        FROM Flight f
        WHERE f.tripId = :trip_id
        ORDER BY f.departureDate ASC, f.id ASC;
        """
        return self._client.fetch_all(sql, {"trip_id": trip_id})

    def fetch_lodgings(self, trip_id: str) -> list[dict[str, Any]]:
        """查询住宿。"""

        sql = """
        SELECT
            l.id AS entry_id,
            l.isIdea AS is_idea,
            l.name AS name,
            l.checkIn AS check_in,
            l.checkOut AS check_out
        FROM Lodging l
        WHERE l.tripId = :trip_id
        ORDER BY l.checkIn ASC, l.id ASC;
        """
        return self._client.fetch_all(sql, {"trip_id": trip_id})

    def fetch_car_rentals(self, trip_id: str) -> list[dict[str, Any]]:
        """查询租车。"""

        sql = """
        SELECT
            c.id AS entry_id,
            c.isIdea AS is_idea,
            c.company AS company,
            c.pickupDate AS pickup_at,
            c.dropoffDate AS dropoff_at
        FROM CarRental c
        WHERE c.tripId = :trip_id
        ORDER BY c.pickupDate ASC, c.id ASC;
        """
        return self._client.fetch_all(sql, {"trip_id": trip_id})

    def fetch_restaurants(self, trip_id: str) -> list[dict[str, Any]]:
        """查询餐厅预订。"""

        sql = """
        SELECT
            r.id AS entry_id,
            r.isIdea AS is_idea,
            r.name AS name,
            r.date AS date,
            r.time AS time
        FROM Restaurant r
        WHERE r.tripId = :trip_id
        ORDER BY r.date ASC, r.id ASC;
        """
        return self._client.fetch_all(sql, {"trip_id": trip_id})

    def fetch_activities(self, trip_id: str) -> list[dict[str, Any]]:
        """查询活动。"""

        sql = """
        SELECT
            a.id AS entry_id,
            a.isIdea AS is_idea,
            a.name AS name,
            a.date AS date,
            a.startTime AS start_time,
            a.endTime AS end_time
        FROM Activity a
        WHERE a.tripId = :trip_id
        ORDER BY a.date ASC, a.id ASC;
        """
        return self._client.fetch_all(sql, {"trip_id": trip_id})

    def fetch_entry_rows(self, trip_id: str) -> dict[EntryCategory, list[dict[str, Any]]]:
        """按类型查询全部条目行。"""

        return {
            "flight": self.fetch_flights(trip_id),
            "lodging": self.fetch_lodgings(trip_id),
            "carRental": self.fetch_car_rentals(trip_id),
            "restaurant": self.fetch_restaurants(trip_id),
            "activity": self.fetch_activities(trip_id),
        }
