"""行程表结构（与行程规划应用的表名和列名一致）。

时间列以 ISO-8601 文本或 epoch 毫秒存储，纯日历日存为当日 UTC 零点。
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import Boolean, Column, ForeignKey, MetaData, String, Table, create_engine
from sqlalchemy.engine import Engine

metadata = MetaData()

trip_table = Table(
    "Trip",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("startDate", String),
    Column("endDate", String),
)

flight_table = Table(
    "Flight",
    metadata,
    Column("id", String, primary_key=True),
    Column("tripId", String, ForeignKey("Trip.id"), nullable=False),
    Column("isIdea", Boolean, nullable=False, default=False),
    Column("airline", String, nullable=False),
    Column("flightNumber", String),
    Column("departureDate", String),
    Column("arrivalDate", String),
)

lodging_table = Table(
    "Lodging",
    metadata,
    Column("id", String, primary_key=True),
    Column("tripId", String, ForeignKey("Trip.id"), nullable=False),
    Column("isIdea", Boolean, nullable=False, default=False),
    Column("name", String, nullable=False),
    Column("checkIn", String),
    Column("checkOut", String),
)

car_rental_table = Table(
    "CarRental",
    metadata,
    Column("id", String, primary_key=True),
    Column("tripId", String, ForeignKey("Trip.id"), nullable=False),
    Column("isIdea", Boolean, nullable=False, default=False),
    Column("company", String, nullable=False),
    Column("pickupDate", String),
    Column("dropoffDate", String),
)

restaurant_table = Table(
    "Restaurant",
    metadata,
    Column("id", String, primary_key=True),
    Column("tripId", String, ForeignKey("Trip.id"), nullable=False),
    Column("isIdea", Boolean, nullable=False, default=False),
    Column("name", String, nullable=False),
    Column("date", String),
    Column("time", String),
)

activity_table = Table(
    "Activity",
    metadata,
    Column("id", String, primary_key=True),
    Column("tripId", String, ForeignKey("Trip.id"), nullable=False),
    Column("isIdea", Boolean, nullable=False, default=False),
    Column("name", String, nullable=False),
    Column("date", String),
    Column("startTime", String),
    Column("endTime", String),
)

ENTRY_TABLES = (flight_table, lodging_table, car_rental_table, restaurant_table, activity_table)


def sqlite_url(db_path: Path) -> str:
    """本地 SQLite 文件的 SQLAlchemy URL，路径不做 URL 编码。"""

    return f"sqlite+pysqlite:///{db_path}"


def create_sqlite_engine(db_path: Path) -> Engine:
    return create_engine(sqlite_url(db_path))
