"""时间线服务。"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timezone, tzinfo
from typing import Any, Protocol

from trip_timeline.config import load_app_config
from trip_timeline.db.sqlite_client import SQLiteReadClient
from trip_timeline.domain.timeline_types import (
    ActivityEntry,
    CarRentalEntry,
    DayBar,
    DayColumn,
    EntryCategory,
    FlightEntry,
    LayoutScale,
    LodgingEntry,
    RestaurantEntry,
    TimelineItem,
    TimelineResult,
    TripEntry,
    TripRecord,
    TripWindow,
)
from trip_timeline.repositories.trip_repository import TripRepository
from trip_timeline.services.column_layout import assign_columns, assign_day_columns, item_overlaps_day
from trip_timeline.services.geometry import pixel_height_in_day, pixel_top_in_day
from trip_timeline.services.markers import day_markers, hour_labels
from trip_timeline.services.normalizer import normalize_entries
from trip_timeline.services.timeline_range import compute_range

logger = logging.getLogger(__name__)


class TripNotFoundError(LookupError):
    """行程不存在。"""


class TripRowSource(Protocol):
    def fetch_trip(self, trip_id: str) -> dict[str, Any] | None: ...

    def fetch_entry_rows(self, trip_id: str) -> dict[EntryCategory, list[dict[str, Any]]]: ...


class TimelineService:
    """时间线业务服务。"""

    def __init__(self, repository: TripRowSource) -> None:
        self._repository = repository

    def build_timeline(
        self,
        trip_id: str,
        tz: tzinfo,
        timezone_name: str,
        scale: LayoutScale = LayoutScale(),
        now: datetime | None = None,
    ) -> TimelineResult:
        """构建指定行程的时间线布局。"""

        trip_row = self._repository.fetch_trip(trip_id)
        if trip_row is None:
            raise TripNotFoundError(f"Trip not found: {trip_id}")
        trip = _trip_from_row(trip_row)

        entry_rows = self._repository.fetch_entry_rows(trip_id)
        entries = entries_from_rows(entry_rows)
        logger.debug("Loaded %d entries for trip %s", len(entries), trip_id)

        result = layout_timeline(
            entries,
            trip.window,
            tz=tz,
            timezone_name=timezone_name,
            scale=scale,
            now=now,
        )
        return replace(result, trip_id=trip.trip_id, trip_name=trip.name)


def layout_timeline(
    entries: Iterable[TripEntry],
    trip_window: TripWindow | None,
    tz: tzinfo,
    timezone_name: str,
    scale: LayoutScale = LayoutScale(),
    now: datetime | None = None,
) -> TimelineResult:
    """归一化、分列并计算每日几何。"""

    items = assign_columns(normalize_entries(entries, tz, scale))
    timeline_range = compute_range(trip_window, items, tz, now=now)
    days = [_build_day_column(items, day_start, tz, scale) for day_start in day_markers(timeline_range, tz)]
    return TimelineResult(
        trip_id=None,
        trip_name=None,
        timezone=timezone_name,
        scale=scale,
        range=timeline_range,
        items=items,
        days=days,
        hour_labels=hour_labels(scale),
    )


def get_timeline(
    trip_id: str,
    db_path: str | None = None,
    timezone_name: str | None = None,
) -> TimelineResult:
    """按配置读取数据库并构建行程时间线。"""

    config = load_app_config(db_path=db_path, timezone_name=timezone_name)
    client = SQLiteReadClient(config.db_path)
    repository = TripRepository(client)
    service = TimelineService(repository)
    return service.build_timeline(
        trip_id=trip_id,
        tz=config.timezone,
        timezone_name=config.timezone_name,
        scale=config.scale,
    )


def entries_from_rows(rows: dict[EntryCategory, list[dict[str, Any]]]) -> list[TripEntry]:
    """数据库行转条目记录。"""

    entries: list[TripEntry] = []
    for row in rows.get("flight", []):
        entries.append(
            FlightEntry(
                entry_id=str(row["entry_id"]),
                airline=_normalize_text(row.get("airline")) or "",
                flight_number=_normalize_text(row.get("flight_number")),
                departure_at=_parse_stored_datetime(row.get("departure_at")),
                arrival_at=_parse_stored_datetime(row.get("arrival_at")),
                is_idea=bool(row.get("is_idea")),
            )
        )
    for row in rows.get("lodging", []):
        entries.append(
            LodgingEntry(
                entry_id=str(row["entry_id"]),
                name=_normalize_text(row.get("name")) or "",
                check_in=_parse_stored_datetime(row.get("check_in")),
                check_out=_parse_stored_datetime(row.get("check_out")),
                is_idea=bool(row.get("is_idea")),
            )
        )
    for row in rows.get("carRental", []):
        entries.append(
            CarRentalEntry(
                entry_id=str(row["entry_id"]),
                company=_normalize_text(row.get("company")) or "",
                pickup_at=_parse_stored_datetime(row.get("pickup_at")),
                dropoff_at=_parse_stored_datetime(row.get("dropoff_at")),
                is_idea=bool(row.get("is_idea")),
            )
        )
    for row in rows.get("restaurant", []):
        entries.append(
            RestaurantEntry(
                entry_id=str(row["entry_id"]),
                name=_normalize_text(row.get("name")) or "",
                date=_parse_stored_datetime(row.get("date")),
                time=_normalize_text(row.get("time")),
                is_idea=bool(row.get("is_idea")),
            )
        )
    for row in rows.get("activity", []):
        entries.append(
            ActivityEntry(
                entry_id=str(row["entry_id"]),
                name=_normalize_text(row.get("name")) or "",
                date=_parse_stored_datetime(row.get("date")),
                start_time=_normalize_text(row.get("start_time")),
                end_time=_normalize_text(row.get("end_time")),
                is_idea=bool(row.get("is_idea")),
            )
        )
    return entries


def _build_day_column(
    items: list[TimelineItem],
    day_start: datetime,
    tz: tzinfo,
    scale: LayoutScale,
) -> DayColumn:
    """单日列：全天条目按序号堆叠，定时条目按当日列分配。"""

    day_items = [item for item in items if item_overlaps_day(item, day_start, tz)]
    all_day_bars = [
        DayBar(
            item=item,
            top=index * scale.all_day_height_px,
            height=pixel_height_in_day(item, day_start, tz, scale),
        )
        for index, item in enumerate(item for item in day_items if item.is_all_day)
    ]

    slots = assign_day_columns(day_items, day_start, tz)
    timed_bars = [
        DayBar(
            item=item,
            top=pixel_top_in_day(item, day_start, tz, scale),
            height=pixel_height_in_day(item, day_start, tz, scale),
            column=slots[item.item_id].column,
            total_columns=slots[item.item_id].total_columns,
        )
        for item in day_items
        if not item.is_all_day
    ]
    return DayColumn(day_start=day_start, all_day_bars=all_day_bars, timed_bars=timed_bars)


def _trip_from_row(row: dict[str, Any]) -> TripRecord:
    return TripRecord(
        trip_id=str(row["trip_id"]),
        name=_normalize_text(row.get("trip_name")) or "",
        window=TripWindow(
            start_date=_parse_stored_datetime(row.get("start_date")),
            end_date=_parse_stored_datetime(row.get("end_date")),
        ),
    )


def _parse_stored_datetime(value: object | None) -> datetime | None:
    """解析 ISO-8601 文本或 epoch 毫秒，无法解析时返回 None。"""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning("Ignoring out-of-range stored timestamp: %r", value)
            return None

    text = str(value).strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Ignoring unreadable stored date: %r", value)
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _normalize_text(value: object | None) -> str | None:
    """标准化文本字段。"""

    if value is None:
        return None
    text = str(value).strip()
    return text if text else None
