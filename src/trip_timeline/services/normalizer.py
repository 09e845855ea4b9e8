"""行程条目归一化为时间线条目。"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, tzinfo

from trip_timeline.domain.timeline_types import (
    ActivityEntry,
    CalendarValue,
    CarRentalEntry,
    FlightEntry,
    LayoutScale,
    LodgingEntry,
    RestaurantEntry,
    TimelineItem,
    TripEntry,
)
from trip_timeline.services.time_parsing import (
    add_hours,
    combine_date_and_time,
    ensure_aware,
    hours_between,
    parse_time_string,
)

logger = logging.getLogger(__name__)

RESERVATION_FALLBACK_HOUR = 12
ACTIVITY_FALLBACK_HOUR = 0
DEFAULT_SCALE = LayoutScale()


def normalize_entries(
    entries: Iterable[TripEntry],
    tz: tzinfo,
    scale: LayoutScale = DEFAULT_SCALE,
) -> list[TimelineItem]:
    """归一化全部条目，跳过没有日期的想法条目。"""

    items: list[TimelineItem] = []
    for entry in entries:
        item = normalize_entry(entry, tz, scale)
        if item is None:
            logger.debug("Skipping undated %s entry %s", entry.category, entry.entry_id)
            continue
        items.append(item)
    return items


def normalize_entry(
    entry: TripEntry,
    tz: tzinfo,
    scale: LayoutScale = DEFAULT_SCALE,
) -> TimelineItem | None:
    """按条目类型归一化单个条目。"""

    match entry:
        case FlightEntry():
            return _from_instants(entry, entry.departure_at, entry.arrival_at, False, tz, scale)
        case LodgingEntry():
            return _from_instants(entry, entry.check_in, entry.check_out, True, tz, scale)
        case CarRentalEntry():
            return _from_instants(entry, entry.pickup_at, entry.dropoff_at, True, tz, scale)
        case RestaurantEntry():
            return _from_reservation(entry, tz, scale)
        case ActivityEntry():
            return _from_activity(entry, tz, scale)
        case _:
            raise TypeError(f"Unsupported entry type: {type(entry).__name__}")


def entry_primary_date(entry: TripEntry) -> CalendarValue | None:
    """条目用于排序和展示的主日期，想法条目返回 None。"""

    match entry:
        case FlightEntry():
            return entry.departure_at
        case LodgingEntry():
            return entry.check_in
        case CarRentalEntry():
            return entry.pickup_at
        case RestaurantEntry() | ActivityEntry():
            return entry.date
        case _:
            raise TypeError(f"Unsupported entry type: {type(entry).__name__}")


def _from_instants(
    entry: FlightEntry | LodgingEntry | CarRentalEntry,
    start_at: datetime | None,
    end_at: datetime | None,
    is_all_day: bool,
    tz: tzinfo,
    scale: LayoutScale,
) -> TimelineItem | None:
    if start_at is None:
        return None

    start_time = ensure_aware(start_at).astimezone(tz)
    end_time = ensure_aware(end_at).astimezone(tz) if end_at is not None else None
    is_point_event = False
    if end_time is None or hours_between(end_time, start_time) <= 0:
        logger.debug("Coercing %s entry %s into a point event", entry.category, entry.entry_id)
        end_time = add_hours(start_time, scale.point_event_hours, tz)
        is_point_event = True

    return TimelineItem(
        item_id=entry.entry_id,
        category=entry.category,
        name=entry.name,
        start_time=start_time,
        end_time=end_time,
        is_all_day=is_all_day,
        is_point_event=is_point_event,
        original_entry=entry,
    )


def _from_reservation(
    entry: RestaurantEntry,
    tz: tzinfo,
    scale: LayoutScale,
) -> TimelineItem | None:
    if entry.date is None:
        return None

    start_time = combine_date_and_time(entry.date, entry.time, RESERVATION_FALLBACK_HOUR, tz)
    return TimelineItem(
        item_id=entry.entry_id,
        category=entry.category,
        name=entry.name,
        start_time=start_time,
        end_time=add_hours(start_time, scale.point_event_hours, tz),
        is_all_day=_is_blank(entry.time),
        is_point_event=True,
        original_entry=entry,
    )


def _from_activity(
    entry: ActivityEntry,
    tz: tzinfo,
    scale: LayoutScale,
) -> TimelineItem | None:
    if entry.date is None:
        return None

    start_time = combine_date_and_time(entry.date, entry.start_time, ACTIVITY_FALLBACK_HOUR, tz)
    end_time: datetime | None = None
    if not _is_blank(entry.end_time):
        candidate = _combine_or_none(entry.date, entry.end_time, tz)
        # 无法解析或不晚于开始时刻的结束时间按点事件处理。
        if candidate is not None and hours_between(candidate, start_time) > 0:
            end_time = candidate

    is_point_event = end_time is None
    if end_time is None:
        end_time = add_hours(start_time, scale.point_event_hours, tz)

    return TimelineItem(
        item_id=entry.entry_id,
        category=entry.category,
        name=entry.name,
        start_time=start_time,
        end_time=end_time,
        is_all_day=_is_blank(entry.start_time),
        is_point_event=is_point_event,
        original_entry=entry,
    )


def _combine_or_none(base: CalendarValue, text: str | None, tz: tzinfo) -> datetime | None:
    if text is None or parse_time_string(text) is None:
        return None
    return combine_date_and_time(base, text, ACTIVITY_FALLBACK_HOUR, tz)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
