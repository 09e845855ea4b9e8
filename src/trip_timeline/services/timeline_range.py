"""时间线显示范围计算。"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, time, tzinfo

from trip_timeline.domain.timeline_types import TimelineItem, TimelineRange, TripWindow
from trip_timeline.services.time_parsing import (
    calendar_date,
    hours_between,
    local_end_of_day,
    local_midnight,
)


def compute_range(
    trip_window: TripWindow | None,
    items: Sequence[TimelineItem],
    tz: tzinfo,
    now: datetime | None = None,
) -> TimelineRange:
    """覆盖行程日期与全部条目的最小整日范围。"""

    range_start: datetime | None = None
    range_end: datetime | None = None

    if trip_window is not None:
        if trip_window.start_date is not None:
            range_start = datetime.combine(calendar_date(trip_window.start_date), time.min, tzinfo=tz)
        if trip_window.end_date is not None:
            range_end = local_end_of_day(calendar_date(trip_window.end_date), tz)

    for item in items:
        if range_start is None or item.start_time < range_start:
            range_start = item.start_time
        if range_end is None or item.end_time > range_end:
            range_end = item.end_time

    if range_start is None and range_end is None:
        today = now.astimezone(tz) if now is not None else datetime.now(tz)
        range_start = range_end = today
    # 只有单侧行程日期时，范围收缩为该日。
    range_start = range_start or range_end
    range_end = range_end or range_start
    assert range_start is not None and range_end is not None

    snapped_start = local_midnight(range_start, tz)
    snapped_end = local_end_of_day(range_end, tz)
    return TimelineRange(
        start_time=snapped_start,
        end_time=snapped_end,
        total_hours=hours_between(snapped_end, snapped_start),
    )
