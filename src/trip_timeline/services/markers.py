"""日分隔线与小时刻度。"""

from __future__ import annotations

from datetime import datetime, time, timedelta, tzinfo

from trip_timeline.domain.timeline_types import HourLabel, LayoutScale, TimelineRange

HOURS_PER_DAY = 24


def day_markers(timeline_range: TimelineRange, tz: tzinfo) -> list[datetime]:
    """范围内每个本地日的零点。"""

    first_day = timeline_range.start_time.astimezone(tz).date()
    last_day = timeline_range.end_time.astimezone(tz).date()
    markers: list[datetime] = []
    current = first_day
    while current <= last_day:
        markers.append(datetime.combine(current, time.min, tzinfo=tz))
        current += timedelta(days=1)
    return markers


def hour_labels(scale: LayoutScale = LayoutScale()) -> list[HourLabel]:
    """1 点到 23 点的刻度，0 点与日分隔线重合故省略。"""

    return [
        HourLabel(label=_format_hour(hour), top=hour * scale.pixels_per_hour)
        for hour in range(1, HOURS_PER_DAY)
    ]


def _format_hour(hour: int) -> str:
    if hour == 12:
        return "12p"
    if hour < 12:
        return f"{hour}a"
    return f"{hour - 12}p"
