"""时间到像素的投影。"""

from __future__ import annotations

from datetime import datetime, tzinfo

from trip_timeline.domain.timeline_types import LayoutScale, TimelineItem
from trip_timeline.services.time_parsing import hours_between, local_midnight, next_local_midnight

DEFAULT_SCALE = LayoutScale()


def pixel_top(time_value: datetime, range_start: datetime, scale: LayoutScale = DEFAULT_SCALE) -> float:
    """距范围起点的像素偏移，早于起点时为负。"""

    return hours_between(time_value, range_start) * scale.pixels_per_hour


def pixel_height(item: TimelineItem, scale: LayoutScale = DEFAULT_SCALE) -> float:
    """条目像素高度，不低于最小高度。"""

    duration_hours = hours_between(item.end_time, item.start_time)
    return max(duration_hours * scale.pixels_per_hour, scale.min_height_px)


def pixel_top_in_day(
    item: TimelineItem,
    day_start: datetime,
    tz: tzinfo,
    scale: LayoutScale = DEFAULT_SCALE,
) -> float:
    """日列内的像素偏移，跨日条目从零点开始。"""

    if item.is_all_day:
        return 0.0
    midnight = local_midnight(day_start, tz)
    effective_start = max(item.start_time, midnight, key=lambda value: value.timestamp())
    return pixel_top(effective_start, midnight, scale)


def pixel_height_in_day(
    item: TimelineItem,
    day_start: datetime,
    tz: tzinfo,
    scale: LayoutScale = DEFAULT_SCALE,
) -> float:
    """日列内的像素高度，只计算落在当日的部分。"""

    if item.is_all_day:
        return scale.all_day_height_px
    midnight = local_midnight(day_start, tz)
    day_end = next_local_midnight(day_start, tz)
    effective_start = max(item.start_time, midnight, key=lambda value: value.timestamp())
    effective_end = min(item.end_time, day_end, key=lambda value: value.timestamp())
    duration_hours = max(hours_between(effective_end, effective_start), 0.0)
    return max(duration_hours * scale.pixels_per_hour, scale.min_height_px)
