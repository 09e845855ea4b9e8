"""重叠条目的列分配（贪心区间图着色）。

全局分配与按日分配共用同一套算法：按开始时间升序排序，同时开始的
条目时长更长者优先，再按 id 稳定排序；逐个放入结束时间不晚于其开始
时间的最小列，否则新开一列。随后对每个条目取与其重叠（开区间）的条目
中的最大列号加一作为 total_columns，因此列数只在各自的重叠组内有效。

第二遍比较是 O(n²)，单个行程的条目量级下可以接受。
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo

from trip_timeline.domain.timeline_types import ColumnSlot, TimelineItem
from trip_timeline.services.time_parsing import local_midnight, next_local_midnight


@dataclass(frozen=True, slots=True)
class Interval:
    """以 epoch 秒表示的条目区间。"""

    item_id: str
    start: float
    end: float


def assign_columns(items: Iterable[TimelineItem]) -> list[TimelineItem]:
    """全局列分配。

    定时条目按排序顺序返回并带上列位置，全天条目不参与分配，按原顺序
    以 column=0 / total_columns=1 追加在后。
    """

    all_items = list(items)
    timed = [item for item in all_items if not item.is_all_day]
    intervals = [
        Interval(item.item_id, item.start_time.timestamp(), item.end_time.timestamp())
        for item in timed
    ]
    slots = pack_intervals(intervals)
    by_id = {item.item_id: item for item in timed}
    placed = [
        replace(
            by_id[item_id],
            column=slot.column,
            total_columns=slot.total_columns,
        )
        for item_id, slot in slots.items()
    ]
    placed.extend(
        replace(item, column=0, total_columns=1) for item in all_items if item.is_all_day
    )
    return placed


def assign_day_columns(
    items: Iterable[TimelineItem],
    day_start: datetime,
    tz: tzinfo,
) -> dict[str, ColumnSlot]:
    """对与某本地日重叠的定时条目单独做列分配。"""

    window_start = local_midnight(day_start, tz).timestamp()
    window_end = next_local_midnight(day_start, tz).timestamp()
    intervals = [
        Interval(
            item.item_id,
            max(item.start_time.timestamp(), window_start),
            min(item.end_time.timestamp(), window_end),
        )
        for item in items
        if not item.is_all_day and item_overlaps_day(item, day_start, tz)
    ]
    return pack_intervals(intervals)


def item_overlaps_day(item: TimelineItem, day_start: datetime, tz: tzinfo) -> bool:
    """条目与本地日 [零点, 次日零点) 是否重叠，两端均为严格不等。"""

    window_start = local_midnight(day_start, tz).timestamp()
    window_end = next_local_midnight(day_start, tz).timestamp()
    return item.start_time.timestamp() < window_end and item.end_time.timestamp() > window_start


def pack_intervals(intervals: Sequence[Interval]) -> dict[str, ColumnSlot]:
    """贪心列分配，返回按排序顺序排列的 id -> 列位置。"""

    ordered = sorted(
        intervals,
        key=lambda interval: (
            interval.start,
            -(interval.end - interval.start),
            interval.item_id,
        ),
    )

    column_ends: list[float] = []
    columns: dict[str, int] = {}
    for interval in ordered:
        assigned = next(
            (index for index, end in enumerate(column_ends) if end <= interval.start),
            None,
        )
        if assigned is None:
            assigned = len(column_ends)
            column_ends.append(interval.end)
        else:
            column_ends[assigned] = interval.end
        columns[interval.item_id] = assigned

    slots: dict[str, ColumnSlot] = {}
    for interval in ordered:
        max_column = columns[interval.item_id]
        for other in ordered:
            if other.item_id == interval.item_id:
                continue
            if other.start < interval.end and interval.start < other.end:
                max_column = max(max_column, columns[other.item_id])
        slots[interval.item_id] = ColumnSlot(
            column=columns[interval.item_id],
            total_columns=max_column + 1,
        )
    return slots
