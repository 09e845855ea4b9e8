"""JSON 输出格式化。"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from trip_timeline.domain.timeline_types import DayBar, DayColumn, TimelineItem, TimelineResult


def timeline_to_dict(timeline: TimelineResult) -> dict[str, Any]:
    """时间线布局转字典。"""

    return {
        "trip_id": timeline.trip_id,
        "trip_name": timeline.trip_name,
        "timezone": timeline.timezone,
        "scale": asdict(timeline.scale),
        "range": {
            "start_time": timeline.range.start_time.isoformat(),
            "end_time": timeline.range.end_time.isoformat(),
            "total_hours": timeline.range.total_hours,
        },
        "items": [_item_to_dict(item) for item in timeline.items],
        "days": [_day_to_dict(day) for day in timeline.days],
        "hour_labels": [{"label": label.label, "top": label.top} for label in timeline.hour_labels],
    }


def render_timeline_json(timeline: TimelineResult) -> str:
    """渲染 JSON 文本。"""

    payload = timeline_to_dict(timeline)
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _item_to_dict(item: TimelineItem) -> dict[str, Any]:
    return {
        "item_id": item.item_id,
        "category": item.category,
        "label": item.label,
        "name": item.name,
        "start_time": item.start_time.isoformat(),
        "end_time": item.end_time.isoformat(),
        "is_all_day": item.is_all_day,
        "is_point_event": item.is_point_event,
        "column": item.column,
        "total_columns": item.total_columns,
    }


def _day_to_dict(day: DayColumn) -> dict[str, Any]:
    return {
        "day_start": day.day_start.isoformat(),
        "all_day": [_bar_to_dict(bar, with_columns=False) for bar in day.all_day_bars],
        "timed": [_bar_to_dict(bar, with_columns=True) for bar in day.timed_bars],
    }


def _bar_to_dict(bar: DayBar, with_columns: bool) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "item_id": bar.item.item_id,
        "top": bar.top,
        "height": bar.height,
    }
    if with_columns:
        payload["column"] = bar.column
        payload["total_columns"] = bar.total_columns
    return payload
