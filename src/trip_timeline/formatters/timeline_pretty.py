"""可读时间线格式化。"""

from __future__ import annotations

from datetime import datetime

from trip_timeline.domain.timeline_types import DayBar, DayColumn, EntryCategory, TimelineResult

EMOJI_BY_CATEGORY: dict[EntryCategory, str] = {
    "flight": "✈️",
    "lodging": "🏨",
    "carRental": "🚗",
    "restaurant": "🍽️",
    "activity": "🎯",
}


def render_timeline_pretty(timeline: TimelineResult, emoji: bool = True) -> str:
    """按日渲染可读时间线。"""

    title = timeline.trip_name or "Trip"
    lines: list[str] = []
    if emoji:
        lines.append(f"🗓️ Timeline {title} ({timeline.timezone})")
    else:
        lines.append(f"Timeline {title} ({timeline.timezone})")
    lines.append(
        f"{timeline.range.start_time:%Y-%m-%d} -> {timeline.range.end_time:%Y-%m-%d}"
        f" · {len(timeline.days)} {_plural(len(timeline.days), 'day')}"
        f" · {len(timeline.items)} {_plural(len(timeline.items), 'entry', 'entries')}"
    )
    lines.append("─" * 72)

    if not timeline.items:
        lines.append("No entries yet")
        return "\n".join(lines)

    for day in timeline.days:
        lines.extend(_format_day(day, emoji=emoji))
        lines.append("")

    while lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines)


def _format_day(day: DayColumn, emoji: bool) -> list[str]:
    lines = [f"{day.day_start:%a %Y-%m-%d}"]
    if day.is_empty:
        lines.append("   No events")
        return lines

    for bar in day.all_day_bars:
        marker = "☀️ All day" if emoji else "[all day]"
        lines.append(f"   {marker} {_category_marker(bar, emoji)} {bar.item.name} ({bar.item.label})")
    for bar in day.timed_bars:
        lines.append(f"   {_format_timed_bar(bar, day, emoji=emoji)}")
    return lines


def _format_timed_bar(bar: DayBar, day: DayColumn, emoji: bool) -> str:
    item = bar.item
    if item.is_point_event:
        # 点事件的一小时仅用于排版，不作为真实时长展示。
        time_text = f"{item.start_time:%H:%M}"
    else:
        duration_text = _format_duration(item.start_time, item.end_time)
        time_text = f"{item.start_time:%H:%M} -> {item.end_time:%H:%M} ({duration_text})"

    parts = [_category_marker(bar, emoji), time_text, item.name]
    if _is_cross_day(item.start_time, item.end_time):
        parts.append("🌙 cross-day" if emoji else "(cross-day)")
    if bar.total_columns > 1:
        parts.append(f"[{bar.column + 1}/{bar.total_columns}]")
    if item.start_time.date() != day.day_start.date():
        parts.append("(continued)")
    return " ".join(parts)


def _category_marker(bar: DayBar, emoji: bool) -> str:
    if not emoji:
        return f"[{bar.item.category}]"
    return EMOJI_BY_CATEGORY.get(bar.item.category, "📌")


def _is_cross_day(start_at: datetime, end_at: datetime) -> bool:
    return start_at.date() != end_at.date()


def _format_duration(start_at: datetime, end_at: datetime) -> str:
    total_minutes = int(max(end_at.timestamp() - start_at.timestamp(), 0) // 60)
    days = total_minutes // (24 * 60)
    hours = (total_minutes % (24 * 60)) // 60
    minutes = total_minutes % 60

    parts: list[str] = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    parts.append(f"{minutes}m")
    return " ".join(parts)


def _plural(value: int, unit: str, plural_unit: str | None = None) -> str:
    if value == 1:
        return unit
    return plural_unit or f"{unit}s"
