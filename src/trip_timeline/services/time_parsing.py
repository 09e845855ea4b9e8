"""时刻字符串解析与时区安全的日期运算。"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from trip_timeline.domain.timeline_types import CalendarValue

TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$", re.IGNORECASE)
END_OF_DAY = time(23, 59, 59, 999_000)
SECONDS_PER_HOUR = 3600


def parse_time_string(text: str) -> tuple[int, int] | None:
    """解析 7pm / 19:30 / 7:00 PM 等时刻，无法解析时返回 None。"""

    match = TIME_OF_DAY_PATTERN.match(text.strip())
    if match is None:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    meridiem = (match.group(3) or "").lower()
    if meridiem == "pm" and hours < 12:
        hours += 12
    if meridiem == "am" and hours == 12:
        hours = 0
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def calendar_date(value: CalendarValue) -> date:
    """读取纯日历日，datetime 按 UTC 分量取日期。"""

    if isinstance(value, datetime):
        return ensure_aware(value).astimezone(timezone.utc).date()
    return value


def combine_date_and_time(
    base: CalendarValue,
    text: str | None,
    fallback_hour: int,
    tz: tzinfo,
) -> datetime:
    """日历日与时刻组合为本地时间，解析失败时回退到 fallback_hour。"""

    day = calendar_date(base)
    parsed = parse_time_string(text) if text else None
    if parsed is None:
        return datetime.combine(day, time(fallback_hour), tzinfo=tz)
    hours, minutes = parsed
    return datetime.combine(day, time(hours, minutes), tzinfo=tz)


def ensure_aware(value: datetime) -> datetime:
    """无时区的时间按 UTC 处理。"""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def add_hours(value: datetime, hours: float, tz: tzinfo) -> datetime:
    """按绝对时长相加，结果落在 tz。"""

    shifted = ensure_aware(value).astimezone(timezone.utc) + timedelta(hours=hours)
    return shifted.astimezone(tz)


def hours_between(later: datetime, earlier: datetime) -> float:
    """两个时刻之间的绝对小时数。"""

    delta = ensure_aware(later).timestamp() - ensure_aware(earlier).timestamp()
    return delta / SECONDS_PER_HOUR


def local_midnight(value: datetime | date, tz: tzinfo) -> datetime:
    """所在本地日的零点。"""

    return datetime.combine(_local_date(value, tz), time.min, tzinfo=tz)


def local_end_of_day(value: datetime | date, tz: tzinfo) -> datetime:
    """所在本地日的 23:59:59.999。"""

    return datetime.combine(_local_date(value, tz), END_OF_DAY, tzinfo=tz)


def next_local_midnight(value: datetime | date, tz: tzinfo) -> datetime:
    """下一个本地日的零点。"""

    return datetime.combine(_local_date(value, tz) + timedelta(days=1), time.min, tzinfo=tz)


def _local_date(value: datetime | date, tz: tzinfo) -> date:
    if isinstance(value, datetime):
        return ensure_aware(value).astimezone(tz).date()
    return value
