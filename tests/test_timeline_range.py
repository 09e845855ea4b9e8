"""Timeline range tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from trip_timeline.domain.timeline_types import ActivityEntry, TimelineItem, TripWindow
from trip_timeline.services.timeline_range import compute_range

UTC = ZoneInfo("UTC")
PACIFIC_STANDARD = timezone(timedelta(hours=-8))


def _item(start: datetime, end: datetime) -> TimelineItem:
    return TimelineItem(
        item_id="a1",
        category="activity",
        name="Zoo",
        start_time=start,
        end_time=end,
        is_all_day=False,
        is_point_event=False,
        original_entry=ActivityEntry(entry_id="a1", name="Zoo"),
    )


def _window(start_day: int, end_day: int) -> TripWindow:
    return TripWindow(
        start_date=datetime(2026, 3, start_day, tzinfo=UTC),
        end_date=datetime(2026, 3, end_day, tzinfo=UTC),
    )


def test_range_covers_trip_window_days() -> None:
    timeline_range = compute_range(_window(1, 7), [], UTC)

    assert timeline_range.start_time == datetime(2026, 3, 1, tzinfo=UTC)
    assert timeline_range.end_time == datetime(2026, 3, 7, 23, 59, 59, 999_000, tzinfo=UTC)
    assert 167 < timeline_range.total_hours <= 168


def test_window_dates_keep_calendar_day_behind_utc() -> None:
    timeline_range = compute_range(_window(1, 7), [], PACIFIC_STANDARD)

    assert timeline_range.start_time == datetime(2026, 3, 1, tzinfo=PACIFIC_STANDARD)
    assert timeline_range.end_time.date() == date(2026, 3, 7)


def test_plain_dates_are_accepted_for_window() -> None:
    window = TripWindow(start_date=date(2026, 3, 1), end_date=date(2026, 3, 2))
    timeline_range = compute_range(window, [], UTC)
    assert 47 < timeline_range.total_hours <= 48


def test_range_extends_back_for_earlier_items() -> None:
    early = _item(datetime(2026, 2, 27, 18, tzinfo=UTC), datetime(2026, 2, 27, 20, tzinfo=UTC))

    timeline_range = compute_range(_window(1, 7), [early], UTC)

    assert timeline_range.start_time == datetime(2026, 2, 27, tzinfo=UTC)
    assert timeline_range.end_time.date() == date(2026, 3, 7)


def test_range_extends_forward_for_later_items() -> None:
    red_eye = _item(datetime(2026, 3, 7, 23, tzinfo=UTC), datetime(2026, 3, 8, 6, tzinfo=UTC))

    timeline_range = compute_range(_window(1, 7), [red_eye], UTC)

    assert timeline_range.end_time == datetime(2026, 3, 8, 23, 59, 59, 999_000, tzinfo=UTC)


def test_range_from_items_only() -> None:
    item = _item(datetime(2026, 3, 4, 9, tzinfo=UTC), datetime(2026, 3, 4, 11, tzinfo=UTC))

    timeline_range = compute_range(None, [item], UTC)

    assert timeline_range.start_time == datetime(2026, 3, 4, tzinfo=UTC)
    assert timeline_range.end_time.date() == date(2026, 3, 4)
    assert 23 < timeline_range.total_hours <= 24


def test_empty_trip_falls_back_to_today() -> None:
    now = datetime(2026, 10, 19, 15, 30, tzinfo=UTC)

    timeline_range = compute_range(TripWindow(), [], UTC, now=now)

    assert timeline_range.start_time == datetime(2026, 10, 19, tzinfo=UTC)
    assert timeline_range.end_time.date() == date(2026, 10, 19)
    assert 23 < timeline_range.total_hours <= 24


def test_today_fallback_uses_display_timezone() -> None:
    now = datetime(2026, 10, 19, 3, 0, tzinfo=UTC)
    timeline_range = compute_range(None, [], PACIFIC_STANDARD, now=now)
    assert timeline_range.start_time == datetime(2026, 10, 18, tzinfo=PACIFIC_STANDARD)


def test_one_sided_window_collapses_to_that_day() -> None:
    only_start = TripWindow(start_date=datetime(2026, 3, 5, tzinfo=UTC))
    only_end = TripWindow(end_date=datetime(2026, 3, 9, tzinfo=UTC))

    start_range = compute_range(only_start, [], UTC)
    end_range = compute_range(only_end, [], UTC)

    assert start_range.start_time == datetime(2026, 3, 5, tzinfo=UTC)
    assert start_range.end_time.date() == date(2026, 3, 5)
    assert end_range.start_time == datetime(2026, 3, 9, tzinfo=UTC)
    assert end_range.end_time.date() == date(2026, 3, 9)


def test_range_boundaries_are_snapped_to_days() -> None:
    item = _item(datetime(2026, 3, 4, 9, 17, tzinfo=UTC), datetime(2026, 3, 6, 13, 5, tzinfo=UTC))

    timeline_range = compute_range(None, [item], UTC)

    assert (timeline_range.start_time.hour, timeline_range.start_time.minute) == (0, 0)
    assert (timeline_range.end_time.hour, timeline_range.end_time.minute) == (23, 59)
    assert timeline_range.start_time <= item.start_time
    assert timeline_range.end_time >= item.end_time
