"""Geometry projection tests."""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from trip_timeline.domain.timeline_types import ActivityEntry, LayoutScale, TimelineItem
from trip_timeline.services.geometry import pixel_height, pixel_height_in_day, pixel_top, pixel_top_in_day

UTC = ZoneInfo("UTC")
RANGE_START = datetime(2026, 3, 1, tzinfo=UTC)


def _item(start: datetime, end: datetime, is_all_day: bool = False) -> TimelineItem:
    return TimelineItem(
        item_id="a1",
        category="activity",
        name="Zoo",
        start_time=start,
        end_time=end,
        is_all_day=is_all_day,
        is_point_event=False,
        original_entry=ActivityEntry(entry_id="a1", name="Zoo"),
    )


def test_pixel_top_scales_hours_from_range_start() -> None:
    assert pixel_top(RANGE_START, RANGE_START) == 0
    assert pixel_top(RANGE_START + timedelta(hours=2), RANGE_START) == 48
    assert pixel_top(RANGE_START + timedelta(minutes=30), RANGE_START) == 12
    assert pixel_top(RANGE_START + timedelta(days=1, hours=9), RANGE_START) == 33 * 24


def test_pixel_top_is_negative_before_range_start() -> None:
    assert pixel_top(RANGE_START - timedelta(hours=1), RANGE_START) == -24


def test_pixel_height_uses_duration() -> None:
    assert pixel_height(_item(RANGE_START, RANGE_START + timedelta(hours=2))) == 48
    assert pixel_height(_item(RANGE_START, RANGE_START + timedelta(hours=3))) == 72


@pytest.mark.parametrize("minutes", [0, 15, 30, 60])
def test_pixel_height_has_minimum(minutes: int) -> None:
    item = _item(RANGE_START, RANGE_START + timedelta(minutes=minutes))
    assert pixel_height(item) == 24


def test_custom_scale() -> None:
    scale = LayoutScale(pixels_per_hour=60, min_height_px=10)
    item = _item(RANGE_START, RANGE_START + timedelta(minutes=30))
    assert pixel_height(item, scale) == 30
    assert pixel_top(item.start_time + timedelta(hours=1), RANGE_START, scale) == 60


def test_in_day_geometry_for_timed_item() -> None:
    item = _item(RANGE_START + timedelta(hours=9), RANGE_START + timedelta(hours=14))
    assert pixel_top_in_day(item, RANGE_START, UTC) == 216
    assert pixel_height_in_day(item, RANGE_START, UTC) == 120


def test_in_day_geometry_clips_item_from_previous_day() -> None:
    red_eye = _item(RANGE_START - timedelta(hours=2), RANGE_START + timedelta(hours=2))
    assert pixel_top_in_day(red_eye, RANGE_START, UTC) == 0
    assert pixel_height_in_day(red_eye, RANGE_START, UTC) == 48


def test_in_day_geometry_clips_item_into_next_day() -> None:
    overnight = _item(RANGE_START + timedelta(hours=22), RANGE_START + timedelta(hours=26))
    next_day = RANGE_START + timedelta(days=1)

    assert pixel_top_in_day(overnight, RANGE_START, UTC) == 22 * 24
    assert pixel_height_in_day(overnight, RANGE_START, UTC) == 48
    assert pixel_top_in_day(overnight, next_day, UTC) == 0
    assert pixel_height_in_day(overnight, next_day, UTC) == 48


def test_in_day_height_has_minimum() -> None:
    sliver = _item(RANGE_START + timedelta(hours=23, minutes=50), RANGE_START + timedelta(hours=25))
    assert pixel_height_in_day(sliver, RANGE_START, UTC) == 24


def test_all_day_items_use_banner_geometry() -> None:
    hotel = _item(RANGE_START + timedelta(hours=15), RANGE_START + timedelta(days=2, hours=11), is_all_day=True)
    assert pixel_top_in_day(hotel, RANGE_START, UTC) == 0
    assert pixel_height_in_day(hotel, RANGE_START, UTC) == 32
    assert pixel_height_in_day(hotel, RANGE_START, UTC, LayoutScale(all_day_height_px=40)) == 40
