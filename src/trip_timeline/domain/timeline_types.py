"""行程时间线领域类型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

OutputMode = Literal["pretty", "json", "both"]
EntryCategory = Literal[
    "flight",
    "lodging",
    "carRental",
    "restaurant",
    "activity",
]
CalendarValue = date | datetime

ENTRY_CATEGORIES: tuple[EntryCategory, ...] = (
    "flight",
    "lodging",
    "carRental",
    "restaurant",
    "activity",
)
ENTRY_LABELS: dict[EntryCategory, str] = {
    "flight": "Flights",
    "lodging": "Lodging",
    "carRental": "Transport",
    "restaurant": "Food",
    "activity": "Activities",
}


@dataclass(frozen=True, slots=True)
class FlightEntry:
    """航班记录。"""

    entry_id: str
    airline: str
    flight_number: str | None = None
    departure_at: datetime | None = None
    arrival_at: datetime | None = None
    is_idea: bool = False
    category: Literal["flight"] = "flight"

    @property
    def name(self) -> str:
        if self.flight_number:
            return f"{self.airline} {self.flight_number}"
        return self.airline


@dataclass(frozen=True, slots=True)
class LodgingEntry:
    """住宿记录。"""

    entry_id: str
    name: str
    check_in: datetime | None = None
    check_out: datetime | None = None
    is_idea: bool = False
    category: Literal["lodging"] = "lodging"


@dataclass(frozen=True, slots=True)
class CarRentalEntry:
    """租车记录。"""

    entry_id: str
    company: str
    pickup_at: datetime | None = None
    dropoff_at: datetime | None = None
    is_idea: bool = False
    category: Literal["carRental"] = "carRental"

    @property
    def name(self) -> str:
        return self.company


@dataclass(frozen=True, slots=True)
class RestaurantEntry:
    """餐厅预订记录，日期为纯日历日。"""

    entry_id: str
    name: str
    date: CalendarValue | None = None
    time: str | None = None
    is_idea: bool = False
    category: Literal["restaurant"] = "restaurant"


@dataclass(frozen=True, slots=True)
class ActivityEntry:
    """活动记录，日期为纯日历日。"""

    entry_id: str
    name: str
    date: CalendarValue | None = None
    start_time: str | None = None
    end_time: str | None = None
    is_idea: bool = False
    category: Literal["activity"] = "activity"


TripEntry = FlightEntry | LodgingEntry | CarRentalEntry | RestaurantEntry | ActivityEntry


@dataclass(frozen=True, slots=True)
class TripWindow:
    """行程起止日期。"""

    start_date: CalendarValue | None = None
    end_date: CalendarValue | None = None


@dataclass(frozen=True, slots=True)
class TripRecord:
    """行程元数据。"""

    trip_id: str
    name: str
    window: TripWindow


@dataclass(frozen=True, slots=True)
class LayoutScale:
    """像素比例配置。"""

    pixels_per_hour: float = 24.0
    min_height_px: float = 24.0
    all_day_height_px: float = 32.0
    point_event_hours: float = 1.0


@dataclass(frozen=True, slots=True)
class TimelineItem:
    """归一化后的时间线条目。"""

    item_id: str
    category: EntryCategory
    name: str
    start_time: datetime
    end_time: datetime
    is_all_day: bool
    is_point_event: bool
    original_entry: TripEntry = field(compare=False, repr=False)
    column: int = 0
    total_columns: int = 1

    @property
    def label(self) -> str:
        return ENTRY_LABELS[self.category]


@dataclass(frozen=True, slots=True)
class ColumnSlot:
    """单个条目的列位置。"""

    column: int
    total_columns: int


@dataclass(frozen=True, slots=True)
class TimelineRange:
    """时间线可视范围。"""

    start_time: datetime
    end_time: datetime
    total_hours: float


@dataclass(frozen=True, slots=True)
class HourLabel:
    """小时刻度标签。"""

    label: str
    top: float


@dataclass(frozen=True, slots=True)
class DayBar:
    """某日列中的条目几何。"""

    item: TimelineItem
    top: float
    height: float
    column: int = 0
    total_columns: int = 1


@dataclass(frozen=True, slots=True)
class DayColumn:
    """单日列布局。"""

    day_start: datetime
    all_day_bars: list[DayBar]
    timed_bars: list[DayBar]

    @property
    def is_empty(self) -> bool:
        return not self.all_day_bars and not self.timed_bars


@dataclass(slots=True)
class TimelineResult:
    """时间线布局结果。"""

    trip_id: str | None
    trip_name: str | None
    timezone: str
    scale: LayoutScale
    range: TimelineRange
    items: list[TimelineItem]
    days: list[DayColumn]
    hour_labels: list[HourLabel]
