"""Domain types."""

from trip_timeline.domain.timeline_types import (
    ActivityEntry,
    CarRentalEntry,
    ColumnSlot,
    DayBar,
    DayColumn,
    FlightEntry,
    HourLabel,
    LayoutScale,
    LodgingEntry,
    RestaurantEntry,
    TimelineItem,
    TimelineRange,
    TimelineResult,
    TripEntry,
    TripRecord,
    TripWindow,
)

__all__ = [
    "ActivityEntry",
    "CarRentalEntry",
    "ColumnSlot",
    "DayBar",
    "DayColumn",
    "FlightEntry",
    "HourLabel",
    "LayoutScale",
    "LodgingEntry",
    "RestaurantEntry",
    "TimelineItem",
    "TimelineRange",
    "TimelineResult",
    "TripEntry",
    "TripRecord",
    "TripWindow",
]
