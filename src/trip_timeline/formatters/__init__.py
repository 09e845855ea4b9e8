"""Timeline formatters."""

from trip_timeline.formatters.timeline_json import render_timeline_json, timeline_to_dict
from trip_timeline.formatters.timeline_pretty import render_timeline_pretty

__all__ = ["render_timeline_json", "render_timeline_pretty", "timeline_to_dict"]
