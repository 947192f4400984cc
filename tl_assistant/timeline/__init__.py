"""
Timeline resolution.

    text --TimelineParser--> ActionRows
         --TimelineEngine--> TimelineResult (events + interval audit)
         --RadiatorManager-> radiator intervals
         --TimelineFormatter-> text / JSON

Only TimelineEngine wires components together; every other module here is
usable on its own.
"""
from tl_assistant.timeline.engine import TimelineEngine
from tl_assistant.timeline.formatter import TimelineFormatter
from tl_assistant.timeline.parser import TimelineParser
from tl_assistant.timeline.radiator import RadiatorInterval, RadiatorManager
from tl_assistant.timeline.result import RunSummary, TimelineResult

__all__ = [
    "RadiatorInterval",
    "RadiatorManager",
    "RunSummary",
    "TimelineEngine",
    "TimelineFormatter",
    "TimelineParser",
    "TimelineResult",
]
