#!filepath: tl_assistant/timeline/result.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from tl_assistant.timeline.buffs.lifecycle import BuffInterval
from tl_assistant.timeline.core.events import EventKind, ResolvedEvent
from tl_assistant.timeline.radiator import RadiatorInterval


@dataclass(frozen=True)
class RunSummary:
    final_frame: int
    final_points: int
    final_level: float
    elapsed_seconds: float
    total_overflow: float
    n_rows: int
    n_events: int

    def to_dict(self) -> dict:
        return {
            "final_frame": self.final_frame,
            "final_level": self.final_level,
            "elapsed_seconds": self.elapsed_seconds,
            "total_overflow": self.total_overflow,
            "n_rows": self.n_rows,
            "n_events": self.n_events,
        }


@dataclass(frozen=True)
class TimelineResult:
    """
    Output of one simulation run (FINAL).

    events    : resolved log in commit order (non-decreasing frame)
    intervals : every modifier interval created, in creation order
    radiator  : filled in by the radiator scan, empty before it
    labels    : label -> committed frame
    """
    events: Tuple[ResolvedEvent, ...]
    intervals: Tuple[BuffInterval, ...]
    summary: RunSummary
    radiator: Tuple[RadiatorInterval, ...] = ()
    labels: Dict[str, int] = field(default_factory=dict)

    def rows(self) -> Tuple[ResolvedEvent, ...]:
        return tuple(e for e in self.events if e.kind is EventKind.ROW)

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "events": [e.to_dict() for e in self.events],
            "intervals": [iv.to_dict() for iv in self.intervals],
            "radiator": [r.to_dict() for r in self.radiator],
            "labels": dict(self.labels),
        }
