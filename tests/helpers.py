# tests/helpers.py
from __future__ import annotations

from typing import Iterable, List

from tl_assistant.timeline.core.events import EventKind, ResolvedEvent


def make_event(frame: int, name: str, kind: EventKind = EventKind.ROW, **kw) -> ResolvedEvent:
    fields = dict(cost=0.0, resource_points=0, overflow_points=0, rate=0, participants=6)
    fields.update(kw)
    return ResolvedEvent(frame=frame, kind=kind, name=name, **fields)


def names(events: Iterable[ResolvedEvent]) -> List[str]:
    return [e.name for e in events]


def by_name(events: Iterable[ResolvedEvent], name: str) -> ResolvedEvent:
    for e in events:
        if e.name == name:
            return e
    raise AssertionError(f"no event named {name!r}")
