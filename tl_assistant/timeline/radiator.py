#!filepath: tl_assistant/timeline/radiator.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from tl_assistant import logs
from tl_assistant.config.parser_config import RadiatorConfig
from tl_assistant.timeline.core.events import ResolvedEvent


@dataclass(frozen=True)
class RadiatorInterval:
    start_frame: int
    end_frame: int
    auto_extended: bool = False

    def covers(self, frame: int) -> bool:
        return self.start_frame <= frame < self.end_frame

    def to_dict(self) -> dict:
        return {
            "start_frame": self.start_frame,
            "end_frame": self.end_frame,
            "auto_extended": self.auto_extended,
        }


class RadiatorManager:
    """
    Paired start / end markers in the resolved stream.

    Read-only over events; one forward scan per call to scan().
    """

    def __init__(self, config: Optional[RadiatorConfig] = None):
        config = config or RadiatorConfig()
        self._marker = re.compile(config.marker_pattern, re.IGNORECASE)
        self._start = re.compile(config.start_pattern, re.IGNORECASE)
        self._end = re.compile(config.end_pattern, re.IGNORECASE)
        self._intervals: Tuple[RadiatorInterval, ...] = ()

    def is_start(self, name: str) -> bool:
        return bool(self._marker.search(name) and self._start.search(name))

    def is_end(self, name: str) -> bool:
        return bool(self._marker.search(name) and self._end.search(name))

    def scan(self, events: Iterable[ResolvedEvent], end_frame: int) -> Tuple[RadiatorInterval, ...]:
        ordered = sorted(events, key=lambda e: e.frame)
        out: List[RadiatorInterval] = []
        open_at: Optional[int] = None

        for ev in ordered:
            if self.is_start(ev.name):
                if open_at is None:
                    open_at = ev.frame
            elif self.is_end(ev.name):
                if open_at is not None:
                    out.append(RadiatorInterval(open_at, ev.frame))
                    open_at = None

        if open_at is not None:
            out.append(RadiatorInterval(open_at, max(end_frame, open_at), auto_extended=True))

        self._intervals = tuple(out)
        logs.debug(f"[Radiator] {len(out)} interval(s)")
        return self._intervals

    @property
    def intervals(self) -> Tuple[RadiatorInterval, ...]:
        return self._intervals

    def interval_at(self, frame: int) -> Optional[RadiatorInterval]:
        for iv in self._intervals:
            if iv.covers(frame):
                return iv
        return None

    def is_active_at(self, frame: int) -> bool:
        return self.interval_at(frame) is not None
