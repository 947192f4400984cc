#!filepath: tl_assistant/timeline/formatter.py
from __future__ import annotations

import json
from typing import List, Optional

from tl_assistant.timeline.core.events import EventKind, ResolvedEvent
from tl_assistant.timeline.core.time import format_clock
from tl_assistant.timeline.result import TimelineResult


class TimelineFormatter:
    """
    Resolved log -> text / JSON.

    Text line:
        m:ss.fff [level at use] (AUTO) name (cost) rem:x (over:y) ([! note] ...)
    """

    def __init__(self, *, battle_duration: int, countdown: bool = True, rows_only: bool = False):
        self.battle_duration = battle_duration
        self.countdown = countdown
        self.rows_only = rows_only

    def format_event(self, ev: ResolvedEvent) -> str:
        clock = format_clock(ev.frame, battle_duration=self.battle_duration, countdown=self.countdown)
        parts = [clock, f"[{ev.level_at_use:.1f}]"]

        if ev.auto:
            parts.append("AUTO")
        parts.append(ev.name)

        if ev.cost > 0:
            parts.append(f"{round(ev.cost)}")

        parts.append(f"rem:{ev.level:.1f}")

        if ev.overflow_points > 0:
            parts.append(f"over:{ev.overflow:.1f}")

        for note in ev.notes:
            parts.append(f"[! {note}]")

        return " ".join(parts)

    def render(self, result: TimelineResult) -> str:
        s = result.summary
        lines: List[str] = [
            "=== resolved timeline ===",
            f"events: {s.n_events} (rows: {s.n_rows})  final level: {s.final_level:.2f}  "
            f"overflow: {s.total_overflow:.1f}",
            "",
        ]

        for ev in result.events:
            if self.rows_only and ev.kind is not EventKind.ROW:
                continue
            lines.append(self.format_event(ev))

        if result.radiator:
            lines.append("")
            lines.append("=== radiator ===")
            for iv in result.radiator:
                start = format_clock(iv.start_frame, battle_duration=self.battle_duration, countdown=self.countdown)
                end = format_clock(iv.end_frame, battle_duration=self.battle_duration, countdown=self.countdown)
                suffix = " (auto)" if iv.auto_extended else ""
                lines.append(f"{start} - {end}{suffix}")

        return "\n".join(lines)

    @staticmethod
    def to_json(result: TimelineResult, indent: Optional[int] = 2) -> str:
        return json.dumps(result.to_dict(), ensure_ascii=False, indent=indent)
