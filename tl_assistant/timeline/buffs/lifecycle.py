#!filepath: tl_assistant/timeline/buffs/lifecycle.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from tl_assistant import logs
from tl_assistant.timeline.buffs.catalog import BuffScope, CatalogEntry


class IntervalPhase(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    ENDED = "ended"
    SUPERSEDED = "superseded"   # truncated to zero length before it started
    EXPIRED = "expired"         # whole window already in the past when reached


class IntervalSource(str, Enum):
    CATALOG = "catalog"
    SPECIAL_COMMAND = "special_command"
    GRANT = "grant"


class TransitionKind(str, Enum):
    START = "start"
    END = "end"


@dataclass
class BuffInterval:
    """
    Time-bounded modifier owned by BuffLifecycleManager.

    Membership is half-open: start_frame <= f < end_frame.
    """
    id: int
    entry_id: str
    name: str
    start_frame: int
    end_frame: int
    magnitude: float
    scope: BuffScope
    target: str
    source: IntervalSource = IntervalSource.CATALOG
    phase: IntervalPhase = IntervalPhase.PENDING
    truncated: bool = False

    @property
    def scope_key(self) -> Tuple[BuffScope, str]:
        return self.scope, self.target

    @property
    def is_open(self) -> bool:
        return self.phase in (IntervalPhase.PENDING, IntervalPhase.ACTIVE)

    def covers(self, frame: int) -> bool:
        return self.start_frame <= frame < self.end_frame

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "entry_id": self.entry_id,
            "name": self.name,
            "start_frame": self.start_frame,
            "end_frame": self.end_frame,
            "magnitude": self.magnitude,
            "scope": self.scope.value,
            "target": self.target,
            "source": self.source.value,
            "phase": self.phase.value,
            "truncated": self.truncated,
        }


@dataclass(frozen=True)
class Transition:
    """
    Next lifecycle change of one interval.

    frame is never earlier than the frame it was requested from.
    """
    frame: int
    kind: TransitionKind
    interval_id: int


class BuffLifecycleManager:
    """
    Owns every BuffInterval and its phase.

    Contract:
    - create_interval() applies override on the same (scope, target)
    - next_transition() is deterministic: (frame, creation order)
    - commit() is the only phase writer
    """

    def __init__(self, *, duration_variants: Optional[Mapping[str, bool]] = None) -> None:
        self._variants = dict(duration_variants or {})
        self._intervals: Dict[int, BuffInterval] = {}
        self._next_id = 0

    # --------------------------------------------------
    # creation
    # --------------------------------------------------
    def create_interval(
        self,
        entry: CatalogEntry,
        start_frame: int,
        *,
        source: IntervalSource = IntervalSource.CATALOG,
        duration: Optional[int] = None,
        magnitude: Optional[float] = None,
        name: Optional[str] = None,
    ) -> BuffInterval:
        """
        start = start_frame + entry.offset, end = start + duration.

        duration / magnitude default to the catalog values.
        """
        if duration is None:
            duration = entry.duration_frames(bool(self._variants.get(entry.id, False)))
        if magnitude is None:
            magnitude = entry.magnitude_at()

        start = int(start_frame) + entry.offset
        interval = BuffInterval(
            id=self._next_id,
            entry_id=entry.id,
            name=name or entry.name,
            start_frame=start,
            end_frame=start + int(duration),
            magnitude=float(magnitude),
            scope=entry.scope,
            target=entry.target,
            source=source,
        )
        self._next_id += 1

        self._override(interval)
        self._intervals[interval.id] = interval

        logs.debug(
            f"[Buffs] + #{interval.id} {interval.name} "
            f"[{interval.start_frame}, {interval.end_frame}) mag={interval.magnitude:g}"
        )
        return interval

    def _override(self, new: BuffInterval) -> None:
        for old in self._intervals.values():
            if not old.is_open or old.scope_key != new.scope_key:
                continue
            if old.end_frame <= new.start_frame:
                continue

            old.end_frame = new.start_frame
            old.truncated = True

            if old.phase is IntervalPhase.PENDING and old.end_frame <= old.start_frame:
                old.phase = IntervalPhase.SUPERSEDED
                logs.debug(f"[Buffs] #{old.id} {old.name} superseded by #{new.id}")
            else:
                logs.debug(f"[Buffs] #{old.id} {old.name} truncated to {old.end_frame}")

    # --------------------------------------------------
    # transitions
    # --------------------------------------------------
    def next_transition(self, current_frame: int) -> Optional[Transition]:
        best: Optional[Tuple[int, int, Transition]] = None

        for iv in self._intervals.values():
            if iv.phase is IntervalPhase.PENDING:
                if iv.end_frame < current_frame:
                    iv.phase = IntervalPhase.EXPIRED
                    logs.warning(
                        f"[Buffs] #{iv.id} {iv.name} window [{iv.start_frame}, {iv.end_frame}) "
                        f"is behind frame {current_frame}, dropped"
                    )
                    continue
                kind, frame = TransitionKind.START, iv.start_frame
            elif iv.phase is IntervalPhase.ACTIVE:
                kind, frame = TransitionKind.END, iv.end_frame
            else:
                continue

            frame = max(frame, current_frame)
            key = (frame, iv.id)
            if best is None or key < best[:2]:
                best = (frame, iv.id, Transition(frame=frame, kind=kind, interval_id=iv.id))

        return best[2] if best else None

    def commit(self, transition: Transition) -> BuffInterval:
        if transition.kind is TransitionKind.START:
            return self.commit_start(transition.interval_id)
        return self.commit_end(transition.interval_id)

    def commit_start(self, interval_id: int) -> BuffInterval:
        iv = self._intervals[interval_id]
        if iv.phase is not IntervalPhase.PENDING:
            raise RuntimeError(f"[Buffs] #{iv.id} cannot start from {iv.phase.value}")
        iv.phase = IntervalPhase.ACTIVE
        return iv

    def commit_end(self, interval_id: int) -> BuffInterval:
        iv = self._intervals[interval_id]
        if iv.phase is not IntervalPhase.ACTIVE:
            raise RuntimeError(f"[Buffs] #{iv.id} cannot end from {iv.phase.value}")
        iv.phase = IntervalPhase.ENDED
        return iv

    # --------------------------------------------------
    # queries
    # --------------------------------------------------
    def active_at(self, frame: int) -> List[BuffInterval]:
        return [
            iv for iv in self._intervals.values()
            if iv.phase is IntervalPhase.ACTIVE and iv.covers(frame)
        ]

    def get(self, interval_id: int) -> BuffInterval:
        return self._intervals[interval_id]

    @property
    def intervals(self) -> Tuple[BuffInterval, ...]:
        """Audit copies in creation order."""
        return tuple(replace(iv) for iv in self._intervals.values())
