#!filepath: tl_assistant/timeline/scheduler.py
from __future__ import annotations

from typing import List, Optional, Tuple

from tl_assistant import logs
from tl_assistant.config.simulation_config import SimulationConfig
from tl_assistant.timeline.buffs.catalog import BuffCatalog
from tl_assistant.timeline.buffs.lifecycle import (
    BuffLifecycleManager,
    IntervalSource,
    Transition,
    TransitionKind,
)
from tl_assistant.timeline.buffs.special import SpecialCommandInterpreter
from tl_assistant.timeline.core.events import (
    AbsoluteAnchor,
    ActionRow,
    EventKind,
    LabelAnchor,
    ResolvedEvent,
    TargetLevelAnchor,
    note_already_satisfied,
    note_reordered,
)
from tl_assistant.timeline.core.state import ResourceAccrual
from tl_assistant.timeline.labels import LabelResolver
from tl_assistant.utils.errors import NoAnchorError, TimelineError, TimingLoopError

TIMER_START = "Timer start"
BATTLE_START = "Battle start"


class EventMergeScheduler:
    """
    EventMergeScheduler (FINAL / FROZEN)

    Merges two streams into one resolved log:
      - user rows, in input order
      - modifier transitions, by (frame, creation order)

    Ordering semantics:
      - a transition commits before a row when its frame <= the row's
        candidate frame; the candidate is then re-estimated
      - committed frames never decrease; a row whose frame lies in the past
        commits at the current frame with a "reordered" note
      - identical inputs give identical logs
    """

    def __init__(
        self,
        *,
        config: SimulationConfig,
        catalog: BuffCatalog,
        accrual: ResourceAccrual,
        buffs: BuffLifecycleManager,
        labels: LabelResolver,
        special: SpecialCommandInterpreter,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._accrual = accrual
        self._buffs = buffs
        self._labels = labels
        self._special = special

        self._events: List[ResolvedEvent] = []
        self._last_frame: int | None = None

    @property
    def events(self) -> Tuple[ResolvedEvent, ...]:
        return tuple(self._events)

    # --------------------------------------------------
    # bootstrap
    # --------------------------------------------------
    def bootstrap(self) -> None:
        """Timer start at 0, battle start, then battle-long grants."""
        cfg = self._config
        self.commit_system(TIMER_START, 0, participants=0)
        self.commit_system(BATTLE_START, cfg.battle_start_frame, participants=cfg.participants)

        for entry in self._catalog.grants():
            level = cfg.grant_level(entry.grant)
            if level <= 0:
                continue
            self._buffs.create_interval(
                entry,
                cfg.battle_start_frame,
                source=IntervalSource.GRANT,
                magnitude=entry.magnitude_at(level),
            )
            logs.info(f"[Scheduler] grant {entry.name} level={level}")

    def commit_system(self, name: str, frame: int, *, participants: Optional[int] = None) -> ResolvedEvent:
        return self._commit(frame, kind=EventKind.SYSTEM, name=name, participants=participants)

    # --------------------------------------------------
    # rows
    # --------------------------------------------------
    def resolve_row(self, row: ActionRow, index: int) -> Optional[ResolvedEvent]:
        """
        Commit one row and every transition due before it.

        Returns None for special-command rows, which never enter the log.
        """
        try:
            if self._special.is_command(row.name):
                self._apply_special(row)
                return None
            return self._resolve(row, index)
        except TimelineError as e:
            raise e.at_row(index)

    def _resolve(self, row: ActionRow, index: int) -> ResolvedEvent:
        limit = self._config.max_merge_iterations
        iterations = 0

        while True:
            iterations += 1
            if iterations > limit:
                raise TimingLoopError(
                    f"row '{row.name}' did not settle after {limit} merge iterations"
                )

            candidate, notes = self._estimate(row)
            transition = self._buffs.next_transition(self._accrual.frame)

            if transition is not None and transition.frame <= candidate:
                self._commit_transition(transition)
                continue
            break

        current = self._accrual.frame
        if candidate < current:
            notes.append(note_reordered(candidate, current))
            logs.warning(f"[Scheduler] {row.name}: frame {candidate} < {current}, reordered")
            candidate = current

        if row.label:
            self._labels.publish(row.label, candidate)

        entry = self._catalog.match(row.name)
        if entry is not None:
            self._buffs.create_interval(entry, candidate)

        return self._commit(
            candidate,
            kind=EventKind.ROW,
            name=row.name,
            cost=row.cost,
            participants=row.participants,
            notes=tuple(row.notes) + tuple(notes),
            auto=row.auto,
            row_index=index,
        )

    def _estimate(self, row: ActionRow) -> Tuple[int, List[str]]:
        anchor = row.anchor
        notes: List[str] = []

        if isinstance(anchor, AbsoluteAnchor):
            return anchor.frame, notes

        if isinstance(anchor, LabelAnchor):
            frame, note = self._labels.resolve(anchor)
            if note:
                notes.append(note)
            return frame, notes

        if isinstance(anchor, TargetLevelAnchor):
            wait = self._accrual.frames_to_reach(anchor.level)
            if wait == 0 and anchor.explicit:
                notes.append(note_already_satisfied(anchor.level, self._accrual.level))
            return self._accrual.frame + wait, notes

        raise NoAnchorError(f"row '{row.name}' has no time, label reference or target level")

    # --------------------------------------------------
    # modifiers
    # --------------------------------------------------
    def _apply_special(self, row: ActionRow) -> None:
        buff = self._special.interpret(row)
        if buff is None:
            logs.debug(f"[Scheduler] special command '{row.name}' ignored (no value or duration)")
            return

        anchor = row.anchor
        if isinstance(anchor, AbsoluteAnchor):
            start = anchor.frame
        elif isinstance(anchor, LabelAnchor):
            start, _ = self._labels.resolve(anchor)
        else:
            start = self._accrual.frame

        self._buffs.create_interval(
            buff.entry,
            start,
            duration=buff.duration,
            magnitude=buff.magnitude,
            source=IntervalSource.SPECIAL_COMMAND,
            name=buff.name,
        )

    def _commit_transition(self, transition: Transition) -> ResolvedEvent:
        interval = self._buffs.commit(transition)

        if transition.kind is TransitionKind.START:
            kind, suffix = EventKind.BUFF_START, "start"
        else:
            kind, suffix = EventKind.BUFF_END, "end"

        return self._commit(
            transition.frame,
            kind=kind,
            name=f"{interval.name} {suffix}",
            interval_id=interval.id,
        )

    # --------------------------------------------------
    # single write path
    # --------------------------------------------------
    def _commit(
        self,
        frame: int,
        *,
        kind: EventKind,
        name: str,
        cost: float = 0.0,
        participants: Optional[int] = None,
        notes: Tuple[str, ...] = (),
        auto: bool = False,
        row_index: Optional[int] = None,
        interval_id: Optional[int] = None,
    ) -> ResolvedEvent:
        # global time assertion
        if self._last_frame is not None and frame < self._last_frame:
            raise RuntimeError(
                f"[Scheduler] frame regression: {frame} < {self._last_frame} ({name})"
            )
        self._last_frame = frame

        outcome = self._accrual.commit(frame, cost=cost, participants=participants)

        event = ResolvedEvent(
            frame=outcome.frame,
            kind=kind,
            name=name,
            cost=cost,
            resource_points=outcome.points,
            overflow_points=outcome.overflow_points,
            rate=outcome.rate,
            participants=outcome.participants,
            notes=notes,
            auto=auto,
            row_index=row_index,
            interval_id=interval_id,
        )
        self._events.append(event)

        logs.debug(
            f"[Scheduler] {frame:>6} {kind.value:<10} {name} "
            f"level={event.level:.2f} rate={outcome.rate}"
        )
        return event
