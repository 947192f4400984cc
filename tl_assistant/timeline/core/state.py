from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional

from tl_assistant.timeline.core.time import points_to_units, units_to_points
from tl_assistant.utils.errors import ZeroAccrualRateError

# tl_assistant/timeline/core/state.py

# (frame, participants) -> points gained per elapsed frame
RateFn = Callable[[int, int], int]


@dataclass
class SimulationState:
    """
    The one mutable world state of a run.

    Written ONLY by ResourceAccrual.commit(); everything else reads snapshots.
    """
    frame: int = 0
    points: int = 0
    rate: int = 0
    participants: int = 0

    @property
    def level(self) -> float:
        return points_to_units(self.points)


@dataclass(frozen=True)
class CommitOutcome:
    frame: int
    points: int
    overflow_points: int
    rate: int
    participants: int


class ResourceAccrual:
    """
    Resource Accrual State Machine.

    Commit order for one target frame (accrue_before_consume=True):
      1. accrue (target - frame) * rate
      2. clamp to ceiling, remember the excess as overflow
      3. frame = target, apply participant override
      4. pay cost
      5. recompute rate

    With accrue_before_consume=False step 4 runs before step 1.
    """

    def __init__(
        self,
        *,
        ceiling_points: int,
        rate_fn: RateFn,
        accrue_before_consume: bool = True,
        state: Optional[SimulationState] = None,
    ) -> None:
        if ceiling_points <= 0:
            raise ValueError(f"[ResourceAccrual] ceiling must be positive: {ceiling_points}")

        self._ceiling = int(ceiling_points)
        self._rate_fn = rate_fn
        self._accrue_first = accrue_before_consume
        self._state = state if state is not None else SimulationState()

    # --------------------------------------------------
    # read side
    # --------------------------------------------------
    @property
    def ceiling_points(self) -> int:
        return self._ceiling

    @property
    def frame(self) -> int:
        return self._state.frame

    @property
    def points(self) -> int:
        return self._state.points

    @property
    def rate(self) -> int:
        return self._state.rate

    @property
    def participants(self) -> int:
        return self._state.participants

    @property
    def level(self) -> float:
        return self._state.level

    def snapshot(self) -> SimulationState:
        return replace(self._state)

    # --------------------------------------------------
    # write side
    # --------------------------------------------------
    def commit(
        self,
        target_frame: int,
        *,
        cost: float = 0.0,
        participants: Optional[int] = None,
    ) -> CommitOutcome:
        s = self._state
        if target_frame < s.frame:
            raise ValueError(
                f"[ResourceAccrual] time regression: {target_frame} < {s.frame}"
            )

        consumed = units_to_points(cost) if cost else 0

        if not self._accrue_first:
            s.points -= consumed

        overflow = self._accrue(target_frame)
        s.frame = target_frame

        if participants is not None:
            s.participants = int(participants)

        if self._accrue_first:
            s.points -= consumed

        s.rate = int(self._rate_fn(s.frame, s.participants))

        return CommitOutcome(
            frame=s.frame,
            points=s.points,
            overflow_points=overflow,
            rate=s.rate,
            participants=s.participants,
        )

    def _accrue(self, target_frame: int) -> int:
        s = self._state
        if target_frame <= s.frame:
            return 0

        s.points += (target_frame - s.frame) * s.rate

        if s.points > self._ceiling:
            overflow = s.points - self._ceiling
            s.points = self._ceiling
            return overflow
        return 0

    # --------------------------------------------------
    # inverse solve
    # --------------------------------------------------
    def frames_to_reach(self, level: float) -> int:
        """
        Frames of accrual at the current rate until `level` is available.

        0 when already satisfied.
        """
        needed = units_to_points(level) - self._state.points
        if needed <= 0:
            return 0

        rate = self._state.rate
        if rate <= 0:
            raise ZeroAccrualRateError(
                f"accrual rate is {rate} at frame {self._state.frame}; "
                f"level {level:g} can never be reached (before battle start?)"
            )

        return -(-needed // rate)
