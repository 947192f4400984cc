#!filepath: tl_assistant/timeline/rate.py
from __future__ import annotations

from typing import Dict, Iterable, List

from tl_assistant.timeline.buffs.catalog import BuffScope
from tl_assistant.timeline.buffs.lifecycle import BuffInterval
from tl_assistant.timeline.core.time import round_half_up
from tl_assistant.utils.errors import TooManyIndividualBuffsError


class AccrualRateCalculator:
    """
    Accrual rate (points / frame) from the active modifiers.

        individual target t : scale(base + mag_t + all_total)
        everyone else       : scale(base + all_total)
        pool modifiers      : scale(mag) each, added once

    scale(x) = half-up round of x * factor.
    """

    def __init__(self, *, base_rate: float, factor: float = 1.0):
        self.base_rate = base_rate
        self.factor = factor

    def scale(self, value: float) -> int:
        return round_half_up(value * self.factor)

    def rate(self, active: Iterable[BuffInterval], participants: int) -> int:
        individual: Dict[str, float] = {}
        all_total = 0.0
        pool: List[float] = []

        for iv in active:
            if iv.scope is BuffScope.INDIVIDUAL:
                individual[iv.target] = individual.get(iv.target, 0.0) + iv.magnitude
            elif iv.scope is BuffScope.ALL:
                all_total += iv.magnitude
            else:
                pool.append(iv.magnitude)

        if len(individual) > participants:
            raise TooManyIndividualBuffsError(
                f"{len(individual)} individually targeted modifiers "
                f"({', '.join(individual)}) for {participants} participants"
            )

        total = 0
        for magnitude in individual.values():
            total += self.scale(self.base_rate + magnitude + all_total)

        total += (participants - len(individual)) * self.scale(self.base_rate + all_total)
        total += sum(self.scale(m) for m in pool)
        return total
