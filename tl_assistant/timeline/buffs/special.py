#!filepath: tl_assistant/timeline/buffs/special.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from tl_assistant.timeline.buffs.catalog import POOL_TARGET, BuffScope, CatalogEntry
from tl_assistant.timeline.core.events import ActionRow
from tl_assistant.timeline.core.time import seconds_to_frames

INCREASE_PATTERN = re.compile(r"コスト回復力.*(?:増|上昇)|cost\s*recovery.*(?:up|increase)", re.IGNORECASE)
DECREASE_PATTERN = re.compile(r"コスト回復力.*(?:減|減少|低下)|cost\s*recovery.*(?:down|decrease)", re.IGNORECASE)


@dataclass(frozen=True)
class SpecialBuff:
    """Interval request built from one inline directive."""
    entry: CatalogEntry
    name: str
    magnitude: float
    duration: int


class SpecialCommandInterpreter:
    """
    Turns "cost recovery up/down <value> <N>s [target]" rows into modifiers.

    Recognized rows never reach the resolved log. A directive with no
    value or a non-positive duration is recognized but yields nothing.
    """

    def __init__(self, *, enabled: bool, template: Optional[CatalogEntry]):
        self.enabled = enabled and template is not None
        self.template = template

    def is_command(self, name: str) -> bool:
        if not self.enabled or not name:
            return False
        return bool(INCREASE_PATTERN.search(name) or DECREASE_PATTERN.search(name))

    def interpret(self, row: ActionRow) -> Optional[SpecialBuff]:
        if not self.is_command(row.name):
            return None
        if row.value is None or row.duration is None or row.duration <= 0:
            return None

        duration = seconds_to_frames(row.duration)
        if duration <= 0:
            return None

        decrease = bool(DECREASE_PATTERN.search(row.name))
        amount = abs(row.value)
        magnitude = -amount if decrease else amount

        target = row.target or self.template.target
        entry = self.template.model_copy(
            update={"target": target, "scope": BuffScope.from_target(target)}
        )

        return SpecialBuff(
            entry=entry,
            name=self._display_name(amount, decrease, target),
            magnitude=magnitude,
            duration=duration,
        )

    def _display_name(self, amount: float, decrease: bool, target: str) -> str:
        base = self.template.name
        shown = f"{amount:g}"

        if "増加" in base:
            name = base.replace("増加", f"{shown}増加")
            if decrease:
                name = name.replace("増加", "減少")
        else:
            name = f"{base} {'-' if decrease else '+'}{shown}"

        if target != POOL_TARGET:
            name = f"{name}({target})"
        return name
