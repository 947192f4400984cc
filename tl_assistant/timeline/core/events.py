from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Tuple, Union

from tl_assistant.timeline.core.time import (
    frames_to_seconds,
    points_to_units,
    seconds_to_frames,
)


# -------------------------
# Anchors (row input)
# -------------------------
class AnchorKind(str, Enum):
    ABSOLUTE = "absolute"
    LABEL = "label"
    TARGET_LEVEL = "target_level"


@dataclass(frozen=True)
class AbsoluteAnchor:
    frame: int
    kind: AnchorKind = field(default=AnchorKind.ABSOLUTE, init=False)

    @classmethod
    def at_seconds(cls, seconds: float) -> "AbsoluteAnchor":
        return cls(frame=seconds_to_frames(seconds))


@dataclass(frozen=True)
class LabelAnchor:
    label: str
    sign: Optional[str] = None          # "+" / "-" / None
    offset_seconds: Optional[float] = None
    kind: AnchorKind = field(default=AnchorKind.LABEL, init=False)

    @property
    def has_offset(self) -> bool:
        return self.sign is not None or bool(self.offset_seconds)

    @property
    def offset_frames(self) -> int:
        return seconds_to_frames(self.offset_seconds or 0.0)


@dataclass(frozen=True)
class TargetLevelAnchor:
    level: float
    explicit: bool = False  # written by the user, not implied by cost
    kind: AnchorKind = field(default=AnchorKind.TARGET_LEVEL, init=False)


Anchor = Union[AbsoluteAnchor, LabelAnchor, TargetLevelAnchor]


@dataclass(frozen=True)
class ActionRow:
    """
    One user-authored action, already reduced to a single anchor.

    value / duration / target only matter for inline special commands.
    participants overrides the participant count when the row commits.
    """
    name: str
    anchor: Optional[Anchor]
    cost: float = 0.0
    label: Optional[str] = None
    notes: Tuple[str, ...] = ()
    value: Optional[float] = None
    duration: Optional[float] = None
    target: Optional[str] = None
    auto: bool = False
    participants: Optional[int] = None
    source_line: Optional[str] = None


# -------------------------
# Resolved log
# -------------------------
class EventKind(str, Enum):
    SYSTEM = "system"
    ROW = "row"
    BUFF_START = "buff_start"
    BUFF_END = "buff_end"


@dataclass(frozen=True)
class ResolvedEvent:
    """
    Immutable fact appended by a commit. Never mutated afterwards.
    """
    frame: int
    kind: EventKind
    name: str
    cost: float
    resource_points: int
    overflow_points: int
    rate: int
    participants: int
    notes: Tuple[str, ...] = ()
    auto: bool = False
    row_index: Optional[int] = None
    interval_id: Optional[int] = None

    @property
    def level(self) -> float:
        return points_to_units(self.resource_points)

    @property
    def overflow(self) -> float:
        return points_to_units(self.overflow_points)

    @property
    def seconds(self) -> float:
        return frames_to_seconds(self.frame)

    @property
    def level_at_use(self) -> float:
        """Resource available right before the cost was paid."""
        return self.level + self.cost

    def to_dict(self) -> dict:
        d = asdict(self)
        d["kind"] = self.kind.value
        d["notes"] = list(self.notes)
        d["level"] = self.level
        d["overflow"] = self.overflow
        return d


# -------------------------
# Annotation texts
# -------------------------
def note_reordered(requested: int, current: int) -> str:
    return f"reordered: requested frame {requested} precedes current frame {current}"


def note_already_satisfied(target: float, current: float) -> str:
    return f"already satisfied: {target:g} requested, {current:.1f} available"


def note_unknown_label(label: str) -> str:
    return f"unknown label: {label} does not exist, using frame 0"


def note_unresolved_label(label: str) -> str:
    return f"unresolved label: {label} has no frame yet, using frame 0"
