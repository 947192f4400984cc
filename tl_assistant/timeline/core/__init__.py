"""
Core World Model

Defines WHAT a battle timeline is, independent of parsing, catalogs or output.

Invariants:
- Time is represented as integer frames at 30 fps.
- The resource pool is a fixed-point integer (1 unit = 300,000 points).
- ResolvedEvents are immutable historical facts, appended in frame order.
- SimulationState evolves ONLY through ResourceAccrual.commit().

Core explicitly does NOT:
- Parse text or render output
- Know the buff catalog
- Decide which transition or row commits next

Scheduling is always external.
"""
from tl_assistant.timeline.core.events import (
    AbsoluteAnchor,
    ActionRow,
    Anchor,
    AnchorKind,
    EventKind,
    LabelAnchor,
    ResolvedEvent,
    TargetLevelAnchor,
)
from tl_assistant.timeline.core.state import CommitOutcome, ResourceAccrual, SimulationState
from tl_assistant.timeline.core.time import FPS, POINT_UNIT

__all__ = [
    "AbsoluteAnchor",
    "ActionRow",
    "Anchor",
    "AnchorKind",
    "CommitOutcome",
    "EventKind",
    "FPS",
    "LabelAnchor",
    "POINT_UNIT",
    "ResolvedEvent",
    "ResourceAccrual",
    "SimulationState",
    "TargetLevelAnchor",
]
