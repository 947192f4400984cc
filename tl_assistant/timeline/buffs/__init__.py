from tl_assistant.timeline.buffs.catalog import BuffCatalog, BuffScope, CatalogEntry
from tl_assistant.timeline.buffs.lifecycle import (
    BuffInterval,
    BuffLifecycleManager,
    IntervalPhase,
    IntervalSource,
    Transition,
    TransitionKind,
)
from tl_assistant.timeline.buffs.special import SpecialBuff, SpecialCommandInterpreter

__all__ = [
    "BuffCatalog",
    "BuffInterval",
    "BuffLifecycleManager",
    "BuffScope",
    "CatalogEntry",
    "IntervalPhase",
    "IntervalSource",
    "SpecialBuff",
    "SpecialCommandInterpreter",
    "Transition",
    "TransitionKind",
]
