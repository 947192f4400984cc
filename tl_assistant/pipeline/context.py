#!filepath: tl_assistant/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from tl_assistant.timeline.core.events import ActionRow
from tl_assistant.timeline.result import TimelineResult


@dataclass
class ConversionContext:
    """
    The single runtime context of one conversion.

    - the pipeline builds it
    - each step fills exactly one slot
    - no business logic here
    """

    run_name: str
    source_text: str

    rows: List[ActionRow] = field(default_factory=list)
    result: Optional[TimelineResult] = None
    rendered: Optional[str] = None
