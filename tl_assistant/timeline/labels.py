#!filepath: tl_assistant/timeline/labels.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from tl_assistant import logs
from tl_assistant.timeline.core.events import (
    AbsoluteAnchor,
    ActionRow,
    LabelAnchor,
    note_unknown_label,
    note_unresolved_label,
)
from tl_assistant.utils.errors import UnresolvedForwardLabelError


@dataclass
class LabelEntry:
    name: str
    row_index: Optional[int] = None
    provisional: Optional[int] = None   # from the owning row's absolute anchor
    frame: Optional[int] = None         # published at commit

    @property
    def known_frame(self) -> Optional[int]:
        return self.frame if self.frame is not None else self.provisional


class LabelResolver:
    """
    label -> frame registry.

    A label is declared up front by its owning row, gets a provisional frame
    when that row has an absolute time, and is published with the actual
    frame once the row commits.
    """

    def __init__(self, *, offset_always_forward: bool = False, countdown_display: bool = True):
        self.offset_always_forward = offset_always_forward
        self.countdown_display = countdown_display
        self._labels: Dict[str, LabelEntry] = {}

    @classmethod
    def from_rows(cls, rows: Iterable[ActionRow], **kwargs) -> "LabelResolver":
        resolver = cls(**kwargs)
        for i, row in enumerate(rows):
            if not row.label:
                continue
            provisional = row.anchor.frame if isinstance(row.anchor, AbsoluteAnchor) else None
            resolver.declare(row.label, row_index=i, provisional=provisional)
        return resolver

    # --------------------------------------------------
    def declare(self, name: str, *, row_index: Optional[int] = None,
                provisional: Optional[int] = None) -> None:
        if name in self._labels:
            logs.warning(f"[Labels] {name} declared twice, later row wins")
        self._labels[name] = LabelEntry(name=name, row_index=row_index, provisional=provisional)

    def publish(self, name: str, frame: int) -> None:
        entry = self._labels.get(name)
        if entry is None:
            entry = self._labels[name] = LabelEntry(name=name)
        entry.frame = frame

    def is_declared(self, name: str) -> bool:
        return name in self._labels

    def frame_of(self, name: str) -> Optional[int]:
        entry = self._labels.get(name)
        return entry.known_frame if entry else None

    @property
    def published(self) -> Dict[str, int]:
        return {n: e.frame for n, e in self._labels.items() if e.frame is not None}

    # --------------------------------------------------
    def interpret_sign(self, sign: Optional[str]) -> int:
        """
        Offset direction.

        always_forward: as written. Countdown display: a clock that runs
        backwards, so "+" means earlier. Elapsed display: as written.
        """
        if sign not in ("+", "-"):
            return 0
        written = 1 if sign == "+" else -1
        if self.offset_always_forward:
            return written
        if self.countdown_display:
            return -written
        return written

    def resolve(self, anchor: LabelAnchor) -> Tuple[int, Optional[str]]:
        """(frame, note). Raises when an offset is asked of an unknown frame."""
        if anchor.label not in self._labels:
            return 0, note_unknown_label(anchor.label)

        ref = self.frame_of(anchor.label)

        if not anchor.has_offset:
            if ref is None:
                return 0, note_unresolved_label(anchor.label)
            return ref, None

        if ref is None:
            raise UnresolvedForwardLabelError(
                f"label {anchor.label} has no frame yet; an offset needs a committed "
                f"or absolutely timed label row"
            )

        frame = ref + self.interpret_sign(anchor.sign) * anchor.offset_frames
        return max(frame, 0), None
