# tl_assistant/utils/errors.py
from __future__ import annotations

from typing import Optional


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (config values, catalog files).
    Should NOT print traceback.
    """


class ConfigError(UserInputError):
    """Configuration or catalog file cannot be loaded / validated."""


class TimelineError(RuntimeError):
    """
    Base class of every aborting simulation failure.

    Carries the 1-based position of the offending row once the scheduler
    has attached it.
    """

    def __init__(self, message: str, *, row_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.row_index = row_index

    def at_row(self, index: int) -> "TimelineError":
        if self.row_index is None:
            self.row_index = index
        return self

    @property
    def row_number(self) -> Optional[int]:
        return None if self.row_index is None else self.row_index + 1

    def __str__(self) -> str:
        if self.row_index is None:
            return self.message
        return f"row {self.row_number}: {self.message}"


class NoAnchorError(TimelineError):
    """Row carries neither a time, a label reference nor a target level."""


class TimingLoopError(TimelineError):
    """Merge loop did not settle within the iteration cap."""


class ZeroAccrualRateError(TimelineError):
    """Target-level anchor cannot be solved while nothing accrues."""


class TooManyIndividualBuffsError(TimelineError):
    """More individually buffed participants than participants on the field."""


class UnresolvedForwardLabelError(TimelineError):
    """Offset requested against a label whose row has not committed yet."""
