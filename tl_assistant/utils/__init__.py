from tl_assistant.utils.errors import (
    ConfigError,
    NoAnchorError,
    TimelineError,
    TimingLoopError,
    TooManyIndividualBuffsError,
    UnresolvedForwardLabelError,
    UserInputError,
    ZeroAccrualRateError,
)

__all__ = [
    "ConfigError",
    "NoAnchorError",
    "TimelineError",
    "TimingLoopError",
    "TooManyIndividualBuffsError",
    "UnresolvedForwardLabelError",
    "UserInputError",
    "ZeroAccrualRateError",
]
