from __future__ import annotations

import math
from typing import Optional

# tl_assistant/timeline/core/time.py
FPS = 30
POINT_UNIT = 30 * 10_000  # 1.0 resource = 300,000 points


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def seconds_to_frames(seconds: Optional[float]) -> int:
    if seconds is None or math.isnan(seconds):
        return 0
    return round_half_up(seconds * FPS)


def frames_to_seconds(frames: int) -> float:
    return frames / FPS


def units_to_points(units: float) -> int:
    return round_half_up(units * POINT_UNIT)


def points_to_units(points: int) -> float:
    return points / POINT_UNIT


def parse_clock(text: str) -> Optional[float]:
    """
    "2:34.543" -> 154.543, "12.5" -> 12.5, anything else -> None
    """
    if not text:
        return None

    if ":" in text:
        parts = text.split(":")
        if len(parts) != 2:
            return None
        try:
            return float(parts[0]) * 60 + float(parts[1])
        except ValueError:
            return None

    try:
        return float(text)
    except ValueError:
        return None


def format_clock(frame: int, *, battle_duration: int, countdown: bool = True) -> str:
    """
    Game clock display, "m:ss.fff".

    countdown=True mirrors the in-game timer (battle_duration -> 0).
    """
    seconds = frames_to_seconds(frame)
    shown = max(battle_duration - seconds, 0.0) if countdown else seconds

    millis = round_half_up(shown * 1000)
    minutes, millis = divmod(millis, 60_000)
    return f"{minutes}:{millis / 1000:06.3f}"
