#!filepath: tests/timeline/test_time.py
import math

from tl_assistant.timeline.core.time import (
    format_clock,
    parse_clock,
    points_to_units,
    round_half_up,
    seconds_to_frames,
    units_to_points,
)


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(1.5) == 2
    assert round_half_up(2.4999) == 2


def test_seconds_to_frames():
    assert seconds_to_frames(1.0) == 30
    assert seconds_to_frames(90) == 2700
    assert seconds_to_frames(0.05) == 2
    assert seconds_to_frames(None) == 0
    assert seconds_to_frames(math.nan) == 0


def test_point_unit_round_trip():
    assert units_to_points(10) == 3_000_000
    assert points_to_units(1_650_000) == 5.5


def test_parse_clock():
    assert parse_clock("2:34.5") == 154.5
    assert parse_clock("12.5") == 12.5
    assert parse_clock("1:2:3") is None
    assert parse_clock("abc") is None
    assert parse_clock("") is None


def test_format_clock_countdown_and_elapsed():
    assert format_clock(0, battle_duration=180) == "3:00.000"
    assert format_clock(60, battle_duration=180) == "2:58.000"
    assert format_clock(45, battle_duration=180, countdown=False) == "0:01.500"
    # past the end of the battle the countdown stays at zero
    assert format_clock(999_999, battle_duration=180) == "0:00.000"
