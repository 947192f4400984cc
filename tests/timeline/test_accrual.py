#!filepath: tests/timeline/test_accrual.py
"""
Resource accrual contract:

- resource(f2) = min(ceiling, resource(f1) + (f2 - f1) * rate)
- overflow = unclamped - ceiling, stored value = ceiling
- cost is paid after accrual and clamping (default order)
- the rate used between two commits is the one computed at the first
"""
import pytest

from tl_assistant.timeline.core.state import ResourceAccrual, SimulationState
from tl_assistant.timeline.core.time import units_to_points
from tl_assistant.utils.errors import ZeroAccrualRateError


def _scenario_accrual(**kw) -> ResourceAccrual:
    rates = {3001: 3000}
    return ResourceAccrual(
        ceiling_points=units_to_points(10.5),
        rate_fn=lambda frame, participants: rates.get(frame, 2000),
        state=SimulationState(frame=3000, points=3_140_000, rate=4000, participants=6),
        **kw,
    )


@pytest.mark.contract
def test_frame_by_frame_accrual_with_clamp_and_cost():
    acc = _scenario_accrual()

    points = [acc.commit(f).points for f in range(3001, 3007)]
    assert points == [3_144_000, 3_147_000, 3_149_000, 3_150_000, 3_150_000, 3_150_000]

    out = acc.commit(3007, cost=5)
    assert out.points == 1_650_000
    assert out.overflow_points == 2000


@pytest.mark.contract
def test_overflow_is_excess_over_ceiling():
    acc = _scenario_accrual()
    for f in (3001, 3002, 3003):
        acc.commit(f)

    out = acc.commit(3004)
    assert out.points == acc.ceiling_points
    assert out.overflow_points == 1000


def test_consume_first_pays_before_clamp():
    acc = _scenario_accrual(accrue_before_consume=False)
    for f in range(3001, 3007):
        acc.commit(f)

    # 3,150,000 - 1,500,000 + 2,000 stays under the ceiling
    out = acc.commit(3007, cost=5)
    assert out.points == 1_652_000
    assert out.overflow_points == 0


def test_participant_override_applies_before_rate():
    seen = []

    def rate_fn(frame, participants):
        seen.append(participants)
        return participants * 700

    acc = ResourceAccrual(ceiling_points=3_000_000, rate_fn=rate_fn)
    out = acc.commit(60, participants=6)

    assert seen == [6]
    assert out.rate == 4200
    assert out.points == 0


def test_time_regression_raises():
    acc = _scenario_accrual()
    with pytest.raises(ValueError):
        acc.commit(2999)


def test_frames_to_reach_uses_ceiling_division():
    acc = ResourceAccrual(
        ceiling_points=3_000_000,
        rate_fn=lambda f, p: 4200,
        state=SimulationState(frame=60, points=0, rate=4200, participants=6),
    )
    # 900,000 / 4200 = 214.28...
    assert acc.frames_to_reach(3) == 215
    assert acc.frames_to_reach(0) == 0


def test_frames_to_reach_zero_rate():
    acc = ResourceAccrual(ceiling_points=3_000_000, rate_fn=lambda f, p: 0)
    with pytest.raises(ZeroAccrualRateError):
        acc.frames_to_reach(1)


def test_snapshot_is_detached():
    acc = _scenario_accrual()
    snap = acc.snapshot()
    acc.commit(3001)

    assert snap.frame == 3000
    assert acc.frame == 3001
