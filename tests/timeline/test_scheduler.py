#!filepath: tests/timeline/test_scheduler.py
"""
Merge scheduler contract (default config: 6 participants x 700, ceiling 10,
battle start at frame 60, so the pool fills at 4200 points per frame).
"""
import pytest

from tests.helpers import by_name, names
from tl_assistant.timeline.buffs.lifecycle import IntervalPhase, IntervalSource
from tl_assistant.timeline.core.events import (
    AbsoluteAnchor,
    ActionRow,
    EventKind,
    LabelAnchor,
    TargetLevelAnchor,
)
from tl_assistant.timeline.scheduler import BATTLE_START, TIMER_START
from tl_assistant.utils.errors import (
    NoAnchorError,
    TimingLoopError,
    TooManyIndividualBuffsError,
    UnresolvedForwardLabelError,
    ZeroAccrualRateError,
)


def _row(name, anchor, **kw):
    return ActionRow(name=name, anchor=anchor, **kw)


def test_bootstrap_events(make_engine):
    result = make_engine().run([])

    timer, battle = result.events
    assert (timer.name, timer.frame, timer.participants) == (TIMER_START, 0, 0)
    assert (battle.name, battle.frame, battle.participants) == (BATTLE_START, 60, 6)
    assert battle.kind is EventKind.SYSTEM
    assert battle.rate == 4200


def test_implicit_target_level_waits_for_cost(make_engine):
    result = make_engine().run([_row("Skill", TargetLevelAnchor(3), cost=3)])
    ev = result.rows()[0]

    # ceil(900,000 / 4200) = 215 frames after battle start
    assert ev.frame == 275
    assert ev.resource_points == 215 * 4200 - 900_000
    assert ev.notes == ()
    assert ev.row_index == 0


@pytest.mark.contract
def test_already_satisfied_is_annotated_only_when_explicit(make_engine):
    rows = [
        _row("Wait", AbsoluteAnchor(600)),
        _row("Explicit", TargetLevelAnchor(1, explicit=True), cost=1),
        _row("Implicit", TargetLevelAnchor(1), cost=1),
    ]
    result = make_engine().run(rows)
    explicit, implicit = result.rows()[1:]

    assert explicit.frame == 600
    assert explicit.notes[0].startswith("already satisfied")
    assert implicit.frame == 600
    assert implicit.notes == ()


@pytest.mark.contract
def test_earlier_absolute_frame_is_reordered(make_engine):
    rows = [
        _row("First", AbsoluteAnchor(300)),
        _row("Earlier", AbsoluteAnchor(100)),
    ]
    result = make_engine().run(rows)
    earlier = result.rows()[1]

    assert earlier.frame == 300
    assert earlier.notes[0].startswith("reordered")


@pytest.mark.contract
def test_overflow_recorded_on_commit(make_engine):
    result = make_engine().run([_row("Late", AbsoluteAnchor(1060))])
    ev = result.rows()[0]

    assert ev.resource_points == 3_000_000
    assert ev.overflow_points == 1000 * 4200 - 3_000_000
    assert result.summary.total_overflow == pytest.approx(4.0)


@pytest.mark.contract
def test_transition_on_the_row_frame_commits_first(make_engine):
    rows = [
        _row("Boost", AbsoluteAnchor(100)),
        _row("Other", AbsoluteAnchor(100)),
        _row("Late", AbsoluteAnchor(400)),
    ]
    result = make_engine().run(rows)

    assert names(result.events) == [
        TIMER_START, BATTLE_START,
        "Boost", "Boost start", "Other",
        "Boost end", "Late",
    ]
    assert by_name(result.events, "Other").rate == (700 + 300) + 5 * 700
    assert by_name(result.events, "Late").rate == 4200
    # 40 frames at 4200, then 300 frames at 4500
    assert by_name(result.events, "Late").resource_points == 40 * 4200 + 300 * 4500


def test_catalog_offset_and_duration_variant(make_engine, default_catalog):
    result = make_engine(catalog=default_catalog).run([_row("セイアEX", AbsoluteAnchor(100))])
    seia = result.intervals[0]

    assert (seia.start_frame, seia.end_frame) == (198, 198 + 535)
    assert seia.phase is IntervalPhase.PENDING


@pytest.mark.contract
def test_duplicate_scope_override_through_engine(make_engine):
    rows = [
        _row("Boost", AbsoluteAnchor(100)),
        _row("Boost", AbsoluteAnchor(200)),
        _row("Check", AbsoluteAnchor(600)),
    ]
    result = make_engine().run(rows)
    first, second = result.intervals

    assert first.end_frame == 200
    assert first.truncated
    assert first.phase is IntervalPhase.ENDED
    assert (second.start_frame, second.end_frame) == (200, 500)
    assert second.phase is IntervalPhase.ENDED


def test_label_offset_with_forward_policy(make_engine):
    rows = [
        _row("Anchor", AbsoluteAnchor(300), label="#a"),
        _row("Follow", LabelAnchor("#a", "+", 2.0)),
    ]
    result = make_engine(offset_always_forward=True).run(rows)

    follow = result.rows()[1]
    assert follow.frame == 360
    assert follow.notes == ()
    assert result.labels == {"#a": 300}


def test_label_offset_with_countdown_policy_is_reordered(make_engine):
    rows = [
        _row("Anchor", AbsoluteAnchor(300), label="#a"),
        _row("Follow", LabelAnchor("#a", "+", 2.0)),
    ]
    follow = make_engine().run(rows).rows()[1]

    # countdown: "+2s" on the clock is 60 frames earlier, already in the past
    assert follow.frame == 300
    assert follow.notes[0].startswith("reordered")


def test_unknown_label_is_recoverable(make_engine):
    result = make_engine().run([_row("Ghost", LabelAnchor("#missing"))])
    ghost = result.rows()[0]

    assert ghost.frame == 60
    assert ghost.notes[0].startswith("unknown label")
    assert any(n.startswith("reordered") for n in ghost.notes)


def test_forward_label_with_offset_aborts(make_engine):
    rows = [
        _row("Early", LabelAnchor("#later", "+", 1.0)),
        _row("Later", TargetLevelAnchor(2), cost=2, label="#later"),
    ]
    with pytest.raises(UnresolvedForwardLabelError) as ei:
        make_engine().run(rows)
    assert ei.value.row_index == 0


def test_no_anchor_aborts_with_row_position(make_engine):
    rows = [_row("Fine", AbsoluteAnchor(100)), _row("Broken", None)]

    with pytest.raises(NoAnchorError) as ei:
        make_engine().run(rows)
    assert ei.value.row_number == 2
    assert str(ei.value).startswith("row 2:")


def test_zero_rate_target_level_aborts(make_engine):
    with pytest.raises(ZeroAccrualRateError):
        make_engine(participants=0).run([_row("Never", TargetLevelAnchor(1))])


@pytest.mark.contract
def test_merge_loop_is_bounded(make_engine):
    rows = [
        _row("Boost", AbsoluteAnchor(100)),
        _row("After", AbsoluteAnchor(200)),
    ]
    with pytest.raises(TimingLoopError) as ei:
        make_engine(max_merge_iterations=1).run(rows)
    assert ei.value.row_index == 1


def test_too_many_individual_targets(make_engine):
    rows = [
        _row("Boost", AbsoluteAnchor(100)),
        _row("BoostB", AbsoluteAnchor(100)),
        _row("Other", AbsoluteAnchor(100)),
    ]
    with pytest.raises(TooManyIndividualBuffsError):
        make_engine(participants=1).run(rows)


def test_special_command_creates_interval_and_stays_out_of_the_log(make_engine):
    rows = [
        _row("コスト回復力増加", AbsoluteAnchor(100), value=600, duration=10),
        _row("Check", AbsoluteAnchor(200)),
    ]
    result = make_engine(special_commands_enabled=True).run(rows)

    assert "コスト回復力増加" not in names(result.events)
    assert "コスト回復力600増加 start" in names(result.events)

    check = by_name(result.events, "Check")
    assert check.rate == 4200 + 600
    assert check.resource_points == 40 * 4200 + 100 * 4800

    (iv,) = result.intervals
    assert iv.source is IntervalSource.SPECIAL_COMMAND
    assert (iv.start_frame, iv.end_frame) == (100, 400)


def test_special_command_overrides_same_scope(make_engine):
    rows = [
        _row("コスト回復力増加", AbsoluteAnchor(100), value=600, duration=10),
        _row("コスト回復力減少", AbsoluteAnchor(200), value=100, duration=10),
        _row("Check", AbsoluteAnchor(250)),
    ]
    result = make_engine(special_commands_enabled=True).run(rows)
    up, down = result.intervals

    assert up.end_frame == 200
    assert by_name(result.events, "Check").rate == 4200 - 100


def test_special_command_disabled_is_an_ordinary_row(make_engine):
    rows = [_row("コスト回復力増加", AbsoluteAnchor(100), value=600, duration=10)]
    result = make_engine().run(rows)

    assert "コスト回復力増加" in names(result.events)
    assert result.intervals == ()


def test_grants_start_at_battle_start(make_engine, default_catalog):
    engine = make_engine(catalog=default_catalog, grant_levels={"kanoe": 2})
    result = engine.run([_row("Check", AbsoluteAnchor(61))])

    assert names(result.events)[:3] == [TIMER_START, BATTLE_START, "カノエSS start"]
    (grant,) = result.intervals
    assert grant.source is IntervalSource.GRANT
    assert grant.magnitude == 342 + 85
    assert by_name(result.events, "Check").rate == (700 + 427) + 5 * 700


@pytest.mark.contract
def test_frames_never_decrease(make_engine, default_catalog):
    rows = [
        _row("水着ホシノEX", TargetLevelAnchor(5), cost=5),
        _row("Back", AbsoluteAnchor(10)),
        _row("セイアEX", TargetLevelAnchor(3), cost=3),
        _row("Skill", TargetLevelAnchor(4), cost=4),
    ]
    result = make_engine(catalog=default_catalog).run(rows)
    frames = [e.frame for e in result.events]

    assert frames == sorted(frames)


@pytest.mark.contract
def test_identical_input_identical_log(make_engine, default_catalog):
    rows = [
        _row("水着ホシノEX", TargetLevelAnchor(5), cost=5, label="#h"),
        _row("セイアEX", LabelAnchor("#h"), cost=3),
        _row("Skill", TargetLevelAnchor(6), cost=6),
    ]
    engine = make_engine(catalog=default_catalog)

    assert engine.run(rows).events == engine.run(rows).events
