"""Tests for phase classification."""

import pytest

from weight_cut_tracker.domain.analytics import DayState, DayStatus, Phase
from weight_cut_tracker.services.phases import (
    PHASE_GUIDANCE,
    classify_phase,
    fallback_targets,
    phase_for_day_state,
)


@pytest.mark.parametrize(
    ("days_remaining", "expected"),
    [
        (-2, Phase.COMPLETE),
        (0, Phase.COMPLETE),
        (1, Phase.WEIGH_IN),
        (2, Phase.WATER_CUT),
        (3, Phase.WATER_CUT),
        (4, Phase.FINAL_WEEK),
        (6, Phase.FINAL_WEEK),
        (7, Phase.FINAL_WEEK),
        (8, Phase.INITIAL),
        (30, Phase.INITIAL),
    ],
)
def test_classify_phase_thresholds(days_remaining: int, expected: Phase) -> None:
    assert classify_phase(days_remaining) is expected


def test_phase_for_day_state() -> None:
    active = DayState(status=DayStatus.ACTIVE, total_days=10, day_index=3)
    pending = DayState(status=DayStatus.PENDING, total_days=10)
    completed = DayState(status=DayStatus.COMPLETED, total_days=10)

    assert phase_for_day_state(active) is Phase.FINAL_WEEK
    assert phase_for_day_state(pending) is Phase.INITIAL
    assert phase_for_day_state(completed) is Phase.COMPLETE


def test_every_phase_has_guidance() -> None:
    assert set(PHASE_GUIDANCE) == set(Phase)
    assert PHASE_GUIDANCE[Phase.WATER_CUT].sodium_limit_mg == 300
    assert PHASE_GUIDANCE[Phase.FINAL_WEEK].hydration_liters == 2.5


def test_fallback_targets_scale_calories_by_phase() -> None:
    initial = fallback_targets(Phase.INITIAL, maintenance_calories=2500)
    water_cut = fallback_targets(Phase.WATER_CUT, maintenance_calories=2500)

    assert initial.calories == 2000
    assert water_cut.calories == 750
    assert water_cut.water_liters == 1.0
    assert water_cut.sodium_limit_mg == 300


def test_fallback_targets_never_negative() -> None:
    targets = fallback_targets(Phase.WEIGH_IN, maintenance_calories=800)

    assert targets.calories == 0
