"""Tests for dashboard snapshot assembly."""

from datetime import date
from uuid import uuid4

import pytest

from weight_cut_tracker.domain.analytics import (
    ComplianceLevel,
    DayStatus,
    Phase,
    PlanStatus,
    PlanStatusBasis,
)
from weight_cut_tracker.domain.errors import InvalidDateError
from weight_cut_tracker.domain.plans import Timeline
from weight_cut_tracker.domain.progress import DailyProgressRecord
from weight_cut_tracker.services.dashboard import DashboardService
from weight_cut_tracker.services.plan_status import PlanStatusEvaluator
from tests.conftest import (
    InMemoryPlanRepository,
    InMemoryProgressRepository,
    InMemoryTimelineRepository,
    make_plan,
    make_timeline,
)


def _records() -> list[DailyProgressRecord]:
    return [
        DailyProgressRecord(
            day_number=1,
            actual_weight_kg=79.6,
            actual_calories=2000,
            actual_water_liters=3.0,
        ),
        DailyProgressRecord(
            day_number=2,
            actual_weight_kg=79.2,
            actual_calories=1800,
            actual_water_liters=2.7,
        ),
        DailyProgressRecord(
            day_number=3,
            actual_weight_kg=78.9,
            actual_calories=1900,
            actual_water_liters=3.0,
        ),
        DailyProgressRecord(
            day_number=4,
            actual_weight_kg=78.6,
            actual_calories=1000,
            actual_water_liters=1.5,
        ),
        DailyProgressRecord(day_number=5, actual_weight_kg=70.0),
    ]


def _service(alert_limit: int = 3) -> DashboardService:
    return DashboardService(
        plan_repository=InMemoryPlanRepository(),
        timeline_repository=InMemoryTimelineRepository(),
        progress_repository=InMemoryProgressRepository(),
        alert_limit=alert_limit,
    )


def test_active_day_snapshot() -> None:
    snapshot = _service().build_snapshot(
        make_plan(80.0, 75.0), make_timeline(), _records(), date(2025, 1, 4)
    )

    assert snapshot.day_state.status is DayStatus.ACTIVE
    assert snapshot.day_state.day_number == 4
    assert snapshot.day_state.days_remaining == 6
    assert snapshot.phase is Phase.FINAL_WEEK
    assert snapshot.today_targets is not None
    assert snapshot.today_targets.day == 4
    assert snapshot.fallback_targets is None

    assert snapshot.compliance.calories.percentage == 84
    assert snapshot.compliance.water.percentage == 85
    assert snapshot.compliance.score == 85
    assert snapshot.compliance_level is ComplianceLevel.GOOD

    assert snapshot.today_compliance is not None
    assert snapshot.today_compliance.calories == 50
    assert snapshot.today_compliance.water == 50
    assert snapshot.today_compliance.protein is None

    assert snapshot.weight_progress.current_weight_kg == 78.6
    assert snapshot.weight_progress.lost_kg == pytest.approx(1.4)
    assert snapshot.weight_progress.percentage == pytest.approx(28.0)

    assert snapshot.streak == 3
    assert snapshot.plan_status.status is PlanStatus.BEHIND
    assert snapshot.plan_status.basis is PlanStatusBasis.WEIGHT
    assert snapshot.plan_status.deviation == pytest.approx(0.6)

    assert [alert.id for alert in snapshot.alerts] == [
        "weight_slightly_above",
        "water_low",
        "calories_low",
    ]


def test_future_records_are_ignored() -> None:
    snapshot = _service().build_snapshot(
        make_plan(), make_timeline(), _records(), "2025-01-02"
    )

    assert snapshot.day_state.day_number == 2
    assert snapshot.weight_progress.current_weight_kg == 79.2
    assert snapshot.compliance.calories.days_counted == 2


def test_alert_limit_is_applied() -> None:
    snapshot = _service(alert_limit=1).build_snapshot(
        make_plan(), make_timeline(), _records(), date(2025, 1, 4)
    )

    assert [alert.id for alert in snapshot.alerts] == ["weight_slightly_above"]


def test_pending_timeline_uses_fallback_targets() -> None:
    snapshot = _service().build_snapshot(
        make_plan(), make_timeline(), _records(), date(2024, 12, 30)
    )

    assert snapshot.day_state.status is DayStatus.PENDING
    assert snapshot.day_state.day_number is None
    assert snapshot.day_state.days_remaining == 10
    assert snapshot.phase is Phase.INITIAL
    assert snapshot.today_targets is None
    assert snapshot.fallback_targets is not None
    assert snapshot.fallback_targets.calories == 1500
    assert snapshot.fallback_targets.water_liters == 3.0
    assert snapshot.compliance.score is None
    assert snapshot.compliance_level is None
    assert snapshot.weight_progress.has_weight_history is False
    assert snapshot.plan_status.status is None
    assert snapshot.plan_status.basis is PlanStatusBasis.INSUFFICIENT_DATA
    assert snapshot.streak == 0
    assert snapshot.alerts == []


def test_completed_timeline_uses_full_history() -> None:
    records = [
        DailyProgressRecord(
            day_number=day,
            actual_weight_kg=80.0 - 0.5 * day,
            actual_calories=2000,
            actual_water_liters=3.0,
        )
        for day in range(1, 11)
    ]

    snapshot = _service().build_snapshot(
        make_plan(80.0, 75.0), make_timeline(), records, date(2025, 2, 1)
    )

    assert snapshot.day_state.status is DayStatus.COMPLETED
    assert snapshot.day_state.days_remaining == 0
    assert snapshot.phase is Phase.COMPLETE
    assert snapshot.today_targets is None
    assert snapshot.fallback_targets is not None
    assert snapshot.streak == 10
    assert snapshot.compliance.score == 100
    assert snapshot.compliance_level is ComplianceLevel.EXCELLENT
    assert snapshot.weight_progress.percentage == 100.0
    assert snapshot.plan_status.status is PlanStatus.ON_TRACK
    assert snapshot.alerts == []


def test_last_active_day_is_complete_phase_with_targets() -> None:
    snapshot = _service().build_snapshot(
        make_plan(), make_timeline(), [], date(2025, 1, 10)
    )

    assert snapshot.day_state.status is DayStatus.ACTIVE
    assert snapshot.day_state.day_number == 10
    assert snapshot.phase is Phase.COMPLETE
    assert snapshot.today_targets is not None
    assert snapshot.today_targets.day == 10


def test_final_days_report_final_push() -> None:
    records = [DailyProgressRecord(day_number=8, actual_weight_kg=76.0)]

    snapshot = _service().build_snapshot(
        make_plan(), make_timeline(), records, date(2025, 1, 8)
    )

    assert snapshot.phase is Phase.WATER_CUT
    assert "final_push" in [alert.id for alert in snapshot.alerts]


def test_first_day_without_records_has_no_alerts() -> None:
    snapshot = _service().build_snapshot(
        make_plan(), make_timeline(), [], date(2025, 1, 1)
    )

    assert snapshot.day_state.day_number == 1
    assert snapshot.phase is Phase.INITIAL
    assert snapshot.today_compliance is None
    assert snapshot.plan_status.basis is PlanStatusBasis.INSUFFICIENT_DATA
    assert snapshot.alerts == []


def test_compliance_fallback_when_weight_missing() -> None:
    records = [
        DailyProgressRecord(day_number=1, actual_calories=2000, actual_water_liters=3.0)
    ]

    snapshot = _service().build_snapshot(
        make_plan(), make_timeline(), records, date(2025, 1, 2)
    )

    assert snapshot.plan_status.status is PlanStatus.AHEAD
    assert snapshot.plan_status.basis is PlanStatusBasis.COMPLIANCE
    assert snapshot.streak == 1


def test_custom_evaluator_thresholds() -> None:
    service = DashboardService(
        plan_repository=InMemoryPlanRepository(),
        timeline_repository=InMemoryTimelineRepository(),
        progress_repository=InMemoryProgressRepository(),
        plan_status_evaluator=PlanStatusEvaluator(
            on_track_tolerance_kg=1.0, critical_deviation_kg=2.0
        ),
    )

    snapshot = service.build_snapshot(
        make_plan(), make_timeline(), _records(), date(2025, 1, 4)
    )

    assert snapshot.plan_status.status is PlanStatus.ON_TRACK


def test_invalid_start_date_raises() -> None:
    timeline = Timeline(
        id="timeline-1",
        start_date="not-a-date",
        total_days=10,
        targets=make_timeline().targets,
    )

    with pytest.raises(InvalidDateError):
        _service().build_snapshot(make_plan(), timeline, [], date(2025, 1, 4))


def test_get_dashboard_reads_repositories() -> None:
    user_id = uuid4()
    timeline = make_timeline()
    progress = InMemoryProgressRepository(records={timeline.id: _records()})
    service = DashboardService(
        plan_repository=InMemoryPlanRepository(plans={user_id: make_plan()}),
        timeline_repository=InMemoryTimelineRepository(timelines={user_id: timeline}),
        progress_repository=progress,
    )

    snapshot = service.get_dashboard(user_id, "UTC", today=date(2025, 1, 4))

    assert snapshot is not None
    assert snapshot.day_state.day_number == 4
    assert progress.calls == [(user_id, "timeline-1")]


def test_get_dashboard_resolves_today_in_timezone() -> None:
    user_id = uuid4()
    service = DashboardService(
        plan_repository=InMemoryPlanRepository(plans={user_id: make_plan()}),
        timeline_repository=InMemoryTimelineRepository(
            timelines={user_id: make_timeline(start_date="2000-01-01")}
        ),
        progress_repository=InMemoryProgressRepository(),
    )

    snapshot = service.get_dashboard(user_id, "America/New_York")

    assert snapshot is not None
    assert snapshot.day_state.status is DayStatus.COMPLETED


def test_get_dashboard_without_plan_or_timeline() -> None:
    user_id = uuid4()
    progress = InMemoryProgressRepository()
    without_plan = DashboardService(
        plan_repository=InMemoryPlanRepository(),
        timeline_repository=InMemoryTimelineRepository(
            timelines={user_id: make_timeline()}
        ),
        progress_repository=progress,
    )
    without_timeline = DashboardService(
        plan_repository=InMemoryPlanRepository(plans={user_id: make_plan()}),
        timeline_repository=InMemoryTimelineRepository(),
        progress_repository=progress,
    )

    assert without_plan.get_dashboard(user_id, "UTC") is None
    assert without_timeline.get_dashboard(user_id, "UTC") is None
    assert progress.calls == []


def test_unrecorded_yesterday_breaks_streak() -> None:
    records = [
        DailyProgressRecord(
            day_number=day, actual_calories=2000, actual_water_liters=3.0
        )
        for day in (1, 2, 3)
    ]

    snapshot = _service().build_snapshot(
        make_plan(), make_timeline(), records, date(2025, 1, 5)
    )
    day_four = _service().build_snapshot(
        make_plan(), make_timeline(), records, date(2025, 1, 4)
    )

    assert snapshot.streak == 0
    assert day_four.streak == 3


def test_load_returns_timeline_used_for_snapshot() -> None:
    user_id = uuid4()
    timeline = make_timeline()
    timelines = InMemoryTimelineRepository(timelines={user_id: timeline})
    service = DashboardService(
        plan_repository=InMemoryPlanRepository(plans={user_id: make_plan()}),
        timeline_repository=timelines,
        progress_repository=InMemoryProgressRepository(),
    )

    loaded = service.load(user_id, "UTC", today=date(2025, 1, 4))

    assert loaded is not None
    assert loaded[0] is timeline
    assert loaded[1].day_state.day_number == 4
    assert timelines.calls == [user_id]
