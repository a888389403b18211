"""Dashboard snapshot assembly for an active weight cut."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from weight_cut_tracker.domain.analytics import DashboardSnapshot, DayState, DayStatus
from weight_cut_tracker.domain.plans import Timeline, WeightCutPlan
from weight_cut_tracker.domain.progress import DailyProgressRecord
from weight_cut_tracker.services import alerts as alert_rules
from weight_cut_tracker.services.compliance import (
    aggregate,
    compliance_level,
    day_compliance,
    weight_progress,
)
from weight_cut_tracker.services.phases import (
    fallback_targets,
    guidance_for,
    phase_for_day_state,
)
from weight_cut_tracker.services.plan_status import PlanStatusEvaluator
from weight_cut_tracker.services.streak import streak
from weight_cut_tracker.services.timeline_clock import day_state, today_in

_logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Read interface for weight cut plans."""

    def get_active_plan(self, user_id: UUID) -> WeightCutPlan | None:
        """Return the user's most recent plan, if any."""


class TimelineRepository(Protocol):
    """Read interface for daily timelines."""

    def get_active_timeline(self, user_id: UUID) -> Timeline | None:
        """Return the user's active timeline, if any."""


class ProgressRepository(Protocol):
    """Read interface for daily progress records."""

    def list_progress(
        self, user_id: UUID, timeline_id: str
    ) -> list[DailyProgressRecord]:
        """Return every progress record stored for a timeline."""


def _current_day(state: DayState) -> int:
    if state.status is DayStatus.ACTIVE:
        return state.day_number or 0
    if state.status is DayStatus.COMPLETED:
        return state.total_days
    return 0


@dataclass
class DashboardService:
    """Service that reads plan data and computes the dashboard snapshot."""

    plan_repository: PlanRepository
    timeline_repository: TimelineRepository
    progress_repository: ProgressRepository
    plan_status_evaluator: PlanStatusEvaluator = field(
        default_factory=PlanStatusEvaluator
    )
    alert_limit: int = alert_rules.DEFAULT_ALERT_LIMIT

    def get_dashboard(
        self, user_id: UUID, timezone_name: str, today: date | None = None
    ) -> DashboardSnapshot | None:
        """Fetch the user's active plan and return its snapshot."""
        loaded = self.load(user_id, timezone_name, today=today)
        return loaded[1] if loaded else None

    def load(
        self, user_id: UUID, timezone_name: str, today: date | None = None
    ) -> tuple[Timeline, DashboardSnapshot] | None:
        """Return the active timeline together with the snapshot built from it."""
        plan = self.plan_repository.get_active_plan(user_id)
        if plan is None:
            return None
        timeline = self.timeline_repository.get_active_timeline(user_id)
        if timeline is None:
            return None
        records = self.progress_repository.list_progress(user_id, timeline.id)
        resolved_today = today or today_in(timezone_name)
        snapshot = self.build_snapshot(plan, timeline, records, resolved_today)
        _logger.info(
            "Dashboard snapshot: timeline=%s status=%s day=%s alerts=%s",
            timeline.id,
            snapshot.day_state.status,
            snapshot.day_state.day_number,
            len(snapshot.alerts),
        )
        return timeline, snapshot

    def build_snapshot(
        self,
        plan: WeightCutPlan,
        timeline: Timeline,
        records: list[DailyProgressRecord],
        today: date | str,
    ) -> DashboardSnapshot:
        """Compute every dashboard metric from already-fetched data."""
        state = day_state(timeline.start_date, timeline.total_days, today)
        phase = phase_for_day_state(state)
        current_day = _current_day(state)
        today_targets = (
            timeline.target_for(current_day)
            if state.status is DayStatus.ACTIVE
            else None
        )
        expected_weight = (
            timeline.target_for(current_day).weight_kg if current_day else None
        )

        history = [r for r in records if 1 <= r.day_number <= current_day]
        last_completed_day = (
            current_day - 1 if state.status is DayStatus.ACTIVE else current_day
        )
        by_day = {record.day_number: record for record in history}

        compliance = aggregate(history, timeline.targets)
        weight = weight_progress(plan, history)
        plan_status = self.plan_status_evaluator.evaluate(
            current_weight=weight.current_weight_kg,
            expected_weight_today=expected_weight,
            has_weight_history=weight.has_weight_history,
            compliance_score=compliance.score,
        )

        today_record = by_day.get(current_day)
        alerts = []
        if today_targets is not None:
            yesterday = by_day.get(current_day - 1)
            context = alert_rules.AlertContext(
                day_number=current_day,
                total_days=timeline.total_days,
                phase=phase,
                current_weight=(
                    weight.current_weight_kg if weight.has_weight_history else None
                ),
                yesterday_weight=yesterday.actual_weight_kg if yesterday else None,
                target_weight_today=today_targets.weight_kg,
                target_weight_final=timeline.final_target_weight_kg,
                actual_calories=today_record.actual_calories if today_record else None,
                target_calories=today_targets.calories_intake,
                actual_water=(
                    today_record.actual_water_liters if today_record else None
                ),
                target_water=today_targets.water_intake_liters,
                target_phase=today_targets.phase,
            )
            alerts = alert_rules.filter_top(
                alert_rules.generate(context), self.alert_limit
            )

        return DashboardSnapshot(
            day_state=state,
            phase=phase,
            guidance=guidance_for(phase),
            today_targets=today_targets,
            fallback_targets=fallback_targets(phase) if today_targets is None else None,
            compliance=compliance,
            compliance_level=compliance_level(compliance.score),
            today_compliance=(
                day_compliance(today_record, today_targets)
                if today_record is not None and today_targets is not None
                else None
            ),
            weight_progress=weight,
            streak=streak(history, timeline.targets, last_completed_day),
            plan_status=plan_status,
            alerts=alerts,
        )
