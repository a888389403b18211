"""Compliance ratios and aggregate scores against daily targets."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from weight_cut_tracker.domain.analytics import (
    ComplianceLevel,
    ComplianceSnapshot,
    DayCompliance,
    MetricCompliance,
    WeightProgress,
)
from weight_cut_tracker.domain.plans import TargetSet, WeightCutPlan
from weight_cut_tracker.domain.progress import DailyProgressRecord

MAX_COUNTED_PERCENTAGE = 100

EXCELLENT_MIN = 90
GOOD_MIN = 75
FAIR_MIN = 60


def ratio(actual: float | None, target: float | None) -> float | None:
    """Return actual/target, or None when either side makes it meaningless."""
    if actual is None or target is None or target <= 0:
        return None
    return actual / target


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def _percentage(value: float | None) -> int | None:
    if value is None:
        return None
    return round_half_up(value * 100)


@dataclass
class _MetricAccumulator:
    total: float = 0.0
    count: int = 0

    def add(self, actual: float | None, target: float | None) -> None:
        value = ratio(actual, target)
        if value is None or actual is None or actual <= 0:
            return
        self.total += value
        self.count += 1

    def result(self) -> MetricCompliance:
        if self.count == 0:
            return MetricCompliance(percentage=None, days_counted=0)
        return MetricCompliance(
            percentage=round_half_up(self.total / self.count * 100),
            days_counted=self.count,
        )


def aggregate(
    records: Iterable[DailyProgressRecord], targets: Iterable[TargetSet]
) -> ComplianceSnapshot:
    """Average calorie and water compliance across recorded days.

    Days without a matching target set are skipped. Metric percentages are
    reported uncapped; each is capped at 100 before it enters the aggregate
    score, which stays ``None`` when no metric has a valid day.
    """
    by_day = {target.day: target for target in targets}
    calories = _MetricAccumulator()
    water = _MetricAccumulator()
    for record in records:
        target = by_day.get(record.day_number)
        if target is None:
            continue
        calories.add(record.actual_calories, target.calories_intake)
        water.add(record.actual_water_liters, target.water_intake_liters)

    calorie_metric = calories.result()
    water_metric = water.result()
    capped = [
        min(metric.percentage, MAX_COUNTED_PERCENTAGE)
        for metric in (calorie_metric, water_metric)
        if metric.percentage is not None
    ]
    score = round_half_up(sum(capped) / len(capped)) if capped else None
    return ComplianceSnapshot(calories=calorie_metric, water=water_metric, score=score)


def weight_progress_percentage(start: float, current: float, target: float) -> float:
    """Share of the planned loss already achieved, clamped to [0, 100]."""
    planned = start - target
    if planned == 0:
        return 0.0
    percentage = (start - current) / planned * 100
    return min(100.0, max(0.0, percentage))


def latest_weight(records: Iterable[DailyProgressRecord]) -> float | None:
    """Return the most recently recorded weight, if any."""
    latest: DailyProgressRecord | None = None
    for record in records:
        if record.actual_weight_kg is None:
            continue
        if latest is None or record.day_number > latest.day_number:
            latest = record
    return latest.actual_weight_kg if latest else None


def weight_progress(
    plan: WeightCutPlan, records: Iterable[DailyProgressRecord]
) -> WeightProgress:
    """Summarize weight lost and remaining using the latest recorded weight."""
    recorded = latest_weight(records)
    current = recorded if recorded is not None else plan.start_weight_kg
    return WeightProgress(
        start_weight_kg=plan.start_weight_kg,
        current_weight_kg=current,
        target_weight_kg=plan.target_weight_kg,
        lost_kg=max(0.0, plan.start_weight_kg - current),
        remaining_kg=max(0.0, current - plan.target_weight_kg),
        percentage=weight_progress_percentage(
            plan.start_weight_kg, current, plan.target_weight_kg
        ),
        has_weight_history=recorded is not None,
    )


def day_compliance(record: DailyProgressRecord, target: TargetSet) -> DayCompliance:
    """Return one day's per-metric percentages."""
    return DayCompliance(
        calories=_percentage(ratio(record.actual_calories, target.calories_intake)),
        protein=_percentage(
            ratio(record.actual_protein_grams, target.macros.protein_grams)
        ),
        carbs=_percentage(ratio(record.actual_carbs_grams, target.macros.carb_grams)),
        fats=_percentage(ratio(record.actual_fats_grams, target.macros.fat_grams)),
        water=_percentage(
            ratio(record.actual_water_liters, target.water_intake_liters)
        ),
    )


def compliance_level(score: int | None) -> ComplianceLevel | None:
    """Map a compliance percentage to its display band."""
    if score is None:
        return None
    if score >= EXCELLENT_MIN:
        return ComplianceLevel.EXCELLENT
    if score >= GOOD_MIN:
        return ComplianceLevel.GOOD
    if score >= FAIR_MIN:
        return ComplianceLevel.FAIR
    return ComplianceLevel.POOR
