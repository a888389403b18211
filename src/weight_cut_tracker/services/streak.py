"""Consecutive-day compliance streak."""

from collections.abc import Iterable

from weight_cut_tracker.domain.plans import TargetSet
from weight_cut_tracker.domain.progress import DailyProgressRecord
from weight_cut_tracker.services.compliance import ratio

STREAK_MIN_RATIO = 0.7
STREAK_MAX_RATIO = 1.5


def _in_band(actual: float | None, target: float) -> bool:
    value = ratio(actual, target)
    if value is None or actual is None or actual <= 0:
        return False
    return STREAK_MIN_RATIO <= value <= STREAK_MAX_RATIO


def day_counts(record: DailyProgressRecord, target: TargetSet) -> bool:
    """Whether calories and water both landed inside the streak band."""
    return _in_band(record.actual_calories, target.calories_intake) and _in_band(
        record.actual_water_liters, target.water_intake_liters
    )


def streak(
    records: Iterable[DailyProgressRecord],
    targets: Iterable[TargetSet],
    last_completed_day: int,
) -> int:
    """Count consecutive qualifying days ending at last_completed_day.

    A day with no record or no target set breaks the streak.
    """
    by_record = {record.day_number: record for record in records}
    by_target = {target.day: target for target in targets}
    count = 0
    day = last_completed_day
    while day >= 1:
        record = by_record.get(day)
        target = by_target.get(day)
        if record is None or target is None or not day_counts(record, target):
            break
        count += 1
        day -= 1
    return count
