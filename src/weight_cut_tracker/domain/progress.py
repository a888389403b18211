"""Domain models for recorded daily progress."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyProgressRecord:
    """Actual values recorded for one plan day.

    ``None`` means the value was never recorded, which is not the same as a
    recorded zero.
    """

    day_number: int
    actual_weight_kg: float | None = None
    actual_calories: float | None = None
    actual_water_liters: float | None = None
    actual_protein_grams: float | None = None
    actual_carbs_grams: float | None = None
    actual_fats_grams: float | None = None
