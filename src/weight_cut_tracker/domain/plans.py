"""Domain models for weight cut plans and their daily schedules."""

from dataclasses import dataclass, replace
from datetime import date, datetime

from weight_cut_tracker.domain.errors import MissingTargetSetError


@dataclass(frozen=True)
class WeightCutPlan:
    """Start and target weight for a single cut."""

    id: str
    start_weight_kg: float
    target_weight_kg: float
    created_at: datetime | None = None


@dataclass(frozen=True)
class Macros:
    """Daily macronutrient targets in grams."""

    protein_grams: float
    carb_grams: float
    fat_grams: float


@dataclass(frozen=True)
class TargetSet:
    """Prescribed values for one day of the timeline."""

    day: int
    phase: str
    weight_kg: float
    calories_intake: float
    water_intake_liters: float
    macros: Macros
    cardio_minutes: float = 0
    sauna_suit_required: bool = False


@dataclass(frozen=True)
class Timeline:
    """Dense, 1-indexed schedule of target sets."""

    id: str
    start_date: str | date
    total_days: int
    targets: tuple[TargetSet, ...]

    def __post_init__(self) -> None:
        if self.total_days < 1:
            raise ValueError("Timeline must span at least one day")
        ordered = tuple(sorted(self.targets, key=lambda target: target.day))
        object.__setattr__(self, "targets", ordered)
        days = {target.day for target in ordered}
        for day in range(1, self.total_days + 1):
            if day not in days:
                raise MissingTargetSetError(day, self.id)

    def target_for(self, day: int) -> TargetSet:
        """Return the target set for a 1-indexed day."""
        if 1 <= day <= len(self.targets) and self.targets[day - 1].day == day:
            return self.targets[day - 1]
        for target in self.targets:
            if target.day == day:
                return target
        raise MissingTargetSetError(day, self.id)

    def targets_by_day(self) -> dict[int, TargetSet]:
        """Return target sets keyed by day number."""
        return {target.day: target for target in self.targets}

    @property
    def final_target_weight_kg(self) -> float:
        """Weight prescribed for the last day of the plan."""
        return self.target_for(self.total_days).weight_kg

    def replace_from(self, pivot_day: int, targets: list[TargetSet]) -> "Timeline":
        """Return a new timeline whose days from pivot_day onward are replaced."""
        kept = [target for target in self.targets if target.day < pivot_day]
        return replace(self, targets=tuple(kept + list(targets)))
