"""Domain models produced by the progress analytics engine."""

from dataclasses import dataclass
from enum import StrEnum

from weight_cut_tracker.domain.alerts import Alert
from weight_cut_tracker.domain.plans import TargetSet


class DayStatus(StrEnum):
    """Where today falls relative to the timeline."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class DayState:
    """Position of a calendar day inside a timeline."""

    status: DayStatus
    total_days: int
    day_index: int | None = None

    @property
    def day_number(self) -> int | None:
        """1-indexed plan day, only while the plan is active."""
        if self.day_index is None:
            return None
        return self.day_index + 1

    @property
    def days_remaining(self) -> int:
        """Days left after today's plan day."""
        if self.status is DayStatus.PENDING:
            return self.total_days
        if self.status is DayStatus.COMPLETED:
            return 0
        return self.total_days - (self.day_index or 0) - 1


class Phase(StrEnum):
    """Named segment of a cut, keyed off days remaining."""

    INITIAL = "INITIAL"
    FINAL_WEEK = "FINAL_WEEK"
    WATER_CUT = "WATER_CUT"
    WEIGH_IN = "WEIGH_IN"
    COMPLETE = "COMPLETE"


@dataclass(frozen=True)
class PhaseGuidance:
    """Generic per-phase guidance used when no target set applies."""

    description: str
    sodium_limit_mg: int
    hydration_liters: float
    calorie_factor: float


@dataclass(frozen=True)
class FallbackTargets:
    """Generic daily targets derived from phase guidance alone."""

    calories: int
    water_liters: float
    sodium_limit_mg: int


@dataclass(frozen=True)
class MetricCompliance:
    """Average compliance for one metric across historical days."""

    percentage: int | None
    days_counted: int

    @property
    def available(self) -> bool:
        """Whether any day contributed to this metric."""
        return self.percentage is not None


@dataclass(frozen=True)
class ComplianceSnapshot:
    """Per-metric compliance plus the aggregate score.

    ``score`` is ``None`` when no metric has data, never ``0``.
    """

    calories: MetricCompliance
    water: MetricCompliance
    score: int | None


class ComplianceLevel(StrEnum):
    """Display band for a compliance percentage."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class DayCompliance:
    """Today's per-metric percentages against the day's targets."""

    calories: int | None
    protein: int | None
    carbs: int | None
    fats: int | None
    water: int | None


@dataclass(frozen=True)
class WeightProgress:
    """Weight lost so far against the plan's start and target."""

    start_weight_kg: float
    current_weight_kg: float
    target_weight_kg: float
    lost_kg: float
    remaining_kg: float
    percentage: float
    has_weight_history: bool


class PlanStatus(StrEnum):
    """Trajectory of the cut compared to the plan."""

    AHEAD = "ahead"
    ON_TRACK = "on_track"
    BEHIND = "behind"
    CRITICAL = "critical"


class PlanStatusBasis(StrEnum):
    """Which signal produced a plan status."""

    WEIGHT = "weight"
    COMPLIANCE = "compliance"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class PlanStatusResult:
    """Plan status with the deviation that produced it."""

    status: PlanStatus | None
    basis: PlanStatusBasis
    deviation: float | None = None
    is_ahead: bool = False


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard renders for one refresh."""

    day_state: DayState
    phase: Phase
    guidance: PhaseGuidance
    today_targets: TargetSet | None
    fallback_targets: FallbackTargets | None
    compliance: ComplianceSnapshot
    compliance_level: ComplianceLevel | None
    today_compliance: DayCompliance | None
    weight_progress: WeightProgress
    streak: int
    plan_status: PlanStatusResult
    alerts: list[Alert]
