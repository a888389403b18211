"""Trajectory status of a cut versus its plan."""

import logging
from dataclasses import dataclass

from weight_cut_tracker.domain.analytics import (
    PlanStatus,
    PlanStatusBasis,
    PlanStatusResult,
)

ON_TRACK_TOLERANCE_KG = 0.5
CRITICAL_DEVIATION_KG = 1.0
# Weights are recorded to 0.1 kg; differences are compared at this precision.
DEVIATION_DIGITS = 2

COMPLIANCE_AHEAD_MIN = 90
COMPLIANCE_ON_TRACK_MIN = 70
COMPLIANCE_BEHIND_MIN = 50

_logger = logging.getLogger(__name__)


@dataclass
class PlanStatusEvaluator:
    """Classify plan status from weight deviation, or compliance as a fallback.

    The deviation bands are absolute kilograms and do not scale with the size
    of the cut.
    """

    on_track_tolerance_kg: float = ON_TRACK_TOLERANCE_KG
    critical_deviation_kg: float = CRITICAL_DEVIATION_KG

    def evaluate(
        self,
        current_weight: float | None,
        expected_weight_today: float | None,
        has_weight_history: bool,
        compliance_score: int | None,
    ) -> PlanStatusResult:
        """Return the plan status and which signal produced it."""
        if (
            has_weight_history
            and current_weight is not None
            and expected_weight_today is not None
        ):
            deviation = round(current_weight - expected_weight_today, DEVIATION_DIGITS)
            return self._from_weight(deviation)
        if compliance_score is not None:
            return _from_compliance(compliance_score)
        _logger.debug("Plan status unavailable: no weight history or compliance")
        return PlanStatusResult(status=None, basis=PlanStatusBasis.INSUFFICIENT_DATA)

    def _from_weight(self, deviation: float) -> PlanStatusResult:
        is_ahead = deviation < 0
        if abs(deviation) <= self.on_track_tolerance_kg:
            status = PlanStatus.ON_TRACK
        elif is_ahead:
            status = PlanStatus.AHEAD
        elif deviation > self.critical_deviation_kg:
            status = PlanStatus.CRITICAL
        else:
            status = PlanStatus.BEHIND
        return PlanStatusResult(
            status=status,
            basis=PlanStatusBasis.WEIGHT,
            deviation=deviation,
            is_ahead=is_ahead,
        )


def _from_compliance(score: int) -> PlanStatusResult:
    if score >= COMPLIANCE_AHEAD_MIN:
        status = PlanStatus.AHEAD
    elif score >= COMPLIANCE_ON_TRACK_MIN:
        status = PlanStatus.ON_TRACK
    elif score >= COMPLIANCE_BEHIND_MIN:
        status = PlanStatus.BEHIND
    else:
        status = PlanStatus.CRITICAL
    return PlanStatusResult(
        status=status,
        basis=PlanStatusBasis.COMPLIANCE,
        is_ahead=status is PlanStatus.AHEAD,
    )
