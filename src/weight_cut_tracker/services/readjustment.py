"""Contract checks around the external plan readjustment collaborator."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from weight_cut_tracker.domain.analytics import (
    PlanStatus,
    PlanStatusBasis,
    PlanStatusResult,
)
from weight_cut_tracker.domain.errors import ReadjustmentContractError
from weight_cut_tracker.domain.plans import TargetSet, Timeline

FINAL_WEIGHT_TOLERANCE_KG = 0.01

_READJUST_STATUSES = frozenset({PlanStatus.BEHIND, PlanStatus.CRITICAL})

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadjustmentRequest:
    """Input handed to the readjustment collaborator."""

    last_completed_day: int
    current_actual_weight: float
    timeline: Timeline


class ReadjustmentClient(Protocol):
    """Interface for the service that regenerates remaining targets."""

    async def readjust(self, request: ReadjustmentRequest) -> list[TargetSet]:
        """Return replacement targets for the days after the last completed one."""


def should_readjust(plan_status: PlanStatusResult) -> bool:
    """Whether a weight-based plan status justifies regenerating targets."""
    return (
        plan_status.basis is PlanStatusBasis.WEIGHT
        and plan_status.status in _READJUST_STATUSES
    )


def validate_replacement(
    timeline: Timeline, last_completed_day: int, targets: list[TargetSet]
) -> None:
    """Raise if replacement targets break the readjustment contract."""
    expected_days = list(range(last_completed_day + 1, timeline.total_days + 1))
    returned_days = sorted(target.day for target in targets)
    if returned_days != expected_days:
        raise ReadjustmentContractError(
            f"Replacement must cover days {last_completed_day + 1}"
            f"..{timeline.total_days}, got {returned_days}"
        )
    final = max(targets, key=lambda target: target.day)
    if not math.isclose(
        final.weight_kg,
        timeline.final_target_weight_kg,
        abs_tol=FINAL_WEIGHT_TOLERANCE_KG,
    ):
        raise ReadjustmentContractError(
            f"Final target weight changed from {timeline.final_target_weight_kg}"
            f" to {final.weight_kg}"
        )


@dataclass
class ReadjustmentService:
    """Request and validate a regenerated tail of the timeline."""

    client: ReadjustmentClient

    async def propose(
        self, timeline: Timeline, last_completed_day: int, current_weight: float
    ) -> Timeline:
        """Return a new timeline with days after last_completed_day replaced."""
        if not 0 <= last_completed_day < timeline.total_days:
            raise ReadjustmentContractError(
                f"Cannot readjust after day {last_completed_day} "
                f"of a {timeline.total_days}-day timeline"
            )
        request = ReadjustmentRequest(
            last_completed_day=last_completed_day,
            current_actual_weight=current_weight,
            timeline=timeline,
        )
        targets = await self.client.readjust(request)
        validate_replacement(timeline, last_completed_day, targets)
        _logger.info(
            "Readjusted timeline %s from day %s (%s days)",
            timeline.id,
            last_completed_day + 1,
            len(targets),
        )
        return timeline.replace_from(last_completed_day + 1, targets)
