"""Phase classification and generic per-phase guidance."""

from weight_cut_tracker.domain.analytics import (
    DayState,
    DayStatus,
    FallbackTargets,
    Phase,
    PhaseGuidance,
)

WEIGH_IN_MAX_DAYS = 1
WATER_CUT_MAX_DAYS = 3
FINAL_WEEK_MAX_DAYS = 7

DEFAULT_MAINTENANCE_CALORIES = 2000
DEFAULT_DEFICIT_CALORIES = 500

PHASE_GUIDANCE: dict[Phase, PhaseGuidance] = {
    Phase.INITIAL: PhaseGuidance(
        description="Initial phase - controlled deficit",
        sodium_limit_mg=2300,
        hydration_liters=3.0,
        calorie_factor=1.0,
    ),
    Phase.FINAL_WEEK: PhaseGuidance(
        description="Final week - intensive cut",
        sodium_limit_mg=1500,
        hydration_liters=2.5,
        calorie_factor=0.7,
    ),
    Phase.WATER_CUT: PhaseGuidance(
        description="Water cut in progress",
        sodium_limit_mg=300,
        hydration_liters=1.0,
        calorie_factor=0.5,
    ),
    Phase.WEIGH_IN: PhaseGuidance(
        description="Weigh-in day",
        sodium_limit_mg=300,
        hydration_liters=1.0,
        calorie_factor=0.5,
    ),
    Phase.COMPLETE: PhaseGuidance(
        description="Plan complete",
        sodium_limit_mg=2300,
        hydration_liters=3.0,
        calorie_factor=1.0,
    ),
}


def classify_phase(days_remaining: int) -> Phase:
    """Map days remaining in the plan to a phase."""
    if days_remaining <= 0:
        return Phase.COMPLETE
    if days_remaining <= WEIGH_IN_MAX_DAYS:
        return Phase.WEIGH_IN
    if days_remaining <= WATER_CUT_MAX_DAYS:
        return Phase.WATER_CUT
    if days_remaining <= FINAL_WEEK_MAX_DAYS:
        return Phase.FINAL_WEEK
    return Phase.INITIAL


def phase_for_day_state(state: DayState) -> Phase:
    """Return the phase for a timeline position."""
    if state.status is DayStatus.COMPLETED:
        return Phase.COMPLETE
    return classify_phase(state.days_remaining)


def guidance_for(phase: Phase) -> PhaseGuidance:
    """Return the generic guidance for a phase."""
    return PHASE_GUIDANCE[phase]


def fallback_targets(
    phase: Phase,
    maintenance_calories: float = DEFAULT_MAINTENANCE_CALORIES,
    deficit_calories: float = DEFAULT_DEFICIT_CALORIES,
) -> FallbackTargets:
    """Derive calorie and water targets when no target set is available."""
    guidance = PHASE_GUIDANCE[phase]
    scaled = round(maintenance_calories * guidance.calorie_factor)
    return FallbackTargets(
        calories=max(0, round(scaled - deficit_calories)),
        water_liters=guidance.hydration_liters,
        sodium_limit_mg=guidance.sodium_limit_mg,
    )
