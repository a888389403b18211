"""Rule-based alerts for the active day of a cut.

Each rule is a pure function of an ``AlertContext`` returning at most one
alert. ``generate`` runs the whole rule set and orders the results by
severity; ``filter_top`` trims them for display.
"""

from collections.abc import Callable
from dataclasses import dataclass

from weight_cut_tracker.domain.alerts import Alert, AlertType
from weight_cut_tracker.domain.analytics import Phase
from weight_cut_tracker.services.compliance import ratio
from weight_cut_tracker.services.phases import guidance_for

WEIGHT_CRITICAL_OVER_KG = 1.0
WEIGHT_ON_TARGET_KG = 0.3
RAPID_DAILY_LOSS_KG = 1.5
CALORIES_OVER_RATIO = 1.10
CALORIES_MIN_RATIO = 0.85
WATER_CRITICAL_RATIO = 0.5
WATER_LOW_RATIO = 0.8
WATER_COMPLETE_RATIO = 1.0
TIME_CRITICAL_DAYS = 2
TIME_CRITICAL_REMAINING_KG = 2.0
TIME_WARNING_DAYS = 5
TIME_WARNING_REMAINING_KG = 1.0
DEFAULT_ALERT_LIMIT = 3
WEIGHT_DIFF_DIGITS = 2

FINAL_PUSH_TARGET_PHASE = "FINAL_PUSH"
FINAL_PUSH_PHASES = frozenset({Phase.WATER_CUT, Phase.WEIGH_IN})

ALERT_COLORS = {
    AlertType.CRITICAL: "#F44336",
    AlertType.WARNING: "#FF9800",
    AlertType.SUCCESS: "#4CAF50",
    AlertType.INFO: "#2196F3",
}
FINAL_PUSH_COLOR = "#9C27B0"


@dataclass(frozen=True)
class AlertContext:
    """Current-day numbers and history the alert rules read."""

    day_number: int
    total_days: int
    phase: Phase
    current_weight: float | None = None
    yesterday_weight: float | None = None
    target_weight_today: float | None = None
    target_weight_final: float | None = None
    actual_calories: float | None = None
    target_calories: float | None = None
    actual_water: float | None = None
    target_water: float | None = None
    target_phase: str | None = None

    @property
    def days_remaining(self) -> int:
        """Days left after the current plan day."""
        return self.total_days - self.day_number


AlertRule = Callable[[AlertContext], Alert | None]


def _alert(
    alert_id: str,
    alert_type: AlertType,
    title: str,
    message: str,
    action: str | None = None,
    color: str | None = None,
) -> Alert:
    return Alert(
        id=alert_id,
        type=alert_type,
        title=title,
        message=message,
        color=color or ALERT_COLORS[alert_type],
        action=action,
    )


def weight_vs_today_target(context: AlertContext) -> Alert | None:
    """Compare the current weight to today's target weight."""
    if context.current_weight is None or not context.target_weight_today:
        return None
    diff = round(
        context.current_weight - context.target_weight_today, WEIGHT_DIFF_DIGITS
    )
    target = context.target_weight_today
    if diff > WEIGHT_CRITICAL_OVER_KG:
        return _alert(
            "weight_above",
            AlertType.CRITICAL,
            "Weight Above Target",
            f"You are {diff:.1f}kg above today's target ({target}kg). "
            "Cut calories and add cardio.",
            action="Review today's plan",
        )
    if diff > WEIGHT_ON_TARGET_KG:
        return _alert(
            "weight_slightly_above",
            AlertType.WARNING,
            "Weight Slightly High",
            f"You are {diff:.1f}kg over target. "
            "Keep the calorie deficit and stay hydrated.",
            action="Adjust intake",
        )
    if diff >= -WEIGHT_ON_TARGET_KG:
        return _alert(
            "weight_on_track",
            AlertType.SUCCESS,
            "Weight On Target",
            f"Great work! You are at {context.current_weight:.1f}kg, "
            f"meeting your {target}kg target.",
            action="Keep it up",
        )
    return _alert(
        "weight_below",
        AlertType.WARNING,
        "Weight Below Target",
        f"You are {abs(diff):.1f}kg under target. "
        "Make sure you are not losing too fast.",
        action="Monitor closely",
    )


def day_over_day_weight_change(context: AlertContext) -> Alert | None:
    """Compare today's weight to yesterday's."""
    if (
        context.day_number <= 1
        or context.current_weight is None
        or context.yesterday_weight is None
    ):
        return None
    daily_loss = round(
        context.yesterday_weight - context.current_weight, WEIGHT_DIFF_DIGITS
    )
    if daily_loss < 0:
        return _alert(
            "weight_gain",
            AlertType.CRITICAL,
            "Weight Gain Detected",
            f"You gained {abs(daily_loss):.1f}kg since yesterday. "
            "Check your food and water retention.",
            action="Immediate action required",
        )
    if daily_loss > RAPID_DAILY_LOSS_KG:
        return _alert(
            "rapid_loss",
            AlertType.WARNING,
            "Rapid Loss",
            f"You lost {daily_loss:.1f}kg in one day. "
            "Check hydration and do not overtrain.",
            action="Reduce intensity",
        )
    return None


def calories_vs_target(context: AlertContext) -> Alert | None:
    """Compare today's calories to the calorie target."""
    value = ratio(context.actual_calories, context.target_calories)
    if value is None:
        return None
    actual = round(context.actual_calories or 0)
    target = round(context.target_calories or 0)
    if value > CALORIES_OVER_RATIO:
        return _alert(
            "calories_over",
            AlertType.WARNING,
            "Calories Exceeded",
            f"You ate {actual} cal, {actual - target} over your {target} cal target.",
            action="Adjust your next meal",
        )
    if value >= CALORIES_MIN_RATIO:
        return _alert(
            "calories_good",
            AlertType.SUCCESS,
            "Calories In Range",
            f"Calorie intake on target: {actual}/{target} cal.",
            action="Stick to the plan",
        )
    if value > 0:
        return _alert(
            "calories_low",
            AlertType.INFO,
            "Calories Low",
            f"You have only eaten {actual}/{target} cal. Consider a small meal.",
            action="Increase intake",
        )
    return None


def hydration_vs_target(context: AlertContext) -> Alert | None:
    """Compare today's water intake to the hydration target."""
    value = ratio(context.actual_water, context.target_water)
    if value is None:
        return None
    actual = context.actual_water or 0.0
    target = context.target_water
    if value < WATER_CRITICAL_RATIO:
        return _alert(
            "water_critical",
            AlertType.CRITICAL,
            "Critical Hydration",
            f"You have only had {actual:.1f}L of {target}L. "
            "Dehydration hurts performance.",
            action="Drink water now",
        )
    if value < WATER_LOW_RATIO:
        return _alert(
            "water_low",
            AlertType.WARNING,
            "Increase Hydration",
            f"You are at {actual:.1f}L of {target}L. Drink more water.",
            action="Drink more water",
        )
    if value >= WATER_COMPLETE_RATIO:
        return _alert(
            "water_complete",
            AlertType.SUCCESS,
            "Hydration Goal Met",
            f"Excellent! You reached {actual:.1f}L of water.",
            action="Goal met",
        )
    return None


def time_remaining_vs_weight_remaining(context: AlertContext) -> Alert | None:
    """Flag too much weight left for the days left."""
    if context.current_weight is None or context.target_weight_final is None:
        return None
    days = context.days_remaining
    remaining = round(
        context.current_weight - context.target_weight_final, WEIGHT_DIFF_DIGITS
    )
    if days <= TIME_CRITICAL_DAYS and remaining > TIME_CRITICAL_REMAINING_KG:
        return _alert(
            "time_critical",
            AlertType.CRITICAL,
            "Time Critical",
            f"Only {days} days left with {remaining:.1f}kg to go. "
            "Consider final-stage strategies.",
            action="Emergency plan",
        )
    if days <= TIME_WARNING_DAYS and remaining > TIME_WARNING_REMAINING_KG:
        return _alert(
            "time_warning",
            AlertType.WARNING,
            "Limited Time",
            f"{days} days left to lose {remaining:.1f}kg. Stay disciplined.",
            action="Speed up progress",
        )
    return None


def is_final_push(context: AlertContext) -> bool:
    """Whether today belongs to the last push before weigh-in."""
    target_phase = (context.target_phase or "").upper()
    if target_phase == FINAL_PUSH_TARGET_PHASE:
        return True
    return context.phase in FINAL_PUSH_PHASES


def phase_context(context: AlertContext) -> Alert | None:
    """Informational alert during the final push."""
    if not is_final_push(context):
        return None
    guidance = guidance_for(context.phase)
    return _alert(
        "final_push",
        AlertType.INFO,
        "Final Phase",
        "You are in the final phase. Maximum focus and adherence to the plan. "
        f"Keep sodium under {guidance.sodium_limit_mg}mg "
        f"and hydration at {guidance.hydration_liters}L.",
        action="Last push",
        color=FINAL_PUSH_COLOR,
    )


RULES: tuple[AlertRule, ...] = (
    weight_vs_today_target,
    day_over_day_weight_change,
    calories_vs_target,
    hydration_vs_target,
    time_remaining_vs_weight_remaining,
    phase_context,
)


def generate(
    context: AlertContext, rules: tuple[AlertRule, ...] = RULES
) -> list[Alert]:
    """Run every rule and sort the alerts by severity."""
    alerts = [alert for rule in rules if (alert := rule(context)) is not None]
    return sorted(alerts, key=lambda alert: alert.type.priority)


def filter_top(alerts: list[Alert], limit: int = DEFAULT_ALERT_LIMIT) -> list[Alert]:
    """Keep critical alerts first, then warnings, then the rest, up to limit."""
    critical = [alert for alert in alerts if alert.type is AlertType.CRITICAL]
    warning = [alert for alert in alerts if alert.type is AlertType.WARNING]
    others = [
        alert
        for alert in alerts
        if alert.type not in (AlertType.CRITICAL, AlertType.WARNING)
    ]
    return (critical + warning + others)[: max(limit, 0)]
