"""Dashboard API endpoints with simple token auth."""

from __future__ import annotations

import logging
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from weight_cut_tracker.domain.errors import (
    InvalidDateError,
    MissingTargetSetError,
    ReadjustmentContractError,
)
from weight_cut_tracker.services.readjustment import should_readjust

if TYPE_CHECKING:
    from weight_cut_tracker.containers import AppContainer
    from weight_cut_tracker.domain.alerts import Alert
    from weight_cut_tracker.domain.analytics import (
        DashboardSnapshot,
        MetricCompliance,
        PlanStatusResult,
    )
    from weight_cut_tracker.domain.plans import TargetSet, Timeline

router = APIRouter(prefix="/users", tags=["dashboard"])

_logger = logging.getLogger(__name__)


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _load_snapshot(
    container: AppContainer, user_id: UUID, timezone: str | None, today: date | None
) -> tuple[Timeline, DashboardSnapshot]:
    timezone_name = timezone or container.settings.default_timezone
    if not _is_valid_timezone(timezone_name):
        raise HTTPException(status_code=422, detail="Unknown timezone")
    try:
        loaded = container.dashboard_service.load(
            user_id,
            timezone_name,
            today=today,
        )
    except (InvalidDateError, MissingTargetSetError) as exc:
        _logger.warning("Invalid timeline for user %s: %s", user_id, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if loaded is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No active weight cut plan"
        )
    return loaded


@router.get("/{user_id}/dashboard", dependencies=[Depends(require_api_token)])
async def get_dashboard(
    user_id: UUID,
    request: Request,
    timezone: str | None = None,
    today: date | None = None,
) -> dict[str, object]:
    """Return the dashboard snapshot for the user's active plan."""
    container: AppContainer = request.app.state.container
    _, snapshot = _load_snapshot(container, user_id, timezone, today)
    return serialize_snapshot(snapshot)


@router.post("/{user_id}/readjustment", dependencies=[Depends(require_api_token)])
async def request_readjustment(
    user_id: UUID,
    request: Request,
    timezone: str | None = None,
    today: date | None = None,
) -> dict[str, object]:
    """Request regenerated targets when the plan has fallen behind."""
    container: AppContainer = request.app.state.container
    timeline, snapshot = _load_snapshot(container, user_id, timezone, today)
    plan_status = _serialize_plan_status(snapshot.plan_status)
    day_number = snapshot.day_state.day_number
    if day_number is None or not should_readjust(snapshot.plan_status):
        return {"readjust": False, "plan_status": plan_status, "targets": []}
    if container.readjustment_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Readjustment service is not configured",
        )
    last_completed_day = day_number - 1
    try:
        adjusted = await container.readjustment_service.propose(
            timeline,
            last_completed_day,
            snapshot.weight_progress.current_weight_kg,
        )
    except ReadjustmentContractError as exc:
        _logger.warning("Rejected readjustment for user %s: %s", user_id, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc
    return {
        "readjust": True,
        "plan_status": plan_status,
        "targets": [
            _serialize_target_set(target)
            for target in adjusted.targets
            if target.day > last_completed_day
        ],
    }


def _is_valid_timezone(value: str) -> bool:
    try:
        ZoneInfo(value)
    except (KeyError, ValueError):
        return False
    return True


def serialize_snapshot(snapshot: DashboardSnapshot) -> dict[str, object]:
    """Convert a dashboard snapshot into a JSON-ready dict."""
    state = snapshot.day_state
    weight = snapshot.weight_progress
    guidance = snapshot.guidance
    fallback = snapshot.fallback_targets
    today = snapshot.today_compliance
    return {
        "day_state": {
            "status": state.status.value,
            "day_index": state.day_index,
            "day_number": state.day_number,
            "total_days": state.total_days,
            "days_remaining": state.days_remaining,
        },
        "phase": {
            "name": snapshot.phase.value,
            "description": guidance.description,
            "sodium_limit_mg": guidance.sodium_limit_mg,
            "hydration_liters": guidance.hydration_liters,
        },
        "today_targets": _serialize_target_set(snapshot.today_targets)
        if snapshot.today_targets
        else None,
        "fallback_targets": {
            "calories": fallback.calories,
            "water_liters": fallback.water_liters,
            "sodium_limit_mg": fallback.sodium_limit_mg,
        }
        if fallback
        else None,
        "compliance": {
            "calories": _serialize_metric(snapshot.compliance.calories),
            "water": _serialize_metric(snapshot.compliance.water),
            "score": snapshot.compliance.score,
            "level": snapshot.compliance_level.value
            if snapshot.compliance_level
            else None,
        },
        "today_compliance": {
            "calories": today.calories,
            "protein": today.protein,
            "carbs": today.carbs,
            "fats": today.fats,
            "water": today.water,
        }
        if today
        else None,
        "weight_progress": {
            "start_weight_kg": weight.start_weight_kg,
            "current_weight_kg": weight.current_weight_kg,
            "target_weight_kg": weight.target_weight_kg,
            "lost_kg": round(weight.lost_kg, 1),
            "remaining_kg": round(weight.remaining_kg, 1),
            "percentage": round(weight.percentage),
            "has_weight_history": weight.has_weight_history,
        },
        "streak": snapshot.streak,
        "plan_status": _serialize_plan_status(snapshot.plan_status),
        "alerts": [_serialize_alert(alert) for alert in snapshot.alerts],
    }


def _serialize_metric(metric: MetricCompliance) -> dict[str, object]:
    return {
        "percentage": metric.percentage,
        "available": metric.available,
        "days_counted": metric.days_counted,
    }


def _serialize_plan_status(result: PlanStatusResult) -> dict[str, object]:
    return {
        "status": result.status.value if result.status else None,
        "basis": result.basis.value,
        "deviation": round(result.deviation, 2)
        if result.deviation is not None
        else None,
        "is_ahead": result.is_ahead,
    }


def _serialize_alert(alert: Alert) -> dict[str, object]:
    return {
        "id": alert.id,
        "type": alert.type.value,
        "title": alert.title,
        "message": alert.message,
        "color": alert.color,
        "action": alert.action,
    }


def _serialize_target_set(target: TargetSet) -> dict[str, object]:
    return {
        "day": target.day,
        "phase": target.phase,
        "weight_kg": target.weight_kg,
        "calories_intake": target.calories_intake,
        "water_intake_liters": target.water_intake_liters,
        "macros": {
            "protein_grams": target.macros.protein_grams,
            "carb_grams": target.macros.carb_grams,
            "fat_grams": target.macros.fat_grams,
        },
        "cardio_minutes": target.cardio_minutes,
        "sauna_suit_required": target.sauna_suit_required,
    }
