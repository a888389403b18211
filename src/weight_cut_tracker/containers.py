"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from weight_cut_tracker.adapters.readjustment_client import HttpxReadjustmentClient
from weight_cut_tracker.adapters.supabase_plan_repository import (
    SupabasePlanRepository,
)
from weight_cut_tracker.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from weight_cut_tracker.adapters.supabase_timeline_repository import (
    SupabaseTimelineRepository,
)
from weight_cut_tracker.config import Settings
from weight_cut_tracker.services.dashboard import DashboardService
from weight_cut_tracker.services.plan_status import PlanStatusEvaluator
from weight_cut_tracker.services.readjustment import ReadjustmentService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    dashboard_service: DashboardService
    readjustment_service: ReadjustmentService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    dashboard_service = DashboardService(
        plan_repository=SupabasePlanRepository(supabase_client),
        timeline_repository=SupabaseTimelineRepository(supabase_client),
        progress_repository=SupabaseProgressRepository(supabase_client),
        plan_status_evaluator=PlanStatusEvaluator(
            on_track_tolerance_kg=resolved_settings.plan_on_track_tolerance_kg,
            critical_deviation_kg=resolved_settings.plan_critical_deviation_kg,
        ),
        alert_limit=resolved_settings.alert_limit,
    )
    readjustment_client = (
        HttpxReadjustmentClient.create(resolved_settings.readjustment_base_url)
        if resolved_settings.readjustment_base_url
        else None
    )
    readjustment_service = (
        ReadjustmentService(readjustment_client) if readjustment_client else None
    )

    async def close_resources() -> None:
        if readjustment_client is not None:
            await readjustment_client.close()

    return AppContainer(
        settings=resolved_settings,
        dashboard_service=dashboard_service,
        readjustment_service=readjustment_service,
        close_resources=close_resources,
    )
