"""Supabase repository for weight cut plans."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import Client

from weight_cut_tracker.adapters.row_fields import first_present, required_float
from weight_cut_tracker.domain.plans import WeightCutPlan
from weight_cut_tracker.services.dashboard import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for plan reads."""

    client: Client

    def get_active_plan(self, user_id: UUID) -> WeightCutPlan | None:
        """Return the most recently created plan for a user."""
        response = (
            self.client.table("weight_cut_plans")
            .select("id, analysis_request, created_at")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, Any]) -> WeightCutPlan:
    request = row.get("analysis_request") or {}
    created_raw = first_present(row, "created_at", "createdAt")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return WeightCutPlan(
        id=str(row["id"]),
        start_weight_kg=required_float(
            request, "currentWeightKg", "startWeightKg", "current_weight_kg"
        ),
        target_weight_kg=required_float(
            request, "targetWeightKg", "target_weight_kg"
        ),
        created_at=created_at,
    )
