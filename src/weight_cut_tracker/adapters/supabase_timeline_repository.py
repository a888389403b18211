"""Supabase repository for generated daily timelines."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from supabase import Client

from weight_cut_tracker.adapters.row_fields import (
    first_present,
    optional_float,
    required_float,
)
from weight_cut_tracker.domain.plans import Macros, TargetSet, Timeline
from weight_cut_tracker.services.dashboard import TimelineRepository


@dataclass
class SupabaseTimelineRepository(TimelineRepository):
    """Supabase implementation for timeline reads."""

    client: Client

    def get_active_timeline(self, user_id: UUID) -> Timeline | None:
        """Return the active timeline for a user, if present."""
        response = (
            self.client.table("daily_timelines")
            .select("id, start_date, total_days, timeline_data")
            .eq("user_id", str(user_id))
            .eq("status", "active")
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_timeline(response.data[0])


def _parse_timeline(row: dict[str, Any]) -> Timeline:
    data = row.get("timeline_data") or {}
    days = data.get("days") or []
    if not isinstance(days, list):
        raise RuntimeError("Timeline days is not a list")
    total_days = first_present(row, "total_days", "totalDays")
    return Timeline(
        id=str(row["id"]),
        start_date=str(first_present(row, "start_date", "startDate") or ""),
        total_days=int(total_days) if total_days is not None else len(days),
        targets=tuple(_parse_day(day) for day in days),
    )


def _parse_day(day: dict[str, Any]) -> TargetSet:
    targets = day.get("targets") or {}
    macros = targets.get("macros") or {}
    return TargetSet(
        day=int(day["day"]),
        phase=str(day.get("phase") or ""),
        weight_kg=required_float(targets, "weightKg", "weight_kg"),
        calories_intake=required_float(targets, "caloriesIntake", "calories_intake"),
        water_intake_liters=required_float(
            targets, "waterIntakeLiters", "water_intake_liters"
        ),
        macros=Macros(
            protein_grams=optional_float(macros, "proteinGrams", "protein_grams")
            or 0.0,
            carb_grams=optional_float(macros, "carbGrams", "carbsGrams", "carb_grams")
            or 0.0,
            fat_grams=optional_float(macros, "fatGrams", "fatsGrams", "fat_grams")
            or 0.0,
        ),
        cardio_minutes=optional_float(targets, "cardioMinutes", "cardio_minutes")
        or 0.0,
        sauna_suit_required=bool(targets.get("saunaSuitRequired", False)),
    )
