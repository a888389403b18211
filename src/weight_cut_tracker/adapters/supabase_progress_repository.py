"""Supabase repository for daily progress records."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from supabase import Client

from weight_cut_tracker.adapters.row_fields import first_present, optional_float
from weight_cut_tracker.domain.progress import DailyProgressRecord
from weight_cut_tracker.services.dashboard import ProgressRepository


@dataclass
class SupabaseProgressRepository(ProgressRepository):
    """Supabase implementation for progress reads."""

    client: Client

    def list_progress(
        self, user_id: UUID, timeline_id: str
    ) -> list[DailyProgressRecord]:
        """Return progress rows for a timeline ordered by day."""
        response = (
            self.client.table("daily_progress")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("daily_timeline_id", timeline_id)
            .order("day_number", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, Any]) -> DailyProgressRecord:
    day_number = first_present(row, "day_number", "dayNumber")
    if day_number is None:
        raise RuntimeError("Progress row without a day number")
    return DailyProgressRecord(
        day_number=int(day_number),
        actual_weight_kg=optional_float(row, "actual_weight_kg", "actualWeightKg"),
        actual_calories=optional_float(row, "actual_calories", "actualCalories"),
        actual_water_liters=optional_float(
            row, "actual_water_liters", "actualWaterLiters"
        ),
        actual_protein_grams=optional_float(
            row, "actual_protein_grams", "actualProteinGrams"
        ),
        actual_carbs_grams=optional_float(
            row, "actual_carbs_grams", "actualCarbsGrams"
        ),
        actual_fats_grams=optional_float(row, "actual_fats_grams", "actualFatsGrams"),
    )
