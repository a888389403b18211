"""HTTP client for the external plan readjustment service."""

from dataclasses import dataclass

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from weight_cut_tracker.domain.errors import ReadjustmentContractError
from weight_cut_tracker.domain.plans import Macros, TargetSet
from weight_cut_tracker.services.readjustment import (
    ReadjustmentClient,
    ReadjustmentRequest,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MacrosPayload(_CamelModel):
    """Macro targets as returned by the readjustment service."""

    protein_grams: float = Field(ge=0)
    carb_grams: float = Field(ge=0)
    fat_grams: float = Field(ge=0)


class TargetsPayload(_CamelModel):
    """One day's targets as returned by the readjustment service."""

    weight_kg: float = Field(gt=0)
    calories_intake: float = Field(ge=0)
    water_intake_liters: float = Field(ge=0)
    macros: MacrosPayload
    cardio_minutes: float = Field(default=0, ge=0)
    sauna_suit_required: bool = False


class DayPayload(BaseModel):
    """Single regenerated day."""

    day: int = Field(ge=1)
    phase: str = ""
    targets: TargetsPayload


class ReadjustmentResponse(BaseModel):
    """Structured output of the readjustment service."""

    days: list[DayPayload]


@dataclass
class HttpxReadjustmentClient(ReadjustmentClient):
    """HTTPX-backed readjustment client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxReadjustmentClient":
        """Create a readjustment client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def readjust(self, request: ReadjustmentRequest) -> list[TargetSet]:
        """Post the request and return the regenerated target sets."""
        url = f"{self.base_url}/weight-cut/readjust"
        response = await self.http_client.post(
            url,
            json=_request_payload(request),
            timeout=30,
        )
        response.raise_for_status()
        try:
            parsed = ReadjustmentResponse.model_validate(response.json())
        except ValidationError as exc:
            raise ReadjustmentContractError(
                f"Malformed readjustment response: {exc.error_count()} errors"
            ) from exc
        return [_to_target_set(day) for day in parsed.days]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _request_payload(request: ReadjustmentRequest) -> dict[str, object]:
    timeline = request.timeline
    return {
        "timelineId": timeline.id,
        "startDate": str(timeline.start_date),
        "totalDays": timeline.total_days,
        "lastCompletedDay": request.last_completed_day,
        "currentActualWeight": request.current_actual_weight,
        "finalTargetWeight": timeline.final_target_weight_kg,
        "days": [
            {
                "day": target.day,
                "phase": target.phase,
                "targets": {
                    "weightKg": target.weight_kg,
                    "caloriesIntake": target.calories_intake,
                    "waterIntakeLiters": target.water_intake_liters,
                    "macros": {
                        "proteinGrams": target.macros.protein_grams,
                        "carbGrams": target.macros.carb_grams,
                        "fatGrams": target.macros.fat_grams,
                    },
                    "cardioMinutes": target.cardio_minutes,
                    "saunaSuitRequired": target.sauna_suit_required,
                },
            }
            for target in timeline.targets
        ],
    }


def _to_target_set(day: DayPayload) -> TargetSet:
    targets = day.targets
    return TargetSet(
        day=day.day,
        phase=day.phase,
        weight_kg=targets.weight_kg,
        calories_intake=targets.calories_intake,
        water_intake_liters=targets.water_intake_liters,
        macros=Macros(
            protein_grams=targets.macros.protein_grams,
            carb_grams=targets.macros.carb_grams,
            fat_grams=targets.macros.fat_grams,
        ),
        cardio_minutes=targets.cardio_minutes,
        sauna_suit_required=targets.sauna_suit_required,
    )
