"""Errors raised for structurally invalid plan input."""


class WeightCutError(Exception):
    """Base class for weight cut domain errors."""


class InvalidDateError(WeightCutError, ValueError):
    """Raised when a timeline start date cannot be parsed into a calendar date."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid timeline start date: {value!r}")
        self.value = value


class MissingTargetSetError(WeightCutError, LookupError):
    """Raised when a day inside the timeline has no target set."""

    def __init__(self, day: int, timeline_id: str | None = None) -> None:
        location = f" in timeline {timeline_id}" if timeline_id else ""
        super().__init__(f"No target set for day {day}{location}")
        self.day = day
        self.timeline_id = timeline_id


class ReadjustmentContractError(WeightCutError):
    """Raised when a readjusted schedule breaks the replacement contract."""
