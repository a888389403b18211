"""Alert value objects."""

from dataclasses import dataclass
from enum import StrEnum


class AlertType(StrEnum):
    """Alert severity, declared in priority order."""

    CRITICAL = "critical"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"

    @property
    def priority(self) -> int:
        """Sort key, lower sorts first."""
        return list(AlertType).index(self)


@dataclass(frozen=True)
class Alert:
    """Single alert shown on the dashboard."""

    id: str
    type: AlertType
    title: str
    message: str
    color: str
    action: str | None = None
