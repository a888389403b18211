"""Helpers for reading storage rows whose keys come in several spellings."""

from collections.abc import Mapping
from typing import Any


def first_present(row: Mapping[str, Any], *names: str) -> Any | None:
    """Return the value of the first key that is present and not None."""
    for name in names:
        value = row.get(name)
        if value is not None:
            return value
    return None


def optional_float(row: Mapping[str, Any], *names: str) -> float | None:
    """Read a numeric field, keeping "not recorded" as None."""
    value = first_present(row, *names)
    if value is None or value == "":
        return None
    return float(value)


def required_float(row: Mapping[str, Any], *names: str) -> float:
    """Read a numeric field that must be present."""
    value = optional_float(row, *names)
    if value is None:
        raise RuntimeError(f"Missing required field: {names[0]}")
    return value
