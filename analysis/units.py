"""Unit families and unit-suffix helpers.

Weather exports annotate metric columns with a unit suffix in parentheses
(e.g. `temperature_2m (°C)`). Metrics sharing a compatible unit belong to the
same `UnitFamily` and therefore share a value axis on the chart.

This module is pure (no Django imports) and fails fast when a unit is outside
the supported table: mixing incompatible units on one axis is never silent.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum
from typing import Final


class UnitFamily(StrEnum):
    """Group of metrics measured in compatible units."""

    temperature = "temperature"
    speed = "speed"


class ConfigErrorReason(StrEnum):
    """Reasons a chart configuration is rejected."""

    unknown_unit = "unknown_unit"
    unknown_style = "unknown_style"
    invalid_config = "invalid_config"


class ConfigError(ValueError):
    """Raised when metrics, axes, or styles are configured inconsistently.

    This is a programmer-facing defect (e.g. a new metric without an axis
    policy entry) and is expected to surface when the chart is built.
    """

    def __init__(self, message: str, *, reason: ConfigErrorReason) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description.
            reason: Machine-readable failure reason.
        """

        super().__init__(message)
        self.reason = reason


UNIT_FAMILY_BY_SUFFIX: Final[dict[str, UnitFamily]] = {
    "°C": UnitFamily.temperature,
    "°F": UnitFamily.temperature,
    "km/h": UnitFamily.speed,
    "m/s": UnitFamily.speed,
    "mph": UnitFamily.speed,
    "kn": UnitFamily.speed,
}

_UNIT_SUFFIX_RE = re.compile(r"^(?P<name>.*?)\s*\((?P<unit>[^()]*)\)\s*$")


def split_unit_suffix(column: str) -> tuple[str, str | None]:
    """Split a header column into its metric key and unit suffix.

    Args:
        column: Raw header cell, e.g. `wind_speed_10m (km/h)`.

    Returns:
        `(metric_key, unit)` where unit is None when the column carries no
        parenthesized suffix.
    """

    cleaned = column.strip()
    match = _UNIT_SUFFIX_RE.match(cleaned)
    if match is None or not match.group("name"):
        return cleaned, None
    unit = match.group("unit").strip()
    return match.group("name"), unit or None


def unit_family_for_suffix(unit: str) -> UnitFamily:
    """Return the UnitFamily for a header unit suffix.

    Raises:
        ConfigError: When the suffix is not in `UNIT_FAMILY_BY_SUFFIX`.
    """

    family = UNIT_FAMILY_BY_SUFFIX.get(unit.strip())
    if family is None:
        raise ConfigError(f"Unknown unit suffix: {unit!r}.", reason=ConfigErrorReason.unknown_unit)
    return family


def format_number(value: float) -> str:
    """Format a float the way the browser prints numbers.

    Integral values drop the fractional part (`10.0` -> `10`), other values use
    the shortest round-tripping representation (`21.3`).
    """

    value = float(value)
    if math.isnan(value):
        return "no data"
    if value.is_integer():
        return str(int(value))
    return repr(value)
