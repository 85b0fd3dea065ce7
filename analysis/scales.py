"""Scale Assignment: map unit families onto the chart's two value axes.

The policy table is the single place a unit suffix is written down; axis tick
labels and tooltip entries are both formatted from it.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from .dto import MetricSeries
from .units import ConfigError, ConfigErrorReason, UnitFamily, format_number


class AxisId(StrEnum):
    """Value axis identifiers, matching the renderer's scale ids."""

    primary = "y1"
    secondary = "y2"


@dataclass(frozen=True, slots=True)
class AxisRule:
    """Placement and formatting rule for one value axis.

    Args:
        axis_id: Target value axis.
        suffix: Canonical unit suffix (e.g. `°C`).
        tick_separator: Text between the number and suffix in tick labels.
        title: Axis title.
        draw_grid: Whether the axis draws gridlines across the plot area.
    """

    axis_id: AxisId
    suffix: str
    tick_separator: str
    title: str
    draw_grid: bool = True

    def format_tick(self, value: float) -> str:
        """Format an axis tick label, e.g. `5°C` or `10 km/h`."""

        return f"{format_number(value)}{self.tick_separator}{self.suffix}"

    def format_tooltip_value(self, value: float) -> str:
        """Format a hovered value, e.g. `21.3 °C`; NaN renders as `no data`."""

        if math.isnan(value):
            return format_number(value)
        return f"{format_number(value)} {self.suffix}"


AXIS_POLICY: Final[Mapping[UnitFamily, AxisRule]] = MappingProxyType(
    {
        UnitFamily.temperature: AxisRule(
            axis_id=AxisId.primary,
            suffix="°C",
            tick_separator="",
            title="Temperature",
        ),
        UnitFamily.speed: AxisRule(
            axis_id=AxisId.secondary,
            suffix="km/h",
            tick_separator=" ",
            title="Wind speed",
            draw_grid=False,
        ),
    }
)


@dataclass(frozen=True, slots=True)
class AxisAssignment:
    """Resolved unit family → axis rules for one dataset."""

    rules: Mapping[UnitFamily, AxisRule]

    def rule_for(self, family: UnitFamily) -> AxisRule:
        """Return the axis rule for a unit family.

        Raises:
            ConfigError: When the family was not assigned an axis.
        """

        rule = self.rules.get(family)
        if rule is None:
            raise ConfigError(
                f"No value axis assigned for unit family {family!s}.",
                reason=ConfigErrorReason.unknown_unit,
            )
        return rule

    def axis_for(self, family: UnitFamily) -> AxisId:
        """Return the axis id for a unit family."""

        return self.rule_for(family).axis_id

    def axes(self) -> tuple[AxisRule, ...]:
        """Return the assigned axis rules, primary first, one per axis id."""

        by_axis: dict[AxisId, AxisRule] = {}
        for rule in self.rules.values():
            by_axis.setdefault(rule.axis_id, rule)
        return tuple(by_axis[axis_id] for axis_id in AxisId if axis_id in by_axis)


def assign_axes(
    series: Iterable[MetricSeries],
    *,
    policy: Mapping[UnitFamily, AxisRule] = AXIS_POLICY,
) -> AxisAssignment:
    """Assign every series' unit family to a value axis.

    Args:
        series: Series to place (only `unit_family` is read).
        policy: Fixed unit family → axis rule table.

    Returns:
        AxisAssignment covering exactly the families present in `series`.

    Raises:
        ConfigError: When a series' unit family is missing from `policy`.
    """

    return assign_unit_families((entry.unit_family for entry in series), policy=policy)


def assign_unit_families(
    families: Iterable[UnitFamily],
    *,
    policy: Mapping[UnitFamily, AxisRule] = AXIS_POLICY,
) -> AxisAssignment:
    """Assign unit families to value axes (see `assign_axes`)."""

    rules: dict[UnitFamily, AxisRule] = {}
    for family in families:
        rule = policy.get(family)
        if rule is None:
            raise ConfigError(
                f"Unit family {family!s} has no axis policy entry.",
                reason=ConfigErrorReason.unknown_unit,
            )
        rules[family] = rule
    return AxisAssignment(rules=MappingProxyType(rules))
