"""Validation for ChartConfig values.

Configs are derived data, so validation only guards structural invariants the
renderer relies on; it is strict and fails fast.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from analysis.scales import AxisId

from .schema import ChartConfig


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart config."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart_config(config: ChartConfig) -> ValidationResult:
    """Validate a ChartConfig before it is handed to the renderer.

    Args:
        config: ChartConfig to validate.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not config.title.strip():
        warnings.append("ChartConfig.title is blank.")

    if not config.labels:
        errors.append("ChartConfig.labels must contain at least one timestamp.")

    if not config.datasets:
        errors.append("ChartConfig.datasets must contain at least one series.")

    axis_ids = [axis.id for axis in config.value_axes]
    if len(set(axis_ids)) != len(axis_ids):
        errors.append(f"ChartConfig.value_axes repeats an axis id: {[str(a) for a in axis_ids]}.")
    if AxisId.primary not in axis_ids:
        errors.append("ChartConfig.value_axes must include the primary axis.")

    if config.crosshair.axis_id not in axis_ids:
        errors.append(f"ChartConfig.crosshair references unknown axis {config.crosshair.axis_id!s}.")

    seen_labels: set[str] = set()
    for idx, dataset in enumerate(config.datasets):
        if dataset.label in seen_labels:
            errors.append(f"ChartConfig.datasets[{idx}] repeats label {dataset.label!r}.")
        seen_labels.add(dataset.label)

        if len(dataset.values) != len(config.labels):
            errors.append(
                f"ChartConfig.datasets[{idx}] has {len(dataset.values)} values for {len(config.labels)} labels."
            )
        axis = config.value_axis(dataset.axis_id)
        if axis is None:
            errors.append(f"ChartConfig.datasets[{idx}] references unknown axis {dataset.axis_id!s}.")
        elif axis.rule.suffix != dataset.unit_suffix:
            errors.append(
                f"ChartConfig.datasets[{idx}] unit {dataset.unit_suffix!r} does not match axis "
                f"{dataset.axis_id!s} unit {axis.rule.suffix!r}."
            )
        if dataset.values and all(math.isnan(value) for value in dataset.values):
            warnings.append(f"ChartConfig.datasets[{idx}] ({dataset.label}) has no data.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
