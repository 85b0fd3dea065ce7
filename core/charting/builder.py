"""Chart Config Builder: turn a dataset and its axis assignment into a ChartConfig.

`build_chart_config` is pure and deterministic: the same dataset and
assignment always yield a structurally identical config, with datasets in the
order the metrics were requested.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from analysis.dto import TimeSeriesDataset
from analysis.scales import AxisAssignment
from analysis.units import ConfigError, ConfigErrorReason

from .schema import (
    ChartConfig,
    CrosshairConfig,
    DatasetConfig,
    MissingValuePolicy,
    SeriesStyle,
    TimeAxisConfig,
    ValueAxisConfig,
)
from .styles import SERIES_STYLES, style_for
from .validator import validate_chart_config

DEFAULT_TITLE = "Hourly weather"


def build_chart_config(
    dataset: TimeSeriesDataset,
    assignment: AxisAssignment,
    *,
    title: str = DEFAULT_TITLE,
    missing_values: MissingValuePolicy = "gap",
    styles: Mapping[str, SeriesStyle] = SERIES_STYLES,
    x_axis: TimeAxisConfig = TimeAxisConfig(),
    crosshair: CrosshairConfig = CrosshairConfig(),
) -> ChartConfig:
    """Build the declarative chart config for a dataset.

    Args:
        dataset: Aligned time series to plot.
        assignment: Unit family → value axis rules.
        title: Chart title.
        missing_values: Draw NaN samples as gaps or as zero.
        styles: Static style table keyed by metric key.
        x_axis: Time axis presentation.
        crosshair: Hover indicator options.

    Returns:
        A validated ChartConfig.

    Raises:
        ConfigError: When a series has no axis or no style, or the resulting
            config fails validation.
    """

    datasets = tuple(
        DatasetConfig(
            label=series.name,
            metric_key=series.metric_key,
            axis_id=assignment.axis_for(series.unit_family),
            unit_suffix=assignment.rule_for(series.unit_family).suffix,
            values=series.values,
            style=style_for(series.metric_key, styles=styles),
        )
        for series in dataset.series
    )
    config = ChartConfig(
        title=title,
        labels=dataset.labels,
        datasets=datasets,
        x_axis=x_axis,
        value_axes=tuple(ValueAxisConfig(rule=rule) for rule in assignment.axes()),
        missing_values=missing_values,
        crosshair=crosshair,
    )

    result = validate_chart_config(config)
    if not result.is_valid:
        raise ConfigError("; ".join(result.errors), reason=ConfigErrorReason.invalid_config)
    return config


def tooltip_lines(config: ChartConfig, index: int | None) -> list[str]:
    """Return tooltip body lines for a hovered sample index.

    One line per dataset in config order, formatted as
    `<displayName>: <value> <unitSuffix>`. The suffix comes from the dataset's
    value axis rule; missing samples read `no data`.

    Args:
        config: ChartConfig being hovered.
        index: Active sample index, or None when nothing is hovered.

    Returns:
        Tooltip lines (empty when `index` is None).

    Raises:
        IndexError: When `index` is outside `0 <= index < len(config.labels)`.
    """

    if index is None:
        return []
    if not 0 <= index < len(config.labels):
        raise IndexError(f"Hover index {index} is outside 0..{len(config.labels) - 1}.")
    lines: list[str] = []
    for dataset in config.datasets:
        axis = config.value_axis(dataset.axis_id)
        if axis is None:
            raise ConfigError(
                f"Dataset {dataset.label!r} references unknown axis {dataset.axis_id!s}.",
                reason=ConfigErrorReason.invalid_config,
            )
        lines.append(f"{dataset.label}: {axis.rule.format_tooltip_value(dataset.values[index])}")
    return lines


def parse_timestamp(label: str) -> datetime | None:
    """Parse an ISO-like label (`2024-01-01T00:00`), or None when malformed."""

    try:
        return datetime.fromisoformat(label.strip())
    except ValueError:
        return None


def format_time_tick(label: str) -> str:
    """Format a label as a day tick (`dd MMM`, e.g. `01 Jan`)."""

    moment = parse_timestamp(label)
    if moment is None:
        return label
    return moment.strftime("%d %b")


def format_tooltip_title(label: str) -> str:
    """Format a label for the tooltip title (`yyyy-MM-dd  HH:mm`)."""

    moment = parse_timestamp(label)
    if moment is None:
        return label
    return moment.strftime("%Y-%m-%d  %H:%M")
