"""Serialize a ChartConfig into the Chart.js payload consumed by the page."""

from __future__ import annotations

import math
from typing import Any, TypedDict

from .schema import ChartConfig, DatasetConfig, MissingValuePolicy, ValueAxisConfig


class ChartDataset(TypedDict, total=False):
    """A Chart.js dataset payload."""

    label: str
    metricKey: str
    unit: str
    data: list[float | None]
    yAxisID: str
    borderColor: str
    backgroundColor: str
    pointBackgroundColor: str
    pointStyle: str
    pointRadius: int
    hoverRadius: int
    tension: float
    spanGaps: bool
    animation: bool
    missingIndexes: list[int]


class ChartData(TypedDict):
    """Chart.js `data` block (labels + datasets)."""

    labels: list[str]
    datasets: list[ChartDataset]


class AxisUnits(TypedDict):
    """Unit formatting hints used by the page to install tick callbacks."""

    suffix: str
    separator: str


class ChartPayload(TypedDict):
    """Full payload: Chart.js config plus unit hints for each value axis."""

    type: str
    data: ChartData
    options: dict[str, Any]
    axisUnits: dict[str, AxisUnits]


def render_chartjs(config: ChartConfig) -> ChartPayload:
    """Render the Chart.js payload for a ChartConfig.

    NaN samples become `null` (a gap) or `0` according to
    `config.missing_values`, so the payload is always valid JSON.
    """

    return {
        "type": "line",
        "data": {
            "labels": list(config.labels),
            "datasets": [_dataset(dataset, missing_values=config.missing_values) for dataset in config.datasets],
        },
        "options": _options(config),
        "axisUnits": {
            str(axis.id): {"suffix": axis.rule.suffix, "separator": axis.rule.tick_separator}
            for axis in config.value_axes
        },
    }


def _dataset(dataset: DatasetConfig, *, missing_values: MissingValuePolicy) -> ChartDataset:
    """Build a Chart.js dataset dict from a DatasetConfig."""

    style = dataset.style
    payload: ChartDataset = {
        "label": dataset.label,
        "metricKey": dataset.metric_key,
        "unit": dataset.unit_suffix,
        "data": [_point(value, missing_values=missing_values) for value in dataset.values],
        "yAxisID": str(dataset.axis_id),
        "borderColor": style.color,
        "backgroundColor": style.fill_color,
        "pointBackgroundColor": style.color,
        "pointStyle": style.point_style,
        "pointRadius": style.point_radius,
        "hoverRadius": style.hover_radius,
        "tension": style.tension,
        "spanGaps": False,
    }
    if not style.animate:
        payload["animation"] = False
    if missing_values == "zero":
        payload["missingIndexes"] = [idx for idx, value in enumerate(dataset.values) if math.isnan(value)]
    return payload


def _point(value: float, *, missing_values: MissingValuePolicy) -> float | None:
    if not math.isnan(value):
        return value
    return 0.0 if missing_values == "zero" else None


def _options(config: ChartConfig) -> dict[str, Any]:
    """Build the Chart.js `options` block."""

    theme = config.theme
    scales: dict[str, Any] = {
        "x": {
            "type": "time",
            "time": {
                "unit": config.x_axis.unit,
                "tooltipFormat": config.x_axis.tooltip_format,
                "displayFormats": {config.x_axis.unit: config.x_axis.tick_format},
            },
            "ticks": {"color": theme.text_color, "maxRotation": 0, "minRotation": 0},
            "grid": {"color": theme.x_grid_color, "borderColor": theme.text_color, "borderWidth": 2},
        },
    }
    for axis in config.value_axes:
        scales[str(axis.id)] = _value_axis(axis, config=config)

    return {
        "responsive": True,
        "maintainAspectRatio": False,
        "interaction": {"mode": "index", "intersect": False},
        "plugins": {
            "legend": {
                "position": config.legend_position,
                "labels": {
                    "color": theme.text_color,
                    "font": {"size": 12},
                    "usePointStyle": True,
                    "padding": 20,
                },
            },
            "title": {
                "display": bool(config.title),
                "text": config.title,
                "color": theme.text_color,
                "font": {"size": 16},
                "padding": {"top": 10, "bottom": 10},
            },
            "tooltip": {
                "enabled": True,
                "mode": "index",
                "intersect": False,
                "backgroundColor": theme.tooltip_background,
                "titleColor": theme.text_color,
                "bodyColor": theme.text_color,
                "borderWidth": 1,
                "borderColor": theme.tooltip_border,
            },
            "crosshair": {
                "axisId": str(config.crosshair.axis_id),
                "lineWidth": config.crosshair.line_width,
                "color": config.crosshair.color,
            },
        },
        "scales": scales,
        "layout": {"padding": {"top": 20, "bottom": 20}},
    }


def _value_axis(axis: ValueAxisConfig, *, config: ChartConfig) -> dict[str, Any]:
    theme = config.theme
    grid: dict[str, Any] = (
        {"color": theme.y_grid_color} if axis.rule.draw_grid else {"drawOnChartArea": False}
    )
    return {
        "type": "linear",
        "position": axis.position,
        "title": {"display": True, "text": axis.rule.title, "color": theme.text_color},
        "ticks": {"color": theme.text_color},
        "grid": grid,
    }
