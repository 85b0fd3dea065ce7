"""Schema types for the declarative weather chart configuration.

The chart is driven by a `ChartConfig` value rather than bespoke view logic.
A config is derived from a dataset and its axis assignment, never mutated after
construction, and rebuilt wholesale when the dataset changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from analysis.scales import AxisId, AxisRule

PointStyle = Literal["circle", "rect", "rectRot", "triangle", "cross", "star"]

MissingValuePolicy = Literal["gap", "zero"]

LegendPosition = Literal["top", "right", "bottom", "left"]


@dataclass(frozen=True, slots=True)
class SeriesStyle:
    """Static visual encoding for one series.

    Args:
        color: Line and point color.
        fill_color: Translucent area/background color.
        point_style: Marker shape used in the legend and on hover.
        point_radius: Resting point radius (0 hides points).
        hover_radius: Point radius while hovered.
        tension: Bezier smoothing factor for the line.
        animate: Whether the renderer animates this series.
    """

    color: str
    fill_color: str
    point_style: PointStyle = "circle"
    point_radius: int = 0
    hover_radius: int = 8
    tension: float = 0.4
    animate: bool = True


@dataclass(frozen=True, slots=True)
class DatasetConfig:
    """A single plotted series.

    Args:
        label: Display name shown in the legend and tooltip.
        metric_key: Stable metric key used for the style lookup.
        axis_id: Value axis the series is drawn against.
        unit_suffix: Unit suffix resolved from the axis assignment.
        values: Raw values (NaN for missing samples).
        style: Visual encoding.
    """

    label: str
    metric_key: str
    axis_id: AxisId
    unit_suffix: str
    values: tuple[float, ...]
    style: SeriesStyle


@dataclass(frozen=True, slots=True)
class TimeAxisConfig:
    """Time (x) axis presentation.

    Tick labels and the tooltip title format the same timestamp with two
    independent patterns (date-fns tokens for the browser renderer).
    """

    unit: str = "day"
    tick_format: str = "dd MMM"
    tooltip_format: str = "yyyy-MM-dd'  'HH:mm"


@dataclass(frozen=True, slots=True)
class ValueAxisConfig:
    """A value (y) axis and its formatting rule."""

    rule: AxisRule
    position: Literal["left", "right"] = "left"

    @property
    def id(self) -> AxisId:
        """Return the renderer scale id."""

        return self.rule.axis_id


@dataclass(frozen=True, slots=True)
class CrosshairConfig:
    """Options for the vertical hover indicator."""

    axis_id: AxisId = AxisId.primary
    line_width: int = 2
    color: str = "white"


@dataclass(frozen=True, slots=True)
class ChartTheme:
    """Colors for a dark chart surface."""

    text_color: str = "white"
    x_grid_color: str = "rgba(255, 255, 255, 0.5)"
    y_grid_color: str = "rgba(255, 255, 255, 0.2)"
    tooltip_background: str = "rgba(0, 0, 0, 0.7)"
    tooltip_border: str = "rgba(255, 255, 255, 0.5)"


@dataclass(frozen=True, slots=True)
class ChartConfig:
    """Declarative line chart definition.

    Args:
        title: Chart title.
        labels: Sample timestamps (x positions), index-aligned with every dataset.
        datasets: Plotted series in requested order.
        x_axis: Time axis presentation.
        value_axes: Value axes, primary first.
        missing_values: How NaN samples are drawn (`gap` or `zero`).
        legend_position: Legend placement.
        crosshair: Vertical hover indicator options.
        theme: Surface colors.
    """

    title: str
    labels: tuple[str, ...]
    datasets: tuple[DatasetConfig, ...]
    x_axis: TimeAxisConfig
    value_axes: tuple[ValueAxisConfig, ...]
    missing_values: MissingValuePolicy = "gap"
    legend_position: LegendPosition = "right"
    crosshair: CrosshairConfig = CrosshairConfig()
    theme: ChartTheme = ChartTheme()

    def value_axis(self, axis_id: AxisId) -> ValueAxisConfig | None:
        """Return the value axis with `axis_id`, or None when absent."""

        for axis in self.value_axes:
            if axis.id is axis_id:
                return axis
        return None
