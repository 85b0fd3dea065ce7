"""Built-in metric selection for the weather chart."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final

from analysis.dto import MetricRequest
from analysis.scales import AXIS_POLICY, AxisId, AxisRule, assign_unit_families
from analysis.units import ConfigError, ConfigErrorReason, UnitFamily

from .schema import SeriesStyle
from .styles import SERIES_STYLES, style_for

WEATHER_METRICS: Final[tuple[MetricRequest, ...]] = (
    MetricRequest(metric_key="temperature_2m", display_name="temperature_2m", unit_family=UnitFamily.temperature),
    MetricRequest(metric_key="dew_point_2m", display_name="dew_point_2m", unit_family=UnitFamily.temperature),
    MetricRequest(metric_key="wind_speed_10m", display_name="wind_speed_10m", unit_family=UnitFamily.speed),
)


def check_metric_configuration(
    metrics: Sequence[MetricRequest] = WEATHER_METRICS,
    *,
    policy: Mapping[UnitFamily, AxisRule] = AXIS_POLICY,
    styles: Mapping[str, SeriesStyle] = SERIES_STYLES,
) -> None:
    """Fail fast when the metric selection cannot produce a valid chart.

    Raises:
        ConfigError: On the first metric missing an axis or a style, or when
            the selection is empty or places nothing on the primary axis.
    """

    if not metrics:
        raise ConfigError("No metrics requested.", reason=ConfigErrorReason.invalid_config)
    assignment = assign_unit_families((request.unit_family for request in metrics), policy=policy)
    if AxisId.primary not in {rule.axis_id for rule in assignment.axes()}:
        raise ConfigError(
            "No requested metric is drawn on the primary axis.",
            reason=ConfigErrorReason.invalid_config,
        )
    for request in metrics:
        style_for(request.metric_key, styles=styles)
