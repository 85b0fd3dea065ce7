"""Static per-series visual encoding.

Styles are looked up by metric key when the config is built. Adding a metric
only requires a new entry here.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from analysis.units import ConfigError, ConfigErrorReason

from .schema import SeriesStyle

SERIES_STYLES: Final[Mapping[str, SeriesStyle]] = MappingProxyType(
    {
        "temperature_2m": SeriesStyle(
            color="rgba(0, 128, 255, 1)",
            fill_color="rgba(0, 128, 255, 0.2)",
            point_style="circle",
        ),
        "dew_point_2m": SeriesStyle(
            color="rgba(128, 0, 255, 1)",
            fill_color="rgba(128, 0, 255, 0.2)",
            point_style="rectRot",
        ),
        "wind_speed_10m": SeriesStyle(
            color="rgba(0, 255, 128, 1)",
            fill_color="rgba(0, 255, 128, 0.2)",
            point_style="rect",
            animate=False,
        ),
    }
)


def style_for(metric_key: str, *, styles: Mapping[str, SeriesStyle] = SERIES_STYLES) -> SeriesStyle:
    """Return the style for a metric key.

    Raises:
        ConfigError: When the metric has no style entry.
    """

    style = styles.get(metric_key)
    if style is None:
        raise ConfigError(
            f"No series style registered for metric {metric_key!r}.",
            reason=ConfigErrorReason.unknown_style,
        )
    return style
