"""DTOs for parsed weather samples and aligned time series.

All types here are immutable; a new load produces new instances rather than
patching existing ones.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .units import UnitFamily


@dataclass(frozen=True, slots=True)
class SampleRow:
    """One timestamped observation across all metric columns.

    Args:
        timestamp: Raw ISO-like timestamp string from the timestamp column.
        values: Mapping of metric key to float; unparseable cells are NaN.
    """

    timestamp: str
    values: Mapping[str, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def value(self, metric_key: str) -> float:
        """Return the value for a metric key, or NaN when the column is absent."""

        return self.values.get(metric_key, float("nan"))


@dataclass(frozen=True, slots=True)
class MetricRequest:
    """A metric the caller wants extracted into a series.

    Args:
        metric_key: Column key with the unit suffix stripped (e.g. `temperature_2m`).
        display_name: Label shown in the legend and tooltip.
        unit_family: Unit family used to pick the value axis.
    """

    metric_key: str
    display_name: str
    unit_family: UnitFamily


@dataclass(frozen=True, slots=True)
class MetricSeries:
    """Ordered values of one metric, aligned to the dataset labels."""

    name: str
    metric_key: str
    unit_family: UnitFamily
    values: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class TimeSeriesDataset:
    """Labels plus index-aligned metric series.

    Args:
        labels: Sample timestamps in input order.
        series: Series in the order the metrics were requested.
    """

    labels: tuple[str, ...]
    series: tuple[MetricSeries, ...]

    def __post_init__(self) -> None:
        for entry in self.series:
            if len(entry.values) != len(self.labels):
                raise ValueError(
                    f"Series {entry.name!r} has {len(entry.values)} values for {len(self.labels)} labels."
                )

    def series_by_name(self) -> dict[str, MetricSeries]:
        """Return series keyed by display name."""

        return {entry.name: entry for entry in self.series}
