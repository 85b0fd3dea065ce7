"""Series Builder: turn parsed sample rows into an aligned dataset."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import StrEnum

from .dto import MetricRequest, MetricSeries, SampleRow, TimeSeriesDataset


class DatasetErrorReason(StrEnum):
    """Reasons a dataset cannot be built."""

    no_rows = "no_rows"


class DatasetError(ValueError):
    """Raised when sample rows cannot form a chartable dataset."""

    def __init__(self, message: str, *, reason: DatasetErrorReason) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description.
            reason: Machine-readable failure reason.
        """

        super().__init__(message)
        self.reason = reason


def build_dataset(rows: Iterable[SampleRow], metrics: Sequence[MetricRequest]) -> TimeSeriesDataset:
    """Build a TimeSeriesDataset from rows in input order.

    Rows are consumed once and never re-sorted. A requested metric missing from
    every row still produces a series filled with NaN so the series set stays
    stable for axis and legend code.

    Args:
        rows: Parsed sample rows, already chronological.
        metrics: Metrics to extract, in display order.

    Returns:
        TimeSeriesDataset whose series follow the order of `metrics`.

    Raises:
        DatasetError: When `rows` is empty.
        ValueError: When `metrics` requests the same metric key twice.
    """

    seen: set[str] = set()
    for request in metrics:
        if request.metric_key in seen:
            raise ValueError(f"Duplicate metric request: {request.metric_key!r}")
        seen.add(request.metric_key)

    labels: list[str] = []
    columns: list[list[float]] = [[] for _ in metrics]
    for row in rows:
        labels.append(row.timestamp)
        for column, request in zip(columns, metrics):
            column.append(row.value(request.metric_key))

    if not labels:
        raise DatasetError("No sample rows to build a dataset from.", reason=DatasetErrorReason.no_rows)

    return TimeSeriesDataset(
        labels=tuple(labels),
        series=tuple(
            MetricSeries(
                name=request.display_name,
                metric_key=request.metric_key,
                unit_family=request.unit_family,
                values=tuple(column),
            )
            for request, column in zip(metrics, columns)
        ),
    )
