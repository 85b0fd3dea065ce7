"""Load sequence: fetch → parse → build, with last-load-wins publication.

Each call to `ChartLoader.load` takes a new generation number. When a load
finishes after a newer one has started, its result is discarded instead of
published, so a slow stale fetch can never overwrite a newer dataset. The
published `LoadedChart` is replaced wholesale; nothing is patched in place.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from analysis.dto import MetricRequest, TimeSeriesDataset
from analysis.scales import AXIS_POLICY, AxisRule, assign_axes
from analysis.series import DatasetError, build_dataset
from analysis.units import UnitFamily

from core.charting.builder import DEFAULT_TITLE, build_chart_config
from core.charting.configs import WEATHER_METRICS, check_metric_configuration
from core.charting.schema import ChartConfig, MissingValuePolicy, SeriesStyle
from core.charting.styles import SERIES_STYLES
from core.parsers.weather_csv import Location, ParseError, parse_weather_csv
from core.transport import TransportError, fetch_bytes

logger = logging.getLogger(__name__)

Fetcher = Callable[[str | Path], Awaitable[bytes | str]]
LoadStatus = Literal["rendered", "loading", "stale"]


@dataclass(frozen=True, slots=True)
class LoadedChart:
    """An immutable, published load result."""

    generation: int
    dataset: TimeSeriesDataset
    config: ChartConfig
    location: Location | None = None


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of one load call.

    Attributes:
        status: `rendered` when this load was published, `loading` when it
            failed (the UI keeps its placeholder), `stale` when a newer load
            superseded it.
        generation: Generation number assigned to the load.
        chart: The published chart for `rendered` results.
        error: Failure description for `loading` results.
    """

    status: LoadStatus
    generation: int
    chart: LoadedChart | None = None
    error: str | None = None


class ChartLoader:
    """Single-writer load sequence for the weather chart."""

    def __init__(
        self,
        *,
        fetch: Fetcher = fetch_bytes,
        metrics: Sequence[MetricRequest] = WEATHER_METRICS,
        policy: Mapping[UnitFamily, AxisRule] = AXIS_POLICY,
        styles: Mapping[str, SeriesStyle] = SERIES_STYLES,
        title: str | None = None,
        missing_values: MissingValuePolicy = "gap",
    ) -> None:
        """Initialize the loader and check metric configuration.

        Args:
            fetch: Coroutine returning raw bytes (or text) for a source.
            metrics: Metrics to extract, in display order.
            policy: Unit family → axis rule table.
            styles: Per-metric style table.
            title: Fixed chart title; defaults to the export's location when
                present, else `DEFAULT_TITLE`.
            missing_values: How NaN samples are drawn.

        Raises:
            ConfigError: When a metric has no axis policy or style entry.
        """

        check_metric_configuration(metrics, policy=policy, styles=styles)

        self._fetch = fetch
        self._metrics = tuple(metrics)
        self._policy = policy
        self._styles = styles
        self._title = title
        self._missing_values = missing_values
        self._generation = 0
        self._current: LoadedChart | None = None

    @property
    def current(self) -> LoadedChart | None:
        """Return the most recently published chart, if any."""

        return self._current

    @property
    def generation(self) -> int:
        """Return the generation of the most recently started load."""

        return self._generation

    async def load(self, source: str | Path) -> LoadResult:
        """Fetch, parse and build a chart, publishing it if still current.

        Transport, parse and dataset failures are returned as `loading`
        results; the previously published chart stays in place.

        Args:
            source: File path or URL passed to the fetcher.

        Returns:
            LoadResult describing what happened to this load.
        """

        self._generation += 1
        generation = self._generation
        logger.info("Loading weather export %s (generation %d)", source, generation)

        try:
            raw = await self._fetch(source)
        except TransportError as exc:
            if self._is_stale(generation):
                return LoadResult(status="stale", generation=generation, error=str(exc))
            return self._failed(generation, exc)

        if self._is_stale(generation):
            return LoadResult(status="stale", generation=generation)

        try:
            chart = self._build(raw, generation=generation)
        except (ParseError, DatasetError) as exc:
            return self._failed(generation, exc)

        self._current = chart
        logger.info(
            "Published weather chart generation %d (%d samples, %d series)",
            generation,
            len(chart.dataset.labels),
            len(chart.dataset.series),
        )
        return LoadResult(status="rendered", generation=generation, chart=chart)

    def _build(self, raw: bytes | str, *, generation: int) -> LoadedChart:
        table = parse_weather_csv(raw)
        dataset = build_dataset(table.rows, self._metrics)
        assignment = assign_axes(dataset.series, policy=self._policy)
        title = self._title or (table.location.describe() if table.location else DEFAULT_TITLE)
        config = build_chart_config(
            dataset,
            assignment,
            title=title,
            missing_values=self._missing_values,
            styles=self._styles,
        )
        return LoadedChart(generation=generation, dataset=dataset, config=config, location=table.location)

    def _is_stale(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.info("Discarding stale load %d; generation %d is current", generation, self._generation)
        return True

    def _failed(self, generation: int, exc: Exception) -> LoadResult:
        reason = getattr(exc, "reason", None)
        logger.warning(
            "Weather export load %d failed (%s): %s",
            generation,
            reason or type(exc).__name__,
            exc,
        )
        return LoadResult(status="loading", generation=generation, error=str(exc))
