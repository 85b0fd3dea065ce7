"""Row parser for delimited weather exports.

The parser turns CSV text (as exported by Open-Meteo and similar services) into
typed `SampleRow` records. Guiding rules:

- Blank lines are skipped.
- A malformed numeric cell degrades to NaN for that metric only; the row's
  timestamp and other metrics are kept.
- Structural problems (no header, no timestamp column, no data rows) fail the
  whole parse with a typed `ParseError`.
"""

from __future__ import annotations

import csv
import io
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from analysis.dto import SampleRow
from analysis.units import format_number, split_unit_suffix

DEFAULT_TIMESTAMP_COLUMN = "time"


class ParseErrorReason(StrEnum):
    """Reasons raw weather text cannot be parsed."""

    empty_input = "empty_input"
    malformed_header = "malformed_header"
    io_failure = "io_failure"


class ParseError(ValueError):
    """Raised when raw weather text cannot be parsed into sample rows."""

    def __init__(self, message: str, *, reason: ParseErrorReason) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description.
            reason: Machine-readable failure reason.
        """

        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True, slots=True)
class Location:
    """Station coordinates from an export's metadata preamble.

    Attributes:
        latitude: Decimal degrees, north positive.
        longitude: Decimal degrees, east positive.
        elevation: Meters above sea level, when present.
    """

    latitude: float
    longitude: float
    elevation: float | None = None

    def describe(self) -> str:
        """Return a compact label such as `52.52°N 13.42°E 38m above sea level`."""

        lat = f"{format_number(round(abs(self.latitude), 2))}°{'N' if self.latitude >= 0 else 'S'}"
        lon = f"{format_number(round(abs(self.longitude), 2))}°{'E' if self.longitude >= 0 else 'W'}"
        if self.elevation is None:
            return f"{lat} {lon}"
        return f"{lat} {lon} {format_number(float(round(self.elevation)))}m above sea level"


@dataclass(frozen=True, slots=True)
class ParsedWeatherTable:
    """Parsed output for a weather export.

    Attributes:
        rows: Sample rows in file order.
        units: Metric key → unit suffix taken from the header (e.g. `°C`).
        location: Station location when the export carries a metadata preamble.
    """

    rows: tuple[SampleRow, ...]
    units: Mapping[str, str]
    location: Location | None = None


def parse_weather_csv(
    raw: str | bytes,
    *,
    timestamp_column: str = DEFAULT_TIMESTAMP_COLUMN,
) -> ParsedWeatherTable:
    """Parse a comma-delimited weather export into sample rows.

    Args:
        raw: UTF-8 bytes or already-decoded text. A leading BOM is ignored.
        timestamp_column: Header name of the timestamp column.

    Returns:
        ParsedWeatherTable with one SampleRow per non-blank data line.

    Raises:
        ParseError: `io_failure` when bytes are not valid UTF-8,
            `empty_input` when there is no header or no data rows,
            `malformed_header` when the timestamp column is missing or metric
            columns collide.
    """

    text = _decode(raw)
    records = _iter_records(text)

    header = next(records, None)
    if header is None:
        raise ParseError("Input contains no header row.", reason=ParseErrorReason.empty_input)

    location: Location | None = None
    if _is_location_header(header, timestamp_column=timestamp_column):
        location = _parse_location(header, next(records, None))
        header = next(records, None)
        if header is None:
            raise ParseError(
                "Input contains location metadata but no data header.",
                reason=ParseErrorReason.empty_input,
            )

    timestamp_index, metric_columns, units = _parse_header(header, timestamp_column=timestamp_column)

    rows: list[SampleRow] = []
    for record in records:
        timestamp = record[timestamp_index].strip() if timestamp_index < len(record) else ""
        values = {
            key: _parse_float(record[index] if index < len(record) else "")
            for index, key in metric_columns
        }
        rows.append(SampleRow(timestamp=timestamp, values=values))

    if not rows:
        raise ParseError("Input contains a header but no data rows.", reason=ParseErrorReason.empty_input)

    return ParsedWeatherTable(rows=tuple(rows), units=MappingProxyType(units), location=location)


def _decode(raw: str | bytes) -> str:
    """Decode raw input as UTF-8, dropping a leading BOM."""

    if isinstance(raw, str):
        return raw.removeprefix("\ufeff")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Input is not valid UTF-8: {exc}", reason=ParseErrorReason.io_failure) from exc


def _iter_records(text: str) -> Iterator[list[str]]:
    """Yield tokenized records, skipping blank lines and all-blank rows."""

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",")
    try:
        for record in reader:
            if not any(cell.strip() for cell in record):
                continue
            yield record
    except csv.Error as exc:
        raise ParseError(f"Could not tokenize input: {exc}", reason=ParseErrorReason.io_failure) from exc


def _parse_header(
    header: list[str],
    *,
    timestamp_column: str,
) -> tuple[int, list[tuple[int, str]], dict[str, str]]:
    """Return the timestamp index, metric (index, key) pairs and header units."""

    names = [cell.strip() for cell in header]
    if timestamp_column not in names:
        raise ParseError(
            f"Header has no {timestamp_column!r} column: {names!r}.",
            reason=ParseErrorReason.malformed_header,
        )
    if names.count(timestamp_column) > 1:
        raise ParseError(
            f"Header repeats the {timestamp_column!r} column.",
            reason=ParseErrorReason.malformed_header,
        )

    timestamp_index = names.index(timestamp_column)
    metric_columns: list[tuple[int, str]] = []
    units: dict[str, str] = {}
    seen: set[str] = set()
    for index, name in enumerate(names):
        if index == timestamp_index:
            continue
        if not name:
            continue
        key, unit = split_unit_suffix(name)
        if key in seen:
            raise ParseError(f"Header repeats metric {key!r}.", reason=ParseErrorReason.malformed_header)
        seen.add(key)
        metric_columns.append((index, key))
        if unit is not None:
            units[key] = unit
    return timestamp_index, metric_columns, units


def _is_location_header(header: list[str], *, timestamp_column: str) -> bool:
    names = {cell.strip() for cell in header}
    return timestamp_column not in names and {"latitude", "longitude"} <= names


def _parse_location(header: list[str], record: list[str] | None) -> Location | None:
    """Parse the metadata row following a location header (best-effort)."""

    if record is None:
        return None
    values = {name.strip(): cell for name, cell in zip(header, record)}
    latitude = _parse_float(values.get("latitude", ""))
    longitude = _parse_float(values.get("longitude", ""))
    if math.isnan(latitude) or math.isnan(longitude):
        return None
    elevation = _parse_float(values.get("elevation", ""))
    return Location(
        latitude=latitude,
        longitude=longitude,
        elevation=None if math.isnan(elevation) else elevation,
    )


def _parse_float(value: str) -> float:
    """Parse a finite float, returning NaN for blank or malformed cells."""

    cleaned = value.strip()
    if not cleaned:
        return math.nan
    try:
        number = float(cleaned)
    except ValueError:
        return math.nan
    if not math.isfinite(number):
        return math.nan
    return number
