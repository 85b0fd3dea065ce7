"""Golden tests for weather export parsing."""

from __future__ import annotations

import math

import pytest

from core.parsers.weather_csv import Location, ParseError, ParseErrorReason, parse_weather_csv

pytestmark = [pytest.mark.unit, pytest.mark.golden]


def test_parse_weather_csv_extracts_rows_and_units(sample_csv: str) -> None:
    """Parse timestamps, metric values and header unit suffixes."""

    table = parse_weather_csv(sample_csv)

    assert [row.timestamp for row in table.rows] == [
        "2024-01-01T00:00",
        "2024-01-01T01:00",
        "2024-01-02T02:00",
    ]
    assert table.rows[0].values["temperature_2m"] == 5.0
    assert table.rows[0].values["wind_speed_10m"] == 10.0
    assert dict(table.units) == {
        "temperature_2m": "°C",
        "dew_point_2m": "°C",
        "wind_speed_10m": "km/h",
    }
    assert table.location is None


def test_parse_weather_csv_degrades_bad_cells_to_nan_for_that_metric_only() -> None:
    """A non-numeric cell yields NaN without dropping the timestamp or other metrics."""

    table = parse_weather_csv(
        "time,temperature_2m (°C),wind_speed_10m (km/h)\n"
        "2024-01-01T00:00,warm,10\n"
        "2024-01-01T01:00,4.5\n"
    )

    first, second = table.rows
    assert first.timestamp == "2024-01-01T00:00"
    assert math.isnan(first.values["temperature_2m"])
    assert first.values["wind_speed_10m"] == 10.0
    assert second.values["temperature_2m"] == 4.5
    assert math.isnan(second.values["wind_speed_10m"])


def test_parse_weather_csv_treats_non_finite_numbers_as_missing() -> None:
    """`inf`/`nan` spellings are not valid observations."""

    table = parse_weather_csv("time,temperature_2m (°C)\n2024-01-01T00:00,inf\n2024-01-01T01:00,nan\n")

    assert all(math.isnan(row.values["temperature_2m"]) for row in table.rows)


def test_parse_weather_csv_skips_blank_lines() -> None:
    """Blank and all-blank lines are not rows and not errors."""

    table = parse_weather_csv(
        "\n"
        "time,temperature_2m (°C)\n"
        "\n"
        "2024-01-01T00:00,1.5\n"
        ",\n"
        "   \n"
        "2024-01-01T01:00,2.5\n"
    )

    assert [row.values["temperature_2m"] for row in table.rows] == [1.5, 2.5]


def test_parse_weather_csv_reads_open_meteo_location_preamble() -> None:
    """The metadata block before the data header becomes a Location."""

    table = parse_weather_csv(
        "latitude,longitude,elevation,utc_offset_seconds,timezone,timezone_abbreviation\n"
        "52.52,13.419998,38.0,0,GMT,GMT\n"
        "\n"
        "time,temperature_2m (°C)\n"
        "2024-01-01T00:00,1.5\n"
    )

    assert table.location == Location(latitude=52.52, longitude=13.419998, elevation=38.0)
    assert table.location.describe() == "52.52°N 13.42°E 38m above sea level"
    assert len(table.rows) == 1


def test_location_describe_uses_hemisphere_letters() -> None:
    """Negative coordinates render as south/west."""

    assert Location(latitude=-33.87, longitude=-70.5).describe() == "33.87°S 70.5°W"


def test_parse_weather_csv_accepts_utf8_bytes_with_bom() -> None:
    """Bytes are decoded as UTF-8 and a BOM does not corrupt the header."""

    raw = "\ufefftime,temperature_2m (°C)\n2024-01-01T00:00,3\n".encode("utf-8")

    table = parse_weather_csv(raw)

    assert table.rows[0].values["temperature_2m"] == 3.0
    assert table.units["temperature_2m"] == "°C"


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ("", ParseErrorReason.empty_input),
        ("\n\n", ParseErrorReason.empty_input),
        ("time,temperature_2m (°C)\n", ParseErrorReason.empty_input),
        ("date,temperature_2m (°C)\n2024-01-01,1\n", ParseErrorReason.malformed_header),
        ("time,time,temperature_2m (°C)\nx,y,1\n", ParseErrorReason.malformed_header),
        ("time,a (°C),a (°F)\nx,1,2\n", ParseErrorReason.malformed_header),
        (b"time,temperature\n\xff\xfe,1\n", ParseErrorReason.io_failure),
    ],
)
def test_parse_weather_csv_reports_typed_errors(raw: str | bytes, reason: ParseErrorReason) -> None:
    """Structural failures raise ParseError with a machine-readable reason."""

    with pytest.raises(ParseError) as excinfo:
        parse_weather_csv(raw)
    assert excinfo.value.reason is reason
