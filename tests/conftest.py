"""Pytest fixtures shared across weatherchart tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

SAMPLE_CSV = (
    "time,temperature_2m (°C),dew_point_2m (°C),wind_speed_10m (km/h)\n"
    "2024-01-01T00:00,5.0,1.2,10\n"
    "2024-01-01T01:00,,0.9,12\n"
    "2024-01-02T02:00,21.3,2.5,14.5\n"
)


class RecordingContext:
    """Drawing context that records every call for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[object, ...]] = []
        self.line_width: float = 1
        self.stroke_style: str = "black"

    def save(self) -> None:
        self.calls.append(("save",))

    def restore(self) -> None:
        self.calls.append(("restore",))

    def begin_path(self) -> None:
        self.calls.append(("begin_path",))

    def move_to(self, x: float, y: float) -> None:
        self.calls.append(("move_to", x, y))

    def line_to(self, x: float, y: float) -> None:
        self.calls.append(("line_to", x, y))

    def stroke(self) -> None:
        self.calls.append(("stroke", self.line_width, self.stroke_style))

    def segments(self) -> list[tuple[tuple[float, float], tuple[float, float]]]:
        """Return stroked (start, end) segments."""

        segments = []
        start: tuple[float, float] | None = None
        end: tuple[float, float] | None = None
        for call in self.calls:
            if call[0] == "move_to":
                start = (call[1], call[2])  # type: ignore[assignment]
            elif call[0] == "line_to":
                end = (call[1], call[2])  # type: ignore[assignment]
            elif call[0] == "stroke" and start is not None and end is not None:
                segments.append((start, end))
                start = end = None
        return segments


@pytest.fixture
def sample_csv() -> str:
    """Return a small three-row weather export."""

    return SAMPLE_CSV


@pytest.fixture
def recording_ctx() -> RecordingContext:
    """Return a fresh recording drawing context."""

    return RecordingContext()


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request cycle.
    - `integration`: tests touching Django views, settings, or IO.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
