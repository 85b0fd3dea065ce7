"""Django integration tests for the chart page and its config endpoint."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from core import views
from core.loading import ChartLoader
from core.views import get_chart_loader

pytestmark = pytest.mark.integration

FIRST_CSV = "time,temperature_2m (°C),wind_speed_10m (km/h)\n2024-01-01T00:00,5.0,10\n"
SECOND_CSV = "time,temperature_2m (°C),wind_speed_10m (km/h)\n2024-02-01T00:00,-3.0,22\n"


@pytest.fixture(autouse=True)
def fresh_loader():
    """Rebuild the cached loader around each test so settings overrides apply."""

    get_chart_loader.cache_clear()
    yield
    get_chart_loader.cache_clear()


def test_chart_page_renders_placeholder(client) -> None:
    """The page shows the loading placeholder and points at the config endpoint."""

    response = client.get("/")

    assert response.status_code == 200
    body = response.content.decode()
    assert "Loading data..." in body
    assert 'data-chart-api-url="/api/chart/"' in body
    assert "core/crosshair.js" in body


def test_chart_page_rejects_post(client) -> None:
    """Only GET is served."""

    assert client.post("/").status_code == 405


def test_chart_api_renders_bundled_export(client) -> None:
    """The bundled export loads into a two-axis Chart.js payload."""

    response = client.get("/api/chart/")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "rendered"
    assert payload["generation"] == 1

    chart = payload["chart"]
    assert chart["type"] == "line"
    assert len(chart["data"]["labels"]) == 48
    assert [d["label"] for d in chart["data"]["datasets"]] == [
        "temperature_2m",
        "dew_point_2m",
        "wind_speed_10m",
    ]
    assert [d["yAxisID"] for d in chart["data"]["datasets"]] == ["y1", "y1", "y2"]
    assert None in chart["data"]["datasets"][0]["data"]
    assert chart["options"]["plugins"]["title"]["text"] == "52.52°N 13.42°E 38m above sea level"
    assert set(chart["axisUnits"]) == {"y1", "y2"}


def test_chart_api_uses_configured_title_and_zero_policy(client, settings) -> None:
    """Settings override the title and the missing-value policy."""

    settings.WEATHERCHART_TITLE = "Berlin"
    settings.WEATHERCHART_MISSING_VALUES = "zero"

    chart = client.get("/api/chart/").json()["chart"]

    assert chart["options"]["plugins"]["title"]["text"] == "Berlin"
    assert None not in chart["data"]["datasets"][0]["data"]


def test_chart_api_reports_loading_when_source_is_missing(client, settings, tmp_path) -> None:
    """A missing export answers 503 `loading` instead of an error page."""

    settings.WEATHERCHART_SOURCE = str(tmp_path / "missing.csv")

    response = client.get("/api/chart/")

    assert response.status_code == 503
    assert response.json()["status"] == "loading"
    assert response.json()["error"]


def test_chart_api_reports_loading_for_header_only_export(client, settings, tmp_path) -> None:
    """An export without data rows keeps the page in its loading state."""

    source = tmp_path / "file.csv"
    source.write_text("time,temperature_2m (°C),wind_speed_10m (km/h)\n", encoding="utf-8")
    settings.WEATHERCHART_SOURCE = str(source)

    response = client.get("/api/chart/")

    assert response.status_code == 503
    assert response.json() == {
        "status": "loading",
        "error": "Input contains a header but no data rows.",
    }


class QueuedFetch:
    """Fetcher whose responses are released by the test in any order."""

    def __init__(self) -> None:
        self.pending: list[asyncio.Future[bytes | str]] = []

    async def __call__(self, source: str | Path) -> bytes | str:
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future

    async def wait_for(self, count: int) -> None:
        while len(self.pending) < count:
            await asyncio.sleep(0)


@pytest.fixture
def queued_fetch(monkeypatch) -> QueuedFetch:
    """Serve the chart API from a loader driven by a QueuedFetch."""

    fetch = QueuedFetch()
    loader = ChartLoader(fetch=fetch)
    monkeypatch.setattr(views, "get_chart_loader", lambda: loader)
    return fetch


def _overlapping_requests(rf, fetch: QueuedFetch, order: tuple[int, int]):
    async def scenario():
        first = asyncio.create_task(views.chart_api(rf.get("/api/chart/")))
        await fetch.wait_for(1)
        second = asyncio.create_task(views.chart_api(rf.get("/api/chart/")))
        await fetch.wait_for(2)
        tasks = (first, second)
        payloads = (FIRST_CSV, SECOND_CSV)
        responses = {}
        for idx in order:
            fetch.pending[idx].set_result(payloads[idx])
            responses[idx] = await tasks[idx]
        return responses[0], responses[1]

    return asyncio.run(scenario())


def test_chart_api_answers_stale_when_newer_load_has_not_published(rf, queued_fetch) -> None:
    """An overtaken request with nothing published asks the page to retry."""

    first, second = _overlapping_requests(rf, queued_fetch, order=(0, 1))

    assert first.status_code == 409
    assert json.loads(first.content) == {"status": "stale", "generation": 1}
    assert second.status_code == 200
    body = json.loads(second.content)
    assert body["status"] == "rendered"
    assert body["chart"]["data"]["labels"] == ["2024-02-01T00:00"]


def test_chart_api_serves_newer_chart_to_overtaken_request(rf, queued_fetch) -> None:
    """An overtaken request resolving last receives the newer published chart."""

    first, second = _overlapping_requests(rf, queued_fetch, order=(1, 0))

    assert second.status_code == 200
    assert first.status_code == 200
    body = json.loads(first.content)
    assert body["generation"] == 2
    assert body["chart"]["data"]["labels"] == ["2024-02-01T00:00"]
