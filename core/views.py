"""Views for the weather chart page and its Chart.js config endpoint."""

from __future__ import annotations

from functools import lru_cache

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_GET

from core.charting.render import render_chartjs
from core.loading import ChartLoader, LoadedChart


@lru_cache(maxsize=1)
def get_chart_loader() -> ChartLoader:
    """Return the process-wide loader built from settings."""

    return ChartLoader(
        title=settings.WEATHERCHART_TITLE,
        missing_values=settings.WEATHERCHART_MISSING_VALUES,
    )


@require_GET
def chart_page(request: HttpRequest) -> HttpResponse:
    """Render the chart page; the config is fetched from `chart_api`."""

    return render(request, "core/chart.html", {"chart_api_url": reverse("core:chart_api")})


@require_GET
async def chart_api(request: HttpRequest) -> JsonResponse:
    """Load the weather export and return the Chart.js payload.

    Failed loads answer 503 with `{"status": "loading"}` so the page keeps its
    placeholder. A load superseded by a newer one answers with whatever chart
    is currently published, or 409 `{"status": "stale"}` when the newer load
    has not published yet; the page then asks again.
    """

    loader = get_chart_loader()
    result = await loader.load(settings.WEATHERCHART_SOURCE)

    chart: LoadedChart | None = result.chart
    if result.status == "stale":
        chart = loader.current
        if chart is None:
            return JsonResponse({"status": "stale", "generation": result.generation}, status=409)
    if chart is None:
        return JsonResponse({"status": "loading", "error": result.error}, status=503)
    return JsonResponse(
        {"status": "rendered", "generation": chart.generation, "chart": render_chartjs(chart.config)},
        json_dumps_params={"allow_nan": False},
    )
