"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.chart_page, name="chart"),
    path("api/chart/", views.chart_api, name="chart_api"),
]
