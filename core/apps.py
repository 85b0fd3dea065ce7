"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` app (weather chart page and API)."""

    name = "core"
    verbose_name = "Weather chart"

    def ready(self) -> None:
        """Fail fast on metrics without an axis policy or style entry."""

        from core.charting.configs import check_metric_configuration

        check_metric_configuration()
