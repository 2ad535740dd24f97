"""App configuration for the studio Django app."""

from __future__ import annotations

from django.apps import AppConfig


class StudioConfig(AppConfig):
    """Configuration for the `studio` app."""

    name = "studio"
    verbose_name = "Chart code studio"

    def ready(self) -> None:
        # Importing the registry validates every built-in chart type.
        from studio.charting import registry  # noqa: F401
