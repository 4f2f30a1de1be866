"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` app (bubble chart endpoints)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Bubble charts"

    def ready(self) -> None:
        """Load the bundled color schemes so a broken schemes file fails at startup."""

        from core.charting.colors import default_color_namespace

        default_color_namespace()
