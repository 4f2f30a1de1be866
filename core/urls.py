"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/bubble/options/", views.bubble_chart_options, name="bubble_chart_options"),
    path("api/bubble/tooltip/", views.bubble_tooltip, name="bubble_tooltip"),
]
