"""URL configuration for coplot."""

from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path("", include("studio.urls")),
]
