"""URL configuration for studio views."""

from __future__ import annotations

from django.urls import path

from studio import views

app_name = "studio"

urlpatterns = [
    path("api/charts/", views.chart_list, name="chart_list"),
    path("api/charts/<slug:chart_id>/", views.chart_detail, name="chart_detail"),
    path("api/charts/<slug:chart_id>/generate/", views.chart_generate, name="chart_generate"),
    path("api/state/", views.state_detail, name="state_detail"),
    path("api/state/select/", views.state_select, name="state_select"),
    path("api/state/home/", views.state_home, name="state_home"),
    path("api/state/field/", views.state_field, name="state_field"),
    path("api/state/script.py", views.state_script, name="state_script"),
]
