"""JSON API for browsing chart types and editing the session configuration."""

from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie

from studio.charting.controls import validate_field_value
from studio.charting.errors import ChartTypeNotFound, InvalidFieldValue, NoChartSelected
from studio.charting.preview import build_preview
from studio.charting.registry import all_chart_types, get_chart_type
from studio.charting.schema import ChartTypeDefinition
from studio.charting.state import ConfigurationStateManager, enforce_palette_exclusivity
from studio.session import load_state, save_state

logger = logging.getLogger(__name__)


class BadRequest(Exception):
    """Raised when a request body cannot be used."""


def _error(message: str, *, status: int) -> JsonResponse:
    return JsonResponse({"ok": False, "error": message}, status=status)


def _method_not_allowed(allowed: str) -> JsonResponse:
    response = _error("Method not allowed.", status=405)
    response["Allow"] = allowed
    return response


def _json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a JSON object request body (an empty body is an empty object)."""

    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise BadRequest(f"Request body is not valid JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object.")
    return body


def _chart_summary(definition: ChartTypeDefinition) -> dict[str, Any]:
    return {
        "id": definition.id,
        "name": definition.name,
        "category": definition.category,
        "description": definition.description,
        "supportsOutputFormat": definition.supports_output_format,
    }


def _state_json(manager: ConfigurationStateManager) -> dict[str, Any]:
    if manager.chart_id is None:
        return {"ok": True, "state": manager.state, "chartId": None, "config": {}, "code": None, "preview": None}
    return {
        "ok": True,
        "state": manager.state,
        "chartId": manager.chart_id,
        "config": dict(manager.config),
        "code": manager.generate_code(),
        "preview": manager.preview(),
    }


def chart_list(request: HttpRequest) -> JsonResponse:
    """Return every chart type in display order."""

    if request.method != "GET":
        return _method_not_allowed("GET")
    return JsonResponse({"ok": True, "charts": [_chart_summary(d) for d in all_chart_types()]})


def chart_detail(request: HttpRequest, chart_id: str) -> JsonResponse:
    """Return one chart type with its controls and default configuration."""

    if request.method != "GET":
        return _method_not_allowed("GET")
    try:
        definition = get_chart_type(chart_id)
    except ChartTypeNotFound as exc:
        return _error(str(exc), status=404)
    return JsonResponse(
        {
            "ok": True,
            "chart": {
                **_chart_summary(definition),
                "controls": [control.as_json() for control in definition.controls],
                "defaults": definition.defaults(),
            },
        }
    )


def chart_generate(request: HttpRequest, chart_id: str) -> JsonResponse:
    """Generate code and preview for a configuration without touching the session.

    The body is `{"config": {...}}`; each field is validated and applied over
    the chart's defaults in order, with palette exclusivity enforced.
    """

    if request.method != "POST":
        return _method_not_allowed("POST")
    try:
        definition = get_chart_type(chart_id)
    except ChartTypeNotFound as exc:
        return _error(str(exc), status=404)

    try:
        body = _json_body(request)
    except BadRequest as exc:
        return _error(str(exc), status=400)
    overrides = body.get("config") or {}
    if not isinstance(overrides, dict):
        return _error("config must be a JSON object.", status=400)

    config = definition.defaults()
    try:
        for key, value in overrides.items():
            value = validate_field_value(definition.controls, key, value)
            config = enforce_palette_exclusivity(config, key, value)
    except InvalidFieldValue as exc:
        logger.info("Rejected %s override for %s: %s", exc.key, chart_id, exc.message)
        return _error(str(exc), status=400)

    return JsonResponse(
        {
            "ok": True,
            "chartId": definition.id,
            "config": config,
            "code": definition.generate_code(config),
            "preview": build_preview(definition, config),
        }
    )


@ensure_csrf_cookie
def state_detail(request: HttpRequest) -> JsonResponse:
    """Return the session's selection, configuration, code and preview."""

    if request.method != "GET":
        return _method_not_allowed("GET")
    return JsonResponse(_state_json(load_state(request)))


def state_select(request: HttpRequest) -> JsonResponse:
    """Select a chart type; the configuration resets to its defaults."""

    if request.method != "POST":
        return _method_not_allowed("POST")
    try:
        body = _json_body(request)
    except BadRequest as exc:
        return _error(str(exc), status=400)
    chart_id = body.get("chartId")
    if not isinstance(chart_id, str) or not chart_id:
        return _error("chartId must be a non-empty string.", status=400)

    manager = load_state(request)
    try:
        manager.select_chart_type(chart_id)
    except ChartTypeNotFound as exc:
        return _error(str(exc), status=404)
    save_state(request, manager)
    return JsonResponse(_state_json(manager))


def state_home(request: HttpRequest) -> JsonResponse:
    """Return the session to the idle state."""

    if request.method != "POST":
        return _method_not_allowed("POST")
    manager = load_state(request)
    manager.go_home()
    save_state(request, manager)
    return JsonResponse(_state_json(manager))


def state_field(request: HttpRequest) -> JsonResponse:
    """Set one configuration field from a `{key, value}` body."""

    if request.method != "POST":
        return _method_not_allowed("POST")
    try:
        body = _json_body(request)
    except BadRequest as exc:
        return _error(str(exc), status=400)
    key = body.get("key")
    if not isinstance(key, str) or not key:
        return _error("key must be a non-empty string.", status=400)
    if "value" not in body:
        return _error("value is required.", status=400)

    manager = load_state(request)
    try:
        value = validate_field_value(manager.definition.controls, key, body["value"])
        manager.set_field(key, value)
    except NoChartSelected as exc:
        return _error(str(exc), status=409)
    except InvalidFieldValue as exc:
        logger.info("Rejected %s update for %s: %s", exc.key, manager.chart_id, exc.message)
        return _error(str(exc), status=400)
    save_state(request, manager)
    return JsonResponse(_state_json(manager))


def state_script(request: HttpRequest) -> HttpResponse:
    """Download the generated script for the current selection."""

    if request.method != "GET":
        return _method_not_allowed("GET")
    manager = load_state(request)
    try:
        code = manager.generate_code()
    except NoChartSelected as exc:
        return _error(str(exc), status=409)
    filename = f"{manager.chart_id.replace('-', '_')}.py" if manager.chart_id else "chart.py"
    response = HttpResponse(code, content_type="text/x-python; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
