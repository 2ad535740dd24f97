"""Pytest fixtures shared across unit and integration tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from django.http import HttpResponse

from studio.charting.state import ConfigurationStateManager


@pytest.fixture
def manager() -> ConfigurationStateManager:
    """Return a fresh, idle configuration state manager."""

    return ConfigurationStateManager()


@pytest.fixture
def post_json(client) -> Callable[[str, Any], HttpResponse]:
    """Return a helper that POSTs a JSON body with the Django test client."""

    def _post(url: str, payload: Any = None) -> HttpResponse:
        body = "" if payload is None else json.dumps(payload)
        return client.post(url, data=body, content_type="application/json")

    return _post


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite must be runnable by intent:
    - `unit`: pure, fast tests of the charting engine.
    - `integration`: tests touching Django views, sessions or settings.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
