"""Session persistence for the configuration state manager."""

from __future__ import annotations

from typing import Final

from django.http import HttpRequest

from studio.charting.state import ConfigurationStateManager

STATE_SESSION_KEY: Final[str] = "coplot_state"


def load_state(request: HttpRequest) -> ConfigurationStateManager:
    """Return the state manager stored in the current session (idle when absent)."""

    payload = getattr(request, "session", {}).get(STATE_SESSION_KEY)
    return ConfigurationStateManager.from_payload(payload)


def save_state(request: HttpRequest, manager: ConfigurationStateManager) -> None:
    """Store the manager snapshot in the current session.

    Args:
        request: Incoming request whose session will be updated.
        manager: Manager whose state should be persisted.
    """

    request.session[STATE_SESSION_KEY] = manager.to_payload()
    request.session.modified = True
