"""Configuration state: the selected chart type and its live configuration.

The manager is the single writer of configuration. Every update replaces the
snapshot by value, and readers only ever see read-only mappings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from .controls import validate_field_value
from .errors import ChartTypeNotFound, InvalidFieldValue, NoChartSelected
from .palettes import PALETTE_FLAG_KEYS, PALETTE_FLAGS
from .preview import PreviewPayload, build_preview
from .registry import defaults_for, get_chart_type
from .schema import ChartTypeDefinition, ConfigValue

logger = logging.getLogger(__name__)

ManagerState = Literal["idle", "chart_selected"]

_EMPTY: Mapping[str, ConfigValue] = MappingProxyType({})


def enforce_palette_exclusivity(
    config: Mapping[str, ConfigValue], key: str, value: ConfigValue
) -> dict[str, ConfigValue]:
    """Return a copy of `config` with `key` set and palette exclusivity applied.

    Turning one palette flag on turns the other three off in the same update.
    Flags the configuration does not carry stay absent. Turning a flag off,
    or setting any other key, touches nothing else.
    """

    updated = dict(config)
    updated[key] = value
    if key in PALETTE_FLAG_KEYS and value is True:
        for flag in PALETTE_FLAG_KEYS:
            if flag != key and flag in updated:
                updated[flag] = False
    return updated


class ConfigurationStateManager:
    """Hold the active chart selection and its configuration.

    Starts idle with an empty configuration. Selecting a chart type replaces
    the whole configuration with that type's defaults.
    """

    def __init__(self) -> None:
        self._chart_id: str | None = None
        self._config: Mapping[str, ConfigValue] = _EMPTY

    @property
    def state(self) -> ManagerState:
        return "idle" if self._chart_id is None else "chart_selected"

    @property
    def chart_id(self) -> str | None:
        return self._chart_id

    @property
    def config(self) -> Mapping[str, ConfigValue]:
        """Read-only snapshot of the current configuration."""

        return self._config

    @property
    def definition(self) -> ChartTypeDefinition:
        """Definition of the selected chart type.

        Raises:
            NoChartSelected: While idle.
        """

        if self._chart_id is None:
            raise NoChartSelected("No chart type is selected.")
        return get_chart_type(self._chart_id)

    def select_chart_type(self, chart_id: str) -> Mapping[str, ConfigValue]:
        """Select a chart type and reset the configuration to its defaults.

        Raises:
            ChartTypeNotFound: When the id is unknown; state is left untouched.
        """

        defaults = defaults_for(chart_id)
        previous = self._chart_id
        self._chart_id = chart_id
        self._config = MappingProxyType(defaults)
        logger.debug("Selected chart type %s (previous=%s)", chart_id, previous)
        return self._config

    def go_home(self) -> None:
        """Return to the idle state with an empty configuration."""

        if self._chart_id is not None:
            logger.debug("Leaving chart type %s", self._chart_id)
        self._chart_id = None
        self._config = _EMPTY

    def set_field(self, key: str, value: ConfigValue) -> Mapping[str, ConfigValue]:
        """Set one configuration field, applying palette exclusivity.

        Values are stored as given; widget contracts are checked at the web
        boundary with `controls.validate_field_value`.

        Raises:
            NoChartSelected: While idle.
        """

        if self._chart_id is None:
            raise NoChartSelected(f"Cannot set {key!r} while no chart type is selected.")
        self._config = MappingProxyType(enforce_palette_exclusivity(self._config, key, value))
        return self._config

    def generate_code(self) -> str:
        """Generate the script for the current selection."""

        return self.definition.generate_code(self._config)

    def preview(self) -> PreviewPayload:
        """Build the preview payload for the current selection."""

        return build_preview(self.definition, self._config)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot (for session storage)."""

        return {"chartId": self._chart_id, "config": dict(self._config)}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> ConfigurationStateManager:
        """Restore a manager from `to_payload` output.

        Unknown chart ids restore to idle. Configuration keys the chart type does
        not define, and values that break their control contract, fall back to
        the defaults. At most one palette flag survives (the first in priority
        order).
        """

        manager = cls()
        if not payload:
            return manager
        chart_id = payload.get("chartId")
        if not isinstance(chart_id, str):
            return manager
        try:
            config = defaults_for(chart_id)
        except ChartTypeNotFound:
            logger.warning("Discarding stored state for unknown chart type %r", chart_id)
            return manager

        controls = get_chart_type(chart_id).controls
        stored = payload.get("config")
        if isinstance(stored, Mapping):
            for key, value in stored.items():
                if key not in config:
                    continue
                try:
                    config[key] = validate_field_value(controls, key, value)
                except InvalidFieldValue as exc:
                    logger.warning("Discarding stored %s for %s: %s", exc.key, chart_id, exc.message)
        active = next((flag for flag, _ in PALETTE_FLAGS if config.get(flag) is True), None)
        if active is not None:
            config = enforce_palette_exclusivity(config, active, True)

        manager._chart_id = chart_id
        manager._config = MappingProxyType(config)
        return manager
