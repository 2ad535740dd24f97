"""Tests for the configuration state manager and palette exclusivity."""

from __future__ import annotations

import random

import pytest

from studio.charting.errors import ChartTypeNotFound, NoChartSelected
from studio.charting.palettes import PALETTE_FLAGS
from studio.charting.registry import defaults_for
from studio.charting.state import ConfigurationStateManager, enforce_palette_exclusivity

pytestmark = pytest.mark.unit

FLAGS = tuple(flag for flag, _ in PALETTE_FLAGS)


def _enabled_flags(config) -> list[str]:
    return [flag for flag in FLAGS if config.get(flag) is True]


def test_manager_starts_idle(manager: ConfigurationStateManager) -> None:
    """A new manager has no selection and an empty configuration."""

    assert manager.state == "idle"
    assert manager.chart_id is None
    assert dict(manager.config) == {}
    with pytest.raises(NoChartSelected):
        _ = manager.definition


def test_select_chart_type_loads_defaults(manager: ConfigurationStateManager) -> None:
    """Selecting a chart type replaces the configuration with its defaults."""

    config = manager.select_chart_type("scatter-plot")
    assert manager.state == "chart_selected"
    assert manager.chart_id == "scatter-plot"
    assert dict(config) == defaults_for("scatter-plot")


def test_reselect_discards_edits(manager: ConfigurationStateManager) -> None:
    """Selecting again resets every field, even for the same chart type."""

    manager.select_chart_type("vertical-bar")
    manager.set_field("title", "Edited")
    manager.select_chart_type("line-chart")
    manager.select_chart_type("vertical-bar")
    assert manager.config["title"] == ""


def test_switching_chart_type_leaves_no_residual_keys(manager: ConfigurationStateManager) -> None:
    """Switching from A to B yields exactly B's defaults."""

    manager.select_chart_type("vertical-bar")
    manager.set_field("color", "#C44B3D")
    manager.set_field("numCategories", 8)
    manager.set_field("barOrdering", "descending")

    manager.select_chart_type("line-chart")
    assert dict(manager.config) == defaults_for("line-chart")
    for key in ("color", "numCategories", "barOrdering"):
        assert key not in manager.config


def test_select_unknown_chart_leaves_state_untouched(manager: ConfigurationStateManager) -> None:
    """An unknown id raises and keeps the current selection."""

    manager.select_chart_type("histogram")
    manager.set_field("numBins", 20)
    with pytest.raises(ChartTypeNotFound):
        manager.select_chart_type("pie-chart")
    assert manager.chart_id == "histogram"
    assert manager.config["numBins"] == 20


def test_set_field_while_idle_raises(manager: ConfigurationStateManager) -> None:
    """Field updates need a selected chart type."""

    with pytest.raises(NoChartSelected) as excinfo:
        manager.set_field("title", "x")
    assert isinstance(excinfo.value, RuntimeError)
    assert manager.state == "idle"


def test_enabling_a_palette_disables_the_others(manager: ConfigurationStateManager) -> None:
    """Blues then Reds leaves only Reds enabled."""

    manager.select_chart_type("vertical-bar")
    manager.set_field("useBluesPalette", True)
    assert _enabled_flags(manager.config) == ["useBluesPalette"]
    manager.set_field("useRedsPalette", True)
    assert _enabled_flags(manager.config) == ["useRedsPalette"]
    assert manager.config["useBluesPalette"] is False


def test_disabling_a_palette_touches_nothing_else(manager: ConfigurationStateManager) -> None:
    """Turning a flag off does not turn another on."""

    manager.select_chart_type("line-chart")
    manager.set_field("useMultiColor", False)
    assert _enabled_flags(manager.config) == []
    assert manager.config["showMarkers"] is True


def test_random_palette_updates_keep_at_most_one_flag(manager: ConfigurationStateManager) -> None:
    """Any sequence of flag updates leaves zero or one flag enabled."""

    rng = random.Random(1234)
    manager.select_chart_type("grouped-bar")
    for _ in range(200):
        manager.set_field(rng.choice(FLAGS), rng.choice((True, False)))
        assert len(_enabled_flags(manager.config)) <= 1


def test_config_snapshot_is_read_only(manager: ConfigurationStateManager) -> None:
    """Readers cannot mutate the live configuration."""

    snapshot = manager.select_chart_type("box-plot")
    with pytest.raises(TypeError):
        snapshot["title"] = "mutated"  # type: ignore[index]
    manager.set_field("title", "New")
    assert snapshot["title"] == ""
    assert manager.config["title"] == "New"


def test_go_home_returns_to_idle(manager: ConfigurationStateManager) -> None:
    """Going home clears the selection and configuration."""

    manager.select_chart_type("histogram")
    manager.go_home()
    assert manager.state == "idle"
    assert dict(manager.config) == {}
    with pytest.raises(NoChartSelected):
        manager.generate_code()


def test_generate_code_and_preview_follow_selection(manager: ConfigurationStateManager) -> None:
    """Script and preview are built from the live configuration."""

    manager.select_chart_type("vertical-bar")
    manager.set_field("title", "Accuracy by Model")
    assert "fig.suptitle('Accuracy by Model'" in manager.generate_code()
    assert manager.preview()["title"] == "Accuracy by Model"


def test_enforce_palette_exclusivity_returns_a_copy() -> None:
    """The input mapping is never mutated."""

    original = {"useBluesPalette": True, "useRedsPalette": False, "title": "t"}
    updated = enforce_palette_exclusivity(original, "useRedsPalette", True)
    assert original["useBluesPalette"] is True
    assert updated == {"useBluesPalette": False, "useRedsPalette": True, "title": "t"}
    assert enforce_palette_exclusivity(original, "title", "u")["useBluesPalette"] is True


def test_payload_round_trip(manager: ConfigurationStateManager) -> None:
    """to_payload/from_payload restores selection and configuration."""

    manager.select_chart_type("scatter-plot")
    manager.set_field("markerSize", 160)
    manager.set_field("useGreensPalette", True)
    restored = ConfigurationStateManager.from_payload(manager.to_payload())
    assert restored.chart_id == "scatter-plot"
    assert dict(restored.config) == dict(manager.config)


def test_from_payload_handles_missing_and_unknown_state() -> None:
    """Empty or stale payloads restore to idle."""

    assert ConfigurationStateManager.from_payload(None).state == "idle"
    assert ConfigurationStateManager.from_payload({"chartId": None, "config": {}}).state == "idle"
    assert ConfigurationStateManager.from_payload({"chartId": "pie-chart", "config": {}}).state == "idle"


def test_from_payload_sanitizes_tampered_config() -> None:
    """Unknown keys are dropped and at most one palette flag survives."""

    payload = {
        "chartId": "vertical-bar",
        "config": {
            "title": "Kept",
            "bogus": 1,
            "numCategories": [1, 2],
            "useRedsPalette": True,
            "useBluesPalette": True,
        },
    }
    restored = ConfigurationStateManager.from_payload(payload)
    assert restored.config["title"] == "Kept"
    assert "bogus" not in restored.config
    assert restored.config["numCategories"] == 5
    assert _enabled_flags(restored.config) == ["useBluesPalette"]
    assert payload["config"]["useRedsPalette"] is True


def test_from_payload_drops_values_that_break_their_control() -> None:
    """Stored values go through the same checks as live field updates."""

    payload = {
        "chartId": "vertical-bar",
        "config": {"title": 123, "labelRotation": 10, "barOrdering": "random", "valueDecimals": 2.0},
    }
    restored = ConfigurationStateManager.from_payload(payload)
    defaults = defaults_for("vertical-bar")
    assert restored.config["title"] == defaults["title"]
    assert restored.config["labelRotation"] == defaults["labelRotation"]
    assert restored.config["barOrdering"] == defaults["barOrdering"]
    assert restored.config["valueDecimals"] == 2
    assert restored.preview()["title"] == ""
    assert "# No title" in restored.generate_code()
