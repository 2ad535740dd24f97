"""Tests for preview payloads: domains, colors, box statistics and bins."""

from __future__ import annotations

import math

import pytest

from studio.charting.ordering import apply_ordering
from studio.charting.palettes import MULTI, interpolate
from studio.charting.preview import box_stats, build_preview, grow_bound, histogram_bins, shrink_bound
from studio.charting.registry import get_chart_type
from studio.charting.types.histogram import INFERENCE_TIMES

pytestmark = pytest.mark.unit


def _preview(chart_id: str, **overrides):
    definition = get_chart_type(chart_id)
    return build_preview(definition, {**definition.defaults(), **overrides})


def test_vertical_bar_domain_defaults_and_user_override() -> None:
    """The y minimum defaults to 90% of the smallest value; typed bounds win."""

    assert _preview("vertical-bar")["yDomain"] == {"min": 79, "max": "auto"}
    assert _preview("vertical-bar", yMin="50", yMax="100")["yDomain"] == {"min": 50.0, "max": 100.0}
    assert _preview("vertical-bar", yMin="", yMax="oops")["yDomain"] == {"min": 79, "max": "auto"}


def test_horizontal_bar_domain_starts_at_zero() -> None:
    """Horizontal bars span zero to 110% of the largest value."""

    payload = _preview("horizontal-bar")
    assert payload["orientation"] == "horizontal"
    assert payload["xDomain"] == {"min": 0, "max": 87}


def test_stacked_and_grouped_bar_domains() -> None:
    """Stacked bars start at zero; grouped bars use the overall minimum."""

    assert _preview("stacked-bar")["yDomain"] == {"min": 0, "max": "auto"}
    assert _preview("grouped-bar")["yDomain"] == {"min": math.floor(77.8 * 0.9), "max": "auto"}


def test_line_chart_domains() -> None:
    """Line charts pad y by 5% and span the x values exactly."""

    payload = _preview("line-chart")
    assert payload["xDomain"] == {"min": 0.0, "max": 70.0}
    assert payload["yDomain"] == {"min": 28, "max": 99}


def test_scatter_domains_pad_both_axes() -> None:
    """Scatter plots pad both axes by 10%."""

    payload = _preview("scatter-plot")
    assert payload["xDomain"] == {"min": 10, "max": math.ceil(48 * 1.1)}
    assert payload["yDomain"]["min"] == 0


def test_margins_move_away_from_zero_for_negative_values() -> None:
    """Negative extremes widen the range instead of shrinking it."""

    assert shrink_bound(-10, 0.9) == -11
    assert grow_bound(-10, 1.1) == -9
    assert shrink_bound(10, 0.9) == 9
    assert grow_bound(10, 1.1) == 11


def test_bar_preview_reflects_ordering_and_value_labels() -> None:
    """Bars are sorted like the script and carry formatted value labels."""

    payload = _preview("vertical-bar", barOrdering="ascending", showValues=True, valueDecimals=2)
    assert [bar["label"] for bar in payload["bars"]] == ["VGG", "MobileNet", "ViT", "ResNet", "EfficientNet"]
    assert payload["bars"][0]["valueLabel"] == "88.50"


@pytest.mark.parametrize("ordering", ["original", "ascending", "descending"])
def test_bar_preview_order_matches_apply_ordering(ordering: str) -> None:
    """Simple bars are ordered by the shared ordering policy."""

    definition = get_chart_type("horizontal-bar")
    config = {**definition.defaults(), "barOrdering": ordering}
    data = definition.dataset(config)
    labels, values = apply_ordering(data.labels, data.values, ordering)  # type: ignore[arg-type]
    bars = build_preview(definition, config)["bars"]
    assert [bar["label"] for bar in bars] == labels
    assert [bar["value"] for bar in bars] == values


def test_reference_line_orientation_follows_bar_direction() -> None:
    """Reference lines cross the value axis."""

    vertical = _preview("vertical-bar", showReferenceLine=True, referenceValue="90")
    assert vertical["referenceLine"] == {"value": 90.0, "label": "Baseline", "orientation": "horizontal"}
    horizontal = _preview("horizontal-bar", showReferenceLine=True, referenceValue="50")
    assert horizontal["referenceLine"]["orientation"] == "vertical"
    assert _preview("vertical-bar", showReferenceLine=True, referenceValue="")["referenceLine"] is None


def test_box_stats_match_inclusive_quartiles_and_whiskers() -> None:
    """The Gemini scores have one low outlier beyond 1.5 IQR."""

    definition = get_chart_type("box-plot")
    gemini = next(group for group in definition.sample_data.groups if group.name == "Gemini")
    q1, median, q3, low, high, outliers = box_stats(gemini.values)
    assert (q1, median, q3) == (84, 90, 93)
    assert (low, high) == (75, 96)
    assert outliers == [65]


def test_box_plot_preview_colors_and_domain() -> None:
    """Boxes take interpolated Multi colors and the domain pads drawn points by 5."""

    payload = _preview("box-plot")
    assert [box["color"] for box in payload["boxes"]] == list(interpolate(MULTI, 4))
    assert payload["yDomain"] == {"min": 60, "max": 104}

    hidden = _preview("box-plot", showOutliers=False)
    assert all(box["outliers"] == [] for box in hidden["boxes"])
    assert hidden["yDomain"]["min"] == 65


def test_histogram_bins_cover_every_sample() -> None:
    """Bins are equal width and the maximum lands in the last bin."""

    bins = histogram_bins(INFERENCE_TIMES, 12)
    assert len(bins) == 12
    assert sum(b["count"] for b in bins) == len(INFERENCE_TIMES)
    assert bins[0]["start"] == 43
    assert bins[-1]["end"] == pytest.approx(72)
    assert bins[-1]["count"] >= 1


def test_histogram_bins_handle_constant_samples() -> None:
    """A zero-width range still yields the requested bins."""

    bins = histogram_bins([5, 5, 5], 4)
    assert sum(b["count"] for b in bins) == 3
    assert bins[0]["start"] == 4.5


def test_histogram_preview_domain_uses_peak_count() -> None:
    """The y domain is 110% of the tallest bin."""

    payload = _preview("histogram", numBins=10)
    peak = max(b["count"] for b in payload["bins"])
    assert len(payload["bins"]) == 10
    assert payload["yDomain"] == {"min": 0, "max": math.ceil(peak * 1.1)}
    assert payload["color"] == "#4C6EE6"


def test_legend_payload_only_for_charts_with_legends() -> None:
    """Charts without a legend toggle carry no legend payload."""

    assert _preview("vertical-bar")["legend"] is None
    assert _preview("scatter-plot")["legend"] == {"show": True, "position": "top"}
    assert _preview("grouped-bar")["legend"] == {"show": True, "position": "upper right"}
