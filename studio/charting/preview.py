"""Preview payloads for client-side chart renderers.

The payload carries everything a renderer needs to draw the same chart the
generated script draws: per-element colors from the shared palette policy,
the shared ordering, and inferred axis domains. Numeric text fields typed by
the user always win over inferred bounds.
"""

from __future__ import annotations

import math
import statistics
from collections.abc import Sequence
from typing import Literal, TypedDict, Union

from .numeric import config_number, format_value, value_decimals
from .ordering import apply_ordering, ordering_from_config, sort_permutation
from .palettes import element_colors
from .schema import (
    CategoryValues,
    ChartTypeDefinition,
    Config,
    Distributions,
    PointGroups,
    Samples,
    SeriesTable,
    output_format,
)
from .types.histogram import num_bins

Bound = Union[float, Literal["auto"]]


class AxisDomain(TypedDict):
    """Lower and upper bound of one axis ("auto" lets the renderer decide)."""

    min: Bound
    max: Bound


class Bar(TypedDict):
    label: str
    value: float
    color: str
    valueLabel: str | None


class PreviewSeries(TypedDict):
    name: str
    color: str
    values: list[float]
    valueLabels: list[str] | None


class PointGroupPayload(TypedDict):
    name: str
    color: str
    points: list[list[float]]


class BoxStats(TypedDict):
    label: str
    color: str
    q1: float
    median: float
    q3: float
    whiskerLow: float
    whiskerHigh: float
    outliers: list[float]


class HistogramBin(TypedDict):
    start: float
    end: float
    count: int


class ReferenceLine(TypedDict):
    value: float
    label: str
    orientation: Literal["horizontal", "vertical"]


class Legend(TypedDict):
    show: bool
    position: str


class PreviewPayload(TypedDict, total=False):
    """Everything a preview renderer needs for one chart."""

    chartId: str
    category: str
    outputFormat: str
    title: str
    xlabel: str
    ylabel: str
    showGrid: bool
    labelRotation: float
    orientation: Literal["vertical", "horizontal"]
    stacked: bool
    bars: list[Bar]
    categories: list[str]
    x: list[float]
    series: list[PreviewSeries]
    groups: list[PointGroupPayload]
    boxes: list[BoxStats]
    bins: list[HistogramBin]
    color: str
    xDomain: AxisDomain
    yDomain: AxisDomain
    referenceLine: ReferenceLine | None
    legend: Legend | None


def build_preview(definition: ChartTypeDefinition, config: Config) -> PreviewPayload:
    """Build the preview payload for a chart type and configuration.

    Args:
        definition: Chart type being previewed.
        config: Live configuration (typically the state manager snapshot).

    Returns:
        PreviewPayload for the definition's category.
    """

    payload: PreviewPayload = {
        "chartId": definition.id,
        "category": definition.category,
        "outputFormat": output_format(config),
        "title": str(config.get("title") or ""),
        "xlabel": str(config.get("xlabel") or ""),
        "ylabel": str(config.get("ylabel") or ""),
        "showGrid": bool(config.get("showGrid")),
        "referenceLine": None,
        "legend": _legend(config),
    }
    rotation = config.get("labelRotation")
    if isinstance(rotation, (int, float)) and not isinstance(rotation, bool):
        payload["labelRotation"] = rotation

    data = definition.dataset(config)
    if isinstance(data, CategoryValues):
        horizontal = definition.id == "horizontal-bar"
        payload.update(_simple_bars(config, data, horizontal=horizontal))
        payload["referenceLine"] = _reference_line(config, "vertical" if horizontal else "horizontal")
    elif isinstance(data, SeriesTable) and definition.category == "bar":
        stacked = definition.id == "stacked-bar"
        payload.update(_multi_bars(config, data, stacked=stacked))
        payload["referenceLine"] = _reference_line(config, "horizontal")
    elif isinstance(data, SeriesTable):
        payload.update(_lines(config, data))
    elif isinstance(data, PointGroups):
        payload.update(_scatter(config, data))
    elif isinstance(data, Distributions):
        payload.update(_boxes(config, data))
    elif isinstance(data, Samples):
        payload.update(_histogram(config, data))
    else:
        raise TypeError(f"Unsupported dataset for preview: {type(data).__name__}")
    return payload


def shrink_bound(value: float, factor: float) -> float:
    """Lower bound with a margin: `floor(value * factor)`, mirrored for negatives."""

    if value < 0:
        return math.floor(value * (2 - factor))
    return math.floor(value * factor)


def grow_bound(value: float, factor: float) -> float:
    """Upper bound with a margin: `ceil(value * factor)`, mirrored for negatives."""

    if value < 0:
        return math.ceil(value * (2 - factor))
    return math.ceil(value * factor)


def _domain(config: Config, axis: Literal["x", "y"], lower: Bound, upper: Bound) -> AxisDomain:
    user_lower = config_number(config, f"{axis}Min")
    user_upper = config_number(config, f"{axis}Max")
    return {
        "min": user_lower if user_lower is not None else lower,
        "max": user_upper if user_upper is not None else upper,
    }


def _value_labels(config: Config, values: Sequence[float]) -> list[str] | None:
    if not config.get("showValues"):
        return None
    decimals = value_decimals(config)
    return [format_value(value, decimals) for value in values]


def _simple_bars(config: Config, data: CategoryValues, *, horizontal: bool) -> PreviewPayload:
    labels, values = apply_ordering(data.labels, data.values, ordering_from_config(config))
    colors = element_colors(config, len(values))
    value_labels = _value_labels(config, values) or [None] * len(values)
    bars: list[Bar] = [
        {"label": label, "value": value, "color": color, "valueLabel": text}
        for label, value, color, text in zip(labels, values, colors, value_labels)
    ]
    payload: PreviewPayload = {"orientation": "horizontal" if horizontal else "vertical", "bars": bars}
    if horizontal:
        lower = 0 if min(values) >= 0 else shrink_bound(min(values), 0.9)
        payload["xDomain"] = _domain(config, "x", lower, grow_bound(max(values), 1.1))
    else:
        payload["yDomain"] = _domain(config, "y", shrink_bound(min(values), 0.9), "auto")
    return payload


def _multi_bars(config: Config, data: SeriesTable, *, stacked: bool) -> PreviewPayload:
    # Grouped bars sort categories by their row total, like the script does.
    totals = [sum(series.values[i] for series in data.series) for i in range(len(data.axis))]
    order = sort_permutation(totals, "original" if stacked else ordering_from_config(config))
    colors = element_colors(config, len(data.series))
    series: list[PreviewSeries] = []
    for item, color in zip(data.series, colors):
        values = [item.values[i] for i in order]
        series.append(
            {"name": item.name, "color": color, "values": values, "valueLabels": _value_labels(config, values)}
        )
    payload: PreviewPayload = {
        "orientation": "vertical",
        "stacked": stacked,
        "categories": [str(data.axis[i]) for i in order],
        "series": series,
    }
    if stacked:
        payload["yDomain"] = _domain(config, "y", 0, "auto")
    else:
        lowest = min(value for item in data.series for value in item.values)
        payload["yDomain"] = _domain(config, "y", shrink_bound(lowest, 0.9), "auto")
    return payload


def _lines(config: Config, data: SeriesTable) -> PreviewPayload:
    colors = element_colors(config, len(data.series))
    xs = [float(x) for x in data.axis]
    values = [value for item in data.series for value in item.values]
    return {
        "x": xs,
        "series": [
            {"name": item.name, "color": color, "values": list(item.values), "valueLabels": None}
            for item, color in zip(data.series, colors)
        ],
        "xDomain": _domain(config, "x", min(xs), max(xs)),
        "yDomain": _domain(config, "y", shrink_bound(min(values), 0.95), grow_bound(max(values), 1.05)),
    }


def _scatter(config: Config, data: PointGroups) -> PreviewPayload:
    colors = element_colors(config, len(data.groups))
    xs = [x for group in data.groups for x in group.x]
    ys = [y for group in data.groups for y in group.y]
    return {
        "groups": [
            {"name": group.name, "color": color, "points": [[x, y] for x, y in zip(group.x, group.y)]}
            for group, color in zip(data.groups, colors)
        ],
        "xDomain": _domain(config, "x", shrink_bound(min(xs), 0.9), grow_bound(max(xs), 1.1)),
        "yDomain": _domain(config, "y", shrink_bound(min(ys), 0.9), grow_bound(max(ys), 1.1)),
    }


def box_stats(values: Sequence[float]) -> tuple[float, float, float, float, float, list[float]]:
    """Return `(q1, median, q3, whisker_low, whisker_high, outliers)`.

    Quartiles use linear interpolation between order statistics and whiskers
    reach the furthest datum within 1.5 IQR, matching matplotlib's boxplot.
    """

    q1, median, q3 = statistics.quantiles(values, n=4, method="inclusive")
    iqr = q3 - q1
    low_fence = q1 - 1.5 * iqr
    high_fence = q3 + 1.5 * iqr
    inside = [value for value in values if low_fence <= value <= high_fence]
    outliers = sorted(value for value in values if value < low_fence or value > high_fence)
    return q1, median, q3, min(inside), max(inside), outliers


def _boxes(config: Config, data: Distributions) -> PreviewPayload:
    colors = element_colors(config, len(data.groups))
    show_outliers = bool(config.get("showOutliers"))
    boxes: list[BoxStats] = []
    drawn: list[float] = []
    for group, color in zip(data.groups, colors):
        q1, median, q3, low, high, outliers = box_stats(group.values)
        if not show_outliers:
            outliers = []
        drawn.extend((low, high, *outliers))
        boxes.append(
            {
                "label": group.name,
                "color": color,
                "q1": q1,
                "median": median,
                "q3": q3,
                "whiskerLow": low,
                "whiskerHigh": high,
                "outliers": outliers,
            }
        )
    return {
        "boxes": boxes,
        "yDomain": _domain(config, "y", math.floor(min(drawn) - 5), math.ceil(max(drawn) + 5)),
    }


def histogram_bins(values: Sequence[float], count: int) -> list[HistogramBin]:
    """Split `values` into `count` equal-width bins over their range.

    The last bin is closed on the right so the maximum is counted.
    """

    low, high = min(values), max(values)
    if low == high:
        low, high = low - 0.5, high + 0.5
    width = (high - low) / count
    counts = [0] * count
    for value in values:
        counts[min(math.floor((value - low) / width), count - 1)] += 1
    return [
        {"start": low + i * width, "end": low + (i + 1) * width, "count": n}
        for i, n in enumerate(counts)
    ]


def _histogram(config: Config, data: Samples) -> PreviewPayload:
    bins = histogram_bins(data.values, num_bins(config))
    peak = max(b["count"] for b in bins)
    return {
        "bins": bins,
        "color": element_colors(config, 1)[0],
        "yDomain": _domain(config, "y", 0, math.ceil(peak * 1.1)),
    }


def _reference_line(config: Config, orientation: Literal["horizontal", "vertical"]) -> ReferenceLine | None:
    value = config_number(config, "referenceValue")
    if not config.get("showReferenceLine") or value is None:
        return None
    return {"value": value, "label": str(config.get("referenceLabel") or "Reference"), "orientation": orientation}


def _legend(config: Config) -> Legend | None:
    if "showLegend" not in config:
        return None
    position = config.get("legendPosition")
    return {
        "show": bool(config.get("showLegend")),
        "position": position if isinstance(position, str) else "upper right",
    }
