"""Histogram: frequency distribution of a single sample."""

from __future__ import annotations

from typing import Final

from .. import controls
from ..numeric import config_float, config_int, format_number
from ..schema import ChartTypeDefinition, Config, Samples, frozen_config, output_format
from ..seaborn_snippets import seaborn_setup, seaborn_spine_code
from ..snippets import (
    DATA_FOOTER,
    DATA_HEADER,
    assemble,
    axis_labels_code,
    color_code,
    create_figure,
    finish_code,
    grid_code,
    matplotlib_setup,
    spine_code,
    title_code,
    y_axis_range_code,
)

# Model inference times in milliseconds.
INFERENCE_TIMES: Final[tuple[float, ...]] = (
    45, 52, 48, 61, 55, 53, 49, 58, 62, 51,
    47, 56, 59, 54, 50, 63, 57, 46, 60, 52,
    55, 48, 64, 53, 49, 57, 51, 58, 54, 50,
    67, 72, 44, 69, 55, 52, 61, 48, 56, 53,
    71, 47, 59, 54, 65, 51, 58, 49, 62, 55,
    43, 68, 52, 57, 50, 63, 54, 48, 60, 53,
    66, 51, 56, 49, 61, 55, 58, 52, 64, 47,
    70, 54, 59, 50, 62, 53, 57, 48, 65, 51,
)

NUM_BINS: Final[controls.Control] = controls.slider("numBins", "Number of Bins", min=5, max=25, step=1)
BAR_ALPHA: Final[controls.Control] = controls.slider(
    "barAlpha", "Bar Transparency", min=0.3, max=1.0, step=0.1
)
SHOW_EDGES: Final[controls.Control] = controls.toggle("showEdges", "Show Bar Edges")

DEFAULT_CONFIG: Final = frozen_config(
    {
        "color": "#4C6EE6",
        "showGrid": True,
        "numBins": 12,
        "showEdges": True,
        "barAlpha": 0.7,
        "xlabel": "Inference Time (ms)",
        "ylabel": "Frequency",
        "title": "",
        "yMin": "",
        "yMax": "",
        "outputFormat": "general",
    }
)

CONTROLS: Final[tuple[controls.Control, ...]] = (
    controls.OUTPUT_FORMAT,
    controls.COLOR,
    NUM_BINS,
    BAR_ALPHA,
    SHOW_EDGES,
    controls.GRID,
    *controls.AXIS,
)


def dataset(config: Config) -> Samples:
    """Return the inference time sample (fixed size)."""

    return Samples(values=INFERENCE_TIMES)


def num_bins(config: Config) -> int:
    """Return the configured bin count, clamped to the slider range."""

    return min(25, max(5, config_int(config, "numBins", 12)))


def generate_code(config: Config) -> str:
    """Generate a histogram script."""

    data = dataset(config)
    if output_format(config) == "statistical":
        return _seaborn_code(config, data)
    return _matplotlib_code(config, data)


def _data_block(data: Samples) -> str:
    rows = []
    for start in range(0, len(data.values), 10):
        chunk = data.values[start : start + 10]
        rows.append("    " + ", ".join(format_number(value) for value in chunk) + ",")
    return "\n".join(
        (DATA_HEADER, "# Inference time samples (milliseconds)", "inference_times = [", *rows, "]", DATA_FOOTER)
    )


def _hist_kwargs(config: Config) -> str:
    edge = "'#000000'" if config.get("showEdges") else "'none'"
    alpha = format_number(config_float(config, "barAlpha", 0.7))
    return f"bins={num_bins(config)}, color=bar_color, alpha={alpha}, edgecolor={edge}, linewidth=1.2"


def _matplotlib_code(config: Config, data: Samples) -> str:
    return assemble(
        matplotlib_setup(),
        _data_block(data),
        create_figure(),
        color_code(config, var_name="bar_color", count=1, element="bins"),
        f"# Create histogram\nn, bins, patches = ax.hist(inference_times, {_hist_kwargs(config)})",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "y"),
        y_axis_range_code(config),
        spine_code(),
        finish_code("histogram"),
    )


def _seaborn_code(config: Config, data: Samples) -> str:
    return assemble(
        seaborn_setup(),
        _data_block(data),
        "# Long-form DataFrame\ndf = pd.DataFrame({'inference_time': inference_times})",
        create_figure(),
        color_code(config, var_name="bar_color", count=1, element="bins"),
        f"# Create histogram\nsns.histplot(data=df, x='inference_time', {_hist_kwargs(config)}, ax=ax)",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "y"),
        y_axis_range_code(config),
        seaborn_spine_code(),
        finish_code("histogram"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="histogram",
    name="Histogram",
    category="histogram",
    description="Visualize frequency distribution of values",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
