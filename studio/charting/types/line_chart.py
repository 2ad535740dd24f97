"""Line chart: trends of several series over a shared x axis."""

from __future__ import annotations

from typing import Final

from .. import controls
from ..numeric import config_count, config_float, format_number, py_str
from ..schema import ChartTypeDefinition, Config, Series, SeriesTable, frozen_config, output_format
from ..seaborn_snippets import legend_flag, seaborn_legend_code, seaborn_setup, seaborn_spine_code
from ..snippets import (
    DATA_FOOTER,
    DATA_HEADER,
    assemble,
    axis_labels_code,
    color_code,
    create_figure,
    finish_code,
    grid_code,
    legend_code,
    matplotlib_setup,
    py_list,
    spine_code,
    title_code,
    x_axis_range_code,
    y_axis_range_code,
)

EPOCHS: Final[tuple[float, ...]] = (0, 10, 20, 30, 40, 50, 60, 70)

CURVES: Final[tuple[Series, ...]] = (
    Series(name="GPT Models", values=(35, 58, 72, 81, 87, 91, 93, 94)),
    Series(name="BERT Models", values=(42, 61, 74, 82, 87, 90, 91.5, 92)),
    Series(name="LLaMA Models", values=(30, 54, 68, 78, 85, 89, 92, 94)),
    Series(name="T5 Models", values=(38, 56, 69, 77, 83, 87, 89, 90)),
    Series(name="Mistral Models", values=(33, 57, 71, 80, 86, 90, 92.5, 93.5)),
    Series(name="Falcon Models", values=(28, 49, 63, 74, 81, 86, 88, 89.5)),
)

NUM_SERIES: Final[controls.Control] = controls.slider(
    "numSeries", "Number of Series", min=1, max=len(CURVES), step=1
)
LINE_WIDTH: Final[controls.Control] = controls.slider(
    "lineWidth", "Line Width", min=1, max=5, step=0.5, unit="px"
)
SHOW_MARKERS: Final[controls.Control] = controls.toggle("showMarkers", "Show Markers")
MARKER_SIZE: Final[controls.Control] = controls.slider(
    "markerSize", "Marker Size", min=3, max=12, step=1, unit="px"
)

DEFAULT_CONFIG: Final = frozen_config(
    {
        "useBluesPalette": False,
        "useRedsPalette": False,
        "useGreensPalette": False,
        "useMultiColor": True,
        "numSeries": 3,
        "showGrid": True,
        "lineWidth": 2,
        "showMarkers": True,
        "markerSize": 6,
        "showLegend": True,
        "legendPosition": "top",
        "xlabel": "Training Epoch",
        "ylabel": "Validation Accuracy (%)",
        "title": "",
        "xMin": "",
        "xMax": "",
        "yMin": "",
        "yMax": "",
        "outputFormat": "general",
    }
)

CONTROLS: Final[tuple[controls.Control, ...]] = (
    controls.OUTPUT_FORMAT,
    controls.PALETTE_GROUP,
    NUM_SERIES,
    LINE_WIDTH,
    SHOW_MARKERS,
    MARKER_SIZE,
    controls.GRID,
    *controls.LEGEND,
    *controls.AXIS_BOTH,
)


def dataset(config: Config) -> SeriesTable:
    """Return the epoch axis and the first `numSeries` curves."""

    count = config_count(config, "numSeries", default=3, low=1, high=len(CURVES))
    return SeriesTable(axis=EPOCHS, series=CURVES[:count])


def generate_code(config: Config) -> str:
    """Generate a line chart script."""

    data = dataset(config)
    if output_format(config) == "statistical":
        return _seaborn_code(config, data)
    return _matplotlib_code(config, data)


def _data_block(data: SeriesTable) -> str:
    lines = [DATA_HEADER, f"epochs = {py_list(data.axis)}  # X-axis values", "", "series_data = {"]
    for idx, series in enumerate(data.series, start=1):
        lines.append(f"    {py_str(series.name)}: {py_list(series.values)},  # Series {idx}")
    lines += ["}", DATA_FOOTER]
    return "\n".join(lines)


def _line_width(config: Config) -> str:
    return format_number(config_float(config, "lineWidth", 2))


def _marker_kwargs(config: Config) -> str:
    if not config.get("showMarkers"):
        return ""
    return f"marker='o', markersize={format_number(config_float(config, 'markerSize', 6))}, "


def _matplotlib_code(config: Config, data: SeriesTable) -> str:
    return assemble(
        matplotlib_setup(),
        _data_block(data),
        create_figure(),
        color_code(config, var_name="colors", count=len(data.series), element="series", as_list=True),
        f"""# Plot each series
for idx, (series_name, values) in enumerate(series_data.items()):
    ax.plot(epochs, values,
            color=colors[idx % len(colors)],
            linewidth={_line_width(config)},
            {_marker_kwargs(config)}label=series_name,
            alpha=0.9)""",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "both"),
        legend_code(config, count=len(data.series)),
        x_axis_range_code(config),
        y_axis_range_code(config),
        spine_code(),
        finish_code("line_chart"),
    )


def _seaborn_code(config: Config, data: SeriesTable) -> str:
    return assemble(
        seaborn_setup(),
        _data_block(data),
        """# Long-form DataFrame: one row per (epoch, series)
df = pd.DataFrame([
    {'epoch': epoch, 'value': value, 'series': series_name}
    for series_name, values in series_data.items()
    for epoch, value in zip(epochs, values)
])""",
        create_figure(),
        color_code(config, var_name="colors", count=len(data.series), element="series", as_list=True),
        f"""# Plot each series
sns.lineplot(data=df, x='epoch', y='value', hue='series', palette=colors,
             linewidth={_line_width(config)}, {_marker_kwargs(config)}alpha=0.9,
             legend={legend_flag(config)}, ax=ax)""",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "both"),
        seaborn_legend_code(config, count=len(data.series)),
        x_axis_range_code(config),
        y_axis_range_code(config),
        seaborn_spine_code(),
        finish_code("line_chart"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="line-chart",
    name="Line Chart",
    category="line",
    description="Show trends and changes over time",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
