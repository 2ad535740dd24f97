"""Grouped bar chart: several series side by side for each category."""

from __future__ import annotations

from typing import Final

from .. import controls
from ..numeric import config_count
from ..schema import ChartTypeDefinition, Config, Series, SeriesTable, frozen_config, output_format
from ..seaborn_snippets import (
    legend_flag,
    seaborn_corner_legend_code,
    seaborn_setup,
    seaborn_spine_code,
    seaborn_value_labels_code,
)
from ..snippets import (
    assemble,
    axis_labels_code,
    color_code,
    corner_legend_code,
    create_figure,
    data_section,
    finish_code,
    grid_code,
    label_rotation_code,
    matplotlib_setup,
    py_list,
    reference_line_code,
    sorting_code,
    spine_code,
    title_code,
    value_labels_code,
    y_axis_range_code,
)

EPOCHS: Final[tuple[str, ...]] = ("Epoch 5", "Epoch 10", "Epoch 15", "Epoch 20")

RUNS: Final[tuple[tuple[str, str, tuple[float, ...]], ...]] = (
    ("run1", "Run 1", (78.2, 85.3, 88.7, 90.5)),
    ("run2", "Run 2", (79.5, 86.1, 89.2, 91.1)),
    ("run3", "Run 3", (77.8, 84.9, 88.3, 90.2)),
    ("run4", "Run 4", (76.4, 83.7, 87.9, 89.6)),
    ("run5", "Run 5", (80.1, 86.8, 89.6, 91.4)),
    ("run6", "Run 6", (77.1, 84.2, 87.5, 89.9)),
)

NUM_SERIES: Final[controls.Control] = controls.slider(
    "numSeries", "Number of Series", min=1, max=len(RUNS), step=1
)

DEFAULT_CONFIG: Final = frozen_config(
    {
        "useBluesPalette": True,
        "useRedsPalette": False,
        "useGreensPalette": False,
        "useMultiColor": False,
        "numSeries": 3,
        "labelRotation": 0,
        "showGrid": True,
        "showValues": False,
        "valueDecimals": 1,
        "ylabel": "Validation Accuracy (%)",
        "xlabel": "Training Epoch",
        "title": "",
        "yMin": "",
        "yMax": "",
        "showReferenceLine": False,
        "referenceValue": "",
        "referenceLabel": "Baseline",
        "barOrdering": "original",
        "showLegend": True,
        "outputFormat": "general",
    }
)

CONTROLS: Final[tuple[controls.Control, ...]] = (
    controls.OUTPUT_FORMAT,
    controls.PALETTE_GROUP,
    NUM_SERIES,
    controls.BAR_ORDERING,
    controls.LABEL_ROTATION,
    controls.GRID,
    controls.SHOW_VALUES,
    controls.VALUE_DECIMALS,
    controls.SHOW_LEGEND,
    *controls.AXIS,
    *controls.REFERENCE_LINE,
)


def dataset(config: Config) -> SeriesTable:
    """Return the epochs and the first `numSeries` training runs."""

    count = config_count(config, "numSeries", default=3, low=1, high=len(RUNS))
    return SeriesTable(
        axis=EPOCHS,
        series=tuple(Series(name=label, values=values) for _, label, values in RUNS[:count]),
    )


def generate_code(config: Config) -> str:
    """Generate a grouped bar chart script."""

    data = dataset(config)
    if output_format(config) == "statistical":
        return _seaborn_code(config, data)
    return _matplotlib_code(config, data)


def _variables(data: SeriesTable) -> list[str]:
    return [var for var, _, _ in RUNS[: len(data.series)]]


def _data_block(data: SeriesTable) -> str:
    lines = [f"epochs = {py_list(data.axis)}  # Category labels"]
    for idx, (var, series) in enumerate(zip(_variables(data), data.series), start=1):
        lines.append(f"{var} = {py_list(series.values)}  # Series {idx} values")
    lines.append(f"series = [{', '.join(_variables(data))}]")
    lines.append(f"series_labels = {py_list(s.name for s in data.series)}")
    return data_section(lines)


def _sorting(config: Config, data: SeriesTable) -> str:
    variables = _variables(data)
    sorting = sorting_code(
        config,
        variables[0],
        "epochs",
        key_expr=" + ".join(f"{var}[i]" for var in variables),
        extra_vars=variables[1:],
    )
    if sorting.startswith("# Original"):
        return sorting
    # Rebind the series list to the reordered lists.
    return f"{sorting}\nseries = [{', '.join(variables)}]"


def _matplotlib_code(config: Config, data: SeriesTable) -> str:
    return assemble(
        matplotlib_setup(),
        _data_block(data),
        _sorting(config, data),
        create_figure(),
        color_code(config, var_name="colors", count=len(data.series), element="series", as_list=True),
        """# Set up bar positions
x = np.arange(len(epochs))
width = 0.8 / len(series)

# Create grouped bars
bar_groups = []
for idx, (values, label) in enumerate(zip(series, series_labels)):
    offset = (idx - (len(series) - 1) / 2) * width
    bars = ax.bar(x + offset, values, width, label=label,
                  color=colors[idx % len(colors)], alpha=0.85)
    bar_groups.append(bars)
all_bars = [bar for group in bar_groups for bar in group]""",
        title_code(config),
        axis_labels_code(config),
        "# Set x-axis ticks\nax.set_xticks(x)\nax.set_xticklabels(epochs)",
        label_rotation_code(config),
        grid_code(config, "y"),
        value_labels_code(config, "vertical", "all_bars"),
        y_axis_range_code(config),
        corner_legend_code(config),
        reference_line_code(config, "horizontal"),
        spine_code(),
        finish_code("grouped_bar_chart"),
    )


def _seaborn_code(config: Config, data: SeriesTable) -> str:
    return assemble(
        seaborn_setup(),
        _data_block(data),
        _sorting(config, data),
        "# Long-form DataFrame: one row per (epoch, series)\n"
        "df = pd.DataFrame({'epoch': epochs, **dict(zip(series_labels, series))})\n"
        "df = df.melt(id_vars='epoch', var_name='series', value_name='value')",
        create_figure(),
        color_code(config, var_name="colors", count=len(data.series), element="series", as_list=True),
        "# Create grouped bars\n"
        "sns.barplot(data=df, x='epoch', y='value', hue='series', palette=colors,\n"
        f"            legend={legend_flag(config)}, alpha=0.85, ax=ax)",
        title_code(config),
        axis_labels_code(config),
        label_rotation_code(config),
        grid_code(config, "y"),
        seaborn_value_labels_code(config),
        y_axis_range_code(config),
        seaborn_corner_legend_code(config),
        reference_line_code(config, "horizontal"),
        seaborn_spine_code(),
        finish_code("grouped_bar_chart"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="grouped-bar",
    name="Grouped Bar Chart",
    category="bar",
    description="Compare multiple metrics across categories",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
