"""Stacked bar chart: composition of totals across categories.

Only the general (matplotlib) code style is offered.
"""

from __future__ import annotations

from typing import Final

from .. import controls
from ..numeric import config_count, value_decimals
from ..schema import ChartTypeDefinition, Config, Series, SeriesTable, frozen_config
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
    spine_code,
    title_code,
    y_axis_range_code,
)

MODELS: Final[tuple[str, ...]] = ("ResNet", "VGG", "MobileNet", "EfficientNet")

STACKS: Final[tuple[tuple[str, str, tuple[float, ...]], ...]] = (
    ("training", "Training", (45, 60, 30, 50)),
    ("validation", "Validation", (35, 25, 40, 30)),
    ("test", "Test", (20, 15, 25, 30)),
    ("tuning", "Tuning", (12, 18, 10, 14)),
    ("deployment", "Deployment", (8, 6, 9, 11)),
)

NUM_STACKS: Final[controls.Control] = controls.slider(
    "numStacks", "Number of Stacks", min=2, max=len(STACKS), step=1
)

DEFAULT_CONFIG: Final = frozen_config(
    {
        "useBluesPalette": True,
        "useRedsPalette": False,
        "useGreensPalette": False,
        "useMultiColor": False,
        "numStacks": 3,
        "labelRotation": 0,
        "showGrid": True,
        "showValues": False,
        "valueDecimals": 1,
        "ylabel": "Time (hours)",
        "xlabel": "Model Architecture",
        "title": "",
        "yMin": "",
        "yMax": "",
        "showReferenceLine": False,
        "referenceValue": "",
        "referenceLabel": "Target",
        "showLegend": True,
    }
)

CONTROLS: Final[tuple[controls.Control, ...]] = (
    controls.PALETTE_GROUP,
    NUM_STACKS,
    controls.LABEL_ROTATION,
    controls.GRID,
    controls.SHOW_VALUES,
    controls.VALUE_DECIMALS,
    controls.SHOW_LEGEND,
    *controls.AXIS,
    *controls.REFERENCE_LINE,
)


def dataset(config: Config) -> SeriesTable:
    """Return the models and the first `numStacks` stack segments."""

    count = config_count(config, "numStacks", default=3, low=2, high=len(STACKS))
    return SeriesTable(
        axis=MODELS,
        series=tuple(Series(name=label, values=values) for _, label, values in STACKS[:count]),
    )


def _segment_labels_code(config: Config) -> str:
    if not config.get("showValues"):
        return "# Value labels disabled"
    decimals = value_decimals(config)
    return f"""# Add value labels inside each segment
for bars in bar_groups:
    ax.bar_label(bars, fmt='{{:.{decimals}f}}', label_type='center', fontsize=9, color='#FFFFFF')"""


def generate_code(config: Config) -> str:
    """Generate a stacked bar chart script."""

    data = dataset(config)
    variables = [var for var, _, _ in STACKS[: len(data.series)]]
    lines = [f"models = {py_list(data.axis)}  # Category labels"]
    for idx, (var, series) in enumerate(zip(variables, data.series), start=1):
        lines.append(f"{var} = {py_list(series.values)}  # Stack {idx} values")
    lines.append(f"stacks = [{', '.join(variables)}]")
    lines.append(f"stack_labels = {py_list(s.name for s in data.series)}")

    return assemble(
        matplotlib_setup(),
        data_section(lines),
        create_figure(),
        color_code(config, var_name="colors", count=len(data.series), element="stacks", as_list=True),
        """# Create stacked bars
bottom = np.zeros(len(models))
bar_groups = []
for idx, (values, label) in enumerate(zip(stacks, stack_labels)):
    bars = ax.bar(models, values, bottom=bottom, label=label,
                  color=colors[idx % len(colors)], alpha=0.85)
    bar_groups.append(bars)
    bottom += np.array(values)""",
        title_code(config),
        axis_labels_code(config),
        label_rotation_code(config),
        grid_code(config, "y"),
        _segment_labels_code(config),
        y_axis_range_code(config),
        corner_legend_code(config),
        reference_line_code(config, "horizontal"),
        spine_code(),
        finish_code("stacked_bar_chart"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="stacked-bar",
    name="Stacked Bar Chart",
    category="bar",
    description="Show composition of totals across categories",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
