"""Horizontal bar chart: compare values with long category names."""

from __future__ import annotations

from typing import Final

from .. import controls
from ..numeric import config_count
from ..schema import CategoryValues, ChartTypeDefinition, Config, frozen_config, output_format
from ..seaborn_snippets import seaborn_setup, seaborn_spine_code, seaborn_value_labels_code
from ..snippets import (
    assemble,
    axis_labels_code,
    color_code,
    create_figure,
    data_section,
    finish_code,
    grid_code,
    matplotlib_setup,
    py_list,
    reference_line_code,
    sorting_code,
    spine_code,
    title_code,
    value_labels_code,
    x_axis_range_code,
)

MODELS: Final[tuple[tuple[str, float], ...]] = (
    ("BERT-Base", 45.2),
    ("GPT-2", 78.5),
    ("T5-Small", 62.3),
    ("DistilBERT", 28.7),
    ("RoBERTa", 51.8),
    ("ALBERT", 33.4),
    ("XLNet", 69.1),
    ("ELECTRA", 40.6),
    ("DeBERTa", 57.9),
    ("BART", 64.2),
)

NUM_CATEGORIES: Final[controls.Control] = controls.slider(
    "numCategories", "Number of Bars", min=2, max=len(MODELS), step=1
)

DEFAULT_CONFIG: Final = frozen_config(
    {
        "color": "#4C6EE6",
        "useBluesPalette": False,
        "useRedsPalette": False,
        "useGreensPalette": False,
        "useMultiColor": False,
        "numCategories": 5,
        "showGrid": True,
        "showValues": True,
        "valueDecimals": 1,
        "ylabel": "Model",
        "xlabel": "Inference Time (ms)",
        "title": "",
        "xMin": "",
        "xMax": "",
        "showReferenceLine": False,
        "referenceValue": "",
        "referenceLabel": "Baseline",
        "barOrdering": "original",
        "outputFormat": "general",
    }
)

CONTROLS: Final[tuple[controls.Control, ...]] = (
    controls.OUTPUT_FORMAT,
    *controls.COLORS,
    NUM_CATEGORIES,
    controls.BAR_ORDERING,
    controls.GRID,
    controls.SHOW_VALUES,
    controls.VALUE_DECIMALS,
    *controls.AXIS_HORIZONTAL,
    *controls.REFERENCE_LINE,
)


def dataset(config: Config) -> CategoryValues:
    """Return the first `numCategories` models and their inference time."""

    count = config_count(config, "numCategories", default=5, low=2, high=len(MODELS))
    rows = MODELS[:count]
    return CategoryValues(labels=tuple(name for name, _ in rows), values=tuple(value for _, value in rows))


def generate_code(config: Config) -> str:
    """Generate a horizontal bar chart script."""

    data = dataset(config)
    if output_format(config) == "statistical":
        return _seaborn_code(config, data)
    return _matplotlib_code(config, data)


def _data_block(data: CategoryValues) -> str:
    return data_section(
        (
            f"models = {py_list(data.labels)}  # Category labels",
            f"inference_time = {py_list(data.values)}  # Values",
        )
    )


def _matplotlib_code(config: Config, data: CategoryValues) -> str:
    return assemble(
        matplotlib_setup(),
        _data_block(data),
        sorting_code(config, "inference_time", "models"),
        create_figure(),
        color_code(config, var_name="bar_colors", count=len(data.labels), element="bars"),
        "# Create horizontal bar chart\n"
        "bars = ax.barh(models, inference_time, color=bar_colors, height=0.6,\n"
        "               edgecolor='#000000', linewidth=1.0, alpha=0.85)",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "x"),
        value_labels_code(config, "horizontal"),
        x_axis_range_code(config),
        reference_line_code(config, "vertical"),
        spine_code(),
        finish_code("horizontal_bar_chart"),
    )


def _seaborn_code(config: Config, data: CategoryValues) -> str:
    return assemble(
        seaborn_setup(),
        _data_block(data),
        sorting_code(config, "inference_time", "models"),
        "# Long-form DataFrame\ndf = pd.DataFrame({'model': models, 'inference_time': inference_time})",
        create_figure(),
        color_code(config, var_name="bar_colors", count=len(data.labels), element="bars", as_list=True),
        "# Create horizontal bar chart\n"
        "sns.barplot(data=df, x='inference_time', y='model', hue='model', palette=bar_colors,\n"
        "            legend=False, orient='h', width=0.6, edgecolor='#000000', linewidth=1.0,\n"
        "            alpha=0.85, ax=ax)",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "x"),
        seaborn_value_labels_code(config),
        x_axis_range_code(config),
        reference_line_code(config, "vertical"),
        seaborn_spine_code(),
        finish_code("horizontal_bar_chart"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="horizontal-bar",
    name="Horizontal Bar Chart",
    category="bar",
    description="Compare values with horizontal bars",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
