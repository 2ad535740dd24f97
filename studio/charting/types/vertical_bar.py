"""Vertical bar chart: compare one value across categories."""

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

MODELS: Final[tuple[tuple[str, float], ...]] = (
    ("ResNet", 92.1),
    ("VGG", 88.5),
    ("MobileNet", 89.7),
    ("EfficientNet", 94.3),
    ("ViT", 91.2),
    ("DenseNet", 90.4),
    ("Inception", 87.9),
    ("ConvNeXt", 93.6),
    ("Swin", 92.8),
    ("RegNet", 89.1),
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
        "labelRotation": 0,
        "showGrid": True,
        "showValues": False,
        "valueDecimals": 1,
        "ylabel": "Accuracy (%)",
        "xlabel": "Model Architecture",
        "title": "",
        "yMin": "",
        "yMax": "",
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
    controls.LABEL_ROTATION,
    controls.GRID,
    controls.SHOW_VALUES,
    controls.VALUE_DECIMALS,
    *controls.AXIS,
    *controls.REFERENCE_LINE,
)


def dataset(config: Config) -> CategoryValues:
    """Return the first `numCategories` models and their accuracy."""

    count = config_count(config, "numCategories", default=5, low=2, high=len(MODELS))
    rows = MODELS[:count]
    return CategoryValues(labels=tuple(name for name, _ in rows), values=tuple(value for _, value in rows))


def generate_code(config: Config) -> str:
    """Generate a vertical bar chart script."""

    data = dataset(config)
    if output_format(config) == "statistical":
        return _seaborn_code(config, data)
    return _matplotlib_code(config, data)


def _data_block(data: CategoryValues) -> str:
    return data_section(
        (
            f"models = {py_list(data.labels)}  # Category labels",
            f"accuracy = {py_list(data.values)}  # Values",
        )
    )


def _matplotlib_code(config: Config, data: CategoryValues) -> str:
    return assemble(
        matplotlib_setup(),
        _data_block(data),
        sorting_code(config, "accuracy", "models"),
        create_figure(),
        color_code(config, var_name="bar_colors", count=len(data.labels), element="bars"),
        "# Create bar chart\n"
        "bars = ax.bar(models, accuracy, color=bar_colors, width=0.6,\n"
        "              edgecolor='#000000', linewidth=1.0, alpha=0.85)",
        title_code(config),
        axis_labels_code(config),
        label_rotation_code(config),
        grid_code(config, "y"),
        value_labels_code(config, "vertical"),
        y_axis_range_code(config),
        reference_line_code(config, "horizontal"),
        spine_code(),
        finish_code("vertical_bar_chart"),
    )


def _seaborn_code(config: Config, data: CategoryValues) -> str:
    return assemble(
        seaborn_setup(),
        _data_block(data),
        sorting_code(config, "accuracy", "models"),
        "# Long-form DataFrame\ndf = pd.DataFrame({'model': models, 'accuracy': accuracy})",
        create_figure(),
        color_code(config, var_name="bar_colors", count=len(data.labels), element="bars", as_list=True),
        "# Create bar chart\n"
        "sns.barplot(data=df, x='model', y='accuracy', hue='model', palette=bar_colors,\n"
        "            legend=False, width=0.6, edgecolor='#000000', linewidth=1.0, alpha=0.85, ax=ax)",
        title_code(config),
        axis_labels_code(config),
        label_rotation_code(config),
        grid_code(config, "y"),
        seaborn_value_labels_code(config),
        y_axis_range_code(config),
        reference_line_code(config, "horizontal"),
        seaborn_spine_code(),
        finish_code("vertical_bar_chart"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="vertical-bar",
    name="Vertical Bar Chart",
    category="bar",
    description="Compare values across categories",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
