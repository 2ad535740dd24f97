"""Scatter plot: relationship between two variables, grouped by model family."""

from __future__ import annotations

from typing import Final

from .. import controls
from ..numeric import config_count, config_float, format_number, py_str
from ..schema import ChartTypeDefinition, Config, PointGroup, PointGroups, frozen_config, output_format
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

FAMILIES: Final[tuple[PointGroup, ...]] = (
    PointGroup(name="Transformers", x=(12, 18, 22, 35, 45, 48), y=(10, 11, 1, 20, 25, 18)),
    PointGroup(name="CNNs", x=(25, 30, 32, 40, 33), y=(22, 17, 17, 50, 19)),
    PointGroup(name="Diffusion Models", x=(21, 28, 34, 15, 47), y=(17, 2, 6, 4, 18)),
    PointGroup(name="RNNs", x=(8, 14, 19, 26, 31), y=(6, 9, 12, 8, 14)),
    PointGroup(name="State Space Models", x=(16, 24, 29, 38, 44), y=(13, 19, 15, 27, 30)),
    PointGroup(name="Graph Networks", x=(10, 20, 27, 36, 42), y=(5, 14, 21, 16, 24)),
)

NUM_SERIES: Final[controls.Control] = controls.slider(
    "numSeries", "Number of Groups", min=1, max=len(FAMILIES), step=1
)
MARKER_SIZE: Final[controls.Control] = controls.slider(
    "markerSize", "Marker Size", min=20, max=300, step=20, unit="px"
)
MARKER_ALPHA: Final[controls.Control] = controls.slider(
    "markerAlpha", "Marker Transparency", min=0.1, max=1.0, step=0.1
)

DEFAULT_CONFIG: Final = frozen_config(
    {
        "useBluesPalette": False,
        "useRedsPalette": False,
        "useGreensPalette": False,
        "useMultiColor": True,
        "numSeries": 3,
        "showGrid": True,
        "markerSize": 100,
        "markerAlpha": 1.0,
        "showLegend": True,
        "legendPosition": "top",
        "xlabel": "Training Time (GPU Hours)",
        "ylabel": "Model Accuracy (%)",
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
    MARKER_SIZE,
    MARKER_ALPHA,
    controls.GRID,
    *controls.LEGEND,
    *controls.AXIS_BOTH,
)


def dataset(config: Config) -> PointGroups:
    """Return the first `numSeries` model families."""

    count = config_count(config, "numSeries", default=3, low=1, high=len(FAMILIES))
    return PointGroups(groups=FAMILIES[:count])


def generate_code(config: Config) -> str:
    """Generate a scatter plot script."""

    data = dataset(config)
    if output_format(config) == "statistical":
        return _seaborn_code(config, data)
    return _matplotlib_code(config, data)


def _data_block(data: PointGroups) -> str:
    lines = [DATA_HEADER, "categories = {"]
    for idx, group in enumerate(data.groups, start=1):
        lines += [
            f"    {py_str(group.name)}: {{",
            f"        'x': {py_list(group.x)},  # X values for category {idx}",
            f"        'y': {py_list(group.y)}  # Y values for category {idx}",
            "    },",
        ]
    lines += ["}", DATA_FOOTER]
    return "\n".join(lines)


def _marker_size(config: Config) -> str:
    return format_number(config_float(config, "markerSize", 100))


def _marker_alpha(config: Config) -> str:
    return format_number(config_float(config, "markerAlpha", 1.0))


def _matplotlib_code(config: Config, data: PointGroups) -> str:
    return assemble(
        matplotlib_setup(),
        _data_block(data),
        create_figure(),
        color_code(config, var_name="colors", count=len(data.groups), element="categories", as_list=True),
        f"""# Create scatter plot for each category
for idx, (category, points) in enumerate(categories.items()):
    ax.scatter(points['x'], points['y'],
               s={_marker_size(config)},
               c=colors[idx % len(colors)],
               alpha={_marker_alpha(config)},
               edgecolors='#000000',
               linewidths=1.0,
               label=category,
               zorder=3)""",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "both"),
        legend_code(config, count=len(data.groups)),
        x_axis_range_code(config),
        y_axis_range_code(config),
        spine_code(),
        finish_code("scatter_plot"),
    )


def _seaborn_code(config: Config, data: PointGroups) -> str:
    return assemble(
        seaborn_setup(),
        _data_block(data),
        """# Long-form DataFrame: one row per point
df = pd.DataFrame([
    {'x': x, 'y': y, 'category': category}
    for category, points in categories.items()
    for x, y in zip(points['x'], points['y'])
])""",
        create_figure(),
        color_code(config, var_name="colors", count=len(data.groups), element="categories", as_list=True),
        f"""# Create scatter plot
sns.scatterplot(data=df, x='x', y='y', hue='category', palette=colors,
                s={_marker_size(config)}, alpha={_marker_alpha(config)},
                edgecolor='#000000', linewidth=1.0, legend={legend_flag(config)},
                zorder=3, ax=ax)""",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "both"),
        seaborn_legend_code(config, count=len(data.groups)),
        x_axis_range_code(config),
        y_axis_range_code(config),
        seaborn_spine_code(),
        finish_code("scatter_plot"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="scatter-plot",
    name="Scatter Plot",
    category="scatter",
    description="Visualize relationships between two variables",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
