"""Box plot: compare score distributions and spot outliers."""

from __future__ import annotations

from typing import Final

from .. import controls
from ..numeric import config_count, config_float, format_number, py_str
from ..schema import ChartTypeDefinition, Config, Distributions, Series, frozen_config, output_format
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
    py_list,
    spine_code,
    title_code,
    y_axis_range_code,
)

MODELS: Final[tuple[Series, ...]] = (
    Series(name="GPT-4", values=(82, 86, 89, 91, 93, 94, 95, 95, 96, 97, 98, 99, 99)),
    Series(name="Claude", values=(78, 82, 85, 88, 90, 91, 92, 93, 94, 95, 96, 97, 98)),
    Series(name="Gemini", values=(75, 80, 84, 87, 89, 90, 91, 92, 93, 94, 95, 96, 65)),
    Series(name="LLaMA", values=(70, 74, 78, 81, 84, 86, 87, 88, 90, 91, 93, 95, 97)),
    Series(name="Mistral", values=(72, 77, 80, 83, 85, 87, 88, 89, 90, 92, 93, 94, 96)),
    Series(name="Falcon", values=(68, 71, 75, 79, 82, 84, 85, 86, 88, 89, 91, 92, 58)),
)

NUM_CATEGORIES: Final[controls.Control] = controls.slider(
    "numCategories", "Number of Boxes", min=2, max=len(MODELS), step=1
)
SHOW_OUTLIERS: Final[controls.Control] = controls.toggle("showOutliers", "Show Outliers")
BOX_WIDTH: Final[controls.Control] = controls.slider("boxWidth", "Box Width", min=0.3, max=0.9, step=0.1)

DEFAULT_CONFIG: Final = frozen_config(
    {
        "useBluesPalette": False,
        "useRedsPalette": False,
        "useGreensPalette": False,
        "useMultiColor": True,
        "numCategories": 4,
        "showGrid": True,
        "showOutliers": True,
        "boxWidth": 0.4,
        "ylabel": "Performance Score (%)",
        "xlabel": "Model Architecture",
        "title": "",
        "yMin": "",
        "yMax": "",
        "outputFormat": "general",
    }
)

CONTROLS: Final[tuple[controls.Control, ...]] = (
    controls.OUTPUT_FORMAT,
    controls.PALETTE_GROUP,
    NUM_CATEGORIES,
    SHOW_OUTLIERS,
    BOX_WIDTH,
    controls.GRID,
    controls.X_LABEL,
    controls.Y_LABEL,
    controls.TITLE,
    controls.Y_MIN,
    controls.Y_MAX,
)

FLIER_PROPS: Final[str] = "flierprops=dict(marker='*', markersize=8, markerfacecolor='#000000', markeredgecolor='#000000')"


def dataset(config: Config) -> Distributions:
    """Return raw scores for the first `numCategories` models."""

    count = config_count(config, "numCategories", default=4, low=2, high=len(MODELS))
    return Distributions(groups=MODELS[:count])


def generate_code(config: Config) -> str:
    """Generate a box plot script."""

    data = dataset(config)
    if output_format(config) == "statistical":
        return _seaborn_code(config, data)
    return _matplotlib_code(config, data)


def _data_block(data: Distributions) -> str:
    lines = [DATA_HEADER, "data = {"]
    for idx, group in enumerate(data.groups, start=1):
        lines.append(f"    {py_str(group.name)}: {py_list(group.values)},  # Category {idx} values")
    lines += ["}", DATA_FOOTER]
    return "\n".join(lines)


def _outliers(config: Config) -> str:
    if config.get("showOutliers"):
        return f"showfliers=True, {FLIER_PROPS}"
    return "showfliers=False"


def _box_width(config: Config) -> str:
    return format_number(config_float(config, "boxWidth", 0.4))


def _matplotlib_code(config: Config, data: Distributions) -> str:
    return assemble(
        matplotlib_setup(),
        _data_block(data),
        "# Prepare data for box plot\nmodels = list(data.keys())\nvalues = list(data.values())",
        create_figure(),
        color_code(config, var_name="colors", count=len(data.groups), element="boxes", as_list=True),
        f"""# Create box plot
bp = ax.boxplot(values,
                tick_labels=models,
                patch_artist=True,
                widths={_box_width(config)},
                {_outliers(config)},
                medianprops=dict(color='#000000', linewidth=2),
                boxprops=dict(linewidth=1.5, edgecolor='#000000'),
                whiskerprops=dict(color='#000000', linewidth=1.5),
                capprops=dict(color='#000000', linewidth=1.5))

# Color each box
for idx, patch in enumerate(bp['boxes']):
    patch.set_facecolor(colors[idx % len(colors)])""",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "y"),
        y_axis_range_code(config),
        spine_code(),
        finish_code("box_plot"),
    )


def _seaborn_code(config: Config, data: Distributions) -> str:
    return assemble(
        seaborn_setup(),
        _data_block(data),
        """# Long-form DataFrame: one row per observation
df = pd.DataFrame([
    {'model': model, 'score': score}
    for model, scores in data.items()
    for score in scores
])""",
        create_figure(),
        color_code(config, var_name="colors", count=len(data.groups), element="boxes", as_list=True),
        f"""# Create box plot
sns.boxplot(data=df, x='model', y='score', hue='model', palette=colors, legend=False,
            width={_box_width(config)}, {_outliers(config)},
            linecolor='#000000', linewidth=1.5,
            medianprops=dict(color='#000000', linewidth=2), ax=ax)""",
        title_code(config),
        axis_labels_code(config),
        grid_code(config, "y"),
        y_axis_range_code(config),
        seaborn_spine_code(),
        finish_code("box_plot"),
    )


DEFINITION: Final[ChartTypeDefinition] = ChartTypeDefinition(
    id="box-plot",
    name="Box Plot",
    category="distribution",
    description="Compare distributions and identify outliers",
    default_config=DEFAULT_CONFIG,
    controls=CONTROLS,
    dataset=dataset,
    generate_code=generate_code,
)
