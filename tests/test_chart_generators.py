"""Tests for per-chart code generators."""

from __future__ import annotations

import ast
import itertools

import pytest

from studio.charting.palettes import BLUES, MULTI, PALETTE_FLAGS, interpolate
from studio.charting.preview import build_preview
from studio.charting.registry import all_chart_types, get_chart_type
from studio.charting.snippets import DATA_HEADER, py_list

pytestmark = pytest.mark.unit

PALETTE_CHOICES = (None, *(flag for flag, _ in PALETTE_FLAGS))


def _config_for(definition, output_format: str, palette: str | None) -> dict[str, object]:
    config = definition.defaults()
    for flag, _ in PALETTE_FLAGS:
        if flag in config:
            config[flag] = flag == palette
    if definition.supports_output_format:
        config["outputFormat"] = output_format
    return config


def _cases():
    for definition, output_format, palette in itertools.product(
        all_chart_types(), ("general", "statistical"), PALETTE_CHOICES
    ):
        if palette is not None and palette not in definition.default_config:
            continue
        yield pytest.param(definition, output_format, palette, id=f"{definition.id}-{output_format}-{palette}")


@pytest.mark.parametrize(("definition", "output_format", "palette"), list(_cases()))
def test_generated_script_is_valid_python(definition, output_format: str, palette: str | None) -> None:
    """Every chart, style and palette yields a parseable standalone script."""

    code = definition.generate_code(_config_for(definition, output_format, palette))
    ast.parse(code)
    assert DATA_HEADER in code
    assert "${" not in code
    assert code.endswith("plt.show()\n")


@pytest.mark.parametrize("definition", all_chart_types(), ids=lambda d: d.id)
def test_generated_script_with_every_option_enabled(definition) -> None:
    """Toggles, bounds, titles and reference lines all produce valid code."""

    config = definition.defaults()
    for key, value in list(config.items()):
        if isinstance(value, bool) and key not in dict(PALETTE_FLAGS):
            config[key] = True
    config.update(
        {
            "title": "Model \"quality\" isn't linear",
            "yMin": "0",
            "yMax": "120.5",
            "xMin": "-5",
            "xMax": "80",
            "referenceValue": "85",
            "labelRotation": 45,
            "barOrdering": "descending",
            "legendPosition": "right",
        }
    )
    for output_format in ("general", "statistical"):
        config["outputFormat"] = output_format
        code = definition.generate_code(config)
        ast.parse(code)


def test_stacked_bar_ignores_statistical_style() -> None:
    """Charts without the style switch always emit matplotlib code."""

    definition = get_chart_type("stacked-bar")
    code = definition.generate_code({**definition.defaults(), "outputFormat": "statistical"})
    assert "import seaborn" not in code
    assert "ax.bar(models, values, bottom=bottom" in code


def test_statistical_style_uses_long_form_dataframe() -> None:
    """The seaborn variant builds a DataFrame and calls seaborn."""

    definition = get_chart_type("vertical-bar")
    code = definition.generate_code({**definition.defaults(), "outputFormat": "statistical"})
    assert "import seaborn as sns" in code
    assert "pd.DataFrame({'model': models, 'accuracy': accuracy})" in code
    assert "sns.barplot(" in code


def test_vertical_bar_defaults_use_single_color() -> None:
    """Without a palette the configured single color is used."""

    code = get_chart_type("vertical-bar").generate_code(get_chart_type("vertical-bar").defaults())
    assert "models = ['ResNet', 'VGG', 'MobileNet', 'EfficientNet', 'ViT']" in code
    assert "bar_colors = '#4C6EE6'" in code


def test_category_count_drives_data_and_palette_length() -> None:
    """Dynamic arity adds elements and stretches the palette to match."""

    definition = get_chart_type("vertical-bar")
    config = {**definition.defaults(), "numCategories": 7, "useBluesPalette": True}
    code = definition.generate_code(config)
    colors = interpolate(BLUES, 7)
    assert "# Blues sequential palette (7 colors)" in code
    assert f"bar_colors = {py_list(colors)}" in code
    assert [bar["color"] for bar in build_preview(definition, config)["bars"]] == list(colors)


def test_multi_color_script_and_preview_share_interpolated_colors() -> None:
    """The Multi palette is interpolated identically in the script and the preview."""

    definition = get_chart_type("line-chart")
    config = definition.defaults()
    colors = interpolate(MULTI, 3)
    assert colors == ("#2D4DB9", "#9E4FA5", "#FF7759")
    assert f"colors = {py_list(colors)}" in definition.generate_code(config)
    assert [series["color"] for series in build_preview(definition, config)["series"]] == list(colors)


def _data_and_sort_section(code: str) -> str:
    return code[code.index(DATA_HEADER) : code.index("# Create figure")]


def test_vertical_bar_script_order_matches_preview() -> None:
    """The script's in-place sort reproduces the preview order."""

    definition = get_chart_type("vertical-bar")
    config = {**definition.defaults(), "barOrdering": "descending"}
    namespace: dict[str, object] = {}
    exec(_data_and_sort_section(definition.generate_code(config)), namespace)  # noqa: S102

    preview = build_preview(definition, config)
    assert namespace["models"] == [bar["label"] for bar in preview["bars"]]
    assert namespace["models"] == ["EfficientNet", "ResNet", "ViT", "MobileNet", "VGG"]


def test_grouped_bar_sorts_categories_by_total() -> None:
    """Grouped bars reorder whole categories by their summed value."""

    definition = get_chart_type("grouped-bar")
    config = {**definition.defaults(), "barOrdering": "descending"}
    code = definition.generate_code(config)
    assert "key=lambda i: run1[i] + run2[i] + run3[i], reverse=True" in code

    namespace: dict[str, object] = {}
    exec(_data_and_sort_section(code), namespace)  # noqa: S102
    assert namespace["epochs"] == ["Epoch 20", "Epoch 15", "Epoch 10", "Epoch 5"]
    assert namespace["series"][0] == [90.5, 88.7, 85.3, 78.2]  # type: ignore[index]
    assert build_preview(definition, config)["categories"] == namespace["epochs"]


def test_series_count_changes_generated_series() -> None:
    """numSeries controls how many series the script contains."""

    definition = get_chart_type("line-chart")
    code = definition.generate_code({**definition.defaults(), "numSeries": 5})
    assert "'Mistral Models'" in code
    assert "'Falcon Models'" not in code
    assert "Multi-Color categorical palette (5 colors)" in code


def test_line_chart_markers_toggle() -> None:
    """Markers are only requested when enabled."""

    definition = get_chart_type("line-chart")
    assert "marker='o', markersize=6" in definition.generate_code(definition.defaults())
    assert "marker='o'" not in definition.generate_code({**definition.defaults(), "showMarkers": False})


def test_box_plot_outlier_toggle_and_width() -> None:
    """Outlier display and box width reach the boxplot call."""

    definition = get_chart_type("box-plot")
    code = definition.generate_code({**definition.defaults(), "showOutliers": False, "boxWidth": 0.6})
    assert "showfliers=False" in code
    assert "widths=0.6" in code


def test_histogram_bins_alpha_and_edges() -> None:
    """Histogram options reach the hist call."""

    definition = get_chart_type("histogram")
    code = definition.generate_code({**definition.defaults(), "numBins": 20, "showEdges": False, "barAlpha": 0.5})
    assert "bins=20" in code
    assert "alpha=0.5" in code
    assert "edgecolor='none'" in code
    assert "color=bar_color" in code


def test_scatter_marker_settings_and_groups() -> None:
    """Marker size, transparency and group count reach the script."""

    definition = get_chart_type("scatter-plot")
    code = definition.generate_code({**definition.defaults(), "markerSize": 160, "markerAlpha": 0.5, "numSeries": 2})
    assert "s=160" in code
    assert "alpha=0.5" in code
    assert "'CNNs': {" in code
    assert "'Diffusion Models'" not in code


def test_stacked_bar_segment_labels() -> None:
    """Stacked bars label each segment inside the bar."""

    definition = get_chart_type("stacked-bar")
    code = definition.generate_code({**definition.defaults(), "showValues": True, "numStacks": 5})
    assert "label_type='center'" in code
    assert "deployment = [8, 6, 9, 11]" in code
