"""Script fragments shared by every chart type's code generator.

Each fragment is total: when its feature is disabled it returns a neutral
comment instead of an empty string, so a generator is simply an ordered list
of fragments passed to `assemble`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final, Literal

from .numeric import config_number, format_number, py_str, value_decimals
from .ordering import ordering_from_config
from .palettes import color_sequence, resolve_palette, single_color
from .schema import Config

Orientation = Literal["vertical", "horizontal"]
GridAxis = Literal["x", "y", "both"]

DATA_HEADER: Final[str] = "# ======== ADD YOUR DATA HERE ========"
DATA_FOOTER: Final[str] = "# ===================================="

FIGURE_WIDTH: Final[float] = 5.5
FIGURE_HEIGHT: Final[float] = 4.5
FIGURE_DPI: Final[int] = 300

LEGEND_PLACEMENT: Final[dict[str, tuple[str, str]]] = {
    "top": ("upper center", "(0.5, 1.12)"),
    "bottom": ("lower center", "(0.5, -0.15)"),
    "right": ("center left", "(1.05, 0.5)"),
}

RC_STYLING: Final[str] = """# Set darker styling for all text and lines
plt.rcParams['text.color'] = '#000000'
plt.rcParams['axes.labelcolor'] = '#000000'
plt.rcParams['xtick.color'] = '#000000'
plt.rcParams['ytick.color'] = '#000000'
plt.rcParams['axes.edgecolor'] = '#000000'

# Keep grid subtle
plt.rcParams['grid.color'] = '#CCCCCC'
plt.rcParams['grid.alpha'] = 0.3"""

FONT_LOADING: Final[str] = """# Load custom font
font_path = 'fonts/CohereText-Regular.ttf'  # Adjust path as needed
try:
    prop = fm.FontProperties(fname=font_path)
    plt.rcParams['font.family'] = prop.get_name()
except OSError:
    print("Custom font not found, using default")"""


def assemble(*fragments: str) -> str:
    """Join fragments into one script, separated by blank lines."""

    parts = [fragment.strip("\n") for fragment in fragments]
    return "\n\n".join(part for part in parts if part) + "\n"


def py_list(values: Iterable[object]) -> str:
    """Render a Python list literal (strings quoted, numbers compact)."""

    rendered = []
    for value in values:
        if isinstance(value, str):
            rendered.append(py_str(value))
        else:
            rendered.append(format_number(float(value)))  # type: ignore[arg-type]
    return "[" + ", ".join(rendered) + "]"


def matplotlib_setup() -> str:
    """Imports and rcParams styling for the general (matplotlib) style."""

    return "\n\n".join(
        (
            "import matplotlib.pyplot as plt\nimport numpy as np\nimport matplotlib.font_manager as fm",
            FONT_LOADING,
            RC_STYLING,
        )
    )


def data_section(lines: Sequence[str]) -> str:
    """Wrap data assignments in the "replace with your data" delimiters."""

    return "\n".join((DATA_HEADER, *lines, DATA_FOOTER))


def create_figure(width: float = FIGURE_WIDTH, height: float = FIGURE_HEIGHT, dpi: int = FIGURE_DPI) -> str:
    """Figure and axis creation."""

    return (
        "# Create figure and axis with publication-quality settings\n"
        f"fig, ax = plt.subplots(figsize=({width}, {height}), dpi={dpi})"
    )


def title_code(config: Config) -> str:
    """Figure title, placed top-left outside the plot area."""

    title = config.get("title")
    if not isinstance(title, str) or not title.strip():
        return "# No title"
    return (
        "# Add title (outside plot area, top left)\n"
        f"fig.suptitle({py_str(title)}, fontsize=14, x=0.125, y=0.98, ha='left', color='#000000')"
    )


def axis_labels_code(config: Config) -> str:
    """Axis labels (always emitted, possibly empty)."""

    xlabel = py_str(config.get("xlabel") or "")
    ylabel = py_str(config.get("ylabel") or "")
    return (
        "# Customize axes with dark black text\n"
        f"ax.set_xlabel({xlabel}, fontsize=12, labelpad=10, color='#000000')\n"
        f"ax.set_ylabel({ylabel}, fontsize=12, color='#000000', labelpad=10)"
    )


def grid_code(config: Config, axis: GridAxis = "y") -> str:
    """Dashed background grid, or a disabled-grid marker."""

    if not config.get("showGrid"):
        return "# Grid disabled"
    return (
        "# Add grid\n"
        f"ax.grid(axis='{axis}', alpha=0.3, linestyle='--', linewidth=0.5, zorder=0)\n"
        "ax.set_axisbelow(True)"
    )


def y_axis_range_code(config: Config) -> str:
    """Explicit y-limits from the yMin/yMax text fields, or the auto marker."""

    return _range_code(config, lower_key="yMin", upper_key="yMax", axis="y")


def x_axis_range_code(config: Config) -> str:
    """Explicit x-limits from the xMin/xMax text fields, or the auto marker."""

    return _range_code(config, lower_key="xMin", upper_key="xMax", axis="x")


def _range_code(config: Config, *, lower_key: str, upper_key: str, axis: Literal["x", "y"]) -> str:
    lower = config_number(config, lower_key)
    upper = config_number(config, upper_key)
    if lower is None and upper is None:
        return f"# Auto {axis}-axis range"
    names = ("bottom", "top") if axis == "y" else ("left", "right")
    parts = []
    if lower is not None:
        parts.append(f"{names[0]}={format_number(lower)}")
    if upper is not None:
        parts.append(f"{names[1]}={format_number(upper)}")
    return f"# Set {axis}-axis range\nax.set_{axis}lim({', '.join(parts)})"


def reference_line_code(config: Config, orientation: Literal["horizontal", "vertical"] = "horizontal") -> str:
    """Dashed reference line at a user-supplied value."""

    value = config_number(config, "referenceValue")
    if not config.get("showReferenceLine") or value is None:
        return "# Reference line disabled"
    label = py_str(config.get("referenceLabel") or "Reference")
    if orientation == "horizontal":
        line = f"ax.axhline(y={format_number(value)}, color='red', linestyle='--',\n           linewidth=2, alpha=0.7, label={label})"
    else:
        line = f"ax.axvline(x={format_number(value)}, color='red', linestyle='--',\n           linewidth=2, alpha=0.7, label={label})"
    return f"# Add reference line\n{line}\nax.legend(loc='best', fontsize=10)"


def label_rotation_code(config: Config, axis: Literal["x", "y"] = "x") -> str:
    """Tick label rotation for long category names."""

    rotation = config.get("labelRotation")
    if isinstance(rotation, bool) or not isinstance(rotation, (int, float)) or rotation == 0:
        return "# Default label rotation"
    return f"# Rotate {axis}-axis labels\nplt.{axis}ticks(rotation={format_number(rotation)}, ha='right')"


def spine_code() -> str:
    """Remove top/right spines and offset the remaining ones."""

    return """# Remove top and right spines for cleaner look
ax.spines['top'].set_visible(False)
ax.spines['right'].set_visible(False)
ax.spines['bottom'].set_linewidth(1)
ax.spines['left'].set_linewidth(1)

# Adjust spine positions
ax.spines['left'].set_position(('outward', 2))
ax.spines['bottom'].set_position(('outward', 2))"""


def finish_code(save_name: str | None = None) -> str:
    """Layout, optional commented-out save and show."""

    lines = ["# Tight layout", "plt.tight_layout(rect=[0, 0.03, 1, 0.97])"]
    if save_name:
        lines += ["", "# Save figure (uncomment to save)", f"# plt.savefig('{save_name}.png', dpi=300, bbox_inches='tight')"]
    lines += ["", "# Display the plot", "plt.show()"]
    return "\n".join(lines)


def sorting_code(config: Config, values_var: str, labels_var: str, *, key_expr: str | None = None, extra_vars: Sequence[str] = ()) -> str:
    """Reorder the data lists in-script by the configured bar ordering.

    Uses Python's stable `sorted`, the same rule the preview applies.

    Args:
        config: Chart configuration.
        values_var: Name of the numeric list used as the sort key.
        labels_var: Name of the label list permuted alongside.
        key_expr: Optional sort key expression over index `i` (defaults to
            `values_var[i]`).
        extra_vars: Further lists permuted by the same order.
    """

    ordering = ordering_from_config(config)
    if ordering == "original":
        return "# Original data order"
    key = key_expr or f"{values_var}[i]"
    reverse = ", reverse=True" if ordering == "descending" else ""
    lines = [
        f"# Sort data ({ordering})",
        f"order = sorted(range(len({values_var})), key=lambda i: {key}{reverse})",
        f"{labels_var} = [{labels_var}[i] for i in order]",
    ]
    for name in (values_var, *extra_vars):
        if name != labels_var:
            lines.append(f"{name} = [{name}[i] for i in order]")
    return "\n".join(lines)


def value_labels_code(config: Config, orientation: Orientation = "vertical", bars_var: str = "bars") -> str:
    """Annotate each bar with its value using `valueDecimals` digits."""

    if not config.get("showValues"):
        return "# Value labels disabled"
    decimals = value_decimals(config)
    if orientation == "vertical":
        return f"""# Add value labels on bars
for bar in {bars_var}:
    height = bar.get_height()
    ax.text(bar.get_x() + bar.get_width()/2., height,
            f'{{height:.{decimals}f}}',
            ha='center', va='bottom', fontsize=10, color='#000000')"""
    return f"""# Add value labels on bars
for bar in {bars_var}:
    width = bar.get_width()
    ax.text(width, bar.get_y() + bar.get_height()/2.,
            f'{{width:.{decimals}f}}',
            ha='left', va='center', fontsize=10, color='#000000',
            bbox=dict(boxstyle='round,pad=0.3', facecolor='white', edgecolor='none', alpha=0.7))"""


def color_code(config: Config, *, var_name: str, count: int, element: str, as_list: bool = False) -> str:
    """Assign one color per element from the active palette.

    Without an active palette a single color is emitted, as a scalar by
    default or repeated into a list when `as_list` is set.
    """

    resolved = resolve_palette(config)
    if resolved is None:
        color = py_str(single_color(config))
        if as_list:
            return f"# Single color for all {element}\n{var_name} = [{color}] * {count}"
        return f"# Single color for all {element}\n{var_name} = {color}"
    palette, name = resolved
    colors = color_sequence(palette, count)
    return f"# {name} {palette.kind} palette ({count} colors)\n{var_name} = {py_list(colors)}"


def legend_code(config: Config, *, count: int) -> str:
    """Legend placed outside the axes at the configured position."""

    if not config.get("showLegend"):
        return "# Legend disabled"
    loc, anchor = legend_placement(config)
    ncol = 1 if config.get("legendPosition") == "right" else min(count, 3)
    return (
        "# Add legend\n"
        f"ax.legend(loc='{loc}',\n"
        f"          bbox_to_anchor={anchor},\n"
        f"          frameon=False, fontsize=10, ncol={ncol})"
    )


def corner_legend_code(config: Config) -> str:
    """Legend in the upper-right corner of the axes (bar charts)."""

    if not config.get("showLegend"):
        return "# Legend disabled"
    return "# Add legend\nax.legend(loc='upper right', fontsize=10)"


def legend_placement(config: Config) -> tuple[str, str]:
    """Return `(loc, bbox_to_anchor)` for the configured legend position."""

    position = config.get("legendPosition")
    return LEGEND_PLACEMENT.get(position if isinstance(position, str) else "top", LEGEND_PLACEMENT["top"])
