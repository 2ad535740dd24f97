"""Script fragments specific to the statistical (seaborn) code style.

Everything not listed here (titles, labels, grid, ranges, reference lines,
sorting) is shared with the general style through `snippets`.
"""

from __future__ import annotations

from .numeric import value_decimals
from .schema import Config
from .snippets import FONT_LOADING, RC_STYLING, legend_placement


def seaborn_setup() -> str:
    """Imports, rcParams styling and the seaborn base style."""

    return "\n\n".join(
        (
            "import matplotlib.pyplot as plt\n"
            "import seaborn as sns\n"
            "import pandas as pd\n"
            "import numpy as np\n"
            "import matplotlib.font_manager as fm",
            FONT_LOADING,
            RC_STYLING,
            '# Set seaborn style\nsns.set_style("white")',
        )
    )


def seaborn_spine_code() -> str:
    """Despine and keep the remaining axes crisp."""

    return """# Remove top and right spines
sns.despine(ax=ax)
ax.spines['bottom'].set_linewidth(1)
ax.spines['left'].set_linewidth(1)"""


def seaborn_value_labels_code(config: Config) -> str:
    """Label every bar container with its value."""

    if not config.get("showValues"):
        return "# Value labels disabled"
    decimals = value_decimals(config)
    return f"""# Add value labels on bars
for container in ax.containers:
    ax.bar_label(container, fmt='{{:.{decimals}f}}', padding=2, fontsize=10, color='#000000')"""


def seaborn_legend_code(config: Config, *, count: int) -> str:
    """Move the legend seaborn created to the configured position."""

    if not config.get("showLegend"):
        return "# Legend disabled"
    loc, anchor = legend_placement(config)
    ncol = 1 if config.get("legendPosition") == "right" else min(count, 3)
    return (
        "# Position legend\n"
        f"sns.move_legend(ax, '{loc}', bbox_to_anchor={anchor},\n"
        f"                frameon=False, fontsize=10, ncol={ncol}, title=None)"
    )


def seaborn_corner_legend_code(config: Config) -> str:
    """Move the legend to the upper-right corner (bar charts)."""

    if not config.get("showLegend"):
        return "# Legend disabled"
    return "# Position legend\nsns.move_legend(ax, 'upper right', fontsize=10, title=None)"


def legend_flag(config: Config) -> str:
    """Keyword passed to seaborn plotting calls to toggle the automatic legend."""

    return "True" if config.get("showLegend") else "False"
