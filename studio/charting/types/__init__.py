"""Built-in chart type definitions, one module per chart."""

from __future__ import annotations

from typing import Final

from ..schema import ChartTypeDefinition
from . import (
    box_plot,
    grouped_bar,
    histogram,
    horizontal_bar,
    line_chart,
    scatter_plot,
    stacked_bar,
    vertical_bar,
)

# Display order of the chart picker.
BUILTIN_CHART_TYPES: Final[tuple[ChartTypeDefinition, ...]] = (
    vertical_bar.DEFINITION,
    horizontal_bar.DEFINITION,
    stacked_bar.DEFINITION,
    grouped_bar.DEFINITION,
    scatter_plot.DEFINITION,
    line_chart.DEFINITION,
    box_plot.DEFINITION,
    histogram.DEFINITION,
)

__all__ = ["BUILTIN_CHART_TYPES"]
