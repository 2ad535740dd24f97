"""Exceptions raised by the charting engine.

Pure-function failures propagate to the immediate caller. Free-text numeric
fields never raise; see `studio.charting.numeric.parse_numeric_text`.
"""

from __future__ import annotations


class ChartingError(Exception):
    """Base class for charting engine errors."""


class InvalidCount(ChartingError, ValueError):
    """Raised when a color sequence is requested for fewer than one element."""

    def __init__(self, count: int) -> None:
        super().__init__(f"Color count must be >= 1, got {count!r}.")
        self.count = count


class ChartTypeNotFound(ChartingError, LookupError):
    """Raised when a chart type id is not registered."""

    def __init__(self, chart_id: str) -> None:
        super().__init__(f"Unknown chart type id: {chart_id!r}.")
        self.chart_id = chart_id


class NoChartSelected(ChartingError, RuntimeError):
    """Raised when a field update arrives while no chart type is selected."""


class InvalidFieldValue(ChartingError, ValueError):
    """Raised when a widget value does not match its control's contract."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message
