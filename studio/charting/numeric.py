"""Helpers for free-text numeric fields and literal formatting.

Axis bounds and reference values are typed into text boxes, so anything that
does not parse as a finite number is treated as "unset" rather than an error.
"""

from __future__ import annotations

import math
from collections.abc import Mapping


def parse_numeric_text(value: object) -> float | None:
    """Parse a free-text numeric field.

    Args:
        value: Raw configuration value (usually a string, possibly missing).

    Returns:
        The parsed float, or None when the value is blank, non-numeric or not
        finite.
    """

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if not raw:
        return None
    try:
        parsed = float(raw)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def config_number(config: Mapping[str, object], key: str) -> float | None:
    """Return a parsed numeric text field from a configuration."""

    return parse_numeric_text(config.get(key))


def format_number(value: float) -> str:
    """Format a number as a compact Python literal (integral values drop `.0`)."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_value(value: float, decimals: int) -> str:
    """Format a value label with fixed-point rounding."""

    return f"{value:.{decimals}f}"


def value_decimals(config: Mapping[str, object], default: int = 1) -> int:
    """Return the configured number of value-label decimals."""

    raw = config.get("valueDecimals", default)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return default
    return max(0, int(raw))


def py_str(value: object) -> str:
    """Return a Python string literal for arbitrary text."""

    return repr("" if value is None else str(value))


def config_float(config: Mapping[str, object], key: str, default: float) -> float:
    """Return a numeric configuration value, falling back on missing/invalid input."""

    raw = config.get(key)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not math.isfinite(raw):
        return default
    return float(raw)


def config_int(config: Mapping[str, object], key: str, default: int) -> int:
    """Return an integral configuration value (e.g. element counts)."""

    return int(config_float(config, key, float(default)))


def config_count(config: Mapping[str, object], key: str, *, default: int, low: int, high: int) -> int:
    """Return an element count (categories, series, stacks) clamped to `[low, high]`."""

    return min(high, max(low, config_int(config, key, default)))
