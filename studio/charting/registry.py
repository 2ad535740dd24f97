"""Chart type registry: the built-in definitions indexed by id."""

from __future__ import annotations

from typing import Final

from .errors import ChartTypeNotFound
from .schema import ChartCategory, ChartTypeDefinition, ConfigValue
from .types import BUILTIN_CHART_TYPES
from .validator import validate_chart_types

_VALIDATION = validate_chart_types(BUILTIN_CHART_TYPES)
if not _VALIDATION.is_valid:
    joined = "\n".join(_VALIDATION.errors)
    raise ValueError(f"Invalid chart type definitions:\n{joined}")


CHART_TYPE_BY_ID: Final[dict[str, ChartTypeDefinition]] = {
    definition.id: definition for definition in BUILTIN_CHART_TYPES
}


def all_chart_types() -> tuple[ChartTypeDefinition, ...]:
    """Return every chart type in display order."""

    return BUILTIN_CHART_TYPES


def get_chart_type(chart_id: str) -> ChartTypeDefinition:
    """Return the definition registered under `chart_id`.

    Raises:
        ChartTypeNotFound: When no chart type uses that id.
    """

    try:
        return CHART_TYPE_BY_ID[chart_id]
    except KeyError:
        raise ChartTypeNotFound(chart_id) from None


def defaults_for(chart_id: str) -> dict[str, ConfigValue]:
    """Return a fresh copy of the default configuration for `chart_id`."""

    return get_chart_type(chart_id).defaults()


def chart_types_by_category() -> dict[ChartCategory, tuple[ChartTypeDefinition, ...]]:
    """Group chart types by category, keeping display order within each group."""

    grouped: dict[ChartCategory, list[ChartTypeDefinition]] = {}
    for definition in BUILTIN_CHART_TYPES:
        grouped.setdefault(definition.category, []).append(definition)
    return {category: tuple(items) for category, items in grouped.items()}


def supports_output_format(chart_id: str) -> bool:
    """Return whether `chart_id` offers the statistical code style."""

    return get_chart_type(chart_id).supports_output_format
