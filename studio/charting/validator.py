"""Validation for ChartTypeDefinition entries.

Definitions are declarative data, so validation is strict and fails fast: the
registry refuses to import with an invalid definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .controls import validate_field_value
from .errors import InvalidFieldValue
from .palettes import PALETTE_FLAG_KEYS
from .schema import ChartCategory, ChartTypeDefinition
from .snippets import DATA_HEADER

TEMPLATE_MARKERS: tuple[str, ...] = ("${", "{{", "}}")


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating chart type definitions."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_chart_type(definition: ChartTypeDefinition) -> ValidationResult:
    """Validate a single chart type definition.

    Args:
        definition: Definition to validate.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []
    tag = definition.id

    if not definition.id.strip():
        errors.append("ChartTypeDefinition.id must be a non-empty string.")
    if not definition.name.strip():
        errors.append(f"ChartTypeDefinition[{tag}].name must be a non-empty string.")
    if not definition.description.strip():
        warnings.append(f"ChartTypeDefinition[{tag}].description is empty.")

    allowed_categories: set[ChartCategory] = {"bar", "scatter", "line", "distribution", "histogram"}
    if definition.category not in allowed_categories:
        errors.append(f"ChartTypeDefinition[{tag}].category is not a supported value: {definition.category!r}.")

    keys = [control.key for control in definition.controls]
    duplicates = sorted({key for key in keys if keys.count(key) > 1})
    if duplicates:
        errors.append(f"ChartTypeDefinition[{tag}].controls declare duplicate keys: {duplicates}.")

    defaults = definition.default_config
    has_palette_group = any(control.kind == "paletteGroup" for control in definition.controls)
    for control in definition.controls:
        if control.kind == "paletteGroup":
            continue
        if control.key not in defaults:
            errors.append(f"ChartTypeDefinition[{tag}].default_config is missing control key {control.key!r}.")

    for key, value in defaults.items():
        try:
            validate_field_value(definition.controls, key, value)
        except InvalidFieldValue as exc:
            errors.append(f"ChartTypeDefinition[{tag}].default_config: {exc}")

    if has_palette_group:
        missing = sorted(PALETTE_FLAG_KEYS - set(defaults))
        if missing:
            errors.append(f"ChartTypeDefinition[{tag}].default_config is missing palette flags: {missing}.")
        enabled = [key for key in sorted(PALETTE_FLAG_KEYS) if defaults.get(key) is True]
        if len(enabled) > 1:
            errors.append(f"ChartTypeDefinition[{tag}].default_config enables several palettes: {enabled}.")

    if not errors:
        errors.extend(_generated_code_errors(definition))

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def validate_chart_types(definitions: Iterable[ChartTypeDefinition]) -> ValidationResult:
    """Validate the full set of definitions, including id uniqueness."""

    errors: list[str] = []
    warnings: list[str] = []
    seen: set[str] = set()
    for definition in definitions:
        if definition.id in seen:
            errors.append(f"Duplicate ChartTypeDefinition.id: {definition.id!r}.")
        seen.add(definition.id)
        result = validate_chart_type(definition)
        errors.extend(result.errors)
        warnings.extend(result.warnings)
    if not seen:
        errors.append("At least one ChartTypeDefinition is required.")
    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def _generated_code_errors(definition: ChartTypeDefinition) -> list[str]:
    code = definition.generate_code(definition.default_config)
    errors: list[str] = []
    if DATA_HEADER not in code:
        errors.append(f"ChartTypeDefinition[{definition.id}] generated code has no data section.")
    for marker in TEMPLATE_MARKERS:
        if marker in code:
            errors.append(f"ChartTypeDefinition[{definition.id}] generated code contains {marker!r}.")
    return errors
