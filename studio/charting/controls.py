"""Reusable control descriptors for chart configuration forms.

Controls describe *what* can be tuned (kind, bounds, options). Widgets are
free to render them however they like as long as they feed back values that
respect the descriptor; `validate_field_value` enforces that contract.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Final, Literal

from .errors import InvalidFieldValue
from .palettes import PALETTE_FLAG_KEYS, PALETTE_FLAGS, SINGLE_COLORS

ControlKind = Literal["toggle", "text", "slider", "select", "color", "paletteGroup"]


@dataclass(frozen=True, slots=True)
class SelectOption:
    """A single option for select controls."""

    label: str
    value: str


@dataclass(frozen=True, slots=True)
class PaletteOption:
    """A palette toggle inside a palette group control."""

    key: str
    label: str
    colors: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Control:
    """Describe one tunable parameter.

    Args:
        key: Configuration key, unique within a chart type.
        kind: Widget family used to edit the value.
        label: Form label.
        placeholder: Hint text for text controls.
        min: Lower bound for sliders.
        max: Upper bound for sliders.
        step: Step size for sliders.
        unit: Display unit suffix for sliders.
        options: Allowed values for select controls.
        colors: Allowed hex values for color controls.
        palettes: Palette toggles driven by a palette group control.
    """

    key: str
    kind: ControlKind
    label: str
    placeholder: str | None = None
    min: float | None = None
    max: float | None = None
    step: float | None = None
    unit: str = ""
    options: tuple[SelectOption, ...] = ()
    colors: tuple[str, ...] = ()
    palettes: tuple[PaletteOption, ...] = ()

    def option_values(self) -> tuple[str, ...]:
        """Return the allowed values for select controls."""

        return tuple(option.value for option in self.options)

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable description for form renderers."""

        payload: dict[str, Any] = {"key": self.key, "type": self.kind, "label": self.label}
        if self.kind == "text":
            payload["placeholder"] = self.placeholder or ""
        elif self.kind == "slider":
            payload.update({"min": self.min, "max": self.max, "step": self.step, "unit": self.unit})
        elif self.kind == "select":
            payload["options"] = [{"label": o.label, "value": o.value} for o in self.options]
        elif self.kind == "color":
            payload["options"] = list(self.colors)
        elif self.kind == "paletteGroup":
            payload["options"] = [
                {"key": p.key, "label": p.label, "colors": list(p.colors)} for p in self.palettes
            ]
        return payload


def toggle(key: str, label: str) -> Control:
    """Build a boolean toggle control."""

    return Control(key=key, kind="toggle", label=label)


def text(key: str, label: str, placeholder: str) -> Control:
    """Build a free-text control."""

    return Control(key=key, kind="text", label=label, placeholder=placeholder)


def slider(key: str, label: str, *, min: float, max: float, step: float, unit: str = "") -> Control:
    """Build a numeric slider control."""

    return Control(key=key, kind="slider", label=label, min=min, max=max, step=step, unit=unit)


def select(key: str, label: str, options: tuple[tuple[str, str], ...]) -> Control:
    """Build a select control from `(label, value)` pairs."""

    return Control(
        key=key,
        kind="select",
        label=label,
        options=tuple(SelectOption(label=label, value=value) for label, value in options),
    )


# Color

COLOR: Final[Control] = Control(
    key="color",
    kind="color",
    label="Single Color (or use palette below)",
    colors=tuple(option.value for option in SINGLE_COLORS),
)

PALETTE_GROUP: Final[Control] = Control(
    key="paletteGroup",
    kind="paletteGroup",
    label="Color Palettes",
    palettes=tuple(
        PaletteOption(key=flag, label=palette.label, colors=palette.colors) for flag, palette in PALETTE_FLAGS
    ),
)

# Axis

X_LABEL: Final[Control] = text("xlabel", "X-axis Label", "Enter x-axis label")
Y_LABEL: Final[Control] = text("ylabel", "Y-axis Label", "Enter y-axis label")
TITLE: Final[Control] = text("title", "Chart Title", "Enter chart title")
Y_MIN: Final[Control] = text("yMin", "Y-axis Minimum", "Auto (leave empty)")
Y_MAX: Final[Control] = text("yMax", "Y-axis Maximum", "Auto (leave empty)")
X_MIN: Final[Control] = text("xMin", "X-axis Minimum", "Auto (leave empty)")
X_MAX: Final[Control] = text("xMax", "X-axis Maximum", "Auto (leave empty)")

# Display

GRID: Final[Control] = toggle("showGrid", "Show Grid")
LABEL_ROTATION: Final[Control] = slider(
    "labelRotation", "X-axis Label Rotation", min=0, max=90, step=15, unit="°"
)
SHOW_VALUES: Final[Control] = toggle("showValues", "Show Values on Bars")
VALUE_DECIMALS: Final[Control] = slider("valueDecimals", "Value Decimal Places", min=0, max=3, step=1)

# Reference line

REFERENCE_LINE: Final[tuple[Control, ...]] = (
    toggle("showReferenceLine", "Show Reference Line"),
    text("referenceValue", "Reference Line Value", "e.g., 85.0"),
    text("referenceLabel", "Reference Line Label", "e.g., Baseline"),
)

# Ordering, legend and output

BAR_ORDERING: Final[Control] = select(
    "barOrdering",
    "Bar Ordering",
    (
        ("Original Order", "original"),
        ("Ascending (Low to High)", "ascending"),
        ("Descending (High to Low)", "descending"),
    ),
)

SHOW_LEGEND: Final[Control] = toggle("showLegend", "Show Legend")
LEGEND_POSITION: Final[Control] = select(
    "legendPosition",
    "Legend Position",
    (("Top", "top"), ("Bottom", "bottom"), ("Right", "right")),
)

OUTPUT_FORMAT: Final[Control] = select(
    "outputFormat",
    "Code Style",
    (("Matplotlib", "general"), ("Seaborn (long-form DataFrame)", "statistical")),
)

# Groups used together by several chart types

AXIS: Final[tuple[Control, ...]] = (X_LABEL, Y_LABEL, TITLE, Y_MIN, Y_MAX)
AXIS_HORIZONTAL: Final[tuple[Control, ...]] = (X_LABEL, Y_LABEL, TITLE, X_MIN, X_MAX)
AXIS_BOTH: Final[tuple[Control, ...]] = (X_LABEL, Y_LABEL, TITLE, X_MIN, X_MAX, Y_MIN, Y_MAX)
COLORS: Final[tuple[Control, ...]] = (COLOR, PALETTE_GROUP)
LEGEND: Final[tuple[Control, ...]] = (SHOW_LEGEND, LEGEND_POSITION)


def validate_field_value(controls: tuple[Control, ...], key: str, value: object) -> object:
    """Check a widget value against the control that owns `key`.

    Palette flags are owned by the chart's palette group control. Keys that no
    control declares (e.g. the output style toggle on charts without it) are
    rejected.

    Args:
        controls: Controls declared by the active chart type.
        key: Configuration key being updated.
        value: Raw value received from the widget.

    Returns:
        The value, with integral slider floats normalized to int.

    Raises:
        InvalidFieldValue: When the key is unknown or the value breaks the
            control's contract.
    """

    if key in PALETTE_FLAG_KEYS:
        if not any(c.kind == "paletteGroup" for c in controls):
            raise InvalidFieldValue(key, "this chart type has no palette controls")
        if not isinstance(value, bool):
            raise InvalidFieldValue(key, "palette flags must be booleans")
        return value

    control = next((c for c in controls if c.key == key), None)
    if control is None:
        raise InvalidFieldValue(key, "not a configurable field for this chart type")

    if control.kind == "toggle":
        if not isinstance(value, bool):
            raise InvalidFieldValue(key, "expected a boolean")
        return value
    if control.kind == "text":
        if not isinstance(value, str):
            raise InvalidFieldValue(key, "expected a string")
        return value
    if control.kind == "select":
        if value not in control.option_values():
            raise InvalidFieldValue(key, f"expected one of {list(control.option_values())}")
        return value
    if control.kind == "color":
        if value not in control.colors:
            raise InvalidFieldValue(key, f"expected one of {list(control.colors)}")
        return value
    if control.kind == "slider":
        return _validate_slider(control, value)
    raise InvalidFieldValue(key, "palette groups are set through their individual palette flags")


def _validate_slider(control: Control, value: object) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidFieldValue(control.key, "expected a finite number")
    assert control.min is not None and control.max is not None and control.step is not None
    if value < control.min or value > control.max:
        raise InvalidFieldValue(control.key, f"expected a value in [{control.min}, {control.max}]")
    steps = (value - control.min) / control.step
    if abs(steps - round(steps)) > 1e-6:
        raise InvalidFieldValue(control.key, f"expected a multiple of {control.step} from {control.min}")
    if isinstance(value, float) and value.is_integer() and float(control.step).is_integer():
        return int(value)
    return value
