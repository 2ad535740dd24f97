"""Color palette tables and the palette interpolator.

The tables are plain constant data. `interpolate` and `color_sequence` are the
only way colors are derived from a table, so the generated script and the
preview payload always agree on which color lands on which element.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final, Literal

from .errors import InvalidCount

PaletteKind = Literal["sequential", "categorical"]
PaletteFlag = Literal["useBluesPalette", "useRedsPalette", "useGreensPalette", "useMultiColor"]


@dataclass(frozen=True, slots=True)
class Palette:
    """A named, ordered set of anchor colors.

    Args:
        name: Stable identifier used in generated variable names (e.g. "blues").
        label: Display label shown next to the palette toggle.
        colors: Anchor colors as uppercase `#RRGGBB` strings, light to dark for
            sequential tables.
        kind: Named in generated palette comments ("Blues sequential palette").
    """

    name: str
    label: str
    colors: tuple[str, ...]
    kind: PaletteKind


@dataclass(frozen=True, slots=True)
class ColorOption:
    """A single selectable color for charts drawn in one color."""

    value: str
    label: str


DEFAULT_COLOR: Final[str] = "#4C6EE6"

SINGLE_COLORS: Final[tuple[ColorOption, ...]] = (
    ColorOption(value="#1E265C", label="Dark Blue (AB-900)"),
    ColorOption(value="#2D4DB9", label="Blue (AB-700)"),
    ColorOption(value="#4C6EE6", label="Medium Blue (AB-600)"),
    ColorOption(value="#C44B3D", label="Red (RC-700)"),
    ColorOption(value="#9E4FA5", label="Purple (PC-700)"),
    ColorOption(value="#3B5F5C", label="Dark Green (GG-700)"),
    ColorOption(value="#5F8E89", label="Green (GG-600)"),
)

BLUES: Final[Palette] = Palette(
    name="blues",
    label="Blues",
    colors=("#DBE0F2", "#8FA6F9", "#4C6EE6", "#2D4DB9", "#1E265C"),
    kind="sequential",
)
REDS: Final[Palette] = Palette(
    name="reds",
    label="Reds",
    colors=("#FFD9D0", "#FFA18C", "#FF7759", "#CA492D", "#662F24"),
    kind="sequential",
)
GREENS: Final[Palette] = Palette(
    name="greens",
    label="Greens",
    colors=("#CFE9B4", "#91D49E", "#5BBF8A", "#357A4D", "#16270D"),
    kind="sequential",
)
MULTI: Final[Palette] = Palette(
    name="multi",
    label="Multi-Color",
    colors=("#2D4DB9", "#C44B3D", "#9E4FA5", "#3B5F5C", "#FF7759"),
    kind="categorical",
)

# Resolution priority order.
PALETTE_FLAGS: Final[tuple[tuple[PaletteFlag, Palette], ...]] = (
    ("useBluesPalette", BLUES),
    ("useRedsPalette", REDS),
    ("useGreensPalette", GREENS),
    ("useMultiColor", MULTI),
)

PALETTE_FLAG_KEYS: Final[frozenset[str]] = frozenset(flag for flag, _ in PALETTE_FLAGS)


def interpolate(palette: Palette | Sequence[str], count: int) -> tuple[str, ...]:
    """Stretch a palette's anchors to exactly `count` colors.

    Args:
        palette: A Palette or a sequence of `#RRGGBB` anchors (at least two).
        count: Number of colors requested.

    Returns:
        A tuple of `count` uppercase hex colors. One color returns the middle
        anchor; a count equal to the anchor count returns the anchors unchanged.

    Raises:
        InvalidCount: When `count` is lower than 1.
        ValueError: When fewer than two anchors are supplied.
    """

    anchors = tuple(palette.colors if isinstance(palette, Palette) else palette)
    if count < 1:
        raise InvalidCount(count)
    if len(anchors) < 2:
        raise ValueError(f"A palette needs at least two anchors, got {len(anchors)}.")

    if count == 1:
        return (anchors[(len(anchors) - 1) // 2],)
    if count == len(anchors):
        return anchors

    span = len(anchors) - 1
    colors: list[str] = []
    for i in range(count):
        position = i / (count - 1) * span
        lo = math.floor(position)
        hi = math.ceil(position)
        if lo == hi:
            colors.append(anchors[lo])
            continue
        colors.append(_blend(anchors[lo], anchors[hi], position - lo))
    return tuple(colors)


def color_sequence(palette: Palette, count: int) -> tuple[str, ...]:
    """Return one color per element for a palette.

    Every table is stretched with `interpolate`, categorical ones included,
    so the preview and the script agree on the color at each index.

    Raises:
        InvalidCount: When `count` is lower than 1.
    """

    return interpolate(palette, count)


def resolve_palette(config: Mapping[str, object]) -> tuple[Palette, str] | None:
    """Return the active palette and its display name, or None for single color.

    Flags are checked in fixed priority order (Blues, Reds, Greens, Multi).
    """

    for flag, palette in PALETTE_FLAGS:
        if config.get(flag) is True:
            return palette, palette.label
    return None


def single_color(config: Mapping[str, object]) -> str:
    """Return the configured single color or the default."""

    color = config.get("color")
    if isinstance(color, str) and color.strip():
        return color.strip()
    return DEFAULT_COLOR


def element_colors(config: Mapping[str, object], count: int) -> tuple[str, ...]:
    """Return the color for each of `count` chart elements.

    Raises:
        InvalidCount: When `count` is lower than 1.
    """

    resolved = resolve_palette(config)
    if resolved is None:
        if count < 1:
            raise InvalidCount(count)
        return (single_color(config),) * count
    palette, _ = resolved
    return color_sequence(palette, count)


def _blend(start: str, end: str, factor: float) -> str:
    a = _hex_to_rgb(start)
    b = _hex_to_rgb(end)
    channels = []
    for lo, hi in zip(a, b):
        value = math.floor(lo + (hi - lo) * factor + 0.5)
        channels.append(min(255, max(0, value)))
    return "#{:02X}{:02X}{:02X}".format(*channels)


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    raw = color.lstrip("#")
    if len(raw) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {color!r}.")
    return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)
