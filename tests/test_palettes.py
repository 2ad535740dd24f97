"""Tests for palette interpolation and palette resolution."""

from __future__ import annotations

import pytest

from studio.charting.errors import InvalidCount
from studio.charting.palettes import (
    BLUES,
    DEFAULT_COLOR,
    GREENS,
    MULTI,
    PALETTE_FLAGS,
    REDS,
    color_sequence,
    element_colors,
    interpolate,
    resolve_palette,
)

pytestmark = pytest.mark.unit

ALL_PALETTES = (BLUES, REDS, GREENS, MULTI)


@pytest.mark.parametrize("palette", ALL_PALETTES, ids=lambda p: p.name)
def test_interpolate_identity_when_count_matches_anchor_count(palette) -> None:
    """Requesting exactly the anchor count returns the anchors unchanged."""

    assert interpolate(palette, len(palette.colors)) == palette.colors


@pytest.mark.parametrize("palette", ALL_PALETTES, ids=lambda p: p.name)
def test_interpolate_single_color_picks_middle_anchor(palette) -> None:
    """A single color is the middle anchor, not a blend."""

    middle = palette.colors[(len(palette.colors) - 1) // 2]
    assert interpolate(palette, 1) == (middle,)


def test_interpolate_blues_three_hits_exact_anchors() -> None:
    """Evenly spaced counts land on anchors without rounding drift."""

    assert interpolate(BLUES, 3) == ("#DBE0F2", "#4C6EE6", "#1E265C")


def test_interpolate_blends_between_anchors() -> None:
    """Intermediate positions blend each channel and round half up."""

    colors = interpolate(BLUES, 9)
    assert len(colors) == 9
    assert colors[0::2] == BLUES.colors
    assert colors[1] == "#B5C3F6"


def test_interpolate_accepts_raw_anchor_sequences() -> None:
    """Plain hex sequences are accepted and the midpoint rounds half up."""

    assert interpolate(["#000000", "#FFFFFF"], 3) == ("#000000", "#808080", "#FFFFFF")


@pytest.mark.parametrize("palette", ALL_PALETTES, ids=lambda p: p.name)
def test_interpolate_converges_at_shared_positions(palette) -> None:
    """Positions shared by two counts produce the same color."""

    three = interpolate(palette, 3)
    five = interpolate(palette, 5)
    two = interpolate(palette, 2)
    assert three[1] == five[2]
    assert two[0] == three[0] == five[0]
    assert two[-1] == three[-1] == five[-1]


@pytest.mark.parametrize("count", [0, -3])
def test_interpolate_rejects_counts_below_one(count: int) -> None:
    """Invalid counts fail fast instead of clamping."""

    with pytest.raises(InvalidCount):
        interpolate(BLUES, count)
    with pytest.raises(ValueError):
        interpolate(BLUES, count)


def test_interpolate_requires_two_anchors() -> None:
    """A single anchor cannot be interpolated."""

    with pytest.raises(ValueError, match="at least two anchors"):
        interpolate(["#123456"], 3)


def test_interpolated_colors_are_uppercase_hex() -> None:
    """Every produced color is an uppercase #RRGGBB string."""

    for palette in ALL_PALETTES:
        for count in range(1, 12):
            for color in interpolate(palette, count):
                assert len(color) == 7
                assert color.startswith("#")
                assert color[1:] == color[1:].upper()
                int(color[1:], 16)


def test_categorical_palette_is_interpolated_like_the_others() -> None:
    """The Multi palette follows the same interpolation as sequential tables."""

    assert color_sequence(MULTI, 3) == ("#2D4DB9", "#9E4FA5", "#FF7759")
    assert color_sequence(MULTI, 7) == interpolate(MULTI, 7)
    assert element_colors({"useMultiColor": True}, 3) == interpolate(MULTI, 3)
    assert element_colors({"useMultiColor": True}, 5) == MULTI.colors


def test_sequential_palette_sequence_uses_interpolation() -> None:
    """Sequential palettes stretch across the requested count."""

    assert color_sequence(REDS, 3) == interpolate(REDS, 3)


def test_resolve_palette_uses_priority_order() -> None:
    """Blues wins over Reds when both flags are set."""

    resolved = resolve_palette({"useRedsPalette": True, "useBluesPalette": True})
    assert resolved == (BLUES, "Blues")


def test_resolve_palette_returns_none_without_flags() -> None:
    """No flag means the single-color path."""

    assert resolve_palette({}) is None
    assert resolve_palette({flag: False for flag, _ in PALETTE_FLAGS}) is None


def test_element_colors_single_color_path() -> None:
    """Without a palette every element uses the configured or default color."""

    assert element_colors({"color": "#C44B3D"}, 3) == ("#C44B3D",) * 3
    assert element_colors({}, 2) == (DEFAULT_COLOR, DEFAULT_COLOR)
    with pytest.raises(InvalidCount):
        element_colors({}, 0)


def test_element_colors_palette_path() -> None:
    """An active palette drives per-element colors."""

    assert element_colors({"useGreensPalette": True}, 5) == GREENS.colors
