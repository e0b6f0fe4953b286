"""Unit tests for theme color resolution."""

from __future__ import annotations

import pytest

from geosite.config import (
    DEFAULT_COLORS,
    ColorPair,
    InvalidColorError,
    parse_hex_color,
    resolve_colors,
)


def test_missing_colors_block_uses_defaults() -> None:
    """Older region files without ``colors`` get the historical teal-blue."""
    colors = resolve_colors(None)

    assert colors == ColorPair("#26648E", "#26648E"), f"got {colors!r}"
    assert colors is DEFAULT_COLORS


def test_custom_defaults_are_honoured() -> None:
    """Callers may supply their own fallback pair."""
    fallback = ColorPair("#000000", "#FFFFFF")

    assert resolve_colors(None, defaults=fallback) is fallback


def test_configured_colors_are_normalized() -> None:
    """Short and lower-case hex values are returned as upper-case #RRGGBB."""
    colors = resolve_colors({"primary": "#fc6", "secondary": "#26648e"})

    assert colors == ColorPair("#FFCC66", "#26648E"), f"got {colors!r}"


def test_invalid_primary_color_names_the_key() -> None:
    """A malformed value fails with the offending key and chained cause."""
    with pytest.raises(InvalidColorError) as excinfo:
        resolve_colors({"primary": "notacolor", "secondary": "#FFFFFF"})

    error = excinfo.value
    assert error.key == "primary", f"expected key 'primary', got {error.key!r}"
    assert "primary" in str(error), "expected key in error message"
    assert isinstance(error.__cause__, ValueError), "expected parse error as cause"


def test_missing_secondary_color_is_invalid() -> None:
    """A colors block must define both keys."""
    with pytest.raises(InvalidColorError) as excinfo:
        resolve_colors({"primary": "#FFFFFF"})

    assert excinfo.value.key == "secondary"


@pytest.mark.parametrize("value", ["#12345", "123456", "#GGGGGG", "", 42, None])
def test_parse_hex_color_rejects_bad_syntax(value: object) -> None:
    """Only #RGB and #RRGGBB strings are accepted."""
    with pytest.raises(ValueError):  # noqa: PT011 - message varies by input
        parse_hex_color(value)
