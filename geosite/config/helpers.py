"""Utility helpers shared by the geosite configuration loader and assembler."""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ

from .._constants import DEFAULT_PRIMARY_COLOR, DEFAULT_SECONDARY_COLOR
from .models import (
    ColorPair,
    InvalidColorError,
    LinkNode,
    SiteConfigError,
    encode_compact,
)

DEFAULT_COLORS = ColorPair(
    primary=DEFAULT_PRIMARY_COLOR, secondary=DEFAULT_SECONDARY_COLOR
)
COLOR_KEYS = ("primary", "secondary")

_HEX_COLOR = re.compile(r"#(?P<digits>[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
_WHITESPACE = re.compile(r"\s")


def normalize_use_value(value: object) -> str:
    """Return the JSON text of a use clause value with all whitespace removed.

    Examples
    --------
    >>> normalize_use_value({"attach": "Ext"})
    '{"attach":"Ext"}'
    """
    return _WHITESPACE.sub("", encode_compact(value))


def _optional_str(value: object | None) -> str | None:
    """Return ``value`` as a string, or None when it is absent."""
    if value is None:
        return None
    return str(value)


def _parse_bool(value: object | None) -> bool:
    """Parse a JSON boolean or its string form (``"true"``/``"false"``)."""
    match value:
        case None:
            return False
        case bool():
            return value
        case str() as text if text.strip().lower() in {"true", "false"}:
            return text.strip().lower() == "true"
        case _:
            msg = f"Invalid popup flag {value!r}; expected true or false."
            raise SiteConfigError(msg)


def extract_link(payload: typ.Mapping[str, typ.Any]) -> LinkNode:
    """Build a :class:`LinkNode` tree from a JSON link object.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Link object with optional ``text``, ``url``, ``popup``,
        ``launchpadId``, ``elementId`` and ``items`` keys.

    Returns
    -------
    LinkNode
        The link and, recursively, every child listed under ``items``.

    Raises
    ------
    SiteConfigError
        If ``popup`` is neither a boolean nor a boolean string.

    Examples
    --------
    >>> node = extract_link({"text": "Home", "url": "/", "items": [{"text": "Sub"}]})
    >>> node.items[0].text, node.items[0].url, node.items[0].items
    ('Sub', '', ())
    """
    return LinkNode(
        text=_optional_str(payload.get("text")) or "",
        url=_optional_str(payload.get("url")) or "",
        popup=_parse_bool(payload.get("popup")),
        launchpad_id=_optional_str(payload.get("launchpadId")),
        element_id=_optional_str(payload.get("elementId")),
        items=extract_link_list(payload.get("items")),
    )


def extract_link_list(
    payload: cabc.Iterable[typ.Mapping[str, typ.Any]] | None,
) -> tuple[LinkNode, ...]:
    """Extract every link in ``payload``; a missing list yields ``()``."""
    if payload is None:
        return ()
    return tuple(extract_link(item) for item in payload)


def parse_hex_color(value: object) -> str:
    """Validate an HTML hex color and return it as upper-case ``#RRGGBB``.

    Raises
    ------
    ValueError
        If ``value`` is not a ``#RGB`` or ``#RRGGBB`` string.

    Examples
    --------
    >>> parse_hex_color("#fc6")
    '#FFCC66'
    """
    if not isinstance(value, str):
        msg = f"expected a string, got {type(value).__name__}"
        raise ValueError(msg)  # noqa: TRY004 - surfaced as InvalidColorError
    match = _HEX_COLOR.fullmatch(value.strip())
    if match is None:
        msg = f"'{value}' is not a hex color"
        raise ValueError(msg)
    digits = match.group("digits")
    if len(digits) == 3:
        digits = "".join(digit * 2 for digit in digits)
    return f"#{digits.upper()}"


def resolve_colors(
    colors: typ.Mapping[str, typ.Any] | None,
    *,
    defaults: ColorPair = DEFAULT_COLORS,
) -> ColorPair:
    """Resolve the region's theme colors, falling back to ``defaults``.

    The values are embedded verbatim into generated markup and scripts, so
    each configured key must parse as a hex color.

    Raises
    ------
    InvalidColorError
        If a key is missing or its value is not hex (HTML) notation; the
        parse failure is chained as ``__cause__``.
    """
    if colors is None:
        return defaults
    resolved: dict[str, str] = {}
    for key in COLOR_KEYS:
        value = colors.get(key)
        try:
            resolved[key] = parse_hex_color(value)
        except ValueError as exc:
            raise InvalidColorError(key, value) from exc
    return ColorPair(**resolved)


__all__ = [
    "COLOR_KEYS",
    "DEFAULT_COLORS",
    "encode_compact",
    "extract_link",
    "extract_link_list",
    "normalize_use_value",
    "parse_hex_color",
    "resolve_colors",
]
