"""Load, validate and interpret geosite configuration documents.

This subpackage decodes ``region.json`` and ``plugin.json`` files, checks them
against the bundled JSON Schemas, and turns their link and color blocks into
the strongly typed dataclasses (:class:`LinkNode`, :class:`ColorPair`,
:class:`SiteResult`, etc.) that the assembler and the page template consume.

Examples
--------
>>> from pathlib import Path
>>> from geosite.config import SchemaValidatedLoader, extract_link
>>> region = SchemaValidatedLoader().load_and_validate(
...     Path("region.json"), "region"
... )  # doctest: +SKIP
>>> extract_link(region["titleMain"]).text  # doctest: +SKIP
'Coastal Resilience'
"""

from .helpers import (
    DEFAULT_COLORS,
    extract_link,
    extract_link_list,
    normalize_use_value,
    parse_hex_color,
    resolve_colors,
)
from .loader import JsonDocumentLoader, SchemaValidatedLoader
from .models import (
    ColorPair,
    ConflictingUseClauseError,
    InvalidColorError,
    LinkNode,
    MergedPluginConfig,
    MissingEntryPointError,
    MissingPluginDirectoryError,
    PluginDescriptor,
    SchemaValidationError,
    SiteConfigError,
    SiteResult,
    UseClause,
    UseClauseSet,
)

__all__ = [
    "DEFAULT_COLORS",
    "ColorPair",
    "ConflictingUseClauseError",
    "InvalidColorError",
    "JsonDocumentLoader",
    "LinkNode",
    "MergedPluginConfig",
    "MissingEntryPointError",
    "MissingPluginDirectoryError",
    "PluginDescriptor",
    "SchemaValidatedLoader",
    "SchemaValidationError",
    "SiteConfigError",
    "SiteResult",
    "UseClause",
    "UseClauseSet",
    "extract_link",
    "extract_link_list",
    "normalize_use_value",
    "parse_hex_color",
    "resolve_colors",
]
