"""Typed dataclasses and errors describing an assembled geosite."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json


def encode_compact(value: object) -> str:
    """Return the compact JSON text of ``value``, preserving key order."""
    return msgspec_json.encode(value).decode("utf-8")


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class SchemaValidationError(SiteConfigError):
    """Raised when a JSON document is malformed or violates its schema."""

    def __init__(self, path: Path | str, errors: cabc.Sequence[str]) -> None:
        self.path = Path(path)
        self.errors = tuple(errors)
        details = "; ".join(self.errors)
        super().__init__(f"Invalid configuration file '{self.path}': {details}")


class MissingPluginDirectoryError(SiteConfigError):
    """Raised when a plugin source directory named in region.json is absent."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Plugin directory '{self.path}' does not exist.")


class MissingEntryPointError(SiteConfigError):
    """Raised when a plugin folder has no entry-point script."""

    def __init__(self, folder: Path | str, filename: str) -> None:
        self.folder = Path(folder)
        self.filename = filename
        super().__init__(f"Missing '{filename}' file in plugin folder: {self.folder}")


class InvalidColorError(SiteConfigError):
    """Raised when a configured color is not valid hex (HTML) notation."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"Bad color config for key: `{key}` (got {value!r}). "
            "Please use Hex (HTML) notation, ex. #FFCC66"
        )


class ConflictingUseClauseError(SiteConfigError):
    """Raised when two plugins bind the same 'use' clause to different values."""

    def __init__(
        self,
        clause: str,
        value: str,
        existing: str,
        *,
        plugin: str | None = None,
        existing_plugin: str | None = None,
    ) -> None:
        self.clause = clause
        self.value = value
        self.existing = existing
        self.plugin = plugin
        self.existing_plugin = existing_plugin
        message = (
            f"Plugins define 'use' clause '{clause}' differently: "
            f"'{value}' vs. '{existing}'"
        )
        if plugin or existing_plugin:
            message += f" ({plugin or '?'} vs. {existing_plugin or '?'})"
        super().__init__(message)


@dc.dataclass(frozen=True, slots=True)
class LinkNode:
    """A navigation link, optionally holding a dropdown of child links.

    Attributes
    ----------
    text : str
        Visible label; empty when the JSON omits it.
    url : str
        Link target; empty when the JSON omits it.
    popup : bool
        Whether the link opens the url in a popup window.
    launchpad_id : str or None
        Id of the launchpad this item triggers, if it is a launchpad trigger.
    element_id : str or None
        Id assigned to the rendered ``<a>`` tag.
    items : tuple[LinkNode, ...]
        Child links; non-empty tuples signify a dropdown menu.
    """

    text: str = ""
    url: str = ""
    popup: bool = False
    launchpad_id: str | None = None
    element_id: str | None = None
    items: tuple[LinkNode, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ColorPair:
    """Primary and secondary theme colors in ``#RRGGBB`` form."""

    primary: str
    secondary: str


@dc.dataclass(frozen=True, slots=True)
class PluginDescriptor:
    """A discovered plugin folder and its optional ``plugin.json`` payload."""

    folder_name: str
    module_identifier: str
    config: typ.Mapping[str, typ.Any] | None = None


@dc.dataclass(frozen=True, slots=True)
class UseClause:
    """One named library binding declared by a plugin."""

    name: str
    value: typ.Any
    normalized: str
    source: str | None = None


@dc.dataclass(frozen=True, slots=True)
class UseClauseSet:
    """Use clauses in the order they were first declared."""

    clauses: tuple[UseClause, ...] = ()

    def __len__(self) -> int:
        return len(self.clauses)

    def __contains__(self, name: object) -> bool:
        return any(clause.name == name for clause in self.clauses)

    def __getitem__(self, name: str) -> UseClause:
        for clause in self.clauses:
            if clause.name == name:
                return clause
        raise KeyError(name)

    def names(self) -> list[str]:
        """Return clause names in first-seen order."""
        return [clause.name for clause in self.clauses]

    def render(self) -> str:
        """Render one ``"name": value`` expression per line for loader scripts.

        Examples
        --------
        >>> clause = UseClause("underscore", {"attach": "_"}, '{"attach":"_"}')
        >>> UseClauseSet((clause,)).render()
        '"underscore": {"attach":"_"}'
        """
        return ",\n".join(
            f"{encode_compact(clause.name)}: {encode_compact(clause.value)}"
            for clause in self.clauses
        )


@dc.dataclass(frozen=True, slots=True)
class MergedPluginConfig:
    """CSS urls and use clauses combined across every plugin."""

    css_urls: tuple[str, ...] = ()
    use_clauses: UseClauseSet = dc.field(default_factory=UseClauseSet)


@dc.dataclass(frozen=True, slots=True)
class SiteResult:
    """Everything the page template needs to render a geosite."""

    framework_version: str | None
    google_analytics_property_id: str | None
    title_main: LinkNode | None
    title_detail: LinkNode | None
    header_links: tuple[LinkNode, ...]
    region_links: tuple[LinkNode, ...]
    region_data_json: str
    plugins: tuple[PluginDescriptor, ...]
    plugin_folder_names: tuple[str, ...]
    plugin_module_names: tuple[str, ...]
    plugin_module_identifiers: str
    plugin_variable_names: str
    plugin_css_urls: tuple[str, ...]
    use_clauses: UseClauseSet
    configuration_for_use_js: str
    colors: ColorPair

    @property
    def primary_color(self) -> str:
        return self.colors.primary

    @property
    def secondary_color(self) -> str:
        return self.colors.secondary


__all__ = [
    "ColorPair",
    "ConflictingUseClauseError",
    "InvalidColorError",
    "LinkNode",
    "MergedPluginConfig",
    "MissingEntryPointError",
    "MissingPluginDirectoryError",
    "PluginDescriptor",
    "SchemaValidationError",
    "SiteConfigError",
    "SiteResult",
    "UseClause",
    "UseClauseSet",
    "encode_compact",
]
