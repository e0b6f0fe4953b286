"""Assemble the view model for a geosite from region.json and its plugins.

:class:`SiteAssembler` ties the pipeline together: it loads and validates the
region document, discovers and orders the plugin folders, extracts the link
trees, resolves the theme colors and merges every ``plugin.json``. The result
is an immutable :class:`~geosite.config.SiteResult`; any failure aborts the
whole assembly.

Typical usage:

>>> from pathlib import Path
>>> from geosite.site import load_site
>>> site = load_site(Path("site/region.json"), Path("site"))  # doctest: +SKIP
>>> site.plugin_variable_names  # doctest: +SKIP
'p0, p1'
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

import msgspec.json as msgspec_json

from ._constants import PLUGIN_VARIABLE_TEMPLATE, REGION_SCHEMA_KIND
from .config import (
    DEFAULT_COLORS,
    ColorPair,
    JsonDocumentLoader,
    PluginDescriptor,
    SchemaValidatedLoader,
    SiteResult,
    extract_link,
    extract_link_list,
    resolve_colors,
)
from .merge import merge_plugin_configs
from .plugins import PluginDiscovery, SiteFileSystem, order_plugins

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class SiteAssembler:
    """Build :class:`SiteResult` objects for the site rooted at ``base_path``."""

    def __init__(
        self,
        base_path: Path,
        *,
        loader: JsonDocumentLoader | None = None,
        filesystem: SiteFileSystem | None = None,
        framework_version: str | None = None,
        default_colors: ColorPair = DEFAULT_COLORS,
    ) -> None:
        """Initialize the assembler.

        Parameters
        ----------
        base_path : Path
            Site root that ``pluginFolders`` entries are relative to.
        loader : JsonDocumentLoader, optional
            Loader for region and plugin documents; defaults to
            :class:`~geosite.config.SchemaValidatedLoader`.
        filesystem : SiteFileSystem, optional
            File system queries used by plugin discovery.
        framework_version : str, optional
            Version string exposed to the page template.
        default_colors : ColorPair, optional
            Colors used when the region document has no ``colors`` block.
        """
        self.base_path = base_path
        self.loader = loader or SchemaValidatedLoader()
        self.discovery = PluginDiscovery(
            base_path, loader=self.loader, filesystem=filesystem
        )
        self.framework_version = framework_version
        self.default_colors = default_colors

    def assemble(self, region_path: Path) -> SiteResult:
        """Load ``region_path`` and every configured plugin into a SiteResult.

        Raises
        ------
        FileNotFoundError
            If the region file does not exist.
        SiteConfigError
            Any validation, discovery, color or merge failure (see
            :mod:`geosite.config.models` for the concrete subclasses).
        """
        region = self.loader.load_and_validate(region_path, REGION_SCHEMA_KIND)
        plugins = self.discovery.discover(region)
        logger.debug("assembling %s with %d plugin(s)", region_path, len(plugins))
        return self.assemble_document(region, plugins)

    def assemble_document(
        self,
        region: typ.Mapping[str, typ.Any],
        plugins: cabc.Sequence[PluginDescriptor],
    ) -> SiteResult:
        """Build a SiteResult from an already validated region and plugin list.

        Parameters
        ----------
        region : Mapping[str, Any]
            Validated region document. It is not modified.
        plugins : Sequence[PluginDescriptor]
            Plugins in discovery order.

        Returns
        -------
        SiteResult
            The assembled view model.
        """
        ordered = order_plugins(plugins, region.get("pluginOrder"))
        folder_names = tuple(plugin.folder_name for plugin in ordered)
        module_names = tuple(plugin.module_identifier for plugin in ordered)

        # The client reads the full plugin list back out of the region JSON.
        region_data = dict(region)
        region_data["pluginFolderNames"] = list(folder_names)

        title_main = region.get("titleMain")
        title_detail = region.get("titleDetail")
        merged = merge_plugin_configs(ordered)

        return SiteResult(
            framework_version=self.framework_version,
            google_analytics_property_id=region.get("googleAnalyticsPropertyId"),
            title_main=extract_link(title_main) if title_main is not None else None,
            title_detail=(
                extract_link(title_detail) if title_detail is not None else None
            ),
            header_links=extract_link_list(region.get("headerLinks")),
            region_links=extract_link_list(region.get("regionLinks")),
            region_data_json=_format_json(region_data),
            plugins=tuple(ordered),
            plugin_folder_names=folder_names,
            plugin_module_names=module_names,
            plugin_module_identifiers=join_module_identifiers(module_names),
            plugin_variable_names=join_variable_names(len(ordered)),
            plugin_css_urls=merged.css_urls,
            use_clauses=merged.use_clauses,
            configuration_for_use_js=merged.use_clauses.render(),
            colors=resolve_colors(region.get("colors"), defaults=self.default_colors),
        )


def join_module_identifiers(module_names: cabc.Sequence[str]) -> str:
    """Quote and join module identifiers for a generated ``require`` call.

    Examples
    --------
    >>> join_module_identifiers(["plugins/layer_selector/main", "plugins/measure/main"])
    "'plugins/layer_selector/main', 'plugins/measure/main'"
    >>> join_module_identifiers([])
    ''
    """
    return ", ".join(f"'{name}'" for name in module_names)


def join_variable_names(count: int) -> str:
    """Return the callback parameter names ``p0, p1, ...`` for ``count`` plugins.

    Examples
    --------
    >>> join_variable_names(3)
    'p0, p1, p2'
    """
    return ", ".join(PLUGIN_VARIABLE_TEMPLATE.format(index=i) for i in range(count))


def _format_json(document: typ.Mapping[str, typ.Any]) -> str:
    """Serialize ``document`` as two-space indented JSON, preserving key order."""
    return msgspec_json.format(msgspec_json.encode(document), indent=2).decode("utf-8")


def load_site(
    region_path: Path,
    base_path: Path,
    *,
    schema_dir: Path | None = None,
    framework_version: str | None = None,
) -> SiteResult:
    """Assemble the site described by ``region_path`` in a single call.

    Parameters
    ----------
    region_path : Path
        Path to ``region.json``.
    base_path : Path
        Site root containing the plugin source directories.
    schema_dir : Path, optional
        Directory with ``region.schema.json``/``plugin.schema.json`` overrides.
    framework_version : str, optional
        Version string exposed to the page template.

    Returns
    -------
    SiteResult
        The assembled view model.
    """
    assembler = SiteAssembler(
        base_path,
        loader=SchemaValidatedLoader(schema_dir),
        framework_version=framework_version,
    )
    return assembler.assemble(region_path)


__all__ = [
    "SiteAssembler",
    "join_module_identifiers",
    "join_variable_names",
    "load_site",
]
