"""Discover plugin folders for a geosite and put them in configured order.

A region document lists one or more plugin source directories
(``pluginFolders``). Every immediate subdirectory of those is a plugin and must
contain a ``main.js`` entry point; an optional ``plugin.json`` supplies CSS
urls and shared-library "use" clauses. :class:`PluginDiscovery` turns that
layout into :class:`~geosite.config.PluginDescriptor` objects, and
:func:`order_plugins` applies the region's optional ``pluginOrder`` list.

Examples
--------
>>> from pathlib import Path
>>> from geosite.plugins import PluginDiscovery, order_plugins
>>> discovery = PluginDiscovery(Path("site"))  # doctest: +SKIP
>>> plugins = discovery.discover({"pluginFolders": ["plugins"]})  # doctest: +SKIP
>>> [p.module_identifier for p in order_plugins(plugins, ["measure"])]  # doctest: +SKIP
['plugins/measure/main', 'plugins/layer_selector/main']
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import os
import posixpath
import typing as typ
from pathlib import Path

from ._constants import (
    ENTRY_POINT_FILENAME,
    ENTRY_POINT_MODULE,
    PLUGIN_CONFIG_FILENAME,
    PLUGIN_SCHEMA_KIND,
)
from .config import (
    JsonDocumentLoader,
    MissingEntryPointError,
    MissingPluginDirectoryError,
    PluginDescriptor,
    SchemaValidatedLoader,
)

logger = logging.getLogger(__name__)


class SiteFileSystem(typ.Protocol):
    """File system queries needed to discover plugins."""

    def list_subdirectories(self, path: Path) -> list[Path]:
        """Return the immediate subdirectories of ``path`` in listing order."""
        ...

    def file_exists(self, path: Path) -> bool:
        """Return whether ``path`` is an existing file."""
        ...

    def directory_exists(self, path: Path) -> bool:
        """Return whether ``path`` is an existing directory."""
        ...


class LocalFileSystem:
    """:class:`SiteFileSystem` backed by the local disk.

    Subdirectories are returned sorted by name so discovery order does not
    depend on the operating system's directory enumeration order.
    """

    def list_subdirectories(self, path: Path) -> list[Path]:
        return sorted(child for child in path.iterdir() if child.is_dir())

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    def directory_exists(self, path: Path) -> bool:
        return path.is_dir()


class PluginDiscovery:
    """Enumerate and verify the plugin folders configured for one site."""

    def __init__(
        self,
        base_path: Path,
        *,
        loader: JsonDocumentLoader | None = None,
        filesystem: SiteFileSystem | None = None,
    ) -> None:
        """Initialize plugin discovery for a site.

        Parameters
        ----------
        base_path : Path
            Site root. ``pluginFolders`` entries are resolved against it and
            plugin folder names are reported relative to it.
        loader : JsonDocumentLoader, optional
            Loader used to read and validate ``plugin.json`` files. Defaults to
            :class:`~geosite.config.SchemaValidatedLoader`.
        filesystem : SiteFileSystem, optional
            File system queries; defaults to :class:`LocalFileSystem`.
        """
        self.base_path = base_path
        self.loader = loader or SchemaValidatedLoader()
        self.filesystem = filesystem or LocalFileSystem()

    def plugin_directories(self, region: typ.Mapping[str, typ.Any]) -> list[Path]:
        """Return the plugin source directories named by ``region``.

        Raises
        ------
        MissingPluginDirectoryError
            If a configured directory does not exist.
        """
        entries = region.get("pluginFolders") or []
        directories = [self.base_path / entry for entry in entries]
        for directory in directories:
            if not self.filesystem.directory_exists(directory):
                raise MissingPluginDirectoryError(directory)
        return directories

    def discover(self, region: typ.Mapping[str, typ.Any]) -> list[PluginDescriptor]:
        """Return a descriptor for every plugin folder, in discovery order.

        Parameters
        ----------
        region : Mapping[str, Any]
            Validated region document.

        Returns
        -------
        list[PluginDescriptor]
            One descriptor per plugin folder, listed directory by directory.

        Raises
        ------
        MissingPluginDirectoryError
            If a configured plugin source directory is absent.
        MissingEntryPointError
            If any plugin folder lacks ``main.js``.
        SchemaValidationError
            If a ``plugin.json`` file is malformed.
        """
        plugins: list[PluginDescriptor] = []
        for directory in self.plugin_directories(region):
            for folder in self.filesystem.list_subdirectories(directory):
                plugins.append(self.describe(folder))
        logger.debug(
            "discovered %d plugin(s) under %s", len(plugins), self.base_path
        )
        return plugins

    def describe(self, folder: Path) -> PluginDescriptor:
        """Verify a single plugin folder and build its descriptor."""
        if not self.filesystem.file_exists(folder / ENTRY_POINT_FILENAME):
            raise MissingEntryPointError(folder, ENTRY_POINT_FILENAME)

        config_path = folder / PLUGIN_CONFIG_FILENAME
        config = None
        if self.filesystem.file_exists(config_path):
            config = self.loader.load_and_validate(config_path, PLUGIN_SCHEMA_KIND)

        folder_name = plugin_folder_name(self.base_path, folder)
        return PluginDescriptor(
            folder_name=folder_name,
            module_identifier=plugin_module_identifier(folder_name),
            config=config,
        )


def plugin_folder_name(base_path: Path, folder: Path) -> str:
    """Return ``folder`` relative to ``base_path`` in forward-slash form.

    Examples
    --------
    >>> plugin_folder_name(Path("/site"), Path("/site/plugins/measure"))
    'plugins/measure'
    """
    return Path(os.path.relpath(folder, base_path)).as_posix()


def plugin_module_identifier(folder_name: str) -> str:
    """Return the module identifier used to load a plugin's entry point.

    Examples
    --------
    >>> plugin_module_identifier("plugins/layer_selector")
    'plugins/layer_selector/main'
    """
    return posixpath.join(folder_name, ENTRY_POINT_MODULE)


def strip_plugin_module(name: str, *, module_identifier: bool = False) -> str:
    """Reduce a folder name or module identifier to the bare plugin name.

    The trailing entry module is only dropped from module identifiers, so a
    plugin folder that is itself named ``main`` keeps its name.

    Examples
    --------
    >>> strip_plugin_module("plugins/layer_selector/main", module_identifier=True)
    'layer_selector'
    >>> strip_plugin_module("plugins/layer_selector")
    'layer_selector'
    >>> strip_plugin_module("plugins/main")
    'main'
    """
    name = name.replace("\\", "/").rstrip("/")
    if module_identifier:
        name = name.removesuffix(f"/{ENTRY_POINT_MODULE}")
    return posixpath.basename(name)


def _ordered_indices(
    bare_names: cabc.Sequence[str], order: cabc.Sequence[str] | None
) -> list[int]:
    """Return the positions of ``bare_names`` rearranged to follow ``order``.

    Listed names come first, in list order; unlisted names follow in their
    original relative order. Entries of ``order`` matching no name are ignored.
    """
    if order is None:
        return list(range(len(bare_names)))
    positions: dict[str, int] = {}
    for position, entry in enumerate(order):
        positions.setdefault(entry, position)

    def sort_key(index: int) -> tuple[int, int, int]:
        bare = bare_names[index]
        if bare in positions:
            return (0, positions[bare], index)
        return (1, index, 0)

    indices = sorted(range(len(bare_names)), key=sort_key)
    if logger.isEnabledFor(logging.DEBUG):
        known = set(bare_names)
        for entry in positions:
            if entry not in known:
                logger.debug("pluginOrder entry %r matches no plugin", entry)
    return indices


def sort_plugin_names(
    names: cabc.Sequence[str],
    order: cabc.Sequence[str] | None,
    *,
    module_identifiers: bool = False,
) -> list[str]:
    """Return ``names`` reordered by the region's ``pluginOrder`` list.

    Pass ``module_identifiers=True`` when ``names`` are module identifiers
    rather than folder names; index-aligned lists of each kind then sort
    identically.

    Examples
    --------
    >>> sort_plugin_names(["p/a", "p/b", "p/c"], ["c", "missing", "a"])
    ['p/c', 'p/a', 'p/b']
    >>> sort_plugin_names(["p/a/main", "p/main/main"], ["main"], module_identifiers=True)
    ['p/main/main', 'p/a/main']
    """
    bare_names = [
        strip_plugin_module(name, module_identifier=module_identifiers)
        for name in names
    ]
    return [names[index] for index in _ordered_indices(bare_names, order)]


def order_plugins(
    plugins: cabc.Sequence[PluginDescriptor], order: cabc.Sequence[str] | None
) -> list[PluginDescriptor]:
    """Return ``plugins`` reordered by the region's ``pluginOrder`` list."""
    bare_names = [strip_plugin_module(plugin.folder_name) for plugin in plugins]
    return [plugins[index] for index in _ordered_indices(bare_names, order)]


__all__ = [
    "LocalFileSystem",
    "PluginDiscovery",
    "SiteFileSystem",
    "order_plugins",
    "plugin_folder_name",
    "plugin_module_identifier",
    "sort_plugin_names",
    "strip_plugin_module",
]
