"""Merge the optional ``plugin.json`` settings of every plugin on a site.

Example ``plugin.json``::

    {
        "css": [
            "plugins/layer_selector/main.css",
            "//cdn.sencha.io/ext-4.1.1-gpl/resources/css/ext-all.css"
        ],
        "use": {
            "underscore": { "attach": "_" },
            "extjs": { "attach": "Ext" }
        }
    }

CSS urls are concatenated in plugin order. "use" clauses bind a shared
client-side library for the module loader; every plugin declaring a clause
must bind it identically (ignoring whitespace), otherwise the site cannot be
assembled.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from .config import (
    ConflictingUseClauseError,
    MergedPluginConfig,
    PluginDescriptor,
    UseClause,
    UseClauseSet,
    normalize_use_value,
)
from .config.models import encode_compact

logger = logging.getLogger(__name__)


class PluginConfigMerger:
    """Accumulate CSS urls and use clauses across plugin configurations."""

    def __init__(self) -> None:
        self._css_urls: list[str] = []
        self._clauses: dict[str, UseClause] = {}

    def add(
        self, config: typ.Mapping[str, typ.Any] | None, *, source: str | None = None
    ) -> None:
        """Merge one plugin's configuration; ``None`` is a no-op.

        Parameters
        ----------
        config : Mapping[str, Any] or None
            Validated ``plugin.json`` payload.
        source : str, optional
            Folder name of the plugin, reported in conflict errors.

        Raises
        ------
        ConflictingUseClauseError
            If a use clause was already recorded with a different value.
        """
        if config is None:
            return
        self._css_urls.extend(config.get("css") or [])
        for name, value in (config.get("use") or {}).items():
            self._add_clause(name, value, source)

    def _add_clause(self, name: str, value: typ.Any, source: str | None) -> None:  # noqa: ANN401
        normalized = normalize_use_value(value)
        existing = self._clauses.get(name)
        if existing is None:
            self._clauses[name] = UseClause(
                name=name, value=value, normalized=normalized, source=source
            )
            return
        if existing.normalized != normalized:
            raise ConflictingUseClauseError(
                name,
                encode_compact(value),
                encode_compact(existing.value),
                plugin=source,
                existing_plugin=existing.source,
            )
        logger.debug("use clause %r from %s already recorded", name, source)

    def result(self) -> MergedPluginConfig:
        """Return the merged CSS urls and use clauses."""
        return MergedPluginConfig(
            css_urls=tuple(self._css_urls),
            use_clauses=UseClauseSet(tuple(self._clauses.values())),
        )


def merge_plugin_configs(
    plugins: cabc.Iterable[PluginDescriptor],
) -> MergedPluginConfig:
    """Merge the configuration of ``plugins`` in the order given.

    Assembly passes the plugins already sorted by the region's ``pluginOrder``
    list, so CSS urls load in that order and each use clause is rendered at
    the position of the first ordered plugin declaring it. Discovery order
    only applies to plugins that ``pluginOrder`` leaves unlisted.

    Examples
    --------
    >>> from geosite.config import PluginDescriptor
    >>> merged = merge_plugin_configs([
    ...     PluginDescriptor("p/a", "p/a/main", {"css": ["a.css"]}),
    ...     PluginDescriptor("p/b", "p/b/main", {"css": ["a.css", "b.css"]}),
    ... ])
    >>> merged.css_urls
    ('a.css', 'a.css', 'b.css')
    """
    merger = PluginConfigMerger()
    for plugin in plugins:
        merger.add(plugin.config, source=plugin.folder_name)
    return merger.result()


__all__ = ["PluginConfigMerger", "merge_plugin_configs"]
