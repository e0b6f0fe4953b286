"""Shared fixtures for building throwaway geosite trees on disk."""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path


class SiteBuilder:
    """Write a site root with a ``region.json`` and plugin folders."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def add_plugin(
        self,
        name: str,
        config: typ.Mapping[str, typ.Any] | None = None,
        *,
        folder: str = "plugins",
        entry_point: bool = True,
    ) -> Path:
        """Create ``<folder>/<name>`` with ``main.js`` and optional plugin.json."""
        plugin_dir = self.root / folder / name
        plugin_dir.mkdir(parents=True)
        if entry_point:
            (plugin_dir / "main.js").write_text("define([], function () {});\n")
        if config is not None:
            (plugin_dir / "plugin.json").write_bytes(msgspec_json.encode(config))
        return plugin_dir

    def write_region(self, **fields: typ.Any) -> Path:  # noqa: ANN401
        """Write ``region.json``; ``pluginFolders`` defaults to ``["plugins"]``."""
        region = {"pluginFolders": ["plugins"], **fields}
        for entry in region["pluginFolders"]:
            (self.root / entry).mkdir(parents=True, exist_ok=True)
        path = self.root / "region.json"
        path.write_bytes(msgspec_json.encode(region))
        return path


@pytest.fixture
def site_builder(tmp_path: Path) -> SiteBuilder:
    """Return a :class:`SiteBuilder` rooted in a fresh temporary directory."""
    return SiteBuilder(tmp_path)
