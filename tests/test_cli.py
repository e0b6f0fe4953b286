"""Tests for the ``geosite`` CLI commands."""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest

from geosite import cli
from geosite.config import InvalidColorError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import SiteBuilder


def test_validate_prints_summary(
    site_builder: SiteBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    """validate reports plugin, stylesheet and use clause counts."""
    site_builder.add_plugin("alpha", {"css": ["a.css", "b.css"], "use": {"d3": "d3"}})
    site_builder.add_plugin("beta")
    region_path = site_builder.write_region()

    cli.validate(region=region_path, base_path=site_builder.root)

    out = capsys.readouterr().out
    assert "2 plugin(s), 2 stylesheet(s), 1 use clause(s)" in out, f"got {out!r}"


def test_validate_propagates_configuration_errors(site_builder: SiteBuilder) -> None:
    """Misconfigured sites raise instead of printing a summary."""
    region_path = site_builder.write_region(
        colors={"primary": "#12", "secondary": "#FFF"}
    )

    with pytest.raises(InvalidColorError):
        cli.validate(region=region_path, base_path=site_builder.root)


def test_assemble_prints_site_json(
    site_builder: SiteBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    """assemble dumps the SiteResult fields as JSON."""
    site_builder.add_plugin("alpha")
    region_path = site_builder.write_region(titleMain={"text": "Coast", "url": "/"})

    cli.assemble(region=region_path, base_path=site_builder.root)

    payload = msgspec_json.decode(capsys.readouterr().out)
    assert payload["plugin_folder_names"] == ["plugins/alpha"]
    assert payload["title_main"]["text"] == "Coast"
    assert payload["colors"] == {"primary": "#26648E", "secondary": "#26648E"}


def test_loader_writes_script(
    site_builder: SiteBuilder,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """loader renders the plugin loader script to the requested path."""
    site_builder.add_plugin("alpha")
    region_path = site_builder.write_region()
    output = tmp_path / "out" / "plugins.js"

    cli.loader(region=region_path, base_path=site_builder.root, output=output)

    assert output.exists(), "expected loader script to be written"
    assert "'plugins/alpha/main'" in output.read_text(encoding="utf-8")
    assert "wrote" in capsys.readouterr().out
