"""Behaviour tests for assembling a geosite from files on disk.

These scenarios build a temporary site tree (``region.json`` plus plugin
folders), run :func:`geosite.site.load_site`, and assert on the resulting
plugin order, theme colors, or the configuration error that aborted assembly.
They are backed by ``features/site_assembly.feature``.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_site_assembly.py -v
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from geosite.config import SiteConfigError
from geosite.site import load_site

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "site_assembly.feature"
)
scenarios(FEATURE_FILE)


def _split(names: str) -> list[str]:
    return [name.strip() for name in names.split(",") if name.strip()]


@pytest.fixture
def scenario_state(tmp_path: Path) -> dict[str, typ.Any]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"root": tmp_path, "region": {"pluginFolders": ["plugins"]}}


@given(parsers.parse('a site with plugins "{names}"'))
def given_site_with_plugins(scenario_state: dict[str, typ.Any], names: str) -> None:
    """Create a plugin folder with an entry script for every listed name."""
    for name in _split(names):
        plugin_dir = scenario_state["root"] / "plugins" / name
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "main.js").write_text("define([], function () {});\n")


@given(parsers.parse('a plugin "{name}" without an entry script'))
def given_plugin_without_entry(scenario_state: dict[str, typ.Any], name: str) -> None:
    """Create a plugin folder that lacks ``main.js``."""
    (scenario_state["root"] / "plugins" / name).mkdir(parents=True)


@given(parsers.parse('the region orders plugins "{names}"'))
def given_plugin_order(scenario_state: dict[str, typ.Any], names: str) -> None:
    """Record a ``pluginOrder`` list for the region document."""
    scenario_state["region"]["pluginOrder"] = _split(names)


@given(parsers.parse('plugin "{name}" binds "{clause}" to "{value}"'))
def given_use_clause(
    scenario_state: dict[str, typ.Any], name: str, clause: str, value: str
) -> None:
    """Write a ``plugin.json`` declaring a single use clause."""
    config_path = scenario_state["root"] / "plugins" / name / "plugin.json"
    config_path.write_bytes(msgspec_json.encode({"use": {clause: value}}))


@when("the site is assembled")
def when_site_assembled(scenario_state: dict[str, typ.Any]) -> None:
    """Write region.json and assemble, capturing the result or the error."""
    root: Path = scenario_state["root"]
    (root / "plugins").mkdir(exist_ok=True)
    region_path = root / "region.json"
    region_path.write_bytes(msgspec_json.encode(scenario_state["region"]))
    try:
        scenario_state["site"] = load_site(region_path, root)
    except SiteConfigError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('the plugin folders are "{names}"'))
def then_plugin_folders(scenario_state: dict[str, typ.Any], names: str) -> None:
    """Assert the assembled plugin folder order."""
    site = scenario_state["site"]
    assert list(site.plugin_folder_names) == _split(names), (
        f"unexpected plugin order {site.plugin_folder_names!r}"
    )


@then(parsers.parse('the plugin variables are "{names}"'))
def then_plugin_variables(scenario_state: dict[str, typ.Any], names: str) -> None:
    """Assert the generated loader variable names."""
    assert scenario_state["site"].plugin_variable_names == names


@then(parsers.parse('assembly fails naming "{fragment}"'))
def then_assembly_fails(scenario_state: dict[str, typ.Any], fragment: str) -> None:
    """Assert assembly produced no site and the error names ``fragment``."""
    assert "site" not in scenario_state, "expected no SiteResult on failure"
    error = scenario_state.get("error")
    assert error is not None, "expected assembly to fail"
    assert fragment in str(error), f"expected {fragment!r} in {error}"


@then(parsers.parse('the theme colors are "{primary}" and "{secondary}"'))
def then_theme_colors(
    scenario_state: dict[str, typ.Any], primary: str, secondary: str
) -> None:
    """Assert the resolved primary and secondary colors."""
    colors = scenario_state["site"].colors
    assert (colors.primary, colors.secondary) == (primary, secondary), (
        f"unexpected colors {colors!r}"
    )
