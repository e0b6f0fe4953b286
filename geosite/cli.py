"""Cyclopts CLI entrypoint for validating and assembling geosite configurations.

The ``geosite`` console script defined here loads a site's ``region.json``,
discovers its plugins and either reports a summary, dumps the assembled view
model as JSON, or writes the client-side plugin loader script. Typical usage is
running ``geosite validate`` in CI after editing a region or plugin
configuration, and ``geosite loader`` as part of the site build.

Examples
--------
Validate the site in the current directory:

>>> from geosite.cli import main
>>> main()  # doctest: +SKIP

Write the loader script for another site:

>>> from geosite.cli import app
>>> app.run(
...     ["loader", "--region", "sites/coast/region.json", "--base-path", "sites/coast"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import importlib.metadata
import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from ._constants import REGION_CONFIG_FILENAME
from .loader_script import LoaderScriptBuilder
from .site import load_site

if typ.TYPE_CHECKING:
    from .config import SiteResult

DEFAULT_REGION = Path(REGION_CONFIG_FILENAME)
DEFAULT_BASE_PATH = Path()
DEFAULT_LOADER_OUTPUT = Path("public/js/geosite-plugins.js")

app = App(name="geosite", config=cyclopts.config.Env("GEOSITE_", command=False))  # type: ignore[unknown-argument]

RegionOption = typ.Annotated[
    Path, Parameter(help="Path to region.json", env_var="GEOSITE_REGION")
]
BasePathOption = typ.Annotated[
    Path,
    Parameter(
        help="Site root containing the plugin folders", env_var="GEOSITE_BASE_PATH"
    ),
]
SchemaDirOption = typ.Annotated[
    Path | None,
    Parameter(
        help="Directory holding region/plugin JSON schema overrides",
        env_var="GEOSITE_SCHEMA_DIR",
    ),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Enable debug logging")]


def _framework_version() -> str | None:
    try:
        return importlib.metadata.version("geosite")
    except importlib.metadata.PackageNotFoundError:  # pragma: no cover - source checkout
        return None


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(region: Path, base_path: Path, schema_dir: Path | None) -> SiteResult:
    return load_site(
        region,
        base_path,
        schema_dir=schema_dir,
        framework_version=_framework_version(),
    )


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Validate region.json and every plugin configuration.")
def validate(
    *,
    region: RegionOption = DEFAULT_REGION,
    base_path: BasePathOption = DEFAULT_BASE_PATH,
    schema_dir: SchemaDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Assemble the site and print a one-line summary.

    Raises
    ------
    SiteConfigError
        If the region or any plugin is misconfigured; nothing is printed.
    """
    _configure_logging(verbose=verbose)
    site = _load(region, base_path, schema_dir)
    print(
        f"{_format_path(region)}: {len(site.plugins)} plugin(s), "
        f"{len(site.plugin_css_urls)} stylesheet(s), "
        f"{len(site.use_clauses)} use clause(s)"
    )


@app.command(help="Print the assembled site view model as JSON.")
def assemble(
    *,
    region: RegionOption = DEFAULT_REGION,
    base_path: BasePathOption = DEFAULT_BASE_PATH,
    schema_dir: SchemaDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Assemble the site and print the resulting :class:`SiteResult` as JSON."""
    _configure_logging(verbose=verbose)
    site = _load(region, base_path, schema_dir)
    payload = msgspec_json.format(msgspec_json.encode(site), indent=2)
    print(payload.decode("utf-8"))


@app.command(help="Write the client-side plugin loader script.")
def loader(
    *,
    region: RegionOption = DEFAULT_REGION,
    base_path: BasePathOption = DEFAULT_BASE_PATH,
    schema_dir: SchemaDirOption = None,
    output: typ.Annotated[
        Path, Parameter(help="Where to write the script", env_var="GEOSITE_OUTPUT")
    ] = DEFAULT_LOADER_OUTPUT,
    verbose: VerboseOption = False,
) -> None:
    """Assemble the site and render the plugin loader script to ``output``."""
    _configure_logging(verbose=verbose)
    site = _load(region, base_path, schema_dir)
    written = LoaderScriptBuilder(site).run(output)
    print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``geosite`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
