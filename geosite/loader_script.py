"""Render the client-side plugin loader script for an assembled geosite.

The page template embeds a small bootstrap script that configures the module
loader's ``use`` shims, exposes the region JSON to client code and loads every
plugin module into ``p0, p1, ...``. ``LoaderScriptBuilder`` renders that
script from a :class:`~geosite.config.SiteResult` so it can be served as a
static file.

>>> from pathlib import Path
>>> from geosite.site import load_site
>>> site = load_site(Path("site/region.json"), Path("site"))  # doctest: +SKIP
>>> LoaderScriptBuilder(site).run(Path("public/js/geosite.js"))  # doctest: +SKIP
PosixPath('public/js/geosite.js')

Templates are read from ``geosite/templates`` unless another directory is
provided. Autoescaping is disabled for the ``.js.jinja`` template because the
output is JavaScript, not HTML.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    from .config import SiteResult

LOADER_TEMPLATE = "plugin_loader.js.jinja"


class LoaderScriptBuilder:
    """Render the plugin loader script from a site view model."""

    def __init__(self, site: SiteResult, *, templates_dir: Path | None = None) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        site : SiteResult
            Assembled site providing module identifiers, variable names,
            use clauses and region JSON.
        templates_dir : Path, optional
            Directory containing ``plugin_loader.js.jinja``. Defaults to
            ``geosite/templates``.
        """
        self.site = site
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template(LOADER_TEMPLATE)

    def render(self) -> str:
        """Return the loader script text, always ending with a newline."""
        script = self.template.render(site=self.site)
        if not script.endswith("\n"):
            script += "\n"
        return script

    def run(self, output_path: Path) -> Path:
        """Render the script to ``output_path``, creating parent directories."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(), encoding="utf-8")
        return output_path


__all__ = ["LOADER_TEMPLATE", "LoaderScriptBuilder"]
