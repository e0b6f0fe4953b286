"""Assemble map-portal sites from region and plugin configuration files.

This package validates a site's ``region.json`` and the ``plugin.json`` files
of its plugin folders, merges them into an immutable view model for the page
template, and exposes the ``geosite`` CLI used in site builds.

Exports
-------
- ``SiteAssembler`` and ``load_site``: build a :class:`SiteResult`.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from geosite import load_site
>>> site = load_site(Path("region.json"), Path("."))  # doctest: +SKIP
>>> site.primary_color  # doctest: +SKIP
'#26648E'
"""

from __future__ import annotations

from .cli import app, main
from .config import SiteConfigError, SiteResult
from .site import SiteAssembler, load_site

__all__ = ["SiteAssembler", "SiteConfigError", "SiteResult", "app", "load_site", "main"]
