"""Common literal values used across geosite.

These constants keep filenames and fallback values centralized so the
discovery, assembly and rendering code (and the tests) import the same values
without drifting. Intended for internal use within the geosite package.

Examples
--------
>>> from geosite import _constants
>>> _constants.ENTRY_POINT_FILENAME
'main.js'
>>> _constants.DEFAULT_PRIMARY_COLOR
'#26648E'
"""

ENTRY_POINT_MODULE = "main"
ENTRY_POINT_FILENAME = f"{ENTRY_POINT_MODULE}.js"
PLUGIN_CONFIG_FILENAME = "plugin.json"
REGION_CONFIG_FILENAME = "region.json"

REGION_SCHEMA_KIND = "region"
PLUGIN_SCHEMA_KIND = "plugin"

# Colors applied when a region.json predates the "colors" block.
DEFAULT_PRIMARY_COLOR = "#26648E"
DEFAULT_SECONDARY_COLOR = "#26648E"

PLUGIN_VARIABLE_TEMPLATE = "p{index}"
