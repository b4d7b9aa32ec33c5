"""Common literal values used across redocus.

These constants keep filenames, extensions, and default locations centralized
so the config loader, orchestrator, content source, and tests can import the
same values without drifting. Intended for internal use within the redocus
package.

Examples
--------
>>> from redocus import _constants
>>> _constants.PAGE_EXTENSION
'.html'
>>> _constants.PAGE_URL_TEMPLATE.format(name="intro")
'./intro'
"""

DEFAULT_CONFIG_FILE = "redocus.config.py"
DEFAULT_INPUT = "./pages"
DEFAULT_OUTPUT = "./www"
CONTENT_EXTENSION = ".md"
PAGE_EXTENSION = ".html"
PAGE_URL_TEMPLATE = "./{name}"
LOGGER_NAME = "redocus"
PLUGIN_LOGGER_NAME = "redocus.plugins"
