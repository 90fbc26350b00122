"""cpm: package manager for AI coding assistant content.

For programmatic use, import the public API:
    from cpm.api import search, get_package, install, uninstall, list_installed

Import from submodules:
- version: __version__
- api: Public API (search, get_package, install, uninstall, list_installed)
"""

from cpm.version import __version__ as __version__
