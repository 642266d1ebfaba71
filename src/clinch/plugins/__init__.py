"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``clinch.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from clinch.plugins.hookspecs import hookimpl
from clinch.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
