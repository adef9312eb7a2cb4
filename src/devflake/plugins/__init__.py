"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins in ``.devflake/plugins/``.
INVARIANT: Plugin failures are warnings, never errors.
"""

import pluggy

from devflake.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("devflake")

__all__ = ["PluginManager", "hookimpl"]
