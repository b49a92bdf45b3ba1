"""Extension layer: codec modules via pluggy.

Discovery: entry_points (pip-installed) in the ``vpacktime.modules`` group.
INVARIANT: Third-party module failures are warnings; built-in failures raise.
"""

from vpacktime.plugins.builtins.temporal import TemporalModule
from vpacktime.plugins.manager import PluginManager

__all__ = ["PluginManager", "TemporalModule"]
