"""Self-updating launcher.

The launcher replaces its own executable in two hops: the new build is
installed to a temporary directory and started there, then copies itself over
the installed launcher and restarts it.
"""

from relaunch.updater.launcher import (
    SelfUpdateError,
    SelfUpdateResult,
    UpdateOrchestrator,
    find_launcher_binary,
    get_current_version,
    is_newer,
)

__all__ = [
    "SelfUpdateError",
    "SelfUpdateResult",
    "UpdateOrchestrator",
    "find_launcher_binary",
    "get_current_version",
    "is_newer",
]
