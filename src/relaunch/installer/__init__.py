"""Package installation into the local cache."""

from relaunch.installer.lock import InstallLock
from relaunch.installer.nuget import InstallResult, NugetInstaller, PackageInstaller
from relaunch.installer.orchestrator import InstallOrchestrator, ephemeral_directory

__all__ = [
    "InstallLock",
    "InstallResult",
    "PackageInstaller",
    "NugetInstaller",
    "InstallOrchestrator",
    "ephemeral_directory",
]
