"""Core domain models for the launcher.

A launch is decided in three steps:
- VersionRequest: what the user asked for (preference file, CLI override)
- VersionSet: what is installed locally and what the registry publishes
- ResolutionOutcome: launch what is there, install first, or stop
"""

from dataclasses import dataclass

from pydantic import BaseModel

from relaunch.domain.enums import Channel, FatalKind

LATEST = "latest"

# Ordered newest first by whatever produced it; never re-sorted.
VersionSet = list[str]


class VersionRequest(BaseModel):
    """A requested channel and version (or ``latest``)."""

    channel: Channel = Channel.RELEASE
    version: str = ""

    @property
    def wants_latest(self) -> bool:
        return self.version in ("", LATEST)


@dataclass(frozen=True)
class LaunchExisting:
    """The requested version is installed; start it."""

    version: str


@dataclass(frozen=True)
class InstallThenLaunch:
    """The requested version is published but not installed yet."""

    version: str


@dataclass(frozen=True)
class Fatal:
    """Resolution failed; nothing may be launched."""

    kind: FatalKind


ResolutionOutcome = LaunchExisting | InstallThenLaunch | Fatal
