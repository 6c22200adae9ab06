"""Domain models for the launcher."""

from relaunch.domain.enums import Channel, FatalKind, SelfUpdatePhase, UpdateState
from relaunch.domain.models import (
    LATEST,
    Fatal,
    InstallThenLaunch,
    LaunchExisting,
    ResolutionOutcome,
    VersionRequest,
    VersionSet,
)

__all__ = [
    "Channel",
    "FatalKind",
    "SelfUpdatePhase",
    "UpdateState",
    "LATEST",
    "VersionRequest",
    "VersionSet",
    "LaunchExisting",
    "InstallThenLaunch",
    "Fatal",
    "ResolutionOutcome",
]
