"""Enumerations for domain models."""

from enum import Enum, IntEnum


class Channel(str, Enum):
    """Package namespace a version is published under."""

    RELEASE = "release"
    BETA = "beta"


class SelfUpdatePhase(IntEnum):
    """Half of the self-replacement protocol a process invocation performs.

    The integer value is what travels on the command line (``update 0``).
    """

    DOWNLOAD = 0
    COPY = 1


class UpdateState(str, Enum):
    """States of the launcher self-update state machine."""

    CHECK = "check"
    DOWNLOAD = "download"
    COPY = "copy"
    DONE = "done"


class FatalKind(str, Enum):
    """Errors that halt the launcher before the application is started."""

    NO_INTERNET_NO_INSTALL = "no_internet_no_install"
    VERSION_NOT_FOUND = "version_not_found"
    OFFLINE_MISSING_VERSION = "offline_missing_version"
    INSTALL_FAILED = "install_failed"
    LAUNCH_FAILED = "launch_failed"
