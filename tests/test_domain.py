"""Tests for domain models."""

import pytest

from relaunch.domain import (
    Channel,
    Fatal,
    FatalKind,
    InstallThenLaunch,
    LaunchExisting,
    SelfUpdatePhase,
    VersionRequest,
)


def test_version_request_defaults():
    """Test the default request is the latest release."""
    request = VersionRequest()

    assert request.channel == Channel.RELEASE
    assert request.version == ""
    assert request.wants_latest


@pytest.mark.parametrize(("version", "expected"), [("", True), ("latest", True), ("1.0.0", False)])
def test_wants_latest(version, expected):
    """Test which versions count as 'latest'."""
    assert VersionRequest(version=version).wants_latest is expected


def test_self_update_phase_values():
    """Test phases serialize to the command line integers."""
    assert SelfUpdatePhase(0) is SelfUpdatePhase.DOWNLOAD
    assert SelfUpdatePhase(1) is SelfUpdatePhase.COPY
    with pytest.raises(ValueError):
        SelfUpdatePhase(2)


def test_outcomes_are_distinct_values():
    """Test outcome variants compare by tag and payload."""
    assert LaunchExisting("1.0.0") == LaunchExisting("1.0.0")
    assert LaunchExisting("1.0.0") != InstallThenLaunch("1.0.0")
    assert Fatal(FatalKind.VERSION_NOT_FOUND) != Fatal(FatalKind.OFFLINE_MISSING_VERSION)
