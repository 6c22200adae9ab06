"""Decide what to launch from a request and two catalog snapshots."""

import logging
from collections.abc import Callable

from relaunch.domain import (
    Fatal,
    FatalKind,
    InstallThenLaunch,
    LaunchExisting,
    ResolutionOutcome,
    VersionRequest,
    VersionSet,
)

logger = logging.getLogger(__name__)


def resolve(
    request: VersionRequest,
    local: VersionSet,
    remote: Callable[[], VersionSet],
) -> ResolutionOutcome:
    """Resolve a version request.

    The remote catalog is passed as a callable and only queried when the
    decision needs it: a literal version that is already installed launches
    without touching the registry.

    Decision rules:
    1. ``""``/``latest`` becomes remote[0] when online, else local[0]; with
       neither catalog populated the result is NO_INTERNET_NO_INSTALL.
    2. An installed version is launched as-is.
    3. A published version is installed first.
    4. Online but unpublished is VERSION_NOT_FOUND; offline and not installed
       is OFFLINE_MISSING_VERSION.

    Membership is exact string comparison. Catalog order is trusted as-is.
    """
    if not request.wants_latest and request.version in local:
        return LaunchExisting(request.version)

    published = remote()

    if request.wants_latest:
        if published:
            resolved = published[0]
        elif not local:
            return Fatal(FatalKind.NO_INTERNET_NO_INSTALL)
        else:
            resolved = local[0]
        logger.info("'latest' version has been resolved to %s", resolved)
    else:
        resolved = request.version

    if resolved in local:
        return LaunchExisting(resolved)
    if not published:
        return Fatal(FatalKind.OFFLINE_MISSING_VERSION)
    if resolved in published:
        return InstallThenLaunch(resolved)
    return Fatal(FatalKind.VERSION_NOT_FOUND)
