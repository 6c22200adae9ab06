"""Determine which version the user is asking for.

The preference file holds a single token such as ``2.3.1``, ``beta-2.3.1``,
``latest`` or nothing at all. The command line (``version <token>``) uses the
same syntax and always wins over the file.
"""

import logging
from pathlib import Path
from typing import Final

from relaunch.domain import Channel, VersionRequest

logger = logging.getLogger(__name__)

BETA_PREFIX: Final = "beta-"


def parse_version_token(token: str) -> VersionRequest:
    """Split a raw token into channel and version."""
    token = token.strip()
    if token.startswith(BETA_PREFIX):
        return VersionRequest(channel=Channel.BETA, version=token[len(BETA_PREFIX) :])
    return VersionRequest(channel=Channel.RELEASE, version=token)


def load_preference(path: Path) -> VersionRequest:
    """Read the preference file, defaulting to the latest release."""
    if not path.is_file():
        logger.debug("No preference file at %s", path)
        return VersionRequest()

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Cannot read preference file %s: %s", path, e)
        return VersionRequest()

    lines = content.strip().splitlines()
    return parse_version_token(lines[0] if lines else "")


def determine_request(preference_path: Path, cli_token: str | None = None) -> VersionRequest:
    """Combine the preference file and the command line override."""
    request = load_preference(preference_path)
    if cli_token is not None:
        request = parse_version_token(cli_token)
    logger.debug("Requested %s version '%s'", request.channel.value, request.version or "latest")
    return request
