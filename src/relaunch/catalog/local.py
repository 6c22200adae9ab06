"""Installed versions in the local package cache."""

import logging
from pathlib import Path

from relaunch.domain import VersionSet

logger = logging.getLogger(__name__)


class LocalCatalog:
    """Lists installed versions of a package.

    The cache holds one directory per version at ``{cache_root}/{package}/{version}``;
    the directory name is the version identifier.
    """

    def __init__(self, cache_root: Path):
        self.cache_root = Path(cache_root)

    def list_versions(self, package: str) -> VersionSet:
        """Return installed versions of ``package``, most recent first.

        "Most recent" is the reverse of the name-sorted directory listing, so
        ordering is lexicographic. A missing or empty package directory yields
        an empty list; this never raises.
        """
        base = self.cache_root / package
        try:
            names = sorted(
                entry.name
                for entry in base.iterdir()
                if entry.is_dir() and not entry.name.startswith(".")
            )
        except OSError as e:
            logger.debug("No local versions for %s: %s: %s", package, type(e).__name__, e)
            return []

        for name in names:
            logger.debug("Found version %s", name)

        return list(reversed(names))

    def has_version(self, package: str, version: str) -> bool:
        return (self.cache_root / package / version).is_dir()
