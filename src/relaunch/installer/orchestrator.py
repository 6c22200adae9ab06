"""Install a package version into the local cache.

Each install:
1. Takes the per-version install lock
2. Skips the work if another launcher finished the install meanwhile
3. Stages an ephemeral directory and runs the package installer into it
4. Promotes the extracted files into the cache if the installer did not
5. Removes the ephemeral directory, whatever happened
"""

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from relaunch.catalog import LocalCatalog
from relaunch.installer.lock import InstallLock
from relaunch.installer.nuget import InstallResult, PackageInstaller

logger = logging.getLogger(__name__)

EPHEMERAL_PREFIX = "relaunch-"


@contextmanager
def ephemeral_directory() -> Iterator[Path]:
    """Create a randomly named staging directory and always remove it."""
    path = Path(tempfile.mkdtemp(prefix=EPHEMERAL_PREFIX))
    logger.debug("Created ephemeral directory %s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug("Removed ephemeral directory %s", path)


class InstallOrchestrator:
    """Installs application versions into ``{cache_root}/{package}/{version}``."""

    def __init__(self, installer: PackageInstaller, catalog: LocalCatalog):
        self.installer = installer
        self.catalog = catalog

    def lock_path(self, package: str, version: str) -> Path:
        return self.catalog.cache_root / package / f".{version}.lock"

    def install(self, package: str, version: str) -> InstallResult:
        """Install ``version`` of ``package``; failures come back as a failed result."""
        try:
            result = self._install_locked(package, version)
        except OSError as e:
            # Lock file or staging directory could not be created
            logger.debug("Install setup failed: %s: %s", type(e).__name__, e)
            result = InstallResult(package, version, success=False, error=str(e))

        if not result.success:
            logger.error("Install of %s %s failed: %s", package, version, result.error)
        return result

    def _install_locked(self, package: str, version: str) -> InstallResult:
        with InstallLock(self.lock_path(package, version)):
            if self.catalog.has_version(package, version):
                logger.info("%s %s was installed by another launcher", package, version)
                return InstallResult(package, version, success=True)

            with ephemeral_directory() as staging:
                try:
                    result = self.installer.install(package, version, staging)
                except Exception as e:
                    logger.debug("Installer raised: %s: %s", type(e).__name__, e)
                    result = InstallResult(package, version, success=False, error=str(e))

                if result.success:
                    result = self._promote(staging, package, version)

        return result

    def _promote(self, staging: Path, package: str, version: str) -> InstallResult:
        """Make sure the installed files ended up in the cache."""
        if self.catalog.has_version(package, version):
            return InstallResult(package, version, success=True)

        # nuget extracts to "<package>.<version>"; some feeds lowercase the id
        candidates = [
            staging / f"{package}.{version}",
            staging / f"{package.lower()}.{version}",
            staging / package / version,
        ]
        for candidate in candidates:
            if candidate.is_dir():
                target = self.catalog.cache_root / package / version
                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copytree(candidate, target)
                except OSError as e:
                    shutil.rmtree(target, ignore_errors=True)
                    return InstallResult(package, version, success=False, error=str(e))
                logger.debug("Copied %s to %s", candidate, target)
                return InstallResult(package, version, success=True)

        return InstallResult(
            package,
            version,
            success=False,
            error=f"Installed files for {package} {version} not found",
        )
