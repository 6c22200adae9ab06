"""Self-updating launcher implementation.

A running executable cannot overwrite its own file, so replacing the launcher
takes two processes:

1. Check: compare the running build with the newest published launcher
2. Download: install the new build into a temporary directory and start it
   there with ``update 1``; the current process then stops
3. Copy: the temporary process copies itself over the installed launcher,
   starts the installed copy and stops
4. Done: nothing to update, normal startup continues

Failures while downloading never stop the launcher: the current build keeps
running. A process in the Copy phase always stops, because it runs from a
temporary location and must not go on to launch the application.
"""

import contextlib
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import relaunch
from relaunch.catalog import RemoteCatalog
from relaunch.domain import SelfUpdatePhase, UpdateState
from relaunch.installer import PackageInstaller
from relaunch.notify import Notifier
from relaunch.spawner import ProcessLauncher, current_executable

logger = logging.getLogger(__name__)

STAGING_PREFIX: Final = "relaunch-update-"


class SelfUpdateError(Exception):
    """Raised when a self-update step cannot complete."""

    pass


@dataclass
class SelfUpdateResult:
    """Where the self-update state machine ended up."""

    state: UpdateState
    current_version: str
    latest_version: str | None = None
    message: str = ""
    error: str | None = None
    # True when this process handed off to another one and must exit now
    stop: bool = False


def get_current_version() -> str:
    """Version string embedded in the running launcher build."""
    return relaunch.__version__


def is_newer(latest: str, current: str) -> bool:
    """Plain string ordering, not semantic versioning ("10.0.0" < "2.0.0")."""
    return latest > current


def find_launcher_binary(root: Path, binary_name: str) -> Path:
    """Locate the launcher executable inside an extracted package.

    Raises:
        SelfUpdateError: If no file named ``binary_name`` exists under ``root``.
    """
    for folder in sorted(p for p in root.iterdir() if p.is_dir()):
        candidate = folder / binary_name
        if candidate.is_file():
            return candidate

    for candidate in sorted(root.rglob(binary_name)):
        if candidate.is_file():
            return candidate

    raise SelfUpdateError(f"{binary_name} not found in {root}")


class UpdateOrchestrator:
    """Runs the launcher self-update state machine.

    Args:
        remote: Registry listing the launcher's published versions.
        installer: Package installer used to fetch a new launcher build.
        spawner: Starts the continuation process.
        notifier: Shows progress and warnings.
        launcher_package: Package name of the launcher.
        launcher_binary: File name of the launcher executable.
        launcher_dir: Directory of the installed launcher; continuations run
            with it as working directory.
        config_file: Configuration file of the installed launcher, handed to
            the continuation so it sees the same settings.
    """

    def __init__(
        self,
        remote: RemoteCatalog,
        installer: PackageInstaller,
        spawner: ProcessLauncher,
        notifier: Notifier,
        launcher_package: str,
        launcher_binary: str,
        launcher_dir: Path,
        config_file: Path | None = None,
    ):
        self.remote = remote
        self.installer = installer
        self.spawner = spawner
        self.notifier = notifier
        self.launcher_package = launcher_package
        self.launcher_binary = launcher_binary
        self.launcher_dir = Path(launcher_dir)
        self.config_file = config_file

    def run(self, phase: SelfUpdatePhase | None = None) -> SelfUpdateResult:
        """Run the state machine.

        Args:
            phase: None on a normal startup (enter at Check). A continuation
                process passes the phase it was started for.
        """
        if phase is SelfUpdatePhase.COPY:
            return self.copy()

        if phase is SelfUpdatePhase.DOWNLOAD:
            # Explicit request: fetch the newest build without comparing
            latest = self._latest_published()
            if not latest:
                self.notifier.warning("No launcher update could be found. We'll run with the current one.")
                return SelfUpdateResult(
                    state=UpdateState.DONE,
                    current_version=get_current_version(),
                    message="No published launcher version",
                )
            return self.download(latest)

        result = self.check()
        if result.state is UpdateState.DOWNLOAD and result.latest_version:
            return self.download(result.latest_version)
        return result

    def _latest_published(self) -> str:
        versions = self.remote.list_launcher_versions()
        return max(versions) if versions else ""

    def check(self) -> SelfUpdateResult:
        """Decide whether a newer launcher build is published."""
        current = get_current_version()
        latest = self._latest_published()
        logger.info("Current launcher: %s | Latest: %s", current, latest or "unknown")

        if latest and is_newer(latest, current):
            return SelfUpdateResult(
                state=UpdateState.DOWNLOAD,
                current_version=current,
                latest_version=latest,
                message=f"Launcher update available: {current} → {latest}",
            )

        return SelfUpdateResult(
            state=UpdateState.DONE,
            current_version=current,
            latest_version=latest or None,
            message="Launcher is up to date",
        )

    def download(self, version: str) -> SelfUpdateResult:
        """Fetch launcher ``version`` and hand off to it.

        The staging directory is kept on success: the continuation process
        runs from it.
        """
        current = get_current_version()
        staging = Path(tempfile.mkdtemp(prefix=STAGING_PREFIX))

        try:
            with self.notifier.busy("Updating launcher ..."):
                result = self.installer.install(self.launcher_package, version, staging)
                if not result.success:
                    raise SelfUpdateError(result.error or "launcher install failed")

                new_launcher = find_launcher_binary(staging, self.launcher_binary)
                with contextlib.suppress(OSError):
                    new_launcher.chmod(0o755)

                self.spawner.spawn(
                    new_launcher,
                    self._continuation_args(SelfUpdatePhase.COPY),
                    cwd=self.launcher_dir,
                )
        except Exception as e:
            shutil.rmtree(staging, ignore_errors=True)
            logger.debug("Launcher download failed: %s: %s", type(e).__name__, e)
            self.notifier.warning(
                "Error while trying to install the launcher update. We'll run with the current one."
            )
            return SelfUpdateResult(
                state=UpdateState.DONE,
                current_version=current,
                latest_version=version,
                message="Launcher update failed",
                error=str(e),
            )

        return SelfUpdateResult(
            state=UpdateState.COPY,
            current_version=current,
            latest_version=version,
            message=f"Handed off to launcher {version}",
            stop=True,
        )

    def _continuation_args(self, phase: SelfUpdatePhase) -> list[str]:
        # The continuation runs from the staging directory and would not find
        # the installed launcher's relaunch.yaml on its own
        args = ["update", str(phase.value)]
        if self.config_file is not None:
            args = ["--config", str(self.config_file), *args]
        return args

    def copy(self) -> SelfUpdateResult:
        """Replace the installed launcher with the running build and restart it.

        Runs in the temporary process started by ``download``; its working
        directory is the installed launcher's directory.
        """
        current = get_current_version()
        source = current_executable()
        installed = Path.cwd() / self.launcher_binary
        backup = installed.with_name(f"{installed.name}.bak.{os.getpid()}")

        try:
            if installed.exists():
                shutil.copy2(installed, backup)
            try:
                shutil.copy2(source, installed)
                installed.chmod(0o755)
            except Exception:
                if backup.exists():
                    with contextlib.suppress(Exception):
                        shutil.copy2(backup, installed)
                raise

            self.spawner.spawn(installed, cwd=installed.parent)
        except Exception as e:
            logger.debug("Launcher copy failed: %s: %s", type(e).__name__, e)
            self.notifier.warning(
                f"Error while applying the launcher update. Start {installed.name} again to continue."
            )
            return SelfUpdateResult(
                state=UpdateState.DONE,
                current_version=current,
                message="Launcher update failed",
                error=str(e),
                stop=True,
            )

        with contextlib.suppress(OSError):
            backup.unlink()

        return SelfUpdateResult(
            state=UpdateState.DONE,
            current_version=current,
            message=f"Launcher {current} installed at {installed}",
            stop=True,
        )
