"""Package installer backed by the NuGet command line."""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of a package install."""

    package: str
    version: str
    success: bool
    error: str | None = None


class PackageInstaller(ABC):
    """Fetches a package version into a destination directory.

    Implementations report failure through ``InstallResult`` instead of
    raising, so callers can always clean up after them.
    """

    @abstractmethod
    def install(self, package: str, version: str, destination: Path) -> InstallResult:
        """Install ``package`` at ``version`` into ``destination``."""


class NugetInstaller(PackageInstaller):
    """Runs ``nuget install`` against a private package source.

    The source is re-registered before every install so stale credentials
    from an earlier run never linger.
    """

    def __init__(
        self,
        source_name: str,
        source_url: str,
        username: str | None = None,
        password: str | None = None,
        executable: str = "nuget",
        timeout: float = 600.0,
    ):
        self.source_name = source_name
        self.source_url = source_url
        self.username = username
        self.password = password
        self.executable = executable
        self.timeout = timeout

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        cmd = [self.executable, *args]
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )

    def _register_source(self) -> None:
        removed = self._run(["sources", "Remove", "-Name", self.source_name])
        if removed.returncode != 0:
            logger.debug("Source %s was not registered", self.source_name)

        add_args = ["sources", "Add", "-Name", self.source_name, "-Source", self.source_url]
        if self.username and self.password:
            add_args += ["-UserName", self.username, "-Password", self.password]
        added = self._run(add_args)
        if added.returncode != 0:
            # install may still succeed if the source was configured elsewhere
            logger.warning("Failed to register source %s: %s", self.source_name, added.stderr.strip())

    def install(self, package: str, version: str, destination: Path) -> InstallResult:
        try:
            self._register_source()
            completed = self._run(
                [
                    "install",
                    package,
                    "-Version",
                    version,
                    "-OutputDirectory",
                    str(destination),
                    "-NoCache",
                    "-NonInteractive",
                    "-Source",
                    self.source_name,
                ]
            )
        except FileNotFoundError:
            return InstallResult(
                package, version, success=False, error=f"{self.executable} executable not found"
            )
        except subprocess.TimeoutExpired:
            return InstallResult(
                package, version, success=False, error=f"Install timed out after {self.timeout}s"
            )
        except OSError as e:
            return InstallResult(package, version, success=False, error=str(e))

        if completed.returncode != 0:
            output = (completed.stderr or completed.stdout).strip()
            return InstallResult(
                package,
                version,
                success=False,
                error=f"nuget exited with code {completed.returncode}: {output}",
            )

        logger.info("Installed %s %s into %s", package, version, destination)
        return InstallResult(package, version, success=True)
