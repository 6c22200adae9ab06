"""Fire-and-forget process spawning.

Children are fully detached: own session (POSIX) or own process group and no
console (Windows), stdio discarded. The launcher never waits on them.
"""

import logging
import os
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


class SpawnError(Exception):
    """Raised when a detached process cannot be started."""

    pass


def current_executable() -> Path:
    """Path of the running launcher (frozen binary or entry script)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve()
    return Path(sys.argv[0]).resolve()


def _command_for(executable: Path, args: Sequence[str]) -> list[str]:
    # Unfrozen launchers are Python scripts and need an interpreter in front.
    if executable.suffix == ".py":
        return [sys.executable, str(executable), *args]
    return [str(executable), *args]


def _detach_options() -> dict:
    if os.name == "nt":
        flags = 0
        flags |= int(getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0))
        flags |= int(getattr(subprocess, "DETACHED_PROCESS", 0))
        return {"creationflags": flags}
    return {"start_new_session": True}


class ProcessLauncher:
    """Starts the application and launcher continuations as detached processes.

    Args:
        cache_root: Root of the local package cache.
        app_binary: File name of the application executable inside a version dir.
        working_dir: Working directory for every child (the launcher's directory).
    """

    def __init__(self, cache_root: Path, app_binary: str, working_dir: Path):
        self.cache_root = Path(cache_root)
        self.app_binary = app_binary
        self.working_dir = Path(working_dir)

    def app_path(self, package: str, version: str) -> Path:
        """Absolute path of the application binary for an installed version."""
        return (self.cache_root / package / version / self.app_binary).absolute()

    def spawn(
        self,
        executable: Path,
        args: Sequence[str] = (),
        cwd: Path | None = None,
    ) -> int:
        """Start ``executable`` detached and return its PID without waiting.

        Raises:
            SpawnError: If the process could not be started.
        """
        cmd = _command_for(Path(executable), args)
        workdir = cwd or self.working_dir
        logger.info("Starting %s in %s", " ".join(cmd), workdir)

        try:
            process = subprocess.Popen(
                cmd,
                cwd=str(workdir),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                close_fds=True,
                **_detach_options(),
            )
        except OSError as e:
            raise SpawnError(f"Unable to start {executable}: {e}") from e

        return process.pid

    def launch_app(self, package: str, version: str) -> int:
        """Start the installed application ``version`` of ``package``."""
        return self.spawn(self.app_path(package, version))
