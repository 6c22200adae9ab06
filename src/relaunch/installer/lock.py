"""Advisory inter-process lock around installs into the shared cache."""

import logging
import os
from pathlib import Path
from types import TracebackType

logger = logging.getLogger(__name__)


class InstallLock:
    """Exclusive, blocking file lock.

    Uses fcntl.flock() on POSIX and msvcrt.locking() on Windows. The lock file
    stores the owning PID for diagnostics and is left in place on release.
    """

    def __init__(self, lock_path: Path):
        self.lock_path = Path(lock_path)
        self._fd: int | None = None

    def acquire(self) -> None:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.lock_path, os.O_RDWR | os.O_CREAT, 0o644)
        try:
            if os.name == "nt":
                import msvcrt

                while True:
                    try:
                        msvcrt.locking(fd, msvcrt.LK_LOCK, 1)  # type: ignore[attr-defined]
                        break
                    except OSError:
                        # LK_LOCK gives up after ~10s; keep waiting for the other installer
                        logger.debug("Still waiting for %s", self.lock_path)
            else:
                import fcntl

                fcntl.flock(fd, fcntl.LOCK_EX)
        except BaseException:
            os.close(fd)
            raise

        os.ftruncate(fd, 0)
        os.write(fd, str(os.getpid()).encode())
        self._fd = fd
        logger.debug("Acquired install lock %s", self.lock_path)

    def release(self) -> None:
        if self._fd is None:
            return
        try:
            if os.name == "nt":
                import msvcrt

                os.lseek(self._fd, 0, os.SEEK_SET)
                msvcrt.locking(self._fd, msvcrt.LK_UNLCK, 1)  # type: ignore[attr-defined]
            else:
                import fcntl

                fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None
            logger.debug("Released install lock %s", self.lock_path)

    @property
    def locked(self) -> bool:
        return self._fd is not None

    def __enter__(self) -> "InstallLock":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
