"""Pytest configuration and fixtures."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from relaunch.catalog import RemoteCatalog
from relaunch.config import LauncherConfig
from relaunch.domain import VersionSet
from relaunch.installer import InstallResult, PackageInstaller
from relaunch.notify import Notifier


class FakeRemote(RemoteCatalog):
    """Registry double with fixed listings that records every call."""

    def __init__(
        self,
        published: dict[str, VersionSet] | None = None,
        launcher: VersionSet | None = None,
    ):
        self.published = published or {}
        self.launcher = launcher or []
        self.calls: list[str] = []

    def list_published_versions(self, package: str) -> VersionSet:
        self.calls.append(package)
        return list(self.published.get(package, []))

    def list_launcher_versions(self) -> VersionSet:
        self.calls.append("<launcher>")
        return list(self.launcher)


class FakeInstaller(PackageInstaller):
    """Installer double that lays out ``<package>.<version>/`` like nuget does."""

    def __init__(self, fail: bool = False, files: dict[str, bytes] | None = None):
        self.fail = fail
        self.files = files or {"app.bin": b"binary"}
        self.calls: list[tuple[str, str, Path]] = []

    def install(self, package: str, version: str, destination: Path) -> InstallResult:
        self.calls.append((package, version, destination))
        if self.fail:
            return InstallResult(package, version, success=False, error="feed unreachable")

        extracted = destination / f"{package}.{version}"
        extracted.mkdir(parents=True)
        for name, content in self.files.items():
            (extracted / name).write_bytes(content)
        return InstallResult(package, version, success=True)


@pytest.fixture
def config(tmp_path: Path) -> LauncherConfig:
    """Configuration rooted in a temporary directory."""
    launcher_dir = tmp_path / "launcher"
    launcher_dir.mkdir()
    return LauncherConfig(
        cache_root=tmp_path / "cache",
        launcher_dir=launcher_dir,
        release_package="App",
        beta_package="App-Beta",
        launcher_package="App.Launcher",
        app_binary="app.bin",
        launcher_binary="launcher.bin",
    )


@pytest.fixture
def notifier() -> Notifier:
    """Notifier writing to an in-memory console."""
    return Notifier("App", console=Console(file=io.StringIO(), width=120))


def notifier_output(notifier: Notifier) -> str:
    return notifier.console.file.getvalue()


def install_version(cache_root: Path, package: str, version: str) -> Path:
    """Create an installed version directory in the cache."""
    path = cache_root / package / version
    path.mkdir(parents=True)
    return path
