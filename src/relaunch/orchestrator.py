"""Top-level launch sequence.

check self-update → resolve version → install if needed → launch
"""

import logging
from pathlib import Path

from relaunch.catalog import GitHubPackagesCatalog, LocalCatalog, RemoteCatalog
from relaunch.config import LauncherConfig
from relaunch.domain import (
    Channel,
    Fatal,
    FatalKind,
    InstallThenLaunch,
    ResolutionOutcome,
    SelfUpdatePhase,
    VersionRequest,
)
from relaunch.installer import InstallOrchestrator, NugetInstaller, PackageInstaller
from relaunch.notify import Notifier
from relaunch.resolver import determine_request, resolve
from relaunch.spawner import ProcessLauncher, SpawnError
from relaunch.updater import UpdateOrchestrator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1

FATAL_MESSAGES: dict[FatalKind, str] = {
    FatalKind.NO_INTERNET_NO_INSTALL: "You need to have access to internet for the first launch!",
    FatalKind.VERSION_NOT_FOUND: "The version you want to launch does not exist!",
    FatalKind.OFFLINE_MISSING_VERSION: "You need to have access to internet to download this version!",
    FatalKind.INSTALL_FAILED: "The installation of the requested version failed.",
    FatalKind.LAUNCH_FAILED: "The application could not be started.",
}


class Launcher:
    """Decides which application version to run and starts it."""

    def __init__(
        self,
        config: LauncherConfig,
        remote: RemoteCatalog,
        installer: PackageInstaller,
        spawner: ProcessLauncher,
        notifier: Notifier,
    ):
        self.config = config
        self.remote = remote
        self.spawner = spawner
        self.notifier = notifier
        self.local = LocalCatalog(config.cache_root)
        self.installs = InstallOrchestrator(installer, self.local)
        self.updater = UpdateOrchestrator(
            remote=remote,
            installer=installer,
            spawner=spawner,
            notifier=notifier,
            launcher_package=config.launcher_package,
            launcher_binary=config.launcher_binary,
            launcher_dir=config.launcher_dir,
            config_file=config.source,
        )

    def package_for(self, channel: Channel) -> str:
        if channel is Channel.BETA:
            return self.config.beta_package
        return self.config.release_package

    def resolve(self, request: VersionRequest) -> ResolutionOutcome:
        package = self.package_for(request.channel)
        local = self.local.list_versions(package)
        return resolve(request, local, lambda: self.remote.list_published_versions(package))

    def run(
        self,
        version_token: str | None = None,
        phase: SelfUpdatePhase | None = None,
    ) -> int:
        """Run one launch sequence and return the process exit code.

        Args:
            version_token: Version from the command line, overriding the
                preference file.
            phase: Self-update phase when started as a continuation.
        """
        update = self.updater.run(phase)
        if update.stop:
            logger.info(update.message)
            return EXIT_OK

        request = determine_request(self.config.preference_path, version_token)
        package = self.package_for(request.channel)
        outcome = self.resolve(request)

        if isinstance(outcome, Fatal):
            return self._fail(outcome.kind)

        if isinstance(outcome, InstallThenLaunch):
            with self.notifier.busy(f"Updating to v{outcome.version} ..."):
                result = self.installs.install(package, outcome.version)
            if not result.success:
                return self._fail(FatalKind.INSTALL_FAILED, result.error)

        try:
            self.spawner.launch_app(package, outcome.version)
        except SpawnError as e:
            return self._fail(FatalKind.LAUNCH_FAILED, str(e))

        logger.info("Started %s %s", package, outcome.version)
        return EXIT_OK

    def _fail(self, kind: FatalKind, detail: str | None = None) -> int:
        message = FATAL_MESSAGES[kind]
        if detail:
            logger.debug("%s: %s", kind.value, detail)
        self.notifier.error(message)
        return EXIT_FATAL


def build_launcher(config: LauncherConfig, notifier: Notifier | None = None) -> Launcher:
    """Wire the production collaborators from ``config``."""
    remote = GitHubPackagesCatalog(
        owner=config.registry_owner,
        app_repository=config.app_repository,
        launcher_repository=config.launcher_repository,
        launcher_package=config.launcher_package,
        token=config.registry_token,
        url=config.registry_url,
        timeout=config.registry_timeout,
    )
    installer = NugetInstaller(
        source_name=config.nuget_source_name,
        source_url=config.nuget_source_url,
        username=config.nuget_username,
        password=config.registry_token,
        executable=config.nuget_executable,
        timeout=config.install_timeout,
    )
    spawner = ProcessLauncher(
        cache_root=config.cache_root,
        app_binary=config.app_binary,
        working_dir=Path(config.launcher_dir),
    )
    return Launcher(
        config=config,
        remote=remote,
        installer=installer,
        spawner=spawner,
        notifier=notifier or Notifier(config.app_name),
    )
