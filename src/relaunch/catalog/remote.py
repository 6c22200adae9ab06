"""Published versions from the remote package registry.

Versions are listed through the GitHub GraphQL API (GitHub Packages). Every
failure - network, authentication, HTTP status, timeout, unexpected payload -
is logged and reported as an empty list. Callers read "empty" as "offline".
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Final

import httpx

from relaunch.domain import VersionSet

logger = logging.getLogger(__name__)

USER_AGENT: Final = "relaunch/1.0"
PACKAGES_PREVIEW: Final = "application/vnd.github.packages-preview+json"

VERSIONS_QUERY: Final = """
query($owner: String!, $repository: String!, $package: String!) {
  repository(owner: $owner, name: $repository) {
    packages(names: [$package], first: 1) {
      nodes {
        name
        versions(first: 100) {
          nodes {
            version
          }
        }
      }
    }
  }
}
"""


class RegistryError(Exception):
    """Raised internally when a registry response cannot be used."""

    pass


class RemoteCatalog(ABC):
    """Read-only view of a package registry.

    Implementations must never raise: a failure is an empty list.
    """

    @abstractmethod
    def list_published_versions(self, package: str) -> VersionSet:
        """Published versions of an application package, newest first."""

    @abstractmethod
    def list_launcher_versions(self) -> VersionSet:
        """Published versions of the launcher itself."""


class GitHubPackagesCatalog(RemoteCatalog):
    """Remote catalog backed by GitHub Packages.

    Args:
        owner: Repository owner on GitHub.
        app_repository: Repository publishing the application packages.
        launcher_repository: Repository publishing the launcher package.
        launcher_package: Package name of the launcher itself.
        token: Bearer token; GitHub Packages requires one for GraphQL reads.
        url: GraphQL endpoint.
        timeout: Seconds before a request is abandoned (treated as offline).
        client: Pre-built httpx client, mainly for tests.
    """

    def __init__(
        self,
        owner: str,
        app_repository: str,
        launcher_repository: str,
        launcher_package: str,
        token: str | None = None,
        url: str = "https://api.github.com/graphql",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.owner = owner
        self.app_repository = app_repository
        self.launcher_repository = launcher_repository
        self.launcher_package = launcher_package
        self._token = token
        self._url = url
        self._timeout = timeout
        self._client = client

    def list_published_versions(self, package: str) -> VersionSet:
        """Versions of an application package, in registry order."""
        versions = self._fetch_versions(self.app_repository, package)
        for version in versions:
            logger.debug("Found published version: %s", version)
        return versions

    def list_launcher_versions(self) -> VersionSet:
        """Versions of the launcher's own package, in registry order."""
        return self._fetch_versions(self.launcher_repository, self.launcher_package)

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": PACKAGES_PREVIEW,
        }
        if self._token:
            headers["Authorization"] = f"bearer {self._token}"
        return headers

    def _fetch_versions(self, repository: str, package: str) -> VersionSet:
        payload = {
            "query": VERSIONS_QUERY,
            "variables": {
                "owner": self.owner,
                "repository": repository,
                "package": package,
            },
        }

        try:
            if self._client is not None:
                response = self._client.post(
                    self._url, json=payload, headers=self._headers(), timeout=self._timeout
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.post(self._url, json=payload, headers=self._headers())
            response.raise_for_status()
            return _parse_versions(response.json(), package)
        except Exception as e:
            # Offline, rate limited, bad token or schema change: all mean "no data"
            logger.debug(
                "Registry unavailable for %s/%s: %s: %s", repository, package, type(e).__name__, e
            )
            return []


def _parse_versions(data: Any, package: str) -> VersionSet:
    """Extract version strings for ``package`` from a GraphQL response body."""
    if not isinstance(data, dict):
        raise RegistryError("Response is not a JSON object")

    if data.get("errors"):
        messages = "; ".join(str(err.get("message", err)) for err in data["errors"])
        raise RegistryError(f"GraphQL errors: {messages}")

    repository = (data.get("data") or {}).get("repository")
    if repository is None:
        raise RegistryError("Repository not found")

    for node in repository["packages"]["nodes"]:
        if node.get("name", package) != package:
            continue
        return [str(v["version"]) for v in node["versions"]["nodes"]]

    return []
