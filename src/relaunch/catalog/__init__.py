"""Local and remote version catalogs."""

from relaunch.catalog.local import LocalCatalog
from relaunch.catalog.remote import GitHubPackagesCatalog, RemoteCatalog

__all__ = [
    "LocalCatalog",
    "RemoteCatalog",
    "GitHubPackagesCatalog",
]
