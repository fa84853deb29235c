"""
Package Cache

Keeps a PackageCatalog filled from a package source and answers version
queries against it. The cache refreshes lazily: marking it stale only
records what kind of refresh the next query has to run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import Enum
from typing import Optional

from .catalog import PackageCatalog
from .yum_dump import DumpResult, FetchMode, PackageSource

logger = logging.getLogger(__name__)


class RefreshState(Enum):
    """What the next query has to do before answering."""

    NEEDS_FULL = "all"
    NEEDS_INSTALLED_ONLY = "installed"
    FRESH = "none"


class PackageCache:
    """
    Installed and available packages reported by a package source.

    One instance is meant to live for a whole run and be passed to
    whatever needs it. Access is not locked; callers sharing an instance
    across threads must serialize.

    Next time a query runs:
        NEEDS_FULL           - clear everything and fetch with FetchMode.FULL,
                               which also reports options
        NEEDS_INSTALLED_ONLY - clear the installed set and fetch with
                               FetchMode.INSTALLED_ONLY
        FRESH                - answer from the catalog as it is
    """

    def __init__(
        self,
        source: PackageSource,
        catalog: Optional[PackageCatalog] = None,
    ):
        """
        Initialize the cache.

        Args:
            source: Package source to refresh from
            catalog: Catalog to fill (a new one if omitted)
        """
        self.source = source
        self.catalog = catalog if catalog is not None else PackageCatalog()
        self._state = RefreshState.NEEDS_FULL
        self._allow_multi_install: list[str] = []

    @property
    def state(self) -> RefreshState:
        """Return the pending refresh state."""
        return self._state

    # Cache management

    def mark_needs_full(self) -> None:
        """Make the next query run a full refresh."""
        self._state = RefreshState.NEEDS_FULL

    def mark_needs_installed_only(self) -> None:
        """Make the next query re-read installed packages."""
        if self._state is not RefreshState.NEEDS_FULL:
            self._state = RefreshState.NEEDS_INSTALLED_ONLY

    reload = mark_needs_full
    reload_installed = mark_needs_installed_only

    def ensure_fresh(self) -> None:
        """
        Run the pending refresh, if any.

        The catalog is cleared before the source is asked, so a failing
        source leaves it cleared or partly filled. The refresh stays
        pending in that case and the error propagates.

        Raises:
            ExternalToolError: If the source fails
        """
        if self._state is RefreshState.FRESH:
            return

        if self._state is RefreshState.NEEDS_INSTALLED_ONLY:
            self.catalog.clear_installed()
            mode = FetchMode.INSTALLED_ONLY
        else:
            self.catalog.clear()
            mode = FetchMode.FULL

        logger.info(f"Refreshing package cache ({mode.name.lower()})")
        result = self.source.fetch(mode)
        self._load(result)

        self._state = RefreshState.FRESH
        logger.info(
            f"Package cache refreshed: {self.catalog.size()} names, "
            f"{self.catalog.installed_size()} installed, "
            f"{self.catalog.available_size()} available"
        )

    def _load(self, result: DumpResult) -> None:
        for record in result.records:
            self.catalog.ingest(record)

        if "installonlypkgs" in result.options:
            self._allow_multi_install = list(result.options["installonlypkgs"])

    # Querying the cache

    def versions(
        self,
        package_name: str,
        arch: Optional[str] = None,
        available: bool = False,
        installed: bool = False,
    ) -> Iterator[str]:
        """
        Iterate over matching versions of a package, newest first.

        The pending refresh runs when this is called, before the
        iterator is returned.

        Args:
            package_name: Package name
            arch: Only include packages with this arch
            available: Only include packages seen as available
            installed: Only include packages seen as installed

        Returns:
            Iterator of ``version-release`` strings
        """
        self.ensure_fresh()

        matches = []
        for pkg in self.catalog.lookup(package_name):
            if available and not self.catalog.is_available(pkg):
                continue
            if installed and not self.catalog.is_installed(pkg):
                continue
            if arch and pkg.arch != arch:
                continue
            matches.append(str(pkg))
        return iter(matches)

    def _first(self, package_name: str, arch: Optional[str], **kwargs: bool) -> Optional[str]:
        return next(self.versions(package_name, arch, **kwargs), None)

    def installed_version(
        self, package_name: str, arch: Optional[str] = None
    ) -> Optional[str]:
        """Return the newest installed version, or None."""
        return self._first(package_name, arch, installed=True)

    def available_version(
        self, package_name: str, arch: Optional[str] = None
    ) -> Optional[str]:
        """Return the newest available version, or None."""
        return self._first(package_name, arch, available=True)

    candidate_version = available_version

    def version_available(
        self,
        package_name: str,
        desired_version: str,
        arch: Optional[str] = None,
    ) -> bool:
        """
        Check whether an exact version is available.

        Args:
            package_name: Package name
            desired_version: ``version-release`` string to look for
            arch: Only consider packages with this arch

        Returns:
            True if some available package prints as desired_version
        """
        return any(
            version == desired_version
            for version in self.versions(package_name, arch, available=True)
        )

    def allow_multi_install(self) -> list[str]:
        """Return the names that may be installed more than once."""
        self.ensure_fresh()
        return list(self._allow_multi_install)
