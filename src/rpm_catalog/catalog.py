"""
Package Catalog

In-memory storage for package identities keyed by name. Each name maps
to a unique list of identities sorted newest first, and two sets track
which identities have been seen installed and available.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Optional, Union

from .exceptions import InvalidIdentity
from .rpm_utils import RPMPackage, compare_identities

logger = logging.getLogger(__name__)

_identity_key = cmp_to_key(compare_identities)


@dataclass
class PackageRecord:
    """A package identity plus its installed/available state."""

    package: RPMPackage
    installed: bool = False
    available: bool = False

    @property
    def name(self) -> Optional[str]:
        """Return the package name."""
        return self.package.name


class PackageCatalog:
    """
    Keeps a unique, descending list of packages per package name.

    Identities are matched with ``compare_identities``: a record whose
    identity compares equal to a stored one reuses the stored object and
    only adds to its installed/available state. The state sets are never
    shrunk by a later record, only by the clear methods.
    """

    def __init__(self) -> None:
        self._rpms: dict[str, list[RPMPackage]] = {}
        self._available: set[RPMPackage] = set()
        self._installed: set[RPMPackage] = set()

    def __getitem__(self, package_name: str) -> list[RPMPackage]:
        return self.lookup(package_name)

    def __contains__(self, package_name: object) -> bool:
        return package_name in self._rpms

    def __len__(self) -> int:
        return self.size()

    def lookup(self, package_name: str) -> list[RPMPackage]:
        """
        Return the known packages for a name, newest first.

        Args:
            package_name: Package name

        Returns:
            List of RPMPackage objects (empty if the name is unknown)
        """
        return list(self._rpms.get(package_name, ()))

    def names(self) -> Iterator[str]:
        """Iterate over known package names."""
        return iter(self._rpms)

    def ingest(self, record: PackageRecord) -> RPMPackage:
        """
        Add one record to the catalog.

        Args:
            record: PackageRecord to store

        Returns:
            The stored RPMPackage the record resolved to

        Raises:
            InvalidIdentity: If the record is not a PackageRecord or has
                no package name
        """
        if not isinstance(record, PackageRecord):
            raise InvalidIdentity(
                f"Expecting a PackageRecord object, got {type(record).__name__}"
            )
        if not isinstance(record.package, RPMPackage):
            raise InvalidIdentity("PackageRecord does not hold an RPMPackage")
        if not record.name:
            raise InvalidIdentity(f"Package has no name: {record.package!r}")

        packages = self._rpms.setdefault(record.name, [])

        current = self._find(packages, record.package)
        if current is None:
            packages.append(record.package)
            packages.sort(key=_identity_key, reverse=True)
            current = record.package
            logger.debug(f"Added {current.nevra} to catalog")

        if record.available:
            self._available.add(current)
        if record.installed:
            self._installed.add(current)

        return current

    def push(self, *records: Union[PackageRecord, Iterable[PackageRecord]]) -> None:
        """
        Add several records, flattening any lists passed in.

        Args:
            *records: PackageRecord objects or iterables of them
        """
        for record in records:
            if isinstance(record, PackageRecord):
                self.ingest(record)
            elif isinstance(record, (list, tuple)):
                self.push(*record)
            else:
                # let ingest reject it
                self.ingest(record)  # type: ignore[arg-type]

    @staticmethod
    def _find(
        packages: list[RPMPackage], package: RPMPackage
    ) -> Optional[RPMPackage]:
        for candidate in packages:
            if compare_identities(candidate, package) == 0:
                return candidate
        return None

    def clear(self) -> None:
        """Drop every package and both state sets."""
        self._rpms.clear()
        self.clear_available()
        self.clear_installed()

    def clear_available(self) -> None:
        self._available.clear()

    def clear_installed(self) -> None:
        self._installed.clear()

    def size(self) -> int:
        """Return the number of known package names."""
        return len(self._rpms)

    def available_size(self) -> int:
        return len(self._available)

    def installed_size(self) -> int:
        return len(self._installed)

    def is_available(self, package: RPMPackage) -> bool:
        return package in self._available

    def is_installed(self, package: RPMPackage) -> bool:
        return package in self._installed
