"""
Install Policy

Decisions a package provider makes from the cache before it touches
the package manager: resolving ``name.arch`` names, finding the
installed and candidate versions, and refusing downgrades.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .cache import PackageCache
from .exceptions import InstalledNewerError, PackageNotFound
from .rpm_utils import rpmvercmp

logger = logging.getLogger(__name__)


@dataclass
class PackageVersions:
    """Installed and candidate version of one package."""

    name: str
    arch: Optional[str]
    installed: Optional[str]
    candidate: str


def split_arch(
    cache: PackageCache, package_name: str, arch: Optional[str] = None
) -> tuple[str, Optional[str]]:
    """
    Resolve yum style ``foo.x86_64`` names.

    ``foo.i386`` and ``foo.beta1`` are both valid package names, so the
    name is only split when nothing is known under the full name and
    something is known under the split name and arch. An explicit arch
    is never overwritten.

    Args:
        cache: Package cache to consult
        package_name: Name as given by the caller
        arch: Explicit architecture, if any

    Returns:
        (name, arch) tuple
    """
    if arch is not None or "." not in package_name:
        return package_name, arch

    new_name, new_arch = package_name.rsplit(".", 1)

    known_as_is = (
        cache.installed_version(package_name) is not None
        or cache.candidate_version(package_name) is not None
    )
    known_split = (
        cache.installed_version(new_name, new_arch) is not None
        or cache.candidate_version(new_name, new_arch) is not None
    )

    if not known_as_is and known_split:
        logger.debug(f"Treating {package_name} as {new_name} arch {new_arch}")
        return new_name, new_arch

    return package_name, arch


def current_versions(
    cache: PackageCache, package_name: str, arch: Optional[str] = None
) -> PackageVersions:
    """
    Look up the installed and candidate versions of a package.

    Raises:
        PackageNotFound: If no candidate version is known
    """
    installed = cache.installed_version(package_name, arch)
    candidate = cache.candidate_version(package_name, arch)

    if candidate is None:
        raise PackageNotFound(
            "Yum installed and available lists don't have a version of "
            f"package {package_name}"
        )

    logger.debug(
        f"{package_name} installed version: {installed or '(none)'} "
        f"candidate version: {candidate}"
    )
    return PackageVersions(package_name, arch, installed, candidate)


def check_install(
    cache: PackageCache,
    package_name: str,
    version: str,
    installed_version: Optional[str] = None,
    arch: Optional[str] = None,
) -> None:
    """
    Refuse installs yum would get wrong.

    Packages in the allow-multi-install list (such as the kernel) may be
    installed next to newer versions; anything else may not go backwards.

    Args:
        cache: Package cache to consult
        package_name: Package name
        version: ``version-release`` to install
        installed_version: Currently installed version, if any
        arch: Architecture to install

    Raises:
        PackageNotFound: If the version is not available
        InstalledNewerError: If the installed version is newer
    """
    if not cache.version_available(package_name, version, arch):
        raise PackageNotFound(
            f"Version {version} of {package_name} not found. Did you specify "
            "both version and release? (version-release, e.g. 1.84-10.fc6)"
        )

    if package_name in cache.allow_multi_install():
        return

    if rpmvercmp(installed_version, version) == 1:
        raise InstalledNewerError(
            f"Installed package {package_name}-{installed_version} is newer "
            f"than candidate package {package_name}-{version}"
        )


def should_upgrade(
    candidate: Optional[str],
    installed: Optional[str],
    desired_version: Optional[str] = None,
) -> bool:
    """
    Decide whether an upgrade should run.

    An explicitly requested version always goes ahead. Otherwise the
    candidate has to be newer than what is installed.
    """
    if desired_version is not None:
        return True
    if rpmvercmp(candidate, installed) == 1:
        return True

    logger.debug(f"{installed} is at the latest version - nothing to do")
    return False
