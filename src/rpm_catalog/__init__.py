"""
RPM Catalog Module

Provides RPM version comparison and an in-memory, refreshable catalog of
installed and available packages.
"""

from .cache import PackageCache, RefreshState
from .catalog import PackageCatalog, PackageRecord
from .exceptions import (
    CatalogError,
    ExternalToolError,
    InstalledNewerError,
    InvalidIdentity,
    PackageNotFound,
    UnknownOptionLine,
)
from .rpm_utils import (
    RPMPackage,
    VersionTuple,
    compare_identities,
    compare_versions,
    rpmvercmp,
    version_parse,
)
from .yum_dump import DumpResult, FetchMode, YumDumpSource

__all__ = [
    "PackageCache",
    "RefreshState",
    "PackageCatalog",
    "PackageRecord",
    "CatalogError",
    "ExternalToolError",
    "InstalledNewerError",
    "InvalidIdentity",
    "PackageNotFound",
    "UnknownOptionLine",
    "RPMPackage",
    "VersionTuple",
    "compare_identities",
    "compare_versions",
    "rpmvercmp",
    "version_parse",
    "DumpResult",
    "FetchMode",
    "YumDumpSource",
]

__version__ = "1.0.0"
