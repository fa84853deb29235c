"""
Catalog Exceptions

Error kinds raised by the package catalog, its refresh controller and
the yum-dump adapter. Malformed version strings are not an error:
``version_parse`` degrades to a partial tuple instead.
"""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for package catalog errors."""


class InvalidIdentity(CatalogError, ValueError):
    """A record pushed into the catalog does not form a usable identity."""


class ExternalToolError(CatalogError):
    """
    The external package data source failed.

    Attributes:
        returncode: Exit status of the helper process, if it ran
        stderr: Captured error output of the helper process
    """

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class UnknownOptionLine(ExternalToolError):
    """The data source reported an ``[option ...]`` line we do not know."""

    def __init__(self, line: str):
        super().__init__(f"Strange, unknown option line '{line}' from yum-dump")
        self.line = line


class PackageNotFound(CatalogError):
    """No installable version of the requested package is known."""


class InstalledNewerError(CatalogError):
    """The installed version is newer than the version requested."""
