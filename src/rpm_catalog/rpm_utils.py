"""
RPM Utilities

Provides parsing and comparison of RPM package versions.
Handles EVR (Epoch:Version-Release) strings, the rpmvercmp segment
comparison and the NEVRA ordering used by the package catalog.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Optional

_EPOCH_PREFIX = re.compile(r"^(\d+):")
_LEADING_DIGITS = re.compile(r"^\s*[+]?(\d+)")

# name-epoch:version-release.arch
_NEVRA_WITH_EPOCH = re.compile(r"^(.+)-(\d+):([^-]+)-([^-]+)\.([^.]+)$")
# name-version-release.arch
_NEVRA_WITHOUT_EPOCH = re.compile(r"^(.+)-([^-]+)-([^-]+)\.([^.]+)$")


@dataclass(frozen=True)
class VersionTuple:
    """
    The three parts of an EVR string.

    Attributes:
        epoch: Explicit epoch, or None when the string carried none
        version: Version part
        release: Release part, or None when absent or empty
    """

    epoch: Optional[int]
    version: Optional[str]
    release: Optional[str]

    def __iter__(self) -> Iterator[Any]:
        return iter((self.epoch, self.version, self.release))


def version_parse(evr: Optional[str]) -> VersionTuple:
    """
    Split an ``[epoch:]version[-release]`` string.

    Never raises: unusual input yields a best-effort partial tuple.

    Examples:
        "1:2.0-3.el9" -> (1, "2.0", "3.el9")
        ":2.0"        -> (0, "2.0", None)
        "2.0-"        -> (None, "2.0", None)

    Args:
        evr: EVR string, or None

    Returns:
        VersionTuple with absent fields set to None
    """
    if evr is None:
        return VersionTuple(None, None, None)

    epoch = None
    lead = 0

    match = _EPOCH_PREFIX.match(evr)
    if match:
        epoch = int(match.group(1))
        lead = len(match.group(1)) + 1
    elif evr.startswith(":"):
        epoch = 0
        lead = 1

    remainder = evr[lead:]
    release = None
    if "-" in remainder:
        remainder, release = remainder.rsplit("-", 1)
        if not release:
            release = None

    return VersionTuple(epoch, remainder, release)


def _isalpha(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


def _isdigit(char: str) -> bool:
    return "0" <= char <= "9"


def _isalnum(char: str) -> bool:
    return _isalpha(char) or _isdigit(char)


def rpmvercmp(x: Optional[str], y: Optional[str]) -> int:
    """
    Compare two version strings using RPM's segment algorithm.

    Based on lib/rpmvercmp.c from rpm 4.9.0. Strings are broken into
    purely alphabetic and purely numeric segments:

        * 10 > 1
        * 1 > a
        * z > a, Z > A, z > Z
        * leading zeros are ignored
        * separators are ignored, so "1.0" == "1_0"
        * "1.20.b18.el5.extra" > "1.20.b18.el5"

    Only ASCII letters and digits form segments; every other character
    is a separator.

    Returns:
        -1 if x < y
         0 if x == y
         1 if x > y
    """
    if x == y:
        return 0

    x = x or ""
    y = y or ""
    x_len = len(x)
    y_len = len(y)
    x_pos = 0
    y_pos = 0

    while x_pos < x_len and y_pos < y_len:
        while x_pos < x_len and not _isalnum(x[x_pos]):
            x_pos += 1
        while y_pos < y_len and not _isalnum(y[y_pos]):
            y_pos += 1

        if x_pos == x_len or y_pos == y_len:
            break

        # x decides what kind of segment both sides gather
        is_num = _isdigit(x[x_pos])
        in_segment: Callable[[str], bool] = _isdigit if is_num else _isalpha

        x_end = x_pos
        while x_end < x_len and in_segment(x[x_end]):
            x_end += 1
        y_end = y_pos
        while y_end < y_len and in_segment(y[y_end]):
            y_end += 1

        # y has the other kind of segment here; numbers win over letters
        if y_end == y_pos:
            return 1 if is_num else -1

        x_seg = x[x_pos:x_end]
        y_seg = y[y_pos:y_end]
        x_pos = x_end
        y_pos = y_end

        if is_num:
            # compare digit runs without int() so any length works
            x_seg = x_seg.lstrip("0")
            y_seg = y_seg.lstrip("0")
            if len(x_seg) != len(y_seg):
                return 1 if len(x_seg) > len(y_seg) else -1

        if x_seg > y_seg:
            return 1
        if x_seg < y_seg:
            return -1

    # Segments matched; differing separators still count as equal
    if x_pos == x_len and y_pos == y_len:
        return 0

    # The most unprocessed characters left wins
    if (x_len - x_pos) > (y_len - y_pos):
        return 1
    return -1


compare_versions = rpmvercmp


def _coerce_epoch(epoch: Any) -> Optional[int]:
    """Integer-parse an epoch given as text ("(none)" and "" become 0)."""
    if epoch is None or isinstance(epoch, int):
        return epoch
    match = _LEADING_DIGITS.match(str(epoch))
    return int(match.group(1)) if match else 0


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare_optional(
    a: Optional[str], b: Optional[str], compare: Callable[[Any, Any], int]
) -> int:
    """Absent sorts before present; two present values go to ``compare``."""
    if a is not None and b is None:
        return 1
    if a is None and b is not None:
        return -1
    if a is None and b is None:
        return 0
    return compare(a, b)


@total_ordering
@dataclass(frozen=True, eq=False)
class RPMPackage:
    """
    Represents a package identity with NEVRA components.

    Any component may be None. Equality and ordering follow
    ``compare_identities`` rather than field equality, so ``1.01`` and
    ``1.1`` are the same version, and an absent epoch equals epoch 0.

    Attributes:
        name: Package name
        epoch: Package epoch, or None when not given
        version: Package version string
        release: Package release string
        arch: Package architecture
    """

    name: Optional[str]
    epoch: Optional[int]
    version: Optional[str]
    release: Optional[str]
    arch: Optional[str]

    def __post_init__(self) -> None:
        """Normalize epoch to integer."""
        object.__setattr__(self, "epoch", _coerce_epoch(self.epoch))

    @classmethod
    def from_evr(
        cls, name: Optional[str], evr: Optional[str], arch: Optional[str]
    ) -> RPMPackage:
        """
        Build a package from a name, an EVR string and an arch.

        Args:
            name: Package name
            evr: ``[epoch:]version[-release]`` string
            arch: Package architecture

        Returns:
            RPMPackage with epoch left absent unless the EVR carries one
        """
        epoch, version, release = version_parse(evr)
        return cls(name, epoch, version, release, arch)

    @property
    def evr(self) -> str:
        """Return EVR string."""
        return format_evr(self.epoch, self.version, self.release)

    @property
    def nevra(self) -> str:
        """Return full NEVRA string."""
        epoch = self.epoch if self.epoch is not None else 0
        return f"{self.name}-{epoch}:{self.version}-{self.release}.{self.arch}"

    def __str__(self) -> str:
        if self.release is None:
            return f"{self.version}"
        return f"{self.version}-{self.release}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RPMPackage):
            return NotImplemented
        return compare_identities(self, other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RPMPackage):
            return NotImplemented
        return compare_identities(self, other) < 0

    def __hash__(self) -> int:
        # name and arch are the only fields where comparator equality
        # is plain string equality
        return hash((self.name, self.arch))


def compare_identities(x: RPMPackage, y: RPMPackage) -> int:
    """
    Order two packages by name, epoch, version, release, then arch.

    The first field that differs decides. An absent name, version,
    release or arch sorts before a present one. An absent epoch is
    older than any epoch above 0 but equal to epoch 0.

    Returns:
        -1 if x < y
         0 if x == y
         1 if x > y
    """
    result = _compare_optional(x.name, y.name, _cmp)
    if result != 0:
        return result

    if (x.epoch is not None and x.epoch > 0) and y.epoch is None:
        return 1
    if x.epoch is None and (y.epoch is not None and y.epoch > 0):
        return -1
    if x.epoch is not None and y.epoch is not None:
        result = _cmp(x.epoch, y.epoch)
        if result != 0:
            return result

    result = _compare_optional(x.version, y.version, rpmvercmp)
    if result != 0:
        return result

    result = _compare_optional(x.release, y.release, rpmvercmp)
    if result != 0:
        return result

    return _compare_optional(x.arch, y.arch, _cmp)


def parse_nevra(nevra_string: str) -> Optional[RPMPackage]:
    """
    Parse a NEVRA string into an RPMPackage object.

    Supported formats:
        name-epoch:version-release.arch
        name-version-release.arch (epoch left absent)

    Args:
        nevra_string: Package identifier in NEVRA format

    Returns:
        RPMPackage object or None if parsing fails
    """
    match = _NEVRA_WITH_EPOCH.match(nevra_string)
    if match:
        name, epoch, version, release, arch = match.groups()
        return RPMPackage(name, int(epoch), version, release, arch)

    match = _NEVRA_WITHOUT_EPOCH.match(nevra_string)
    if match:
        name, version, release, arch = match.groups()
        return RPMPackage(name, None, version, release, arch)

    return None


def format_evr(
    epoch: Optional[int | str], version: Optional[str], release: Optional[str]
) -> str:
    """
    Format epoch-version-release string.

    Args:
        epoch: Package epoch (omitted from the result unless above 0)
        version: Package version
        release: Package release (omitted when None)

    Returns:
        Formatted EVR string
    """
    epoch = _coerce_epoch(epoch) or 0
    evr = f"{version}" if release is None else f"{version}-{release}"

    if epoch > 0:
        return f"{epoch}:{evr}"
    return evr
