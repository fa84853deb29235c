"""
yum-dump Adapter

Runs the yum-dump helper and turns its output into package records.

The helper prints one package per line as six whitespace separated
fields::

    name epoch version release arch type

where type is ``i`` (installed), ``a`` (available) or ``r`` (both).
With ``--options`` it also prints lines such as::

    [option installonlypkgs] kernel kernel-devel
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from .catalog import PackageRecord
from .config import CatalogConfig
from .exceptions import ExternalToolError, UnknownOptionLine
from .rpm_utils import RPMPackage

logger = logging.getLogger(__name__)

_OPTION_LINE = re.compile(r"\[option (.*)\] (.*)")

KNOWN_OPTIONS = ("installonlypkgs",)

# type tag -> (installed, available)
_TYPE_FLAGS = {
    "i": (True, False),
    "a": (False, True),
    "r": (True, True),
}


class FetchMode(Enum):
    """What the data source should report."""

    FULL = "--options"
    INSTALLED_ONLY = "--installed"


@dataclass
class DumpResult:
    """Records and global options reported by one fetch."""

    records: list[PackageRecord] = field(default_factory=list)
    options: dict[str, list[str]] = field(default_factory=dict)


class PackageSource(Protocol):
    """Anything that can report package records for the cache."""

    def fetch(self, mode: FetchMode) -> DumpResult:
        ...


def parse_option_line(line: str) -> Optional[tuple[str, list[str]]]:
    """
    Parse an ``[option key] value`` line.

    Args:
        line: Single line of helper output

    Returns:
        (key, values) tuple, or None if the line is not an option line

    Raises:
        UnknownOptionLine: If the option key is not known
    """
    match = _OPTION_LINE.search(line)
    if not match:
        return None

    key, value = match.groups()
    if key not in KNOWN_OPTIONS:
        raise UnknownOptionLine(line)

    return key, value.split()


def parse_package_line(line: str, strict: bool = False) -> Optional[PackageRecord]:
    """
    Parse one package line of helper output.

    Args:
        line: Single line of helper output
        strict: Raise instead of skipping lines that do not parse

    Returns:
        PackageRecord, or None if the line was skipped

    Raises:
        ExternalToolError: If strict and the line does not parse
    """
    parts = line.split()
    if len(parts) != 6:
        message = (
            f"Problem parsing line '{line}' from yum-dump! "
            "Please check your yum configuration."
        )
        if strict:
            raise ExternalToolError(message)
        logger.warning(message)
        return None

    name, epoch, version, release, arch, type_tag = parts
    flags = _TYPE_FLAGS.get(type_tag)
    if flags is None:
        message = f"Can't parse type '{type_tag}' from yum-dump line '{line}'"
        if strict:
            raise ExternalToolError(message)
        logger.warning(f"{message}, skipping line")
        return None

    installed, available = flags
    return PackageRecord(
        package=RPMPackage(name, epoch, version, release, arch),
        installed=installed,
        available=available,
    )


def parse_dump_output(lines: Iterable[str], strict: bool = False) -> DumpResult:
    """
    Parse the complete output of the helper.

    Args:
        lines: Output lines (trailing newlines are stripped)
        strict: Raise instead of skipping lines that do not parse

    Returns:
        DumpResult with package records and options
    """
    result = DumpResult()
    seen_output = False

    for line in lines:
        seen_output = True
        line = line.rstrip("\r\n")

        option = parse_option_line(line)
        if option is not None:
            key, values = option
            result.options[key] = values
            continue

        record = parse_package_line(line, strict=strict)
        if record is not None:
            result.records.append(record)

    if not seen_output:
        logger.warning(
            "Odd, no output from yum-dump. Please check your yum configuration."
        )

    return result


class YumDumpSource:
    """
    Package source backed by the yum-dump helper script.

    The helper runs synchronously; a configured timeout is the only way a
    hung helper is interrupted.
    """

    def __init__(self, config: Optional[CatalogConfig] = None):
        """
        Initialize the source.

        Args:
            config: Catalog settings (defaults if omitted)
        """
        self.config = config or CatalogConfig()

    def command(self, mode: FetchMode) -> list[str]:
        """Return the helper command line for a fetch mode."""
        return [self.config.python, self.config.helper, mode.value]

    def fetch(self, mode: FetchMode) -> DumpResult:
        """
        Run the helper and parse its output.

        Args:
            mode: FetchMode.FULL or FetchMode.INSTALLED_ONLY

        Returns:
            DumpResult with package records and options

        Raises:
            ExternalToolError: If the helper cannot run, times out, exits
                non-zero or (in strict mode) prints an unparseable line
            UnknownOptionLine: If the helper reports an unknown option
        """
        cmd = self.command(mode)
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExternalToolError(f"Cannot run yum-dump: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise ExternalToolError(
                f"yum-dump did not finish within {self.config.timeout} seconds"
            ) from e

        if result.returncode != 0:
            raise ExternalToolError(
                f"Yum failed - exit status {result.returncode} - "
                f"returns: {result.stderr.strip()}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        return parse_dump_output(
            result.stdout.splitlines(), strict=self.config.strict
        )
