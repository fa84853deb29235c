"""
Pytest configuration and fixtures for rpm catalog tests.
"""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from rpm_catalog.cache import PackageCache
from rpm_catalog.catalog import PackageCatalog, PackageRecord
from rpm_catalog.rpm_utils import RPMPackage
from rpm_catalog.yum_dump import FetchMode, parse_dump_output

FULL_DUMP = """\
[option installonlypkgs] kernel kernel-smp
bash 0 4.2 10.el6 x86_64 a
bash 0 4.1 1.el6 x86_64 i
kernel 0 2.6.32 71.el6 x86_64 r
kernel 0 2.6.32 220.el6 x86_64 a
zlib 0 1.2.3 25.el6 i686 r
zlib 0 1.2.3 25.el6 x86_64 i
"""

# after "yum install bash-4.2-10.el6"
INSTALLED_DUMP = """\
bash 0 4.2 10.el6 x86_64 i
kernel 0 2.6.32 71.el6 x86_64 i
zlib 0 1.2.3 25.el6 i686 i
zlib 0 1.2.3 25.el6 x86_64 i
"""


class FakeSource:
    """Package source returning canned dump output."""

    def __init__(self, full=FULL_DUMP, installed=INSTALLED_DUMP):
        self.outputs = {
            FetchMode.FULL: full,
            FetchMode.INSTALLED_ONLY: installed,
        }
        self.calls = []
        self.error = None

    def fetch(self, mode):
        self.calls.append(mode)
        if self.error is not None:
            raise self.error
        return parse_dump_output(self.outputs[mode].splitlines())


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_source():
    """Provide a package source with a small rpmdb."""
    return FakeSource()


@pytest.fixture
def cache(fake_source):
    """Provide a package cache backed by the fake source."""
    return PackageCache(fake_source)


@pytest.fixture
def catalog():
    """Provide an empty package catalog."""
    return PackageCatalog()


@pytest.fixture
def make_record():
    """Build PackageRecords from NEVRA parts."""

    def _make(name, epoch, version, release, arch, installed=False, available=False):
        return PackageRecord(
            package=RPMPackage(name, epoch, version, release, arch),
            installed=installed,
            available=available,
        )

    return _make


@pytest.fixture
def rpmvercmp_cases():
    """Provide version pairs with their expected rpmvercmp result."""
    return [
        ("1.0", "1.0", 0),
        ("1.0", "2.0", -1),
        ("2.0", "1.0", 1),
        ("2.0.1", "2.0.1", 0),
        ("2.0", "2.0.1", -1),
        ("2.0.1", "2.0", 1),
        ("2.0.1a", "2.0.1a", 0),
        ("2.0.1a", "2.0.1", 1),
        ("2.0.1", "2.0.1a", -1),
        ("5.5p1", "5.5p1", 0),
        ("5.5p1", "5.5p2", -1),
        ("5.5p2", "5.5p1", 1),
        ("5.5p10", "5.5p10", 0),
        ("5.5p1", "5.5p10", -1),
        ("5.5p10", "5.5p1", 1),
        ("10xyz", "10.1xyz", -1),
        ("10.1xyz", "10xyz", 1),
        ("xyz10", "xyz10", 0),
        ("xyz10", "xyz10.1", -1),
        ("xyz10.1", "xyz10", 1),
        ("xyz.4", "xyz.4", 0),
        ("xyz.4", "8", -1),
        ("8", "xyz.4", 1),
        ("xyz.4", "2", -1),
        ("2", "xyz.4", 1),
        ("5.5p1", "5.5.p1", 0),
        ("5.5.p1", "5.5p1", 0),
        ("5.5p10", "5.5.p10", 0),
        ("10b2", "10a1", 1),
        ("10a2", "10b2", -1),
        ("1.0aa", "1.0aa", 0),
        ("1.0a", "1.0aa", -1),
        ("1.0aa", "1.0a", 1),
        ("10.0001", "10.0001", 0),
        ("10.0001", "10.1", 0),
        ("10.1", "10.0001", 0),
        ("10.0001", "10.0039", -1),
        ("10.0039", "10.0001", 1),
        ("4.999.9", "5.0", -1),
        ("5.0", "4.999.9", 1),
        ("20101121", "20101121", 0),
        ("20101121", "20101122", -1),
        ("20101122", "20101121", 1),
        ("2_0", "2_0", 0),
        ("2.0", "2_0", 0),
        ("2_0", "2.0", 0),
        ("a", "a", 0),
        ("a+", "a+", 0),
        ("a+", "a_", 0),
        ("a_", "a+", 0),
        ("+a", "+a", 0),
        ("+a", "_a", 0),
        ("_a", "+a", 0),
        ("+_", "+_", 0),
        ("_+", "+_", 0),
        ("_+", "_", 0),
        ("1.0", "1.a", 1),
        ("1.a", "1.0", -1),
        ("1b.fc17", "1b.fc17", 0),
        ("1b.fc17", "1.fc17", -1),
        ("1.fc17", "1b.fc17", 1),
        ("1g.fc17", "1g.fc17", 0),
        ("1g.fc17", "1.fc17", 1),
        ("1.fc17", "1g.fc17", -1),
        ("6.0.rc1", "6.0", 1),
        ("6.0", "6.0.rc1", -1),
        ("2a", "2.0", -1),
        ("2.0", "2a", 1),
        ("1.20.b18.el5.extra", "1.20.b18.el5", 1),
        ("1.20.b18.el5", "1.20.b17.el5", 1),
    ]
