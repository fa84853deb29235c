"""
rpm-catalog command line

Usage:
    rpm-catalog vercmp 1.0-1.el9 1.0-2.el9
    rpm-catalog parse 1:2.0-3.el9
    rpm-catalog [--config config.yaml] query bash [--arch x86_64]
    rpm-catalog [--config config.yaml] multi
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

import yaml

from .cache import PackageCache
from .config import DEFAULT_CONFIG_PATH, CatalogConfig, configure_logging, load_config
from .exceptions import CatalogError
from .policy import split_arch
from .rpm_utils import rpmvercmp, version_parse
from .yum_dump import YumDumpSource


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpm-catalog",
        description="Compare RPM versions and query installed/available packages",
    )
    parser.add_argument("--config", "-c", default=None,
                        help=f"Path to config YAML (default: {DEFAULT_CONFIG_PATH} if present)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    vercmp = subparsers.add_parser("vercmp", help="Compare two version strings")
    vercmp.add_argument("x")
    vercmp.add_argument("y")

    parse = subparsers.add_parser("parse", help="Split an EVR string")
    parse.add_argument("evr")

    query = subparsers.add_parser("query", help="Show installed and candidate versions")
    query.add_argument("name")
    query.add_argument("--arch", "-a", default=None,
                       help="Only consider this architecture")

    subparsers.add_parser("multi", help="List packages that may be installed more than once")

    return parser


def resolve_config(config_path: Optional[str]) -> CatalogConfig:
    """Load the given config file, the default one if present, or defaults."""
    if config_path is not None:
        return load_config(config_path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return CatalogConfig()


def build_cache(config: CatalogConfig) -> PackageCache:
    return PackageCache(YumDumpSource(config))


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "vercmp":
        print(rpmvercmp(args.x, args.y))
        return 0

    if args.command == "parse":
        epoch, version, release = version_parse(args.evr)
        print(f"epoch: {epoch}")
        print(f"version: {version}")
        print(f"release: {release}")
        return 0

    try:
        config = resolve_config(args.config)
        configure_logging(config.log_level)
        cache = build_cache(config)

        if args.command == "query":
            name, arch = split_arch(cache, args.name, args.arch)
            installed = cache.installed_version(name, arch)
            candidate = cache.candidate_version(name, arch)
            print(f"name: {name}")
            print(f"arch: {arch or '(any)'}")
            print(f"installed: {installed or '(none)'}")
            print(f"candidate: {candidate or '(none)'}")
        else:
            for name in cache.allow_multi_install():
                print(name)

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except yaml.YAMLError as e:
        print(f"YAML Error: {e}", file=sys.stderr)
        return 1
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
