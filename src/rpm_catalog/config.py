"""
Configuration

Loads the catalog settings from a YAML file and sets up logging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

DEFAULT_CONFIG_PATH = "/etc/rpm-catalog/config.yaml"


@dataclass
class CatalogConfig:
    """
    Settings for the yum-dump data source and the command line.

    Attributes:
        python: Interpreter used to run the helper
        helper: Path to the yum-dump helper script
        timeout: Seconds to wait for the helper (None waits forever)
        strict: Fail on unparseable dump lines instead of skipping them
        log_level: Root logging level name
    """

    python: str = "/usr/bin/python3"
    helper: str = "/usr/share/rpm-catalog/yum-dump.py"
    timeout: Optional[float] = None
    strict: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CatalogConfig:
        """
        Build a config from a mapping, rejecting unknown keys.

        Args:
            data: Mapping of setting names to values

        Returns:
            CatalogConfig with defaults for missing settings

        Raises:
            ValueError: If the mapping holds an unknown setting or a
                setting of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        config = cls(**data)

        if not isinstance(config.log_level, str) or not isinstance(
            logging.getLevelName(config.log_level.upper()), int
        ):
            raise ValueError(f"Invalid log_level: {config.log_level!r}")

        if config.timeout is not None:
            try:
                config.timeout = float(config.timeout)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid timeout: {config.timeout!r}") from e
        return config


def load_config(config_path: str | Path) -> CatalogConfig:
    """
    Load and validate a YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        CatalogConfig (defaults for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a mapping or has unknown keys
        yaml.YAMLError: If the file is not valid YAML
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return CatalogConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a mapping: {config_path}")

    return CatalogConfig.from_dict(data)


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
