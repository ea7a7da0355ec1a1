"""
Scan settings management.

Handles loading and validating scan settings from a YAML file and combining
them with command-line overrides.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List

import yaml

from liveconf.utils.logging import VALID_LOG_LEVELS


@dataclass
class ScanSettings:
    """Settings controlling a configuration scan."""

    packages: List[str] = field(default_factory=list)
    ignore_prefixes: List[str] = field(default_factory=list)
    log_level: str = "WARNING"


class SettingsLoader:
    """Loads scan settings from YAML files."""

    def load(self, path: str) -> ScanSettings:
        """
        Load and validate settings from a YAML file.

        Expected layout::

            packages: [robot.config]
            ignore_prefixes: [robot.config.vendor]
            log_level: INFO

        Args:
            path: Path to settings YAML file

        Returns:
            Loaded settings

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not valid YAML or has invalid settings
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Settings file not found: {path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in settings: {e}")

        self._validate_settings(data)

        return ScanSettings(
            packages=list(data.get("packages", [])),
            ignore_prefixes=list(data.get("ignore_prefixes", [])),
            log_level=str(data.get("log_level", "WARNING")).upper(),
        )

    def _validate_settings(self, data: Any) -> None:
        """
        Validate settings structure and content.

        Raises:
            ValueError: If settings are invalid
        """
        if not isinstance(data, dict):
            raise ValueError("Settings must be a dictionary")

        unknown = set(data) - {"packages", "ignore_prefixes", "log_level"}
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

        for key in ("packages", "ignore_prefixes"):
            values = data.get(key, [])
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise ValueError(f"Setting '{key}' must be a list of strings")

        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {data.get('log_level')}")


def merge_cli_overrides(
    settings: ScanSettings,
    packages: Iterable[str] = (),
    ignore_prefixes: Iterable[str] = (),
) -> ScanSettings:
    """
    Combine file settings with command-line values.

    Packages given on the command line replace the file's packages; ignore
    prefixes are added to the file's prefixes.

    Args:
        settings: Settings loaded from file (or defaults)
        packages: Packages from the command line
        ignore_prefixes: Ignore prefixes from the command line

    Returns:
        New settings instance
    """
    packages = list(packages)
    merged_prefixes: List[str] = list(settings.ignore_prefixes)
    for prefix in ignore_prefixes:
        if prefix not in merged_prefixes:
            merged_prefixes.append(prefix)

    return replace(
        settings,
        packages=packages or list(settings.packages),
        ignore_prefixes=merged_prefixes,
    )


def settings_summary(settings: ScanSettings) -> Dict[str, Any]:
    """Plain-data view of settings for display."""
    return {
        "packages": list(settings.packages),
        "ignore_prefixes": list(settings.ignore_prefixes),
        "log_level": settings.log_level,
    }
