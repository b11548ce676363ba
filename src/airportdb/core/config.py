"""Configuration loader for YAML files.

This module provides configuration loading with support for nested access
and defaults, plus the typed settings object the importer runs from.

Typical usage example:
    from airportdb.core.config import ConfigLoader, ImportSettings

    config = ConfigLoader.load("config/importer.yaml")
    settings = ImportSettings.from_config(config)
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from airportdb.core.resource_path import get_data_path, get_resource_path

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_FILE = "airports.sqlite"
DEFAULT_DATABASE_PATH = f"data/{DEFAULT_DATABASE_FILE}"
DEFAULT_SOURCE_DIR = "tmp"
DEFAULT_SOURCE_FILES = {
    "countries": "countries.csv",
    "airports": "airports.csv",
    "runways": "runways.csv",
    "frequencies": "airport-frequencies.csv",
}


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Examples:
        >>> config = ConfigLoader.load("config/importer.yaml")
        >>> source_dir = config.get("sources.dir", default="tmp")
    """

    def __init__(self, data: dict[str, Any]) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
        """
        self._data = data

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If file cannot be loaded or is not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key, e.g. "sources.files.airports".
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        value = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value


@dataclass(frozen=True)
class ImportSettings:
    """Resolved locations for one import run.

    Attributes:
        database_path: Destination SQLite file
        source_dir: Directory holding the CSV extracts
        countries_file: Countries file name inside source_dir
        airports_file: Airports file name inside source_dir
        runways_file: Runways file name inside source_dir
        frequencies_file: Frequencies file name inside source_dir
    """

    database_path: Path
    source_dir: Path
    countries_file: str = DEFAULT_SOURCE_FILES["countries"]
    airports_file: str = DEFAULT_SOURCE_FILES["airports"]
    runways_file: str = DEFAULT_SOURCE_FILES["runways"]
    frequencies_file: str = DEFAULT_SOURCE_FILES["frequencies"]

    @classmethod
    def defaults(cls) -> "ImportSettings":
        """Settings using the conventional project-relative locations."""
        return cls(
            database_path=get_data_path(DEFAULT_DATABASE_FILE),
            source_dir=get_resource_path(DEFAULT_SOURCE_DIR),
        )

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "ImportSettings":
        """Build settings from a loaded configuration.

        Missing keys fall back to the conventional defaults. Relative paths
        resolve against the project root.

        Raises:
            ConfigError: If a configured value has the wrong type.
        """
        files = config.get("sources.files", default={})
        if not isinstance(files, dict):
            raise ConfigError("sources.files must be a mapping of source name to file name")

        unknown = set(files) - set(DEFAULT_SOURCE_FILES)
        if unknown:
            raise ConfigError(f"Unknown source names in sources.files: {sorted(unknown)}")

        names = {**DEFAULT_SOURCE_FILES, **files}
        return cls(
            database_path=get_resource_path(config.get("database.path", DEFAULT_DATABASE_PATH)),
            source_dir=get_resource_path(config.get("sources.dir", DEFAULT_SOURCE_DIR)),
            countries_file=str(names["countries"]),
            airports_file=str(names["airports"]),
            runways_file=str(names["runways"]),
            frequencies_file=str(names["frequencies"]),
        )

    def with_overrides(
        self, database_path: str | Path | None = None, source_dir: str | Path | None = None
    ) -> "ImportSettings":
        """Return a copy with command-line overrides applied."""
        settings = self
        if database_path is not None:
            settings = replace(settings, database_path=Path(database_path))
        if source_dir is not None:
            settings = replace(settings, source_dir=Path(source_dir))
        return settings

    @property
    def countries_path(self) -> Path:
        return self.source_dir / self.countries_file

    @property
    def airports_path(self) -> Path:
        return self.source_dir / self.airports_file

    @property
    def runways_path(self) -> Path:
        return self.source_dir / self.runways_file

    @property
    def frequencies_path(self) -> Path:
        return self.source_dir / self.frequencies_file

    def source_paths(self) -> list[Path]:
        """All source files, in the order the pipeline reads them."""
        return [self.countries_path, self.airports_path, self.runways_path, self.frequencies_path]
