"""Logging setup for the importer and its command-line entry point.

The standard logging package is configured from config/logging.yaml: a
console handler, one combined log file per run kept in a platform-specific
directory, and optional per-logger level overrides under "components".

Log file locations:
    - macOS: ~/Library/Logs/AirportDB/airportdb.log
    - Linux and other Unixes: ~/.airportdb/logs/airportdb.log
    - Windows: %AppData%/AirportDB/Logs/airportdb.log

Starting a run moves the previous log to airportdb.log.1, shifting older
runs up and discarding those beyond combined_log.backup_count.

Typical usage example:
    from airportdb.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    log = get_logger("airportdb.importer.runways")
    log.info("Imported %d runways", count)
"""

import copy
import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "date_format": "%Y-%m-%d %H:%M:%S",
    "log_dir": "logs",
    "combined_log": {"enabled": True, "filename": "airportdb.log", "backup_count": 5},
    "console": {"enabled": True, "level": "INFO"},
    "components": {},
}

_config: dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
_loggers: dict[str, logging.Logger] = {}
_initialized = False


class LoggingError(Exception):
    """Raised when the logging configuration cannot be applied."""


def get_platform_log_dir() -> Path:
    """Directory where the current platform keeps application logs."""
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "AirportDB"
    if system == "Windows":
        appdata = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "AirportDB" / "Logs"
    return Path.home() / ".airportdb" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "airportdb.log", keep_count: int = 5) -> None:
    """Shift the logs of earlier runs before a new run writes its own.

    ``name`` becomes ``name.1``, ``name.1`` becomes ``name.2`` and so on;
    ``name.<keep_count>`` is discarded. Does nothing without a current log.
    """
    current = log_dir / log_filename
    if not current.exists():
        return

    generations = [current] + [log_dir / f"{log_filename}.{n}" for n in range(1, keep_count + 1)]
    generations[-1].unlink(missing_ok=True)
    for index in range(keep_count - 1, -1, -1):
        if generations[index].exists():
            generations[index].rename(generations[index + 1])


def initialize_logging(
    config_path: str | Path | None = None, use_platform_dir: bool = True
) -> None:
    """Configure the root logger for one run.

    Args:
        config_path: Logging YAML; sections it leaves out keep the defaults.
            None uses the defaults alone.
        use_platform_dir: Write logs to get_platform_log_dir() instead of
            the configured log_dir.

    Raises:
        LoggingError: If the YAML cannot be read or the log file cannot be
            created.
    """
    global _config, _initialized

    config = _load_config(config_path)
    if use_platform_dir:
        config["log_dir"] = str(get_platform_log_dir())

    log_dir = Path(config["log_dir"])
    combined = config["combined_log"]
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        rotate_logs(log_dir, combined["filename"], combined["backup_count"])
        _install_handlers(config, log_dir)
    except OSError as e:
        raise LoggingError(f"Cannot write logs to {log_dir}: {e}") from e

    _config = config
    _loggers.clear()
    _initialized = True


def _load_config(config_path: str | Path | None) -> dict[str, Any]:
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return config

    path = Path(config_path)
    if not path.exists():
        raise LoggingError(f"Logging config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise LoggingError(f"Failed to load logging config: {e}") from e
    if not isinstance(loaded, dict):
        raise LoggingError(f"Logging config root must be a mapping: {path}")

    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value
    return config


def _level(name: str) -> int:
    level = getattr(logging, str(name).upper(), None)
    if not isinstance(level, int):
        raise LoggingError(f"Unknown log level: {name}")
    return level


def _install_handlers(config: dict[str, Any], log_dir: Path) -> None:
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = MillisecondFormatter(config["format"], config["date_format"])

    console = config["console"]
    if console.get("enabled", True):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(_level(console.get("level", "INFO")))
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    # Plain FileHandler: rotation happens per run, not by size
    combined = config["combined_log"]
    if combined.get("enabled", True):
        file_handler = logging.FileHandler(
            log_dir / combined["filename"], mode="w", encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def set_console_level(level: str) -> None:
    """Change the console threshold after initialization; the log file keeps DEBUG.

    Raises:
        LoggingError: If the level name is unknown.
    """
    numeric = _level(level)
    for handler in logging.getLogger().handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(numeric)


class MillisecondFormatter(logging.Formatter):
    """Renders asctime as the configured date format plus ".mmm"."""

    def formatTime(self, record, datefmt=None):
        stamp = time.strftime(datefmt or self.default_time_format, self.converter(record.created))
        return f"{stamp}.{int(record.msecs):03d}"


def get_logger(name: str) -> logging.Logger:
    """Logger for a component, with its "components" override applied.

    Initializes logging with the defaults when nothing has done so yet.

    Examples:
        >>> log = get_logger("airportdb.importer.runways")
        >>> log.info("Imported %d runways", count)
    """
    if not _initialized:
        initialize_logging()

    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        override = _config["components"].get(name) or {}
        if "level" in override:
            logger.setLevel(_level(override["level"]))
        logger.disabled = not override.get("enabled", True)
        _loggers[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush and close every handler; the next get_logger re-initializes."""
    global _initialized

    logging.shutdown()
    _loggers.clear()
    _initialized = False


class LoggerMixin:
    """Gives a class a named logger as self._log.

    Examples:
        >>> class RunwayImporter(LoggerMixin):
        ...     def __init__(self):
        ...         self.attach_logger("airportdb.importer.runways")
    """

    def attach_logger(self, name: str) -> None:
        self._log = get_logger(name)

    def log_debug(self, message: str, *args: Any) -> None:
        if log := getattr(self, "_log", None):
            log.debug(message, *args)

    def log_info(self, message: str, *args: Any) -> None:
        if log := getattr(self, "_log", None):
            log.info(message, *args)

    def log_warning(self, message: str, *args: Any) -> None:
        if log := getattr(self, "_log", None):
            log.warning(message, *args)
