"""Command-line entry point for the airport database importer.

Usage:
    airportdb-import [DATABASE] [--source-dir DIR] [--config FILE] [--log-level LEVEL]
"""

import argparse
import sys

from airportdb.core.config import ConfigError, ConfigLoader, ImportSettings
from airportdb.core.logging_system import (
    LoggingError,
    get_logger,
    initialize_logging,
    set_console_level,
    shutdown_logging,
)
from airportdb.core.resource_path import get_config_path
from airportdb.importer.csv_parser import SourceFileError
from airportdb.importer.pipeline import ImportPipeline
from airportdb.store.database import StoreError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list; defaults to sys.argv[1:].

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Import airport, runway and frequency CSV extracts into SQLite"
    )

    parser.add_argument(
        "database",
        nargs="?",
        help="Destination database file (default: data/airports.sqlite)",
    )

    parser.add_argument(
        "--source-dir",
        type=str,
        help="Directory containing the CSV extracts (default: tmp/)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Importer configuration YAML (default: config/importer.yaml if present)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )

    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> ImportSettings:
    """Resolve settings from the config file and command-line overrides.

    Raises:
        ConfigError: If an explicitly given config file cannot be loaded.
    """
    if args.config:
        settings = ImportSettings.from_config(ConfigLoader.load(args.config))
    elif get_config_path("importer.yaml").exists():
        settings = ImportSettings.from_config(ConfigLoader.load(get_config_path("importer.yaml")))
    else:
        settings = ImportSettings.defaults()

    return settings.with_overrides(database_path=args.database, source_dir=args.source_dir)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 on any fatal error).
    """
    args = parse_args(argv)

    try:
        logging_config = get_config_path("logging.yaml")
        if logging_config.exists():
            initialize_logging(logging_config, use_platform_dir=True)
        else:
            initialize_logging(use_platform_dir=True)
        if args.log_level:
            set_console_level(args.log_level)
    except LoggingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger = get_logger("airportdb.main")
    logger.info("Airport database CSV importer starting")

    try:
        settings = load_settings(args)
        report = ImportPipeline(settings).run()
    except (ConfigError, SourceFileError, StoreError) as e:
        logger.error("Fatal: %s", e)
        shutdown_logging()
        return 1

    print(report.format_summary())
    logger.info("Import complete")
    shutdown_logging()
    return 0


if __name__ == "__main__":
    sys.exit(main())
