"""Resource path resolution relative to the project root.

Configuration, source extracts and the generated database all live in
well-known directories next to the package sources.

Typical usage:
    from airportdb.core.resource_path import get_config_path, get_data_path

    logging_config = get_config_path("logging.yaml")
    database = get_data_path("airports.sqlite")
"""

from pathlib import Path


def get_project_root() -> Path:
    """Get the project root directory.

    Returns:
        Path to the project root (three levels above src/airportdb/core).
    """
    return Path(__file__).parent.parent.parent.parent


def get_resource_path(relative_path: str | Path) -> Path:
    """Get absolute path to a resource file or directory.

    Absolute paths are returned unchanged.

    Args:
        relative_path: Path relative to the project root.

    Returns:
        Absolute path to the resource.

    Examples:
        >>> str(get_resource_path("config/importer.yaml"))
        '/home/user/dev/airportdb/config/importer.yaml'
    """
    path = Path(relative_path)
    if path.is_absolute():
        return path
    return get_project_root() / path


def get_config_path(config_file: str) -> Path:
    """Get path to a configuration file under config/."""
    return get_resource_path(f"config/{config_file}")


def get_data_path(data_file: str) -> Path:
    """Get path to a file under data/, where the generated database lives."""
    return get_resource_path(f"data/{data_file}")

