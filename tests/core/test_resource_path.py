"""Tests for project-relative resource paths."""

from pathlib import Path

from airportdb.core.resource_path import (
    get_config_path,
    get_data_path,
    get_project_root,
    get_resource_path,
)


class TestResourcePath:
    """Tests for resource path helpers."""

    def test_project_root_holds_sources(self) -> None:
        assert (get_project_root() / "src" / "airportdb").is_dir()

    def test_relative_paths_resolve_against_root(self) -> None:
        expected = get_project_root() / "data" / "airports.sqlite"

        assert get_resource_path("data/airports.sqlite") == expected
        assert get_data_path("airports.sqlite") == get_resource_path("data/airports.sqlite")

    def test_absolute_path_unchanged(self, tmp_path: Path) -> None:
        assert get_resource_path(tmp_path / "db.sqlite") == tmp_path / "db.sqlite"

    def test_shipped_config_files_exist(self) -> None:
        assert get_config_path("importer.yaml").is_file()
        assert get_config_path("logging.yaml").is_file()
