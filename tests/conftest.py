"""Pytest configuration and fixtures for all tests."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from airportdb.core.config import ImportSettings
from airportdb.core.logging_system import shutdown_logging
from airportdb.store.database import AirportStore

COUNTRIES_CSV = """\
"id","code","name","continent","wikipedia_link","keywords"
302755,"US","United States","NA","https://en.wikipedia.org/wiki/United_States","America"
302672,"GB","United Kingdom","EU","https://en.wikipedia.org/wiki/United_Kingdom","Great Britain"
302618,"","Nowhere","AN","",""
"""

AIRPORTS_CSV = """\
"id","ident","type","name","latitude_deg","longitude_deg","elevation_ft","continent","iso_country","iso_region","municipality","scheduled_service","icao_code","iata_code","gps_code","local_code","home_link","wikipedia_link","keywords"
3658,"KPAO","small_airport","Palo Alto Airport",37.461101532,-122.114997864,7,"NA","US","US-CA","Palo Alto","no","KPAO","PAO","KPAO","PAO","","",""
3878,"KSFO","large_airport","San Francisco International Airport",37.61899948120117,-122.375,13,"NA","US","US-CA","San Francisco","yes","KSFO","SFO","KSFO","SFO","","",""
2434,"EGLL","large_airport","London Heathrow Airport",51.4706,-0.461941,83,"EU","GB","GB-ENG","London, Hillingdon","yes","EGLL","LHR","EGLL","","","",""
9001,"XBAD","small_airport","Missing Latitude Field",,-100.5,1200,"NA","US","US-KS","Nowhere","no","","","","","","",""
9002,"ZZSL","seaplane_base","Sea Level Base",0,0,0,"AF","ZZ","ZZ-U-A","","no","","","","","","",""
"""

RUNWAYS_CSV = """\
"id","airport_ref","airport_ident","length_ft","width_ft","surface","lighted","closed","le_ident","le_latitude_deg","le_longitude_deg","le_elevation_ft","le_heading_degT","le_displaced_threshold_ft","he_ident","he_latitude_deg","he_longitude_deg","he_elevation_ft","he_heading_degT","he_displaced_threshold_ft"
235268,3658,"KPAO",2443,70,"ASPH",1,0,"13",37.4649,-122.1206,5,140,,"31",37.4585,-122.1103,6,320,
235269,3878,"KSFO",11870,200,"ASPH-CONC",1,0,"10L",37.6287,-122.3933,10,118,,"28R",37.6135,-122.3571,10,298,300
235270,3878,"KSFO",7650,200,"CONC",1,0,"01L",37.6073,-122.3823,10,13.7,493,"19R",37.6278,-122.3670,10,,
235271,3878,"KSFO",9000,150,"ASP",1,1,"01R",37.6062,-122.3810,10,13.7,,"19L",37.6264,-122.3670,10,193.7,
235272,9001,"XBAD",3000,50,"TURF",0,0,"09",38.1,-100.5,1200,90,,"27",38.1,-100.49,1200,270,
235273,3658,"KPAO",,50,"ASPH",0,0,"06",37.46,-122.11,7,60,,"24",37.46,-122.10,7,240,
235274,2434,"EGLL",12799,164,"asph",1,0,"09L",,,,89.6,,"27R",,,,269.7,
"""

FREQUENCIES_CSV = """\
"id","airport_ref","airport_ident","type","description","frequency_mhz"
1,3878,"KSFO","TWR","SFO Tower",120.5
2,3878,"KSFO","GND","SFO Ground",121.8
3,3878,"KSFO","ATIS","SFO ATIS",118.85
4,3878,"KSFO","TWR","SFO Tower secondary",120.2
5,3658,"KPAO","tower","Palo Alto Tower",118.6
6,3658,"KPAO","CTAF","Palo Alto CTAF",118.6
7,3658,"KPAO","FSS","Oakland Radio",122.55
8,9001,"XBAD","TWR","Nowhere Tower",119.1
9,2434,"EGLL","","Heathrow Director",119.725
10,2434,"EGLL","ATIS","Heathrow ATIS",128.075
"""

SOURCES = {
    "countries.csv": COUNTRIES_CSV,
    "airports.csv": AIRPORTS_CSV,
    "runways.csv": RUNWAYS_CSV,
    "airport-frequencies.csv": FREQUENCIES_CSV,
}


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep log files of every test inside its temporary directory."""
    monkeypatch.setattr(
        "airportdb.core.logging_system.get_platform_log_dir", lambda: tmp_path / "logs"
    )
    yield
    shutdown_logging()


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing a CSV file into the test's source directory."""
    source_dir = tmp_path / "sources"
    source_dir.mkdir(exist_ok=True)

    def _write(filename: str, content: str) -> Path:
        path = source_dir / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def source_dir(write_source: Callable[[str, str], Path]) -> Path:
    """Source directory holding all four sample extracts."""
    for filename, content in SOURCES.items():
        path = write_source(filename, content)
    return path.parent


@pytest.fixture
def settings(source_dir: Path, tmp_path: Path) -> ImportSettings:
    """Settings pointing at the sample extracts and a fresh database file."""
    return ImportSettings(database_path=tmp_path / "out" / "airports.sqlite", source_dir=source_dir)


@pytest.fixture
def store() -> Iterator[AirportStore]:
    """Empty in-memory store."""
    with AirportStore.open(":memory:") as store:
        yield store
