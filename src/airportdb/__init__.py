"""airportdb - airport reference data packaged as a SQLite database."""

__version__ = "0.1.0"
