"""DDL for the airport store.

fuel_available, infrastructure and operational are reserved for future
data sources and are never written by the importer.
"""

SCHEMA = """
CREATE TABLE IF NOT EXISTS airports (
    icao TEXT PRIMARY KEY,
    iata TEXT,
    faa TEXT,
    local TEXT,
    name TEXT NOT NULL,
    type TEXT NOT NULL,
    type_source TEXT,
    status TEXT,
    is_public_use BOOLEAN,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    elevation_ft INTEGER NOT NULL,
    country TEXT NOT NULL,
    country_code TEXT NOT NULL,
    state TEXT,
    county TEXT,
    city TEXT,
    zip TEXT,
    timezone TEXT,
    magnetic_variation REAL,
    has_tower BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS runways (
    id INTEGER PRIMARY KEY,
    airport_icao TEXT NOT NULL,
    length_ft INTEGER NOT NULL CHECK (length_ft > 0),
    width_ft INTEGER NOT NULL CHECK (width_ft > 0),
    surface TEXT NOT NULL,
    lighted BOOLEAN NOT NULL,
    FOREIGN KEY (airport_icao) REFERENCES airports(icao) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS runway_ends (
    id INTEGER PRIMARY KEY,
    runway_id INTEGER NOT NULL,
    side TEXT NOT NULL CHECK (side IN ('le', 'he')),
    ident TEXT NOT NULL,
    heading_deg_true REAL NOT NULL,
    latitude REAL NOT NULL,
    longitude REAL NOT NULL,
    displaced_threshold_ft INTEGER,
    elevation_ft INTEGER,
    UNIQUE (runway_id, side),
    FOREIGN KEY (runway_id) REFERENCES runways(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS frequencies (
    airport_icao TEXT PRIMARY KEY,
    atis TEXT,
    tower TEXT,
    ground TEXT,
    clearance TEXT,
    unicom TEXT,
    approach TEXT,
    departure TEXT,
    FOREIGN KEY (airport_icao) REFERENCES airports(icao) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS fuel_available (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    airport_icao TEXT NOT NULL,
    fuel_type TEXT NOT NULL,
    UNIQUE (airport_icao, fuel_type),
    FOREIGN KEY (airport_icao) REFERENCES airports(icao) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS infrastructure (
    airport_icao TEXT PRIMARY KEY,
    has_fbo BOOLEAN,
    has_hangars BOOLEAN,
    has_tie_downs BOOLEAN,
    FOREIGN KEY (airport_icao) REFERENCES airports(icao) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS operational (
    airport_icao TEXT PRIMARY KEY,
    airac_cycle TEXT NOT NULL,
    FOREIGN KEY (airport_icao) REFERENCES airports(icao) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_airports_iata ON airports(iata);
CREATE INDEX IF NOT EXISTS idx_airports_country_code ON airports(country_code);
CREATE INDEX IF NOT EXISTS idx_airports_state ON airports(state);
CREATE INDEX IF NOT EXISTS idx_airports_city ON airports(city);
CREATE INDEX IF NOT EXISTS idx_airports_type ON airports(type);
CREATE INDEX IF NOT EXISTS idx_runways_airport ON runways(airport_icao);
CREATE INDEX IF NOT EXISTS idx_runway_ends_runway ON runway_ends(runway_id);
CREATE INDEX IF NOT EXISTS idx_fuel_airport ON fuel_available(airport_icao);
"""

TABLES = (
    "airports",
    "runways",
    "runway_ends",
    "frequencies",
    "fuel_available",
    "infrastructure",
    "operational",
)
