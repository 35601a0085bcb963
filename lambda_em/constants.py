# -*- coding: utf-8 -*-
"""Constants used throughout the lambda_em library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers/strings scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# Encodings
# -----------------------------------------------------------------------------

#: Encoding used for exported reports
REPORT_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Survey Frequencies
# -----------------------------------------------------------------------------

#: Required frequencies (Hz) for a complete station, traversed high-to-low
FREQUENCIES_HZ: tuple[int, ...] = (813, 559, 407, 254, 203, 153, 102)

# -----------------------------------------------------------------------------
# Formula Constants
# -----------------------------------------------------------------------------

#: Millivolts per volt
MILLIVOLTS_PER_VOLT: float = 1000.0

#: Primary field coefficient subtracted from the normalized secondary field
PRIMARY_FIELD_COEFFICIENT: float = 0.00000232

#: Conductivity denominator (mu_0 * pi, rounded)
CONDUCTIVITY_DENOMINATOR: float = 0.0000039478

#: Scale factor bringing conductivity into µS/cm
CONDUCTIVITY_SCALE: float = 100000000.0

#: Factor converting inverse conductivity (µS/cm) into resistivity (Ω·m)
RESISTIVITY_FACTOR: float = 10000.0

#: Skin depth coefficient (503 / 5)
DEPTH_COEFFICIENT: float = 503 / 5

# -----------------------------------------------------------------------------
# Station Numbering
# -----------------------------------------------------------------------------

#: Station numbers reserved per transect (`transcat * 100 + n`)
STATIONS_PER_TRANSECT: int = 100

#: First station offset inside a transect
FIRST_STATION_OFFSET: int = 1

#: Highest valid transect number (exclusive)
MAX_TRANSECT: int = 100

# -----------------------------------------------------------------------------
# Formatting Constants
# -----------------------------------------------------------------------------

#: Decimal precision for latitude / longitude
COORDINATE_PRECISION: int = 6

#: Decimal precision for acquired Tx current and Rx voltage
READING_PRECISION: int = 2

#: Decimal precision for station distance in reports
DISTANCE_PRECISION: int = 2

#: Decimal precision for depth / conductivity / resistivity in reports
DERIVED_PRECISION: int = 3

#: Date format stamped on measurements
DATE_FORMAT: str = "%Y-%m-%d"

#: Time format stamped on measurements
TIME_FORMAT: str = "%H:%M:%S"

# -----------------------------------------------------------------------------
# Report Layout
# -----------------------------------------------------------------------------

#: Fixed column order of the exported measurement table
REPORT_COLUMNS: tuple[str, ...] = (
    "Station",
    "Frequency (Hz)",
    "Latitude",
    "Longitude",
    "Distance (m)",
    "Depth (m)",
    "Tx (A)",
    "Rx (mV)",
    "Conductivity (µS/cm)",
    "Resistivity (Ω·m)",
    "Date",
    "Time",
)

#: Suffix appended to report file names
REPORT_FILENAME_SUFFIX: str = "_data"

# -----------------------------------------------------------------------------
# Persistence / Acquisition Defaults
# -----------------------------------------------------------------------------

#: Key under which the project collection is persisted
DEFAULT_STORE_KEY: str = "results"

#: Default directory of the file-backed key-value store
DEFAULT_STORE_PATH: str = "~/.lambda_em/store"

#: Endpoint exposed by the instrument's access point
DEFAULT_INSTRUMENT_URL: str = "http://192.168.4.1/start"

#: Seconds to wait for a single instrument reading
DEFAULT_INSTRUMENT_TIMEOUT: float = 10.0
