"""tlecore — Two-Line Element decoding and validation.

Decode standard NORAD Two-Line Element (TLE) records into immutable,
validated structures, and compute Greenwich Mean Sidereal Time for UTC
instants.

Author:
    Kyle Hughes (@astrohughes) — kyle.evan.hughes@gmail.com

Modules:
    tle_parser:  Record types and the all-or-nothing parse.
    fields:      Fixed-column layout tables and scalar decoders.
    validation:  Structural, checksum, domain and cross-line checks.
    errors:      Exception hierarchy.
    config:      Validation limits.
    sidereal:    Greenwich Mean Sidereal Time.
    cli:         Command-line interface.

Example:
    >>> from tlecore import parse_tle
    >>>
    >>> tle = parse_tle(open("iss.tle").read().rstrip("\\n"))
    >>> tle.line_2.inclination
    51.6405
"""

from .config import DEFAULT_LIMITS, ElementLimits
from .errors import (
    CharacterSetError,
    ChecksumError,
    ConsistencyError,
    DomainRangeError,
    FieldConversionError,
    StructuralError,
    TLEError,
)
from .sidereal import gmst_radians, gmst_seconds, julian_date
from .tle_parser import TLE, TLELine1, TLELine2, parse_tle
from .validation import compute_checksum

__version__ = "0.1.0"
__author__ = "Kyle Hughes"
__email__ = "kyle.evan.hughes@gmail.com"

__all__ = [
    "TLE",
    "TLELine1",
    "TLELine2",
    "parse_tle",
    "compute_checksum",
    "ElementLimits",
    "DEFAULT_LIMITS",
    "TLEError",
    "StructuralError",
    "CharacterSetError",
    "FieldConversionError",
    "ChecksumError",
    "DomainRangeError",
    "ConsistencyError",
    "gmst_seconds",
    "gmst_radians",
    "julian_date",
]
