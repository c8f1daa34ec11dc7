"""TLE record decoding and validation.

Parses a standard NORAD Two-Line Element set into an immutable, fully
validated :class:`TLE`. Decoding is all-or-nothing: :func:`parse_tle`
either returns a complete record or raises the first
:class:`~tlecore.errors.TLEError` it encounters.

Checks run in a fixed order:

    1. Structure — 139 characters, line break at offset 69, two lines.
    2. Character set — ``A``-``V``, ``+``, ``-``, space, digits, ``.``.
    3. Field decoding — line 1 then line 2, driven by the layout tables.
    4. Line markers and classification.
    5. Checksums — line 1 then line 2.
    6. Line-2 domain ranges.
    7. Satellite number agreement between the lines.

References:
    - Kelso, T.S. "CelesTrak TLE Format Documentation"
      https://celestrak.org/columns/v04n03/
    - Vallado, D. (2013). Fundamentals of Astrodynamics and Applications.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone

from . import validation
from .config import DEFAULT_LIMITS, ElementLimits
from .errors import TLEError
from .fields import LINE_1_FIELDS, LINE_2_FIELDS, decode_line

logger = logging.getLogger(__name__)

# ── Physical constants (WGS84) ──

MU_EARTH = 398600.4418
"""Earth gravitational parameter (km³/s²)."""

R_EARTH = 6378.137
"""Earth equatorial radius (km)."""

SOLAR_DAY = 86400.0
"""Seconds in a solar day."""

TWO_PI = 2.0 * math.pi
"""2π constant."""


@dataclass(frozen=True, slots=True)
class TLELine1:
    """Line 1 of a TLE: identity, epoch and drag terms.

    Attributes:
        line_number: Line marker, always 1.
        satellite_number: NORAD catalog number.
        classification: Security classification, always ``U``.
        launch_year: International designator, last two digits of launch year.
        launch_number: International designator, launch number of the year.
        launch_piece: International designator piece, verbatim (e.g. ``"A  "``).
        epoch_year: Last two digits of the epoch year.
        epoch_day: Fractional day of year at epoch.
        mean_motion_dot: First derivative of mean motion / 2 (rev/day²).
        mean_motion_ddot: Second derivative of mean motion / 6 (rev/day³).
        bstar_drag: B* drag term (1/Earth radii).
        ephemeris_type: Ephemeris type (usually 0).
        element_number: Element set number.
        checksum: Trailing modulo-10 checksum digit.
    """

    line_number: int
    satellite_number: int
    classification: str
    launch_year: int
    launch_number: int
    launch_piece: str
    epoch_year: int
    epoch_day: float
    mean_motion_dot: float
    mean_motion_ddot: float
    bstar_drag: float
    ephemeris_type: int
    element_number: int
    checksum: int


@dataclass(frozen=True, slots=True)
class TLELine2:
    """Line 2 of a TLE: orbital geometry.

    Attributes:
        line_number: Line marker, always 2.
        satellite_number: NORAD catalog number, equal to line 1's.
        inclination: Orbital inclination (degrees).
        raan: Right ascension of ascending node (degrees).
        eccentricity: Orbital eccentricity (dimensionless).
        arg_perigee: Argument of perigee (degrees).
        mean_anomaly: Mean anomaly (degrees).
        mean_motion: Mean motion (revolutions per day).
        rev_at_epoch: Revolution number at epoch.
        checksum: Trailing modulo-10 checksum digit.
    """

    line_number: int
    satellite_number: int
    inclination: float
    raan: float
    eccentricity: float
    arg_perigee: float
    mean_anomaly: float
    mean_motion: float
    rev_at_epoch: int
    checksum: int


@dataclass(frozen=True, slots=True)
class TLE:
    """A validated Two-Line Element set.

    Instances come from :func:`parse_tle` (or :meth:`TLE.from_lines`); both
    lines have passed every structural, checksum, domain and consistency
    check by the time one exists.
    """

    line_1: TLELine1
    line_2: TLELine2

    @staticmethod
    def parse(text: str, limits: ElementLimits = DEFAULT_LIMITS) -> TLE:
        """Alias for :func:`parse_tle`."""
        return parse_tle(text, limits)

    @staticmethod
    def from_lines(line1: str, line2: str, limits: ElementLimits = DEFAULT_LIMITS) -> TLE:
        """Parse a TLE given as two separate 69-character lines."""
        return parse_tle(f"{line1}\n{line2}", limits)

    # ── Convenience views ──

    @property
    def satellite_number(self) -> int:
        return self.line_1.satellite_number

    @property
    def classification(self) -> str:
        return self.line_1.classification

    @property
    def intl_designator(self) -> str:
        """International designator, e.g. ``98067A``."""
        l1 = self.line_1
        return f"{l1.launch_year:02d}{l1.launch_number:03d}{l1.launch_piece}".rstrip()

    @property
    def full_epoch_year(self) -> int:
        """Four-digit epoch year (two-digit years >= 57 are 19xx)."""
        year = self.line_1.epoch_year
        return 1900 + year if year >= 57 else 2000 + year

    @property
    def epoch_dt(self) -> datetime:
        """Epoch as a timezone-aware UTC datetime."""
        return _epoch_to_datetime(self.full_epoch_year, self.line_1.epoch_day)

    @property
    def period(self) -> float:
        """Orbital period (seconds)."""
        return SOLAR_DAY / self.line_2.mean_motion

    @property
    def semi_major_axis(self) -> float:
        """Semi-major axis derived from mean motion (km)."""
        n_rad_s = self.line_2.mean_motion * TWO_PI / SOLAR_DAY
        return (MU_EARTH / n_rad_s**2) ** (1.0 / 3.0)

    @property
    def altitude(self) -> float:
        """Semi-major axis minus Earth's equatorial radius (km)."""
        return self.semi_major_axis - R_EARTH

    def to_dict(self) -> dict:
        """Convert to a flat dictionary of every decoded field.

        Line markers and checksums are prefixed ``line_1_`` / ``line_2_``;
        the shared satellite number appears once.

        Returns:
            Dictionary with all TLE fields plus the epoch datetime.
        """
        l1 = asdict(self.line_1)
        l2 = asdict(self.line_2)
        out = {
            "satellite_number": self.satellite_number,
            "intl_designator": self.intl_designator,
            "epoch": self.epoch_dt,
        }
        for prefix, fields in (("line_1", l1), ("line_2", l2)):
            for key in ("line_number", "checksum"):
                out[f"{prefix}_{key}"] = fields.pop(key)
            fields.pop("satellite_number")
            out.update(fields)
        return out

    def __str__(self) -> str:
        l1, l2 = self.line_1, self.line_2
        return (
            f"{{line_number={l1.line_number}, satellite_number={l1.satellite_number}, "
            f"classification={l1.classification}, launch_year={l1.launch_year}, "
            f'launch_number={l1.launch_number}, launch_piece="{l1.launch_piece}", '
            f"epoch_year={l1.epoch_year}, epoch_day={l1.epoch_day}, "
            f"mean_motion_dot={l1.mean_motion_dot}, mean_motion_ddot={l1.mean_motion_ddot}, "
            f"bstar_drag={l1.bstar_drag}, ephemeris_type={l1.ephemeris_type}, "
            f"element_number={l1.element_number}, checksum={l1.checksum}}}, "
            f"{{line_number={l2.line_number}, satellite_number={l2.satellite_number}, "
            f"inclination={l2.inclination}°, raan={l2.raan}°, "
            f"eccentricity={l2.eccentricity}, arg_perigee={l2.arg_perigee}°, "
            f"mean_anomaly={l2.mean_anomaly}°, mean_motion={l2.mean_motion}, "
            f"rev_at_epoch={l2.rev_at_epoch}, checksum={l2.checksum}}}"
        )


def parse_tle(text: str, limits: ElementLimits = DEFAULT_LIMITS) -> TLE:
    """Decode and validate one TLE record.

    Args:
        text: Exactly 139 characters: line 1, ``"\\n"``, line 2.
        limits: Domain bounds and accepted classifications.

    Returns:
        A fully validated TLE.

    Raises:
        StructuralError: Wrong length, missing line break, or wrong line count.
        CharacterSetError: A character outside the TLE alphabet.
        FieldConversionError: A field that cannot be decoded.
        ConsistencyError: Wrong line marker, classification, or mismatched
            satellite numbers.
        ChecksumError: A checksum digit that disagrees with its line.
        DomainRangeError: A line-2 angle or eccentricity out of range.
    """
    try:
        tle = _assemble(text, limits)
    except TLEError as exc:
        logger.debug("Rejected TLE (%s): %s", type(exc).__name__, exc)
        raise

    logger.debug(
        "Parsed TLE for satellite %d, epoch %02d%012.8f",
        tle.satellite_number,
        tle.line_1.epoch_year,
        tle.line_1.epoch_day,
    )
    return tle


def _assemble(text: str, limits: ElementLimits) -> TLE:
    line_1, line_2 = validation.split_record(text)
    validation.check_characters(text)

    values_1 = decode_line(line_1, 1, LINE_1_FIELDS)
    values_2 = decode_line(line_2, 2, LINE_2_FIELDS)

    validation.check_line_markers(values_1, values_2, (line_1, line_2))
    validation.check_classification(values_1, line_1, limits)

    validation.verify_checksum(line_1, 1, values_1["checksum"])
    validation.verify_checksum(line_2, 2, values_2["checksum"])

    validation.check_domains(values_2, line_2, limits)
    validation.check_satellite_numbers(values_1, values_2, text)

    return TLE(line_1=TLELine1(**values_1), line_2=TLELine2(**values_2))


# ── Private helpers ──


def _epoch_to_datetime(year: int, day_of_year: float) -> datetime:
    """Convert a TLE epoch (year + fractional day-of-year) to a datetime.

    Args:
        year: Full 4-digit year.
        day_of_year: Fractional day of year (1.0 = midnight Jan 1).

    Returns:
        Corresponding UTC datetime.
    """
    jan1 = datetime(year, 1, 1, tzinfo=timezone.utc)
    return jan1 + timedelta(days=day_of_year - 1.0)
