"""Fixed-column field layout and scalar decoders for TLE lines.

Each TLE line is 69 characters wide. Rather than walking the line with a
cursor, every field is described once by a :class:`FieldSpec` (name, 0-based
offset, width, decoder) and a single loop, :func:`decode_line`, applies the
table to a line.

Column layout, using the ISS element set as an example::

    1 25544U 98067A   24097.81509284  .00011771  00000-0  21418-3 0  9995
    2 25544  51.6405 309.2692 0004792  43.0163  63.5300 15.49960977447473

References:
    - Kelso, T.S. "CelesTrak TLE Format Documentation"
      https://celestrak.org/columns/v04n03/
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, NamedTuple

from .errors import DecodeError, FieldConversionError

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69
"""Characters per TLE line, including the trailing checksum digit."""

_INTEGER = re.compile(r" *[0-9]+")
_FIXED_POINT = re.compile(r" *[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
_DIGITS = re.compile(r"[0-9]+")


# ── Scalar decoders ──


def decode_integer(raw: str) -> int:
    """Decode a space-padded unsigned integer such as ``"  999"``."""
    if not _INTEGER.fullmatch(raw):
        raise DecodeError(f"expected an integer, found {raw!r}")
    return int(raw)


def decode_fixed_point(raw: str) -> float:
    """Decode a decimal number such as ``" 51.6405"`` or ``"-.00002182"``.

    Leading spaces are padding, so a blank sign position means positive.
    Spellings ``float()`` would otherwise accept (``NAN``, ``INF``,
    exponents, ``_`` separators) are rejected.
    """
    if not _FIXED_POINT.fullmatch(raw):
        raise DecodeError(f"expected a decimal number, found {raw!r}")
    return float(raw)


def decode_assumed_decimal(raw: str) -> float:
    """Decode digits with an implied leading ``0.``, e.g. ``"0004792"`` → 0.0004792.

    Only digits are accepted; a sign in this field is malformed.
    """
    if not _DIGITS.fullmatch(raw):
        raise DecodeError(f"expected digits with an assumed decimal point, found {raw!r}")
    return float(f"0.{raw}")


def decode_exponential(raw: str) -> float:
    """Parse TLE exponential notation into a float.

    The field is laid out as ``SMMMMMsE``: a sign ``S`` (``+``, ``-`` or a
    space meaning positive), mantissa digits with an implied leading ``0.``,
    then an exponent sign ``s`` (``+`` or ``-``) and a single exponent digit
    ``E``. For example ``" 21418-3"`` becomes ``0.21418e-3`` and
    ``"-11606-4"`` becomes ``-0.11606e-4``.

    Args:
        raw: Raw field substring from a TLE line.

    Returns:
        Decoded floating-point value.

    Raises:
        DecodeError: If a sign position holds an unexpected character or the
            mantissa or exponent are not digits.
    """
    if len(raw) < 4:
        raise DecodeError(f"exponential field too short: {raw!r}")

    lead, mantissa, exp_sign, exponent = raw[0], raw[1:-2], raw[-2], raw[-1]

    if lead not in "+- ":
        raise DecodeError(
            f'invalid exponential field, expected "+", "-" or " ", found {lead!r} in {raw!r}'
        )
    if exp_sign not in "+-":
        raise DecodeError(
            f'invalid exponential field, expected "+" or "-", found {exp_sign!r} in {raw!r}'
        )
    if not _DIGITS.fullmatch(mantissa) or not _DIGITS.fullmatch(exponent):
        raise DecodeError(f"invalid exponential field digits in {raw!r}")

    sign = -1.0 if lead == "-" else 1.0
    power = -int(exponent) if exp_sign == "-" else int(exponent)
    return sign * float(f"0.{mantissa}") * 10.0**power


def decode_verbatim(raw: str) -> str:
    """Keep the substring as is, trailing spaces included."""
    return raw


# ── Layout tables ──


class FieldSpec(NamedTuple):
    """One fixed-column field of a TLE line."""

    name: str
    offset: int
    length: int
    decoder: Callable[[str], Any]

    @property
    def end(self) -> int:
        return self.offset + self.length

    def extract(self, line: str) -> str:
        return line[self.offset:self.end]


LINE_1_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("line_number", 0, 1, decode_integer),
    FieldSpec("satellite_number", 2, 5, decode_integer),
    FieldSpec("classification", 7, 1, decode_verbatim),
    FieldSpec("launch_year", 9, 2, decode_integer),
    FieldSpec("launch_number", 11, 3, decode_integer),
    FieldSpec("launch_piece", 14, 3, decode_verbatim),
    FieldSpec("epoch_year", 18, 2, decode_integer),
    FieldSpec("epoch_day", 20, 12, decode_fixed_point),
    FieldSpec("mean_motion_dot", 33, 10, decode_fixed_point),
    FieldSpec("mean_motion_ddot", 44, 8, decode_exponential),
    FieldSpec("bstar_drag", 53, 8, decode_exponential),
    FieldSpec("ephemeris_type", 62, 1, decode_integer),
    FieldSpec("element_number", 64, 4, decode_integer),
    FieldSpec("checksum", 68, 1, decode_integer),
)
"""Line 1: identity, epoch and drag terms."""

LINE_2_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("line_number", 0, 1, decode_integer),
    FieldSpec("satellite_number", 2, 5, decode_integer),
    FieldSpec("inclination", 8, 8, decode_fixed_point),
    FieldSpec("raan", 17, 8, decode_fixed_point),
    FieldSpec("eccentricity", 26, 7, decode_assumed_decimal),
    FieldSpec("arg_perigee", 34, 8, decode_fixed_point),
    FieldSpec("mean_anomaly", 43, 8, decode_fixed_point),
    FieldSpec("mean_motion", 52, 11, decode_fixed_point),
    FieldSpec("rev_at_epoch", 63, 5, decode_integer),
    FieldSpec("checksum", 68, 1, decode_integer),
)
"""Line 2: orbital geometry."""


def decode_line(line: str, line_number: int, layout: tuple[FieldSpec, ...]) -> dict[str, Any]:
    """Apply a layout table to one TLE line.

    Args:
        line: A 69-character TLE line.
        line_number: 1 or 2, used to annotate errors.
        layout: The field table for this line.

    Returns:
        Mapping of field name to decoded value, in layout order.

    Raises:
        FieldConversionError: On the first field that fails to decode.
    """
    values: dict[str, Any] = {}
    for spec in layout:
        raw = spec.extract(line)
        try:
            values[spec.name] = spec.decoder(raw)
        except DecodeError as exc:
            logger.debug("Line %d field %s rejected: %s", line_number, spec.name, exc)
            raise FieldConversionError(
                f"Failed to parse TLE line {line_number} field {spec.name}, "
                f'offset={spec.offset}, length={spec.length}, substr="{raw}" ({exc})',
                line=line_number,
                field_name=spec.name,
                offset=spec.offset,
                length=spec.length,
                raw=raw,
                data=line,
            ) from exc
    return values
