"""Structural, checksum, domain and cross-line checks for TLE records."""

from __future__ import annotations

import logging
import string

from .config import DEFAULT_LIMITS, ElementLimits
from .errors import (
    CharacterSetError,
    ChecksumError,
    ConsistencyError,
    DomainRangeError,
    StructuralError,
)
from .fields import TLE_LINE_LENGTH

logger = logging.getLogger(__name__)

RECORD_LENGTH = 2 * TLE_LINE_LENGTH + 1
"""Two 69-character lines plus the separating line break."""

VALID_CHARACTERS = frozenset("ABCDEFGHIJKLMNOPQRSTUV" + "+- " + string.digits + ".\n")
"""Every character that may appear in a TLE record."""


def split_record(text: str) -> tuple[str, str]:
    """Check the record's shape and split it into its two lines.

    Raises:
        StructuralError: If the length is not 139, offset 69 is not a line
            break, or the text does not split into exactly two 69-character
            lines.
    """
    if len(text) != RECORD_LENGTH:
        raise StructuralError(
            f"TLE has invalid size, size={len(text)}, expected={RECORD_LENGTH}",
            data=text,
            context="record",
        )
    if text[TLE_LINE_LENGTH] != "\n":
        raise StructuralError(
            f"TLE invalid, expected line break at position={TLE_LINE_LENGTH}, "
            f"found={text[TLE_LINE_LENGTH]!r}",
            data=text,
            context="record",
        )

    lines = text.split("\n")
    if len(lines) != 2 or any(len(line) != TLE_LINE_LENGTH for line in lines):
        raise StructuralError(
            f"TLE must contain exactly two {TLE_LINE_LENGTH}-character lines, "
            f"found {len(lines)} line(s)",
            data=text,
            context="record",
        )
    return lines[0], lines[1]


def check_characters(text: str) -> None:
    """Reject text containing characters outside the TLE alphabet.

    Raises:
        CharacterSetError: Naming the first offending character and its offset.
    """
    for offset, ch in enumerate(text):
        if ch not in VALID_CHARACTERS:
            raise CharacterSetError(
                f"TLE contains invalid char {ch!r} at offset={offset}",
                data=text,
                context="record",
            )


def compute_checksum(line: str) -> int:
    """Compute the modulo-10 checksum of a TLE line.

    Digits count as their value, minus signs count as 1, and letters,
    blanks, periods and plus signs count as 0. The last character (the
    checksum digit itself) is excluded.

    Args:
        line: A full TLE line including its trailing checksum digit.

    Returns:
        The checksum digit (0-9).
    """
    total = 0
    for ch in line[:-1]:
        if ch in string.digits:
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


def verify_checksum(line: str, line_number: int, parsed: int) -> None:
    """Compare a line's computed checksum with its decoded checksum digit.

    Raises:
        ChecksumError: On mismatch.
    """
    computed = compute_checksum(line)
    if computed != parsed:
        raise ChecksumError(
            f"TLE line {line_number} contains invalid checksum, "
            f"parsed={parsed}, computed={computed}",
            line=line_number,
            computed=computed,
            parsed=parsed,
            data=line,
        )


def check_domains(values: dict, line: str, limits: ElementLimits = DEFAULT_LIMITS) -> None:
    """Range-check the physical line-2 fields (inclusive bounds)."""
    for name, (lower, upper) in limits.bounds().items():
        value = values[name]
        if not lower <= value <= upper:
            raise DomainRangeError(
                f"TLE line 2 contains invalid {name.replace('_', ' ')} "
                f"value={value}, lower_bound={lower}, upper_bound={upper}",
                field_name=name,
                value=value,
                bounds=(lower, upper),
                data=line,
            )


def check_line_markers(line_1: dict, line_2: dict, lines: tuple[str, str]) -> None:
    """Each line must begin with its own line number."""
    for expected, values, line in ((1, line_1, lines[0]), (2, line_2, lines[1])):
        if values["line_number"] != expected:
            raise ConsistencyError(
                f"TLE line {expected} contains invalid line number, "
                f"value={values['line_number']}, expected={expected}",
                data=line,
                context=f"line {expected}: line_number",
            )


def check_classification(line_1: dict, line: str, limits: ElementLimits = DEFAULT_LIMITS) -> None:
    """Only unclassified element sets are distributed publicly."""
    classification = line_1["classification"]
    if classification not in limits.classifications:
        allowed = ", ".join(sorted(limits.classifications))
        raise ConsistencyError(
            f"TLE line 1 contains invalid classification, value={classification!r}, "
            f"expected one of: {allowed}",
            data=line,
            context="line 1: classification",
        )


def check_satellite_numbers(line_1: dict, line_2: dict, text: str) -> None:
    """Both lines must describe the same catalog object."""
    if line_1["satellite_number"] != line_2["satellite_number"]:
        raise ConsistencyError(
            "parsed satellite numbers don't match between TLE lines, "
            f"line_1_value={line_1['satellite_number']}, "
            f"line_2_value={line_2['satellite_number']}",
            data=text,
            context="record",
        )
