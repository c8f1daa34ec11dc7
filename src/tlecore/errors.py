"""Exception hierarchy for TLE decoding.

Every error raised while decoding a record derives from :class:`TLEError`,
which carries three things:

* ``message`` — a human-readable description of what went wrong.
* ``data`` — the offending payload (a raw substring, a full line, or the
  whole record) so the failure can be diagnosed without re-running the parse.
* ``context`` — an optional short tag naming where the check happened
  (e.g. ``"line 2: inclination"``).

``TLEError`` subclasses :class:`ValueError` so callers that only care about
"bad input" can keep catching ``ValueError``.
"""

from __future__ import annotations

from typing import Any, Optional


class TLEError(ValueError):
    """Base class for every TLE decoding failure."""

    def __init__(
        self,
        message: str,
        data: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.data = data
        self.context = context

    def __str__(self) -> str:
        if self.context:
            return f"{self.context}: {self.message}"
        return self.message


class StructuralError(TLEError):
    """Wrong total length, missing line break, or wrong line count."""


class CharacterSetError(TLEError):
    """A character outside the TLE alphabet is present."""


class FieldConversionError(TLEError):
    """A field's raw substring could not be decoded.

    Attributes:
        line: Line number (1 or 2) the field belongs to.
        field_name: Name of the field in the layout table.
        offset: 0-based start offset of the field within its line.
        length: Field width in characters.
        raw: The raw substring that failed to decode.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int,
        field_name: str,
        offset: int,
        length: int,
        raw: str,
        data: Any = None,
    ) -> None:
        super().__init__(message, data=data, context=f"line {line}: {field_name}")
        self.line = line
        self.field_name = field_name
        self.offset = offset
        self.length = length
        self.raw = raw


class ChecksumError(TLEError):
    """Computed checksum disagrees with the trailing checksum digit."""

    def __init__(self, message: str, *, line: int, computed: int, parsed: int, data: Any = None) -> None:
        super().__init__(message, data=data, context=f"line {line}: checksum")
        self.line = line
        self.computed = computed
        self.parsed = parsed


class DomainRangeError(TLEError):
    """A physical line-2 field lies outside its inclusive valid range."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str,
        value: float,
        bounds: tuple[float, float],
        data: Any = None,
    ) -> None:
        super().__init__(message, data=data, context=f"line 2: {field_name}")
        self.field_name = field_name
        self.value = value
        self.bounds = bounds


class ConsistencyError(TLEError):
    """Line markers, classification, or satellite numbers are inconsistent."""


class DecodeError(ValueError):
    """Raised by a scalar decoder when its input is malformed.

    Only the field layout loop should see this; it is re-raised there as a
    :class:`FieldConversionError` with the line and offset attached.
    """
