#!/usr/bin/env python3
"""
Unit tests for tlecore TLE decoding: layout tables, scalar decoders,
checksum, and the all-or-nothing record parse.
"""
import dataclasses
from datetime import datetime, timezone

import pytest

from tlecore import (
    TLE,
    CharacterSetError,
    ChecksumError,
    ConsistencyError,
    DomainRangeError,
    ElementLimits,
    FieldConversionError,
    StructuralError,
    TLEError,
    compute_checksum,
    parse_tle,
)
from tlecore.errors import DecodeError
from tlecore.fields import (
    LINE_1_FIELDS,
    LINE_2_FIELDS,
    TLE_LINE_LENGTH,
    decode_assumed_decimal,
    decode_exponential,
    decode_fixed_point,
    decode_integer,
)


ISS_LINE1 = "1 25544U 98067A   24097.81509284  .00011771  00000-0  21418-3 0  9995"
ISS_LINE2 = "2 25544  51.6405 309.2692 0004792  43.0163  63.5300 15.49960977447473"
ISS = f"{ISS_LINE1}\n{ISS_LINE2}"


def _with_checksum(line: str) -> str:
    """Replace the trailing checksum digit with the correct one."""
    return line[:68] + str(compute_checksum(line))


def _replace(line: str, offset: int, text: str) -> str:
    return line[:offset] + text + line[offset + len(text):]


# ═══════════════════════════════════════════════════════════════
# SCALAR DECODERS
# ═══════════════════════════════════════════════════════════════
class TestDecoders:
    @pytest.mark.parametrize("raw, expected", [
        ("1", 1),
        ("25544", 25544),
        (" 999", 999),
        ("067", 67),
    ])
    def test_integer(self, raw, expected):
        assert decode_integer(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "12 ", "1_0", "+5", "-5", "9A", "1.0"])
    def test_integer_rejects(self, raw):
        with pytest.raises(DecodeError):
            decode_integer(raw)

    @pytest.mark.parametrize("raw, expected", [
        (" .00011771", 0.00011771),
        ("-.00002182", -0.00002182),
        ("+.00002182", 0.00002182),
        ("097.81509284", 97.81509284),
        (" 51.6405", 51.6405),
        ("15.49960977", 15.49960977),
    ])
    def test_fixed_point(self, raw, expected):
        assert decode_fixed_point(raw) == pytest.approx(expected, abs=1e-12)

    @pytest.mark.parametrize("raw", ["     NAN", "     INF", "1E5", "1_0.5", "   ", "5.1.2", "- .0001"])
    def test_fixed_point_rejects(self, raw):
        with pytest.raises(DecodeError):
            decode_fixed_point(raw)

    def test_assumed_decimal(self):
        assert decode_assumed_decimal("0004792") == pytest.approx(0.0004792, abs=1e-15)
        assert decode_assumed_decimal("9999999") == pytest.approx(0.9999999, abs=1e-15)

    @pytest.mark.parametrize("raw", ["-004792", " 004792", "00047 2"])
    def test_assumed_decimal_rejects(self, raw):
        with pytest.raises(DecodeError):
            decode_assumed_decimal(raw)

    @pytest.mark.parametrize("raw, expected", [
        (" 00000-0", 0.0),
        ("+00000+0", 0.0),
        (" 21418-3", 2.1418e-4),
        ("-11606-4", -1.1606e-5),
        ("+12345-5", 1.2345e-6),
        (" 10000+1", 1.0),
    ])
    def test_exponential(self, raw, expected):
        assert decode_exponential(raw) == pytest.approx(expected, rel=1e-12, abs=1e-300)

    @pytest.mark.parametrize("raw", [
        "*21418-3",   # bad leading sign
        " 21418*3",   # bad exponent sign
        " 21418 3",   # blank exponent sign
        " 2141A-3",   # letter in mantissa
        " 21418-A",   # letter in exponent
        "-0-",        # too short
    ])
    def test_exponential_rejects(self, raw):
        with pytest.raises(DecodeError):
            decode_exponential(raw)


# ═══════════════════════════════════════════════════════════════
# LAYOUT TABLES
# ═══════════════════════════════════════════════════════════════
class TestLayout:
    @pytest.mark.parametrize("layout", [LINE_1_FIELDS, LINE_2_FIELDS])
    def test_fields_ordered_and_in_bounds(self, layout):
        previous_end = 0
        for spec in layout:
            assert spec.offset >= previous_end
            assert spec.length > 0
            assert spec.end <= TLE_LINE_LENGTH
            previous_end = spec.end
        assert layout[-1].name == "checksum"
        assert (layout[-1].offset, layout[-1].length) == (68, 1)

    def test_field_names_match_record_types(self):
        from tlecore import TLELine1, TLELine2
        assert [s.name for s in LINE_1_FIELDS] == [f.name for f in dataclasses.fields(TLELine1)]
        assert [s.name for s in LINE_2_FIELDS] == [f.name for f in dataclasses.fields(TLELine2)]


# ═══════════════════════════════════════════════════════════════
# CHECKSUM
# ═══════════════════════════════════════════════════════════════
class TestChecksum:
    def test_iss_lines(self):
        assert compute_checksum(ISS_LINE1) == 5
        assert compute_checksum(ISS_LINE2) == 3

    def test_minus_counts_one(self):
        assert compute_checksum("--0") == 2
        assert compute_checksum("-+.A 7") == 1

    def test_last_character_excluded(self):
        assert compute_checksum("9") == 0


# ═══════════════════════════════════════════════════════════════
# RECORD PARSE
# ═══════════════════════════════════════════════════════════════
class TestParse:
    def test_parse_iss(self):
        tle = parse_tle(ISS)
        l1, l2 = tle.line_1, tle.line_2

        assert l1.line_number == 1
        assert l1.satellite_number == 25544
        assert l1.classification == "U"
        assert l1.launch_year == 98
        assert l1.launch_number == 67
        assert l1.launch_piece == "A  "
        assert l1.epoch_year == 24
        assert l1.epoch_day == pytest.approx(97.81509284, abs=1e-10)
        assert l1.mean_motion_dot == pytest.approx(0.00011771, abs=1e-12)
        assert l1.mean_motion_ddot == 0.0
        assert l1.bstar_drag == pytest.approx(2.1418e-4, rel=1e-12)
        assert l1.ephemeris_type == 0
        assert l1.element_number == 999
        assert l1.checksum == 5

        assert l2.line_number == 2
        assert l2.satellite_number == 25544
        assert l2.inclination == pytest.approx(51.6405)
        assert l2.raan == pytest.approx(309.2692)
        assert l2.eccentricity == pytest.approx(0.0004792, abs=1e-12)
        assert l2.arg_perigee == pytest.approx(43.0163)
        assert l2.mean_anomaly == pytest.approx(63.53)
        assert l2.mean_motion == pytest.approx(15.49960977)
        assert l2.rev_at_epoch == 44747
        assert l2.checksum == 3

    def test_negative_drag_terms(self):
        line1 = ISS_LINE1[:33] + "-" + ISS_LINE1[34:44] + "-12345-5" + " " + "-11606-4" + ISS_LINE1[61:]
        tle = parse_tle(f"{_with_checksum(line1)}\n{ISS_LINE2}")
        assert tle.line_1.mean_motion_dot == pytest.approx(-0.00011771, abs=1e-12)
        assert tle.line_1.mean_motion_ddot == pytest.approx(-1.2345e-6, rel=1e-12)
        assert tle.line_1.bstar_drag == pytest.approx(-1.1606e-5, rel=1e-12)

    def test_plus_sign_exponential(self):
        line1 = _with_checksum(_replace(ISS_LINE1, 44, "+12345-5"))
        tle = parse_tle(f"{line1}\n{ISS_LINE2}")
        assert tle.line_1.mean_motion_ddot == pytest.approx(1.2345e-6, rel=1e-12)

    def test_from_lines(self):
        assert TLE.from_lines(ISS_LINE1, ISS_LINE2) == parse_tle(ISS)

    def test_parse_alias(self):
        assert TLE.parse(ISS) == parse_tle(ISS)

    def test_immutable(self):
        tle = parse_tle(ISS)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tle.line_2.inclination = 10.0

    def test_intl_designator(self):
        assert parse_tle(ISS).intl_designator == "98067A"

    def test_epoch_datetime(self):
        tle = parse_tle(ISS)
        # 2024 is a leap year: day 97 = April 6
        assert tle.full_epoch_year == 2024
        assert tle.epoch_dt.tzinfo == timezone.utc
        assert (tle.epoch_dt.month, tle.epoch_dt.day, tle.epoch_dt.hour) == (4, 6, 19)

    def test_epoch_year_pivot(self):
        line1 = _with_checksum(_replace(ISS_LINE1, 18, "98"))
        tle = parse_tle(f"{line1}\n{ISS_LINE2}")
        assert tle.full_epoch_year == 1998

    def test_derived_quantities(self):
        tle = parse_tle(ISS)
        # ISS period ~92.9 minutes, altitude ~415 km
        assert tle.period == pytest.approx(86400.0 / 15.49960977)
        assert 400 < tle.altitude < 430

    def test_to_dict(self):
        d = parse_tle(ISS).to_dict()
        assert d["satellite_number"] == 25544
        assert d["line_1_checksum"] == 5
        assert d["line_2_checksum"] == 3
        assert d["launch_piece"] == "A  "
        assert d["eccentricity"] == pytest.approx(0.0004792, abs=1e-12)
        assert isinstance(d["epoch"], datetime)

    def test_str(self):
        text = str(parse_tle(ISS))
        assert "satellite_number=25544" in text
        assert 'launch_piece="A  "' in text
        assert "inclination=51.6405°" in text

    def test_custom_limits(self):
        limits = ElementLimits(classifications=frozenset({"U", "S"}))
        line1 = _replace(ISS_LINE1, 7, "S")
        assert parse_tle(f"{line1}\n{ISS_LINE2}", limits).classification == "S"


# ═══════════════════════════════════════════════════════════════
# RECORD PARSE FAILURES
# ═══════════════════════════════════════════════════════════════
class TestStructuralErrors:
    def test_missing_last_character(self):
        with pytest.raises(StructuralError, match="invalid size, size=138"):
            parse_tle(ISS[:-1])

    def test_trailing_content(self):
        with pytest.raises(StructuralError):
            parse_tle(ISS + "\n")

    def test_empty(self):
        with pytest.raises(StructuralError):
            parse_tle("")

    def test_line_break_replaced_by_space(self):
        with pytest.raises(StructuralError, match="expected line break at position=69"):
            parse_tle(f"{ISS_LINE1} {ISS_LINE2}")

    def test_crlf(self):
        with pytest.raises(StructuralError):
            parse_tle(f"{ISS_LINE1}\r\n{ISS_LINE2}"[:139])

    def test_extra_line_break(self):
        text = _replace(ISS, 100, "\n")
        with pytest.raises(StructuralError, match="exactly two"):
            parse_tle(text)

    def test_runs_before_character_check(self):
        with pytest.raises(StructuralError):
            parse_tle(ISS.lower()[:-1])

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_tle(ISS[:-1])


class TestCharacterSetErrors:
    def test_lowercase_piece(self):
        text = ISS.replace("98067A", "98067a")
        with pytest.raises(CharacterSetError, match="offset=14") as excinfo:
            parse_tle(text)
        assert excinfo.value.data == text

    @pytest.mark.parametrize("offset, ch", [(7, "W"), (7, "Z"), (8, "\t"), (8, "\r"), (100, "#")])
    def test_disallowed_characters(self, offset, ch):
        with pytest.raises(CharacterSetError):
            parse_tle(_replace(ISS, offset, ch))


class TestFieldConversionErrors:
    def test_letter_in_epoch(self):
        line1 = _replace(ISS_LINE1, 24, "A")
        with pytest.raises(FieldConversionError) as excinfo:
            parse_tle(f"{line1}\n{ISS_LINE2}")
        err = excinfo.value
        assert (err.line, err.field_name, err.offset, err.length) == (1, "epoch_day", 20, 12)
        assert err.raw == "097.A1509284"
        assert err.data == line1
        assert isinstance(err.__cause__, DecodeError)

    def test_bad_exponential_sign(self):
        line1 = _replace(ISS_LINE1, 53, ".")
        with pytest.raises(FieldConversionError, match="bstar_drag") as excinfo:
            parse_tle(f"{line1}\n{ISS_LINE2}")
        assert excinfo.value.raw == ".21418-3"

    def test_bad_exponent_sign(self):
        line1 = _replace(ISS_LINE1, 50, " ")
        with pytest.raises(FieldConversionError, match="mean_motion_ddot"):
            parse_tle(f"{line1}\n{ISS_LINE2}")

    def test_negative_eccentricity(self):
        line2 = _replace(ISS_LINE2, 26, "-")
        with pytest.raises(FieldConversionError) as excinfo:
            parse_tle(f"{ISS_LINE1}\n{line2}")
        assert (excinfo.value.line, excinfo.value.field_name) == (2, "eccentricity")

    def test_nan_inclination(self):
        line2 = _with_checksum(_replace(ISS_LINE2, 8, "     NAN"))
        with pytest.raises(FieldConversionError, match="inclination"):
            parse_tle(f"{ISS_LINE1}\n{line2}")

    def test_blank_satellite_number(self):
        line2 = _replace(ISS_LINE2, 2, "     ")
        with pytest.raises(FieldConversionError, match="satellite_number"):
            parse_tle(f"{ISS_LINE1}\n{line2}")


class TestChecksumErrors:
    def test_line1_altered_checksum(self):
        line1 = ISS_LINE1[:68] + "6"
        with pytest.raises(ChecksumError, match="parsed=6, computed=5") as excinfo:
            parse_tle(f"{line1}\n{ISS_LINE2}")
        assert excinfo.value.line == 1
        assert excinfo.value.data == line1

    def test_line2_altered_checksum(self):
        line2 = ISS_LINE2[:68] + "4"
        with pytest.raises(ChecksumError) as excinfo:
            parse_tle(f"{ISS_LINE1}\n{line2}")
        assert (excinfo.value.line, excinfo.value.computed, excinfo.value.parsed) == (2, 3, 4)

    def test_altered_digit(self):
        line1 = _replace(ISS_LINE1, 30, "9")
        with pytest.raises(ChecksumError):
            parse_tle(f"{line1}\n{ISS_LINE2}")

    def test_checksum_before_satellite_mismatch(self):
        line2 = _replace(ISS_LINE2, 2, "25545")
        with pytest.raises(ChecksumError):
            parse_tle(f"{ISS_LINE1}\n{line2}")


class TestDomainRangeErrors:
    @pytest.mark.parametrize("offset, text, field_name", [
        (8, "181.6405", "inclination"),
        (17, "360.0001", "raan"),
        (34, "361.0163", "arg_perigee"),
        (43, "400.0000", "mean_anomaly"),
    ])
    def test_out_of_range(self, offset, text, field_name):
        line2 = _with_checksum(_replace(ISS_LINE2, offset, text))
        with pytest.raises(DomainRangeError) as excinfo:
            parse_tle(f"{ISS_LINE1}\n{line2}")
        assert excinfo.value.field_name == field_name
        assert excinfo.value.bounds[0] == 0.0

    def test_negative_inclination(self):
        line2 = _with_checksum(_replace(ISS_LINE2, 8, "-51.6405"))
        with pytest.raises(DomainRangeError, match="inclination"):
            parse_tle(f"{ISS_LINE1}\n{line2}")

    @pytest.mark.parametrize("offset, text, field_name, value", [
        (8, "180.0000", "inclination", 180.0),
        (8, "  0.0000", "inclination", 0.0),
        (17, "360.0000", "raan", 360.0),
        (43, "360.0000", "mean_anomaly", 360.0),
    ])
    def test_bounds_inclusive(self, offset, text, field_name, value):
        line2 = _with_checksum(_replace(ISS_LINE2, offset, text))
        tle = parse_tle(f"{ISS_LINE1}\n{line2}")
        assert getattr(tle.line_2, field_name) == value

    def test_custom_limits(self):
        line2 = _with_checksum(_replace(ISS_LINE2, 8, " 98.0000"))
        with pytest.raises(DomainRangeError):
            parse_tle(f"{ISS_LINE1}\n{line2}", ElementLimits(inclination=(0.0, 90.0)))


class TestConsistencyErrors:
    def test_satellite_number_mismatch(self):
        line2 = "2 25545  51.6405 309.2692 0004792  43.0163  63.5300 15.49960977447474"
        with pytest.raises(ConsistencyError, match="line_1_value=25544, line_2_value=25545"):
            parse_tle(f"{ISS_LINE1}\n{line2}")

    def test_classified(self):
        line1 = _replace(ISS_LINE1, 7, "S")
        with pytest.raises(ConsistencyError, match="classification"):
            parse_tle(f"{line1}\n{ISS_LINE2}")

    def test_wrong_line1_marker(self):
        line1 = _with_checksum(_replace(ISS_LINE1, 0, "3"))
        with pytest.raises(ConsistencyError, match="line 1 contains invalid line number"):
            parse_tle(f"{line1}\n{ISS_LINE2}")

    def test_wrong_line2_marker(self):
        line2 = _with_checksum(_replace(ISS_LINE2, 0, "1"))
        with pytest.raises(ConsistencyError, match="line 2 contains invalid line number"):
            parse_tle(f"{ISS_LINE1}\n{line2}")

    def test_error_context(self):
        line1 = _replace(ISS_LINE1, 7, "C")
        with pytest.raises(TLEError) as excinfo:
            parse_tle(f"{line1}\n{ISS_LINE2}")
        assert excinfo.value.context == "line 1: classification"
        assert str(excinfo.value).startswith("line 1: classification: ")
