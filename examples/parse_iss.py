#!/usr/bin/env python3
"""
tlecore Example: decode an ISS element set and report where Greenwich was
pointing at its epoch.
"""
from tlecore import TLEError, parse_tle
from tlecore.sidereal import format_sidereal, gmst_seconds

ISS = (
    "1 25544U 98067A   24097.81509284  .00011771  00000-0  21418-3 0  9995\n"
    "2 25544  51.6405 309.2692 0004792  43.0163  63.5300 15.49960977447473"
)


def main():
    print("=" * 65)
    print("  tlecore — ISS element set")
    print("=" * 65)

    tle = parse_tle(ISS)
    print(f"\nNORAD {tle.satellite_number} ({tle.intl_designator})")
    print(f"  Epoch:        {tle.epoch_dt:%Y-%m-%d %H:%M:%S} UTC")
    print(f"  Inclination:  {tle.line_2.inclination:.4f}°")
    print(f"  Eccentricity: {tle.line_2.eccentricity:.7f}")
    print(f"  B*:           {tle.line_1.bstar_drag:.5e}")
    print(f"  Period:       {tle.period / 60.0:.2f} min")
    print(f"  Altitude:     {tle.altitude:.1f} km")
    print(f"  GMST @ epoch: {format_sidereal(gmst_seconds(tle.epoch_dt))}")

    # One corrupted digit is enough to fail the checksum
    corrupted = ISS.replace("51.6405", "51.6406")
    try:
        parse_tle(corrupted)
    except TLEError as e:
        print(f"\nRejected corrupted record: {e}")


if __name__ == "__main__":
    main()
