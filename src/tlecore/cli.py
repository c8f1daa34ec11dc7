#!/usr/bin/env python3
"""tlecore command-line interface.

Usage::

    tlecore parse data/iss.tle
    cat data/iss.tle | tlecore parse --json
    tlecore gmst 2024-05-12T20:33:05Z
"""
from __future__ import annotations

import sys
import json
import logging
from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box
from rich.markup import escape

from .errors import TLEError
from .sidereal import format_instant, format_sidereal, gmst_radians, gmst_seconds
from .tle_parser import TLE, parse_tle

console = Console()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """tlecore — Two-Line Element decoding and sidereal time."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s — %(message)s")


@main.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Print fields as JSON")
def parse(source, as_json: bool):
    """Decode and validate one TLE record from SOURCE (default: stdin)."""
    text = source.read().replace("\r\n", "\n")
    if text.endswith("\n"):
        text = text[:-1]

    try:
        tle = parse_tle(text)
    except TLEError as e:
        console.print(f"[red]Error ({type(e).__name__}): {escape(str(e))}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(tle.to_dict(), default=str, indent=2))
        return

    _display_tle(tle)


@main.command()
@click.argument("instant", required=False)
def gmst(instant: str | None):
    """Greenwich Mean Sidereal Time at INSTANT (ISO-8601, default: now)."""
    if instant is None:
        when = datetime.now(timezone.utc)
    else:
        try:
            when = datetime.fromisoformat(instant.replace("Z", "+00:00"))
        except ValueError:
            raise click.BadParameter(f"not an ISO-8601 instant: {instant}", param_hint="INSTANT")

    seconds = gmst_seconds(when)
    console.print(
        Panel(
            f"UTC:     {format_instant(when)}\n"
            f"GMST:    [bold]{format_sidereal(seconds)}[/bold]\n"
            f"Seconds: {seconds:.4f}\n"
            f"Radians: {gmst_radians(when):.8f}",
            title="Greenwich Mean Sidereal Time",
            box=box.ROUNDED,
        )
    )


def _display_tle(tle: TLE):
    """Display a parsed TLE with rich formatting."""
    l1, l2 = tle.line_1, tle.line_2
    # Period and altitude divide by mean motion, which is not range-checked
    if l2.mean_motion > 0:
        period = f"{tle.period / 60.0:.2f} min"
        altitude = f"{tle.altitude:.1f} km"
    else:
        period = altitude = "n/a"
    console.print(
        Panel(
            f"[bold]NORAD {tle.satellite_number}[/bold] ({tle.intl_designator})\n"
            f"Epoch: {tle.epoch_dt:%Y-%m-%d %H:%M:%S} UTC\n"
            f"Period: {period}\n"
            f"Altitude: {altitude}",
            title="TLE",
            box=box.ROUNDED,
        )
    )

    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Field", style="bold")
    table.add_column("Value", justify="right")

    rows = [
        (1, "satellite_number", l1.satellite_number),
        (1, "classification", l1.classification),
        (1, "launch_year", f"{l1.launch_year:02d}"),
        (1, "launch_number", f"{l1.launch_number:03d}"),
        (1, "launch_piece", repr(l1.launch_piece)),
        (1, "epoch_year", f"{l1.epoch_year:02d}"),
        (1, "epoch_day", f"{l1.epoch_day:.8f}"),
        (1, "mean_motion_dot", f"{l1.mean_motion_dot:.8f}"),
        (1, "mean_motion_ddot", f"{l1.mean_motion_ddot:.5e}"),
        (1, "bstar_drag", f"{l1.bstar_drag:.5e}"),
        (1, "ephemeris_type", l1.ephemeris_type),
        (1, "element_number", l1.element_number),
        (1, "checksum", l1.checksum),
        (2, "inclination", f"{l2.inclination:.4f}°"),
        (2, "raan", f"{l2.raan:.4f}°"),
        (2, "eccentricity", f"{l2.eccentricity:.7f}"),
        (2, "arg_perigee", f"{l2.arg_perigee:.4f}°"),
        (2, "mean_anomaly", f"{l2.mean_anomaly:.4f}°"),
        (2, "mean_motion", f"{l2.mean_motion:.8f}"),
        (2, "rev_at_epoch", l2.rev_at_epoch),
        (2, "checksum", l2.checksum),
    ]
    for line, name, value in rows:
        table.add_row(str(line), name, str(value))

    console.print(table)


if __name__ == "__main__":
    main()
