"""Validation limits applied to decoded TLE fields."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ElementLimits:
    """Inclusive bounds for the physically meaningful line-2 fields.

    Default values are the ranges the TLE format allows. All bounds are
    inclusive on both ends.

    Attributes:
        inclination: Inclination bounds (degrees).
        raan: Right ascension of ascending node bounds (degrees).
        eccentricity: Eccentricity bounds (dimensionless).
        arg_perigee: Argument of perigee bounds (degrees).
        mean_anomaly: Mean anomaly bounds (degrees).
        classifications: Accepted security classification characters. Only
            unclassified (``U``) element sets are publicly distributed.
    """
    inclination: tuple[float, float] = (0.0, 180.0)
    raan: tuple[float, float] = (0.0, 360.0)
    eccentricity: tuple[float, float] = (0.0, 1.0)
    arg_perigee: tuple[float, float] = (0.0, 360.0)
    mean_anomaly: tuple[float, float] = (0.0, 360.0)
    classifications: frozenset[str] = frozenset({"U"})

    def bounds(self) -> dict[str, tuple[float, float]]:
        """Return the domain-checked fields in check order, keyed by field name."""
        return {
            "inclination": self.inclination,
            "raan": self.raan,
            "eccentricity": self.eccentricity,
            "arg_perigee": self.arg_perigee,
            "mean_anomaly": self.mean_anomaly,
        }


DEFAULT_LIMITS = ElementLimits()
