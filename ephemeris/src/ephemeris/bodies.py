"""Body catalog, orbital approximations, and sign data."""

from __future__ import annotations

import math
from dataclasses import dataclass

from cosmicops.schemas.ephemeris import BODY_ORDER, Body

# JPL Horizons command codes
BODY_CODES: dict[Body, str] = {
    Body.SUN: "10",
    Body.MERCURY: "199",
    Body.VENUS: "299",
    Body.MARS: "499",
    Body.JUPITER: "599",
    Body.SATURN: "699",
    Body.URANUS: "799",
    Body.NEPTUNE: "899",
    Body.MOON: "301",
}

ALL_BODIES: list[Body] = list(BODY_ORDER)


@dataclass(frozen=True)
class OrbitalParams:
    """Rough orbital period and RA at the J2000 epoch, used only for fallback positions."""

    period_days: float
    initial_ra: float


ORBITAL_PARAMS: dict[str, OrbitalParams] = {
    "10": OrbitalParams(365.25, 280.0),
    "199": OrbitalParams(87.97, 48.0),
    "299": OrbitalParams(224.7, 105.0),
    "499": OrbitalParams(686.98, 350.0),
    "599": OrbitalParams(4332.59, 155.0),
    "699": OrbitalParams(10759.22, 234.0),
    "799": OrbitalParams(30688.5, 12.0),
    "899": OrbitalParams(60182.0, 305.0),
    "301": OrbitalParams(27.32, 125.0),
}

# Zodiac signs in order
SIGNS = [
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
]

UNKNOWN_SIGN = "Unknown"


@dataclass(frozen=True)
class BodyProfile:
    name: str
    symbol: str
    domain: str


# Bodies shown in the planetary summary, in display order
SUMMARY_BODIES: dict[Body, BodyProfile] = {
    Body.SUN: BodyProfile("Sun", "☉", "Leadership & Authority"),
    Body.MERCURY: BodyProfile("Mercury", "☿", "Communication & Deployments"),
    Body.VENUS: BodyProfile("Venus", "♀", "Team Harmony & UX"),
    Body.MARS: BodyProfile("Mars", "♂", "Incidents & Conflicts"),
    Body.JUPITER: BodyProfile("Jupiter", "♃", "Growth & Learning"),
    Body.SATURN: BodyProfile("Saturn", "♄", "Structure & Testing"),
    Body.MOON: BodyProfile("Moon", "☽", "On-call & Team Emotions"),
}


def ra_to_sign(ra: float | None) -> str:
    """Map right ascension to one of twelve 30-degree sign bins."""
    if ra is None:
        return UNKNOWN_SIGN
    normalized = ((ra % 360.0) + 360.0) % 360.0
    return SIGNS[int(normalized // 30.0) % 12]


def influence_intensity(ra: float | None) -> str:
    """Band |sin(ra)| into low / medium / high."""
    if ra is None:
        return "low"
    intensity = abs(math.sin(math.radians(ra)))
    if intensity > 0.8:
        return "high"
    if intensity > 0.5:
        return "medium"
    return "low"
