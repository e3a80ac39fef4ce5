"""Deterministic approximate positions for when the live source is unavailable."""

from __future__ import annotations

import logging
import math
import random
from datetime import date

from ephemeris.bodies import ORBITAL_PARAMS
from ephemeris.parser import ParsedPosition

logger = logging.getLogger(__name__)

EPOCH = date(2000, 1, 1)
MAX_DECLINATION = 23.5


def _coerce_date(target_date: date | str) -> date:
    if isinstance(target_date, date):
        return target_date
    return date.fromisoformat(target_date)


def _date_hash(target_date: date) -> int:
    return target_date.year + target_date.month + target_date.day


def fallback_position(body_code: str, target_date: date | str) -> ParsedPosition:
    """Approximate (ra, dec, distance) from a circular-orbit model.

    Identical inputs always give identical outputs, except for body codes
    missing from the catalog, which get a random position.
    """
    day = _coerce_date(target_date)
    params = ORBITAL_PARAMS.get(body_code)
    if params is None:
        logger.warning("No orbital parameters for body %s, using random position", body_code)
        return ParsedPosition(
            ra=random.uniform(0.0, 360.0) % 360.0,
            dec=random.uniform(-30.0, 30.0),
            distance=random.uniform(1.0, 11.0),
        )

    days_since_epoch = (day - EPOCH).days
    orbit_fraction = (days_since_epoch / params.period_days) % 1.0
    ra = (params.initial_ra + orbit_fraction * 360.0) % 360.0

    # Date-seeded jitter of -30..+29 degrees
    variation = (_date_hash(day) % 60) - 30
    ra = (ra + variation + 360.0) % 360.0

    dec = math.sin(orbit_fraction * 2 * math.pi) * MAX_DECLINATION
    distance = 1 + abs(math.sin(orbit_fraction * math.pi)) * (params.period_days / 1000)
    return ParsedPosition(ra=ra, dec=dec, distance=distance)
