"""Tolerant parser for Horizons observer tables.

The data block sits between ``$$SOE`` and ``$$EOE``. Rather than relying on
fixed columns, each row is split on whitespace and scanned for the first
adjacent pair of numbers that fit RA [0, 360] and DEC [-90, 90]. The number
after the pair, when positive, is taken as the distance.

Values are read by their leading numeric prefix, so the time column
``00:00`` reads as 0. The scan can therefore latch onto any in-range numeric
pair, not only the coordinate columns: a row whose RA is at most 90 matches
(time, RA) first and yields ra=0, dec=RA. Upstream gives no further way to
disambiguate, so the heuristic is kept as is.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

START_MARKER = "$$SOE"
END_MARKER = "$$EOE"
ERROR_TOKENS = ("ERROR", "FAILED", "No ephemeris")

DEFAULT_DISTANCE = 1.0
MIN_LINE_LENGTH = 20
MIN_FIELDS = 4

_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ParsedPosition:
    ra: float
    dec: float
    distance: float


def _to_float(value: str) -> float | None:
    """Leading numeric prefix of a field, e.g. "00:00" -> 0.0, or None."""
    match = _NUMERIC_PREFIX.match(value)
    if match is None:
        return None
    number = float(match.group())
    return number if math.isfinite(number) else None


def _has_error_token(header: str) -> bool:
    return any(token in header for token in ERROR_TOKENS)


def _scan_fields(fields: list[str]) -> ParsedPosition | None:
    # fields[0] is the calendar date
    for j in range(1, len(fields) - 1):
        ra = _to_float(fields[j])
        dec = _to_float(fields[j + 1])
        if ra is None or dec is None:
            continue
        if not (0.0 <= ra <= 360.0 and -90.0 <= dec <= 90.0):
            continue
        distance = DEFAULT_DISTANCE
        if j + 2 < len(fields):
            candidate = _to_float(fields[j + 2])
            if candidate is not None and candidate > 0:
                distance = candidate
        return ParsedPosition(ra=ra, dec=dec, distance=distance)
    return None


def parse_horizons_response(text: object, body_code: str) -> ParsedPosition | None:
    """Extract (ra, dec, distance) from a Horizons text response.

    Returns None when the response carries an error, has no data block,
    or no row holds an in-range coordinate pair.
    """
    if not isinstance(text, str):
        logger.warning("Horizons returned non-text data for body %s", body_code)
        return None

    start = text.find(START_MARKER)
    header = text if start < 0 else text[:start]
    if _has_error_token(header):
        logger.warning("Horizons returned an error for body %s: %s", body_code, header[:200].strip())
        return None

    in_data = False
    for line in text.splitlines():
        if START_MARKER in line:
            in_data = True
            continue
        if END_MARKER in line:
            break
        if not in_data:
            continue

        stripped = line.strip()
        if len(stripped) < MIN_LINE_LENGTH:
            continue
        fields = stripped.split()
        if len(fields) < MIN_FIELDS:
            continue

        parsed = _scan_fields(fields)
        if parsed is not None:
            logger.debug(
                "Parsed body %s: RA=%s DEC=%s distance=%s",
                body_code,
                parsed.ra,
                parsed.dec,
                parsed.distance,
            )
            return parsed

    logger.warning("No coordinate data found in Horizons response for body %s", body_code)
    return None
