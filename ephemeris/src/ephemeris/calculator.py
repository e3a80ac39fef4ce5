"""Main ephemeris assembler - calculate_day() entry point."""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from cosmicops.schemas.ephemeris import Body, EphemerisRecord, Position, Provenance

from ephemeris.bodies import ALL_BODIES, BODY_CODES
from ephemeris.fallback import fallback_position
from ephemeris.horizons import GEOCENTER, EphemerisClientError, HorizonsClient
from ephemeris.parser import ParsedPosition, parse_horizons_response

logger = logging.getLogger(__name__)

DEFAULT_BODY_DELAY_SECONDS = 0.5


def _to_position(body: Body, parsed: ParsedPosition, provenance: Provenance) -> Position:
    # Parser accepts RA == 360; stored positions use [0, 360)
    return Position(
        body=body,
        ra=parsed.ra % 360.0,
        dec=parsed.dec,
        distance=parsed.distance,
        provenance=provenance,
    )


async def fetch_body_position(
    client: HorizonsClient,
    body: Body,
    target_date: date,
    center: str = GEOCENTER,
) -> Position:
    """Live position for one body, or a fallback if the source fails."""
    body_code = BODY_CODES[body]
    try:
        text = await client.fetch_text(body_code, target_date, center)
    except EphemerisClientError as exc:
        logger.warning("%s, using fallback", exc)
        return _to_position(body, fallback_position(body_code, target_date), Provenance.FALLBACK)

    parsed = parse_horizons_response(text, body_code)
    if parsed is None:
        logger.warning("Failed to parse Horizons data for body %s, using fallback", body_code)
        return _to_position(body, fallback_position(body_code, target_date), Provenance.FALLBACK)
    return _to_position(body, parsed, Provenance.LIVE)


async def calculate_day(
    target_date: date,
    location: str,
    client: HorizonsClient,
    *,
    body_delay_seconds: float = DEFAULT_BODY_DELAY_SECONDS,
    center: str = GEOCENTER,
) -> EphemerisRecord:
    """Acquire all nine positions for a date, one body at a time.

    Args:
        target_date: The date to acquire
        location: Location key the record is stored under
        client: Ephemeris source client
        body_delay_seconds: Pause after each body, to go easy on the source
        center: Observer reference passed to the source

    Returns:
        EphemerisRecord with one position per body. A body that fails
        unexpectedly is recorded with error provenance and null fields.
    """
    positions: list[Position] = []
    for body in ALL_BODIES:
        try:
            position = await fetch_body_position(client, body, target_date, center)
        except Exception:
            logger.exception("Error fetching %s data for %s", body.value, target_date)
            position = Position.error(body)
        positions.append(position)
        await asyncio.sleep(body_delay_seconds)

    record = EphemerisRecord(date=target_date, location=location, positions=tuple(positions))
    logger.info(
        "Ephemeris fetch complete for %s. Using fallback data: %s",
        target_date,
        record.using_fallback_data,
    )
    logger.info("Data sources: %s", {k: v.value for k, v in record.sources.items()})
    return record
