"""Ephemeris acquisition stage - read-through over the position store."""

from __future__ import annotations

import logging
from datetime import date

from cosmicops.config import Settings, get_settings
from cosmicops.schemas.ephemeris import EphemerisRecord
from cosmicops.services.position_store import PositionStore
from ephemeris.calculator import calculate_day
from ephemeris.horizons import HorizonsClient

logger = logging.getLogger(__name__)


async def run_ephemeris_stage(
    target_date: date,
    location: str,
    store: PositionStore,
    client: HorizonsClient,
    settings: Settings | None = None,
) -> EphemerisRecord:
    """Return the stored record for the key, acquiring and storing it on first request."""
    existing = await store.get(target_date, location)
    if existing is not None:
        logger.info("Ephemeris cache hit for %s @ %s", target_date, location)
        return existing

    settings = settings or get_settings()
    record = await calculate_day(
        target_date,
        location,
        client,
        body_delay_seconds=settings.body_delay_seconds,
        center=settings.horizons_center,
    )
    await store.upsert(record)
    return record
