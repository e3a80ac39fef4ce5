"""Pipeline orchestrator - ephemeris acquisition and horoscope runs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from cosmicops.config import Settings, get_settings
from cosmicops.schemas.ephemeris import Body, BulkResult, EphemerisRecord, Provenance
from cosmicops.schemas.horoscope import HoroscopeResult
from cosmicops.services.position_store import PositionStore
from ephemeris.calculator import fetch_body_position
from ephemeris.horizons import HorizonsClient

from pipeline.stages.ephemeris_stage import run_ephemeris_stage
from pipeline.stages.horoscope_stage import run_horoscope_stage

logger = logging.getLogger(__name__)

CONNECTIVITY_TEST_DATE = date(2025, 7, 22)


async def get_ephemeris(
    target_date: date,
    *,
    store: PositionStore,
    client: HorizonsClient,
    location: str | None = None,
    settings: Settings | None = None,
) -> EphemerisRecord:
    settings = settings or get_settings()
    return await run_ephemeris_stage(
        target_date,
        location or settings.default_location,
        store,
        client,
        settings,
    )


async def generate_horoscope(
    target_date: date,
    *,
    store: PositionStore,
    client: HorizonsClient,
    location: str | None = None,
    birth_date: date | None = None,
    settings: Settings | None = None,
) -> HoroscopeResult:
    """Score a date, optionally blended with a birth date's positions."""
    settings = settings or get_settings()
    location = location or settings.default_location

    record = await run_ephemeris_stage(target_date, location, store, client, settings)
    birth_record = None
    if birth_date is not None:
        birth_record = await run_ephemeris_stage(birth_date, location, store, client, settings)
    return run_horoscope_stage(record, birth_record)


async def fetch_bulk(
    dates: Iterable[date],
    *,
    store: PositionStore,
    client: HorizonsClient,
    location: str | None = None,
    settings: Settings | None = None,
) -> list[BulkResult]:
    """Acquire several dates strictly one after another.

    Cached dates are returned as is. Before each uncached date the run pauses
    for the configured inter-date delay. A failing date is reported in its
    result and does not stop the batch.
    """
    settings = settings or get_settings()
    location = location or settings.default_location

    results: list[BulkResult] = []
    for target_date in dates:
        try:
            existing = await store.get(target_date, location)
            if existing is not None:
                results.append(BulkResult(date=target_date, record=existing))
                continue

            # Only uncached dates pause; the stage owns the read-through itself
            await asyncio.sleep(settings.date_delay_seconds)
            record = await run_ephemeris_stage(target_date, location, store, client, settings)
            results.append(BulkResult(date=target_date, record=record))
        except Exception as exc:
            logger.error("Error fetching ephemeris for %s: %s", target_date, exc)
            results.append(BulkResult(date=target_date, error=str(exc)))
    return results


async def check_connectivity(
    client: HorizonsClient,
    test_date: date = CONNECTIVITY_TEST_DATE,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Fetch the Sun once and report whether live data came back."""
    settings = settings or get_settings()
    logger.info("Testing Horizons connectivity...")
    try:
        position = await fetch_body_position(client, Body.SUN, test_date, settings.horizons_center)
    except Exception as exc:
        logger.error("Horizons connectivity test failed: %s", exc)
        return {
            "status": "error",
            "api_working": False,
            "error": str(exc),
            "api_base": client.api_base,
        }
    return {
        "status": "success",
        "api_working": position.provenance is Provenance.LIVE,
        "test_date": test_date.isoformat(),
        "sample_data": position.model_dump(mode="json"),
        "api_base": client.api_base,
    }
