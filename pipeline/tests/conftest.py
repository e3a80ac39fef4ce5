"""Pipeline test configuration."""

from __future__ import annotations

from datetime import date

import pytest
from cosmicops.config import Settings
from cosmicops.schemas.ephemeris import BODY_ORDER, Body, EphemerisRecord, Position, Provenance

# Right ascensions that fire no prediction rule and no forecast influence
QUIET_RA: dict[Body, float] = {
    Body.SUN: 180.0,
    Body.MERCURY: 100.0,
    Body.VENUS: 200.0,
    Body.MARS: 100.0,
    Body.JUPITER: 100.0,
    Body.SATURN: 90.0,
    Body.URANUS: 10.0,
    Body.NEPTUNE: 20.0,
    Body.MOON: 100.0,
}
QUIET_JUPITER_DISTANCE = 6.0

SAMPLE_RESPONSE = """\
*******************************************************************************
Target body name: Sun (10)                        {source: DE441}
Center body name: Earth (399)                     {source: DE441}
*******************************************************************************
 Date__(UT)__HR:MN     R.A.__(ICRF)__DEC
$$SOE
 2025-Jul-22 00:00     121.20000  20.30000
$$EOE
"""


def build_record(
    target_date: date = date(2025, 7, 22),
    location: str = "New York City",
    *,
    ra: dict[Body, float] | None = None,
    distance: dict[Body, float] | None = None,
    errors: tuple[Body, ...] = (),
) -> EphemerisRecord:
    ras = {**QUIET_RA, **(ra or {})}
    distances = {Body.JUPITER: QUIET_JUPITER_DISTANCE, **(distance or {})}
    positions = []
    for body in BODY_ORDER:
        if body in errors:
            positions.append(Position.error(body))
            continue
        positions.append(
            Position(
                body=body,
                ra=ras[body],
                dec=0.0,
                distance=distances.get(body, 1.0),
                provenance=Provenance.LIVE,
            )
        )
    return EphemerisRecord(date=target_date, location=location, positions=tuple(positions))


@pytest.fixture
def make_record():
    return build_record


class CountingClient:
    """Stand-in ephemeris client that answers every body with the same table."""

    api_base = "https://horizons.test/api"

    def __init__(self, text: str = SAMPLE_RESPONSE, failures: dict[str, Exception] | None = None):
        self.text = text
        self.failures = failures or {}
        self.calls: list[tuple[str, date]] = []

    async def fetch_text(self, body_code: str, target_date: date, center: str = "500@399") -> str:
        self.calls.append((body_code, target_date))
        if body_code in self.failures:
            raise self.failures[body_code]
        return self.text


@pytest.fixture
def client() -> CountingClient:
    return CountingClient()


@pytest.fixture
def make_client():
    return CountingClient


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(BODY_DELAY_SECONDS=0.0, DATE_DELAY_SECONDS=0.0)
