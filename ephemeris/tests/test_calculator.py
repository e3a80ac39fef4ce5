"""Tests for the position assembler."""

from __future__ import annotations

from datetime import date

import pytest
from cosmicops.schemas.ephemeris import Body, Provenance

import ephemeris.calculator as calculator
from ephemeris.calculator import calculate_day, fetch_body_position
from ephemeris.fallback import fallback_position
from ephemeris.horizons import EphemerisBadStatus, EphemerisTimeout

TARGET = date(2025, 7, 22)


class FakeClient:
    """Serves one canned response; individual body codes can be made to fail."""

    def __init__(self, text: str, failures: dict[str, Exception] | None = None, log: list | None = None):
        self.text = text
        self.failures = failures or {}
        self.calls: list[str] = []
        self.log = log if log is not None else []

    async def fetch_text(self, body_code: str, target_date: date, center: str = "500@399") -> str:
        self.calls.append(body_code)
        self.log.append(("fetch", body_code))
        if body_code in self.failures:
            raise self.failures[body_code]
        return self.text


@pytest.mark.asyncio
async def test_all_live(mars_response):
    client = FakeClient(mars_response)
    record = await calculate_day(TARGET, "New York City", client, body_delay_seconds=0)

    assert len(record.positions) == 9
    assert record.using_fallback_data is False
    assert record.warning is None
    assert set(record.sources.values()) == {Provenance.LIVE}
    assert record.ra(Body.SUN) == pytest.approx(177.7321)
    assert client.calls == ["10", "199", "299", "499", "599", "699", "799", "899", "301"]


@pytest.mark.asyncio
async def test_timeout_for_mars_falls_back(mars_response):
    client = FakeClient(mars_response, failures={"499": EphemerisTimeout("499", "timed out")})
    record = await calculate_day(TARGET, "New York City", client, body_delay_seconds=0)

    mars = record.position(Body.MARS)
    expected = fallback_position("499", "2025-07-22")
    assert mars.provenance is Provenance.FALLBACK
    assert (mars.ra, mars.dec, mars.distance) == (expected.ra, expected.dec, expected.distance)
    assert record.using_fallback_data is True
    assert record.sources["mars"] is Provenance.FALLBACK
    assert record.sources["sun"] is Provenance.LIVE
    assert record.warning


@pytest.mark.asyncio
async def test_unparsable_response_falls_back():
    client = FakeClient("<html>maintenance</html>")
    position = await fetch_body_position(client, Body.VENUS, TARGET)

    expected = fallback_position("299", TARGET)
    assert position.provenance is Provenance.FALLBACK
    assert position.ra == expected.ra


@pytest.mark.asyncio
async def test_bad_status_falls_back(mars_response):
    client = FakeClient(mars_response, failures={"10": EphemerisBadStatus("10", 502)})
    position = await fetch_body_position(client, Body.SUN, TARGET)
    assert position.provenance is Provenance.FALLBACK


@pytest.mark.asyncio
async def test_unexpected_fault_is_isolated_to_one_body(mars_response):
    client = FakeClient(mars_response, failures={"301": RuntimeError("boom")})
    record = await calculate_day(TARGET, "New York City", client, body_delay_seconds=0)

    moon = record.position(Body.MOON)
    assert moon.provenance is Provenance.ERROR
    assert (moon.ra, moon.dec, moon.distance) == (None, None, None)
    assert record.sources["moon"] is Provenance.ERROR
    assert record.using_fallback_data is True
    assert record.position(Body.SATURN).provenance is Provenance.LIVE


@pytest.mark.asyncio
async def test_delay_follows_each_body(monkeypatch, mars_response):
    log: list = []

    async def fake_sleep(seconds: float) -> None:
        log.append(("sleep", seconds))

    monkeypatch.setattr(calculator.asyncio, "sleep", fake_sleep)
    client = FakeClient(mars_response, log=log)
    await calculate_day(TARGET, "New York City", client, body_delay_seconds=0.5)

    assert len(log) == 18
    for i in range(0, 18, 2):
        assert log[i][0] == "fetch"
        assert log[i + 1] == ("sleep", 0.5)


@pytest.mark.asyncio
async def test_record_keyed_by_date_and_location(mars_response):
    record = await calculate_day(TARGET, "Berlin", FakeClient(mars_response), body_delay_seconds=0)
    assert record.date == TARGET
    assert record.location == "Berlin"
