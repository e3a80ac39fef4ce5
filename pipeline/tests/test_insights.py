"""Tests for developer insight forecasts."""

from __future__ import annotations

from datetime import date

import pytest
from cosmicops.schemas.ephemeris import Body
from cosmicops.schemas.horoscope import Outlook
from pipeline.scoring.insights import (
    NEUTRAL_DEPLOYMENT_MESSAGE,
    NEUTRAL_DEPLOYMENT_RECOMMENDATION,
    NEUTRAL_ON_CALL_MESSAGE,
    build_deployment_forecast,
    build_on_call_forecast,
    generate_developer_insights,
    mars_influence,
    mercury_influence,
    moon_influence,
    saturn_influence,
    venus_influence,
)


def test_mercury_influence():
    assert mercury_influence(15.0).retrograde_risk == 0.8
    assert mercury_influence(30.0).retrograde_risk == 0.2
    assert mercury_influence(330.0).retrograde_risk == 0.2
    assert mercury_influence(331.0).retrograde_risk == 0.8
    assert mercury_influence(180.0).clarity == 0.7
    assert mercury_influence(150.0).clarity == 0.3


def test_mars_influence():
    hot = mars_influence(58.0)  # intensity 28
    assert (hot.conflict_potential, hot.incident_magnetism, hot.protective_energy) == (0.8, 0.9, 0.2)
    assert hot.energy == 0.4

    calm = mars_influence(240.0)  # intensity 0
    assert calm.conflict_potential == 0.0
    assert calm.energy == 0.8
    assert calm.protective_energy == 0.7

    assert mars_influence(15.0).conflict_potential == pytest.approx(0.5)


def test_other_influences():
    assert saturn_influence(0.0).discipline == 0.8
    assert saturn_influence(90.0).discipline == 0.3
    assert moon_influence(15.0).emotional_intensity == 0.8
    assert moon_influence(180.0).emotional_balance == 0.7
    assert moon_influence(150.0).emotional_balance == 0.3  # phase 10 is outside the open band
    assert venus_influence(90.0).team_harmony == 0.7


def test_missing_positions_use_baseline():
    assert mercury_influence(None).retrograde_risk == 0.2
    assert mars_influence(None).conflict_potential == 0.0
    assert moon_influence(None).emotional_intensity == 0.3


def test_quiet_record_gives_neutral_forecasts(make_record):
    insights = generate_developer_insights(make_record())

    deployment = insights.deployment_forecast
    assert deployment.overall_outlook is Outlook.NEUTRAL
    assert deployment.cosmic_message == NEUTRAL_DEPLOYMENT_MESSAGE
    assert deployment.recommendations == (NEUTRAL_DEPLOYMENT_RECOMMENDATION,)
    assert deployment.confidence == 0.5

    on_call = insights.on_call_forecast
    assert on_call.overall_outlook is Outlook.NEUTRAL
    assert on_call.cosmic_message == NEUTRAL_ON_CALL_MESSAGE


def test_deployment_challenging(make_record):
    forecast = build_deployment_forecast(make_record(ra={Body.MERCURY: 15.0, Body.MARS: 58.0}))

    assert forecast.overall_outlook is Outlook.CHALLENGING
    assert forecast.cosmic_message == (
        "Mercury's position signals elevated deployment risk. Mars stirs conflict in production systems."
    )
    assert forecast.recommendations == (
        "Double-check configuration changes before merging",
        "Prefer feature flags and staged rollouts",
        "Keep rollback plans ready",
        "Avoid large schema migrations",
    )
    assert forecast.confidence == 0.7


def test_deployment_mixed_keeps_influence_order(make_record):
    forecast = build_deployment_forecast(make_record(ra={Body.MERCURY: 15.0, Body.SATURN: 0.0}))

    assert forecast.overall_outlook is Outlook.MIXED
    assert forecast.cosmic_message.startswith("Mercury")
    assert forecast.cosmic_message.endswith("Saturn rewards disciplined release processes.")


def test_deployment_favorable(make_record):
    forecast = build_deployment_forecast(make_record(ra={Body.MERCURY: 180.0}))
    assert forecast.overall_outlook is Outlook.FAVORABLE
    assert forecast.recommendations == ("Good window for coordinated releases with clear changelogs",)


def test_personal_checks_append_last(make_record):
    record = make_record(ra={Body.MERCURY: 180.0})
    birth = make_record(date(1990, 3, 14), ra={Body.MERCURY: 15.0, Body.MOON: 15.0})

    deployment = build_deployment_forecast(record, birth)
    assert deployment.overall_outlook is Outlook.MIXED
    assert deployment.cosmic_message.endswith("Your natal Mercury amplifies deployment sensitivity today.")
    assert deployment.recommendations[-1] == "Pair with a teammate on your own deployments"

    on_call = build_on_call_forecast(make_record(), birth)
    assert on_call.overall_outlook is Outlook.CHALLENGING
    assert on_call.cosmic_message == "Your natal Moon asks you to guard your own energy on shift."


def test_on_call_order_moon_mars_venus(make_record):
    forecast = build_on_call_forecast(make_record(ra={Body.MOON: 15.0, Body.MARS: 58.0, Body.VENUS: 90.0}))

    assert forecast.overall_outlook is Outlook.MIXED
    assert forecast.cosmic_message == (
        "The Moon heightens emotional reactions to incidents. "
        "Mars draws incidents toward critical systems. "
        "Venus fosters mutual support during incidents."
    )
    assert forecast.confidence == 0.8


def test_confidence_is_capped(make_record):
    record = make_record(ra={Body.MOON: 15.0, Body.MARS: 58.0, Body.VENUS: 90.0})
    birth = make_record(ra={Body.MOON: 15.0})
    forecast = build_on_call_forecast(record, birth)
    assert forecast.confidence == 0.9
