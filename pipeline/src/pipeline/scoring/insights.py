"""Deployment and on-call forecasts from combined planetary influences.

Each body is reduced to a handful of sub-scores. A forecast walks its
influences in a fixed order; every score above its gate adds one sentence
to the cosmic message, its recommendations, and a favorable or
challenging signal for the outlook state machine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from cosmicops.schemas.ephemeris import Body, EphemerisRecord
from cosmicops.schemas.horoscope import (
    DeploymentForecast,
    DeveloperInsights,
    OnCallForecast,
    Outlook,
)

from pipeline.scoring.outlook import CHALLENGING, FAVORABLE, OutlookTracker

BASE_CONFIDENCE = 0.5
CONFIDENCE_STEP = 0.1
MAX_CONFIDENCE = 0.9

NEUTRAL_DEPLOYMENT_MESSAGE = (
    "No strong planetary influences on deployments today. Follow your standard release process."
)
NEUTRAL_DEPLOYMENT_RECOMMENDATION = "Follow standard deployment procedures"
NEUTRAL_ON_CALL_MESSAGE = "Steady cosmic conditions for on-call rotations. Maintain normal coverage."
NEUTRAL_ON_CALL_RECOMMENDATION = "Keep the usual on-call schedule and escalation paths"


@dataclass(frozen=True)
class MercuryInfluence:
    retrograde_risk: float = 0.2
    clarity: float = 0.3


@dataclass(frozen=True)
class MarsInfluence:
    conflict_potential: float = 0.0
    energy: float = 0.4
    incident_magnetism: float = 0.3
    protective_energy: float = 0.2


@dataclass(frozen=True)
class SaturnInfluence:
    discipline: float = 0.3


@dataclass(frozen=True)
class MoonInfluence:
    emotional_intensity: float = 0.3
    emotional_balance: float = 0.3


@dataclass(frozen=True)
class VenusInfluence:
    team_harmony: float = 0.3


def mercury_influence(ra: float | None) -> MercuryInfluence:
    if ra is None:
        return MercuryInfluence()
    return MercuryInfluence(
        retrograde_risk=0.2 if 30 <= ra <= 330 else 0.8,
        clarity=0.7 if 150 < ra < 210 else 0.3,
    )


def mars_influence(ra: float | None) -> MarsInfluence:
    if ra is None:
        return MarsInfluence()
    intensity = abs(math.fmod(ra, 30))
    return MarsInfluence(
        conflict_potential=0.8 if intensity > 25 else intensity / 30,
        energy=0.8 if 210 < ra < 330 else 0.4,
        incident_magnetism=0.9 if intensity > 27 else 0.3,
        protective_energy=0.7 if intensity < 5 else 0.2,
    )


def saturn_influence(ra: float | None) -> SaturnInfluence:
    if ra is None:
        return SaturnInfluence()
    return SaturnInfluence(discipline=0.8 if math.cos(ra * math.pi / 180) > 0.5 else 0.3)


def moon_influence(ra: float | None) -> MoonInfluence:
    if ra is None:
        return MoonInfluence()
    phase = (ra / 15) % 24
    return MoonInfluence(
        emotional_intensity=0.8 if phase < 3 or phase > 21 else 0.3,
        emotional_balance=0.7 if 10 < phase < 14 else 0.3,
    )


def venus_influence(ra: float | None) -> VenusInfluence:
    if ra is None:
        return VenusInfluence()
    return VenusInfluence(team_harmony=0.7 if math.sin(ra * math.pi / 180) > 0.5 else 0.3)


class _ForecastBuilder:
    def __init__(self) -> None:
        self.tracker = OutlookTracker()
        self.fragments: list[str] = []
        self.recommendations: list[str] = []

    def check(self, score: float, gate: float, signal: Outlook, fragment: str, *recommendations: str) -> None:
        if score <= gate:
            return
        self.tracker.record(signal)
        self.fragments.append(fragment)
        self.recommendations.extend(recommendations)

    def confidence(self) -> float:
        if not self.tracker.fired:
            return BASE_CONFIDENCE
        return round(min(MAX_CONFIDENCE, BASE_CONFIDENCE + CONFIDENCE_STEP * self.tracker.fired), 2)

    def fields(self, neutral_message: str, neutral_recommendation: str) -> dict:
        if not self.fragments:
            return {
                "overall_outlook": Outlook.NEUTRAL,
                "confidence": BASE_CONFIDENCE,
                "recommendations": (neutral_recommendation,),
                "cosmic_message": neutral_message,
            }
        return {
            "overall_outlook": self.tracker.state,
            "confidence": self.confidence(),
            "recommendations": tuple(self.recommendations),
            "cosmic_message": " ".join(self.fragments),
        }


def build_deployment_forecast(
    record: EphemerisRecord,
    birth_record: EphemerisRecord | None = None,
) -> DeploymentForecast:
    mercury = mercury_influence(record.ra(Body.MERCURY))
    mars = mars_influence(record.ra(Body.MARS))
    saturn = saturn_influence(record.ra(Body.SATURN))

    builder = _ForecastBuilder()
    builder.check(
        mercury.retrograde_risk,
        0.7,
        CHALLENGING,
        "Mercury's position signals elevated deployment risk.",
        "Double-check configuration changes before merging",
        "Prefer feature flags and staged rollouts",
    )
    builder.check(
        mercury.clarity,
        0.6,
        FAVORABLE,
        "Mercury brings clarity to release communication.",
        "Good window for coordinated releases with clear changelogs",
    )
    builder.check(
        mars.conflict_potential,
        0.7,
        CHALLENGING,
        "Mars stirs conflict in production systems.",
        "Keep rollback plans ready",
        "Avoid large schema migrations",
    )
    builder.check(
        mars.protective_energy,
        0.6,
        FAVORABLE,
        "Mars lends protective momentum to infrastructure work.",
        "Ship infrastructure hardening changes",
    )
    builder.check(
        saturn.discipline,
        0.7,
        FAVORABLE,
        "Saturn rewards disciplined release processes.",
        "Enforce full test suites and review gates before release",
    )
    if birth_record is not None:
        natal_mercury = mercury_influence(birth_record.ra(Body.MERCURY))
        builder.check(
            natal_mercury.retrograde_risk,
            0.7,
            CHALLENGING,
            "Your natal Mercury amplifies deployment sensitivity today.",
            "Pair with a teammate on your own deployments",
        )
    return DeploymentForecast(**builder.fields(NEUTRAL_DEPLOYMENT_MESSAGE, NEUTRAL_DEPLOYMENT_RECOMMENDATION))


def build_on_call_forecast(
    record: EphemerisRecord,
    birth_record: EphemerisRecord | None = None,
) -> OnCallForecast:
    moon = moon_influence(record.ra(Body.MOON))
    mars = mars_influence(record.ra(Body.MARS))
    venus = venus_influence(record.ra(Body.VENUS))

    builder = _ForecastBuilder()
    builder.check(
        moon.emotional_intensity,
        0.7,
        CHALLENGING,
        "The Moon heightens emotional reactions to incidents.",
        "Schedule backup on-call coverage",
        "Keep incident communication calm and factual",
    )
    builder.check(
        moon.emotional_balance,
        0.6,
        FAVORABLE,
        "The Moon supports balanced on-call shifts.",
        "Good day for on-call handoffs and runbook reviews",
    )
    builder.check(
        mars.incident_magnetism,
        0.7,
        CHALLENGING,
        "Mars draws incidents toward critical systems.",
        "Verify alerting thresholds and escalation paths",
    )
    builder.check(
        mars.energy,
        0.7,
        FAVORABLE,
        "Mars energizes incident response.",
        "Clear out lingering alert noise while energy is high",
    )
    builder.check(
        venus.team_harmony,
        0.6,
        FAVORABLE,
        "Venus fosters mutual support during incidents.",
        "Lean on pairing during incident response",
    )
    if birth_record is not None:
        natal_moon = moon_influence(birth_record.ra(Body.MOON))
        builder.check(
            natal_moon.emotional_intensity,
            0.7,
            CHALLENGING,
            "Your natal Moon asks you to guard your own energy on shift.",
            "Take breaks between pages and hand off when fatigued",
        )
    return OnCallForecast(**builder.fields(NEUTRAL_ON_CALL_MESSAGE, NEUTRAL_ON_CALL_RECOMMENDATION))


def generate_developer_insights(
    record: EphemerisRecord,
    birth_record: EphemerisRecord | None = None,
) -> DeveloperInsights:
    return DeveloperInsights(
        deployment_forecast=build_deployment_forecast(record, birth_record),
        on_call_forecast=build_on_call_forecast(record, birth_record),
    )
