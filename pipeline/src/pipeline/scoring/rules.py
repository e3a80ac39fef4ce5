"""Per-body threshold rules that turn positions into predictions."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from cosmicops.schemas.ephemeris import Body, EphemerisRecord
from cosmicops.schemas.horoscope import Prediction, PredictionLevel
from ephemeris.bodies import ra_to_sign

PERSONAL_PREFIX = "personal_"
PERSONAL_MESSAGE_PREFIX = "Natal chart: "


@dataclass(frozen=True)
class Band:
    """One outcome for a body: fires when `matches(signal)` holds."""

    matches: Callable[[float], bool]
    category: str
    level: PredictionLevel
    confidence: float
    template: str


@dataclass(frozen=True)
class PredictionRule:
    """Bands for one body, checked in order; the first match wins."""

    body: Body
    name: str
    signal: Callable[[float, float], float]  # (ra, distance) -> signal
    bands: tuple[Band, ...]
    uses_distance: bool = False


def _mars_signal(ra: float, _distance: float) -> float:
    return abs(math.fmod(ra, 30))


def _mercury_signal(ra: float, _distance: float) -> float:
    return ra % 360


def _venus_signal(ra: float, _distance: float) -> float:
    return math.sin(ra * math.pi / 180)


def _jupiter_signal(_ra: float, distance: float) -> float:
    return distance


def _saturn_signal(ra: float, _distance: float) -> float:
    return math.cos(ra * math.pi / 180)


def _moon_signal(ra: float, _distance: float) -> float:
    return (ra / 15) % 24


def _sun_signal(ra: float, _distance: float) -> float:
    return abs(math.sin(ra * math.pi / 180))


HIGH = PredictionLevel.HIGH
MEDIUM = PredictionLevel.MEDIUM
POSITIVE = PredictionLevel.POSITIVE

# Evaluation order is also the order predictions appear in the result
RULES: tuple[PredictionRule, ...] = (
    PredictionRule(
        body=Body.MARS,
        name="Mars",
        signal=_mars_signal,
        bands=(
            Band(
                lambda s: s > 27,
                "incident_risk",
                HIGH,
                0.75,
                "Mars in {sign} suggests heightened potential for critical incidents. "
                "Infrastructure and security teams should be extra vigilant. "
                "Review monitoring systems and incident response procedures.",
            ),
            Band(
                lambda s: s > 20,
                "incident_risk",
                MEDIUM,
                0.6,
                "Mars in {sign} indicates moderate system tension. Good time to proactively "
                "address technical debt and potential failure points.",
            ),
            Band(
                lambda s: s < 5,
                "system_stability",
                POSITIVE,
                0.5,
                "Mars in {sign} settles into a steady rhythm. Systems should hold firm; "
                "a good day for resilience drills and capacity planning.",
            ),
        ),
    ),
    PredictionRule(
        body=Body.MERCURY,
        name="Mercury",
        signal=_mercury_signal,
        bands=(
            Band(
                lambda s: s >= 330 or s < 30,
                "communication_risk",
                MEDIUM,
                0.65,
                "Mercury in {sign} may cause communication and deployment-related issues. "
                "Double-check configurations, review change management processes, "
                "and ensure clear team communication.",
            ),
            Band(
                lambda s: 150 <= s <= 210,
                "communication_flow",
                POSITIVE,
                0.6,
                "Mercury in {sign} clears the channels. Handoffs, design reviews and "
                "release notes land well today.",
            ),
        ),
    ),
    PredictionRule(
        body=Body.VENUS,
        name="Venus",
        signal=_venus_signal,
        bands=(
            Band(
                lambda s: s > 0.5,
                "team_harmony",
                POSITIVE,
                0.55,
                "Venus in {sign} favors team collaboration and user satisfaction. "
                "Excellent day for cross-team coordination, user experience improvements, "
                "and complex deployments.",
            ),
        ),
    ),
    PredictionRule(
        body=Body.JUPITER,
        name="Jupiter",
        signal=_jupiter_signal,
        uses_distance=True,
        bands=(
            Band(
                lambda s: s < 5,
                "growth_opportunities",
                POSITIVE,
                0.5,
                "Jupiter in {sign} creates favorable conditions for implementing process "
                "improvements, conducting post-mortems, and expanding system capabilities.",
            ),
        ),
    ),
    PredictionRule(
        body=Body.SATURN,
        name="Saturn",
        signal=_saturn_signal,
        bands=(
            Band(
                lambda s: s > 0.7,
                "testing_focus",
                MEDIUM,
                0.6,
                "Saturn in {sign} emphasizes the importance of thorough testing and structured "
                "processes. Focus on code reviews, automated testing, and compliance checks.",
            ),
            Band(
                lambda s: s < -0.5,
                "process_flexibility",
                POSITIVE,
                0.5,
                "Saturn in {sign} loosens its grip. Room to simplify processes and retire "
                "checks that no longer pull their weight.",
            ),
        ),
    ),
    PredictionRule(
        body=Body.MOON,
        name="Moon",
        signal=_moon_signal,
        bands=(
            Band(
                lambda s: s < 3 or s > 21,
                "on_call_management",
                MEDIUM,
                0.7,
                "Moon in {sign} suggests heightened emotional responses to incidents. "
                "Ensure adequate on-call coverage and support systems for team well-being.",
            ),
            Band(
                lambda s: 10 <= s <= 14,
                "team_wellness",
                POSITIVE,
                0.55,
                "Moon in {sign} brings a calm tide. On-call shifts should feel lighter; "
                "a good moment for retrospectives and rest.",
            ),
        ),
    ),
    PredictionRule(
        body=Body.SUN,
        name="Sun",
        signal=_sun_signal,
        bands=(
            Band(
                lambda s: s > 0.7,
                "leadership_opportunity",
                POSITIVE,
                0.6,
                "Sun in {sign} highlights leadership opportunities. Strong day for architectural "
                "decisions, system governance, and establishing technical authority.",
            ),
        ),
    ),
)


def evaluate_rule(rule: PredictionRule, record: EphemerisRecord, *, personal: bool = False) -> Prediction | None:
    position = record.position(rule.body)
    if position.ra is None or (rule.uses_distance and position.distance is None):
        return None

    signal = rule.signal(position.ra, position.distance if position.distance is not None else 0.0)
    for band in rule.bands:
        if not band.matches(signal):
            continue
        message = band.template.format(sign=ra_to_sign(position.ra))
        category = band.category
        if personal:
            category = PERSONAL_PREFIX + category
            message = PERSONAL_MESSAGE_PREFIX + message
        return Prediction(
            category=category,
            level=band.level,
            message=message,
            confidence=band.confidence,
            body=rule.name,
        )
    return None


def evaluate_predictions(
    record: EphemerisRecord,
    birth_record: EphemerisRecord | None = None,
) -> list[Prediction]:
    """Run every rule against the record, then again against the birth record."""
    passes = [(record, False)]
    if birth_record is not None:
        passes.append((birth_record, True))

    predictions: list[Prediction] = []
    for source, personal in passes:
        for rule in RULES:
            prediction = evaluate_rule(rule, source, personal=personal)
            if prediction is not None:
                predictions.append(prediction)
    return predictions
