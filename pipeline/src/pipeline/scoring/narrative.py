"""Cosmic advice templates and planetary summary."""

from __future__ import annotations

from collections.abc import Sequence

from cosmicops.schemas.ephemeris import EphemerisRecord
from cosmicops.schemas.horoscope import PlanetSummary, Prediction, PredictionLevel
from ephemeris.bodies import SUMMARY_BODIES, influence_intensity, ra_to_sign

CAUTIONARY_ADVICE = (
    "The cosmic alignment suggests extra caution today. Review your monitoring systems, "
    "strengthen communication protocols, and ensure your incident response teams are well-prepared."
)
FAVORABLE_ADVICE = (
    "Favorable planetary energies support smooth operations and productive collaboration. "
    "An excellent day for ambitious deployments, process improvements, and team coordination."
)
BALANCED_ADVICE = (
    "Balanced cosmic energies suggest a typical operational day. Maintain standard vigilance, "
    "follow established procedures, and stay alert to emerging patterns."
)

_RISK_LEVELS = {PredictionLevel.HIGH, PredictionLevel.MEDIUM}


def generate_cosmic_advice(predictions: Sequence[Prediction]) -> str:
    risk_count = sum(1 for p in predictions if p.level in _RISK_LEVELS)
    positive_count = sum(1 for p in predictions if p.level is PredictionLevel.POSITIVE)

    if risk_count > positive_count:
        return CAUTIONARY_ADVICE
    if positive_count > risk_count:
        return FAVORABLE_ADVICE
    return BALANCED_ADVICE


def generate_planetary_summary(record: EphemerisRecord) -> list[PlanetSummary]:
    summary = []
    for body, profile in SUMMARY_BODIES.items():
        ra = record.ra(body)
        summary.append(
            PlanetSummary(
                name=profile.name,
                symbol=profile.symbol,
                domain=profile.domain,
                ra=ra,
                sign=ra_to_sign(ra),
                influence_strength=influence_intensity(ra),
            )
        )
    return summary
