"""Weighted-sum overall risk."""

from __future__ import annotations

from collections.abc import Iterable

from cosmicops.schemas.horoscope import Prediction, PredictionLevel, RiskLevel

LEVEL_WEIGHTS: dict[PredictionLevel, float] = {
    PredictionLevel.HIGH: 3.0,
    PredictionLevel.MEDIUM: 2.0,
    PredictionLevel.LOW: 1.0,
    PredictionLevel.POSITIVE: -1.0,
}

HIGH_THRESHOLD = 3.0
MEDIUM_THRESHOLD = 1.0
FAVORABLE_THRESHOLD = -0.8


def total_risk(predictions: Iterable[Prediction]) -> float:
    return sum(LEVEL_WEIGHTS.get(p.level, 0.0) * p.confidence for p in predictions)


def calculate_overall_risk(predictions: Iterable[Prediction]) -> RiskLevel:
    score = total_risk(predictions)
    if score > HIGH_THRESHOLD:
        return RiskLevel.HIGH
    if score > MEDIUM_THRESHOLD:
        return RiskLevel.MEDIUM
    if score < FAVORABLE_THRESHOLD:
        return RiskLevel.FAVORABLE
    return RiskLevel.NORMAL
