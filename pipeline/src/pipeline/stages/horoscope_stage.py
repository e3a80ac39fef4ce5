"""Horoscope scoring stage."""

from __future__ import annotations

import logging

from cosmicops.schemas.ephemeris import EphemerisRecord
from cosmicops.schemas.horoscope import HoroscopeResult

from pipeline.scoring.insights import generate_developer_insights
from pipeline.scoring.narrative import generate_cosmic_advice, generate_planetary_summary
from pipeline.scoring.risk import calculate_overall_risk
from pipeline.scoring.rules import evaluate_predictions

logger = logging.getLogger(__name__)


def run_horoscope_stage(
    record: EphemerisRecord,
    birth_record: EphemerisRecord | None = None,
) -> HoroscopeResult:
    predictions = evaluate_predictions(record, birth_record)
    risk = calculate_overall_risk(predictions)
    logger.info("Horoscope for %s: %d predictions, risk=%s", record.date, len(predictions), risk.value)
    return HoroscopeResult(
        date=record.date,
        birth_date=birth_record.date if birth_record is not None else None,
        predictions=tuple(predictions),
        overall_risk_level=risk,
        cosmic_advice=generate_cosmic_advice(predictions),
        planetary_summary=tuple(generate_planetary_summary(record)),
        developer_insights=generate_developer_insights(record, birth_record),
        using_fallback_data=record.using_fallback_data,
    )
