"""Pydantic schemas for horoscope output."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PredictionLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    POSITIVE = "positive"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    NORMAL = "normal"
    FAVORABLE = "favorable"


class Outlook(str, Enum):
    NEUTRAL = "neutral"
    FAVORABLE = "favorable"
    CHALLENGING = "challenging"
    MIXED = "mixed"


class Prediction(BaseModel):
    """One fired rule."""

    model_config = ConfigDict(frozen=True)

    category: str
    level: PredictionLevel
    message: str
    confidence: float = Field(gt=0.0, le=1.0)
    body: str


class PlanetSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    domain: str
    ra: float | None = None
    sign: str
    influence_strength: str


class Forecast(BaseModel):
    """Threshold-gated forecast built from planetary influences."""

    model_config = ConfigDict(frozen=True)

    overall_outlook: Outlook = Outlook.NEUTRAL
    confidence: float = Field(ge=0.0, le=1.0)
    recommendations: tuple[str, ...] = ()
    cosmic_message: str


class DeploymentForecast(Forecast):
    pass


class OnCallForecast(Forecast):
    pass


class DeveloperInsights(BaseModel):
    model_config = ConfigDict(frozen=True)

    deployment_forecast: DeploymentForecast
    on_call_forecast: OnCallForecast


class HoroscopeResult(BaseModel):
    """Complete horoscope for one date."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    birth_date: dt.date | None = None
    predictions: tuple[Prediction, ...] = ()
    overall_risk_level: RiskLevel
    cosmic_advice: str
    planetary_summary: tuple[PlanetSummary, ...] = ()
    developer_insights: DeveloperInsights
    using_fallback_data: bool = False
