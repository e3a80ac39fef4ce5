"""Pydantic schemas for ephemeris data."""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class Body(str, Enum):
    """Tracked celestial bodies, in acquisition order."""

    SUN = "sun"
    MERCURY = "mercury"
    VENUS = "venus"
    MARS = "mars"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"
    MOON = "moon"


BODY_ORDER: tuple[Body, ...] = tuple(Body)


class Provenance(str, Enum):
    """Where a position came from."""

    LIVE = "live"
    FALLBACK = "fallback"
    ERROR = "error"


FALLBACK_WARNING = (
    "Some or all planetary positions are approximated due to ephemeris source unavailability"
)


class Position(BaseModel):
    """One body's measurement for one date."""

    model_config = ConfigDict(frozen=True)

    body: Body
    ra: float | None = None
    dec: float | None = None
    distance: float | None = None
    provenance: Provenance

    @model_validator(mode="after")
    def _check_bounds(self) -> Position:
        values = (self.ra, self.dec, self.distance)
        if self.provenance is Provenance.ERROR:
            if any(v is not None for v in values):
                raise ValueError("error positions must not carry coordinates")
            return self
        if any(v is None for v in values):
            raise ValueError(f"{self.provenance.value} position for {self.body.value} is incomplete")
        if not 0.0 <= self.ra < 360.0:
            raise ValueError(f"ra {self.ra} out of range [0, 360)")
        if not -90.0 <= self.dec <= 90.0:
            raise ValueError(f"dec {self.dec} out of range [-90, 90]")
        if self.distance <= 0:
            raise ValueError(f"distance {self.distance} must be positive")
        return self

    @classmethod
    def error(cls, body: Body) -> Position:
        return cls(body=body, provenance=Provenance.ERROR)


class EphemerisRecord(BaseModel):
    """All nine positions for a (date, location) key."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    location: str
    positions: tuple[Position, ...]
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))

    @field_validator("positions")
    @classmethod
    def _one_position_per_body(cls, positions: tuple[Position, ...]) -> tuple[Position, ...]:
        by_body = {p.body: p for p in positions}
        if len(by_body) != len(positions):
            raise ValueError("duplicate body in positions")
        missing = [b.value for b in BODY_ORDER if b not in by_body]
        if missing:
            raise ValueError(f"missing positions for: {', '.join(missing)}")
        return tuple(by_body[b] for b in BODY_ORDER)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def using_fallback_data(self) -> bool:
        return any(p.provenance is not Provenance.LIVE for p in self.positions)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def sources(self) -> dict[str, Provenance]:
        return {p.body.value: p.provenance for p in self.positions}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warning(self) -> str | None:
        return FALLBACK_WARNING if self.using_fallback_data else None

    def position(self, body: Body) -> Position:
        for p in self.positions:
            if p.body is body:
                return p
        raise KeyError(body)

    def ra(self, body: Body) -> float | None:
        return self.position(body).ra

    def to_row(self) -> dict[str, Any]:
        """Flatten into the 27-column storage shape."""
        row: dict[str, Any] = {"date": self.date, "location": self.location}
        for p in self.positions:
            row[f"{p.body.value}_ra"] = p.ra
            row[f"{p.body.value}_dec"] = p.dec
            row[f"{p.body.value}_distance"] = p.distance
        row["using_fallback_data"] = self.using_fallback_data
        row["data_sources"] = {body: prov.value for body, prov in self.sources.items()}
        return row

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> EphemerisRecord:
        """Rebuild a record from the flat storage shape."""
        sources = row.get("data_sources") or {}
        positions = []
        for body in BODY_ORDER:
            ra = _as_float(row.get(f"{body.value}_ra"))
            dec = _as_float(row.get(f"{body.value}_dec"))
            distance = _as_float(row.get(f"{body.value}_distance"))
            raw = sources.get(body.value)
            if raw is None:
                provenance = Provenance.LIVE if ra is not None else Provenance.ERROR
            else:
                provenance = Provenance(raw)
            if provenance is Provenance.ERROR:
                positions.append(Position.error(body))
            else:
                positions.append(
                    Position(body=body, ra=ra, dec=dec, distance=distance, provenance=provenance)
                )
        kwargs: dict[str, Any] = {
            "date": row["date"],
            "location": row["location"],
            "positions": tuple(positions),
        }
        if row.get("created_at") is not None:
            kwargs["created_at"] = row["created_at"]
        return cls(**kwargs)


def _as_float(value: Any) -> float | None:
    return None if value is None else float(value)


class BulkResult(BaseModel):
    """Outcome for one date of a bulk fetch."""

    date: dt.date
    record: EphemerisRecord | None = None
    error: str | None = None
