"""Ephemeris data model - one row per (date, location)."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from cosmicops.models.base import Base


class EphemerisData(Base):
    __tablename__ = "ephemeris_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    location: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text("'New York City'")
    )

    sun_ra: Mapped[float | None] = mapped_column(Float)
    sun_dec: Mapped[float | None] = mapped_column(Float)
    sun_distance: Mapped[float | None] = mapped_column(Float)
    mercury_ra: Mapped[float | None] = mapped_column(Float)
    mercury_dec: Mapped[float | None] = mapped_column(Float)
    mercury_distance: Mapped[float | None] = mapped_column(Float)
    venus_ra: Mapped[float | None] = mapped_column(Float)
    venus_dec: Mapped[float | None] = mapped_column(Float)
    venus_distance: Mapped[float | None] = mapped_column(Float)
    mars_ra: Mapped[float | None] = mapped_column(Float)
    mars_dec: Mapped[float | None] = mapped_column(Float)
    mars_distance: Mapped[float | None] = mapped_column(Float)
    jupiter_ra: Mapped[float | None] = mapped_column(Float)
    jupiter_dec: Mapped[float | None] = mapped_column(Float)
    jupiter_distance: Mapped[float | None] = mapped_column(Float)
    saturn_ra: Mapped[float | None] = mapped_column(Float)
    saturn_dec: Mapped[float | None] = mapped_column(Float)
    saturn_distance: Mapped[float | None] = mapped_column(Float)
    uranus_ra: Mapped[float | None] = mapped_column(Float)
    uranus_dec: Mapped[float | None] = mapped_column(Float)
    uranus_distance: Mapped[float | None] = mapped_column(Float)
    neptune_ra: Mapped[float | None] = mapped_column(Float)
    neptune_dec: Mapped[float | None] = mapped_column(Float)
    neptune_distance: Mapped[float | None] = mapped_column(Float)
    moon_ra: Mapped[float | None] = mapped_column(Float)
    moon_dec: Mapped[float | None] = mapped_column(Float)
    moon_distance: Mapped[float | None] = mapped_column(Float)

    # Provenance
    using_fallback_data: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    data_sources: Mapped[dict] = mapped_column(
        JSONB, nullable=False, server_default=text("'{}'::jsonb")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("NOW()")
    )

    __table_args__ = (
        UniqueConstraint("date", "location", name="uq_ephemeris_date_location"),
        Index("idx_ephemeris_date", "date"),
    )
