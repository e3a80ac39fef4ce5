"""SQLAlchemy ORM models for cosmicops."""

from cosmicops.models.base import Base
from cosmicops.models.ephemeris_data import EphemerisData

__all__ = [
    "Base",
    "EphemerisData",
]
