"""Integration test configuration."""

from datetime import date

import pytest
from cosmicops.schemas.ephemeris import BODY_ORDER, EphemerisRecord, Position, Provenance


@pytest.fixture
def sample_record():
    """A live record with a distinct right ascension per body."""
    positions = tuple(
        Position(
            body=body,
            ra=10.0 + 35.0 * i,
            dec=-5.0 + i,
            distance=0.5 + i,
            provenance=Provenance.LIVE,
        )
        for i, body in enumerate(BODY_ORDER)
    )
    return EphemerisRecord(date=date(2025, 7, 22), location="New York City", positions=positions)


@pytest.fixture
def sample_row(sample_record):
    """The same record in its flat 27-column storage shape."""
    return sample_record.to_row()
