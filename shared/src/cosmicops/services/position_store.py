"""Position store - compute-once cache of ephemeris records keyed by (date, location)."""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cosmicops.models import EphemerisData
from cosmicops.schemas.ephemeris import BODY_ORDER, EphemerisRecord

logger = logging.getLogger(__name__)

_BODY_COLUMNS: tuple[str, ...] = tuple(
    f"{body.value}_{field}" for body in BODY_ORDER for field in ("ra", "dec", "distance")
)
_REPLACED_COLUMNS: tuple[str, ...] = _BODY_COLUMNS + ("using_fallback_data", "data_sources")


class PositionStore(Protocol):
    async def get(self, target_date: date, location: str) -> EphemerisRecord | None: ...

    async def upsert(self, record: EphemerisRecord) -> None: ...


class InMemoryPositionStore:
    """Dict-backed store for tests and offline runs."""

    def __init__(self) -> None:
        self._records: dict[tuple[date, str], EphemerisRecord] = {}

    async def get(self, target_date: date, location: str) -> EphemerisRecord | None:
        return self._records.get((target_date, location))

    async def upsert(self, record: EphemerisRecord) -> None:
        self._records[(record.date, record.location)] = record

    def __len__(self) -> int:
        return len(self._records)


def _row_to_dict(row: EphemerisData) -> dict:
    data = {column: getattr(row, column) for column in _REPLACED_COLUMNS}
    data["date"] = row.date
    data["location"] = row.location
    data["created_at"] = row.created_at
    return data


class SqlPositionStore:
    """PostgreSQL-backed store; upsert fully replaces the row for a key."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, target_date: date, location: str) -> EphemerisRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(EphemerisData).where(
                    EphemerisData.date == target_date,
                    EphemerisData.location == location,
                )
            )
            row = result.scalars().first()
        if row is None:
            return None
        return EphemerisRecord.from_row(_row_to_dict(row))

    async def upsert(self, record: EphemerisRecord) -> None:
        values = record.to_row()
        stmt = pg_insert(EphemerisData).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[EphemerisData.date, EphemerisData.location],
            set_={column: stmt.excluded[column] for column in _REPLACED_COLUMNS},
        )
        async with self._session_factory() as session:
            await session.execute(stmt)
            await session.commit()
        logger.info(
            "Stored ephemeris for %s @ %s (fallback=%s)",
            record.date,
            record.location,
            record.using_fallback_data,
        )
