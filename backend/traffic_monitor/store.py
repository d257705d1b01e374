"""
Record stores for vehicle detections.
The aggregator only needs read access; add_many exists for seeding and tests.
"""
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Iterable, List

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from traffic_monitor.database import Database
from traffic_monitor.exceptions import DataAccessError
from traffic_monitor.models import VehicleDetectionRecord, VehicleModel

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """
    Read interface over the vehicle detection collection.
    """

    @abstractmethod
    async def fetch_all(self) -> List[VehicleDetectionRecord]:
        """Return every record in insertion order."""
        pass

    @abstractmethod
    async def fetch_recent(self, limit: int) -> List[VehicleDetectionRecord]:
        """Return the `limit` newest records, newest first; ties keep insertion order."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of stored records; part of the store contract for callers outside the aggregator."""
        pass

    @abstractmethod
    async def add_many(self, records: Iterable[VehicleDetectionRecord]) -> int:
        """Append records, returning how many were added."""
        pass


class InMemoryRecordStore(RecordStore):
    """Store backed by a list; handy for tests and offline analysis."""

    def __init__(self, records: Iterable[VehicleDetectionRecord] = ()):
        self._records: List[VehicleDetectionRecord] = list(records)

    async def fetch_all(self) -> List[VehicleDetectionRecord]:
        return list(self._records)

    async def fetch_recent(self, limit: int) -> List[VehicleDetectionRecord]:
        if limit <= 0:
            return []
        # sorted() is stable, so equal timestamps stay in insertion order
        ordered = sorted(self._records, key=lambda r: r.timestamp, reverse=True)
        return ordered[:limit]

    async def count(self) -> int:
        return len(self._records)

    async def add_many(self, records: Iterable[VehicleDetectionRecord]) -> int:
        new = list(records)
        self._records.extend(new)
        return len(new)


class SQLRecordStore(RecordStore):
    """
    Store backed by the `vehicles` table through SQLAlchemy.
    Any driver or query failure surfaces as DataAccessError.
    """

    def __init__(self, database: Database):
        self.database = database

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except (SQLAlchemyError, OSError) as e:
            logger.error("Record store %s failed: %s", operation, e)
            raise DataAccessError(f"Record store {operation} failed: {e}") from e

    async def fetch_all(self) -> List[VehicleDetectionRecord]:
        async with self._guard("fetch_all"):
            async with self.database.session() as session:
                result = await session.execute(select(VehicleModel).order_by(VehicleModel.id))
                return [VehicleDetectionRecord.from_orm_row(row) for row in result.scalars()]

    async def fetch_recent(self, limit: int) -> List[VehicleDetectionRecord]:
        if limit <= 0:
            return []
        async with self._guard("fetch_recent"):
            async with self.database.session() as session:
                result = await session.execute(
                    select(VehicleModel)
                    .order_by(VehicleModel.timestamp.desc(), VehicleModel.id)
                    .limit(limit)
                )
                return [VehicleDetectionRecord.from_orm_row(row) for row in result.scalars()]

    async def count(self) -> int:
        async with self._guard("count"):
            async with self.database.session() as session:
                result = await session.execute(select(func.count(VehicleModel.id)))
                return result.scalar() or 0

    async def add_many(self, records: Iterable[VehicleDetectionRecord]) -> int:
        rows = [record.to_orm() for record in records]
        async with self._guard("add_many"):
            async with self.database.session() as session:
                session.add_all(rows)
        logger.info("Stored %d vehicle records", len(rows))
        return len(rows)
