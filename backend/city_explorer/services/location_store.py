"""
City Explorer Backend — Location Store
========================================

What:  The persistence interface the resolver depends on, plus its
       SQLAlchemy implementation.
How:   LocationStore declares two operations; SqlLocationStore implements
       them on top of the request's AsyncSession. Tests substitute an
       in-memory store.

Write semantics:
    add_if_absent() is a conditional insert keyed by search_query. When two
    workers miss on the same query at once, the second insert is ignored
    and both callers get the row that won.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.exceptions import StoreError
from city_explorer.models.location import LocationRecord
from city_explorer.schemas.entities import Location

logger = logging.getLogger(__name__)


class LocationStore(ABC):
    """
    Abstract access to cached Location rows.

    Contract:
        - get() matches search_query exactly (no case folding, no trimming)
        - add_if_absent() never overwrites an existing row
        - Implementation errors surface as StoreError
    """

    @abstractmethod
    async def get(self, search_query: str) -> Optional[Location]:
        """Return the cached Location for `search_query`, or None."""
        ...

    @abstractmethod
    async def add_if_absent(self, location: Location) -> Location:
        """
        Store `location` unless a row with the same search_query exists.

        Returns:
            The Location now stored under that key, which is the existing
            row when another writer got there first.
        """
        ...


class SqlLocationStore(LocationStore):
    """LocationStore backed by the `location` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, search_query: str) -> Optional[Location]:
        try:
            result = await self.session.execute(
                select(LocationRecord)
                .where(LocationRecord.search_query == search_query)
                .order_by(LocationRecord.id)
                .limit(1)
            )
            record = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Location lookup failed for %r: %s", search_query, str(e))
            raise StoreError(context={"operation": "get", "error_type": type(e).__name__}) from e

        if record is None:
            return None
        return Location.model_validate(record)

    async def add_if_absent(self, location: Location) -> Location:
        values = location.model_dump()
        try:
            dialect = self.session.get_bind().dialect.name
            if dialect in ("postgresql", "sqlite"):
                await self.session.execute(self._insert_ignoring_conflict(dialect, values))
            else:
                await self._insert_in_savepoint(values)
        except SQLAlchemyError as e:
            logger.error("Location insert failed for %r: %s", location.search_query, str(e))
            raise StoreError(context={"operation": "add", "error_type": type(e).__name__}) from e

        stored = await self.get(location.search_query)
        if stored is None:
            raise StoreError(context={"operation": "add", "reason": "row missing after insert"})
        return stored

    @staticmethod
    def _insert_ignoring_conflict(dialect: str, values: dict):
        dialect_insert = pg_insert if dialect == "postgresql" else sqlite_insert
        return (
            dialect_insert(LocationRecord)
            .values(**values)
            .on_conflict_do_nothing(index_elements=[LocationRecord.search_query])
        )

    async def _insert_in_savepoint(self, values: dict) -> None:
        # Backends without ON CONFLICT: a unique violation only rolls back the savepoint
        try:
            async with self.session.begin_nested():
                await self.session.execute(insert(LocationRecord).values(**values))
        except IntegrityError:
            logger.info("Location %r already stored by a concurrent writer", values["search_query"])
