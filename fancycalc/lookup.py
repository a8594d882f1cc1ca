"""
Tabular lookup source for grade resolution.

The grade resolver only needs two read operations:

    query_equals(table, {column: value})                 exact multi-column match
    query_range(table, {column: value}, (lo, hi, x))     match + lo <= x <= hi

Rows come back as plain dicts. Storage problems raise LookupFailure so a
broken database is never mistaken for "no matching rows".
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from sqlalchemy import MetaData, and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .database import Base


class LookupFailure(Exception):
    """The lookup source could not answer a query."""


class LookupSource(ABC):

    @abstractmethod
    def query_equals(self, table: str, predicates: Mapping[str, object]) -> list[dict]:
        """Rows whose columns equal every predicate value."""

    @abstractmethod
    def query_range(self, table: str, equals: Mapping[str, object],
                    range_: tuple[str, str, float]) -> list[dict]:
        """Rows matching `equals` whose [min_column, max_column] bracket the value (inclusive)."""


class SqlLookupSource(LookupSource):
    """Lookup source backed by the SQLAlchemy grade tables."""

    def __init__(self, db: Session, metadata: Optional[MetaData] = None):
        self.db = db
        self.metadata = metadata if metadata is not None else Base.metadata

    def _table(self, name: str):
        table = self.metadata.tables.get(name)
        if table is None:
            raise LookupFailure(f"Unknown lookup table: {name}")
        return table

    def _column(self, table, name: str):
        if name not in table.c:
            raise LookupFailure(f"Unknown column {name} on lookup table {table.name}")
        return table.c[name]

    def _fetch(self, table, conditions: list) -> list[dict]:
        stmt = select(table).where(and_(*conditions))
        try:
            result = self.db.execute(stmt)
            return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            raise LookupFailure(f"Lookup on {table.name} failed") from e

    def query_equals(self, table: str, predicates: Mapping[str, object]) -> list[dict]:
        t = self._table(table)
        conditions = [self._column(t, col) == value for col, value in predicates.items()]
        return self._fetch(t, conditions)

    def query_range(self, table: str, equals: Mapping[str, object],
                    range_: tuple[str, str, float]) -> list[dict]:
        t = self._table(table)
        min_column, max_column, value = range_
        conditions = [self._column(t, col) == v for col, v in equals.items()]
        conditions.append(self._column(t, min_column) <= value)
        conditions.append(self._column(t, max_column) >= value)
        return self._fetch(t, conditions)
