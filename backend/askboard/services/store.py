"""
AskBoard Backend: Store (Persistence Boundary)
===============================================

What:  The single gateway between services and the relational database.
How:   `Store.query()` runs one SQLAlchemy statement on its own Core
       connection in a transaction, commits, and returns plain rows
       (column name → value) plus a row count. Every call runs under a
       deadline and every driver failure is converted to StoreError.
Who:   Passed by handle into every service call; injected into routes via
       the `get_store` FastAPI dependency.

Concurrency:
    A connection must not be shared between concurrently running tasks.
    Because each query checks out its own connection, the Aggregator can fan
    out many resolver calls at once; the engine pool is the only shared state.

Failure mapping:
    SQLAlchemyError / OSError     → StoreError (original chained)
    deadline exceeded             → StoreTimeoutError
    row does not fit its record   → MalformedRowError (see validate_rows)
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Executable

from askboard.config import settings
from askboard.database import engine as default_engine
from askboard.exceptions import MalformedRowError, StoreError, StoreTimeoutError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass
class QueryResult:
    """Rows returned by one statement, as plain dicts keyed by column name."""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0

    def first(self) -> Optional[Dict[str, Any]]:
        return self.rows[0] if self.rows else None


class Store:
    """
    Async relational store over an SQLAlchemy engine.

    Attributes:
        engine:  The AsyncEngine whose pool backs every query
        timeout: Per-call deadline in seconds
    """

    def __init__(self, engine: AsyncEngine, timeout: Optional[float] = None):
        self.engine = engine
        self.timeout = timeout if timeout is not None else settings.store_timeout_seconds

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def insert(self, table):
        """
        Dialect-specific INSERT construct for `table`.

        Both the PostgreSQL and SQLite constructs expose
        `on_conflict_do_update()` / `on_conflict_do_nothing()` with the same
        signature, so upsert-building services stay dialect-agnostic.
        """
        if self.dialect_name == "postgresql":
            return postgresql.insert(table)
        if self.dialect_name == "sqlite":
            return sqlite.insert(table)
        raise StoreError(
            message="This database does not support upserts",
            context={"dialect": self.dialect_name},
        )

    async def query(self, statement: Executable) -> QueryResult:
        """
        Execute one statement and return its rows.

        Writes are committed before returning. Statements without a result
        set (plain INSERT/UPDATE) return no rows and the driver's rowcount.

        Raises:
            StoreTimeoutError: The call exceeded `self.timeout` seconds
            StoreError: Any database or connection failure
        """
        try:
            return await asyncio.wait_for(self._execute(statement), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error("Store query exceeded %.1fs deadline", self.timeout)
            raise StoreTimeoutError(timeout=self.timeout) from None
        except (SQLAlchemyError, OSError) as e:
            logger.error("Store query failed (%s): %s", type(e).__name__, str(e))
            raise StoreError(context={"error_type": type(e).__name__}) from e

    async def _execute(self, statement: Executable) -> QueryResult:
        # Core execution: ORM entities in the statement compile to their tables
        # and the result is always a CursorResult, for reads and writes alike
        async with self.engine.begin() as conn:
            result = await conn.execute(statement)
            if result.returns_rows:
                rows = [dict(row) for row in result.mappings().all()]
                return QueryResult(rows=rows, row_count=len(rows))
            return QueryResult(rows=[], row_count=result.rowcount)

    async def ping(self) -> None:
        """Round-trip a trivial statement (health checks)."""
        await self.query(text("SELECT 1"))


def validate_rows(model: Type[RecordT], rows: Sequence[Dict[str, Any]]) -> List[RecordT]:
    """
    Convert raw rows into `model` records.

    Raises:
        MalformedRowError: A row is missing a column or holds a value of the
            wrong type for `model`.
    """
    try:
        return [model.model_validate(row) for row in rows]
    except PydanticValidationError as e:
        logger.error("Malformed %s row from store: %s", model.__name__, str(e))
        raise MalformedRowError(
            record=model.__name__,
            context={"error_count": e.error_count()},
        ) from e


# ── Singleton Instance ────────────────────────────────────────────────────
store = Store(default_engine)


def get_store() -> Store:
    """FastAPI dependency returning the application Store."""
    return store
