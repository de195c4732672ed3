"""
AskBoard Backend: Database Engine Management
=============================================

What:  Async SQLAlchemy engine, declarative base and lifecycle helpers.
How:   Creates an async engine with connection pooling at import time.
       Sessions are not handed out per request: the Store
       (services/store.py) checks out one connection per query, so
       concurrent fan-out queries never share a connection.
Who:   Used by the Store, the health route, Alembic and the test fixtures.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    An aggregated feed of N questions borrows up to 2N connections at once
    (answers + best answer per question), so feed_limit and pool size move
    together.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from askboard.config import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    """
    Engine keyword arguments for the given URL.

    SQLite (tests) uses a non-queue pool that rejects the sizing arguments,
    so they are only passed for server databases.
    """
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine configured from settings for `database_url`."""
    return create_async_engine(database_url, **_engine_options(database_url))


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for migrations and the
    test suite uses for `create_all`.
    """
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
