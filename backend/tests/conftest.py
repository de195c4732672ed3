"""
AskBoard Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_store:   AsyncMock Store (no database at all)
    ├── store:        Real Store over a fresh SQLite file (aiosqlite)
    ├── seed:         Inserts users/questions/answers/best answers into `store`
    └── test_client:  HTTPX AsyncClient with get_store overridden to `store`

The SQLite store runs every query except the ranked ("all") search, which
needs PostgreSQL full text functions; that builder is checked by compiling
it against the PostgreSQL dialect instead.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Optional
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any askboard imports
# The engine and settings singletons are built at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import insert

import askboard.models  # noqa: F401  (registers tables with Base.metadata)
from askboard.database import Base, build_engine
from askboard.models.answer import Answer, BestAnswer
from askboard.models.question import Question, Topic
from askboard.models.user import User
from askboard.services.store import QueryResult, Store, get_store

# Fixed clock for seeded rows; `minute` offsets give a deterministic order
T0 = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def at(minute: int) -> datetime:
    return T0 + timedelta(minutes=minute)


def question_row(qid: int = 1, uid: str = "asker", **overrides) -> dict:
    """A raw `questions` row as the Store returns it."""
    row = {
        "qid": qid,
        "uid": uid,
        "title": f"Question {qid}",
        "body": "How does it work?",
        "topic": "Science.Biology",
        "created_at": T0,
    }
    row.update(overrides)
    return row


class Seeder:
    """Writes fixture rows through the Store under test."""

    def __init__(self, store: Store):
        self.store = store

    async def user(self, uid: str, username: Optional[str] = None, bio: str = "") -> None:
        await self.store.query(
            insert(User).values(uid=uid, username=username or uid, bio=bio, created_at=T0)
        )

    async def topic(self, topic_path: str) -> None:
        await self.store.query(insert(Topic).values(topic_path=topic_path))

    async def question(
        self,
        qid: int,
        uid: str = "asker",
        title: Optional[str] = None,
        body: str = "How does it work?",
        topic: str = "Science.Biology",
        minute: int = 0,
    ) -> None:
        await self.store.query(
            insert(Question).values(
                qid=qid,
                uid=uid,
                title=title or f"Question {qid}",
                body=body,
                topic=topic,
                created_at=at(minute),
            )
        )

    async def answer(self, qid: int, uid: str, body: str = "An answer", minute: int = 0) -> None:
        await self.store.query(
            insert(Answer).values(qid=qid, uid=uid, body=body, created_at=at(minute))
        )

    async def best_answer(self, qid: int, uid: str) -> None:
        await self.store.query(insert(BestAnswer).values(qid=qid, uid=uid))


@pytest.fixture
def mock_store():
    """
    Provides a mock Store.

    What:    query() is an AsyncMock returning an empty QueryResult by default.
    Usage:
        mock_store.query.return_value = QueryResult(rows=[question_row()], row_count=1)
    """
    store = MagicMock(spec=Store)
    store.query = AsyncMock(return_value=QueryResult())
    store.ping = AsyncMock()
    return store


@pytest_asyncio.fixture
async def store(tmp_path) -> AsyncGenerator[Store, None]:
    """A Store over a throwaway SQLite database with every table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'askboard_test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield Store(engine, timeout=5.0)

    await engine.dispose()


@pytest_asyncio.fixture
async def seed(store) -> Seeder:
    return Seeder(store)


@pytest_asyncio.fixture
async def test_client(store) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client wired to the SQLite store.

    How:     Uses ASGITransport to route requests directly to the app, with
             the get_store dependency overridden.
    """
    from askboard.main import app

    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
