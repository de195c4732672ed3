"""
AskBoard Backend: Store Boundary Tests
=======================================

What:  Tests for Store.query failure mapping and validate_rows.

What we test:
    ✅ A call slower than the deadline raises StoreTimeoutError
    ✅ Driver errors become StoreError with the original chained
    ✅ Rows missing columns or holding wrong types raise MalformedRowError
    ✅ Writes without RETURNING report a row count
"""

import asyncio
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select, text, update
from sqlalchemy.exc import OperationalError

from askboard.exceptions import MalformedRowError, StoreError, StoreTimeoutError
from askboard.models.answer import Answer
from askboard.models.karma import KarmaVote
from askboard.models.user import User
from askboard.schemas.records import QuestionRecord
from askboard.services.store import QueryResult, Store, validate_rows

from conftest import question_row


class TestStoreQuery:

    @pytest.mark.asyncio
    async def test_rows_are_plain_dicts(self, store, seed):
        await seed.user("u1", username="alice")

        result = await store.query(select(User.uid, User.username))

        assert result.rows == [{"uid": "u1", "username": "alice"}]
        assert result.row_count == 1
        assert result.first() == {"uid": "u1", "username": "alice"}

    @pytest.mark.asyncio
    async def test_orm_entity_statements(self, store, seed):
        """Table selects, aggregates and upserts built from ORM entities all return rows."""
        await seed.question(1)
        await seed.answer(1, "a", body="first")

        answers = await store.query(select(Answer.__table__).where(Answer.qid == 1))
        count = await store.query(select(func.count(Answer.uid).label("n")))
        upsert = store.insert(KarmaVote).values(qid=1, uid="a", voter_uid="v", vote=1)
        await store.query(
            upsert.on_conflict_do_update(
                index_elements=["qid", "uid", "voter_uid"],
                set_={"vote": upsert.excluded.vote},
            )
        )
        total = await store.query(select(func.sum(KarmaVote.vote).label("score")))

        assert [row["body"] for row in answers.rows] == ["first"]
        assert count.first() == {"n": 1}
        assert total.first() == {"score": 1}

    @pytest.mark.asyncio
    async def test_update_returning(self, store, seed):
        await seed.user("u1")

        result = await store.query(
            update(User).where(User.uid == "u1").values(bio="x").returning(User.bio)
        )

        assert result.rows == [{"bio": "x"}]

    @pytest.mark.asyncio
    async def test_write_without_returning_reports_rowcount(self, store, seed):
        await seed.user("u1")

        result = await store.query(text("UPDATE users SET bio = 'x'"))

        assert result.rows == []
        assert result.row_count == 1

    @pytest.mark.asyncio
    async def test_ping(self, store):
        await store.ping()

    @pytest.mark.asyncio
    async def test_deadline_exceeded(self, store, monkeypatch):
        async def hangs(statement):
            await asyncio.sleep(5)

        monkeypatch.setattr(store, "_execute", hangs)
        store.timeout = 0.05

        with pytest.raises(StoreTimeoutError) as exc_info:
            await store.query(text("SELECT 1"))

        assert exc_info.value.timeout == 0.05
        assert isinstance(exc_info.value, StoreError)

    @pytest.mark.asyncio
    async def test_driver_error_becomes_store_error(self, store, monkeypatch):
        driver_error = OperationalError("SELECT 1", {}, Exception("connection reset"))

        async def fails(statement):
            raise driver_error

        monkeypatch.setattr(store, "_execute", fails)

        with pytest.raises(StoreError) as exc_info:
            await store.query(text("SELECT 1"))

        assert not isinstance(exc_info.value, StoreTimeoutError)
        assert exc_info.value.__cause__ is driver_error
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_invalid_sql_becomes_store_error(self, store):
        with pytest.raises(StoreError):
            await store.query(text("SELECT * FROM no_such_table"))

    @pytest.mark.asyncio
    async def test_check_constraint_violation_becomes_store_error(self, store):
        with pytest.raises(StoreError):
            await store.query(
                text("INSERT INTO karma (qid, uid, voter_uid, vote) VALUES (1, 'a', 'v', 3)")
            )

    def test_insert_on_unsupported_dialect(self):
        engine = MagicMock()
        engine.dialect.name = "mssql"

        with pytest.raises(StoreError):
            Store(engine, timeout=1.0).insert(User)


class TestValidateRows:

    def test_valid_rows(self):
        records = validate_rows(QuestionRecord, [question_row(1), question_row(2)])
        assert [r.qid for r in records] == [1, 2]

    def test_missing_column(self):
        row = question_row(1)
        del row["created_at"]

        with pytest.raises(MalformedRowError) as exc_info:
            validate_rows(QuestionRecord, [row])

        assert exc_info.value.record == "QuestionRecord"

    def test_wrong_type(self):
        with pytest.raises(MalformedRowError):
            validate_rows(QuestionRecord, [question_row(qid="not-a-number")])

    def test_malformed_row_is_a_store_error(self):
        with pytest.raises(StoreError):
            validate_rows(QuestionRecord, [{"qid": 1}])

    def test_empty(self):
        assert validate_rows(QuestionRecord, []) == []


def test_query_result_first_on_empty():
    assert QueryResult().first() is None
