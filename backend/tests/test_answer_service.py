"""
AskBoard Backend: Answer Service & Resolver Tests
==================================================

What:  Tests for AnswerSetResolver, apply_best_answer and AnswerService.

What we test:
    ✅ Answers come back oldest first, ties broken by author uid
    ✅ Exactly the designated answer is flagged best
    ✅ No designation, or a dangling one, flags nothing and raises nothing
    ✅ Posting a second answer by the same user conflicts (409)
    ✅ Re-selecting a best answer overwrites the earlier choice
    ✅ Store failures propagate out of resolve()
"""

import pytest
import pytest_asyncio
from sqlalchemy import event

from askboard.database import Base, build_engine
from askboard.exceptions import ConflictError, NotFoundError, StoreError
from askboard.schemas.records import AnswerRecord
from askboard.services.answer_service import (
    AnswerService,
    AnswerSetResolver,
    apply_best_answer,
)
from askboard.services.store import Store

from conftest import T0, Seeder


@pytest_asyncio.fixture
async def fk_store(tmp_path):
    """A SQLite store that enforces foreign keys, as PostgreSQL does."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'askboard_fk.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield Store(engine, timeout=5.0)

    await engine.dispose()


def _answers(*uids):
    return [AnswerRecord(qid=1, uid=uid, body=f"by {uid}", created_at=T0) for uid in uids]


class TestApplyBestAnswer:

    def test_flags_matching_author_only(self):
        result = apply_best_answer(_answers("a", "b", "c"), "b")
        assert [a.best_answer for a in result] == [False, True, False]

    def test_no_designation_flags_nothing(self):
        result = apply_best_answer(_answers("a", "b"), None)
        assert not any(a.best_answer for a in result)

    def test_dangling_designation_flags_nothing(self):
        """A best answer pointing at an author with no answer is ignored."""
        result = apply_best_answer(_answers("a", "b"), "ghost")
        assert not any(a.best_answer for a in result)
        assert [a.uid for a in result] == ["a", "b"]

    def test_input_records_are_not_mutated(self):
        answers = _answers("a", "b")
        apply_best_answer(answers, "a")
        assert not any(a.best_answer for a in answers)

    def test_empty_answer_list(self):
        assert apply_best_answer([], "a") == []


class TestAnswerSetResolver:

    def setup_method(self):
        self.resolver = AnswerSetResolver()

    @pytest.mark.asyncio
    async def test_resolve_flags_best_answer(self, store, seed):
        await seed.question(1)
        await seed.answer(1, "a", minute=1)
        await seed.answer(1, "b", minute=2)
        await seed.best_answer(1, "b")

        answer_set = await self.resolver.resolve(store, 1)

        assert [a.uid for a in answer_set.answers] == ["a", "b"]
        assert [a.best_answer for a in answer_set.answers] == [False, True]
        assert answer_set.best_answer_uid == "b"

    @pytest.mark.asyncio
    async def test_resolve_without_best_answer(self, store, seed):
        await seed.question(1)
        await seed.answer(1, "a", minute=1)

        answer_set = await self.resolver.resolve(store, 1)

        assert answer_set.best_answer_uid is None
        assert answer_set.answers[0].best_answer is False

    @pytest.mark.asyncio
    async def test_resolve_dangling_best_answer(self, store, seed):
        await seed.question(1)
        await seed.answer(1, "a", minute=1)
        await seed.best_answer(1, "ghost")

        answer_set = await self.resolver.resolve(store, 1)

        assert answer_set.best_answer_uid == "ghost"
        assert [a.best_answer for a in answer_set.answers] == [False]

    @pytest.mark.asyncio
    async def test_resolve_orders_by_time_then_uid(self, store, seed):
        await seed.question(1)
        await seed.answer(1, "zed", minute=1)
        await seed.answer(1, "bob", minute=5)
        await seed.answer(1, "amy", minute=5)

        answer_set = await self.resolver.resolve(store, 1)

        assert [a.uid for a in answer_set.answers] == ["zed", "amy", "bob"]

    @pytest.mark.asyncio
    async def test_resolve_question_without_answers(self, store, seed):
        await seed.question(1)

        answer_set = await self.resolver.resolve(store, 1)

        assert answer_set.answers == []
        assert answer_set.best_answer_uid is None

    @pytest.mark.asyncio
    async def test_resolve_only_reads_its_question(self, store, seed):
        await seed.question(1)
        await seed.question(2)
        await seed.answer(1, "a")
        await seed.answer(2, "b")

        answer_set = await self.resolver.resolve(store, 2)

        assert [(a.qid, a.uid) for a in answer_set.answers] == [(2, "b")]

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, mock_store):
        mock_store.query.side_effect = StoreError()

        with pytest.raises(StoreError):
            await self.resolver.resolve(mock_store, 1)


class TestAnswerService:

    def setup_method(self):
        self.service = AnswerService()
        self.resolver = AnswerSetResolver()

    @pytest.mark.asyncio
    async def test_post_answer(self, store, seed):
        await seed.user("a")
        await seed.question(1)

        record = await self.service.post_answer(store, 1, "a", "Mitochondria")

        assert record.qid == 1
        assert record.uid == "a"
        assert record.body == "Mitochondria"
        assert record.best_answer is False

    @pytest.mark.asyncio
    async def test_second_answer_by_same_user_conflicts(self, store, seed):
        await seed.user("a")
        await seed.question(1)
        await self.service.post_answer(store, 1, "a", "first")

        with pytest.raises(ConflictError):
            await self.service.post_answer(store, 1, "a", "second")

        answer_set = await self.resolver.resolve(store, 1)
        assert [a.body for a in answer_set.answers] == ["first"]

    @pytest.mark.asyncio
    async def test_answer_to_unknown_question(self, store):
        with pytest.raises(NotFoundError):
            await self.service.post_answer(store, 404, "a", "hello")

    @pytest.mark.asyncio
    async def test_answer_by_unknown_user(self, fk_store):
        """With foreign keys enforced, an unknown author is a 404, not a failed insert."""
        seed = Seeder(fk_store)
        await seed.user("asker")
        await seed.question(1, uid="asker")

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.post_answer(fk_store, 1, "ghost", "hello")

        assert exc_info.value.context["resource"] == "user"
        answer_set = await self.resolver.resolve(fk_store, 1)
        assert answer_set.answers == []

    @pytest.mark.asyncio
    async def test_answer_by_known_user_with_foreign_keys(self, fk_store):
        seed = Seeder(fk_store)
        await seed.user("asker")
        await seed.user("a")
        await seed.question(1, uid="asker")

        record = await self.service.post_answer(fk_store, 1, "a", "hello")

        assert record.uid == "a"

    @pytest.mark.asyncio
    async def test_mark_best_answer_overwrites(self, store, seed):
        await seed.question(1)
        await seed.answer(1, "a", minute=1)
        await seed.answer(1, "b", minute=2)

        await self.service.mark_best_answer(store, 1, "a")
        await self.service.mark_best_answer(store, 1, "b")

        answer_set = await self.resolver.resolve(store, 1)
        assert answer_set.best_answer_uid == "b"
        assert [a.best_answer for a in answer_set.answers] == [False, True]

    @pytest.mark.asyncio
    async def test_mark_best_answer_unknown_question(self, store):
        with pytest.raises(NotFoundError):
            await self.service.mark_best_answer(store, 404, "a")
