"""
AskBoard Backend: Question Service
===================================

What:  Question feeds, single question pages, asking questions, topics.
How:   Each feed is one store query for the question rows followed by one
       Aggregator pass that attaches every question's answers.
Who:   Called by the question, topic and user route handlers.

Feeds:
    hot          newest `feed_limit` questions
    topic feed   newest `feed_limit` questions whose topic contains the path
    by user      every question the user asked, newest first
"""

import logging
from typing import List, Optional

from sqlalchemy import Select, insert, select

from askboard.config import settings
from askboard.exceptions import NotFoundError
from askboard.models.question import Question, Topic
from askboard.schemas.records import AggregatedResult, QuestionRecord
from askboard.services.aggregator import Aggregator, aggregator as default_aggregator
from askboard.services.store import Store, validate_rows
from askboard.services.user_service import user_service

logger = logging.getLogger(__name__)


class QuestionService:
    def __init__(self, aggregator: Optional[Aggregator] = None):
        self.aggregator = aggregator or default_aggregator

    async def _aggregate(self, store: Store, statement: Select) -> List[AggregatedResult]:
        result = await store.query(statement)
        questions = validate_rows(QuestionRecord, result.rows)
        return await self.aggregator.aggregate(store, questions)

    # ── Feeds ─────────────────────────────────────────────────────────────

    async def hot_questions(self, store: Store) -> List[AggregatedResult]:
        statement = (
            select(Question.__table__)
            .order_by(Question.created_at.desc(), Question.qid.desc())
            .limit(settings.feed_limit)
        )
        return await self._aggregate(store, statement)

    async def topic_feed(self, store: Store, topic_path: str) -> List[AggregatedResult]:
        """
        Newest questions under `topic_path`.

        Matching is by substring, so "Science" also returns questions filed
        under "Science.Biology".
        """
        statement = (
            select(Question.__table__)
            .where(Question.topic.contains(topic_path))
            .order_by(Question.created_at.desc(), Question.qid.desc())
            .limit(settings.feed_limit)
        )
        logger.info("Topic feed requested: %s", topic_path)
        return await self._aggregate(store, statement)

    async def user_questions(self, store: Store, uid: str) -> List[AggregatedResult]:
        statement = (
            select(Question.__table__)
            .where(Question.uid == uid)
            .order_by(Question.created_at.desc(), Question.qid.desc())
        )
        return await self._aggregate(store, statement)

    # ── Single question ───────────────────────────────────────────────────

    async def get_question_post(self, store: Store, qid: int) -> AggregatedResult:
        """
        A question with its resolved answers.

        Raises:
            NotFoundError: The question does not exist
        """
        result = await store.query(select(Question.__table__).where(Question.qid == qid))
        if not result.rows:
            raise NotFoundError(resource="question", resource_id=str(qid))
        question = validate_rows(QuestionRecord, result.rows)[0]

        answer_set = await self.aggregator.resolver.resolve(store, qid)
        return AggregatedResult(question=question, answers=answer_set.answers)

    async def ask_question(
        self,
        store: Store,
        uid: str,
        title: str,
        body: str,
        topic: str,
    ) -> int:
        """
        Store a new question and return its qid.

        Raises:
            NotFoundError: The asking user does not exist
        """
        await user_service.get_user(store, uid)

        result = await store.query(
            insert(Question)
            .values(uid=uid, title=title, body=body, topic=topic)
            .returning(Question.qid)
        )
        qid = int(result.rows[0]["qid"])
        logger.info("New question %s by %s in %s", qid, uid, topic)
        return qid

    # ── Topics ────────────────────────────────────────────────────────────

    async def list_topics(self, store: Store) -> List[str]:
        result = await store.query(select(Topic.topic_path).order_by(Topic.topic_path))
        return [row["topic_path"] for row in result.rows]


# ── Singleton Instance ────────────────────────────────────────────────────
question_service = QuestionService()
