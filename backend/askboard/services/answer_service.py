"""
AskBoard Backend: Answer Service & AnswerSet Resolver
======================================================

What:  Reads a question's answers with the best-answer flag applied, and
       writes new answers and best-answer designations.
Who:   The resolver is called by the Aggregator and QuestionService;
       the writes are called by the question route handlers.

Resolve Flow:
    ┌──────────────────┐
    │  answers(qid)    │──┐
    └──────────────────┘  │   ┌───────────────────┐
                          ├──▶│ apply_best_answer │──▶ AnswerSet
    ┌──────────────────┐  │   └───────────────────┘
    │ best_answer(qid) │──┘
    └──────────────────┘
    The two reads are independent store calls issued together; the flag is
    applied only after both have completed.

Dangling best answers:
    best_answers.uid may name an author with no answer row for that question.
    That is tolerated, not reported: no answer is flagged and no error is
    raised (DANGLING_BEST_ANSWER_POLICY).
"""

import logging
from typing import List, Optional

from sqlalchemy import select

from askboard.exceptions import ConflictError, NotFoundError
from askboard.models.answer import Answer, BestAnswer
from askboard.models.question import Question
from askboard.schemas.records import AnswerRecord, AnswerSet, BestAnswerRecord
from askboard.services.fanout import gather_all
from askboard.services.store import Store, validate_rows
from askboard.services.user_service import user_service

logger = logging.getLogger(__name__)

# What happens when the designated best answer has no matching answer row
DANGLING_BEST_ANSWER_POLICY = "ignore"


def apply_best_answer(
    answers: List[AnswerRecord],
    best_answer_uid: Optional[str],
) -> List[AnswerRecord]:
    """
    Flag the answer written by `best_answer_uid`.

    Answers are keyed by (qid, uid), so at most one answer can match and at
    most one comes back with best_answer=True. With no designation, or a
    dangling one, every answer is returned unflagged.
    """
    if best_answer_uid is None:
        return answers

    if not any(answer.uid == best_answer_uid for answer in answers):
        logger.debug(
            "Best answer by %s has no answer row (policy=%s)",
            best_answer_uid,
            DANGLING_BEST_ANSWER_POLICY,
        )
        return answers

    return [
        answer.model_copy(update={"best_answer": answer.uid == best_answer_uid})
        for answer in answers
    ]


class AnswerSetResolver:
    """Resolves one question id into its ordered, flagged answer list."""

    @staticmethod
    def answers_query(qid: int):
        # created_at then uid: a stable order even for same-timestamp answers
        return (
            select(Answer.__table__)
            .where(Answer.qid == qid)
            .order_by(Answer.created_at, Answer.uid)
        )

    @staticmethod
    def best_answer_query(qid: int):
        return select(BestAnswer.__table__).where(BestAnswer.qid == qid)

    async def resolve(self, store: Store, qid: int) -> AnswerSet:
        """
        Fetch the answers of `qid` and mark the accepted one.

        Read-only. Store failures propagate as StoreError; nothing is retried.
        """
        answers_result, best_result = await gather_all(
            store.query(self.answers_query(qid)),
            store.query(self.best_answer_query(qid)),
        )

        answers = validate_rows(AnswerRecord, answers_result.rows)
        best_rows = validate_rows(BestAnswerRecord, best_result.rows)
        best_answer_uid = best_rows[0].uid if best_rows else None

        return AnswerSet(
            answers=apply_best_answer(answers, best_answer_uid),
            best_answer_uid=best_answer_uid,
        )


class AnswerService:
    """Answer writes: posting an answer and selecting the best answer."""

    async def _require_question(self, store: Store, qid: int) -> None:
        result = await store.query(select(Question.qid).where(Question.qid == qid))
        if result.row_count == 0:
            raise NotFoundError(resource="question", resource_id=str(qid))

    async def post_answer(
        self,
        store: Store,
        qid: int,
        uid: str,
        body: str,
    ) -> AnswerRecord:
        """
        Store `uid`'s answer to question `qid`.

        Raises:
            NotFoundError: The question or the answering user does not exist
            ConflictError: `uid` has already answered this question
        """
        await self._require_question(store, qid)
        await user_service.get_user(store, uid)

        statement = (
            store.insert(Answer)
            .values(qid=qid, uid=uid, body=body)
            .on_conflict_do_nothing(index_elements=["qid", "uid"])
            .returning(*Answer.__table__.c)
        )
        result = await store.query(statement)
        if not result.rows:
            raise ConflictError(
                message=f"User '{uid}' has already answered question {qid}",
                context={"qid": qid, "uid": uid},
            )

        logger.info("New answer: qid=%s uid=%s", qid, uid)
        return validate_rows(AnswerRecord, result.rows)[0]

    async def mark_best_answer(self, store: Store, qid: int, uid: str) -> BestAnswerRecord:
        """
        Designate `uid`'s answer as the best answer of `qid`.

        Upserts on qid: a later designation replaces the earlier one. The
        answer itself is not required to exist (see module docstring).

        Raises:
            NotFoundError: The question does not exist
        """
        await self._require_question(store, qid)

        insert = store.insert(BestAnswer).values(qid=qid, uid=uid)
        statement = insert.on_conflict_do_update(
            index_elements=["qid"],
            set_={"uid": insert.excluded.uid},
        )
        await store.query(statement)

        logger.info("Best answer for qid=%s set to uid=%s", qid, uid)
        return BestAnswerRecord(qid=qid, uid=uid)


# ── Singleton Instances ───────────────────────────────────────────────────
answer_resolver = AnswerSetResolver()
answer_service = AnswerService()
