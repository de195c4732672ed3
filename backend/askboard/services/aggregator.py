"""
AskBoard Backend: Question Aggregator
======================================

What:  Joins a batch of questions to their resolved answer sets.
How:   Fans out one AnswerSetResolver call per question, waits for all of
       them (fan-in barrier) and zips the answer sets back onto the
       questions by position.
Who:   Every endpoint that returns questions: hot feed, topic feed, user
       questions and search.

Guarantees:
    - Exactly one AggregatedResult per input question, in input order,
      whatever order the resolver calls complete in.
    - All-or-nothing: one failed resolver call fails the whole batch and
      cancels the calls still running. No partial list is ever returned.
    - An empty batch resolves to an empty list without touching the store.
"""

import logging
from typing import List, Optional, Sequence

from askboard.schemas.records import AggregatedResult, QuestionRecord
from askboard.services.answer_service import AnswerSetResolver, answer_resolver
from askboard.services.fanout import gather_all
from askboard.services.store import Store

logger = logging.getLogger(__name__)


class Aggregator:
    def __init__(self, resolver: Optional[AnswerSetResolver] = None):
        self.resolver = resolver or answer_resolver

    async def aggregate(
        self,
        store: Store,
        questions: Sequence[QuestionRecord],
    ) -> List[AggregatedResult]:
        """
        Resolve the answers of every question concurrently.

        Args:
            store: Store handle shared by all resolver calls
            questions: Ordered batch (feed page, search hits, ...)

        Returns:
            AggregatedResult list aligned with `questions`.

        Raises:
            StoreError: Raised by any resolver call; propagated unchanged.
        """
        if not questions:
            return []

        answer_sets = await gather_all(
            *(self.resolver.resolve(store, question.qid) for question in questions)
        )

        logger.debug("Aggregated %d questions", len(questions))
        return [
            AggregatedResult(question=question, answers=answer_set.answers)
            for question, answer_set in zip(questions, answer_sets)
        ]


# ── Singleton Instance ────────────────────────────────────────────────────
aggregator = Aggregator()
