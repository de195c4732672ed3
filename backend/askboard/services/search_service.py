"""
AskBoard Backend: Search Service
=================================

What:  Runs a scoped search and returns aggregated question results.
How:   build_search_query() → Store.query() → validate rows →
       Aggregator.aggregate(). The answer lists attached to each hit are
       complete, not only the answers that matched the term.
Who:   Called by GET /api/search.

Failure:
    A failing query or resolver call fails the search. There is no fallback
    to another scope and no partial result list.
"""

import logging
from typing import List, Optional

from askboard.config import settings
from askboard.exceptions import ValidationError
from askboard.schemas.api import SearchScope
from askboard.schemas.records import AggregatedResult, QuestionRecord
from askboard.services.aggregator import Aggregator, aggregator as default_aggregator
from askboard.services.search_queries import build_search_query
from askboard.services.store import Store, validate_rows

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(self, aggregator: Optional[Aggregator] = None):
        self.aggregator = aggregator or default_aggregator

    async def search(
        self,
        store: Store,
        term: str,
        scope: SearchScope,
        topic: Optional[str] = None,
    ) -> List[AggregatedResult]:
        """
        Search questions and answers.

        Args:
            store: Store handle
            term: Free-text search term (must not be blank)
            scope: Which text to search; see SearchScope
            topic: Topic restriction for the ranked scope. None falls back to
                settings.search_topic; an empty string searches every topic.

        Raises:
            ValidationError: Blank term
            StoreError: Query or aggregation failure
        """
        term = term.strip()
        if not term:
            raise ValidationError(message="Search term must not be empty", field="q")

        topic = settings.search_topic if topic is None else topic.strip()

        statement = build_search_query(
            term,
            scope,
            topic=topic or None,
            answers_limit=settings.answers_search_limit,
        )
        result = await store.query(statement)
        questions = validate_rows(QuestionRecord, result.rows)

        results = await self.aggregator.aggregate(store, questions)

        logger.info(
            "%d search result%s for '%s', in scope: %s",
            len(results),
            "" if len(results) == 1 else "s",
            term,
            scope.value,
        )
        return results


# ── Singleton Instance ────────────────────────────────────────────────────
search_service = SearchService()
