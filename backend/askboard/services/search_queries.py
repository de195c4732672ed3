"""
AskBoard Backend: Search Query Builders
========================================

What:  Pure functions turning (term, scope) into a SQLAlchemy SELECT over
       `questions`. No I/O happens here; SearchService executes the result.
How:   One builder per SearchScope member; `build_search_query()` dispatches
       on the enum. The term is always a bound parameter.

Scopes:
    questions  title / body / topic ILIKE '%term%'
    answers    EXISTS an answer whose body ILIKE '%term%', LIMIT n
    all        PostgreSQL full text:
               to_tsvector(title ' ' body ' ' coalesce(answer.body, ''))
                   @@ plainto_tsquery(term)
               scored with ts_rank, DISTINCT ON (qid) keeping each
               question's best-ranked answer match, ordered by rank DESC

Every builder selects the full questions row so the results validate as
QuestionRecord; the ranked query adds a `rank` column that records ignore.
"""

from typing import Optional

from sqlalchemy import Select, func, or_, select

from askboard.models.answer import Answer
from askboard.models.question import Question
from askboard.schemas.api import SearchScope


def questions_query(term: str) -> Select:
    """Questions whose title, body or topic contains `term` (any case)."""
    return (
        select(Question.__table__)
        .where(
            or_(
                Question.title.icontains(term),
                Question.body.icontains(term),
                Question.topic.icontains(term),
            )
        )
        .order_by(Question.created_at.desc(), Question.qid)
    )


def answers_query(term: str, limit: int) -> Select:
    """Questions with at least one answer containing `term` (any case)."""
    has_matching_answer = (
        select(Answer.qid)
        .where(Answer.qid == Question.qid)
        .where(Answer.body.icontains(term))
        .exists()
    )
    return (
        select(Question.__table__)
        .where(has_matching_answer)
        .order_by(Question.created_at.desc(), Question.qid)
        .limit(limit)
    )


def ranked_query(term: str, topic: Optional[str]) -> Select:
    """
    Full-text ranked questions, one row per question, best rank first.

    Args:
        term: Free text, parsed with plainto_tsquery
        topic: Exact topic path to restrict to; None searches all topics
    """
    document = func.to_tsvector(
        Question.title + " " + Question.body + " " + func.coalesce(Answer.body, "")
    )
    tsquery = func.plainto_tsquery(term)
    rank = func.ts_rank(document, tsquery).label("rank")

    best_match = (
        select(Question.__table__, rank)
        .select_from(
            Question.__table__.outerjoin(Answer.__table__, Answer.qid == Question.qid)
        )
        .where(document.bool_op("@@")(tsquery))
    )
    if topic:
        best_match = best_match.where(Question.topic == topic)

    # DISTINCT ON keeps the first row per qid, i.e. its highest rank
    best_match = (
        best_match
        .distinct(Question.qid)
        .order_by(Question.qid, rank.desc())
        .subquery("best_match")
    )

    return select(best_match).order_by(best_match.c.rank.desc(), best_match.c.qid)


def build_search_query(
    term: str,
    scope: SearchScope,
    *,
    topic: Optional[str] = None,
    answers_limit: int = 20,
) -> Select:
    """Dispatch to the builder for `scope`."""
    if scope is SearchScope.QUESTIONS:
        return questions_query(term)
    if scope is SearchScope.ANSWERS:
        return answers_query(term, answers_limit)
    if scope is SearchScope.ALL:
        return ranked_query(term, topic)
    raise ValueError(f"Unknown search scope: {scope!r}")
