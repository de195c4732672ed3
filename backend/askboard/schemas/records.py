"""
AskBoard Backend: Store Records
================================

What:  Pydantic models for rows coming back from the Store, plus the
       transient aggregated views built from them.
How:   Services run every row set through `validate_rows()` (services/store.py),
       which turns it into these records or raises MalformedRowError.
Who:   Produced by services; returned by route handlers as response models.

AggregatedResult is never persisted: it is one question joined to its
resolved answer list, rebuilt on every feed/search request.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    uid: str
    username: str
    bio: str = ""
    created_at: datetime

    model_config = {"from_attributes": True}


class QuestionRecord(BaseModel):
    """A row of `questions`. Extra columns (e.g. a search rank) are ignored."""
    qid: int
    uid: str = Field(description="Author of the question")
    title: str
    body: str
    topic: str = Field(description="Dotted topic path, e.g. Science.Biology")
    created_at: datetime

    model_config = {"from_attributes": True}


class AnswerRecord(BaseModel):
    """
    A row of `answers`, plus the best-answer flag set by the resolver.

    best_answer is never read from the store; it defaults to False and only
    AnswerSetResolver.apply_best_answer() turns it on.
    """
    qid: int
    uid: str = Field(description="Author of the answer")
    body: str
    created_at: datetime
    best_answer: bool = Field(
        default=False,
        description="True for the single answer the asker accepted",
    )

    model_config = {"from_attributes": True}


class BestAnswerRecord(BaseModel):
    qid: int
    uid: str

    model_config = {"from_attributes": True}


class KarmaVoteRecord(BaseModel):
    qid: int
    uid: str
    voter_uid: str
    vote: int

    model_config = {"from_attributes": True}


class AnswerSet(BaseModel):
    """Resolved answers of one question and the accepted author, if any."""
    answers: List[AnswerRecord] = Field(default_factory=list)
    best_answer_uid: Optional[str] = None


class AggregatedResult(BaseModel):
    """One question with its full, resolved answer list."""
    question: QuestionRecord
    answers: List[AnswerRecord] = Field(default_factory=list)
