"""
AskBoard Backend: Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the HTTP contract.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.
Who:   Used by route handlers; aggregated payloads reuse schemas/records.py.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Search
# ══════════════════════════════════════════════════════════════════════════


class SearchScope(str, Enum):
    """
    Which text a search looks at.

    questions: title, body and topic of questions
    answers:   answer bodies (returns the answered questions)
    all:       ranked full-text match over question and answer text
    """
    QUESTIONS = "questions"
    ANSWERS = "answers"
    ALL = "all"


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What clients send in bodies
# ══════════════════════════════════════════════════════════════════════════


def _not_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class QuestionCreate(BaseModel):
    """Body of POST /api/questions."""
    uid: str = Field(min_length=1, max_length=64, description="Asking user")
    title: str = Field(max_length=300)
    body: str = Field(default="")
    topic: str = Field(max_length=255, description="Dotted topic path")

    @field_validator("title", "topic")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class QuestionCreated(BaseModel):
    qid: int = Field(description="Identifier of the new question")


class AnswerCreate(BaseModel):
    """Body of POST /api/questions/{qid}/answers."""
    uid: str = Field(min_length=1, max_length=64, description="Answering user")
    body: str

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: str) -> str:
        return _not_blank(v)


class BestAnswerSelect(BaseModel):
    """Body of PUT /api/questions/{qid}/best-answer."""
    uid: str = Field(min_length=1, max_length=64, description="Author of the accepted answer")


class VoteCast(BaseModel):
    """
    Body of PUT /api/answers/{qid}/{uid}/votes.

    vote is checked by the karma ledger (must be -1 or +1) so that the same
    rule and error apply to every caller, not only HTTP ones.
    """
    voter_uid: str = Field(min_length=1, max_length=64)
    vote: int = Field(description="+1 to upvote, -1 to downvote")


class BioUpdate(BaseModel):
    new_bio: str = Field(max_length=2000)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class VoteAck(BaseModel):
    """Acknowledges a stored vote: the row now holds exactly this value."""
    qid: int
    uid: str
    voter_uid: str
    vote: int


class VoteCheckResponse(BaseModel):
    vote: int = Field(description="-1, +1, or 0 when the voter has not voted")


class ScoreResponse(BaseModel):
    qid: int
    uid: str
    score: int = Field(description="Sum of all votes on the answer")


class TopicListResponse(BaseModel):
    topics: List[str]


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "question with ID '42' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
