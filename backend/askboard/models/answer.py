"""
AskBoard Backend: Answer & BestAnswer SQLAlchemy Models
========================================================

What:  ORM models for the `answers` and `best_answers` tables.
Who:   Read by the AnswerSet resolver; written by AnswerService.

Identity:
    An answer is identified by (qid, uid): one answer per user per question.
    The same pair identifies the answer in the karma ledger.

    best_answers is keyed by qid alone, so a question has at most one best
    answer and re-selecting overwrites the previous choice. Its uid is NOT a
    foreign key into answers: a designation may point at an author with no
    answer row, and readers must tolerate that (see AnswerSetResolver).
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from askboard.database import Base


class Answer(Base):
    """An answer to a question, at most one per (question, author)."""

    __tablename__ = "answers"

    qid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.qid"),
        primary_key=True,
    )

    uid: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.uid"),
        primary_key=True,
        comment="Author of the answer",
    )

    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Answer(qid={self.qid}, uid='{self.uid}')>"


class BestAnswer(Base):
    """The answer the asker accepted for a question."""

    __tablename__ = "best_answers"

    qid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.qid"),
        primary_key=True,
    )

    uid: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Author of the accepted answer",
    )

    def __repr__(self) -> str:
        return f"<BestAnswer(qid={self.qid}, uid='{self.uid}')>"
