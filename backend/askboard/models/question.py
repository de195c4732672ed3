"""
AskBoard Backend: Question & Topic SQLAlchemy Models
=====================================================

What:  ORM models for the `questions` and `topics` tables.
Who:   Queried by QuestionService and the search query builders; read by
       Alembic for schema management.

Table Design:
    - qid: Integer autoincrement key, returned to the asker on creation
    - topic: Hierarchical dotted path ("Science.Biology"). Feeds match it
      by substring, so "Science" also finds "Science.Biology" questions.
    - created_at: UTC; feeds are ordered newest first
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from askboard.database import Base


class Topic(Base):
    """A selectable topic path. Questions reference it by value, not by key."""

    __tablename__ = "topics"

    topic_path: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Dotted topic path, e.g. Science.Biology",
    )

    def __repr__(self) -> str:
        return f"<Topic(topic_path='{self.topic_path}')>"


class Question(Base):
    """
    A question asked by a user.

    Lifecycle:
        1. Created by POST /api/questions
        2. Never edited or deleted by this service

    Query Patterns:
        - Hot feed:   ORDER BY created_at DESC LIMIT feed_limit
        - Topic feed: WHERE topic LIKE '%path%' ORDER BY created_at DESC
        - By author:  WHERE uid = :uid
    """

    __tablename__ = "questions"

    qid: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    uid: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.uid"),
        nullable=False,
        comment="Author of the question",
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False, default="")

    topic: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Dotted topic path, e.g. Science.Biology",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_questions_created_at", created_at.desc()),
        Index("idx_questions_uid", uid),
    )

    def __repr__(self) -> str:
        return f"<Question(qid={self.qid}, topic='{self.topic}')>"
