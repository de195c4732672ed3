"""Create askboard tables

Revision ID: 001
Revises: None
Create Date: 2026-10-16 00:00:00.000000+00:00

What:  Creates users, topics, questions, answers, best_answers and karma.
How:   Answers are keyed by (qid, uid); best_answers by qid; karma by
       (qid, uid, voter_uid) with vote restricted to -1 / +1.

Rollback: downgrade() drops every table (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("uid", sa.String(64), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False, server_default=sa.text("''")),
        _created_at(),
        sa.PrimaryKeyConstraint("uid"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "topics",
        sa.Column(
            "topic_path",
            sa.String(255),
            nullable=False,
            comment="Dotted topic path, e.g. Science.Biology",
        ),
        sa.PrimaryKeyConstraint("topic_path"),
    )

    op.create_table(
        "questions",
        sa.Column("qid", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uid", sa.String(64), nullable=False, comment="Author of the question"),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("topic", sa.String(255), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["uid"], ["users.uid"]),
        sa.PrimaryKeyConstraint("qid"),
    )
    # Hot and topic feeds read newest first
    op.create_index(
        "idx_questions_created_at",
        "questions",
        [sa.text("created_at DESC")],
    )
    op.create_index("idx_questions_uid", "questions", ["uid"])

    op.create_table(
        "answers",
        sa.Column("qid", sa.Integer(), nullable=False),
        sa.Column("uid", sa.String(64), nullable=False, comment="Author of the answer"),
        sa.Column("body", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["qid"], ["questions.qid"]),
        sa.ForeignKeyConstraint(["uid"], ["users.uid"]),
        sa.PrimaryKeyConstraint("qid", "uid"),
    )

    # uid is deliberately not a foreign key into answers
    op.create_table(
        "best_answers",
        sa.Column("qid", sa.Integer(), nullable=False),
        sa.Column("uid", sa.String(64), nullable=False),
        sa.ForeignKeyConstraint(["qid"], ["questions.qid"]),
        sa.PrimaryKeyConstraint("qid"),
    )

    op.create_table(
        "karma",
        sa.Column("qid", sa.Integer(), nullable=False),
        sa.Column("uid", sa.String(64), nullable=False),
        sa.Column("voter_uid", sa.String(64), nullable=False),
        sa.Column("vote", sa.SmallInteger(), nullable=False),
        sa.CheckConstraint("vote IN (-1, 1)", name="ck_karma_vote_value"),
        sa.PrimaryKeyConstraint("qid", "uid", "voter_uid"),
    )


def downgrade() -> None:
    """Drop every table, children first. All data is lost."""
    op.drop_table("karma")
    op.drop_table("best_answers")
    op.drop_table("answers")
    op.drop_index("idx_questions_uid", table_name="questions")
    op.drop_index("idx_questions_created_at", table_name="questions")
    op.drop_table("questions")
    op.drop_table("topics")
    op.drop_table("users")
