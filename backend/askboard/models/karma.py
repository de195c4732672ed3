"""
AskBoard Backend: Karma Vote SQLAlchemy Model
==============================================

What:  ORM model for the `karma` vote ledger.
Who:   Written and summed by KarmaService.

Invariants:
    - Primary key (qid, uid, voter_uid): one live vote per voter per answer.
      Casting again upserts over the same row, so repeat votes never
      accumulate.
    - vote is -1 or +1 (check constraint). A score is SUM(vote).
"""

from sqlalchemy import CheckConstraint, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from askboard.database import Base


class KarmaVote(Base):
    """A single voter's up/down vote on the answer identified by (qid, uid)."""

    __tablename__ = "karma"

    qid: Mapped[int] = mapped_column(Integer, primary_key=True)

    uid: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Author of the answer being voted on",
    )

    voter_uid: Mapped[str] = mapped_column(String(64), primary_key=True)

    vote: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint("vote IN (-1, 1)", name="ck_karma_vote_value"),
    )

    def __repr__(self) -> str:
        return (
            f"<KarmaVote(qid={self.qid}, uid='{self.uid}', "
            f"voter_uid='{self.voter_uid}', vote={self.vote})>"
        )
