"""
AskBoard Backend: Karma Ledger
===============================

What:  Records, replaces and sums per-voter votes on answers.
How:   One row per (qid, uid, voter_uid) in `karma`. Casting a vote is an
       INSERT ... ON CONFLICT (qid, uid, voter_uid) DO UPDATE SET vote, so a
       voter always contributes exactly their latest vote.
Who:   Called by the karma route handlers.

Properties:
    - Idempotent: casting the same vote twice leaves the score unchanged.
    - Replace, not accumulate: +1 then -1 by one voter contributes -1.
    - Score is the plain SUM of votes (no weighting, no decay); 0 when empty.
    - "No vote" reads as 0. Stored votes are only ever -1 or +1.
    - The ledger does not forbid voting on your own answer. Callers that
      want that rule enforce it themselves (see routes/karma.py).
"""

import logging

from sqlalchemy import func, select

from askboard.exceptions import ValidationError
from askboard.models.karma import KarmaVote
from askboard.schemas.api import VoteAck
from askboard.schemas.records import KarmaVoteRecord
from askboard.services.store import Store, validate_rows

logger = logging.getLogger(__name__)

VALID_VOTES = (-1, 1)


class KarmaService:

    async def cast_vote(
        self,
        store: Store,
        qid: int,
        uid: str,
        voter_uid: str,
        vote: int,
    ) -> VoteAck:
        """
        Upsert `voter_uid`'s vote on the answer (qid, uid).

        Raises:
            ValidationError: vote is not -1 or +1
            StoreError: The upsert failed
        """
        # bool is an int subclass; True must not pass as +1
        if isinstance(vote, bool) or vote not in VALID_VOTES:
            raise ValidationError(
                message=f"Vote must be -1 or 1, got {vote!r}",
                field="vote",
            )

        insert = store.insert(KarmaVote).values(
            qid=qid, uid=uid, voter_uid=voter_uid, vote=vote
        )
        statement = insert.on_conflict_do_update(
            index_elements=["qid", "uid", "voter_uid"],
            set_={"vote": insert.excluded.vote},
        )
        await store.query(statement)

        logger.info(
            "voter_uid: %s %s answer: qid=%s uid=%s",
            voter_uid,
            "upvoted" if vote == 1 else "downvoted",
            qid,
            uid,
        )
        return VoteAck(qid=qid, uid=uid, voter_uid=voter_uid, vote=vote)

    async def get_vote_by_voter(
        self,
        store: Store,
        qid: int,
        uid: str,
        voter_uid: str,
    ) -> int:
        """The voter's current vote on (qid, uid), or 0 if they never voted."""
        result = await store.query(
            select(KarmaVote.__table__).where(
                KarmaVote.qid == qid,
                KarmaVote.uid == uid,
                KarmaVote.voter_uid == voter_uid,
            )
        )
        votes = validate_rows(KarmaVoteRecord, result.rows)
        return votes[0].vote if votes else 0

    async def get_score(self, store: Store, qid: int, uid: str) -> int:
        """Sum of all votes on the answer (qid, uid); 0 when nobody voted."""
        result = await store.query(
            select(func.coalesce(func.sum(KarmaVote.vote), 0).label("score")).where(
                KarmaVote.qid == qid,
                KarmaVote.uid == uid,
            )
        )
        row = result.first()
        return int(row["score"]) if row and row["score"] is not None else 0


# ── Singleton Instance ────────────────────────────────────────────────────
karma_service = KarmaService()
