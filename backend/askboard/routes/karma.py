"""
AskBoard Backend: Karma Route Handlers
=======================================

What:  Vote casting, vote lookup and answer scores.
Who:   Called by the up/down vote buttons on each answer.

An answer is addressed by its question id and its author's uid:
    PUT /api/answers/{qid}/{uid}/votes               cast or replace a vote
    GET /api/answers/{qid}/{uid}/votes/{voter_uid}   the voter's vote, 0 if none
    GET /api/answers/{qid}/{uid}/karma               summed score

Self-votes are refused here (not in the ledger) when
settings.allow_self_votes is False.
"""

import logging

from fastapi import APIRouter, Depends

from askboard.config import settings
from askboard.exceptions import ValidationError
from askboard.schemas.api import (
    ErrorResponse,
    ScoreResponse,
    VoteAck,
    VoteCast,
    VoteCheckResponse,
)
from askboard.services.karma_service import karma_service
from askboard.services.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/answers", tags=["Karma"])


@router.put(
    "/{qid}/{uid}/votes",
    response_model=VoteAck,
    responses={400: {"description": "Invalid vote", "model": ErrorResponse}},
    summary="Cast or replace a vote on an answer",
)
async def cast_vote(
    qid: int,
    uid: str,
    payload: VoteCast,
    store: Store = Depends(get_store),
) -> VoteAck:
    if not settings.allow_self_votes and payload.voter_uid == uid:
        raise ValidationError(
            message="You cannot vote on your own answer",
            field="voter_uid",
        )
    return await karma_service.cast_vote(
        store, qid, uid, payload.voter_uid, payload.vote
    )


@router.get(
    "/{qid}/{uid}/votes/{voter_uid}",
    response_model=VoteCheckResponse,
    summary="A voter's current vote on an answer",
)
async def check_vote(
    qid: int,
    uid: str,
    voter_uid: str,
    store: Store = Depends(get_store),
) -> VoteCheckResponse:
    vote = await karma_service.get_vote_by_voter(store, qid, uid, voter_uid)
    return VoteCheckResponse(vote=vote)


@router.get(
    "/{qid}/{uid}/karma",
    response_model=ScoreResponse,
    summary="Summed karma of an answer",
)
async def get_karma(
    qid: int,
    uid: str,
    store: Store = Depends(get_store),
) -> ScoreResponse:
    score = await karma_service.get_score(store, qid, uid)
    return ScoreResponse(qid=qid, uid=uid, score=score)
