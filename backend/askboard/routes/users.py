"""
AskBoard Backend: User Route Handlers
======================================

What:  Profile lookups, bio edits and a user's own questions.
How:   The caller's identity is established upstream (login/session is not
       part of this service); handlers act on the uid in the path.
"""

from typing import List

from fastapi import APIRouter, Depends

from askboard.schemas.api import BioUpdate, ErrorResponse
from askboard.schemas.records import AggregatedResult, UserRecord
from askboard.services.question_service import question_service
from askboard.services.store import Store, get_store
from askboard.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])

NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


@router.get(
    "/by-username/{username}",
    response_model=UserRecord,
    responses=NOT_FOUND,
    summary="Look a user up by username",
)
async def get_user_by_username(
    username: str,
    store: Store = Depends(get_store),
) -> UserRecord:
    return await user_service.get_user_by_username(store, username)


@router.get(
    "/{uid}",
    response_model=UserRecord,
    responses=NOT_FOUND,
    summary="A user's profile",
)
async def get_user(uid: str, store: Store = Depends(get_store)) -> UserRecord:
    return await user_service.get_user(store, uid)


@router.get(
    "/{uid}/questions",
    response_model=List[AggregatedResult],
    summary="Questions asked by a user, with their answers",
)
async def user_questions(
    uid: str,
    store: Store = Depends(get_store),
) -> List[AggregatedResult]:
    return await question_service.user_questions(store, uid)


@router.put(
    "/{uid}/bio",
    response_model=UserRecord,
    responses=NOT_FOUND,
    summary="Replace a user's bio",
)
async def update_bio(
    uid: str,
    payload: BioUpdate,
    store: Store = Depends(get_store),
) -> UserRecord:
    return await user_service.update_bio(store, uid, payload.new_bio)
