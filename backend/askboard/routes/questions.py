"""
AskBoard Backend: Question Route Handlers
==========================================

What:  Feeds, question pages, asking, answering, best-answer selection
       and the topic list.
How:   Thin handlers: read path/body, call the service with the Store,
       return the service's records. Errors are mapped by main.py.

Route Inventory:
    GET  /api/topics
    GET  /api/questions/hot
    GET  /api/questions/feed/{topic_path}
    GET  /api/questions/{qid}
    POST /api/questions
    POST /api/questions/{qid}/answers
    PUT  /api/questions/{qid}/best-answer
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from askboard.schemas.api import (
    AnswerCreate,
    BestAnswerSelect,
    ErrorResponse,
    QuestionCreate,
    QuestionCreated,
    TopicListResponse,
)
from askboard.schemas.records import AggregatedResult, AnswerRecord, BestAnswerRecord
from askboard.services.answer_service import answer_service
from askboard.services.question_service import question_service
from askboard.services.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Questions"])


@router.get(
    "/topics",
    response_model=TopicListResponse,
    summary="List all topic paths",
)
async def list_topics(store: Store = Depends(get_store)) -> TopicListResponse:
    return TopicListResponse(topics=await question_service.list_topics(store))


# Declared before /questions/{qid} so "hot" is never parsed as a qid
@router.get(
    "/questions/hot",
    response_model=List[AggregatedResult],
    summary="Newest questions with their answers",
)
async def hot_questions(store: Store = Depends(get_store)) -> List[AggregatedResult]:
    return await question_service.hot_questions(store)


@router.get(
    "/questions/feed/{topic_path}",
    response_model=List[AggregatedResult],
    summary="Newest questions under a topic",
)
async def topic_feed(
    topic_path: str,
    store: Store = Depends(get_store),
) -> List[AggregatedResult]:
    return await question_service.topic_feed(store, topic_path)


@router.get(
    "/questions/{qid}",
    response_model=AggregatedResult,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="A question with its answers",
)
async def get_question(
    qid: int,
    store: Store = Depends(get_store),
) -> AggregatedResult:
    return await question_service.get_question_post(store, qid)


@router.post(
    "/questions",
    status_code=201,
    response_model=QuestionCreated,
    responses={404: {"description": "Asking user not found", "model": ErrorResponse}},
    summary="Ask a question",
)
async def ask_question(
    payload: QuestionCreate,
    store: Store = Depends(get_store),
) -> QuestionCreated:
    qid = await question_service.ask_question(
        store,
        uid=payload.uid,
        title=payload.title,
        body=payload.body,
        topic=payload.topic,
    )
    return QuestionCreated(qid=qid)


@router.post(
    "/questions/{qid}/answers",
    status_code=201,
    response_model=AnswerRecord,
    responses={
        404: {"description": "Question not found", "model": ErrorResponse},
        409: {"description": "User already answered", "model": ErrorResponse},
    },
    summary="Answer a question",
)
async def post_answer(
    qid: int,
    payload: AnswerCreate,
    store: Store = Depends(get_store),
) -> AnswerRecord:
    return await answer_service.post_answer(store, qid, payload.uid, payload.body)


@router.put(
    "/questions/{qid}/best-answer",
    response_model=BestAnswerRecord,
    responses={404: {"description": "Question not found", "model": ErrorResponse}},
    summary="Select the best answer",
    description="Replaces any earlier selection for the question.",
)
async def mark_best_answer(
    qid: int,
    payload: BestAnswerSelect,
    store: Store = Depends(get_store),
) -> BestAnswerRecord:
    return await answer_service.mark_best_answer(store, qid, payload.uid)
