"""
AskBoard Backend: Search Route Handler
=======================================

What:  GET /api/search?q=<term>&scope=<questions|answers|all>&topic=<path>
Who:   Called by the frontend search bar.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from askboard.schemas.api import ErrorResponse, SearchScope
from askboard.schemas.records import AggregatedResult
from askboard.services.search_service import search_service
from askboard.services.store import Store, get_store

router = APIRouter(prefix="/api", tags=["Search"])


@router.get(
    "/search",
    response_model=List[AggregatedResult],
    responses={400: {"description": "Blank search term", "model": ErrorResponse}},
    summary="Search questions and answers",
    description=(
        "scope=questions matches question title, body and topic; "
        "scope=answers matches answer bodies; "
        "scope=all runs a ranked full-text search restricted to one topic. "
        "Every hit carries its full answer list."
    ),
)
async def search(
    q: str = Query(..., min_length=1, max_length=200, description="Search term"),
    scope: SearchScope = Query(default=SearchScope.ALL, description="What to search"),
    topic: Optional[str] = Query(
        default=None,
        description="Topic for scope=all; omitted uses the configured default, empty searches all",
    ),
    store: Store = Depends(get_store),
) -> List[AggregatedResult]:
    return await search_service.search(store, q, scope, topic=topic)
