"""
AskBoard Backend: Fan-out / Fan-in Helper
==========================================

What:  Runs independent awaitables concurrently and waits for all of them.
How:   Wraps each awaitable in a task and joins them with asyncio.gather,
       which places every result at its submission index. On the first
       failure the remaining tasks are cancelled and drained before the
       error is re-raised, so a batch either yields every result or none.
Who:   AnswerSetResolver (answers + best answer) and Aggregator (one
       resolver call per question).
"""

import asyncio
from typing import Awaitable, List, TypeVar

T = TypeVar("T")


async def gather_all(*aws: Awaitable[T]) -> List[T]:
    """
    Await every awaitable concurrently; results follow input order.

    Raises:
        The first exception raised by any awaitable. Sibling tasks still
        pending at that point are cancelled.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except Exception:
        for task in tasks:
            task.cancel()
        # Drain so cancelled/failed siblings never log "exception was never retrieved"
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
