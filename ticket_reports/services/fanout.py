"""Concurrent execution of independent report queries."""

import asyncio
from collections.abc import Awaitable
from typing import Any


async def fan_out(*aws: Awaitable[Any]) -> list[Any]:
    """
    Run awaitables concurrently and wait for all of them.

    Results come back in argument order. When one fails, the others are
    cancelled and awaited before the first failure is re-raised, so no
    query outlives the request.

    Returns:
        One result per awaitable
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(aw) for aw in aws]
    except BaseExceptionGroup as failures:
        raise failures.exceptions[0]
    return [task.result() for task in tasks]
