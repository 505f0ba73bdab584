# cohort_tree/awaitables.py
"""
Helpers for values that may or may not be asynchronous.

Classifiers, splitters, mappers and sources supplied by callers can be
plain functions or coroutines, and can return lists, iterables or async
iterables. These helpers bring all of them to concrete values.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Iterable, List


async def resolve(value: Any) -> Any:
    """Await `value` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


async def collect(value: Any) -> List[Any]:
    """Materialize an (awaitable of an) iterable or async iterable into a list."""
    value = await resolve(value)
    if value is None:
        return []
    if hasattr(value, "__aiter__"):
        return [item async for item in value]
    return list(value)


async def materialize(source: Any) -> List[Any]:
    """
    Materialize a record source.

    `source` is either a zero-argument callable producing records (the
    usual "query" form) or the records themselves.
    """
    if callable(source) and not hasattr(source, "__aiter__"):
        source = source()
    return await collect(source)


async def gather_all(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in order.

    If one fails, the others are cancelled and settled before the error
    propagates, so nothing keeps running after the caller sees the failure.
    """
    tasks: List[asyncio.Future] = []
    try:
        for aw in aws:
            tasks.append(asyncio.ensure_future(aw))
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
