"""Async aggregation of results."""

from __future__ import annotations

from collections.abc import Awaitable, Iterable

import anyio

from result_envelope.functions import flatten_errors
from result_envelope.result import Result
from result_envelope.wire import SerializableResult

__all__ = ['gather_results']


async def gather_results[T](
    awaitables: Iterable[Awaitable[SerializableResult[T] | Result[T]]],
) -> SerializableResult[list[T]]:
    """Await results concurrently and aggregate them with `flatten_errors`.

    All awaitables run to completion in one task group before aggregation;
    an error does not cancel the others. Ordering of data and error
    messages follows the input order, not completion order.

    Note:
        The awaitables iterable is eagerly materialized into a list.
        An awaitable that raises (instead of returning an error result)
        cancels the group. anyio then raises an ``ExceptionGroup`` wrapping
        the exception, so catch it with ``except*``; or wrap such calls with
        `try_catch_async` first.

    Args:
        awaitables: Awaitables producing results in either form.

    Returns:
        Success with every data value in input order, or the aggregated error.

    Raises:
        ExceptionGroup: If any awaitable raises instead of returning a result.

    Example:
        ```python
        async def load(n: int) -> SerializableResult[int]:
            return await try_catch_async(lambda: fetch_count(n))

        totals = await gather_results([load(1), load(2)])
        ```
    """
    awaitable_list = list(awaitables)
    results: list[SerializableResult[T] | Result[T] | None] = [None] * len(awaitable_list)

    async with anyio.create_task_group() as tg:

        async def run_one(i: int, aw: Awaitable[SerializableResult[T] | Result[T]]) -> None:
            results[i] = await aw

        for i, aw in enumerate(awaitable_list):
            tg.start_soon(run_one, i, aw)

    return flatten_errors(result for result in results if result is not None)
