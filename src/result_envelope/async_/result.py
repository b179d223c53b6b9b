"""AsyncResult: lazy composition of awaitable Results.

`Result.map_async` and friends return coroutines, so chaining several of
them means one ``await`` per step. AsyncResult holds an
``Awaitable[Result[T]]`` and builds the chain first; nothing runs until the
AsyncResult is awaited.

Example:
    ```python
    async def load_user(user_id: int) -> Result[User]:
        ...

    result = await (
        AsyncResult(load_user(1))
        .flat_map(check_active)
        .map_async(fetch_avatar)
        .map(render)
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator
from typing import Any

from result_envelope.result import ErrorResult, Result, SuccessResult, deserialize_result
from result_envelope.wire import Failure, SerializableResult

__all__ = ['AsyncResult']


class AsyncResult[T]:
    """Async-aware wrapper for composing operations that produce Results.

    Short-circuit rules are those of Result: on the error branch no
    transform is called and the error is forwarded unchanged.

    Note:
        AsyncResult is single-shot when wrapping a coroutine object.
        Coroutines can only be awaited once; awaiting the same AsyncResult
        twice raises RuntimeError.
    """

    __slots__ = ('_awaitable',)

    def __init__(self, awaitable: Awaitable[Result[T] | SerializableResult[T]]) -> None:
        """Create an AsyncResult from an awaitable.

        Args:
            awaitable: An awaitable that produces a Result[T] or its
                transport form (e.g. the coroutine of `try_catch_async`).
        """
        self._awaitable = awaitable

    def __await__(self) -> Generator[Any, Any, Result[T]]:
        """Support await syntax to get the underlying Result."""
        return self._resolve().__await__()

    async def _resolve(self) -> Result[T]:
        value = await self._awaitable
        if isinstance(value, SuccessResult | ErrorResult):
            return value
        return deserialize_result(value)

    @classmethod
    def from_result(cls, result: Result[T] | SerializableResult[T]) -> AsyncResult[T]:
        """Create an AsyncResult from an already-available result, in either form."""

        async def _result() -> Result[T] | SerializableResult[T]:
            return result

        return cls(_result())

    def map[U](self, f: Callable[[T], U]) -> AsyncResult[U]:
        """Apply a sync function to the success value."""

        async def _mapped() -> Result[U]:
            result = await self._resolve()
            return result.map(f)

        return AsyncResult(_mapped())

    def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> AsyncResult[U]:
        """Apply an async function to the success value."""

        async def _mapped() -> Result[U]:
            result = await self._resolve()
            return await result.map_async(f)

        return AsyncResult(_mapped())

    def flat_map[U](self, f: Callable[[T], Result[U]]) -> AsyncResult[U]:
        """Chain with a sync function that returns a Result."""

        async def _chained() -> Result[U]:
            result = await self._resolve()
            return result.flat_map(f)

        return AsyncResult(_chained())

    def flat_map_async[U](self, f: Callable[[T], Awaitable[Result[U]]]) -> AsyncResult[U]:
        """Chain with an async function that returns a Result."""

        async def _chained() -> Result[U]:
            result = await self._resolve()
            return await result.flat_map_async(f)

        return AsyncResult(_chained())

    def catch(self, f: Callable[[ErrorResult[T]], Result[T]]) -> AsyncResult[T]:
        """Recover from an error with a sync function."""

        async def _recovered() -> Result[T]:
            result = await self._resolve()
            return result.catch(f)

        return AsyncResult(_recovered())

    async def fold[U](self, on_success: Callable[[T], U], on_error: Callable[[Failure], U]) -> U:
        """Await the chain and unwrap into exactly one branch."""
        result = await self._resolve()
        return result.fold(on_success, on_error)

    async def serialize(self) -> SerializableResult[T]:
        """Await the chain and return its transport form."""
        result = await self._resolve()
        return result.serialize()

    def __repr__(self) -> str:
        return f'AsyncResult({self._awaitable!r})'
