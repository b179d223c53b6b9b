"""@safe and @safe_async decorators for turning raising functions into result producers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from result_envelope.functions import try_catch, try_catch_async
from result_envelope.kinds import ErrorKind
from result_envelope.wire import SerializableResult

__all__ = ['safe', 'safe_async']


@overload
def safe[**P, T](
    func: Callable[P, T],
) -> Callable[P, SerializableResult[T]]: ...


@overload
def safe[**P, T](
    func: None = None,
    *,
    error_message: str | None = None,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
) -> Callable[[Callable[P, T]], Callable[P, SerializableResult[T]]]: ...


def safe[**P, T](
    func: Callable[P, T] | None = None,
    *,
    error_message: str | None = None,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
) -> Any:
    """Decorator that routes a function's outcome through `try_catch`.

    Can be used with or without arguments:
        @safe
        def risky(): ...

        @safe(error_message='Could not load profile', kind='not-found')
        def load_profile(user_id): ...

    Args:
        func: The function to wrap (when used without parentheses).
        error_message: Message for the error variant.
        kind: Error kind when the function raises.

    Returns:
        A wrapped function that returns SerializableResult[T] instead of T.

    Example:
        ```python
        @safe
        def divide(a: int, b: int) -> float:
            return a / b
        divide(10, 2)
        # Success(data=5.0, message=None, request_id=None)
        divide(10, 0).message
        # 'An error occurred'
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> SerializableResult[T]:
        return try_catch(lambda: wrapped(*args, **kwargs), error_message, kind=kind)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def safe_async[**P, T](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[SerializableResult[T]]]: ...


@overload
def safe_async[**P, T](
    func: None = None,
    *,
    error_message: str | None = None,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[SerializableResult[T]]]]: ...


def safe_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    error_message: str | None = None,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
) -> Any:
    """Async decorator that routes a coroutine's outcome through `try_catch_async`.

    Can be used with or without arguments:
        @safe_async
        async def risky(): ...

        @safe_async(error_message='Upstream unavailable')
        async def fetch(url): ...

    Args:
        func: The async function to wrap (when used without parentheses).
        error_message: Message for the error variant. Defaults to the
            exception's own message.
        kind: Error kind when the coroutine raises.

    Returns:
        A wrapped async function that returns SerializableResult[T] instead of T.
    """

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> SerializableResult[T]:
        return await try_catch_async(lambda: wrapped(*args, **kwargs), error_message, kind=kind)

    if func is not None:
        return wrapper(func)
    return wrapper
