"""In-process Result: the transport form plus bound combinators.

A Result wraps one of the `wire` structs (`Success` or `Failure`) and adds
the chaining operations. The two layers stay separate types:
`deserialize_result` attaches behavior to a transport value and
`serialize()` detaches it again.

Example:
    ```python
    from result_envelope import not_found_error, success

    def find_user(user_id: int) -> Result[dict]:
        if user_id != 1:
            return not_found_error('User')
        return success({'id': 1, 'name': 'Ada'})

    find_user(1).map(lambda u: u['name']).serialize()
    # Success(data='Ada', message=None, request_id=None)

    find_user(2).map(lambda u: u['name']).serialize()
    # Failure(message='User not found', error_type=<ErrorKind.NOT_FOUND: 'not-found'>, ...)
    ```

Every combinator returns a new Result. On the error branch the transform is
never called and the error is forwarded with its message, kind, diagnostic
and request id intact.
"""

from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable
from typing import Any, Literal, NoReturn, TypeIs

import msgspec

from result_envelope.diagnostics import DiagnosticCapture, default_capture, format_cause
from result_envelope.errors import ResultError
from result_envelope.kinds import SUCCESS_STATUS_CODE, ErrorKind, status_code
from result_envelope.wire import Failure, SerializableResult, Success

__all__ = [
    'ErrorResult',
    'Result',
    'SuccessResult',
    'deserialize_result',
    'error',
    'is_error',
    'is_success',
    'not_found_error',
    'success',
    'unauthorized_error',
    'user_validation_error',
]


class SuccessResult[T]:
    """Success variant of Result holding a value of type T.

    Examples:
        >>> ok = success(21)
        >>> ok.map(lambda x: x * 2).data
        42
        >>> ok.catch(lambda e: success(0)) == ok
        True
    """

    __slots__ = ('_payload',)

    def __init__(self, payload: Success[T]) -> None:
        self._payload = payload

    @property
    def status(self) -> Literal['success']:
        return 'success'

    @property
    def data(self) -> T:
        return self._payload.data

    @property
    def message(self) -> str | None:
        return self._payload.message

    @property
    def request_id(self) -> str | None:
        return self._payload.request_id

    @property
    def status_code(self) -> int:
        """Transport status code for a success."""
        return SUCCESS_STATUS_CODE

    def is_success(self) -> TypeIs[SuccessResult[T]]:
        """Return True since this is a success."""
        return True

    def is_error(self) -> TypeIs[ErrorResult[T]]:
        """Return False since this is a success."""
        return False

    def map[U](self, f: Callable[[T], U]) -> SuccessResult[U]:
        """Apply a function to the contained value.

        ``f`` must not raise; exceptions propagate to the caller. Wrap a
        raising function with ``try_catch`` and use ``flat_map`` instead.

        Args:
            f: Function to apply to the value.

        Returns:
            A new success containing ``f(data)``.
        """
        return SuccessResult(Success(f(self._payload.data)))

    async def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> SuccessResult[U]:
        """Await an async function on the contained value.

        Args:
            f: Async function to apply to the value.

        Returns:
            A new success containing the awaited ``f(data)``.
        """
        value = await f(self._payload.data)
        return SuccessResult(Success(value))

    def flat_map[U](self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Apply a function that returns a Result to the contained value.

        Also known as and_then or bind.

        Args:
            f: Function that takes T and returns Result[U].

        Returns:
            The Result returned by f.
        """
        return f(self._payload.data)

    async def flat_map_async[U](self, f: Callable[[T], Awaitable[Result[U]]]) -> Result[U]:
        """Await an async function that returns a Result.

        Args:
            f: Async function that takes T and returns Result[U].

        Returns:
            The Result produced by f.
        """
        return await f(self._payload.data)

    def catch(self, f: Callable[[ErrorResult[T]], Result[T]]) -> SuccessResult[T]:  # noqa: ARG002
        """Pass the success through; ``f`` is never called."""
        return SuccessResult(self._payload)

    def fold[U](self, on_success: Callable[[T], U], on_error: Callable[[Failure], U]) -> U:  # noqa: ARG002
        """Unwrap into exactly one branch: ``on_success(data)``."""
        return on_success(self._payload.data)

    def serialize(self) -> Success[T]:
        """Return the transport form.

        The data is deep-copied, so mutating the returned struct's data
        never affects this Result.
        """
        payload = self._payload
        return Success(copy.deepcopy(payload.data), payload.message, payload.request_id)

    def with_request_id(self, request_id: str | None) -> SuccessResult[T]:
        """Return a copy tagged with an opaque correlation id."""
        return SuccessResult(msgspec.structs.replace(self._payload, request_id=request_id))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SuccessResult):
            return self._payload == other._payload
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'SuccessResult({self._payload!r})'


class ErrorResult[T]:
    """Error variant of Result.

    Parameterized over the caller's intended T but never holds one.

    Examples:
        >>> err = error('boom', 'trace')
        >>> err.map(lambda x: x * 2).message
        'boom'
        >>> err.fold(lambda x: x, lambda f: f.error_type)
        <ErrorKind.UNEXPECTED: 'unexpected'>
    """

    __slots__ = ('_payload',)

    def __init__(self, payload: Failure) -> None:
        self._payload = payload

    @property
    def status(self) -> Literal['error']:
        return 'error'

    @property
    def message(self) -> str:
        return self._payload.message

    @property
    def error_type(self) -> ErrorKind:
        return self._payload.error_type

    @property
    def diagnostic(self) -> str | None:
        return self._payload.diagnostic

    @property
    def request_id(self) -> str | None:
        return self._payload.request_id

    @property
    def status_code(self) -> int:
        """Transport status code for this error's kind."""
        return status_code(self._payload.error_type)

    def is_success(self) -> TypeIs[SuccessResult[T]]:
        """Return False since this is an error."""
        return False

    def is_error(self) -> TypeIs[ErrorResult[T]]:
        """Return True since this is an error."""
        return True

    def map[U](self, f: Callable[[T], U]) -> ErrorResult[U]:  # noqa: ARG002
        """Forward the error; ``f`` is never called."""
        return ErrorResult(self._payload)

    async def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> ErrorResult[U]:  # noqa: ARG002
        """Forward the error without suspending; ``f`` is never awaited."""
        return ErrorResult(self._payload)

    def flat_map[U](self, f: Callable[[T], Result[U]]) -> ErrorResult[U]:  # noqa: ARG002
        """Forward the error, kind included; ``f`` is never called."""
        return ErrorResult(self._payload)

    async def flat_map_async[U](self, f: Callable[[T], Awaitable[Result[U]]]) -> ErrorResult[U]:  # noqa: ARG002
        """Forward the error without suspending; ``f`` is never awaited."""
        return ErrorResult(self._payload)

    def catch(self, f: Callable[[ErrorResult[T]], Result[T]]) -> Result[T]:
        """Recover from the error.

        Args:
            f: Function that receives this error and returns a new Result,
                either a recovered success or a transformed error.

        Returns:
            The Result returned by f.
        """
        return f(self)

    def fold[U](self, on_success: Callable[[T], U], on_error: Callable[[Failure], U]) -> U:  # noqa: ARG002
        """Unwrap into exactly one branch: ``on_error(failure)``."""
        return on_error(self._payload)

    def serialize(self) -> Failure:
        """Return the transport form as a new struct."""
        return msgspec.structs.replace(self._payload)

    def with_request_id(self, request_id: str | None) -> ErrorResult[T]:
        """Return a copy tagged with an opaque correlation id."""
        return ErrorResult(msgspec.structs.replace(self._payload, request_id=request_id))

    def to_exception(self) -> ResultError:
        """Convert to exception for host code that has to raise."""
        return self._payload.to_exception()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorResult):
            return self._payload == other._payload
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'ErrorResult({self._payload!r})'


type Result[T] = SuccessResult[T] | ErrorResult[T]


# ---------------------------------------------------------------------
# Producers
# ---------------------------------------------------------------------


def success[T](data: T, message: str | None = None, *, request_id: str | None = None) -> SuccessResult[T]:
    """Wrap ``data`` as a success.

    Args:
        data: The value produced by the operation.
        message: Optional human-readable note.
        request_id: Opaque correlation id.

    Returns:
        SuccessResult[T] with no error fields.
    """
    return SuccessResult(Success(data, message, request_id))


def error[T](
    message: str,
    cause: BaseException | str | None = None,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
    *,
    request_id: str | None = None,
    capture: DiagnosticCapture | None = None,
) -> ErrorResult[T]:
    """Create an error result.

    Never raises for a valid kind.

    Args:
        message: What went wrong.
        cause: An exception (its traceback becomes the diagnostic) or a
            ready-made trace string.
        kind: Classification of the failure.
        request_id: Opaque correlation id.
        capture: Supplies the diagnostic when no cause is given. Defaults to
            snapshotting the current call stack, unless disabled by
            configuration.

    Returns:
        ErrorResult[T] carrying no data.

    Example:
        ```python
        error('Payment declined', kind='user-validation').status_code  # 400
        error('quiet', capture=no_capture).diagnostic  # None
        ```
    """
    if cause is not None:
        diagnostic = format_cause(cause)
    else:
        diagnostic = (capture or default_capture)()
    return ErrorResult(Failure(message, ErrorKind(kind), diagnostic, request_id))


def user_validation_error[T](message: str, cause: BaseException | str | None = None) -> ErrorResult[T]:
    """Create an error for invalid caller input."""
    return error(message, cause, ErrorKind.USER_VALIDATION)


def unauthorized_error[T]() -> ErrorResult[T]:
    """Create the fixed ``Unauthorized`` error."""
    return error('Unauthorized', None, ErrorKind.UNAUTHORIZED)


def not_found_error[T](subject: str) -> ErrorResult[T]:
    """Create a ``{subject} not found`` error."""
    return error(f'{subject} not found', None, ErrorKind.NOT_FOUND)


# ---------------------------------------------------------------------
# Transport bridge and predicates
# ---------------------------------------------------------------------


def deserialize_result[T](result: SerializableResult[T] | Result[T]) -> Result[T]:
    """Rehydrate a transport form into a Result.

    Status, message, data or error type, diagnostic and request id are kept
    exactly; no diagnostic is captured for an error that has none. Success
    data is deep-copied, so later changes to the caller's struct never
    reach the Result.

    Args:
        result: A Success or Failure struct. An existing Result is accepted
            and copied.

    Returns:
        The combinator-bearing Result.
    """
    match result:
        case Success():
            return SuccessResult(Success(copy.deepcopy(result.data), result.message, result.request_id))
        case Failure():
            return ErrorResult(result)
        case SuccessResult() | ErrorResult():
            return deserialize_result(result.serialize())
        case _:
            _unreachable(result)


def is_success[T](result: SerializableResult[T] | Result[T]) -> TypeIs[Success[T] | SuccessResult[T]]:
    """Return True if the result, in either form, is a success."""
    return result.status == 'success'


def is_error[T](result: SerializableResult[T] | Result[T]) -> TypeIs[Failure | ErrorResult[T]]:
    """Return True if the result, in either form, is an error."""
    return result.status == 'error'


def _unreachable(value: Any) -> NoReturn:
    msg = f'Expected a Result or SerializableResult, got {type(value).__name__}'
    raise TypeError(msg)
