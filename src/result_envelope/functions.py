"""Adapters between ordinary fallible code and results.

`try_catch` and `try_catch_async` are the only places where raised
exceptions are turned into error results; everything else here builds on
them or consumes results without raising.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Protocol
from warnings import deprecated

import msgspec

from result_envelope._config import get_config
from result_envelope._logging import log_discarded_error
from result_envelope.codec import get_codec_pool
from result_envelope.errors import ResultError
from result_envelope.kinds import ErrorKind
from result_envelope.result import Result, deserialize_result, error, is_error
from result_envelope.wire import Failure, SerializableResult, Success

__all__ = [
    'FLATTEN_DIAGNOSTIC_SEPARATOR',
    'FLATTEN_MESSAGE_SEPARATOR',
    'MISSING_DIAGNOSTIC',
    'ErrorLogger',
    'Validator',
    'decode_result',
    'flatten_errors',
    'parse',
    'parse_schema',
    'stringify',
    'try_catch',
    'try_catch_async',
    'unwrap',
]

FLATTEN_MESSAGE_SEPARATOR = '; '
FLATTEN_DIAGNOSTIC_SEPARATOR = ';\n'
MISSING_DIAGNOSTIC = 'No trace'


class Validator[T](Protocol):
    """Schema object that validates a value or raises."""

    def validate(self, value: Any, /) -> T: ...


type ErrorLogger = Callable[[str, str | None], None]
"""Receives ``(message, diagnostic)`` of an error that is being discarded."""


def _failure_from(exc: Exception, error_message: str | None, kind: ErrorKind | str) -> Failure:
    if isinstance(exc, ResultError):
        cause = exc.diagnostic if exc.diagnostic is not None else exc
        message = error_message if error_message is not None else exc.message
        return error(message, cause, exc.kind).serialize()
    message = error_message if error_message is not None else get_config().default_error_message
    return error(message, exc, kind).serialize()


def try_catch[T](
    fn: Callable[[], T],
    error_message: str | None = None,
    *,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
) -> SerializableResult[T]:
    """Call ``fn`` and capture its outcome as a result.

    Args:
        fn: Zero-argument callable that may raise.
        error_message: Message for the error variant. Defaults to the
            configured ``default_error_message``.
        kind: Error kind used when ``fn`` raises. A raised ResultError keeps
            its own kind.

    Returns:
        Success with the return value, or Failure whose diagnostic is the
        exception's traceback.

    Example:
        ```python
        try_catch(lambda: int('42'))
        # Success(data=42, message=None, request_id=None)

        try_catch(lambda: int('x'), 'Not a number').message
        # 'Not a number'
        ```
    """
    try:
        value = fn()
    except Exception as exc:
        return _failure_from(exc, error_message, kind)
    return Success(value)


async def try_catch_async[T](
    fn: Callable[[], Awaitable[T]],
    error_message: str | None = None,
    *,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
) -> SerializableResult[T]:
    """Await ``fn()`` and capture its outcome as a result.

    Unlike `try_catch`, when no ``error_message`` is given the exception's
    own message is used, falling back to the configured default when it is
    empty.

    Args:
        fn: Zero-argument callable returning an awaitable that may raise.
        error_message: Message for the error variant.
        kind: Error kind used when the awaitable raises.

    Returns:
        Success with the awaited value, or Failure.
    """
    try:
        value = await fn()
    except Exception as exc:
        if error_message is None and not isinstance(exc, ResultError):
            error_message = str(exc) or None
        return _failure_from(exc, error_message, kind)
    return Success(value)


def _validate[T](value: Any, schema: Validator[T] | type[T] | Any) -> T:
    validate = getattr(schema, 'validate', None)
    if callable(validate):
        return validate(value)
    return msgspec.convert(value, type=schema)


def parse_schema[T](
    value: Any,
    schema: Validator[T] | type[T] | Any,
    error_message: str = 'Failed to parse schema',
    *,
    kind: ErrorKind | str = ErrorKind.UNEXPECTED,
) -> SerializableResult[T]:
    """Validate ``value`` against ``schema``.

    ``schema`` is either an object with a ``validate(value)`` method that
    returns the parsed value or raises, or a type understood by
    ``msgspec.convert`` (Struct, dataclass, TypedDict, builtin types).
    The validator's error detail is kept only as the diagnostic.

    Args:
        value: Untrusted input, typically decoded JSON.
        schema: Validator object or target type.
        error_message: Message for the error variant.
        kind: Error kind when validation fails.

    Returns:
        Success with the parsed value, or Failure.

    Example:
        ```python
        class User(msgspec.Struct):
            name: str

        parse_schema({'name': 'Ada'}, User)  # Success(data=User(name='Ada'), ...)
        parse_schema({'name': 1}, User).message  # 'Failed to parse schema'
        ```
    """
    return try_catch(lambda: _validate(value, schema), error_message, kind=kind)


def stringify(data: Any) -> SerializableResult[str]:
    """Encode ``data`` as indented JSON text.

    Results nested in ``data`` are encoded as their transport form.
    """
    indent = get_config().json_indent

    def _encode() -> str:
        raw = get_codec_pool().encode(data)
        if indent > 0:
            raw = msgspec.json.format(raw, indent=indent)
        return raw.decode()

    return try_catch(_encode)


def parse(text: str | bytes) -> SerializableResult[Any]:
    """Decode JSON text into builtin Python objects."""
    return try_catch(lambda: msgspec.json.decode(text))


def decode_result(buf: str | bytes, data_type: Any = Any) -> Result[Any]:
    """Decode a JSON-encoded transport form straight into a Result.

    Malformed JSON or a schema mismatch becomes an ``unexpected`` error
    result instead of raising.

    Args:
        buf: JSON text or bytes of a Success or Failure.
        data_type: Expected type of ``data`` on the success variant.

    Returns:
        The decoded Result, or an error describing why decoding failed.
    """
    decoded = try_catch(lambda: get_codec_pool().decode(buf, data_type), 'Failed to decode result')
    if is_error(decoded):
        return deserialize_result(decoded)
    return deserialize_result(decoded.data)


def flatten_errors[T](results: Iterable[SerializableResult[T] | Result[T]]) -> SerializableResult[list[T]]:
    """Aggregate many results into one.

    Args:
        results: Results in either form.

    Returns:
        If any input is an error: a single ``unexpected`` error whose message
        joins every failing message with ``'; '`` and whose diagnostic joins
        every failing diagnostic with ``';\\n'`` (``'No trace'`` when absent).
        Otherwise: a success with every data value in input order, with
        ``None`` values left out.

    Example:
        ```python
        flatten_errors([success(1), error('a'), success(2), error('b')]).message
        # 'a; b'
        flatten_errors([success(1), success(2)]).data
        # [1, 2]
        ```
    """
    collected = list(results)
    failures = [result for result in collected if is_error(result)]
    if failures:
        return error(
            FLATTEN_MESSAGE_SEPARATOR.join(failure.message for failure in failures),
            FLATTEN_DIAGNOSTIC_SEPARATOR.join(
                failure.diagnostic if failure.diagnostic is not None else MISSING_DIAGNOSTIC for failure in failures
            ),
        ).serialize()
    return Success([result.data for result in collected if result.data is not None])


@deprecated('unwrap() discards errors; prefer fold() or catch()')
def unwrap[T](
    result: SerializableResult[T] | Result[T] | None,
    default: T,
    *,
    log: ErrorLogger | None = None,
) -> T:
    """Return the data of a success, else ``default``.

    Only for call sites that accept losing the error. A discarded error is
    reported through ``log(message, diagnostic)``, which defaults to a
    structlog warning.

    Args:
        result: A result in either form, or None.
        default: Value returned for an error or a missing result.
        log: Receives the discarded error.

    Returns:
        The success data or ``default``.
    """
    if result is None:
        return default
    if is_error(result):
        (log or log_discarded_error)(result.message, result.diagnostic)
        return default
    return result.data
