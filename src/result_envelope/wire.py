"""Transport form of a result: the plain data that crosses a boundary.

`Success` and `Failure` are msgspec tagged-union variants discriminated by
the ``status`` field. They carry no combinators, so they can be encoded to
JSON (or any msgspec format) as they are:

    {"status": "success", "data": ..., "message"?: ..., "requestId"?: ...}
    {"status": "error", "errorType": ..., "message": ..., "diagnostic"?: ..., "requestId"?: ...}

Fields left at ``None`` are omitted from the encoded form.

Usage:
    >>> import msgspec
    >>> from result_envelope.wire import Success
    >>> msgspec.json.encode(Success(data=[1, 2]))
    b'{"status":"success","data":[1,2]}'

See Also:
    - result.py: the in-process Result built on top of these structs
    - codec.py: JSON encoder/decoder pool for this schema
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Literal, TypeVar

import msgspec

from result_envelope.kinds import SUCCESS_STATUS_CODE, ErrorKind, status_code

if TYPE_CHECKING:
    from result_envelope.errors import ResultError

__all__ = [
    'Failure',
    'SerializableResult',
    'Success',
]

T = TypeVar('T')


class Success(
    msgspec.Struct,
    Generic[T],
    tag='success',
    tag_field='status',
    rename='camel',
    omit_defaults=True,
    frozen=True,
):
    """Success variant of the transport form.

    Attributes:
        data: The value produced by the operation.
        message: Optional human-readable note.
        request_id: Opaque correlation id set by the caller (``requestId`` on the wire).
    """

    data: T
    message: str | None = None
    request_id: str | None = None

    @property
    def status(self) -> Literal['success']:
        """Wire discriminator."""
        return 'success'

    @property
    def status_code(self) -> int:
        """Transport status code for a success."""
        return SUCCESS_STATUS_CODE


class Failure(
    msgspec.Struct,
    tag='error',
    tag_field='status',
    rename='camel',
    omit_defaults=True,
    frozen=True,
    gc=False,
):
    """Error variant of the transport form.

    Attributes:
        message: What went wrong, suitable for the caller.
        error_type: Classification of the failure (``errorType`` on the wire).
        diagnostic: Optional trace text for debugging; never parsed.
        request_id: Opaque correlation id set by the caller (``requestId`` on the wire).
    """

    message: str
    error_type: ErrorKind
    diagnostic: str | None = None
    request_id: str | None = None

    @property
    def status(self) -> Literal['error']:
        """Wire discriminator."""
        return 'error'

    @property
    def status_code(self) -> int:
        """Transport status code for this failure's kind."""
        return status_code(self.error_type)

    def to_exception(self) -> ResultError:
        """Convert to exception for raise-based code."""
        from result_envelope.errors import ResultError

        return ResultError(self.message, self.error_type, self.diagnostic)


type SerializableResult[T] = Success[T] | Failure
