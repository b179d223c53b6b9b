"""Error kind taxonomy and its fixed transport status mapping."""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Final

__all__ = [
    'STATUS_FROM_ERROR_KIND',
    'SUCCESS_STATUS_CODE',
    'ErrorKind',
    'status_code',
]


class ErrorKind(StrEnum):
    """Closed classification of why an operation failed.

    Values are the exact strings used in the `errorType` wire field.
    """

    UNEXPECTED = 'unexpected'
    """Catch-all and default kind."""

    USER_VALIDATION = 'user-validation'
    """Caller input was invalid."""

    UNAUTHORIZED = 'unauthorized'
    """Authentication or authorization failed."""

    NOT_FOUND = 'not-found'
    """The requested subject does not exist."""


SUCCESS_STATUS_CODE: Final = 200

STATUS_FROM_ERROR_KIND: Final = MappingProxyType({
    ErrorKind.UNEXPECTED: 503,
    ErrorKind.USER_VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
})
"""Transport status code for each ErrorKind. Read-only."""


def _check_exhaustive() -> None:
    missing = set(ErrorKind) - STATUS_FROM_ERROR_KIND.keys()
    extra = STATUS_FROM_ERROR_KIND.keys() - set(ErrorKind)
    if missing or extra:
        msg = f'Status table out of sync with ErrorKind (missing={sorted(missing)}, extra={sorted(extra)})'
        raise RuntimeError(msg)


_check_exhaustive()


def status_code(kind: ErrorKind | str) -> int:
    """Return the transport status code for an error kind.

    Args:
        kind: An ErrorKind or its wire string (e.g. ``'not-found'``).

    Returns:
        The fixed status code from STATUS_FROM_ERROR_KIND.

    Raises:
        ValueError: If ``kind`` is a string that names no ErrorKind.

    Example:
        ```python
        status_code(ErrorKind.NOT_FOUND)  # 404
        status_code('user-validation')  # 400
        ```
    """
    return STATUS_FROM_ERROR_KIND[ErrorKind(kind)]
