"""Exception bridge: ResultError for raise-based code, Failure for Result-based code."""

from __future__ import annotations

from result_envelope.kinds import ErrorKind
from result_envelope.wire import Failure

__all__ = ['ResultError']


class ResultError(Exception):
    """A classified failure raised as an exception.

    Raising a ResultError inside a function wrapped by ``try_catch`` keeps
    its kind (and its message, unless the caller supplies one) in the
    resulting error variant.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind | str = ErrorKind.UNEXPECTED,
        diagnostic: str | None = None,
    ) -> None:
        self.message = message
        self.kind = ErrorKind(kind)
        self.diagnostic = diagnostic
        super().__init__(f'[{self.kind}] {message}')

    def to_struct(self) -> Failure:
        """Convert to struct for Result-based code."""
        return Failure(self.message, self.kind, self.diagnostic)
