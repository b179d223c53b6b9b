"""Diagnostic text for error results: formatted causes and call-stack snapshots."""

from __future__ import annotations

import traceback
from collections.abc import Callable

from result_envelope._config import get_config

__all__ = [
    'DiagnosticCapture',
    'capture_stack',
    'default_capture',
    'format_cause',
    'no_capture',
]

type DiagnosticCapture = Callable[[], str | None]
"""Produces the diagnostic for an error created without an explicit cause."""


def capture_stack(skip: int = 0) -> str:
    """Format the current call stack, innermost frame last.

    Args:
        skip: Number of innermost caller frames to leave out.
    """
    frames = traceback.extract_stack()[: -(skip + 1)]
    return ''.join(traceback.format_list(frames))


def no_capture() -> None:
    """Capture nothing."""
    return None


def default_capture() -> str | None:
    """Capture the call stack unless disabled by configuration."""
    if not get_config().capture_diagnostics:
        return None
    return capture_stack(skip=1)


def format_cause(cause: BaseException | str) -> str:
    """Render a cause as diagnostic text.

    Strings are used verbatim; exceptions are formatted with their traceback
    and any chained causes.
    """
    if isinstance(cause, str):
        return cause
    return ''.join(traceback.format_exception(cause)).rstrip()
