"""Structured logging for result_envelope.

Every logger handed out here is a structlog wrapper around a stdlib logger
under the ``result_envelope`` namespace, with its own processor chain. The
library never calls ``structlog.configure`` and never touches the root
logger, so the host application's logging setup stays in charge: records
propagate to the host's handlers as ordinary stdlib records with the event
fields in ``extra``.

`configure_logging` is opt-in. It attaches a single renderer handler to
the ``result_envelope`` logger and sets that logger's level, replacing only
a handler it attached before.

The library itself emits two events:
    - ``result.unwrap.discarded_error`` (warning) when `unwrap` drops an error
    - ``result_envelope.configured`` (debug) when `init` sets a log level
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'LOGGER_NAME',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'log_discarded_error',
    'remove_log_hook',
    'reset_logging',
]

LOGGER_NAME = 'result_envelope'
_HANDLER_NAME = 'result_envelope.renderer'

type LogHook = Callable[[dict[str, Any]], None]

_log_hooks: list[LogHook] = []


def add_log_hook(hook: LogHook) -> None:
    """Register a hook that receives a copy of every library event dict.

    Hooks run before the record reaches any handler and only for events
    enabled at the ``result_envelope`` logger's effective level.
    """
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Remove a previously registered hook; unknown hooks are ignored."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    """Remove all registered hooks."""
    _log_hooks.clear()


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _log_hooks:
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: S110
            pass  # a broken hook must not stop the event
    return event_dict


_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    _run_hooks,
    structlog.stdlib.render_to_log_kwargs,
]


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger bound to the library's namespace.

    Args:
        name: Child name under ``result_envelope``. None for the package logger.

    Returns:
        A structlog BoundLogger writing to the stdlib logger of that name.
    """
    if not name or name == LOGGER_NAME or name.startswith(f'{LOGGER_NAME}.'):
        qualified = name or LOGGER_NAME
    else:
        qualified = f'{LOGGER_NAME}.{name}'
    return structlog.wrap_logger(
        logging.getLogger(qualified),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def log_discarded_error(message: str, diagnostic: str | None) -> None:
    """Default logger for `unwrap`: report an error that is being replaced by a default."""
    get_logger().warning(
        'result.unwrap.discarded_error',
        error_message=message,
        diagnostic=diagnostic,
    )


def _renderer_handler(stream: TextIO, json_output: bool) -> logging.Handler:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=stream.isatty())
    )
    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.ExtraAdder(),
                structlog.processors.TimeStamper(fmt='iso'),
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Render library events on a handler of the ``result_envelope`` logger.

    The root logger and every handler the host installed are left alone.
    Calling this again replaces the handler from the previous call.

    Args:
        level: Level for the ``result_envelope`` logger ("DEBUG", "INFO", ...).
        json_output: If True, emit JSON lines. If False, use console output.
        stream: Destination stream. Defaults to stderr.

    Returns:
        The configured ``result_envelope`` stdlib logger.
    """
    library_logger = logging.getLogger(LOGGER_NAME)
    _remove_renderer(library_logger)
    library_logger.addHandler(_renderer_handler(stream or sys.stderr, json_output))
    library_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return library_logger


def reset_logging() -> None:
    """Undo `configure_logging`: drop its handler and restore level inheritance."""
    library_logger = logging.getLogger(LOGGER_NAME)
    _remove_renderer(library_logger)
    library_logger.setLevel(logging.NOTSET)


def _remove_renderer(library_logger: logging.Logger) -> None:
    for handler in [h for h in library_logger.handlers if h.get_name() == _HANDLER_NAME]:
        library_logger.removeHandler(handler)
        handler.close()
