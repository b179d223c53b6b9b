"""Library configuration: ResultConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from result_envelope._logging import configure_logging, get_logger

__all__ = [
    'ENV_PREFIX',
    'ResultConfig',
    'get_config',
    'init',
    'reset',
]

ENV_PREFIX = 'RESULT_ENVELOPE_'

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class ResultConfig:
    """Configuration for result producers and adapters.

    Attributes:
        default_error_message: Message used by try_catch when none is given.
        capture_diagnostics: Snapshot the call stack as the diagnostic of
            errors created without an explicit cause.
        json_indent: Indentation used by stringify.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
    """

    default_error_message: str = 'An error occurred'
    capture_diagnostics: bool = True
    json_indent: int = 2
    log_level: str | None = None


# Global configuration (set by init())
_config: ResultConfig | None = None


def _env(name: str) -> str | None:
    value = os.environ.get(f'{ENV_PREFIX}{name}')
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    msg = f"Invalid boolean for {ENV_PREFIX}{name}: '{value}'"
    raise ValueError(msg)


def _detect_capture_diagnostics() -> bool:
    value = _env('CAPTURE_DIAGNOSTICS')
    if value is None:
        return ResultConfig.capture_diagnostics
    return _parse_bool('CAPTURE_DIAGNOSTICS', value)


def _detect_json_indent() -> int:
    value = _env('JSON_INDENT')
    if value is None:
        return ResultConfig.json_indent
    try:
        return max(0, int(value))
    except ValueError:
        logging.warning("Invalid %sJSON_INDENT value '%s', defaulting to %d", ENV_PREFIX, value, ResultConfig.json_indent)
        return ResultConfig.json_indent


def init(
    default_error_message: str | None = None,
    capture_diagnostics: bool | None = None,
    json_indent: int | None = None,
    log_level: str | None = None,
) -> ResultConfig:
    """Initialize the library configuration.

    Every argument left as None is read from the environment
    (``RESULT_ENVELOPE_DEFAULT_ERROR_MESSAGE``, ``RESULT_ENVELOPE_CAPTURE_DIAGNOSTICS``,
    ``RESULT_ENVELOPE_JSON_INDENT``, ``RESULT_ENVELOPE_LOG_LEVEL``), then
    falls back to the ResultConfig defaults.

    Args:
        default_error_message: Message used by try_catch when none is given.
        capture_diagnostics: Capture the call stack for errors without a cause.
        json_indent: Indentation used by stringify.
        log_level: Level for the ``result_envelope`` logger ("DEBUG", "INFO",
            etc.). When set, a renderer handler is attached to that logger
            only. None = leave logging alone.

    Returns:
        The ResultConfig that was set.

    Raises:
        ValueError: If RESULT_ENVELOPE_CAPTURE_DIAGNOSTICS is not a boolean word.

    Example:
        ```python
        from result_envelope import init

        init(default_error_message='Something broke', capture_diagnostics=False)
        ```
    """
    global _config  # noqa: PLW0603

    _config = _resolve(default_error_message, capture_diagnostics, json_indent, log_level)

    # Explicit init is the only place logging gets configured
    if _config.log_level is not None:
        configure_logging(_config.log_level)
        get_logger(__name__).debug('result_envelope.configured', config=_config)

    return _config


def _resolve(
    default_error_message: str | None,
    capture_diagnostics: bool | None,
    json_indent: int | None,
    log_level: str | None,
) -> ResultConfig:
    return ResultConfig(
        default_error_message=(
            default_error_message
            if default_error_message is not None
            else _env('DEFAULT_ERROR_MESSAGE') or ResultConfig.default_error_message
        ),
        capture_diagnostics=capture_diagnostics if capture_diagnostics is not None else _detect_capture_diagnostics(),
        json_indent=max(0, json_indent) if json_indent is not None else _detect_json_indent(),
        log_level=log_level if log_level is not None else _env('LOG_LEVEL'),
    )


def get_config() -> ResultConfig:
    """Get the current configuration, reading the environment on first use.

    The lazy path never configures logging, even when
    ``RESULT_ENVELOPE_LOG_LEVEL`` is set; only an explicit `init` does.

    Returns:
        The current ResultConfig.
    """
    global _config  # noqa: PLW0603
    if _config is None:
        _config = _resolve(None, None, None, None)
    return _config


def reset() -> None:
    """Forget the current configuration so the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
