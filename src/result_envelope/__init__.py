"""result-envelope: success-or-classified-error results that survive transport.

A Result is either a success carrying data or an error carrying a message,
an ErrorKind and an optional diagnostic. In-process code chains Results
with map / flat_map / catch / fold; ``serialize()`` turns one into a plain
msgspec struct that can be JSON-encoded for an API response, and
``deserialize_result`` turns it back.

Flat imports (preferred):
    from result_envelope import Result, success, error, not_found_error
    from result_envelope import try_catch, parse_schema, flatten_errors, safe

Submodule imports (for organization):
    from result_envelope.result import SuccessResult, ErrorResult
    from result_envelope.wire import Success, Failure
    from result_envelope.codec import encode, decode
    from result_envelope.async_ import AsyncResult, gather_results
"""

# Configuration
from result_envelope._config import ResultConfig, get_config, init

# Async
from result_envelope.async_ import AsyncResult, gather_results

# Codec
from result_envelope.codec import decode, encode

# Decorators
from result_envelope.decorators import safe, safe_async

# Diagnostics
from result_envelope.diagnostics import capture_stack, no_capture

# Exception bridge
from result_envelope.errors import ResultError

# Adapters
from result_envelope.functions import (
    decode_result,
    flatten_errors,
    parse,
    parse_schema,
    stringify,
    try_catch,
    try_catch_async,
    unwrap,
)

# Error kinds
from result_envelope.kinds import STATUS_FROM_ERROR_KIND, ErrorKind, status_code

# Result types and producers
from result_envelope.result import (
    ErrorResult,
    Result,
    SuccessResult,
    deserialize_result,
    error,
    is_error,
    is_success,
    not_found_error,
    success,
    unauthorized_error,
    user_validation_error,
)

# Transport form
from result_envelope.wire import Failure, SerializableResult, Success

__all__ = [
    # Error kinds
    'STATUS_FROM_ERROR_KIND',
    # Async
    'AsyncResult',
    'ErrorKind',
    # Result types
    'ErrorResult',
    # Transport form
    'Failure',
    'Result',
    # Configuration
    'ResultConfig',
    # Exception bridge
    'ResultError',
    'SerializableResult',
    'Success',
    'SuccessResult',
    # Diagnostics
    'capture_stack',
    # Codec
    'decode',
    'decode_result',
    'deserialize_result',
    'encode',
    # Producers
    'error',
    # Adapters
    'flatten_errors',
    'gather_results',
    'get_config',
    'init',
    'is_error',
    'is_success',
    'no_capture',
    'not_found_error',
    'parse',
    'parse_schema',
    # Decorators
    'safe',
    'safe_async',
    'status_code',
    'stringify',
    'success',
    'try_catch',
    'try_catch_async',
    'unauthorized_error',
    'unwrap',
    'user_validation_error',
]
