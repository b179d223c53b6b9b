"""JSON codec for the transport form.

Encodes `Success` / `Failure` structs (and Results, projected through
``serialize()``) to JSON bytes with msgspec, and decodes them back into the
tagged union, validating ``data`` against an expected type.

Thread Safety:
    - Encoders are NOT thread-safe → one per thread
    - Decoders ARE thread-safe (reentrant) → shared, cached per data type
    - CodecPool handles this automatically

Usage:
    >>> from result_envelope import success
    >>> from result_envelope.codec import decode, encode
    >>> encode(success([1, 2], request_id='req-1'))
    b'{"status":"success","data":[1,2],"requestId":"req-1"}'
    >>> decode(b'{"status":"error","errorType":"not-found","message":"User not found"}')
    Failure(message='User not found', error_type=<ErrorKind.NOT_FOUND: 'not-found'>, diagnostic=None, request_id=None)

Raising on malformed input is deliberate here; `decode_result` in
`functions` is the non-raising entry point.
"""

from __future__ import annotations

import threading
from typing import Any

import msgspec

from result_envelope.result import ErrorResult, SuccessResult
from result_envelope.wire import Failure, SerializableResult, Success

__all__ = [
    'CodecPool',
    'decode',
    'enc_hook',
    'encode',
    'get_codec_pool',
]


def enc_hook(obj: Any) -> Any:
    """Encode Results nested anywhere in a message as their transport form.

    Raises:
        NotImplementedError: For any other unsupported type (msgspec turns
            this into a TypeError).
    """
    if isinstance(obj, SuccessResult | ErrorResult):
        return obj.serialize()
    msg = f'Objects of type {type(obj).__name__} are not supported'
    raise NotImplementedError(msg)


class CodecPool:
    """Thread-safe pool of JSON encoders and decoders for the transport form.

    Example:
        >>> pool = CodecPool()
        >>> raw = pool.encode(Success(data={'id': 1}))
        >>> pool.decode(raw, dict[str, int])
        Success(data={'id': 1}, message=None, request_id=None)

    Attributes:
        _local: Thread-local storage for per-thread encoders.
        _decoders: Shared decoders keyed by expected data type.
        _lock: Guards creation of new decoders.
    """

    __slots__ = ('_decoders', '_local', '_lock')

    def __init__(self) -> None:
        """Initialize the pool with an empty decoder cache."""
        self._local = threading.local()
        self._decoders: dict[Any, msgspec.json.Decoder[Any]] = {}
        self._lock = threading.Lock()

    @property
    def _encoder(self) -> msgspec.json.Encoder:
        """Get or create the thread-local encoder."""
        encoder = getattr(self._local, 'encoder', None)
        if encoder is None:
            encoder = msgspec.json.Encoder(enc_hook=enc_hook)
            self._local.encoder = encoder
        return encoder

    def _decoder(self, data_type: Any) -> msgspec.json.Decoder[Any]:
        decoder = self._decoders.get(data_type)
        if decoder is None:
            with self._lock:
                decoder = self._decoders.get(data_type)
                if decoder is None:
                    decoder = msgspec.json.Decoder(Success[data_type] | Failure)
                    self._decoders[data_type] = decoder
        return decoder

    def encode(self, value: Any) -> bytes:
        """Encode a result, or any msgspec-encodable value containing results, to JSON.

        Args:
            value: A Result, a SerializableResult, or a value containing them.

        Returns:
            Compact JSON bytes.

        Raises:
            TypeError: If the value holds something msgspec cannot encode.
        """
        return self._encoder.encode(value)

    def decode(self, buf: bytes | str, data_type: Any = Any) -> SerializableResult[Any]:
        """Decode JSON into a Success or Failure.

        Args:
            buf: JSON text or bytes.
            data_type: Expected type of ``data`` on the success variant.

        Returns:
            The decoded transport form.

        Raises:
            msgspec.DecodeError: If the input is not valid JSON.
            msgspec.ValidationError: If the input does not match the schema.
        """
        return self._decoder(data_type).decode(buf)


# -----------------------------------------------------------------------------
# Module-level singleton
# -----------------------------------------------------------------------------

_codec_pool: CodecPool | None = None
_codec_pool_lock = threading.Lock()


def get_codec_pool() -> CodecPool:
    """Get the process-wide CodecPool, creating it on first use."""
    global _codec_pool  # noqa: PLW0603
    if _codec_pool is None:
        with _codec_pool_lock:
            if _codec_pool is None:
                _codec_pool = CodecPool()
    return _codec_pool


def encode(value: Any) -> bytes:
    """Encode a result to JSON bytes using the global codec pool."""
    return get_codec_pool().encode(value)


def decode(buf: bytes | str, data_type: Any = Any) -> SerializableResult[Any]:
    """Decode JSON bytes to a Success or Failure using the global codec pool."""
    return get_codec_pool().decode(buf, data_type)
