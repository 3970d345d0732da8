"""Status codes reported by the encoder and their mapping to OS errors."""

from __future__ import annotations

import errno
import os
from enum import IntEnum

__all__ = ["GifskiError", "error_from_code", "error_from_errno", "error_to_exception"]


class GifskiError(IntEnum):
    """Numeric status of an encoder operation. ``OK`` means success."""

    OK = 0
    NULL_ARG = 1
    INVALID_STATE = 2
    QUANT = 3
    GIF = 4
    THREAD_LOST = 5
    NOT_FOUND = 6
    PERMISSION_DENIED = 7
    ALREADY_EXISTS = 8
    INVALID_INPUT = 9
    TIMED_OUT = 10
    WRITE_ZERO = 11
    INTERRUPTED = 12
    UNEXPECTED_EOF = 13
    ABORTED = 14
    OTHER = 15

    def __str__(self) -> str:
        return self.name


_ERRNO_TO_ERROR: dict[int, GifskiError] = {
    errno.ENOENT: GifskiError.NOT_FOUND,
    errno.EPERM: GifskiError.PERMISSION_DENIED,
    errno.EACCES: GifskiError.PERMISSION_DENIED,
    errno.EEXIST: GifskiError.ALREADY_EXISTS,
    errno.EINVAL: GifskiError.INVALID_INPUT,
    errno.ETIMEDOUT: GifskiError.TIMED_OUT,
    errno.EINTR: GifskiError.INTERRUPTED,
}

_ERROR_TO_ERRNO: dict[GifskiError, int] = {
    GifskiError.NOT_FOUND: errno.ENOENT,
    GifskiError.PERMISSION_DENIED: errno.EACCES,
    GifskiError.ALREADY_EXISTS: errno.EEXIST,
    GifskiError.INVALID_INPUT: errno.EINVAL,
    GifskiError.TIMED_OUT: errno.ETIMEDOUT,
    GifskiError.INTERRUPTED: errno.EINTR,
}


def error_from_code(code: int) -> GifskiError:
    """Return the status for a numeric code; unknown codes become ``OTHER``."""
    try:
        return GifskiError(code)
    except ValueError:
        return GifskiError.OTHER


def error_from_errno(errno_value: int | None) -> GifskiError:
    """Classify an OS ``errno`` value as a status."""
    if errno_value is None:
        return GifskiError.OTHER
    return _ERRNO_TO_ERROR.get(errno_value, GifskiError.OTHER)


def error_to_exception(error: GifskiError) -> OSError:
    """Build the ``OSError`` that corresponds to a failing status.

    ``OK`` is not an error and is rejected with ``ValueError``.
    """
    error = GifskiError(error)
    if error is GifskiError.OK:
        raise ValueError("wrong err code")
    code = _ERROR_TO_ERRNO.get(error)
    if code is not None:
        exc = OSError(code, os.strerror(code))
    else:
        exc = OSError(str(error))
    exc.gifski_error = error
    return exc