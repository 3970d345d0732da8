import errno

import pytest

from skigif.errors import (
    GifskiError,
    error_from_code,
    error_from_errno,
    error_to_exception,
)


def test_ok_is_zero():
    assert error_from_code(0) is GifskiError.OK


def test_every_code_round_trips():
    for err in GifskiError:
        assert error_from_code(int(err)) is err


@pytest.mark.parametrize("code", [-1, 16, 1000])
def test_unknown_code_is_other(code):
    assert error_from_code(code) is GifskiError.OTHER


def test_display_is_name():
    assert str(error_from_code(11)) == "WRITE_ZERO"
    assert str(error_from_code(2)) == "INVALID_STATE"


@pytest.mark.parametrize(
    "value, expected",
    [
        (errno.ENOENT, GifskiError.NOT_FOUND),
        (errno.EACCES, GifskiError.PERMISSION_DENIED),
        (errno.EPERM, GifskiError.PERMISSION_DENIED),
        (errno.EEXIST, GifskiError.ALREADY_EXISTS),
        (errno.EINVAL, GifskiError.INVALID_INPUT),
        (errno.ETIMEDOUT, GifskiError.TIMED_OUT),
        (errno.EINTR, GifskiError.INTERRUPTED),
        (errno.ENOSPC, GifskiError.OTHER),
        (None, GifskiError.OTHER),
    ],
)
def test_errno_mapping(value, expected):
    assert error_from_errno(value) is expected


def test_ok_has_no_exception():
    with pytest.raises(ValueError):
        error_to_exception(GifskiError.OK)


@pytest.mark.parametrize(
    "err, exc_type",
    [
        (GifskiError.NOT_FOUND, FileNotFoundError),
        (GifskiError.PERMISSION_DENIED, PermissionError),
        (GifskiError.ALREADY_EXISTS, FileExistsError),
        (GifskiError.TIMED_OUT, TimeoutError),
        (GifskiError.INTERRUPTED, InterruptedError),
    ],
)
def test_exception_types(err, exc_type):
    exc = error_to_exception(err)
    assert isinstance(exc, exc_type)
    assert error_from_errno(exc.errno) is err


def test_exception_round_trip_for_all_errors():
    for err in GifskiError:
        if err is GifskiError.OK:
            continue
        exc = error_to_exception(err)
        assert isinstance(exc, OSError)
        assert exc.gifski_error is err


def test_non_io_error_message_is_name():
    exc = error_to_exception(GifskiError.ABORTED)
    assert str(exc) == "ABORTED"
    assert exc.errno is None