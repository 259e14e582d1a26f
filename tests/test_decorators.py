import pytest

from xmpptrace.core.decorators import handle_decode_errors, log_performance
from xmpptrace.exceptions import CaptureFormatError, CaptureIOError


def test_os_errors_become_io_errors():
    @handle_decode_errors
    def read():
        raise OSError("broken pipe")

    with pytest.raises(CaptureIOError) as excinfo:
        read()
    assert excinfo.value.context == "read"
    assert isinstance(excinfo.value.__cause__, OSError)


def test_decode_errors_pass_through():
    @handle_decode_errors
    def read():
        raise CaptureFormatError("bad magic")

    with pytest.raises(CaptureFormatError):
        read()


def test_generator_errors_are_translated():
    @handle_decode_errors
    def records():
        yield 1
        raise OSError("gone")

    gen = records()
    assert next(gen) == 1
    with pytest.raises(CaptureIOError):
        next(gen)


def test_other_errors_propagate():
    @handle_decode_errors
    def read():
        raise KeyError("x")

    with pytest.raises(KeyError):
        read()


def test_log_performance_returns_result():
    @log_performance
    def add(a, b):
        return a + b

    @log_performance
    def count():
        yield from range(3)

    assert add(1, 2) == 3
    assert list(count()) == [0, 1, 2]
