"""Tests for custom exception hierarchy."""

import pytest

from xmpptrace.exceptions import (
    XmppTraceError,
    CaptureDecodeError,
    CaptureFormatError,
    CaptureIOError,
    StanzaParseError,
    SourceNotAvailable,
)


def test_exceptions_can_be_caught():
    """Each custom exception should be catchable via the base class."""
    with pytest.raises(XmppTraceError):
        raise XmppTraceError()
    for exc_cls in [
        CaptureDecodeError,
        CaptureFormatError,
        CaptureIOError,
        StanzaParseError,
        SourceNotAvailable,
    ]:
        with pytest.raises(XmppTraceError):
            raise exc_cls()


def test_fatal_errors_share_a_base():
    """Format and I/O failures are both session fatal decode errors."""
    assert issubclass(CaptureFormatError, CaptureDecodeError)
    assert issubclass(CaptureIOError, CaptureDecodeError)
    assert not issubclass(StanzaParseError, CaptureDecodeError)


def test_context_and_suggestion_are_kept():
    exc = CaptureFormatError("bad magic", context="header", suggestion="use libpcap")
    assert str(exc) == "bad magic"
    assert exc.context == "header"
    assert exc.suggestion == "use libpcap"
