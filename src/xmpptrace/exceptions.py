"""Custom exceptions for the :mod:`xmpptrace` package."""


class XmppTraceError(Exception):
    """Base class for all custom ``xmpptrace`` exceptions.

    Parameters
    ----------
    message:
        Short description of the failure.
    context:
        Optional additional information about where/why the error occurred.
    suggestion:
        Optional hint that may help recover from the error.
    """

    def __init__(
        self,
        message: str = "",
        *,
        context: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.context = context
        self.suggestion = suggestion


class CaptureDecodeError(XmppTraceError):
    """Raised when a capture session cannot continue."""


class CaptureFormatError(CaptureDecodeError):
    """Raised when the capture header is corrupt or of an unknown format."""


class CaptureIOError(CaptureDecodeError):
    """Raised when reading the underlying stream fails."""


class StanzaParseError(XmppTraceError):
    """Raised by the stanza tag scanner on malformed markup."""


class SourceNotAvailable(XmppTraceError):
    """Raised when no capture source accepts a file."""
