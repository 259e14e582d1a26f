from __future__ import annotations

from pathlib import Path
from typing import List, Type, Union

from ..core.config import settings
from ..exceptions import SourceNotAvailable
from ..logging import get_logger
from .base import CaptureSource
from .pcap_source import PcapStreamSource
from .xmppdump_source import XmppDumpStreamSource

logger = get_logger(__name__)


class CaptureSourceFactory:
    """Factory choosing a capture source for a file, in preference order."""

    _registry: List[Type[CaptureSource]] = []

    @classmethod
    def register_source(cls, source_cls: Type[CaptureSource], *, prefer: bool = False) -> None:
        """Register a source class for selection."""
        if source_cls in cls._registry:
            return
        if prefer:
            cls._registry.insert(0, source_cls)
        else:
            cls._registry.append(source_cls)
        logger.debug("Registered source %s (prefer=%s)", source_cls.__name__, prefer)

    @classmethod
    def registered_sources(cls) -> List[Type[CaptureSource]]:
        return list(cls._registry)

    @classmethod
    def select_source(cls, path: Union[str, Path], head: bytes) -> Type[CaptureSource]:
        """Return the first registered class accepting ``path``."""
        path = Path(path)
        for source_cls in cls._registry:
            if source_cls.can_decode(path, head):
                logger.debug("Selected source %s for %s", source_cls.__name__, path.name)
                return source_cls
        logger.error("No capture source accepts %s", path)
        raise SourceNotAvailable(
            f"No capture source accepts {path.name}",
            suggestion="expected a libpcap capture or an xmppdump text file",
        )

    @classmethod
    def open_source(cls, path: Union[str, Path]) -> CaptureSource:
        """Open ``path`` and return a source owning the file handle."""
        path = Path(path)
        stream = open(path, "rb")
        try:
            head = stream.read(settings.sniff_bytes)
            stream.seek(0)
            source_cls = cls.select_source(path, head)
        except BaseException:
            stream.close()
            raise
        logger.info("Reading %s with %s", path.name, source_cls.__name__)
        return source_cls(stream, owns_stream=True)


# The dump reader accepts anything, so it must come last
CaptureSourceFactory.register_source(PcapStreamSource)
CaptureSourceFactory.register_source(XmppDumpStreamSource)
