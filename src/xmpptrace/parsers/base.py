from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Iterator, Optional

from ..core.models import PacketRecord


class CaptureSource(ABC):
    """Abstract base class for capture stream decoders.

    A source produces one :class:`PacketRecord` per :meth:`next_packet` call
    and returns ``None`` once the stream is exhausted. Instances keep cursor
    state and must not be shared between threads.
    """

    def __init__(self, stream: IO, *, owns_stream: bool = False) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self._packet_count = 0

    @classmethod
    @abstractmethod
    def can_decode(cls, path: Path, head: bytes) -> bool:
        """Return ``True`` if the file at ``path`` starting with ``head`` suits this source."""

    @abstractmethod
    def next_packet(self) -> Optional[PacketRecord]:
        """Return the next record, or ``None`` at end of stream."""

    @property
    def packet_count(self) -> int:
        return self._packet_count

    def _next_pacno(self) -> int:
        pacno = self._packet_count
        self._packet_count += 1
        return pacno

    def close(self) -> None:
        if self._owns_stream and not self._stream.closed:
            self._stream.close()

    def __iter__(self) -> Iterator[PacketRecord]:
        while True:
            packet = self.next_packet()
            if packet is None:
                return
            yield packet

    def __enter__(self) -> "CaptureSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
