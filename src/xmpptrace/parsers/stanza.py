"""Reconstruct XML stanzas from a single TCP payload.

A payload may hold several top-level elements back to back, leading noise
such as BOSH HTTP headers, or the tail of a stanza whose start travelled in
an earlier packet. Stanza boundaries are found with a byte-level tag scan
that only balances open and close tags; each balanced span is then handed
to :mod:`xml.etree.ElementTree`.
"""

from __future__ import annotations

import enum
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from ..exceptions import StanzaParseError
from ..logging import get_logger

logger = get_logger(__name__)

_LT = ord("<")
_GT = ord(">")
_SLASH = ord("/")
_WHITESPACE = frozenset(b" \t\n\r\x0b\x0c\x1c\x1d\x1e\x1f")


class StanzaOutcome(enum.Enum):
    PARSED = "parsed"
    DROPPED = "dropped"
    INCOMPLETE = "incomplete"
    ABORTED = "aborted"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class StanzaAttempt:
    """Result of one pass over the payload looking for a stanza.

    ``end`` is the byte offset where scanning continues. ``element`` is only
    set for :attr:`StanzaOutcome.PARSED`; ``reason`` explains the other
    outcomes.
    """

    outcome: StanzaOutcome
    start: int
    end: int
    element: Optional[ET.Element] = None
    reason: str = ""

    @property
    def stops_scan(self) -> bool:
        return self.outcome in (
            StanzaOutcome.ABORTED,
            StanzaOutcome.INCOMPLETE,
            StanzaOutcome.EXHAUSTED,
        )


def _skip_whitespace(buf: bytes, pos: int) -> int:
    while pos < len(buf) and buf[pos] in _WHITESPACE:
        pos += 1
    return pos


def _skip_declaration(buf: bytes, pos: int) -> int:
    if len(buf) - pos < 4:
        return pos
    if buf.startswith(b"<?", pos):
        end = buf.find(b"?>", pos + 2)
        return len(buf) if end == -1 else end + 2
    return pos


def _tag_name_end(buf: bytes, start: int) -> int:
    pos = start
    while pos < len(buf):
        c = buf[pos]
        if c in _WHITESPACE or c == _GT or (pos != start and c == _SLASH):
            break
        pos += 1
    return pos


def _find_stanza_end(buf: bytes, start: int) -> Optional[int]:
    """Return the offset just past the stanza opening at ``start``.

    ``None`` means the payload ended before the tags balanced. Malformed
    markup raises :class:`StanzaParseError`.
    """
    tag: Optional[bytes] = None
    stack: List[bytes] = []
    pos = start
    n = len(buf)
    while pos < n:
        if buf[pos] == _LT:
            if tag is not None:
                raise StanzaParseError("found '<' inside an open tag")
            pos += 1
            name_end = _tag_name_end(buf, pos)
            tag = buf[pos:name_end]
            pos = name_end
            if pos >= n:
                return None

        if buf[pos] == _GT:
            if tag is None:
                raise StanzaParseError("found '>' outside a tag")
            if not tag:
                raise StanzaParseError("found empty tag name")
            if tag[0] == _SLASH:
                if not stack:
                    raise StanzaParseError(f"unexpected close tag {tag[1:]!r}")
                last = stack.pop()
                if last != tag[1:]:
                    raise StanzaParseError(f"close tag {tag[1:]!r} does not match {last!r}")
            elif buf[pos - 1] != _SLASH:
                stack.append(tag)
            tag = None

        if tag is None and not stack:
            return pos + 1
        pos += 1
    return None


class StanzaReconstructor:
    """Split a payload into independently parsed element trees.

    Instances hold the payload and a read cursor; they are not restartable.
    Use :meth:`parse` for the element list or :meth:`scan` to see every
    attempt, including the ones that were dropped or that stopped the scan.
    """

    def __init__(self, payload: Union[str, bytes]) -> None:
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self._buf = payload
        self._pos = 0
        self._done = False

    def _next_attempt(self) -> StanzaAttempt:
        buf = self._buf
        start = buf.find(b"<", self._pos)
        if start == -1:
            return StanzaAttempt(StanzaOutcome.EXHAUSTED, self._pos, len(buf))

        try:
            end = _find_stanza_end(buf, start)
        except StanzaParseError as exc:
            return StanzaAttempt(StanzaOutcome.ABORTED, start, len(buf), reason=str(exc))
        if end is None:
            return StanzaAttempt(
                StanzaOutcome.INCOMPLETE, start, len(buf), reason="payload ended inside stanza"
            )

        try:
            element = ET.fromstring(buf[start:end])
        except ET.ParseError as exc:
            return StanzaAttempt(StanzaOutcome.DROPPED, start, end, reason=str(exc))
        return StanzaAttempt(StanzaOutcome.PARSED, start, end, element=element)

    def scan(self) -> Iterator[StanzaAttempt]:
        """Yield one :class:`StanzaAttempt` per stanza candidate."""
        if self._done:
            return
        buf = self._buf
        pos = _skip_whitespace(buf, 0)
        pos = _skip_declaration(buf, pos)
        self._pos = _skip_whitespace(buf, pos)

        while self._pos < len(buf):
            attempt = self._next_attempt()
            self._pos = _skip_whitespace(buf, attempt.end)
            if attempt.outcome is not StanzaOutcome.PARSED:
                logger.debug(
                    "Stanza at offset %d %s: %s",
                    attempt.start,
                    attempt.outcome.value,
                    attempt.reason,
                )
            yield attempt
            if attempt.stops_scan:
                break
        self._done = True

    def parse(self) -> List[ET.Element]:
        return [a.element for a in self.scan() if a.outcome is StanzaOutcome.PARSED]


def parse_stanzas(payload: Union[str, bytes]) -> List[ET.Element]:
    """Return the element trees reconstructed from ``payload``."""
    return StanzaReconstructor(payload).parse()


__all__ = ["StanzaOutcome", "StanzaAttempt", "StanzaReconstructor", "parse_stanzas"]
