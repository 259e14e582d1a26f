from __future__ import annotations

from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

import pandas as pd

from xmpptrace.core.decorators import handle_decode_errors, log_performance
from xmpptrace.core.models import PacketRecord
from xmpptrace.parsers.factory import CaptureSourceFactory


@handle_decode_errors
def iter_packets(path: Union[str, Path]) -> Iterator[PacketRecord]:
    """
    Lazily iterates through a capture file and yields PacketRecord objects.

    The file is read one record at a time and no record is retained, so
    memory use does not grow with the capture. The file is closed when the
    generator is exhausted or discarded.

    Args:
        path: Path to a libpcap or xmppdump file.

    Yields:
        PacketRecord: A decoded record for each TCP packet in the file.
    """
    with CaptureSourceFactory.open_source(path) as source:
        yield from source


@log_performance
def read_packets(path: Union[str, Path], limit: Optional[int] = None) -> List[PacketRecord]:
    """Return the first ``limit`` records of ``path`` (all when ``None``)."""
    return list(islice(iter_packets(path), limit))


def packets_to_dataframe(records: Iterable[PacketRecord]) -> pd.DataFrame:
    """Return one row per record, in the order given."""
    rows = [record.to_row() for record in records]
    if not rows:
        return pd.DataFrame(columns=list(PacketRecord().to_row().keys()))
    return pd.DataFrame(rows)
