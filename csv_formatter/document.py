from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .csv_parser import Table, parse
from .errors import DocumentError

logger = logging.getLogger("csv-formatter")


@dataclass(frozen=True)
class DocumentStamp:
    size_bytes: int
    mtime_ns: int


def stamp(path: Path) -> Optional[DocumentStamp]:
    try:
        st = path.stat()
    except OSError:
        return None
    return DocumentStamp(size_bytes=st.st_size, mtime_ns=st.st_mtime_ns)


def read_document(path: Path) -> str:
    """Read a CSV file as UTF-8 text (a leading BOM is dropped)."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentError(path, e.strerror or str(e)) from e
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DocumentError(path, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
    logger.debug("Read %s (%d bytes)", path, len(raw))
    return text


class ParseCache:
    """Small LRU of parsed tables keyed by a hash of the text."""

    def __init__(self, max_entries: int = 8) -> None:
        self._max_entries = max(1, max_entries)
        self._data: OrderedDict[str, Table] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._data)

    def parse(self, text: str) -> Table:
        key = hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()
        cached = self._data.get(key)
        if cached is not None:
            self._data.move_to_end(key)
            self.hits += 1
            return cached
        self.misses += 1
        table = parse(text)
        logger.debug("Parsed %d rows", len(table))
        self._data[key] = table
        if len(self._data) > self._max_entries:
            self._data.popitem(last=False)
        return table

    def clear(self) -> None:
        self._data.clear()
