from __future__ import annotations

import pytest

from csv_formatter.document import ParseCache, read_document, stamp
from csv_formatter.errors import DocumentError


def test_read_strips_bom(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes(b"\xef\xbb\xbfa,b\n")
    assert read_document(path) == "a,b\n"


def test_missing_file_raises(tmp_path):
    with pytest.raises(DocumentError) as exc:
        read_document(tmp_path / "missing.csv")
    assert "missing.csv" in str(exc.value)


def test_invalid_utf8_raises(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes("café\n".encode("latin-1"))
    with pytest.raises(DocumentError):
        read_document(path)


def test_stamp(tmp_path):
    path = tmp_path / "a.csv"
    assert stamp(path) is None
    path.write_text("a\n", encoding="utf-8")
    first = stamp(path)
    assert first is not None and first.size_bytes == 2
    path.write_text("a,b\n", encoding="utf-8")
    assert stamp(path) != first


def test_parse_cache_reuses_tables():
    cache = ParseCache(max_entries=2)
    first = cache.parse("a,b\n")
    assert cache.parse("a,b\n") is first
    assert (cache.hits, cache.misses) == (1, 1)


def test_parse_cache_evicts_oldest():
    cache = ParseCache(max_entries=2)
    cache.parse("1")
    cache.parse("2")
    cache.parse("3")
    assert len(cache) == 2
    cache.parse("1")
    assert cache.misses == 4
