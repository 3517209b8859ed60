"""CSV text to rows.

A single left-to-right scan over the text with one character of lookahead.
Only quoted fields and doubled quotes are understood; there is no dialect
detection and the delimiter is always a comma.
"""
from __future__ import annotations

from enum import Enum

Row = list[str]
Table = list[Row]

_QUOTE = '"'
_COMMA = ","
_CR = "\r"
_LF = "\n"


class ScanState(Enum):
    NORMAL = "normal"
    INSIDE_QUOTES = "inside_quotes"


def parse(text: str) -> Table:
    """Split `text` into rows of string fields.

    Never fails: an unterminated quote is closed at end of input and ragged rows
    are returned as they are.
    """
    rows: Table = []
    row: Row = []
    field: list[str] = []
    state = ScanState.NORMAL
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if ch == _QUOTE:
            if state is ScanState.INSIDE_QUOTES and nxt == _QUOTE:
                field.append(_QUOTE)
                i += 2
                continue
            state = ScanState.NORMAL if state is ScanState.INSIDE_QUOTES else ScanState.INSIDE_QUOTES
        elif ch == _COMMA and state is ScanState.NORMAL:
            row.append("".join(field))
            field = []
        elif ch == _LF or (ch == _CR and nxt == _LF):
            if state is ScanState.INSIDE_QUOTES:
                field.append(ch)
            else:
                row.append("".join(field))
                rows.append(row)
                row = []
                field = []
                if ch == _CR:
                    i += 1  # \r\n ends the row once
        else:
            field.append(ch)
        i += 1

    if field or row:
        row.append("".join(field))
        rows.append(row)
    return rows


def _quote_field(value: str) -> str:
    if any(c in value for c in (_QUOTE, _COMMA, _CR, _LF)):
        return _QUOTE + value.replace(_QUOTE, _QUOTE * 2) + _QUOTE
    return value


def serialize(table: Table) -> str:
    """Inverse of `parse` for any table with at least one field per row."""
    return "".join(",".join(_quote_field(v) for v in row) + _LF for row in table)
