from __future__ import annotations

import math
from dataclasses import dataclass

from .csv_parser import Row, Table

PAGE_SIZE = 100


@dataclass(frozen=True)
class Page:
    page_index: int = 0
    page_size: int = PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {self.page_index}")
        if self.page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {self.page_size}")


@dataclass(frozen=True)
class PageInfo:
    page_index: int
    page_size: int
    total_pages: int
    total_rows: int  # data rows, header excluded
    start: int  # table row slice [start, stop)
    stop: int

    @property
    def can_go_prev(self) -> bool:
        return self.page_index > 0

    @property
    def can_go_next(self) -> bool:
        return self.page_index < self.total_pages - 1

    @property
    def row_count(self) -> int:
        return self.stop - self.start

    @property
    def summary(self) -> str:
        return f"Page {self.page_index + 1} of {self.total_pages} ({self.total_rows} rows)"


def total_pages(data_rows: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, math.ceil(data_rows / page_size))


def page_info(table: Table, page: Page) -> PageInfo:
    """Locate the data rows shown for `page`. Row 0 of the table is the header."""
    data_rows = max(0, len(table) - 1)
    start = 1 + page.page_index * page.page_size
    stop = max(start, min(1 + (page.page_index + 1) * page.page_size, len(table)))
    return PageInfo(
        page_index=page.page_index,
        page_size=page.page_size,
        total_pages=total_pages(data_rows, page.page_size),
        total_rows=data_rows,
        start=start,
        stop=stop,
    )


def fit_row(row: Row, width: int) -> Row:
    """Pad or cut `row` to exactly `width` cells."""
    if len(row) >= width:
        return list(row[:width])
    return list(row) + [""] * (width - len(row))


def clamp_index(index: int, pages: int) -> int:
    return min(max(0, index), max(0, pages - 1))
