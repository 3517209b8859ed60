from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .csv_parser import Row, Table, parse
from .document import DocumentStamp, ParseCache, read_document, stamp
from .errors import OutputError
from .pagination import PAGE_SIZE, Page, clamp_index, fit_row, page_info, total_pages
from .renderer import RenderedPage, render, render_document
from .theme import ThemeConfig

logger = logging.getLogger("csv-formatter")


def page_file_name(index: int) -> str:
    return f"page-{index + 1}.html"


def _write_html(target: Path, html: str) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
    except OSError as e:
        raise OutputError(target, e.strerror or str(e)) from e


class PreviewSession:
    """One open CSV file and the page the user is looking at.

    The session re-reads and re-parses on demand and renders with whatever the
    theme provider returns at that moment; it never caches rendered output.
    """

    def __init__(
        self,
        path: Path,
        theme_provider: Callable[[], ThemeConfig],
        *,
        page_size: int = PAGE_SIZE,
        cache: Optional[ParseCache] = None,
    ) -> None:
        Page(0, page_size)  # validates page_size
        self.path = path
        self._theme_provider = theme_provider
        self._page_size = page_size
        self._cache = cache
        self._table: Table = []
        self._stamp: Optional[DocumentStamp] = None
        self._page_index = 0
        self._loaded = False

    @property
    def table(self) -> Table:
        return self._table

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page(self) -> Page:
        return Page(self._page_index, self._page_size)

    @property
    def total_pages(self) -> int:
        return total_pages(max(0, len(self._table) - 1), self._page_size)

    def reload(self) -> RenderedPage:
        current_stamp = stamp(self.path)
        text = read_document(self.path)
        self._stamp = current_stamp
        table = self._cache.parse(text) if self._cache is not None else parse(text)
        if not self._loaded or table != self._table:
            self._page_index = 0
        self._table = table
        self._loaded = True
        logger.debug("Loaded %s: %d rows", self.path, len(table))
        return self.current()

    def refresh_if_changed(self) -> bool:
        current = stamp(self.path)
        if self._loaded and current == self._stamp:
            return False
        self.reload()
        return True

    def current(self) -> RenderedPage:
        return render(self._table, self._theme_provider(), self.page)

    def go_to(self, index: int) -> RenderedPage:
        self._page_index = clamp_index(index, self.total_pages)
        return self.current()

    def next_page(self) -> RenderedPage:
        return self.go_to(self._page_index + 1)

    def prev_page(self) -> RenderedPage:
        return self.go_to(self._page_index - 1)

    def first_page(self) -> RenderedPage:
        return self.go_to(0)

    def last_page(self) -> RenderedPage:
        return self.go_to(self.total_pages - 1)

    def rows_for_display(self) -> tuple[Row, list[Row]]:
        """Header and the current page's data rows, each fitted to the header width."""
        if not self._table:
            return [], []
        header = list(self._table[0])
        info = page_info(self._table, self.page)
        rows = [fit_row(r, len(header)) for r in self._table[info.start : info.stop]]
        return header, rows

    def export_html(self, target: Path) -> Path:
        _write_html(target, render_document(self.current(), title=self.path.name))
        return target

    def export_all(self, directory: Path) -> list[Path]:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(directory, e.strerror or str(e)) from e
        theme = self._theme_provider()
        written: list[Path] = []
        for index in range(self.total_pages):
            rendered = render(self._table, theme, Page(index, self._page_size), page_href=page_file_name)
            out = directory / page_file_name(index)
            _write_html(out, render_document(rendered, title=f"{self.path.name} ({index + 1}/{self.total_pages})"))
            written.append(out)
        logger.info("Exported %d page(s) of %s to %s", len(written), self.path, directory)
        return written
