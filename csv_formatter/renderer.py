"""Parsed rows + theme -> paginated HTML.

The first row is always rendered as the header. Every data row is rendered with
exactly as many cells as the header has: short rows are padded with empty
cells, long rows lose their extra fields.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .csv_parser import Table
from .pagination import Page, PageInfo, fit_row, page_info
from .theme import ThemeConfig

NO_DATA_MARKUP = '<p class="no-data">No data</p>'

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)

_BASE_CSS = """
body { font-family: system-ui, sans-serif; padding: 10px; }
table.csv-table { border-collapse: collapse; width: 100%; }
table.csv-table th, table.csv-table td { padding: 8px; text-align: left; white-space: pre-wrap; }
table.csv-table tr { background-color: transparent; }
table.csv-table tbody tr:hover { background-color: rgba(128, 128, 128, 0.15); }
nav.pager { display: flex; gap: 12px; align-items: center; margin-top: 10px; }
nav.pager .disabled { opacity: 0.4; }
p.no-data { font-style: italic; }
""".strip()


@dataclass(frozen=True)
class RenderedPage:
    markup: str
    page: Optional[PageInfo] = None  # None when the table had no rows

    @property
    def has_data(self) -> bool:
        return self.page is not None


def escape_html(text: str) -> str:
    # One pass; substituted text is never rescanned so "&" cannot be escaped twice.
    return text.translate(_ESCAPES)


def theme_css(theme: ThemeConfig) -> str:
    return "\n".join(
        [
            "table.csv-table th, table.csv-table td "
            f"{{ border: 1px solid {theme.grid_color}; }}",
            "table.csv-table th "
            f"{{ background-color: {theme.header_background}; color: {theme.header_foreground}; }}",
            f"table.csv-table td {{ color: {theme.value_color}; }}",
        ]
    )


def _pager_control(
    label: str,
    *,
    rel: str,
    target: int,
    enabled: bool,
    page_href: Optional[Callable[[int], str]],
) -> str:
    if page_href is not None:
        if not enabled:
            return f'<span class="{rel} disabled">{label}</span>'
        return f'<a class="{rel}" rel="{rel}" href="{escape_html(page_href(target))}">{label}</a>'
    if not enabled:
        return f'<button type="button" class="{rel}" disabled>{label}</button>'
    return f'<button type="button" class="{rel}" data-page="{target}">{label}</button>'


def render_pager(info: PageInfo, *, page_href: Optional[Callable[[int], str]] = None) -> str:
    prev_ctl = _pager_control(
        "Previous", rel="prev", target=info.page_index - 1, enabled=info.can_go_prev, page_href=page_href
    )
    next_ctl = _pager_control(
        "Next", rel="next", target=info.page_index + 1, enabled=info.can_go_next, page_href=page_href
    )
    summary = f'<span class="summary">{escape_html(info.summary)}</span>'
    return f'<nav class="pager">{prev_ctl}{summary}{next_ctl}</nav>'


def render(
    table: Table,
    theme: ThemeConfig,
    page: Page,
    *,
    page_href: Optional[Callable[[int], str]] = None,
) -> RenderedPage:
    """Render one page of `table`.

    `page_href` turns the previous/next controls into links (static export);
    without it they are buttons carrying the target page index in `data-page`.
    """
    if not table:
        return RenderedPage(markup=NO_DATA_MARKUP)

    header = table[0]
    width = len(header)
    info = page_info(table, page)

    parts: list[str] = [f"<style>\n{theme_css(theme)}\n</style>", '<table class="csv-table">']
    parts.append("<thead><tr>")
    parts.extend(f"<th>{escape_html(cell)}</th>" for cell in header)
    parts.append("</tr></thead>")
    parts.append("<tbody>")
    for row in table[info.start : info.stop]:
        cells = "".join(f"<td>{escape_html(cell)}</td>" for cell in fit_row(row, width))
        parts.append(f"<tr>{cells}</tr>")
    parts.append("</tbody></table>")
    parts.append(render_pager(info, page_href=page_href))
    return RenderedPage(markup="\n".join(parts), page=info)


def render_document(rendered: RenderedPage, *, title: str = "CSV preview") -> str:
    return "\n".join(
        [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="UTF-8">',
            f"<title>{escape_html(title)}</title>",
            f"<style>\n{_BASE_CSS}\n</style>",
            "</head>",
            "<body>",
            rendered.markup,
            "</body>",
            "</html>",
            "",
        ]
    )
