from __future__ import annotations

from .csv_parser import Row, Table, parse, serialize
from .pagination import PAGE_SIZE, Page, PageInfo, page_info
from .renderer import RenderedPage, escape_html, render, render_document
from .theme import THEME_KEYS, ThemeConfig

__all__ = [
    "PAGE_SIZE",
    "Page",
    "PageInfo",
    "RenderedPage",
    "Row",
    "THEME_KEYS",
    "Table",
    "ThemeConfig",
    "escape_html",
    "page_info",
    "parse",
    "render",
    "render_document",
    "serialize",
]
