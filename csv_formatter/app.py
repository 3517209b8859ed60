from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Optional

from rich.color import Color, ColorParseError
from rich.style import Style
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import DataTable, Footer, Header, Static

from .config import ThemeStore
from .errors import CsvFormatterError
from .help_screen import HelpScreen
from .open_file import open_with_default_app
from .preview import PreviewSession
from .theme import ThemeConfig
from .theme_screen import ThemeScreen

POLL_INTERVAL_S = 1.0


def _color_or_none(value: str) -> Optional[Color]:
    # Theme values are free-form CSS colors; only the ones Rich understands are applied here.
    try:
        return Color.parse(value)
    except ColorParseError:
        return None


def header_style(theme: ThemeConfig) -> Style:
    return Style(
        bold=True,
        color=_color_or_none(theme.header_foreground),
        bgcolor=_color_or_none(theme.header_background),
    )


def value_style(theme: ThemeConfig) -> Style:
    return Style(color=_color_or_none(theme.value_color))


class CsvViewerApp(App):
    CSS = """
    Screen { layout: vertical; }
    #top { height: 2; }
    #file { width: 1fr; }
    #summary { width: auto; }
    #notes { height: auto; color: $text-muted; }
    #rows { height: 1fr; }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("n", "next_page", "Next"),
        ("p", "prev_page", "Prev"),
        ("g", "first_page", "First"),
        ("G", "last_page", "Last"),
        ("o", "open_html", "Open HTML"),
        ("ctrl+r", "reload", "Reload"),
        ("f1", "help", "Help"),
        ("f2", "theme", "Theme"),
    ]

    def __init__(self, session: PreviewSession, store: ThemeStore, *, poll_interval: float = POLL_INTERVAL_S) -> None:
        super().__init__()
        self.session = session
        self.store = store
        self._poll_interval = poll_interval
        self._unsubscribe = None
        self.notes_text = ""

    def compose(self) -> ComposeResult:
        self._summary = Static("", id="summary")
        self._notes = Static("Loading…", id="notes")
        self._rows = DataTable(id="rows")
        self._rows.cursor_type = "row"
        self._rows.zebra_stripes = True

        yield Header()
        with Container(id="top"):
            with Horizontal():
                yield Static(f"File: {self.session.path}", id="file", markup=False)
                yield self._summary
            yield self._notes
        yield self._rows
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.session.path.name
        self._unsubscribe = self.store.subscribe(self._on_theme_changed)
        self._load(initial=True)
        if self._poll_interval > 0:
            self.set_interval(self._poll_interval, self._poll_document)
        self._rows.focus()

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def _load(self, *, initial: bool = False) -> None:
        try:
            self.session.reload()
        except CsvFormatterError as e:
            self._set_notes(f"ERROR: {e}")
            return
        if initial:
            try:
                self.store.remember_file(self.session.path.resolve())
            except CsvFormatterError as e:
                self._set_notes(f"ERROR: {e}")
                self._render_rows()
                return
        self._set_notes("Ready.")
        self._render_rows()

    def _poll_document(self) -> None:
        try:
            changed = self.session.refresh_if_changed()
        except CsvFormatterError as e:
            self._set_notes(f"ERROR: {e}")
            return
        if changed:
            self._set_notes("File changed on disk, reloaded.")
            self._render_rows()

    def _on_theme_changed(self, theme: ThemeConfig) -> None:
        self._render_rows()

    def _set_notes(self, text: str) -> None:
        self.notes_text = text
        self._notes.update(Text(text))

    def _render_rows(self) -> None:
        table = self._rows
        table.clear(columns=True)
        rendered = self.session.current()
        if not rendered.has_data:
            self._summary.update("No data")
            return
        theme = self.store.get_theme()
        head = header_style(theme)
        cell = value_style(theme)
        header, rows = self.session.rows_for_display()
        for idx, label in enumerate(header):
            table.add_column(Text(label, style=head), key=f"c{idx}")
        table.add_rows([[Text(v, style=cell) for v in row] for row in rows])
        self._summary.update(rendered.page.summary)

    def action_next_page(self) -> None:
        self.session.next_page()
        self._render_rows()

    def action_prev_page(self) -> None:
        self.session.prev_page()
        self._render_rows()

    def action_first_page(self) -> None:
        self.session.first_page()
        self._render_rows()

    def action_last_page(self) -> None:
        self.session.last_page()
        self._render_rows()

    def action_reload(self) -> None:
        self._load()

    def action_open_html(self) -> None:
        target = Path(tempfile.gettempdir()) / "csv-formatter" / f"{self.session.path.stem}.html"
        try:
            self.session.export_html(target)
        except CsvFormatterError as e:
            self._set_notes(f"ERROR: {e}")
            return
        if open_with_default_app(target):
            self._set_notes(f"Opened {target}")
        else:
            self._set_notes(f"Wrote {target} (no default application found)")

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_theme(self) -> None:
        self.push_screen(
            ThemeScreen(
                theme=self.store.get_theme(),
                on_theme_change=self.store.on_theme_change,
                on_reset=self.store.reset,
            ),
            callback=self._on_theme_screen_closed,
            wait_for_dismiss=False,
        )

    def _on_theme_screen_closed(self, theme: ThemeConfig) -> None:
        self._render_rows()
