from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, Static

from .errors import ConfigError
from .theme import THEME_KEYS, THEME_LABELS, ThemeConfig

_ID_PREFIX = "theme-"


class ThemeScreen(ModalScreen[ThemeConfig]):
    CSS = """
    ThemeScreen { layout: vertical; }
    #intro { height: auto; color: $text-muted; }
    #fields { height: auto; border: round $accent; background: $panel; padding: 1 2; }
    .field { height: auto; }
    .field Static { width: 20; padding: 1 0 0 0; }
    .field Input { width: 1fr; }
    #errors { height: auto; color: $error; }
    """

    BINDINGS = [
        ("escape", "close", "Close"),
        ("ctrl+r", "reset", "Reset defaults"),
    ]

    def __init__(
        self,
        *,
        theme: ThemeConfig,
        on_theme_change: Callable[[str, str], ThemeConfig],
        on_reset: Callable[[], ThemeConfig],
    ) -> None:
        super().__init__()
        self._theme = theme
        self._on_theme_change = on_theme_change
        self._on_reset = on_reset
        self.error_text = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield Static(
            "Theme: type a CSS color • Enter apply • Tab next field • Ctrl+R reset • Esc close",
            id="intro",
        )
        with Container(id="fields"):
            for key in THEME_KEYS:
                with Horizontal(classes="field"):
                    yield Static(THEME_LABELS[key])
                    yield Input(value=self._theme.get(key), placeholder=key, id=_ID_PREFIX + key)
        yield Static("", id="errors")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(f"#{_ID_PREFIX}{THEME_KEYS[0]}", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        input_id = event.input.id or ""
        if not input_id.startswith(_ID_PREFIX):
            return
        key = input_id[len(_ID_PREFIX) :]
        try:
            self._theme = self._on_theme_change(key, event.value)
        except ConfigError as e:
            self._set_error(str(e))
            return
        event.input.value = self._theme.get(key)
        self._set_error("")
        self.focus_next()

    def action_reset(self) -> None:
        try:
            self._theme = self._on_reset()
        except ConfigError as e:
            self._set_error(str(e))
            return
        for key in THEME_KEYS:
            self.query_one(f"#{_ID_PREFIX}{key}", Input).value = self._theme.get(key)
        self._set_error("")

    def _set_error(self, text: str) -> None:
        self.error_text = text
        self.query_one("#errors", Static).update(Text(text))

    def action_close(self) -> None:
        self.dismiss(self._theme)
