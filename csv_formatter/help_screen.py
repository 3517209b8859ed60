from __future__ import annotations

from importlib import metadata

from textual.app import ComposeResult
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Static


def _version() -> str:
    try:
        return metadata.version("csv-formatter")
    except metadata.PackageNotFoundError:
        return "dev"


class HelpScreen(ModalScreen[None]):
    CSS = """
    HelpScreen { layout: vertical; }
    #dialog { height: 1fr; border: round $accent; background: $panel; padding: 1 2; margin: 1 2; }
    #body { height: 1fr; }
    #hint { height: auto; color: $text-muted; }
    """

    BINDINGS = [
        ("escape", "close", "Close"),
        ("enter", "close", "Close"),
        ("q", "close", "Close"),
    ]

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Container(id="dialog"):
            with VerticalScroll(id="body"):
                yield Static(
                    "\n".join(
                        [
                            f"csv-formatter v{_version()}",
                            "",
                            "Read-only viewer for CSV files, 100 data rows per page.",
                            "The first row is always shown as the column header.",
                            "The file is re-read whenever it changes on disk.",
                            "",
                            "Shortcuts:",
                            "F1      Show this help screen",
                            "F2      Theme colors (header, grid, cell text)",
                            "n       Next page",
                            "p       Previous page",
                            "g       First page",
                            "G       Last page",
                            "o       Open the current page as HTML in the default browser",
                            "Ctrl+R  Reload the file",
                            "q       Quit",
                        ]
                    ),
                    markup=False,
                )
            yield Static("Enter / Esc / q to close", id="hint")
        yield Footer()

    def action_close(self) -> None:
        self.dismiss(None)
