from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import ThemeStore
from .document import ParseCache
from .errors import ConfigError, CsvFormatterError, OutputError
from .pagination import PAGE_SIZE
from .preview import PreviewSession
from .renderer import render_document
from .theme import THEME_KEYS

_SUBCOMMANDS = {"view", "render", "export", "theme"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="csv-formatter")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity on stderr (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    view = sub.add_parser("view", help="Browse a CSV file in the terminal (default)")
    view.add_argument(
        "file",
        type=Path,
        nargs="?",
        default=None,
        help="CSV file to open (default: the file opened last time)",
    )

    render = sub.add_parser("render", help="Print one page of a CSV file as HTML")
    render.add_argument("file", type=Path, help="CSV file to render")
    render.add_argument("--page", type=int, default=1, help="1-based page number (default: 1)")
    render.add_argument("--page-size", type=int, default=PAGE_SIZE, help=f"Data rows per page (default: {PAGE_SIZE})")
    render.add_argument("--output", "-o", type=Path, default=None, help="Write to this file instead of stdout")
    render.add_argument("--fragment", action="store_true", help="Emit only the table markup, not a full document")

    export = sub.add_parser("export", help="Write every page as linked HTML files")
    export.add_argument("file", type=Path, help="CSV file to export")
    export.add_argument("directory", type=Path, help="Destination folder for page-N.html files")
    export.add_argument("--page-size", type=int, default=PAGE_SIZE, help=f"Data rows per page (default: {PAGE_SIZE})")

    theme = sub.add_parser("theme", help="Show or change the saved colors")
    theme.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help=f"Set a color; KEY is one of {', '.join(THEME_KEYS)}",
    )
    theme.add_argument("--reset", action="store_true", help="Restore the default colors")

    return parser


def _normalize_argv(argv: Sequence[str]) -> list[str]:
    # `csv-formatter data.csv` means `csv-formatter view data.csv`.
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--log-level":
            i += 2
            continue
        if arg.startswith("-"):
            i += 1
            continue
        if arg not in _SUBCOMMANDS:
            args.insert(i, "view")
        break
    return args


def _cmd_view(args: argparse.Namespace, store: ThemeStore) -> int:
    from .app import CsvViewerApp

    path = args.file
    if path is None:
        if not store.config.last_file:
            raise CsvFormatterError("No FILE given and no previously opened file to reopen")
        path = Path(store.config.last_file)
    session = PreviewSession(path, store.get_theme, cache=ParseCache())
    CsvViewerApp(session, store).run()
    return 0


def _cmd_render(args: argparse.Namespace, store: ThemeStore) -> int:
    if args.page < 1:
        raise CsvFormatterError(f"--page must be >= 1, got {args.page}")
    session = PreviewSession(args.file, store.get_theme, page_size=args.page_size)
    session.reload()
    if args.page > session.total_pages:
        raise CsvFormatterError(f"{args.file} has {session.total_pages} page(s), cannot show page {args.page}")
    rendered = session.go_to(args.page - 1)
    out = rendered.markup + "\n" if args.fragment else render_document(rendered, title=args.file.name)
    if args.output is None:
        sys.stdout.write(out)
    else:
        try:
            args.output.write_text(out, encoding="utf-8")
        except OSError as e:
            raise OutputError(args.output, e.strerror or str(e)) from e
    return 0


def _cmd_export(args: argparse.Namespace, store: ThemeStore) -> int:
    session = PreviewSession(args.file, store.get_theme, page_size=args.page_size)
    session.reload()
    for path in session.export_all(args.directory):
        print(path)
    return 0


def _cmd_theme(args: argparse.Namespace, store: ThemeStore) -> int:
    if args.reset:
        store.reset()
    for assignment in args.assignments:
        key, sep, value = assignment.partition("=")
        if not sep:
            raise ConfigError(f"Expected KEY=VALUE, got {assignment!r}")
        store.on_theme_change(key.strip(), value)
    for key, value in store.get_theme().to_mapping().items():
        print(f"{key}={value}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(_normalize_argv(sys.argv[1:] if argv is None else argv))
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    store = ThemeStore()
    if args.command is None:
        if not store.config.last_file:
            parser.print_help()
            return 2
        args.command = "view"
        args.file = None

    handlers = {
        "view": _cmd_view,
        "render": _cmd_render,
        "export": _cmd_export,
        "theme": _cmd_theme,
    }
    try:
        return handlers[args.command](args, store)
    except CsvFormatterError as e:
        print(f"csv-formatter: {e}", file=sys.stderr)
        return 1
    except ValueError as e:  # bad --page-size
        print(f"csv-formatter: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
