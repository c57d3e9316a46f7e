#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2inline/cli.py
"""Command-line interface for md2inline.

Converts a Markdown file to HTML in which every style is inlined, ready to
paste into environments that drop stylesheets.

Examples
--------
Print a fragment to stdout:
    $ md2inline notes.md

Write ``notes.html`` next to the input as a full document:
    $ md2inline notes.md --out

Pick a theme and an explicit output path:
    $ md2inline notes.md --theme sepia -o build/notes.html

Fetch link previews for standalone links:
    $ md2inline notes.md --link-preview --preview-timeout 3

Read from stdin:
    $ cat notes.md | md2inline - --theme light
"""

from __future__ import annotations

import argparse
import difflib
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from md2inline import __version__
from md2inline.api import parse_markdown, render_document
from md2inline.constants import DEFAULT_PREVIEW_TIMEOUT, DEFAULT_THEME_NAME
from md2inline.exceptions import Md2InlineError, ParsingError, RenderingError, SecurityError, ValidationError
from md2inline.logging_utils import configure_logging
from md2inline.options.preview import PreviewFetchOptions
from md2inline.options.render import StyledRendererOptions
from md2inline.preview import prepare_preview_data
from md2inline.renderers.html import wrap_document
from md2inline.themes import get_theme, list_themes

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
EXIT_SECURITY_ERROR = 8


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, SecurityError):
        return EXIT_SECURITY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="md2inline",
        description="Convert Markdown to HTML with every style inlined.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Themes: " + ", ".join(list_themes()),
    )
    parser.add_argument("input", nargs="?", help="Markdown file to convert, or '-' for stdin")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    theme_group = parser.add_argument_group("theme")
    theme_group.add_argument(
        "--theme", default=DEFAULT_THEME_NAME, help=f"Color theme (default: {DEFAULT_THEME_NAME})"
    )
    theme_group.add_argument("--list-themes", action="store_true", help="List available themes and exit")

    output_group = parser.add_argument_group("output")
    destination = output_group.add_mutually_exclusive_group()
    destination.add_argument("-o", "--output", metavar="PATH", help="Write HTML to PATH")
    destination.add_argument(
        "--out", action="store_true", help="Write <name>.html next to the input file instead of stdout"
    )
    page = output_group.add_mutually_exclusive_group()
    page.add_argument(
        "--standalone",
        dest="standalone",
        action="store_true",
        default=None,
        help="Emit a complete HTML document (default when writing a file)",
    )
    page.add_argument(
        "--fragment",
        dest="standalone",
        action="store_false",
        help="Emit only the styled fragment (default on stdout)",
    )
    output_group.add_argument("--title", help="Document title for standalone output (default: first heading)")
    output_group.add_argument("--pretty", action="store_true", help="Indent block elements")

    render_group = parser.add_argument_group("rendering")
    render_group.add_argument(
        "--link-preview", action="store_true", help="Fetch preview cards for standalone links before rendering"
    )
    render_group.add_argument(
        "--preview-timeout",
        type=float,
        default=DEFAULT_PREVIEW_TIMEOUT,
        metavar="SECONDS",
        help=f"Per-link preview timeout (default: {DEFAULT_PREVIEW_TIMEOUT})",
    )
    render_group.add_argument("--no-highlight", action="store_true", help="Disable syntax highlighting")
    render_group.add_argument("--pygments-style", help="Pygments style for code blocks (default: from theme)")

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    log_group.add_argument("--log-file", help="Also write log output to this file")
    log_group.add_argument("--trace", action="store_true", help="Verbose, timestamped logging")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _output_path(parsed_args: argparse.Namespace) -> Optional[Path]:
    if parsed_args.output:
        return Path(parsed_args.output)
    if parsed_args.out:
        return Path(parsed_args.input).with_suffix(".html")
    return None


def _validate_arguments(parsed_args: argparse.Namespace, console: Console) -> bool:
    if not parsed_args.input:
        console.print("[red]Error:[/red] an input file (or '-') is required")
        return False
    if parsed_args.out and parsed_args.input == "-":
        console.print("[red]Error:[/red] --out needs an input file; use -o/--output with stdin")
        return False
    if get_theme(parsed_args.theme) is None:
        suggestions = difflib.get_close_matches(parsed_args.theme.lower(), list_themes())
        hint = f" Did you mean: {', '.join(suggestions)}?" if suggestions else ""
        console.print(f"[red]Error:[/red] unknown theme '{parsed_args.theme}'.{hint}")
        return False
    if parsed_args.preview_timeout <= 0:
        console.print("[red]Error:[/red] --preview-timeout must be positive")
        return False
    return True


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return an exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    console = Console(stderr=True)

    if parsed_args.list_themes:
        for name in list_themes():
            print(name)
        return EXIT_SUCCESS

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    if not _validate_arguments(parsed_args, console):
        return EXIT_VALIDATION_ERROR

    try:
        text = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] cannot read {parsed_args.input}: {e}")
        return EXIT_FILE_ERROR

    output_path = _output_path(parsed_args)
    standalone = parsed_args.standalone if parsed_args.standalone is not None else output_path is not None

    try:
        document = parse_markdown(text)

        preview_data = None
        if parsed_args.link_preview:
            with console.status("Fetching link previews..."):
                preview_data = prepare_preview_data(
                    document, options=PreviewFetchOptions(timeout=parsed_args.preview_timeout)
                )
            console.print(f"Link previews: {len(preview_data)} found")

        options = StyledRendererOptions(
            enable_link_preview=parsed_args.link_preview,
            highlight_code=not parsed_args.no_highlight,
            pygments_style=parsed_args.pygments_style,
        )
        root = render_document(document, theme=parsed_args.theme, options=options, preview_data=preview_data)
        html = root.to_html(pretty=parsed_args.pretty)
        if standalone:
            title = parsed_args.title
            if title is None and output_path is not None:
                title = output_path.stem
            html = wrap_document(html, title=title, background=root.style.get("background"))
    except Md2InlineError as e:
        logger.debug("Conversion failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected conversion failure", exc_info=True)
        console.print(f"[red]Unexpected error:[/red] {e}")
        return EXIT_ERROR

    if output_path is None:
        sys.stdout.write(html if html.endswith("\n") else html + "\n")
        return EXIT_SUCCESS

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] cannot write {output_path}: {e}")
        return EXIT_FILE_ERROR

    console.print(f"[green]Wrote[/green] {output_path}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
