"""CLI entry point: python -m seoparser URL [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from seoparser.config import DEFAULT_CONFIG, load_config
from seoparser.export import to_markdown, write_docx
from seoparser.items import ExtractedContent
from seoparser.query import FetchError, extract, fetch

logger = logging.getLogger(__name__)

_LEVEL_STYLES: dict[int, str] = {
    1: "bold blue",
    2: "bold magenta",
    3: "bold green",
    4: "bold yellow",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seoparser",
        description=(
            "Extract page metadata and the H1-H4 heading hierarchy, with the\n"
            "content under each heading, from any web page."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("url", metavar="URL",
                        help="Page URL (fetched unless --html-file is given)")
    parser.add_argument("--html-file", default=None, metavar="PATH",
                        help="Read HTML from PATH instead of fetching URL")
    parser.add_argument("--format", default="pretty", dest="output_format",
                        choices=["pretty", "json", "markdown"],
                        help="Output format (default: pretty)")
    parser.add_argument("--docx", default=None, metavar="PATH",
                        help="Also export a Word document to PATH (file or directory)")
    parser.add_argument("--config", default=None, metavar="YAML",
                        help="YAML file overriding the built-in noise/selector lists")
    parser.add_argument("--timeout", type=int, default=30, metavar="SECONDS",
                        help="Network timeout in seconds (default: 30)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    return parser


def _validate_url(url: str) -> str | None:
    """Return an error message if *url* is not an absolute http(s) URL, else None."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return f"Invalid URL format: {url!r}"
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return f"Invalid URL format: {url!r}"
    return None


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _or_missing(value: str | None) -> str:
    return escape(value) if value else "[dim italic]Not found[/dim italic]"


def print_result(content: ExtractedContent, console: Console | None = None) -> None:
    """Render *content* on the terminal: meta panel, heading tree or fallback text."""
    console = console or Console()

    meta = Table.grid(padding=(0, 2))
    meta.add_column(style="bold")
    meta.add_column()
    meta.add_row("URL", _or_missing(content.url))
    meta.add_row("Meta Title", _or_missing(content.meta_title))
    meta.add_row("Meta Description", _or_missing(content.meta_description))
    console.print(Panel(meta, title="[bold]Meta Information[/bold]", box=box.ROUNDED))

    if content.headings:
        tree = Tree(f"[bold]Headings & Content ({len(content.headings)} found)[/bold]")
        # Stack of (level, node) so each heading hangs under its nearest higher level
        stack: list[tuple[int, Tree]] = [(0, tree)]
        for heading in content.headings:
            while stack[-1][0] >= heading.level:
                stack.pop()
            style = _LEVEL_STYLES.get(heading.level, "bold")
            node = stack[-1][1].add(f"[{style}]H{heading.level}[/{style}] {escape(heading.text)}")
            for fragment in heading.content:
                node.add(Text(fragment, style="dim" if "\n" in fragment else ""))
            stack.append((heading.level, node))
        console.print(tree)
    elif content.fallback_content is not None:
        source = content.fallback_content.source.value
        console.print(Panel(
            Text(content.fallback_content.text),
            title=f"[bold]Fallback content[/bold] ([yellow]{source}[/yellow])",
            subtitle="No semantic headings (H1-H4) found",
            border_style="yellow",
        ))
    else:
        console.print("[italic]No headings or content found.[/italic]")

    console.print(f"[dim]Extracted at: {content.extracted_at}[/dim]")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    url_err = _validate_url(args.url)
    if url_err and not args.html_file:
        print(f"ERROR: {url_err}", file=sys.stderr)
        return 2

    config = DEFAULT_CONFIG
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as exc:
            print(f"ERROR: Could not load config {args.config}: {exc}", file=sys.stderr)
            return 2

    if args.html_file:
        try:
            html = Path(args.html_file).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            print(f"ERROR: Could not read {args.html_file}: {exc}", file=sys.stderr)
            return 2
        content = extract(html, url=args.url, config=config)
    else:
        try:
            content = fetch(args.url, timeout=args.timeout, config=config)
        except FetchError as exc:
            logger.debug("fetch failed", exc_info=True)
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    if args.output_format == "json":
        print(json.dumps(content.to_dict(), indent=2, ensure_ascii=False))
    elif args.output_format == "markdown":
        print(to_markdown(content), end="")
    else:
        print_result(content)

    if args.docx:
        target = write_docx(content, args.docx)
        if args.output_format == "pretty":
            Console().print(f"[green]Word document written to {target}[/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
