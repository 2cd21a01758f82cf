"""CLI entry point: python -m pagelens (--url URL | --file PATH) [options]"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pagelens import settings
from pagelens.extractors.markdown import markdown_filename, render_page_markdown
from pagelens.items import PageRecord
from pagelens.query import FetchError, extract, fetch
from pagelens.session import Session

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagelens",
        description=(
            "Extract the readable article and page structure from a web page.\n"
            "Outputs a JSON page record or a Markdown export."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", metavar="URL",
                        help="Page URL to fetch and extract")
    source.add_argument("--file", metavar="PATH",
                        help="Local HTML file to extract (no network)")
    parser.add_argument("--base-url", default="", metavar="URL",
                        help="URL used to resolve relative links when reading --file")
    parser.add_argument("--format", choices=["json", "markdown"], default="json",
                        help="Output format (default: json)")
    parser.add_argument("--out", default=None, metavar="PATH",
                        help="Write output to PATH instead of stdout "
                             "(a directory gets a name from the title)")
    parser.add_argument("--prompt", default=None, metavar="QUESTION",
                        help="Print the question-answering prompt for QUESTION instead")
    parser.add_argument("--render-js", action="store_true", default=False,
                        help="Render the page in headless Chromium before extraction")
    parser.add_argument("--timeout", type=int, default=settings.DOWNLOAD_TIMEOUT, metavar="SECS",
                        help=f"Network timeout in seconds (default: {settings.DOWNLOAD_TIMEOUT})")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    parser.add_argument("--quiet", action="store_true", default=False,
                        help="Do not print the summary panel")
    return parser


def _load_record(args: argparse.Namespace) -> PageRecord:
    if args.file:
        html = Path(args.file).read_text(encoding="utf-8", errors="replace")
        return extract(html, url=args.base_url)
    return fetch(args.url, render_js=args.render_js, timeout=args.timeout)


def _render(record: PageRecord, args: argparse.Namespace) -> str:
    if args.prompt:
        return Session(record).build_prompt(args.prompt)
    if args.format == "markdown":
        return render_page_markdown(record)
    return record.model_dump_json(indent=2)


def _output_path(out: str, record: PageRecord, args: argparse.Namespace) -> Path:
    out_path = Path(out)
    if not out_path.is_dir():
        return out_path
    name = markdown_filename(record.title, "prompt" if args.prompt else "content")
    if args.format == "json" and not args.prompt:
        name = name[: -len(".md")] + ".json"
    return out_path / name


def _print_summary(record: PageRecord) -> None:
    try:
        from rich.console import Console
        from rich.markup import escape
        from rich.panel import Panel

        console = Console(stderr=True)
        stats = record.stats
        console.print(
            Panel.fit(
                f"[bold cyan]{escape(record.title)}[/bold cyan]\n"
                f"URL:         [green]{escape(record.url or '-')}[/green]\n"
                f"Method:      {record.extraction_method}"
                f"{' [red](degraded)[/red]' if record.degraded else ''}\n"
                f"Content:     {record.text_length:,} chars\n"
                f"Site:        {escape(record.site_name or '-')}\n"
                f"By:          {escape(record.byline or '-')}\n"
                f"Links:       {stats['links']}\n"
                f"Headings:    {stats['headings']}\n"
                f"Images:      {stats['images']}\n"
                f"Paragraphs:  {stats['paragraphs']}\n"
                f"Meta tags:   {len(record.meta_tags)}",
                border_style="cyan",
                title="[bold]pagelens[/bold]",
            ),
        )
    except Exception as exc:
        logger.debug("Rich summary display failed: %s", exc)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format=settings.LOG_FORMAT, stream=sys.stderr)

    try:
        record = _load_record(args)
    except FetchError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: Could not read {args.file}: {exc}", file=sys.stderr)
        return 1

    output = _render(record, args)
    if args.out:
        out_path = _output_path(args.out, record, args)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(output, encoding="utf-8")
        except OSError as exc:
            print(f"ERROR: Could not write {out_path}: {exc}", file=sys.stderr)
            return 1
        logger.info("Wrote %s", out_path)
    else:
        sys.stdout.write(output + "\n")

    if not args.quiet:
        _print_summary(record)
    return 0


if __name__ == "__main__":
    sys.exit(main())
