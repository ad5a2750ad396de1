# =============================================================================
# openshelf/cli/browse.py -- Browse books or authors from the terminal
# =============================================================================
#
#   python -m openshelf.cli.browse books fiction              # first page
#   python -m openshelf.cli.browse books fiction --pages 3    # load more twice
#   python -m openshelf.cli.browse authors poetry --json      # JSON to stdout
#   python -m openshelf.cli.browse book OL45804W              # one work
#
# --json implies --quiet: structlog output goes to stderr at WARNING+ so
# stdout carries only the result.
# =============================================================================

"""Standalone CLI that drives the catalog store through the browse service."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from openshelf.config.settings import Settings
from openshelf.main import build_catalog, load_settings
from openshelf.models.catalog import AuthorSummary, BookDetails, BookSummary, describe
from openshelf.models.state import PartitionState
from openshelf.services.browse_service import CatalogBrowser
from openshelf.utils.errors import OpenShelfError
from openshelf.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_partition_text(kind: str, partition: PartitionState) -> str:
    lines: list[str] = []
    sep = "=" * 60
    lines.append(sep)
    lines.append(f"  {kind.capitalize()} for '{partition.key}'")
    lines.append(sep)
    for idx, item in enumerate(partition.items, start=1):
        if isinstance(item, BookSummary):
            byline = f" -- {item.author}" if item.author else ""
            lines.append(f"{idx:>4}. {item.title}{byline}  [{item.id}]")
        elif isinstance(item, AuthorSummary):
            top = f" (top work: {item.top_work})" if item.top_work else ""
            lines.append(f"{idx:>4}. {item.name}{top}  [{item.key}]")
    lines.append("")
    lines.append(f"Showing {len(partition.items)} of {partition.total}")
    if partition.has_more:
        lines.append("More available (use --pages to load further pages)")
    if partition.error:
        lines.append(f"Error: {partition.error}")
    return "\n".join(lines)


def _partition_to_dict(partition: PartitionState) -> dict[str, Any]:
    return {
        "key": partition.key,
        "total": partition.total,
        "page": partition.page,
        "has_more": partition.has_more,
        "error": partition.error,
        "items": [item.model_dump() for item in partition.items],
    }


def _format_book_text(details: BookDetails, cover_url: str | None) -> str:
    authors = ", ".join(a.name for a in details.authors) or "Unknown author"
    lines = [details.title or details.id, f"by {authors}"]
    if cover_url:
        lines.append(f"Cover: {cover_url}")
    text = describe(details.description)
    if text:
        lines.append("")
        lines.append(text)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def _browse(browser: CatalogBrowser, kind: str, key: str, pages: int) -> PartitionState:
    if kind == "books":
        partition = await browser.open_genre(key)
        for _ in range(pages - 1):
            if not partition.has_more or partition.error:
                break
            partition = await browser.load_more_books(key)
    else:
        partition = await browser.open_subject(key)
        for _ in range(pages - 1):
            if not partition.has_more or partition.error:
                break
            partition = await browser.load_more_authors(key)
    return partition


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    components = build_catalog(settings)
    browser: CatalogBrowser = components["browser"]
    try:
        if args.command == "book":
            try:
                details = await browser.get_book(args.key)
            except OpenShelfError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 1
            cover = browser.cover_url(details)
            if args.json_output:
                payload = details.model_dump()
                payload["cover_url"] = cover
                print(json.dumps(payload, indent=2, ensure_ascii=False))
            else:
                print(_format_book_text(details, cover))
            return 0

        partition = await _browse(browser, args.command, args.key, args.pages)
        if args.json_output:
            print(json.dumps(_partition_to_dict(partition), indent=2, ensure_ascii=False))
        else:
            print(_format_partition_text(args.command, partition))
        return 1 if partition.error and partition.is_empty else 0
    finally:
        await components["http_client"].aclose()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m openshelf.cli.browse",
        description="Browse Open Library books by genre or authors by subject.",
    )
    parser.add_argument(
        "command",
        choices=["books", "authors", "book"],
        help="'books' lists a genre, 'authors' lists a subject, 'book' shows one work",
    )
    parser.add_argument("key", help="Genre, subject or work id (e.g. fiction, OL45804W)")
    parser.add_argument(
        "--pages",
        type=int,
        default=1,
        help="Number of pages to load (default: 1)",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print JSON instead of text",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors (auto-enabled with --json)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.pages < 1:
        parser.error("--pages must be at least 1")

    try:
        settings = load_settings()
    except OpenShelfError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    quiet = args.quiet or args.json_output
    configure_logging(
        log_level="WARNING" if quiet else settings.log_level,
        json_output=settings.app_env == "production",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(_run(args, settings))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
