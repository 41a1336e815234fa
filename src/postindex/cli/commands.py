"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from postindex.config import Settings, load_config
from postindex.core.errors import ContentError
from postindex.core.models import DocumentKind, IndexEntry
from postindex.core.parse import encode_front_matter, parse_file
from postindex.core.pipeline import Report, run_check
from postindex.core.validate import validate_metadata


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling and configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return settings


def _echo_report(report: Report) -> None:
    """Print each failure and warning, then a summary line."""
    for result in report.failed:
        typer.echo(f"  {result.path}: {result.error.kind}: {result.error}")
    for warning in report.warnings:
        typer.echo(f"  warning: {warning.kind}: {warning}")
    summary = ", ".join(f"{n} {kind}" for kind, n in sorted(report.counts.items()))
    status = "passed" if report.ok else "failed"
    typer.echo(f"Check {status} - {len(report.results)} document(s): {summary}")


def _echo_entries(entries: list[IndexEntry]) -> None:
    for e in entries:
        when = e.published.isoformat() if e.published else "----------"
        categories = ", ".join(e.metadata.categories)
        typer.echo(f"  {when}  {e.identifier}  {e.metadata.title}" + (f"  [{categories}]" if categories else ""))


KindOption = Annotated[Optional[DocumentKind], typer.Option("--kind", help="Force the document kind instead of inferring it")]


def check_cmd(
    path: Annotated[Path, typer.Argument(exists=True, readable=True, help="File or site directory to check")],
    kind: KindOption = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Threads used to parse and validate")] = None,
    drafts: Annotated[bool, typer.Option("--include-drafts", help="Also check _drafts/")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Validate every document's front matter and report failures."""
    settings = _settings(overrides={"workers": workers, "include_drafts": drafts or None}, verbose=verbose)
    _, report = run_check(path, settings, kind)
    if not report.results:
        typer.echo("No .md/.markdown files found.")
        raise typer.Exit(0)
    _echo_report(report)
    raise typer.Exit(report.exit_code)


def index_cmd(
    path: Annotated[Path, typer.Argument(exists=True, readable=True, help="File or site directory to index")],
    category: Annotated[Optional[str], typer.Option("--category", help="List documents in this category")] = None,
    author: Annotated[Optional[str], typer.Option("--author", help="List documents by this author")] = None,
    include_hidden: Annotated[bool, typer.Option("--include-hidden/--no-hidden", help="Include hidden: true documents")] = True,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full index as JSON")] = False,
    drafts: Annotated[bool, typer.Option("--include-drafts", help="Also index _drafts/")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Build the index and print the chronological listing or a lookup."""
    settings = _settings(overrides={"include_drafts": drafts or None}, verbose=verbose)
    index, report = run_check(path, settings)
    if not report.ok:
        typer.echo(f"Skipped {len(report.failed)} invalid document(s); run 'postindex check' for details.", err=True)

    if as_json:
        typer.echo(json.dumps(index.to_dict(include_hidden), indent=2, ensure_ascii=False))
        return

    if category is not None:
        entries = index.by_category(category, chronological=True, include_hidden=include_hidden)
        scope = f"category '{category}'"
    elif author is not None:
        entries = index.by_author(author, chronological=True, include_hidden=include_hidden)
        scope = f"author '{author}'"
    else:
        entries = index.chronological(include_hidden)
        scope = "all"

    if not entries:
        typer.echo(f"No documents found for scope: {scope}.")
        raise typer.Exit(1)
    _echo_entries(entries)
    typer.echo(f"{len(entries)} document(s) for scope: {scope}")


def show_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to show")],
    kind: KindOption = None,
    ):
    """Print a document with its validated, normalised front matter to stdout."""
    _settings()
    try:
        doc = parse_file(path, kind)
        metadata = validate_metadata(doc.metadata, doc.kind)
    except ContentError as e:
        _fail(f"{path}: {e.kind}", e)
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"{path}: unreadable", e)
    try:
        header = encode_front_matter(metadata.to_front_matter())
    except ValueError as e:
        _fail(f"{path}: cannot re-encode front matter", e)
    typer.echo(header + doc.body, nl=False)
