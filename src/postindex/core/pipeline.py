"""Pipeline orchestration: parse -> validate per document, collect into the index"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from postindex.config import Settings
from postindex.core.errors import ContentError, DuplicateIdentifier, MalformedFrontMatter
from postindex.core.excerpt import excerpt
from postindex.core.index import CollectionIndex
from postindex.core.models import DocumentKind, IndexEntry
from postindex.core.parse import discover_files, parse_file
from postindex.core.utils.identifier import date_from_identifier
from postindex.core.validate import validate_metadata


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentResult:
    """Outcome for one source file: an index entry on success, else the error."""
    path:  Path
    entry: Optional[IndexEntry] = None
    error: Optional[ContentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Report:
    """Per-document results plus warnings for a whole run."""
    results:  list[DocumentResult] = field(default_factory=list)
    warnings: list[ContentError] = field(default_factory=list)

    @property
    def failed(self) -> list[DocumentResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def counts(self) -> dict[str, int]:
        """Number of failures per error kind, plus warnings and successes."""
        counts = Counter(r.error.kind for r in self.failed)
        counts.update(w.kind for w in self.warnings)
        counts["indexed"] = sum(1 for r in self.results if r.ok)
        return dict(counts)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def check_document(
    path: Path,
    kind: Optional[DocumentKind] = None,
    parser_config: str = 'gfm-like',
    root: Optional[Path] = None,
    ) -> DocumentResult:
    """Parse and validate one file; content errors become a failed result."""
    try:
        doc = parse_file(path, kind, root)
        metadata = validate_metadata(doc.metadata, doc.kind)
    except ContentError as e:
        return DocumentResult(path=path, error=e)
    except (OSError, UnicodeDecodeError) as e:
        return DocumentResult(path=path, error=MalformedFrontMatter(f"unreadable: {e}"))

    entry = IndexEntry(
        identifier=doc.identifier,
        path=str(doc.path),
        kind=doc.kind,
        published=date_from_identifier(doc.identifier),
        metadata=metadata,
        excerpt=excerpt(doc.body, parser_config),
    )
    return DocumentResult(path=path, entry=entry)


def collect(results: list[DocumentResult], index: CollectionIndex) -> Report:
    """Apply results to index in order from a single writer and build the report."""
    report = Report()
    for result in results:
        report.results.append(result)
        if not result.ok:
            logger.info("Skipping %s: %s: %s", result.path, result.error.kind, result.error)
            continue
        previous = index.get(result.entry.identifier)
        index.accept(result.entry)
        # re-indexing the same file is an update, not a clash
        if previous is not None and previous.path != result.entry.path:
            identifier = result.entry.identifier
            logger.warning("Duplicate identifier %s; keeping %s over %s", identifier, result.path, previous.path)
            report.warnings.append(DuplicateIdentifier(identifier, [Path(previous.path), result.path]))
    return report


def run_check(
    path: Path,
    settings: Settings,
    kind: Optional[DocumentKind] = None,
    index: Optional[CollectionIndex] = None,
    ) -> tuple[CollectionIndex, Report]:
    """Discover, parse and validate every document under path and index the valid ones.

    Documents are checked on settings.workers threads with no coordination;
    results are applied to the index from this thread in discovery order.
    """
    index = index if index is not None else CollectionIndex()
    path = Path(path)
    root = path if path.is_dir() else path.parent
    files = discover_files(path, settings.exclude, settings.include_drafts)
    logger.info("Checking %d document(s) under %s", len(files), path)

    if settings.workers > 1:
        with ThreadPoolExecutor(max_workers=settings.workers) as executor:
            results = list(executor.map(
                lambda p: check_document(p, kind, settings.parser_config, root), files
            ))
    else:
        results = [check_document(p, kind, settings.parser_config, root) for p in files]

    return index, collect(results, index)
