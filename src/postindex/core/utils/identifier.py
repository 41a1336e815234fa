"""Document identifiers, embedded dates, and kind detection from source paths"""

import re
from datetime import date
from pathlib import Path
from typing import Optional

from postindex.core.models import DocumentKind


DATED_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})-(.+)$')
POST_DIRS = {'_posts', '_drafts'}


def identifier_for(path: Path, kind: DocumentKind, root: Optional[Path] = None) -> str:
    """Return the identifier of a source file.

    Posts are named by file stem ('2016-05-12-closures'). Pages are named by
    their path relative to root without the extension ('blog/index'), so
    same-named pages in different directories stay distinct. Without a root,
    or for a path outside it, a page falls back to its stem.
    """
    path = Path(path)
    if kind is DocumentKind.post or root is None:
        return path.stem
    try:
        rel = path.relative_to(root)
    except ValueError:
        return path.stem
    return rel.with_suffix('').as_posix()


def date_from_identifier(identifier: str) -> date | None:
    """Return the date from a 'YYYY-MM-DD-title' identifier, else None."""
    m = DATED_RE.match(identifier)
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def kind_for(path: Path) -> DocumentKind:
    """Posts live under _posts/_drafts or carry a dated file name; everything else is a page."""
    path = Path(path)
    if POST_DIRS.intersection(path.parts[:-1]):
        return DocumentKind.post
    if date_from_identifier(path.stem) is not None:
        return DocumentKind.post
    return DocumentKind.page
