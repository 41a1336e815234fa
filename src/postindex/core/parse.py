"""File discovery and front-matter splitting, decoding and re-encoding"""

import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Optional

from postindex.core.errors import MalformedFrontMatter
from postindex.core.models import Document, DocumentKind, RawValue
from postindex.core.utils.identifier import identifier_for, kind_for


FRONT_MATTER_MARKER = '---'
KEY_VALUE_RE = re.compile(r'^([A-Za-z_][\w-]*):(?:[ \t]+(.*?))?[ \t]*$')
KEY_RE = re.compile(r'^[A-Za-z_][\w-]*$')
MD_EXTENSIONS = {'.md', '.markdown'}


def _unquote(value: str) -> str:
    """Drop one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
        return value[1:-1]
    return value


def _decode_value(raw: str) -> RawValue:
    """Decode a value: '[ a, b ]' becomes a list, anything else a string."""
    if raw.startswith('[') and raw.endswith(']'):
        inner = raw[1:-1]
        if not inner.strip():
            return []
        # empty items are kept so the validator can reject them
        return [_unquote(item.strip()) for item in inner.split(',')]
    return _unquote(raw)


def split_front_matter(text: str) -> tuple[dict[str, RawValue], str]:
    """Return (metadata, body) for a document that opens with a '---' block.

    The body is everything after the closing marker line, leading blank lines
    included. Raises MalformedFrontMatter when either marker is missing, a
    line is not 'key: value', or a key is repeated.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONT_MATTER_MARKER:
        raise MalformedFrontMatter(f"missing opening '{FRONT_MATTER_MARKER}' marker", line=1)

    metadata: dict[str, RawValue] = {}
    for lineno, line in enumerate(lines[1:], start=2):
        content = line.rstrip()
        if content == FRONT_MATTER_MARKER:
            return metadata, ''.join(lines[lineno:])
        if not content.strip() or content.lstrip().startswith('#'):
            continue
        m = KEY_VALUE_RE.match(content)
        if not m:
            raise MalformedFrontMatter(f"expected 'key: value', got {content!r}", line=lineno)
        key = m.group(1)
        if key in metadata:
            raise MalformedFrontMatter(f"duplicate key '{key}'", line=lineno)
        metadata[key] = _decode_value(m.group(2) or '')

    raise MalformedFrontMatter(f"missing closing '{FRONT_MATTER_MARKER}' marker")


def _encode_scalar(value: str) -> str:
    """Quote a string only when the bare form would not parse back to the same value."""
    if '\n' in value or '\r' in value:
        raise ValueError(f"cannot encode multi-line value {value!r}")
    if not value or value != value.strip() or value[0] in '"\'[':
        return f'"{value}"'
    return value


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        if not value:
            return '[ ]'
        for item in value:
            if ',' in item:
                raise ValueError(f"sequence item {item!r} contains a comma")
        return '[ ' + ', '.join(_encode_scalar(item) for item in value) + ' ]'
    return _encode_scalar(str(value))


def encode_front_matter(metadata: dict[str, Any]) -> str:
    """Render a metadata mapping back into a '---' delimited block."""
    lines = [FRONT_MATTER_MARKER]
    for key, value in metadata.items():
        if not KEY_RE.match(key):
            raise ValueError(f"invalid front matter key {key!r}")
        lines.append(f"{key}: {_encode_value(value)}")
    lines.append(FRONT_MATTER_MARKER)
    return '\n'.join(lines) + '\n'


def parse_text(
    text: str,
    path: Path,
    kind: Optional[DocumentKind] = None,
    root: Optional[Path] = None,
    ) -> Document:
    """Parse raw document text into a Document; kind defaults to the path's kind.

    root is the discovery root that page identifiers are made relative to.
    """
    path = Path(path)
    metadata, body = split_front_matter(text)
    kind = kind or kind_for(path)
    return Document(
        path=path,
        identifier=identifier_for(path, kind, root),
        kind=kind,
        metadata=MappingProxyType(metadata),
        body=body,
    )


def parse_file(
    path: Path,
    kind: Optional[DocumentKind] = None,
    root: Optional[Path] = None,
    ) -> Document:
    """Read and parse a single markdown file."""
    raw = Path(path).read_text(encoding='utf-8-sig')
    return parse_text(raw, path, kind, root)


def discover_files(
    path: Path,
    exclude: Iterable[str] = (),
    include_drafts: bool = False,
    ) -> list[Path]:
    """Return sorted .md/.markdown files under path, or [path] if a single file.

    Any file or directory whose name is in exclude is skipped, as is _drafts
    unless include_drafts is set.
    """
    path = Path(path)
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    skip = set(exclude)
    if not include_drafts:
        skip.add('_drafts')
    return sorted(
        p for p in path.rglob('*')
        if p.suffix in MD_EXTENSIONS and p.is_file()
        and not skip.intersection(p.relative_to(path).parts)
    )
