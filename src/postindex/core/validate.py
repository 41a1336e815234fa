"""Schema validation: raw front matter mapping -> typed PostMetadata"""

import logging
from typing import Mapping

from postindex.core.errors import InvalidFieldType, MissingField
from postindex.core.models import DocumentKind, PostMetadata, RawValue


logger = logging.getLogger(__name__)

REQUIRED_FIELDS: dict[DocumentKind, tuple[str, ...]] = {
    DocumentKind.post: ('layout', 'title'),
    DocumentKind.page: ('layout', 'title'),
}
STRING_FIELDS = ('layout', 'title', 'author', 'image', 'permalink')
BOOLEAN_FIELDS = ('featured', 'hidden', 'comments')
SEQUENCE_FIELDS = ('categories',)
PAGE_ONLY_FIELDS = ('permalink',)
KNOWN_FIELDS = set(STRING_FIELDS) | set(BOOLEAN_FIELDS) | set(SEQUENCE_FIELDS)


def _is_empty(value: RawValue) -> bool:
    if isinstance(value, list):
        return not value
    return not value.strip()


def _as_string(key: str, value: RawValue) -> str:
    if isinstance(value, list):
        raise InvalidFieldType(key, "string")
    return value


def _as_bool(key: str, value: RawValue) -> bool:
    if value == 'true':
        return True
    if value == 'false':
        return False
    raise InvalidFieldType(key, "boolean")


def _as_sequence(key: str, value: RawValue) -> tuple[str, ...]:
    """'[ ]' or a blank value is an empty sequence; a bare scalar is split on commas like a list."""
    if isinstance(value, list):
        items = value
    else:
        items = value.split(',') if value.strip() else []
    items = [item.strip() for item in items]
    if any(not item for item in items):
        raise InvalidFieldType(key, "sequence of non-empty strings")
    return tuple(items)


def validate_metadata(metadata: Mapping[str, RawValue], kind: DocumentKind) -> PostMetadata:
    """Check required keys and typed fields; return the validated record.

    Raises MissingField for an absent or empty required key and InvalidFieldType
    for a value that cannot be read as its declared type. Required keys are
    checked first, then typed fields in declaration order.
    """
    for key in REQUIRED_FIELDS[kind]:
        if key not in metadata or _is_empty(metadata[key]):
            raise MissingField(key)

    fields: dict = {}
    for key in STRING_FIELDS:
        if key in metadata:
            if kind is DocumentKind.post and key in PAGE_ONLY_FIELDS:
                raise InvalidFieldType(key, "page-only string")
            fields[key] = _as_string(key, metadata[key])
    for key in BOOLEAN_FIELDS:
        if key in metadata:
            fields[key] = _as_bool(key, metadata[key])
    for key in SEQUENCE_FIELDS:
        if key in metadata:
            fields[key] = _as_sequence(key, metadata[key])

    extra = {k: v for k, v in metadata.items() if k not in KNOWN_FIELDS}
    if extra:
        logger.debug("Passing through unrecognised keys: %s", ", ".join(extra))
    return PostMetadata(**fields, extra=extra)
