"""Per-document error taxonomy for parsing, validation and indexing"""

from pathlib import Path


class ContentError(Exception):
    """Base class for failures local to a single document."""
    kind = "ContentError"


class MalformedFrontMatter(ContentError):
    """The leading metadata block is missing, unterminated, or has a bad line."""
    kind = "MalformedFrontMatter"

    def __init__(self, reason: str, line: int | None = None):
        self.reason = reason
        self.line = line
        super().__init__(f"line {line}: {reason}" if line is not None else reason)


class MissingField(ContentError):
    """A required metadata key is absent or empty."""
    kind = "MissingField"

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"missing required field '{key}'")


class InvalidFieldType(ContentError):
    """A metadata key is present but its value cannot be read as the declared type."""
    kind = "InvalidFieldType"

    def __init__(self, key: str, expected: str):
        self.key = key
        self.expected = expected
        super().__init__(f"field '{key}' must be a {expected}")


class DuplicateIdentifier(ContentError):
    """Two documents resolved to the same identifier; reported as a warning, last seen wins."""
    kind = "DuplicateIdentifier"

    def __init__(self, identifier: str, paths: list[Path]):
        self.identifier = identifier
        self.paths = list(paths)
        super().__init__(
            f"identifier '{identifier}' used by {', '.join(str(p) for p in self.paths)}"
        )
