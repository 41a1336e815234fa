"""In-memory collection index: documents grouped by category, by author, and by date"""

import logging
from datetime import date
from enum import Enum

from postindex.core.models import IndexEntry


logger = logging.getLogger(__name__)


class IndexState(str, Enum):
    """The index leaves EMPTY on its first accepted entry and never returns"""
    EMPTY = "empty"
    POPULATED = "populated"


def _chrono_key(entry: IndexEntry) -> tuple[bool, date, str]:
    """Dated entries first, oldest to newest; identifier breaks ties and orders undated ones."""
    return (entry.published is None, entry.published or date.min, entry.identifier)


def _regroup(groups: dict[str, list[str]], identifier: str, old: list[str], new: list[str]) -> None:
    """Move identifier from the old keys to the new ones; keys in both keep their position."""
    for key in old:
        if key not in new:
            groups[key].remove(identifier)
            if not groups[key]:
                del groups[key]
    for key in new:
        if key not in old:
            groups.setdefault(key, []).append(identifier)


class CollectionIndex:
    """Aggregate of validated documents, keyed by identifier.

    accept() is the only mutation path and must be called from a single writer.
    Re-accepting an identifier replaces the earlier entry rather than adding a
    second one. There is no deletion.
    """

    def __init__(self) -> None:
        self.state = IndexState.EMPTY
        self._entries: dict[str, IndexEntry] = {}
        self._by_category: dict[str, list[str]] = {}
        self._by_author: dict[str, list[str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

    def accept(self, entry: IndexEntry) -> bool:
        """Add or replace an entry. Returns True if an earlier entry was replaced."""
        previous = self._entries.get(entry.identifier)
        old_categories = list(dict.fromkeys(previous.metadata.categories)) if previous else []
        old_authors = [previous.metadata.author] if previous and previous.metadata.author else []
        new_authors = [entry.metadata.author] if entry.metadata.author else []

        self._entries[entry.identifier] = entry
        _regroup(self._by_category, entry.identifier, old_categories,
                 list(dict.fromkeys(entry.metadata.categories)))
        _regroup(self._by_author, entry.identifier, old_authors, new_authors)

        if self.state is IndexState.EMPTY:
            self.state = IndexState.POPULATED
        if previous is not None:
            logger.debug("Replaced index entry %s (%s -> %s)", entry.identifier, previous.path, entry.path)
        return previous is not None

    def get(self, identifier: str) -> IndexEntry | None:
        """Return the entry for identifier, or None."""
        return self._entries.get(identifier)

    def _select(self, identifiers: list[str], chronological: bool, include_hidden: bool) -> list[IndexEntry]:
        entries = [self._entries[i] for i in identifiers]
        if not include_hidden:
            entries = [e for e in entries if not e.metadata.hidden]
        if chronological:
            entries.sort(key=_chrono_key)
        return entries

    def by_category(self, category: str, chronological: bool = False, include_hidden: bool = True) -> list[IndexEntry]:
        """Entries listing category, in insertion order unless chronological is set."""
        return self._select(self._by_category.get(category, []), chronological, include_hidden)

    def by_author(self, author: str, chronological: bool = False, include_hidden: bool = True) -> list[IndexEntry]:
        """Entries by author, in insertion order unless chronological is set."""
        return self._select(self._by_author.get(author, []), chronological, include_hidden)

    def chronological(self, include_hidden: bool = True) -> list[IndexEntry]:
        """All entries ordered by identifier date, then identifier; undated entries last."""
        return self._select(list(self._entries), True, include_hidden)

    def featured(self, include_hidden: bool = True) -> list[IndexEntry]:
        """Entries marked featured, in chronological order."""
        return [e for e in self.chronological(include_hidden) if e.metadata.featured]

    def categories(self) -> list[str]:
        """Sorted category names with at least one entry."""
        return sorted(self._by_category)

    def authors(self) -> list[str]:
        """Sorted author names with at least one entry."""
        return sorted(self._by_author)

    def to_dict(self, include_hidden: bool = True) -> dict:
        """JSON-ready projection: groupings by identifier plus the entries themselves."""
        def _ids(groups: dict[str, list[str]]) -> dict[str, list[str]]:
            out = {}
            for key in sorted(groups):
                ids = [e.identifier for e in self._select(groups[key], False, include_hidden)]
                if ids:
                    out[key] = ids
            return out

        chrono = self.chronological(include_hidden)
        return {
            "state": self.state.value,
            "chronological": [e.identifier for e in chrono],
            "categories": _ids(self._by_category),
            "authors": _ids(self._by_author),
            "entries": {e.identifier: e.model_dump(mode="json") for e in chrono},
        }
