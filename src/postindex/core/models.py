"""Data models shared by the parse, validate and index steps"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


RawValue = Union[str, list[str]]           # undecided until validation
FieldValue = Union[str, bool, tuple[str, ...]]


class DocumentKind(str, Enum):
    """Classification that decides which metadata fields apply"""
    post = "post"
    page = "page"


@dataclass(frozen=True)
class Document:
    """A parsed source file: raw metadata mapping plus markdown body."""
    path:       Path
    identifier: str
    kind:       DocumentKind
    metadata:   Mapping[str, RawValue]   # read-only view
    body:       str                 # everything after the closing marker, as-is


class PostMetadata(BaseModel):
    """Validated, typed front matter for a post or page."""
    model_config = ConfigDict(frozen=True)

    layout:     str
    title:      str
    author:     Optional[str] = None
    categories: tuple[str, ...] = ()
    image:      Optional[str] = None
    featured:   bool = False
    hidden:     bool = False
    comments:   Optional[bool] = None
    permalink:  Optional[str] = None    # pages only
    extra:      dict[str, RawValue] = Field(default_factory=dict)

    def to_front_matter(self) -> dict[str, FieldValue | list[str]]:
        """Return the mapping in declaration order, omitting unset optional fields."""
        fm: dict = {"layout": self.layout, "title": self.title}
        if self.author is not None:
            fm["author"] = self.author
        if self.categories:
            fm["categories"] = list(self.categories)
        if self.image is not None:
            fm["image"] = self.image
        if self.featured:
            fm["featured"] = True
        if self.hidden:
            fm["hidden"] = True
        if self.comments is not None:
            fm["comments"] = self.comments
        if self.permalink is not None:
            fm["permalink"] = self.permalink
        fm.update(self.extra)
        return fm


class IndexEntry(BaseModel):
    """Read-only projection of a validated document, as stored in the index."""
    model_config = ConfigDict(frozen=True)

    identifier: str
    path:       str
    kind:       DocumentKind
    published:  Optional[date] = None   # from the identifier, never from metadata
    metadata:   PostMetadata
    excerpt:    str = ""
