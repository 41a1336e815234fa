"""Unit tests for core/utils/identifier.py"""

from datetime import date
from pathlib import Path

import pytest

from postindex.core.models import DocumentKind
from postindex.core.utils.identifier import date_from_identifier, identifier_for, kind_for


def test_post_identifier_is_file_stem():
    path = Path("site/_posts/2016-05-12-closures.md")
    assert identifier_for(path, DocumentKind.post, Path("site")) == "2016-05-12-closures"


@pytest.mark.parametrize("path,expected", [
    ("site/index.md", "index"),
    ("site/blog/index.md", "blog/index"),
    ("site/docs/guide.markdown", "docs/guide"),
])
def test_page_identifier_is_relative_path(path, expected):
    """Pages are named by their path under the root, so same-named pages stay distinct."""
    assert identifier_for(Path(path), DocumentKind.page, Path("site")) == expected


def test_page_identifier_without_root_or_outside_it():
    assert identifier_for(Path("site/blog/index.md"), DocumentKind.page) == "index"
    assert identifier_for(Path("elsewhere/about.md"), DocumentKind.page, Path("site")) == "about"


@pytest.mark.parametrize("identifier,expected", [
    ("2016-05-12-closures", date(2016, 5, 12)),
    ("2016-13-01-bad-month", None),
    ("about", None),
    ("2016-05-12", None),
])
def test_date_from_identifier(identifier, expected):
    assert date_from_identifier(identifier) == expected


@pytest.mark.parametrize("path,expected", [
    ("_posts/2016-05-12-closures.md", DocumentKind.post),
    ("_posts/undated.md", DocumentKind.post),
    ("_drafts/idea.md", DocumentKind.post),
    ("blog/2016-05-12-closures.md", DocumentKind.post),
    ("about.md", DocumentKind.page),
    ("pages/contact.md", DocumentKind.page),
])
def test_kind_for(path, expected):
    assert kind_for(Path(path)) is expected
