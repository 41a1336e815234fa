"""Root test configuration: shared sample site and environment isolation"""

import os
from pathlib import Path

import pytest


CLOSURES_POST = """\
---
layout: post
title: "Understanding Closures"
author: ana
categories: [ javascript, functions ]
image: assets/images/closures.jpg
featured: true
---

A closure is the combination of a function and the scope it was declared in.

## Example

```js
function counter() { let n = 0; return () => ++n; }
```
"""

PROMISES_POST = """\
---
layout: post
title: "Promises in Practice"
author: ben
categories: [ javascript ]
image: assets/images/promises.jpg
---
Promises represent a value that may not exist yet.
"""

HIDDEN_POST = """\
---
layout: post
title: "Draft Notes on Generators"
author: ana
categories: [ javascript ]
hidden: true
---
Generators pause and resume.
"""

ABOUT_PAGE = """\
---
layout: page
title: About
permalink: /about
comments: false
---

This blog is about JavaScript.
"""

BROKEN_POST = """\
---
layout: post
title: "Never closed"

Body text
"""


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Drop POSTINDEX_* variables so settings come from defaults unless a test sets them."""
    for name in list(os.environ):
        if name.startswith("POSTINDEX_"):
            monkeypatch.delenv(name)


@pytest.fixture(name="site")
def site_fixture(tmp_path) -> Path:
    """A small Jekyll-style source tree with three posts and one page."""
    posts = tmp_path / "_posts"
    posts.mkdir()
    (posts / "2016-05-12-understanding-closures.md").write_text(CLOSURES_POST)
    (posts / "2016-06-01-promises-in-practice.md").write_text(PROMISES_POST)
    (posts / "2016-07-20-generators.md").write_text(HIDDEN_POST)
    (tmp_path / "about.md").write_text(ABOUT_PAGE)
    return tmp_path


@pytest.fixture(name="broken_site")
def broken_site_fixture(site) -> Path:
    """The sample site plus one post whose front matter is never closed."""
    (site / "_posts" / "2016-08-02-never-closed.md").write_text(BROKEN_POST)
    return site
