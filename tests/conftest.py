"""
Pytest configuration and fixtures for poststore tests.
"""

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Set test environment before importing app modules
os.environ["POSTSTORE_POSTS_DIR"] = tempfile.mkdtemp()
os.environ["POSTSTORE_DEFAULT_LAYOUT"] = "default"


@pytest.fixture
def temp_posts_dir() -> Generator[Path, None, None]:
    """Create a temporary posts directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        posts_dir = Path(tmpdir) / "_posts"
        posts_dir.mkdir(parents=True, exist_ok=True)
        yield posts_dir


@pytest.fixture
def hello_document() -> str:
    """The smallest valid post: no layout, one line of body."""
    return '---\ntitle: "Hello"\ndate: 2020-01-01\n---\nBody text.\n'


@pytest.fixture
def full_document() -> str:
    """A post using every front matter feature."""
    return """---
title: "Modeling UI state with enums"
date: 2021-03-14
layout: post
tags: [python, state-machines]
categories: tutorials
permalink: /blog/enums/
excerpt: Boolean flags multiply; enums do not.
---

Boolean flags like `is_loading` and `has_error` can contradict each other.

```python
class Status(Enum):
    IDLE = auto()
    LOADING = auto()
```

---

An enum makes the impossible states unrepresentable.
"""


@pytest.fixture
def write_post(temp_posts_dir):
    """Factory writing raw document text to a file in the temp posts dir."""
    def _write(name: str, text: str) -> Path:
        path = temp_posts_dir / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
