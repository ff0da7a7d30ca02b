"""
Markdown Store - blog posts as markdown files with YAML front matter.

File Format:
---
title: "Post title"
date: YYYY-MM-DD
layout: template-key        (optional, defaults to settings.default_layout)
tags: [topic tags]          (optional)
categories: [categories]    (optional)
...any other keys are carried through untouched
---

Markdown body.

Files follow the Jekyll ``_posts`` naming scheme, ``YYYY-MM-DD-slug.md``.
Posts are authored once and never rewritten by this module.
"""

import datetime
import re
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from poststore.core.config import settings, get_logger
from poststore.core.errors import MalformedFrontMatter
from poststore.core.types import RESERVED_KEYS, Post

logger = get_logger("storage.markdown")

DELIMITER = "---"

_HANDLER = frontmatter.YAMLHandler()
_FILENAME_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})-")

# Forms Jekyll accepts for the date key when YAML leaves it as a string
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
)

POST_SUFFIXES = (".md", ".markdown")


# ============================================
# Parsing
# ============================================

def _split(text: str) -> tuple[str, str]:
    """Split a document into its raw front matter block and body."""
    if text.startswith("\ufeff"):
        text = text[1:]

    if not _HANDLER.detect(text):
        raise MalformedFrontMatter(
            f"document does not start with a '{DELIMITER}' front matter delimiter"
        )

    try:
        # Only the first block is front matter; later '---' lines stay in the body
        return _HANDLER.split(text)
    except ValueError:
        raise MalformedFrontMatter(
            f"front matter block is not closed by a '{DELIMITER}' line"
        ) from None


def _load_metadata(block: str) -> dict[Any, Any]:
    try:
        metadata = yaml.safe_load(block)
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises ValueError for timestamps like 2020-13-45
        raise MalformedFrontMatter(f"front matter is not valid YAML ({e})") from e

    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise MalformedFrontMatter(
            f"front matter must be a mapping, got {type(metadata).__name__}"
        )
    return metadata


def _coerce_title(value: Any) -> str:
    if value is None:
        raise MalformedFrontMatter("required field is missing", field="title")
    if isinstance(value, (dict, list)):
        raise MalformedFrontMatter("must be a string", field="title")
    title = str(value)
    if not title.strip():
        raise MalformedFrontMatter("required field is empty", field="title")
    return title


def _coerce_date(value: Any) -> datetime.date:
    if value is None:
        raise MalformedFrontMatter("required field is missing", field="date")
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise MalformedFrontMatter(f"cannot parse {value!r} as a date", field="date")


def _coerce_layout(value: Any, default_layout: str) -> str:
    if value is None:
        return default_layout
    if isinstance(value, (dict, list)):
        raise MalformedFrontMatter("must be a template name", field="layout")
    layout = str(value).strip()
    return layout or default_layout


def _coerce_names(value: Any, field: str) -> list[str]:
    """Jekyll allows tags/categories as a YAML list or a space separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        names = []
        for item in value:
            if item is None:
                continue
            if isinstance(item, (dict, list)):
                raise MalformedFrontMatter("entries must be plain values", field=field)
            names.append(str(item))
        return names
    raise MalformedFrontMatter("must be a list or a space separated string", field=field)


def parse_post(text: str, default_layout: str | None = None) -> Post:
    """
    Parse a post document into a Post.

    Raises MalformedFrontMatter when the leading front matter block is
    missing, unterminated, not a YAML mapping, or lacks a usable title/date.
    """
    block, body = _split(text)
    metadata = _load_metadata(block)

    return Post(
        title=_coerce_title(metadata.get("title")),
        date=_coerce_date(metadata.get("date")),
        layout=_coerce_layout(metadata.get("layout"), default_layout or settings.default_layout),
        body=body,
        tags=_coerce_names(metadata.get("tags"), "tags"),
        categories=_coerce_names(metadata.get("categories"), "categories"),
        extra={str(k): v for k, v in metadata.items() if k not in RESERVED_KEYS},
    )


def dump_post(post: Post) -> str:
    """Serialize a Post back to front matter plus markdown body."""
    document = frontmatter.Post(post.body)
    document.metadata.update(post.front_matter())
    return frontmatter.dumps(document, sort_keys=False) + "\n"


# ============================================
# Store
# ============================================

class PostStore:
    """
    A directory of post files.

    Reading is the common path: the external renderer lists and loads posts.
    ``write`` exists for authoring new posts and never replaces a file.
    """

    def __init__(self, posts_dir: Path | None = None, default_layout: str | None = None):
        """Initialize the store over a posts directory."""
        self.posts_dir = Path(posts_dir or settings.posts_dir)
        self.default_layout = default_layout or settings.default_layout

    def list_all(self) -> list[Path]:
        """List every post file, sorted by filename."""
        if not self.posts_dir.exists():
            return []
        return sorted(
            path for path in self.posts_dir.iterdir()
            if path.is_file() and path.suffix in POST_SUFFIXES
        )

    def read(self, path: Path) -> Post:
        """
        Read and parse one post file.

        MalformedFrontMatter raised from here names the file.
        """
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            logger.error(f"Malformed post {path}: not valid UTF-8")
            raise MalformedFrontMatter(f"not valid UTF-8 ({e.reason} at byte {e.start})", path=path) from e

        try:
            return parse_post(text, self.default_layout)
        except MalformedFrontMatter as e:
            logger.error(f"Malformed post {path}: {e.reason}")
            raise e.with_path(path) from e

    def load_with_paths(self) -> list[tuple[Path, Post]]:
        """
        Load every post with the file it came from, newest first.

        Stops at the first malformed file; a partial listing is never returned.
        """
        entries = []
        for path in self.list_all():
            post = self.read(path)
            self._check_filename_date(path, post)
            entries.append((path, post))

        entries.sort(key=lambda entry: entry[1].title)
        entries.sort(key=lambda entry: entry[1].date, reverse=True)
        logger.debug(f"Loaded {len(entries)} posts from {self.posts_dir}")
        return entries

    def load_all(self) -> list[Post]:
        """Load every post, newest first."""
        return [post for _, post in self.load_with_paths()]

    def validate(self) -> list[tuple[Path, MalformedFrontMatter]]:
        """Check every post file and collect the failures."""
        failures = []
        for path in self.list_all():
            try:
                self.read(path)
            except MalformedFrontMatter as e:
                failures.append((path, e))

        logger.info(f"Checked {self.posts_dir}: {len(failures)} malformed post(s)")
        return failures

    def write(self, post: Post) -> Path:
        """
        Write a new post file named after its date and slug.

        Raises FileExistsError if a post with that filename already exists.
        """
        self.posts_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.posts_dir / post.filename

        with open(filepath, "x", encoding="utf-8") as f:
            f.write(dump_post(post))

        logger.info(f"Wrote post '{post.title}' to {filepath}")
        return filepath

    def _check_filename_date(self, path: Path, post: Post) -> None:
        match = _FILENAME_DATE_RE.match(path.name)
        if match and match.group(1) != post.date.isoformat():
            logger.warning(
                f"{path.name}: filename date {match.group(1)} differs from front matter date {post.date}"
            )
