"""
Core type definitions for poststore.

A Post is one blog entry: front matter metadata plus a markdown body.
"""

import datetime
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


RESERVED_KEYS = frozenset({"title", "date", "layout", "tags", "categories"})
"""Front matter keys that map onto Post fields rather than ``extra``."""


def slugify(title: str) -> str:
    """Convert a title to a filesystem and URL safe slug."""
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = slug[:80].strip("-")
    return slug or "untitled"


class Post(BaseModel):
    """A single blog post. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    """Human readable title."""

    date: datetime.date
    """Publication date; posts are ordered by it."""

    layout: str = "default"
    """Opaque key naming the template the external renderer should use."""

    body: str = ""
    """Markdown body, never interpreted here."""

    tags: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()

    extra: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    """Any other front matter keys (permalink, excerpt, ...), kept verbatim. Read-only."""

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("layout")
    @classmethod
    def _clean_layout(cls, value: str) -> str:
        layout = value.strip()
        if not layout:
            raise ValueError("layout must not be empty")
        return layout

    @field_validator("body")
    @classmethod
    def _trim_body(cls, value: str) -> str:
        # Blank lines around the body are not part of the content
        return value.lstrip("\r\n").rstrip()

    @field_validator("extra")
    @classmethod
    def _freeze_extra(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        clash = RESERVED_KEYS.intersection(value)
        if clash:
            raise ValueError(f"extra front matter repeats reserved keys: {sorted(clash)}")
        return MappingProxyType(dict(value))

    def __hash__(self) -> int:
        # extra may hold unhashable YAML values; equal posts still hash equal
        return hash((self.title, self.date, self.layout, self.body, self.tags, self.categories))

    @computed_field
    @property
    def slug(self) -> str:
        return slugify(self.title)

    @computed_field
    @property
    def filename(self) -> str:
        """Jekyll style post filename, e.g. ``2020-01-01-hello.md``."""
        return f"{self.date.isoformat()}-{self.slug}.md"

    def front_matter(self) -> dict[str, Any]:
        """
        Build the front matter mapping for this post.

        Keys come out in a stable order: title, date, layout, then tags and
        categories when present, then everything in ``extra``.
        """
        fm: dict[str, Any] = {
            "title": self.title,
            "date": self.date,
            "layout": self.layout,
        }
        if self.tags:
            fm["tags"] = list(self.tags)
        if self.categories:
            fm["categories"] = list(self.categories)
        fm.update(self.extra)
        return fm
