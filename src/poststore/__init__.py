"""
poststore

Blog posts as markdown files with YAML front matter: parse, list, check and
author them for an external static site renderer.
"""

__version__ = "0.1.0"

from poststore.core.config import settings
from poststore.core.errors import MalformedFrontMatter
from poststore.core.types import Post
from poststore.storage.markdown import PostStore, dump_post, parse_post

__all__ = [
    "settings",
    "MalformedFrontMatter",
    "Post",
    "PostStore",
    "dump_post",
    "parse_post",
]
