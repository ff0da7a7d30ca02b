"""
Core module - Configuration, types and errors.
"""

from poststore.core.config import settings, setup_logging, get_logger
from poststore.core.errors import MalformedFrontMatter
from poststore.core.types import Post, slugify

__all__ = [
    "settings",
    "setup_logging",
    "get_logger",
    "MalformedFrontMatter",
    "Post",
    "slugify",
]
