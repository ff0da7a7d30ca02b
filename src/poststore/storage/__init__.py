"""
Storage Layer - markdown post files.

Post files are the only source of truth; nothing here keeps derived state.
"""

from poststore.storage.markdown import PostStore, dump_post, parse_post

__all__ = [
    "PostStore",
    "dump_post",
    "parse_post",
]
