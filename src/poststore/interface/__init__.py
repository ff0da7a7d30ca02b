"""
Interface module - command-line access to a posts directory.
"""

from poststore.interface.cli import app

__all__ = ["app"]
