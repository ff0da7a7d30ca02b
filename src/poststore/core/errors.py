"""Errors raised while reading post documents."""

from pathlib import Path


class MalformedFrontMatter(ValueError):
    """A post document whose front matter block is missing or invalid."""

    def __init__(
        self,
        reason: str,
        field: str | None = None,
        path: Path | None = None,
    ):
        self.reason = reason
        self.field = field
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        message = self.reason
        if self.field:
            message = f"{self.field}: {message}"
        if self.path:
            message = f"{self.path}: {message}"
        return message

    def with_path(self, path: Path) -> "MalformedFrontMatter":
        """Return a copy of this error that names the offending file."""
        return MalformedFrontMatter(self.reason, field=self.field, path=path)
