"""
Validation Result - Call-scoped accumulator of path-tagged errors.

One result is created per top-level validate call. Nodes descend into
children with ``in_path`` (or validate into a ``sub_result`` and ``merge``
it back), so every error carries the slash-delimited location of the value
that caused it:

    /            the root value
    /foo/0/bar   key "foo", index 0, key "bar"

Segments are not escaped; a key containing "/" renders ambiguously.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from schemaworks.core.models import ErrorEntry, ValidationReport

Segments = tuple[str, ...]


def render_path(segments: Segments) -> str:
    """Render path segments as "/a/b", or "/" for the root."""
    return "/" + "/".join(segments)


class ValidationResult:
    """Ordered (path, message) errors for one validation call."""

    def __init__(self, path: Segments = ()) -> None:
        self._path: Segments = path
        # (segments, message, absolute); absolute entries keep their path on merge
        self._entries: list[tuple[Segments, str, bool]] = []
        self.data: Any = None

    @property
    def path(self) -> str:
        """The path errors are currently recorded at."""
        return render_path(self._path)

    @property
    def errors(self) -> list[ErrorEntry]:
        return [
            ErrorEntry(path=render_path(segments), message=message)
            for segments, message, _ in self._entries
        ]

    @property
    def valid(self) -> bool:
        return not self._entries

    @property
    def messages(self) -> list[str]:
        """Errors rendered as "path: message" lines."""
        return [f"{e.path}: {e.message}" for e in self.errors]

    def messages_by_path(self) -> dict[str, list[str]]:
        """Group messages by path, in order of first occurrence."""
        grouped: dict[str, list[str]] = {}
        for entry in self.errors:
            grouped.setdefault(entry.path, []).append(entry.message)
        return grouped

    def error(self, message: str, path: str | None = None) -> None:
        """
        Record an error.

        Args:
            message: Human-readable error message
            path: Explicit "/a/b" path; defaults to the current scope path
        """
        if path is None:
            self._entries.append((self._path, message, False))
        else:
            segments = tuple(s for s in path.split("/") if s)
            self._entries.append((segments, message, True))

    @contextmanager
    def in_path(self, segment: Any) -> Iterator["ValidationResult"]:
        """Descend one level for the duration of the block."""
        previous = self._path
        self._path = previous + (str(segment),)
        try:
            yield self
        finally:
            self._path = previous

    def sub_result(self) -> "ValidationResult":
        """Create a disposable result scoped at the current path."""
        return ValidationResult(self._path)

    def merge(self, child: "ValidationResult", segment: Any | None = None) -> None:
        """
        Append a child result's errors under this result's scope.

        Scoped child paths are taken relative to the child's own scope, so
        a result created with ``sub_result()`` merges back at the same place.
        Errors recorded with an explicit path keep that path unchanged.

        Args:
            child: Result the child value was validated into
            segment: Path segment the child value lives under, if any
        """
        base = self._path if segment is None else self._path + (str(segment),)
        offset = len(child._path)
        for segments, message, absolute in child._entries:
            if absolute:
                self._entries.append((segments, message, True))
            else:
                self._entries.append((base + segments[offset:], message, False))

    def to_report(self) -> ValidationReport:
        """Serialisable {valid, errors} form of this result."""
        return ValidationReport(valid=self.valid, errors=self.errors)

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.valid}, errors={len(self._entries)})"
