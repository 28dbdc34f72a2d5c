"""
Error types raised while indexing and analyzing archives.

Constructor arguments are kept in ``args`` so instances survive the trip
back from ``multiprocessing`` workers.
"""
from typing import Iterable, Optional


class OverlapError(Exception):
    """Base class for analysis errors."""


class InvalidEntryName(OverlapError):
    """An entry name cannot be safely normalized."""

    def __init__(self, raw_name: str, archive: str):
        super().__init__(raw_name, archive)
        self.raw_name = raw_name
        self.archive = archive

    def __str__(self) -> str:
        return f"Entry had unsafe name {self.raw_name!r} in archive {self.archive}"


class DuplicateEntryInArchive(OverlapError):
    """Two entries in one archive normalize to the same name."""

    def __init__(self, name: str, archive: str):
        super().__init__(name, archive)
        self.name = name
        self.archive = archive

    def __str__(self) -> str:
        return f"Duplicate entry {self.name!r} in archive {self.archive}"


class InvalidEntrySize(OverlapError):
    """An entry reports a negative stored size."""

    def __init__(self, name: str, size: int, archive: str):
        super().__init__(name, size, archive)
        self.name = name
        self.size = size
        self.archive = archive

    def __str__(self) -> str:
        return f"Entry {self.name!r} in archive {self.archive} has invalid size {self.size}"


class NoArchivesFound(OverlapError):
    """The archive list is empty."""

    def __init__(self, sources: Optional[Iterable[str]] = None):
        sources = tuple(sources or ())
        super().__init__(sources)
        self.sources = sources

    def __str__(self) -> str:
        if self.sources:
            return f"No archives found in {', '.join(self.sources)}"
        return "No archives found"


class ArchiveReadError(OverlapError):
    """An archive could not be opened or its metadata could not be read."""

    def __init__(self, archive: str, reason: str):
        super().__init__(archive, reason)
        self.archive = archive
        self.reason = reason

    def __str__(self) -> str:
        return f"Failed to read {self.archive}: {self.reason}"


class UnsupportedArchiveError(ArchiveReadError):
    """No reader is available for the archive's format."""
