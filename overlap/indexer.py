"""
Per-archive entry indexing with name sanitization.
"""
import re
from typing import Iterable, Optional, Tuple, Union
import logging

from .models import ArchiveEntry, ArchiveId, EntryName, PerArchiveIndex
from .errors import InvalidEntryName, DuplicateEntryInArchive, InvalidEntrySize

logger = logging.getLogger(__name__)

_DRIVE_PREFIX = re.compile(r'^[A-Za-z]:')

# Sanitized name of entries that stand for the archive root itself (".", "/")
ARCHIVE_ROOT = ''


def sanitize_entry_name(raw_name: str) -> Optional[EntryName]:
    """
    Normalize an archive entry name to a relative POSIX path.

    Returns ARCHIVE_ROOT for names that only denote the archive root, such as
    the "." member tar writes for `tar -C dir -cf x.tar .`. Returns None for
    empty names and names that traverse outside the archive root or carry a
    drive prefix or NUL byte.
    """
    if not raw_name or '\x00' in raw_name:
        return None

    name = raw_name.replace('\\', '/')
    if _DRIVE_PREFIX.match(name):
        return None

    parts = []
    for part in name.split('/'):
        if part in ('', '.'):
            continue
        if part == '..':
            return None
        parts.append(part)

    if not parts:
        return ARCHIVE_ROOT
    return '/'.join(parts)


EntryRecord = Union[ArchiveEntry, Tuple[str, int]]


class EntryIndexer:
    """Builds the entry-name set and size lookup for one archive."""

    def __init__(self, archive: ArchiveId):
        self.archive = archive

    def index(self, entries: Iterable[EntryRecord]) -> PerArchiveIndex:
        """
        Index an archive's entry metadata.

        Args:
            entries: ArchiveEntry records or (raw_name, stored_size) pairs

        Returns:
            PerArchiveIndex for the archive

        Raises:
            InvalidEntryName: an entry name fails sanitization
            DuplicateEntryInArchive: two entries normalize to the same name
            InvalidEntrySize: an entry reports a negative size
        """
        names = set()
        sizes = {}

        for entry in entries:
            if isinstance(entry, ArchiveEntry):
                raw_name, size = entry.raw_name, entry.stored_size
            else:
                raw_name, size = entry

            name = sanitize_entry_name(raw_name)
            if name is None:
                raise InvalidEntryName(raw_name, self.archive)

            if name == ARCHIVE_ROOT:
                logger.debug(f"Skipping archive root entry {raw_name!r} in {self.archive}")
                continue

            if name in names:
                raise DuplicateEntryInArchive(name, self.archive)

            if size < 0:
                raise InvalidEntrySize(name, size, self.archive)

            names.add(name)
            sizes[name] = size

        logger.debug(f"Indexed {len(names)} entries from {self.archive}")
        return PerArchiveIndex(archive=self.archive, names=names, sizes=sizes)


def index_archive(archive: ArchiveId, entries: Iterable[EntryRecord]) -> PerArchiveIndex:
    """Convenience wrapper around EntryIndexer."""
    return EntryIndexer(archive).index(entries)
