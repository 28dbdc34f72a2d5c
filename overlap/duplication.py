"""
Global entry-name to occurrences mapping across all indexed archives.
"""
from typing import Dict, Iterable, Iterator, List
import logging

from .models import EntryName, Occurrence, PerArchiveIndex

logger = logging.getLogger(__name__)


class DuplicationIndex:
    """Read-only mapping from entry name to its occurrences."""

    def __init__(self, occurrences: Dict[EntryName, List[Occurrence]]):
        self._occurrences = occurrences

    def occurrences(self, name: EntryName) -> List[Occurrence]:
        return list(self._occurrences.get(name, ()))

    def occurrence_count(self, name: EntryName) -> int:
        return len(self._occurrences.get(name, ()))

    def is_duplicated(self, name: EntryName) -> bool:
        return self.occurrence_count(name) > 1

    def names(self) -> Iterator[EntryName]:
        return iter(self._occurrences)

    def duplicated_names(self) -> Iterator[EntryName]:
        return (name for name, occ in self._occurrences.items() if len(occ) > 1)

    def items(self):
        for name, occ in self._occurrences.items():
            yield name, list(occ)

    def __contains__(self, name: EntryName) -> bool:
        return name in self._occurrences

    def __len__(self) -> int:
        return len(self._occurrences)


def build_duplication_index(indexes: Iterable[PerArchiveIndex]) -> DuplicationIndex:
    """
    Fold per-archive indexes into one DuplicationIndex.

    Each (archive, name) pair is already unique within its PerArchiveIndex,
    so one occurrence is appended per name without re-checking.
    """
    occurrences: Dict[EntryName, List[Occurrence]] = {}
    archive_count = 0

    for archive_index in indexes:
        archive_count += 1
        # Sorted so the fold is independent of set iteration order
        for name in sorted(archive_index.names):
            occurrences.setdefault(name, []).append(
                Occurrence(archive_index.archive, archive_index.size_of(name))
            )

    logger.info(f"Built duplication index: {len(occurrences)} distinct entries across {archive_count} archives")
    return DuplicationIndex(occurrences)
