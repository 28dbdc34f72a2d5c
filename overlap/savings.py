"""
Keep-one-copy savings estimate.

For every entry name that occurs in more than one archive, the smallest
stored copy is kept and every other copy counts as savable.
"""
from typing import Iterable
import logging

from .duplication import DuplicationIndex
from .models import ArchiveStat, EntrySavings, GlobalSavings, PerArchiveIndex

logger = logging.getLogger(__name__)


def compute_savings(index: DuplicationIndex, indexes: Iterable[PerArchiveIndex]) -> GlobalSavings:
    """
    Compute corpus-wide and per-archive duplicate accounting.

    Args:
        index: Duplication index built from ``indexes``
        indexes: Per-archive indexes, in report order

    Returns:
        GlobalSavings with per-archive stats and per-entry savings
    """
    savings = GlobalSavings()

    for name, occurrences in index.items():
        sizes = sorted(occ.size for occ in occurrences)
        savings.total_bytes += sum(sizes)
        if len(sizes) > 1:
            savable = sum(sizes[1:])
            savings.total_savable += savable
            savings.entries.append(EntrySavings(
                name=name,
                occurrences=len(sizes),
                savable=savable,
                kept_size=sizes[0]
            ))

    savings.entries.sort(key=lambda e: (-e.savable, e.name))

    for archive_index in indexes:
        stat = ArchiveStat(archive=archive_index.archive)
        for name in archive_index.names:
            size = archive_index.size_of(name)
            stat.total += size
            if index.is_duplicated(name):
                stat.dup += size
        savings.archive_stats.append(stat)

    logger.info(
        f"Savable {savings.total_savable} of {savings.total_bytes} bytes "
        f"({savings.percent_reduction:.2f}% reduction)"
    )
    return savings
