"""
Pairwise overlap between archives.
"""
from typing import List, Sequence
import logging

from .models import PairStat, PerArchiveIndex

logger = logging.getLogger(__name__)


def pair_stat(a: PerArchiveIndex, b: PerArchiveIndex) -> PairStat:
    """Shared entry count and lesser-cost duplicated bytes for two archives."""
    shared = a.names & b.names
    shared_bytes = sum(min(a.size_of(name), b.size_of(name)) for name in shared)
    return PairStat(
        archive_a=a.archive,
        archive_b=b.archive,
        shared_count=len(shared),
        shared_bytes=shared_bytes
    )


def compute_pair_stats(indexes: Sequence[PerArchiveIndex]) -> List[PairStat]:
    """
    Compute overlap for every unordered pair of archives.

    Pairs are produced in input order (i < j); pairs sharing nothing are
    left out.
    """
    stats = []
    for i in range(len(indexes)):
        for j in range(i + 1, len(indexes)):
            stat = pair_stat(indexes[i], indexes[j])
            if stat.shared_count > 0:
                stats.append(stat)

    logger.info(f"{len(stats)} archive pairs share at least one entry")
    return stats
