"""
End-to-end analysis: archives -> indexes -> duplication index -> report.
"""
from typing import Callable, Dict, Iterable, List, Optional
import logging

from .models import AppConfig, PerArchiveIndex, SavingsReport, ScanProgress
from .errors import NoArchivesFound
from .indexer import EntryIndexer, EntryRecord
from .duplication import build_duplication_index
from .pairs import compute_pair_stats
from .savings import compute_savings
from .scanner import ArchiveScanner

logger = logging.getLogger(__name__)


def build_report(indexes: List[PerArchiveIndex]) -> SavingsReport:
    """Derive pair stats and savings from already-built per-archive indexes."""
    index = build_duplication_index(indexes)
    pairs = compute_pair_stats(indexes)
    savings = compute_savings(index, indexes)

    return SavingsReport(
        archives=[i.archive for i in indexes],
        pairs=pairs,
        savings=savings,
        entry_count=len(index),
        duplicated_entry_count=sum(1 for _ in index.duplicated_names())
    )


def analyze_entries(entries_by_archive: Dict[str, Iterable[EntryRecord]]) -> SavingsReport:
    """
    Run the analysis over metadata the caller already holds.

    Args:
        entries_by_archive: archive id -> (raw_name, stored_size) records,
            in report order

    Raises:
        NoArchivesFound: the mapping is empty
    """
    if not entries_by_archive:
        raise NoArchivesFound()

    indexes = [
        EntryIndexer(archive).index(entries)
        for archive, entries in entries_by_archive.items()
    ]
    return build_report(indexes)


class OverlapAnalyzer:
    """Runs discovery, indexing and duplication accounting for one config."""

    def __init__(self, config: AppConfig,
                 progress_callback: Optional[Callable[[ScanProgress], None]] = None):
        self.config = config
        self.progress_callback = progress_callback
        self.scanner = ArchiveScanner(config, progress_callback=progress_callback)

    def run(self, archives: Optional[List[str]] = None) -> SavingsReport:
        """
        Analyze the given archives, or the ones the config points at.

        Raises:
            NoArchivesFound: nothing to analyze
            OverlapError: any archive failed to read or index; the run is aborted
        """
        if archives is None:
            archives = self.scanner.discover()

        if not archives:
            raise NoArchivesFound(self.config.source_dirs)

        indexes = self.scanner.scan(archives)

        if self.progress_callback:
            self.progress_callback(ScanProgress(
                phase="analysis",
                archives_processed=len(indexes),
                total_archives=len(archives)
            ))

        report = build_report(indexes)
        logger.info(
            f"Analyzed {len(report.archives)} archives: {report.entry_count} distinct entries, "
            f"{report.duplicated_entry_count} duplicated"
        )
        return report
