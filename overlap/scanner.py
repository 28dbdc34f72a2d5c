"""
Archive discovery and per-archive indexing.
"""
from pathlib import Path
from typing import Callable, Iterable, List, Optional
import os
import logging
from multiprocessing import Pool

from .models import AppConfig, PerArchiveIndex, ScanProgress
from .reader import ArchiveMetadataReader
from .indexer import EntryIndexer

logger = logging.getLogger(__name__)


def find_archives(directories: Iterable[str], recursive: bool = True) -> List[str]:
    """
    Find archive files in the given directories.

    Results keep directory order; files within one directory are sorted.
    An archive reachable from two directories is listed once.
    """
    archives = []
    seen = set()

    for directory in directories:
        dir_path = Path(directory)

        if not dir_path.is_dir():
            logger.warning(f"Directory does not exist: {directory}")
            continue

        found = []
        if recursive:
            for root, dirs, files in os.walk(directory):
                for filename in files:
                    if ArchiveMetadataReader.is_archive(filename):
                        found.append(os.path.join(root, filename))
        else:
            for child in dir_path.iterdir():
                if child.is_file() and ArchiveMetadataReader.is_archive(child.name):
                    found.append(str(child))

        for archive_path in sorted(found):
            key = os.path.realpath(archive_path)
            if key in seen:
                continue
            seen.add(key)
            archives.append(archive_path)

    return archives


def _index_one(archive_path: str) -> PerArchiveIndex:
    """Read and index one archive. Top-level so worker processes can pickle it."""
    entries = ArchiveMetadataReader().read_entries(archive_path)
    return EntryIndexer(archive_path).index(entries)


class ArchiveScanner:
    """Indexes archives, sequentially or in a process pool."""

    def __init__(self, config: AppConfig, reader: Optional[ArchiveMetadataReader] = None,
                 progress_callback: Optional[Callable[[ScanProgress], None]] = None):
        """
        Initialize archive scanner.

        Args:
            config: Application configuration
            reader: Metadata reader (a default one is created if omitted).
                Worker processes always build their own default reader, so a
                custom reader requires parallel_workers == 1.
            progress_callback: Optional callback for progress updates

        Raises:
            ValueError: a custom reader is combined with parallel_workers > 1
        """
        if reader is not None and config.parallel_workers > 1:
            raise ValueError("A custom reader cannot be used with parallel_workers > 1")
        self.config = config
        self.reader = reader or ArchiveMetadataReader()
        self.progress_callback = progress_callback

    def discover(self) -> List[str]:
        """Explicit archive paths first, then archives found in source directories."""
        if self.progress_callback:
            self.progress_callback(ScanProgress(
                phase="discovery",
                current_archive="Finding archives..."
            ))

        archives = []
        seen = set()
        candidates = list(self.config.archive_paths) + find_archives(
            self.config.source_dirs, recursive=self.config.recursive
        )
        for archive_path in candidates:
            key = os.path.realpath(archive_path)
            if key not in seen:
                seen.add(key)
                archives.append(archive_path)

        logger.info(f"Found {len(archives)} archives to scan")
        return archives

    def scan(self, archive_paths: List[str]) -> List[PerArchiveIndex]:
        """
        Index every archive, in order.

        Any read or indexing error propagates; no partial list is returned.
        """
        total = len(archive_paths)

        if self.config.parallel_workers > 1 and total > 1:
            indexes = []
            with Pool(processes=min(self.config.parallel_workers, total)) as pool:
                for idx, archive_index in enumerate(pool.imap(_index_one, archive_paths)):
                    self._report(archive_index, idx, total)
                    indexes.append(archive_index)
            return indexes

        indexes = []
        for idx, archive_path in enumerate(archive_paths):
            logger.info(f"Scanning archive [{idx + 1}/{total}]: {Path(archive_path).name}")
            entries = self.reader.read_entries(archive_path)
            archive_index = EntryIndexer(archive_path).index(entries)
            self._report(archive_index, idx, total)
            indexes.append(archive_index)
        return indexes

    def _report(self, archive_index: PerArchiveIndex, idx: int, total: int) -> None:
        logger.info(f"Indexed {len(archive_index)} entries from {archive_index.name}")
        if self.progress_callback:
            self.progress_callback(ScanProgress(
                phase="index",
                current_archive=archive_index.name,
                archives_processed=idx + 1,
                total_archives=total
            ))
