"""
Data models for the Archive Overlap Analyzer.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Set
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

# Archive location as discovered; used as a map key.
ArchiveId = str
# Sanitized, normalized path of an entry inside an archive.
EntryName = str


@dataclass
class ArchiveEntry:
    """One raw metadata record read from an archive."""
    raw_name: str
    stored_size: int  # Compressed/stored size as reported by the archive


@dataclass
class PerArchiveIndex:
    """Entry names and stored sizes for a single archive."""
    archive: ArchiveId
    names: Set[EntryName] = field(default_factory=set)
    sizes: Dict[EntryName, int] = field(default_factory=dict)

    @property
    def name(self) -> str:
        """Get archive filename."""
        return Path(self.archive).name

    @property
    def total_size(self) -> int:
        return sum(self.size_of(n) for n in self.names)

    def size_of(self, entry: EntryName) -> int:
        """Stored size of an entry, 0 if the lookup misses."""
        size = self.sizes.get(entry)
        if size is None:
            logger.debug(f"Missing size lookup for {entry!r} in {self.archive}")
            return 0
        return size

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class Occurrence:
    """One (archive, size) pairing for an entry name."""
    archive: ArchiveId
    size: int


@dataclass(frozen=True)
class PairStat:
    """Overlap between two archives."""
    archive_a: ArchiveId
    archive_b: ArchiveId
    shared_count: int
    shared_bytes: int  # Sum of the lesser stored size over shared names


@dataclass
class ArchiveStat:
    """Per-archive duplicate accounting."""
    archive: ArchiveId
    total: int = 0
    dup: int = 0

    @property
    def name(self) -> str:
        return Path(self.archive).name

    @property
    def percent(self) -> float:
        """Share of this archive's bytes that also live in other archives."""
        if self.total == 0:
            return 0.0
        return (self.dup / self.total) * 100


@dataclass(frozen=True)
class EntrySavings:
    """Savings for one duplicated entry name under keep-smallest-copy."""
    name: EntryName
    occurrences: int
    savable: int
    kept_size: int


@dataclass
class GlobalSavings:
    """Corpus-wide savings estimate."""
    total_savable: int = 0
    total_bytes: int = 0
    archive_stats: List[ArchiveStat] = field(default_factory=list)
    entries: List[EntrySavings] = field(default_factory=list)

    @property
    def percent_reduction(self) -> float:
        if self.total_bytes == 0:
            return 0.0
        return (self.total_savable / self.total_bytes) * 100


@dataclass
class SavingsReport:
    """Everything a single analysis run produces."""
    archives: List[ArchiveId]
    pairs: List[PairStat]
    savings: GlobalSavings
    entry_count: int = 0
    duplicated_entry_count: int = 0

    def top_entries(self, n: int) -> List[EntrySavings]:
        """The n duplicated entries with the most savable bytes."""
        if n <= 0:
            return []
        return self.savings.entries[:n]


@dataclass
class ScanProgress:
    """Progress information for indexing operations."""
    phase: str  # "discovery", "index", "analysis"
    current_archive: Optional[str] = None
    archives_processed: int = 0
    total_archives: int = 0

    @property
    def progress_pct(self) -> float:
        """Get overall progress percentage."""
        if self.total_archives == 0:
            return 0.0
        return (self.archives_processed / self.total_archives) * 100


@dataclass
class AppConfig:
    """Application configuration."""
    source_dirs: List[str] = field(default_factory=list)
    archive_paths: List[str] = field(default_factory=list)
    recursive: bool = True
    parallel_workers: int = 1
    top_entries: int = 10
    log_file: str = "archive_overlap.log"

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.parallel_workers < 1:
            errors.append("parallel_workers must be >= 1")

        if self.top_entries < 0:
            errors.append("top_entries must be >= 0")

        for source_dir in self.source_dirs:
            if not Path(source_dir).is_dir():
                errors.append(f"Source directory does not exist: {source_dir}")

        for archive_path in self.archive_paths:
            if not Path(archive_path).is_file():
                errors.append(f"Archive does not exist: {archive_path}")

        return errors
