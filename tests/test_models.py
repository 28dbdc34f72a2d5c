"""
Tests for overlap.models module.
"""
import pytest
from overlap.models import (
    ArchiveEntry, PerArchiveIndex, PairStat, ArchiveStat, EntrySavings,
    GlobalSavings, SavingsReport, ScanProgress, AppConfig
)


class TestArchiveEntry:
    """Tests for ArchiveEntry dataclass."""

    def test_defaults(self):
        entry = ArchiveEntry("docs/a.txt", 42)
        assert entry.raw_name == "docs/a.txt"
        assert entry.stored_size == 42


class TestPerArchiveIndex:
    """Tests for PerArchiveIndex."""

    def test_size_of_present(self):
        index = PerArchiveIndex("/a.zip", {"x"}, {"x": 7})
        assert index.size_of("x") == 7

    def test_size_of_missing_is_zero(self):
        """A missing size lookup counts as zero rather than failing."""
        index = PerArchiveIndex("/a.zip", {"x", "y"}, {"x": 7})
        assert index.size_of("y") == 0
        assert index.total_size == 7

    def test_name_and_len(self):
        index = PerArchiveIndex("/backups/snap1.zip", {"x", "y"}, {"x": 1, "y": 2})
        assert index.name == "snap1.zip"
        assert len(index) == 2


class TestArchiveStat:
    """Tests for ArchiveStat percentages."""

    def test_percent(self):
        stat = ArchiveStat("/a.zip", total=200, dup=50)
        assert stat.percent == 25.0

    def test_percent_zero_total(self):
        stat = ArchiveStat("/a.zip")
        assert stat.percent == 0.0


class TestGlobalSavings:
    """Tests for GlobalSavings."""

    def test_percent_reduction(self):
        savings = GlobalSavings(total_savable=50, total_bytes=200)
        assert savings.percent_reduction == 25.0

    def test_percent_reduction_empty(self):
        assert GlobalSavings().percent_reduction == 0.0


class TestSavingsReport:
    """Tests for SavingsReport helpers."""

    def test_top_entries(self):
        entries = [EntrySavings(f"e{i}", 2, 10 - i, 1) for i in range(5)]
        report = SavingsReport(archives=[], pairs=[], savings=GlobalSavings(entries=entries))
        assert [e.name for e in report.top_entries(2)] == ["e0", "e1"]
        assert report.top_entries(0) == []
        assert len(report.top_entries(100)) == 5

    def test_pair_stat_is_frozen(self):
        stat = PairStat("a", "b", 1, 2)
        with pytest.raises(AttributeError):
            stat.shared_count = 5


class TestScanProgress:
    """Tests for ScanProgress."""

    def test_progress_pct(self):
        progress = ScanProgress(phase="index", archives_processed=1, total_archives=4)
        assert progress.progress_pct == 25.0

    def test_progress_pct_no_archives(self):
        assert ScanProgress(phase="discovery").progress_pct == 0.0


class TestAppConfig:
    """Tests for AppConfig validation."""

    def test_defaults(self):
        config = AppConfig()
        assert config.source_dirs == []
        assert config.archive_paths == []
        assert config.recursive is True
        assert config.parallel_workers == 1
        assert config.validate() == []

    def test_invalid_workers(self):
        errors = AppConfig(parallel_workers=0).validate()
        assert "parallel_workers must be >= 1" in errors

    def test_invalid_top(self):
        errors = AppConfig(top_entries=-1).validate()
        assert "top_entries must be >= 0" in errors

    def test_missing_source_dir(self, tmp_path):
        errors = AppConfig(source_dirs=[str(tmp_path / "nope")]).validate()
        assert len(errors) == 1
        assert "does not exist" in errors[0]

    def test_missing_archive(self, tmp_path):
        errors = AppConfig(archive_paths=[str(tmp_path / "nope.zip")]).validate()
        assert errors == [f"Archive does not exist: {tmp_path / 'nope.zip'}"]

    def test_existing_paths(self, tmp_path):
        archive = tmp_path / "a.zip"
        archive.write_bytes(b"")
        config = AppConfig(source_dirs=[str(tmp_path)], archive_paths=[str(archive)])
        assert config.validate() == []
