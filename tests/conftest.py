"""
Pytest configuration and fixtures for Archive Overlap Analyzer tests.
"""
import pytest
import sys
import zipfile
from pathlib import Path

# Ensure project root is in path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def sample_config(tmp_path):
    """Create a sample AppConfig for testing."""
    from overlap.models import AppConfig
    return AppConfig(
        source_dirs=[str(tmp_path)],
        log_file=str(tmp_path / "test.log")
    )


@pytest.fixture
def scenario_entries():
    """Three archives: Z1={x:10,y:20}, Z2={x:10,y:5}, Z3={y:20}."""
    return {
        "Z1": [("x", 10), ("y", 20)],
        "Z2": [("x", 10), ("y", 5)],
        "Z3": [("y", 20)],
    }


@pytest.fixture
def scenario_indexes(scenario_entries):
    """PerArchiveIndex list for the three-archive scenario."""
    from overlap.indexer import index_archive
    return [index_archive(archive, entries) for archive, entries in scenario_entries.items()]


@pytest.fixture
def make_zip(tmp_path):
    """Factory writing a stored (uncompressed) ZIP from {name: bytes}."""
    def _make(name, files, directory=None):
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        zip_path = target_dir / name
        with zipfile.ZipFile(zip_path, 'w', compression=zipfile.ZIP_STORED) as zf:
            for entry_name, data in files.items():
                zf.writestr(entry_name, data)
        return zip_path
    return _make
