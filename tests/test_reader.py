"""
Tests for overlap.reader module.
"""
import io
import pytest
import tarfile
import warnings
import zipfile
from unittest.mock import patch, MagicMock
from overlap.reader import ArchiveMetadataReader
from overlap.errors import ArchiveReadError, UnsupportedArchiveError


class TestIsArchive:
    """Tests for ArchiveMetadataReader.is_archive."""

    def test_is_archive_zip(self):
        assert ArchiveMetadataReader.is_archive("file.zip") is True
        assert ArchiveMetadataReader.is_archive("/path/to/file.zip") is True

    def test_is_archive_tar_variants(self):
        assert ArchiveMetadataReader.is_archive("backup.tar") is True
        assert ArchiveMetadataReader.is_archive("archive.tar.gz") is True
        assert ArchiveMetadataReader.is_archive("archive.tgz") is True
        assert ArchiveMetadataReader.is_archive("archive.tar.xz") is True

    def test_is_archive_other(self):
        assert ArchiveMetadataReader.is_archive("archive.7z") is True
        assert ArchiveMetadataReader.is_archive("compressed.rar") is True
        assert ArchiveMetadataReader.is_archive("app.jar") is True

    def test_is_archive_not_archive(self):
        assert ArchiveMetadataReader.is_archive("file.txt") is False
        assert ArchiveMetadataReader.is_archive("image.png") is False

    def test_is_archive_case_insensitive(self):
        assert ArchiveMetadataReader.is_archive("FILE.ZIP") is True
        assert ArchiveMetadataReader.is_archive("Archive.TAR.GZ") is True


class TestReadZip:
    """Tests for ZIP metadata reading."""

    def test_stored_sizes(self, make_zip):
        zip_path = make_zip("test.zip", {"hello.txt": "Hello World", "dir/a.bin": b"\x00" * 100})
        entries = ArchiveMetadataReader().read_entries(str(zip_path))
        by_name = {e.raw_name: e for e in entries}
        assert by_name["hello.txt"].stored_size == 11
        assert by_name["dir/a.bin"].stored_size == 100

    def test_compressed_size_used(self, tmp_path):
        """The stored (compressed) size is reported, not the payload size."""
        zip_path = tmp_path / "deflated.zip"
        with zipfile.ZipFile(zip_path, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("zeros.bin", b"\x00" * 100_000)
        entries = ArchiveMetadataReader().read_entries(str(zip_path))
        assert len(entries) == 1
        assert 0 < entries[0].stored_size < 100_000

    def test_directory_entries(self, tmp_path):
        zip_path = tmp_path / "dirs.zip"
        with zipfile.ZipFile(zip_path, 'w') as zf:
            zf.writestr("docs/", "")
            zf.writestr("docs/a.txt", "a")
        entries = ArchiveMetadataReader().read_entries(str(zip_path))
        assert [(e.raw_name, e.stored_size) for e in entries] == [("docs/", 0), ("docs/a.txt", 1)]

    def test_duplicate_names_listed(self, tmp_path):
        zip_path = tmp_path / "dupes.zip"
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            with zipfile.ZipFile(zip_path, 'w') as zf:
                zf.writestr("a/b.txt", "one")
                zf.writestr("a/b.txt", "two")
        entries = ArchiveMetadataReader().read_entries(str(zip_path))
        assert [e.raw_name for e in entries] == ["a/b.txt", "a/b.txt"]

    def test_empty_zip(self, make_zip):
        zip_path = make_zip("empty.zip", {})
        assert ArchiveMetadataReader().read_entries(str(zip_path)) == []

    def test_corrupt_zip(self, tmp_path):
        bad = tmp_path / "bad.zip"
        bad.write_bytes(b"definitely not a zip")
        with patch("overlap.reader.HAS_LIBARCHIVE", False):
            with pytest.raises(ArchiveReadError) as exc_info:
                ArchiveMetadataReader().read_entries(str(bad))
        assert exc_info.value.archive == str(bad)

    def test_missing_file(self, tmp_path):
        with patch("overlap.reader.HAS_LIBARCHIVE", False):
            with pytest.raises(ArchiveReadError):
                ArchiveMetadataReader().read_entries(str(tmp_path / "gone.zip"))


class TestReadTar:
    """Tests for TAR metadata reading."""

    def _add(self, tf, name, data):
        info = tarfile.TarInfo(name=name)
        info.size = len(data)
        tf.addfile(info, io.BytesIO(data))

    def test_tar_sizes(self, tmp_path):
        tar_path = tmp_path / "test.tar"
        with tarfile.open(tar_path, 'w') as tf:
            self._add(tf, "x", b"0123456789")
            self._add(tf, "sub/y", b"abc")
        entries = ArchiveMetadataReader().read_entries(str(tar_path))
        assert {(e.raw_name, e.stored_size) for e in entries} == {("x", 10), ("sub/y", 3)}

    def test_tar_gz(self, tmp_path):
        tar_path = tmp_path / "test.tar.gz"
        with tarfile.open(tar_path, 'w:gz') as tf:
            self._add(tf, "x", b"hello")
        entries = ArchiveMetadataReader().read_entries(str(tar_path))
        assert [(e.raw_name, e.stored_size) for e in entries] == [("x", 5)]

    def test_snapshot_root_member(self, tmp_path):
        snap = tmp_path / "snap"
        snap.mkdir()
        (snap / "a.txt").write_bytes(b"0123456789")
        tar_path = tmp_path / "s1.tar"
        with tarfile.open(tar_path, 'w') as tf:
            tf.add(snap, arcname=".")
        entries = ArchiveMetadataReader().read_entries(str(tar_path))
        assert [(e.raw_name, e.stored_size) for e in entries] == [(".", 0), ("./a.txt", 10)]

    def test_corrupt_tar(self, tmp_path):
        bad = tmp_path / "bad.tar"
        bad.write_bytes(b"\x01" * 10)
        with patch("overlap.reader.HAS_LIBARCHIVE", False):
            with pytest.raises(ArchiveReadError):
                ArchiveMetadataReader().read_entries(str(bad))


class TestOptionalFormats:
    """Tests for formats backed by optional libraries."""

    def test_unsupported_without_libraries(self, tmp_path):
        iso = tmp_path / "disk.iso"
        iso.write_bytes(b"")
        with patch("overlap.reader.HAS_LIBARCHIVE", False):
            with pytest.raises(UnsupportedArchiveError):
                ArchiveMetadataReader().read_entries(str(iso))

    def test_7z_uses_compressed_size(self, tmp_path):
        info_solid = MagicMock(filename="a.txt", compressed=None, uncompressed=50, is_directory=False)
        info_packed = MagicMock(filename="b.txt", compressed=12, uncompressed=40, is_directory=False)
        archive = MagicMock()
        archive.__enter__.return_value.list.return_value = [info_solid, info_packed]
        fake_py7zr = MagicMock()
        fake_py7zr.SevenZipFile.return_value = archive

        with patch("overlap.reader.HAS_7Z", True), \
                patch("overlap.reader.py7zr", fake_py7zr, create=True):
            entries = ArchiveMetadataReader().read_entries(str(tmp_path / "test.7z"))

        assert [(e.raw_name, e.stored_size) for e in entries] == [("a.txt", 50), ("b.txt", 12)]

    def test_7z_failure_wrapped(self, tmp_path):
        fake_py7zr = MagicMock()
        fake_py7zr.SevenZipFile.side_effect = ValueError("bad header")
        with patch("overlap.reader.HAS_7Z", True), \
                patch("overlap.reader.HAS_LIBARCHIVE", False), \
                patch("overlap.reader.py7zr", fake_py7zr, create=True):
            with pytest.raises(ArchiveReadError) as exc_info:
                ArchiveMetadataReader().read_entries(str(tmp_path / "test.7z"))
        assert "bad header" in str(exc_info.value)

    def test_libarchive_fallback(self, tmp_path):
        entry = MagicMock(pathname="inside.txt", size=9, isdir=False)
        reader_ctx = MagicMock()
        reader_ctx.__enter__.return_value = [entry]
        fake_libarchive = MagicMock()
        fake_libarchive.file_reader.return_value = reader_ctx

        with patch("overlap.reader.HAS_LIBARCHIVE", True), \
                patch("overlap.reader.libarchive", fake_libarchive, create=True):
            entries = ArchiveMetadataReader().read_entries(str(tmp_path / "disk.iso"))

        assert [(e.raw_name, e.stored_size) for e in entries] == [("inside.txt", 9)]
