"""
Archive metadata reading for multiple formats.

Only the central directory / member headers are read; entry payloads are
never decompressed.
"""
import zipfile
import tarfile
from pathlib import Path
from typing import Callable, List
import logging

from .models import ArchiveEntry
from .errors import ArchiveReadError, UnsupportedArchiveError

logger = logging.getLogger(__name__)

# Try importing optional archive libraries
try:
    import py7zr
    HAS_7Z = True
except ImportError:
    HAS_7Z = False
    logger.warning("py7zr not available - 7z support disabled")

try:
    import rarfile
    HAS_RAR = True
except ImportError:
    HAS_RAR = False
    logger.warning("rarfile not available - RAR support disabled")

try:
    import libarchive
    HAS_LIBARCHIVE = True
except (ImportError, OSError, AttributeError):
    # libarchive-c imports but fails to bind when the C library is missing
    HAS_LIBARCHIVE = False
    logger.warning("libarchive not available - extended format support disabled")


ZIP_EXTENSIONS = ('.zip', '.zipx', '.jar', '.war', '.ear')
TAR_EXTENSIONS = ('.tar', '.tar.gz', '.tgz', '.tar.bz2', '.tbz2', '.tar.xz', '.txz')


class ArchiveMetadataReader:
    """Reads (name, stored size) records from archives."""

    # Archive extensions we can list
    ARCHIVE_EXTENSIONS = {
        '.zip', '.zipx', '.jar', '.war', '.ear',
        '.7z',
        '.rar',
        '.tar', '.tar.gz', '.tgz', '.tar.bz2', '.tbz2', '.tar.xz', '.txz', '.tar.zst', '.tzst',

        # libarchive-only formats
        '.iso', '.cpio', '.xar', '.cab', '.lzh', '.lha',
    }

    @classmethod
    def is_archive(cls, filename: str) -> bool:
        """Check if a file is a recognized archive format."""
        name = Path(filename).name.lower()
        return any(name.endswith(ext) for ext in cls.ARCHIVE_EXTENSIONS)

    def read_entries(self, archive_path: str) -> List[ArchiveEntry]:
        """
        Read every entry's metadata from an archive.

        Args:
            archive_path: Path to archive file

        Returns:
            ArchiveEntry records in the archive's own order

        Raises:
            UnsupportedArchiveError: no reader handles this format
            ArchiveReadError: the archive cannot be opened or parsed
        """
        handlers = self._handlers_for(archive_path)
        if not handlers:
            raise UnsupportedArchiveError(archive_path, "no reader available for this format")

        last_error = None
        for handler in handlers:
            try:
                entries = handler(archive_path)
                logger.debug(f"{handler.__name__} listed {len(entries)} entries in {archive_path}")
                return entries
            except ArchiveReadError as e:
                logger.debug(f"Handler {handler.__name__} failed for {archive_path}: {e.reason}")
                last_error = e

        raise last_error

    def _handlers_for(self, archive_path: str) -> List[Callable[[str], List[ArchiveEntry]]]:
        name = Path(archive_path).name.lower()
        handlers = []

        if name.endswith(ZIP_EXTENSIONS):
            handlers.append(self._read_zip)
        elif name.endswith('.7z') and HAS_7Z:
            handlers.append(self._read_7z)
        elif name.endswith('.rar') and HAS_RAR:
            handlers.append(self._read_rar)
        elif name.endswith(TAR_EXTENSIONS):
            handlers.append(self._read_tar)

        # libarchive covers everything else, and is the fallback for the above
        if HAS_LIBARCHIVE:
            handlers.append(self._read_libarchive)

        return handlers

    def _read_zip(self, archive_path: str) -> List[ArchiveEntry]:
        """List ZIP archive."""
        try:
            with zipfile.ZipFile(archive_path, 'r') as zf:
                return [
                    ArchiveEntry(info.filename, info.compress_size)
                    for info in zf.infolist()
                ]
        except (zipfile.BadZipFile, OSError) as e:
            raise ArchiveReadError(archive_path, str(e)) from e

    def _read_tar(self, archive_path: str) -> List[ArchiveEntry]:
        """List TAR archive (including compressed variants)."""
        # Members are stored uncompressed inside the tar stream
        try:
            with tarfile.open(archive_path, 'r:*') as tf:
                return [
                    ArchiveEntry(member.name, member.size)
                    for member in tf.getmembers()
                ]
        except (tarfile.TarError, OSError, EOFError) as e:
            raise ArchiveReadError(archive_path, str(e)) from e

    def _read_7z(self, archive_path: str) -> List[ArchiveEntry]:
        """List 7z archive."""
        try:
            with py7zr.SevenZipFile(archive_path, 'r') as szf:
                entries = []
                for info in szf.list():
                    # Solid blocks have no per-file compressed size
                    size = info.compressed if info.compressed is not None else info.uncompressed
                    entries.append(ArchiveEntry(info.filename, size or 0))
                return entries
        except Exception as e:
            raise ArchiveReadError(archive_path, str(e)) from e

    def _read_rar(self, archive_path: str) -> List[ArchiveEntry]:
        """List RAR archive."""
        try:
            with rarfile.RarFile(archive_path, 'r') as rf:
                return [
                    ArchiveEntry(info.filename, info.compress_size)
                    for info in rf.infolist()
                ]
        except (rarfile.Error, OSError) as e:
            raise ArchiveReadError(archive_path, str(e)) from e

    def _read_libarchive(self, archive_path: str) -> List[ArchiveEntry]:
        """List archive using libarchive (fallback for various formats)."""
        # libarchive exposes no per-entry compressed size
        try:
            with libarchive.file_reader(archive_path) as archive:
                return [
                    ArchiveEntry(entry.pathname, entry.size or 0)
                    for entry in archive
                ]
        except Exception as e:
            raise ArchiveReadError(archive_path, str(e)) from e
