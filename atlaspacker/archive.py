"""
Archive sources for atlas builds.

An archive enumerates its stored files in a fixed order, reports a content
checksum for each one and hands out the raw bytes on request. Zip files use
the CRC-32 already stored in the central directory; plain folders compute it.
"""

import os
import zipfile
import zlib
from typing import Any, Iterator, List, NamedTuple


class ArchiveEntry(NamedTuple):
    """
    One stored file: enumeration position, '/'-separated path and content checksum.

    `ref` is the archive's own handle for the stored file. Paths need not be
    unique inside a zip, so reads go through `ref` rather than `path`.
    """
    index: int
    path: str
    checksum: int
    ref: Any


class ZipArchive:
    """Reads image files out of a zip archive."""

    def __init__(self, path: str):
        self.path = path
        self._zip = zipfile.ZipFile(path, "r")

    def entries(self) -> Iterator[ArchiveEntry]:
        """Yield every stored file in central directory order."""
        for index, info in enumerate(self._zip.infolist()):
            if info.is_dir():
                continue
            yield ArchiveEntry(index, info.filename, info.CRC, info)

    def read(self, entry: ArchiveEntry) -> bytes:
        return self._zip.read(entry.ref)

    def close(self):
        self._zip.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class DirectoryArchive:
    """Treats a folder tree as an archive, walking files in sorted path order."""

    def __init__(self, path: str):
        if not os.path.isdir(path):
            raise NotADirectoryError(f"Not a directory: {path}")
        self.path = path
        self._paths = self._scan()

    def _scan(self) -> List[str]:
        paths = []
        for root, dirs, files in os.walk(self.path):
            for file in files:
                full_path = os.path.join(root, file)
                paths.append(os.path.relpath(full_path, self.path).replace(os.sep, "/"))
        return sorted(paths)

    def entries(self) -> Iterator[ArchiveEntry]:
        for index, path in enumerate(self._paths):
            yield ArchiveEntry(index, path, zlib.crc32(self._read_path(path)) & 0xFFFFFFFF, path)

    def read(self, entry: ArchiveEntry) -> bytes:
        return self._read_path(entry.ref)

    def _read_path(self, path: str) -> bytes:
        with open(os.path.join(self.path, *path.split("/")), "rb") as f:
            return f.read()

    def close(self):
        # Nothing held open between reads
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def open_archive(path: str):
    """Open `path` as a folder archive if it is a directory, otherwise as a zip file."""
    if os.path.isdir(path):
        return DirectoryArchive(path)
    return ZipArchive(path)
