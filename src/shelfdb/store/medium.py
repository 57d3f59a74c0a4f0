"""
Byte media for whole-store persistence.

A medium reads and writes one complete blob per location. There is no
streaming or partial I/O: save() hands over every byte at once, load() gets
every byte back at once.

Media:
    - FileMedium: a file on the local filesystem, replaced atomically
    - MemoryMedium: a dict of blobs, for tests and ephemeral stores
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from shelfdb.errors import StorageReadError, StorageWriteError


class ByteMedium(ABC):
    """Abstract base class for blob storage."""

    @abstractmethod
    def read(self, location: str | Path) -> bytes:
        """
        Read the whole blob at location.

        Raises:
            StorageReadError: If the blob is missing or unreadable
        """

    @abstractmethod
    def write(self, location: str | Path, data: bytes) -> None:
        """
        Replace the blob at location.

        Raises:
            StorageWriteError: If the blob could not be written
        """


class FileMedium(ByteMedium):
    """
    Local file storage.

    Writes go to a temporary file in the target directory which is then
    renamed over the target, so readers see either the old blob or the new
    one and a failed write leaves the old file intact.
    """

    def read(self, location: str | Path) -> bytes:
        path = Path(location)
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageReadError(location=str(path), underlying_error=str(e)) from e

    def write(self, location: str | Path, data: bytes) -> None:
        path = Path(location)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(location=str(path), underlying_error=str(e)) from e


class MemoryMedium(ByteMedium):
    """In-process blob storage keyed by location string."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}

    def read(self, location: str | Path) -> bytes:
        key = str(location)
        try:
            return self.blobs[key]
        except KeyError as e:
            raise StorageReadError(location=key, underlying_error="no such blob") from e

    def write(self, location: str | Path, data: bytes) -> None:
        self.blobs[str(location)] = bytes(data)
