"""Abstract file and file-system interfaces shared by storage back ends."""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from enum import Enum
from types import TracebackType
from typing import BinaryIO

__all__ = ["OpenMode", "StorageFile", "FileSystem"]


class OpenMode(Enum):
    """How a file is opened."""

    READ = "read"
    WRITE_TRUNCATE = "write_truncate"
    WRITE_APPEND = "write_append"
    READ_WRITE = "read_write"

    @property
    def writes(self) -> bool:
        """True for every mode that may create or modify the file."""
        return self is not OpenMode.READ


class StorageFile:
    """An open file on a storage back end, wrapping a binary stream."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes; all remaining bytes when ``size`` is negative."""
        return self._stream.read(size)

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        written = self._stream.write(data)
        return len(data) if written is None else written

    def flush(self) -> None:
        """Push buffered writes to the underlying storage."""
        self._stream.flush()

    def seek(self, pos: int) -> int:
        """Move to absolute position ``pos`` and return it.

        Raises ValueError for a negative position.
        """
        if pos < 0:
            raise ValueError(f"negative seek position {pos}")
        return self._stream.seek(pos, io.SEEK_SET)

    def position(self) -> int:
        """Return the current position in the file."""
        return self._stream.tell()

    def size(self) -> int:
        """Return the current size of the file in bytes."""
        if self._stream.closed:
            raise ValueError("I/O operation on closed file")
        self._stream.flush()
        try:
            return os.fstat(self._stream.fileno()).st_size
        except (AttributeError, OSError, io.UnsupportedOperation):
            current = self._stream.tell()
            end = self._stream.seek(0, io.SEEK_END)
            self._stream.seek(current, io.SEEK_SET)
            return end

    def is_open(self) -> bool:
        """Return True while the file has not been closed."""
        return not self._stream.closed

    def close(self) -> None:
        """Close the file; closing twice is harmless."""
        if not self._stream.closed:
            self._stream.close()

    def __enter__(self) -> StorageFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class FileSystem(ABC):
    """A mountable file system holding files and directories."""

    @abstractmethod
    def begin(self) -> None:
        """Prepare the file system for use; raises OSError on failure."""

    @abstractmethod
    def list_dir(self, path: str = "/") -> list[tuple[str, int]]:
        """Return ``(name, size)`` for each entry of the directory at ``path``.

        Raises FileNotFoundError or NotADirectoryError when ``path`` is not
        a directory.
        """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at ``path``."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove a file, or a directory with all its contents.

        Raises FileNotFoundError when nothing exists at ``path``.
        """

    @abstractmethod
    def mkdir(self, path: str) -> None:
        """Create the directory at ``path``; the root always succeeds."""

    @abstractmethod
    def created_timestamp(self, path: str) -> int:
        """Return the creation time as a Unix timestamp, or 0 if unknown."""

    @abstractmethod
    def modified_timestamp(self, path: str) -> int:
        """Return the modification time as a Unix timestamp, or 0 if unknown."""

    @abstractmethod
    def open(self, path: str, mode: OpenMode) -> StorageFile:
        """Open ``path`` in ``mode``; raises OSError when it cannot be opened.

        Writing modes create missing parent directories.
        """

    def open_read(self, path: str) -> StorageFile:
        """Open ``path`` for reading."""
        return self.open(path, OpenMode.READ)

    def open_write(self, path: str, overwrite: bool = True) -> StorageFile:
        """Open ``path`` for writing, truncating it unless ``overwrite`` is False."""
        return self.open(
            path, OpenMode.WRITE_TRUNCATE if overwrite else OpenMode.WRITE_APPEND
        )

    def open_append(self, path: str) -> StorageFile:
        """Open ``path`` for writing at its end."""
        return self.open(path, OpenMode.WRITE_APPEND)