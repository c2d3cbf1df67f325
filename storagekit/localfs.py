"""File system stored in a directory of the host machine."""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path

from .base import FileSystem, OpenMode, StorageFile
from .fattime import fat_datetime_to_unix, unix_to_fat_datetime
from .paths import normalize_path, parent_dirs

__all__ = ["DirectoryFileSystem"]

_STREAM_MODES = {
    OpenMode.READ: "rb",
    OpenMode.WRITE_TRUNCATE: "wb",
    OpenMode.WRITE_APPEND: "ab",
}


def _fat_rounded(timestamp: float) -> int:
    """Round a timestamp through the FAT date/time format (2 s resolution)."""
    fat_date, fat_time = unix_to_fat_datetime(int(timestamp))
    return fat_datetime_to_unix(fat_date, fat_time)


class DirectoryFileSystem(FileSystem):
    """A file system whose ``/`` is a directory on the host.

    Paths are normalised before use, so ``..`` never leaves the root.
    With ``timestamps`` enabled, creation and modification times are
    reported with FAT resolution; otherwise both are always 0.
    """

    def __init__(self, root: str | os.PathLike[str], timestamps: bool = True):
        self._root = Path(root)
        self._timestamps = timestamps
        self._created: dict[str, float] = {}

    @property
    def root(self) -> Path:
        """The host directory that holds this file system."""
        return self._root

    def _resolve(self, path: str) -> tuple[str, Path]:
        normalized = normalize_path(path)
        if not normalized:
            return normalized, self._root
        return normalized, self._root.joinpath(*[p for p in normalized.split("/") if p])

    def begin(self) -> None:
        if self._root.exists() and not self._root.is_dir():
            raise NotADirectoryError(
                errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(self._root)
            )
        self._root.mkdir(parents=True, exist_ok=True)

    def list_dir(self, path: str = "/") -> list[tuple[str, int]]:
        normalized, target = self._resolve(path or "/")
        if not normalized:
            target = self._root
        if not target.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        if not target.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        entries = []
        with os.scandir(target) as it:
            for entry in it:
                size = 0 if entry.is_dir() else entry.stat().st_size
                entries.append((entry.name, size))
        return sorted(entries)

    def exists(self, path: str) -> bool:
        normalized, target = self._resolve(path)
        return bool(normalized) and target.exists()

    def remove(self, path: str) -> None:
        normalized, target = self._resolve(path)
        if not normalized or not target.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)

        self._forget(normalized)
        if not target.is_dir():
            target.unlink()
            return
        if normalized == "/":
            for child in target.iterdir():
                if child.is_dir():
                    shutil.rmtree(child)
                else:
                    child.unlink()
            raise PermissionError(
                errno.EPERM, "cannot remove the root directory", path
            )
        shutil.rmtree(target)

    def _forget(self, normalized: str) -> None:
        prefix = normalized.rstrip("/") + "/"
        for key in [k for k in self._created if k == normalized or k.startswith(prefix)]:
            del self._created[key]

    def mkdir(self, path: str) -> None:
        normalized, target = self._resolve(path)
        if not normalized or normalized == "/":
            return
        target.mkdir(parents=True)

    def created_timestamp(self, path: str) -> int:
        if not self._timestamps:
            return 0
        normalized, target = self._resolve(path)
        if not normalized:
            return 0
        try:
            st = target.stat()
        except OSError:
            return 0
        created = self._created.get(normalized)
        if created is None:
            created = getattr(st, "st_birthtime", None)
        if created is None:
            created = min(st.st_ctime, st.st_mtime)
        return _fat_rounded(created)

    def modified_timestamp(self, path: str) -> int:
        if not self._timestamps:
            return 0
        normalized, target = self._resolve(path)
        if not normalized:
            return 0
        try:
            st = target.stat()
        except OSError:
            return 0
        return _fat_rounded(st.st_mtime)

    def open(self, path: str, mode: OpenMode) -> StorageFile:
        normalized, target = self._resolve(path)
        if not normalized:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        if target.is_dir():
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)

        existed = target.exists()
        if mode.writes:
            for parent in parent_dirs(normalized):
                _, parent_path = self._resolve(parent)
                if not parent_path.is_dir():
                    parent_path.mkdir()

        if mode is OpenMode.READ_WRITE:
            stream_mode = "r+b" if existed else "w+b"
        else:
            stream_mode = _STREAM_MODES[mode]

        stream = target.open(stream_mode)
        if mode.writes and not existed:
            st = target.stat()
            self._created[normalized] = getattr(st, "st_birthtime", None) or st.st_mtime
        return StorageFile(stream)