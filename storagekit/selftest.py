"""Self-test suite that exercises a file system end to end."""

from __future__ import annotations

import argparse
import tempfile
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .base import FileSystem, StorageFile
from .localfs import DirectoryFileSystem

__all__ = ["SuiteResult", "run_suite", "main"]

SD_TEST_FILE = "/test_sd.txt"
LFS_TEST_FILE = "/test_littlefs.txt"
TEST_CONTENT = "To jest test zapisu i odczytu.\n"
APPENDED_LINE = "Appended line.\n"

_ARTIFACT_FILES = ("test_sd.txt", "test_littlefs.txt")
_ARTIFACT_DIR = "a"
_NESTED_PATH = "/a/b/c/nested.txt"
_NESTED_CLEANUP = (_NESTED_PATH, "/a/b/c", "/a/b", "/a")
_READ_LIMIT = 255
_TIMESTAMP_WINDOW = 300
_FAT_RESOLUTION_DELAY = 2.1


@dataclass
class SuiteResult:
    """Outcome of one suite run: counters and the log it produced."""

    name: str
    passed: int = 0
    total: int = 0
    log: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every step that ran has passed."""
        return self.passed == self.total


class _CheckFailed(Exception):
    """A suite step did not meet its expectation."""


class _Suite:
    def __init__(self, name: str, fs: FileSystem, test_file: str, content: str):
        self.fs = fs
        self.test_file = test_file
        self.content = content
        self.result = SuiteResult(name)

    # ---- logging ----
    def _emit(self, tag: str, msg: str) -> None:
        self.result.log.append(f"[{tag}][{self.result.name}] {msg}")

    def _run(self, msg: str) -> None:
        self._emit("RUN", msg)

    def _info(self, msg: str) -> None:
        self._emit("INFO", msg)

    def _ok(self, msg: str) -> None:
        self._emit("OK", msg)

    def _debug(self, msg: str) -> None:
        self._emit("DEBUG", msg)

    def _open(self, opener: Callable[[str], StorageFile], path: str, what: str) -> StorageFile:
        try:
            return opener(path)
        except OSError as exc:
            raise _CheckFailed(f"could not open file {what}: {exc}") from exc

    def _quiet_remove(self, path: str) -> None:
        try:
            self.fs.remove(path)
        except OSError:
            pass

    # ---- steps ----
    def begin(self) -> None:
        self._run("Initialising file system (begin)")
        try:
            self.fs.begin()
        except OSError as exc:
            raise _CheckFailed(f"begin() -> initialisation error: {exc}") from exc
        self._ok("begin() -> OK")
        self.preclean()

    def preclean(self) -> None:
        self._run("Pre-clean (list_dir + selective remove)")
        try:
            entries = self.fs.list_dir("/")
        except OSError:
            entries = []
        for name, _size in entries:
            if name in _ARTIFACT_FILES:
                self._quiet_remove("/" + name)
            if name == _ARTIFACT_DIR:
                self._quiet_remove("/" + _ARTIFACT_DIR)
        self._ok("Pre-clean done")

    def write(self) -> None:
        self._run("Writing file (open_write/write)")
        data = self.content.encode("utf-8")
        with self._open(self.fs.open_write, self.test_file, "for writing") as f:
            written = f.write(data)
        self._debug(f"write: {written}/{len(data)} B")
        if written != len(data):
            raise _CheckFailed("fewer bytes written than expected")
        self._ok("Write completed")

    def check_timestamps(self) -> None:
        self._run("Checking timestamps (created/modified)")
        now = int(time.time())
        created = self.fs.created_timestamp(self.test_file)
        modified = self.fs.modified_timestamp(self.test_file)
        self._debug(f"ts created={created} modified={modified} now={now}")
        if created == 0 and modified == 0:
            self._info("[SKIP] Timestamps not supported")
            return
        if created == 0 or modified == 0:
            raise _CheckFailed("missing timestamps (0)")
        if not (now - _TIMESTAMP_WINDOW <= created <= now + _TIMESTAMP_WINDOW):
            raise _CheckFailed("created outside the time window")
        if modified < created:
            raise _CheckFailed("modified < created")
        self._ok("Timestamps OK")

    def read_and_validate(self) -> None:
        self._run("Reading and validating file (open_read/read)")
        with self._open(self.fs.open_read, self.test_file, "for reading") as f:
            size = f.size()
            self._debug(f"file size: {size} B")
            data = f.read(min(size, _READ_LIMIT))
        text = data.decode("utf-8", errors="replace")
        self._debug(f"read: {len(data)} B")
        self._debug(f"content: {text}")
        if text != self.content:
            raise _CheckFailed("data differs from what was expected")
        self._ok("Content validation OK")

    def exists_and_size(self) -> None:
        self._run("Checking that the file exists (exists)")
        if not self.fs.exists(self.test_file):
            raise _CheckFailed("file does not exist")
        with self._open(self.fs.open_read, self.test_file, "for reading (size)") as f:
            self._info(f"Size: {f.size()} B")
        self._ok("exists/size OK")

    def append_line(self) -> None:
        self._run("Appending a line (open_append/write)")
        data = APPENDED_LINE.encode("utf-8")
        with self._open(self.fs.open_append, self.test_file, "for appending") as f:
            written = f.write(data)
        self._debug(f"append: {written}/{len(data)} B")
        if written != len(data):
            raise _CheckFailed("fewer bytes appended than expected")
        self._ok("Append OK")

    def timestamps_after_append(self) -> None:
        self._run("Verifying timestamps after append")
        c1 = self.fs.created_timestamp(self.test_file)
        m1 = self.fs.modified_timestamp(self.test_file)
        if c1 == 0 and m1 == 0:
            self._info("[SKIP] Timestamps not supported")
            return
        time.sleep(_FAT_RESOLUTION_DELAY)
        with self._open(self.fs.open_append, self.test_file, "for appending again") as f:
            f.write(b"x")
        c2 = self.fs.created_timestamp(self.test_file)
        m2 = self.fs.modified_timestamp(self.test_file)
        if c2 != c1:
            raise _CheckFailed("created changed after append")
        if m2 < m1 + 2:
            raise _CheckFailed("modified did not increase (FAT resolution is 2 s)")
        self._ok("Append changed modified, created unchanged")

    def list_root(self) -> None:
        self._run("Listing directory / (list_dir)")
        try:
            entries = self.fs.list_dir("/")
        except OSError:
            entries = []
        for name, size in entries:
            self._emit("LIST", f"{name} ({size} B)")
        self._ok("list_dir finished")

    def nested_write_and_cleanup(self) -> None:
        self._run("Nested directories test (open_write)")
        with self._open(
            self.fs.open_write, _NESTED_PATH, "in nested directories"
        ) as f:
            f.write(b"Nested directories test\n")
        self._ok("Created file in /a/b/c")
        for path in _NESTED_CLEANUP:
            self._quiet_remove(path)
        self._ok("Removed file and directories /a/b/c")

    def remove_file(self) -> None:
        self._run("Removing file (remove)")
        try:
            self.fs.remove(self.test_file)
        except OSError as exc:
            raise _CheckFailed(f"could not remove the file: {exc}") from exc
        self._ok("File removed")

    # ---- driver ----
    def run(self) -> SuiteResult:
        steps = (
            self.begin,
            self.write,
            self.check_timestamps,
            self.read_and_validate,
            self.exists_and_size,
            self.append_line,
            self.timestamps_after_append,
            self.list_root,
            self.nested_write_and_cleanup,
            self.remove_file,
        )
        result = self.result
        self._info("--- START TEST SUITE ---")
        for step in steps:
            result.total += 1
            try:
                step()
            except _CheckFailed as exc:
                self._emit("FAIL", str(exc))
                break
            except OSError as exc:
                self._emit("FAIL", f"unexpected error: {exc}")
                break
            result.passed += 1
        self._emit("SUMMARY", f"PASSED {result.passed}/{result.total}")
        self._info("--- END TEST SUITE ---")
        return result


def run_suite(name: str, fs: FileSystem, test_file: str, content: str) -> SuiteResult:
    """Run the full suite against ``fs``, stopping at the first failed step."""
    return _Suite(name, fs, test_file, content).run()


def _run_all(root: Path) -> bool:
    print("================ RUN ALL TESTS ================")
    suites = (
        ("SD", DirectoryFileSystem(root / "sd", timestamps=True), SD_TEST_FILE),
        ("LittleFS", DirectoryFileSystem(root / "littlefs", timestamps=False), LFS_TEST_FILE),
    )
    all_ok = True
    for name, fs, test_file in suites:
        result = run_suite(name, fs, test_file, TEST_CONTENT)
        for line in result.log:
            print(line)
        all_ok = all_ok and result.ok
    print(f"[RESULT] Overall result: {'SUCCESS' if all_ok else 'FAILURE'}")
    print("===============================================")
    return all_ok


def main(argv: Sequence[str] | None = None) -> int:
    """Run the suite against directory-backed file systems; return the exit code."""
    parser = argparse.ArgumentParser(
        prog="storagekit-selftest",
        description="Exercise the storage file systems end to end.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        help="directory to hold the file systems (a temporary one by default)",
    )
    args = parser.parse_args(argv)

    if args.root is not None:
        ok = _run_all(Path(args.root))
    else:
        with tempfile.TemporaryDirectory() as tmp:
            ok = _run_all(Path(tmp))
    return 0 if ok else 1