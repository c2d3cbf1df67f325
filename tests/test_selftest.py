import errno
import os

import pytest

from storagekit.localfs import DirectoryFileSystem
from storagekit.selftest import SuiteResult, main, run_suite

CONTENT = "To jest test zapisu i odczytu.\n"


class _NoRemoveFileSystem(DirectoryFileSystem):
    def remove(self, path):
        raise PermissionError(errno.EPERM, os.strerror(errno.EPERM), path)


def test_suite_passes_without_timestamps(tmp_path):
    fs = DirectoryFileSystem(tmp_path / "lfs", timestamps=False)
    result = run_suite("LittleFS", fs, "/test_littlefs.txt", CONTENT)
    assert result.ok
    assert result.passed == result.total == 10
    assert not fs.exists("/test_littlefs.txt")
    assert not fs.exists("/a")
    assert any("[SKIP] Timestamps not supported" in line for line in result.log)


def test_suite_passes_with_timestamps(tmp_path):
    fs = DirectoryFileSystem(tmp_path / "sd", timestamps=True)
    result = run_suite("SD", fs, "/test_sd.txt", CONTENT)
    assert result.ok
    assert result.passed == result.total
    assert not any(line.startswith("[FAIL]") for line in result.log)


def test_log_frames_and_summary(tmp_path):
    fs = DirectoryFileSystem(tmp_path, timestamps=False)
    result = run_suite("X", fs, "/test_littlefs.txt", CONTENT)
    assert result.log[0] == "[INFO][X] --- START TEST SUITE ---"
    assert result.log[-1] == "[INFO][X] --- END TEST SUITE ---"
    assert f"[SUMMARY][X] PASSED {result.passed}/{result.total}" in result.log


def test_preclean_removes_only_artifacts(tmp_path):
    fs = DirectoryFileSystem(tmp_path, timestamps=False)
    fs.begin()
    (tmp_path / "a" / "x").mkdir(parents=True)
    (tmp_path / "test_sd.txt").write_text("old")
    (tmp_path / "keep.txt").write_text("keep")
    result = run_suite("LittleFS", fs, "/test_littlefs.txt", CONTENT)
    assert result.ok
    assert (tmp_path / "keep.txt").read_text() == "keep"
    assert not (tmp_path / "test_sd.txt").exists()
    assert not (tmp_path / "a").exists()


def test_begin_failure_stops_suite(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    result = run_suite("SD", DirectoryFileSystem(blocker), "/test_sd.txt", CONTENT)
    assert isinstance(result, SuiteResult)
    assert (result.passed, result.total) == (0, 1)
    assert not result.ok
    assert any(line.startswith("[FAIL][SD]") for line in result.log)


def test_remove_failure_is_last_step(tmp_path):
    fs = _NoRemoveFileSystem(tmp_path, timestamps=False)
    result = run_suite("LittleFS", fs, "/test_littlefs.txt", CONTENT)
    assert not result.ok
    assert result.total == 10
    assert result.passed == result.total - 1
    assert (tmp_path / "test_littlefs.txt").exists()


def test_written_content_read_back_with_append(tmp_path):
    fs = _NoRemoveFileSystem(tmp_path, timestamps=False)
    run_suite("LittleFS", fs, "/test_littlefs.txt", CONTENT)
    text = (tmp_path / "test_littlefs.txt").read_text(encoding="utf-8")
    assert text.startswith(CONTENT)
    assert len(text) > len(CONTENT)


@pytest.mark.parametrize("name", ["SD", "LittleFS"])
def test_list_entries_tagged_with_suite_name(tmp_path, name):
    fs = DirectoryFileSystem(tmp_path, timestamps=False)
    result = run_suite(name, fs, "/test_littlefs.txt", CONTENT)
    listed = [line for line in result.log if line.startswith("[LIST]")]
    assert listed
    assert all(line.startswith(f"[LIST][{name}] ") for line in listed)


def test_main_succeeds_in_directory(tmp_path, capsys):
    code = main([str(tmp_path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUCCESS" in out
    assert "[SUMMARY][SD]" in out
    assert "[SUMMARY][LittleFS]" in out


def test_main_fails_when_root_is_file(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    code = main([str(blocker)])
    out = capsys.readouterr().out
    assert code == 1
    assert "FAILURE" in out