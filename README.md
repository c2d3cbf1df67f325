# storagekit

One interface for file storage, a directory-backed implementation of it,
and the helpers that usually come along:

- **FAT date/time conversion** – turn 16-bit FAT date and time words into
  Unix timestamps and back (`storagekit.fattime`).
- **Path handling** – normalise paths (`.`, `..`, repeated slashes) and list
  the parent directories a path needs (`storagekit.paths`).
- **Line reading and `key value` parsing** – read text line by line and
  split configuration lines into a name and a value (`storagekit.linereader`).
- **A file-system interface** – the abstract `FileSystem`, the `StorageFile`
  wrapper and the `OpenMode` enum (`storagekit.base`).
- **A directory-backed file system** – `DirectoryFileSystem` keeps its files
  under a root directory on the host (`storagekit.localfs`).
- **A self-test suite** – `run_suite` exercises any `FileSystem` end to end,
  and the `storagekit-selftest` command runs it (`storagekit.selftest`).

The package has no dependencies outside the standard library.

## Installation

```
pip install storagekit
```

## FAT timestamps

A FAT date packs the years since 1980, the month and the day; a FAT time
packs hours, minutes and seconds divided by two. Conversion uses the local
time zone.

```python
from storagekit.fattime import fat_datetime_to_unix, unix_to_fat_datetime

fat_date = ((2023 - 1980) << 9) | (3 << 5) | 17      # 2023-03-17
fat_time = (12 << 11) | (34 << 5) | (56 // 2)        # 12:34:56

ts = fat_datetime_to_unix(fat_date, fat_time)
assert unix_to_fat_datetime(ts) == (fat_date, fat_time)
```

A date and time that are both zero stand for "no timestamp" and convert to
`0`; a date that cannot be represented also gives `0`, and a timestamp that
cannot be converted gives `(0, 0)`.

`SystemTimeProvider().get_fat_time()` returns the current system time as a
`(fat_date, fat_time)` pair. Subclass the abstract `TimeProvider` and
implement `get_fat_time()` to supply time from somewhere else.

## Paths

```python
from storagekit.paths import normalize_path, parent_dirs

normalize_path("//a/./b/../c")   # "/a/c"
normalize_path("/..")            # "/"
normalize_path("")               # ""
parent_dirs("/a/b/c/file.txt")   # ["/a", "/a/b", "/a/b/c"]
```

`..` never climbs above the start of a path. `parent_dirs` leaves out both
the root and the path itself.

## Reading configuration files

```python
from storagekit.linereader import LineReader, parse_kv
```

`LineReader(file, buf_cap=256, encoding="utf-8")` reads from any object with
a binary `read(size)` method, such as a `StorageFile`. `read_line()` returns
the next line without its ending (LF, CRLF or a lone CR), or `None` at the
end of the file; `read_line(keep_newline=True)` appends `"\n"` to lines that
had an ending. Lines longer than `buf_cap` bytes are cut to that length.
Iterating over a reader yields every line, blank ones included.

`parse_kv(line, comment_prefixes=";#", seps=" \t=", lowercase_key=True)`
trims the line and returns `None` for blank lines and full-line comments.
Otherwise it splits the name from the value at the first separator, skips
any further separators, lower-cases the name, cuts the value at the first
comment character and returns `(name, value)`; a line without a name gives
`None`. Reading

```
; application settings
host example.com
port 8080
volume = 75 ; default
```

and passing each line to `parse_kv` gives `("host", "example.com")`,
`("port", "8080")` and `("volume", "75")`.

```python
with fs.open_read("/config.txt") as f:
    settings = dict(filter(None, map(parse_kv, LineReader(f))))
```

## Files and file systems

`OpenMode` has the members `READ`, `WRITE_TRUNCATE`, `WRITE_APPEND` and
`READ_WRITE`; its `writes` property is true for every mode except `READ`.

```python
from storagekit.base import OpenMode
from storagekit.localfs import DirectoryFileSystem

fs = DirectoryFileSystem("/tmp/storage", timestamps=True)
fs.begin()                                       # creates the root directory

with fs.open_write("/logs/today.txt") as f:      # parent dirs are created
    f.write(b"first line\n")

with fs.open_append("/logs/today.txt") as f:
    f.write(b"second line\n")

with fs.open_read("/logs/today.txt") as f:
    print(f.read(f.size()))

print(fs.list_dir("/logs"))                      # [("today.txt", 23)]

fs.created_timestamp("/logs/today.txt")
fs.modified_timestamp("/logs/today.txt")

fs.remove("/logs")                               # recursive
```

A `StorageFile` offers `read(size=-1)`, `write(data)` (returning the number
of bytes written), `flush()`, `seek(pos)`, `position()`, `size()`,
`is_open()` and `close()`, and closes itself when used in a `with` block.
`seek` raises `ValueError` for a negative position.

`DirectoryFileSystem` behaviour:

- Every path is normalised first, so `..` cannot leave the root.
- `list_dir(path="/")` returns `(name, size)` pairs sorted by name, with
  size `0` for directories; it raises `FileNotFoundError` or
  `NotADirectoryError` when the path is not a directory.
- `exists(path)` is false for an empty path.
- `remove(path)` deletes a file or a whole directory tree and raises
  `FileNotFoundError` when nothing is there. Removing `/` empties the root
  and then raises `PermissionError`.
- `mkdir(path)` creates the directory and any missing parents; `/` always
  succeeds, and an existing directory raises `FileExistsError`.
- `open(path, mode)` takes any `OpenMode`; writing modes create missing
  parent directories. `open_write(path, overwrite=False)` appends instead
  of truncating. Opening a directory raises `IsADirectoryError`, and an
  empty path raises `FileNotFoundError`.
- With `timestamps=True`, creation and modification times are rounded
  through the FAT format (2-second resolution); with `timestamps=False`, and
  for paths that do not exist, both are `0`.

## Self-test

```
storagekit-selftest [ROOT]
```

The command runs the suite twice under `ROOT` (a temporary directory when
left out): once as `SD` on a file system with timestamps, once as
`LittleFS` on one without. Each run initialises the file system, removes
leftovers of earlier runs, writes, checks timestamps, reads back and
compares, checks existence and size, appends, checks that an append changes
the modification time but not the creation time (this waits a little over
two seconds), lists `/`, writes and removes `/a/b/c/nested.txt`, and
removes the test file. It stops at the first failing step, prints its log
and a `PASSED n/m` summary, and exits with status 0 only when both runs
pass. Timestamp checks are skipped on a file system that reports none.

From Python, `run_suite(name, fs, test_file, content)` runs the same steps
against any `FileSystem` and returns a `SuiteResult` with `name`, `passed`,
`total`, the `log` lines and an `ok` property.

## What it does not do

The only storage back end is `DirectoryFileSystem`, which lives in a host
directory. There is no driver for SD cards, flash partitions or other
devices, and nothing that formats or mounts a medium; other back ends are
written by subclassing `FileSystem`.