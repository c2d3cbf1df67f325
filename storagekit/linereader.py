"""Line-by-line reading of text files and simple key/value parsing."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

__all__ = ["LineReader", "parse_kv"]

_WHITESPACE = " \t\n\v\f\r"


class _Readable(Protocol):
    def read(self, size: int) -> bytes: ...


class LineReader:
    """Reads LF, CRLF or CR terminated lines from a binary reader.

    Lines longer than ``buf_cap`` bytes are truncated; the rest of the line
    is consumed and dropped.
    """

    def __init__(self, file: _Readable, buf_cap: int = 256, encoding: str = "utf-8"):
        self._file = file
        self._buf_cap = buf_cap
        self._encoding = encoding
        self._pending = b""

    def _next_byte(self) -> bytes:
        if self._pending:
            byte, self._pending = self._pending, b""
            return byte
        return self._file.read(1)

    def read_line(self, keep_newline: bool = False) -> str | None:
        """Return the next line, or ``None`` at end of file."""
        out = bytearray()
        while True:
            c = self._next_byte()
            if len(c) != 1:
                break
            if c == b"\r":
                following = self._next_byte()
                if following and following != b"\n":
                    self._pending = following
                return self._finish(out, keep_newline)
            if c == b"\n":
                return self._finish(out, keep_newline)
            if len(out) < self._buf_cap:
                out += c
        return self._decode(out) if out else None

    def _finish(self, out: bytearray, keep_newline: bool) -> str:
        text = self._decode(out)
        return text + "\n" if keep_newline else text

    def _decode(self, data: bytearray) -> str:
        return data.decode(self._encoding, errors="replace")

    def __iter__(self) -> Iterator[str]:
        while (line := self.read_line()) is not None:
            yield line


def _trim(s: str) -> str:
    return s.strip(_WHITESPACE)


def parse_kv(
    line: str,
    comment_prefixes: str = ";#",
    seps: str = " \t=",
    lowercase_key: bool = True,
) -> tuple[str, str] | None:
    """Split ``name <sep> value`` into a pair.

    Returns ``None`` for blank lines, full-line comments and lines without a
    name. A comment character inside the value cuts the value there.
    """
    line = _trim(line)
    if not line:
        return None
    if any(line.startswith(p) for p in comment_prefixes):
        return None

    positions = [k for k in (line.find(s) for s in seps) if k >= 0]
    if not positions:
        name, value = line, ""
    else:
        idx = min(positions)
        name = line[:idx]
        value = line[idx:].lstrip(seps)

    name = _trim(name)
    value = _trim(value)
    if lowercase_key:
        name = name.lower()
    for prefix in comment_prefixes:
        cpos = value.find(prefix)
        if cpos >= 0:
            value = _trim(value[:cpos])
            break
    return (name, value) if name else None