import io

import pytest

from storagekit.linereader import LineReader, parse_kv


def _reader(data, **kwargs):
    return LineReader(io.BytesIO(data), **kwargs)


def test_mixed_line_endings():
    assert list(_reader(b"a\r\nb\rc\nd")) == ["a", "b", "c", "d"]


def test_eof_returns_none():
    reader = _reader(b"only\n")
    assert reader.read_line() == "only"
    assert reader.read_line() is None


def test_empty_file():
    assert _reader(b"").read_line() is None


def test_blank_line_is_returned_as_empty():
    reader = _reader(b"\nx\n")
    assert reader.read_line() == ""
    assert reader.read_line() == "x"
    assert reader.read_line() is None


def test_keep_newline_normalises_terminators():
    reader = _reader(b"one\r\ntwo\rthree\n")
    lines = [reader.read_line(keep_newline=True) for _ in range(3)]
    assert lines == ["one\n", "two\n", "three\n"]
    assert reader.read_line(keep_newline=True) is None


def test_last_line_without_newline_has_no_newline_kept():
    reader = _reader(b"tail")
    assert reader.read_line(keep_newline=True) == "tail"


def test_lines_round_trip_through_join():
    lines = ["host example.com", "port 8080", "", "path /api/stream"]
    data = "\n".join(lines).encode()
    assert list(_reader(data)) == lines


@pytest.mark.parametrize(
    "line, expected",
    [
        ("host example.com", ("host", "example.com")),
        ("port 8080", ("port", "8080")),
        ("turnOnWeekday 7", ("turnonweekday", "7")),
        ("frequency 99.7", ("frequency", "99.7")),
    ],
)
def test_parse_kv_config_lines(line, expected):
    assert parse_kv(line) == expected


@pytest.mark.parametrize("line", ["", "   \t ", "; comment", "# note", "=value"])
def test_parse_kv_rejects(line):
    assert parse_kv(line) is None


def test_parse_kv_equals_and_trailing_comment():
    assert parse_kv("  Volume = 75 ; loud") == ("volume", "75")


def test_parse_kv_key_only():
    assert parse_kv("squelch") == ("squelch", "")


def test_parse_kv_keeps_case_when_asked():
    assert parse_kv("SSID MyWiFiNetwork", lowercase_key=False) == ("SSID", "MyWiFiNetwork")


def test_parse_kv_custom_separator():
    assert parse_kv("a:b", seps=":") == ("a", "b")


def test_reader_and_parser_together():
    data = b"; header\n# v1\n\nhost example.com\r\nport 8080\n"
    pairs = [kv for kv in map(parse_kv, _reader(data)) if kv]
    assert pairs == [("host", "example.com"), ("port", "8080")]