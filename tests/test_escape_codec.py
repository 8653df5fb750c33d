import pytest

from burne.escape_codec import encode_name, decode_line, encode_names, decode_lines
from burne.errors import DecodeError, UnencodableName
from burne.models_fs import Entry, EscapeMode, Separator


SAMPLE_NAMES = [
    b"plain.txt",
    b"with space",
    b"100%.txt",
    "café.jpg".encode("utf-8"),
    b".hidden",
]


@pytest.mark.parametrize("mode", list(EscapeMode))
@pytest.mark.parametrize("name", SAMPLE_NAMES)
def test_round_trip_printable_names(mode, name):
    assert decode_line(encode_name(name, mode), mode) == name


@pytest.mark.parametrize("mode", [EscapeMode.PERCENT, EscapeMode.PERCENT_ASCII])
def test_round_trip_control_bytes(mode):
    name = b"line1\nline2\ttab\x7f\x01"
    assert decode_line(encode_name(name, mode), mode) == name


def test_percent_ascii_round_trips_invalid_utf8():
    name = b"latin1-\xe9\xff"
    line = encode_name(name, EscapeMode.PERCENT_ASCII)
    assert line == "latin1-%E9%FF"
    assert line.isascii()
    assert decode_line(line, EscapeMode.PERCENT_ASCII) == name


def test_percent_escapes_separator_and_percent():
    assert encode_name(b"a\nb%c", EscapeMode.PERCENT) == "a%0Ab%25c"


def test_percent_keeps_non_ascii():
    assert encode_name("日本.txt".encode("utf-8"), EscapeMode.PERCENT) == "日本.txt"


def test_percent_ascii_escapes_non_ascii():
    assert encode_name("é".encode("utf-8"), EscapeMode.PERCENT_ASCII) == "%C3%A9"


def test_none_rejects_separator():
    with pytest.raises(UnencodableName):
        encode_name(b"two\nlines", EscapeMode.NONE, Separator.NEWLINE)


def test_none_accepts_newline_with_nul_separator():
    assert encode_name(b"two\nlines", EscapeMode.NONE, Separator.NUL) == "two\nlines"


@pytest.mark.parametrize("mode", [EscapeMode.NONE, EscapeMode.PERCENT])
def test_invalid_utf8_is_unencodable(mode):
    with pytest.raises(UnencodableName) as excinfo:
        encode_name(b"bad\xff", mode)
    assert excinfo.value.mode is mode


def test_decode_accepts_lowercase_hex():
    assert decode_line("a%0ab", EscapeMode.PERCENT) == b"a\nb"


@pytest.mark.parametrize("line", ["bad%", "bad%4", "bad%zz", "bad%4g"])
def test_decode_rejects_malformed_escape(line):
    with pytest.raises(DecodeError):
        decode_line(line, EscapeMode.PERCENT)


@pytest.mark.parametrize("line", ["nul%00", "dir%2Fname", "dir%2fname"])
def test_decode_rejects_forbidden_bytes(line):
    with pytest.raises(DecodeError):
        decode_line(line, EscapeMode.PERCENT_ASCII)


def test_decode_none_is_identity():
    assert decode_line("100%zz", EscapeMode.NONE) == b"100%zz"


def test_decode_rejects_literal_nul():
    with pytest.raises(DecodeError):
        decode_line("a\0b", EscapeMode.NONE)


def test_decode_rejects_undecodable_text():
    line = b"bad\xff".decode("utf-8", "surrogateescape")
    with pytest.raises(DecodeError):
        decode_line(line, EscapeMode.NONE)


def test_encode_names_stops_at_first_unencodable():
    entries = [Entry(0, b"ok"), Entry(1, b"bad\n")]
    with pytest.raises(UnencodableName) as excinfo:
        encode_names(entries, EscapeMode.NONE, Separator.NEWLINE)
    assert excinfo.value.name == b"bad\n"


def test_decode_lines_keeps_errors_with_index():
    edited = decode_lines(["good", "bad%"], EscapeMode.PERCENT)
    assert edited[0].is_valid
    assert edited[0].decoded_name == b"good"
    assert not edited[1].is_valid
    assert edited[1].index == 1
    assert "truncated" in edited[1].error
