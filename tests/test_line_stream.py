import pytest

from burne.line_stream import join_lines, split_blob
from burne.models_fs import Separator


def test_join_terminates_every_line():
    assert join_lines(["a", "b"], Separator.NEWLINE) == b"a\nb\n"
    assert join_lines(["a", "b"], Separator.NUL) == b"a\0b\0"


def test_empty_listing_is_empty_blob():
    assert join_lines([], Separator.NEWLINE) == b""
    assert split_blob(b"", Separator.NEWLINE) == []


@pytest.mark.parametrize("separator", list(Separator))
@pytest.mark.parametrize("lines", [["a"], ["a", "b", "c"], [""], ["a", ""], ["", ""], ["café"]])
def test_split_inverts_join(separator, lines):
    assert split_blob(join_lines(lines, separator), separator) == lines


def test_split_without_trailing_separator():
    assert split_blob(b"a\nb", Separator.NEWLINE) == ["a", "b"]


def test_split_drops_only_one_trailing_segment():
    assert split_blob(b"a\n\n", Separator.NEWLINE) == ["a", ""]


def test_nul_mode_keeps_newlines_inside_lines():
    assert split_blob(b"a\nb\0c\0", Separator.NUL) == ["a\nb", "c"]


def test_split_keeps_invalid_utf8_as_surrogates():
    (line,) = split_blob(b"bad\xff\n", Separator.NEWLINE)
    assert line.encode("utf-8", "surrogateescape") == b"bad\xff"
