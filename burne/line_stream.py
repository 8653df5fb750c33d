"""
line_stream.py - Line Stream Serialization

Joins encoded lines into the blob handed to the editor and splits the edited
blob back into lines.
"""

from typing import List, Sequence

from .models_fs import Separator


def join_lines(lines: Sequence[str], separator: Separator) -> bytes:
    """
    Join lines into a blob, terminating every line with the separator

    Args:
        lines: Text lines, none containing the separator
        separator: Line separator

    Returns:
        UTF-8 blob (empty for no lines)
    """
    sep = separator.byte
    return b"".join(line.encode("utf-8") + sep for line in lines)


def split_blob(blob: bytes, separator: Separator) -> List[str]:
    """
    Split a blob into lines

    Exactly one trailing empty segment (left by the final separator) is
    dropped, so a blob whose last line lacks a terminator splits the same way.
    Bytes that are not valid UTF-8 are kept as surrogate escapes and rejected
    later, per line, by the codec.

    Args:
        blob: Edited blob
        separator: Line separator

    Returns:
        Text lines
    """
    if not blob:
        return []

    segments = blob.split(separator.byte)
    if segments[-1] == b"":
        segments.pop()

    return [segment.decode("utf-8", "surrogateescape") for segment in segments]
