"""
escape_codec.py - Name Escaping

Responsibilities:
- Encode a raw filesystem name into one editable text line
- Decode an edited text line back into a raw name
- Report names that cannot be represented before the editor is started

For every legal name, decode_line(encode_name(name, mode), mode) == name.
"""

from typing import List, Sequence

from .models_fs import Entry, EditedLine, EscapeMode, Separator
from .errors import DecodeError, UnencodableName

_PERCENT = 0x25
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_FORBIDDEN_DECODED = frozenset(b"\0/")


def _needs_escape(byte: int, mode: EscapeMode) -> bool:
    """Whether a byte is written as %XX"""
    # ASCII control bytes cover both separators
    if byte < 0x20 or byte == 0x7F or byte == _PERCENT:
        return True
    return mode is EscapeMode.PERCENT_ASCII and byte >= 0x80


def encode_name(name: bytes, mode: EscapeMode, separator: Separator = Separator.NEWLINE) -> str:
    """
    Encode a name into an editable line

    Args:
        name: Raw name (no NUL, no path separator)
        mode: Escape method
        separator: Active line separator

    Returns:
        Text line without the separator

    Raises:
        UnencodableName: The name cannot be shown unambiguously under mode
    """
    if mode is EscapeMode.NONE:
        if separator.byte in name:
            raise UnencodableName(name, mode, "contains the line separator")
        try:
            return name.decode("utf-8")
        except UnicodeDecodeError:
            raise UnencodableName(name, mode, "not valid UTF-8") from None

    out = bytearray()
    for byte in name:
        if _needs_escape(byte, mode):
            out += b"%%%02X" % byte
        else:
            out.append(byte)

    try:
        return out.decode("utf-8")
    except UnicodeDecodeError:
        # Only reachable in PERCENT mode, PERCENT_ASCII output is pure ASCII
        raise UnencodableName(
            name, mode, "not valid UTF-8 (use the percent-ascii escape method)"
        ) from None


def decode_line(line: str, mode: EscapeMode) -> bytes:
    """
    Decode an edited line into a name

    Args:
        line: Text line without the separator
        mode: Escape method used for encoding

    Returns:
        Raw name

    Raises:
        DecodeError: Malformed escape, invalid text, or forbidden byte
    """
    try:
        raw = line.encode("utf-8")
    except UnicodeEncodeError:
        raise DecodeError("not valid UTF-8") from None

    if b"\0" in raw:
        raise DecodeError("contains a NUL character")

    if mode is EscapeMode.NONE:
        return raw

    out = bytearray()
    i = 0
    while i < len(raw):
        byte = raw[i]
        if byte != _PERCENT:
            out.append(byte)
            i += 1
            continue

        digits = raw[i + 1:i + 3]
        if len(digits) < 2:
            raise DecodeError(f"truncated escape sequence at offset {i}")
        if not all(d in _HEX_DIGITS for d in digits):
            raise DecodeError(f"invalid escape sequence %{digits.decode('ascii', 'replace')} at offset {i}")

        value = int(digits, 16)
        if value in _FORBIDDEN_DECODED:
            raise DecodeError(f"escape sequence %{value:02X} decodes to a forbidden byte")
        out.append(value)
        i += 3

    return bytes(out)


def encode_names(entries: Sequence[Entry], mode: EscapeMode, separator: Separator) -> List[str]:
    """Encode every entry, failing on the first unencodable name"""
    return [encode_name(entry.original_name, mode, separator) for entry in entries]


def decode_lines(lines: Sequence[str], mode: EscapeMode) -> List[EditedLine]:
    """
    Decode every edited line

    Decode failures are kept as error values so the caller can report
    them with their index.

    Args:
        lines: Edited lines
        mode: Escape method

    Returns:
        Edited lines, one per input line
    """
    edited: List[EditedLine] = []
    for index, line in enumerate(lines):
        try:
            edited.append(EditedLine(index=index, text=line, decoded_name=decode_line(line, mode)))
        except DecodeError as e:
            edited.append(EditedLine(index=index, text=line, error=str(e)))
    return edited
