"""Text position helpers shared by the report parser and the LSP adapter.

Offsets are Python string indices (code points). Columns reported by
ESLint, like LSP characters, are counted in UTF-16 code units.
"""

from __future__ import annotations

import re

# ESLint ends lines on \r\n, \r, \n, U+2028 and U+2029; LSP only on the first three.
_LINE_ENDINGS = "\r\n\u2028\u2029"
_LINE_PATTERN = re.compile(r"[^\r\n\u2028\u2029]*(?:\r\n|[\r\n\u2028\u2029]|$)")
_LSP_LINE_PATTERN = re.compile(r"[^\r\n]*(?:\r\n|[\r\n]|$)")
_BYTE_ORDER_MARK = "\ufeff"


def _split(pattern: re.Pattern[str], text: str) -> list[str]:
    return [match.group() for match in pattern.finditer(text) if match.group()]


def split_lines(text: str) -> list[str]:
    """
    Split ``text`` into lines the way ESLint numbers them, keeping terminators.

    Unlike ``str.splitlines`` this does not break on form feeds, vertical
    tabs, file/group/record separators or NEL.
    """
    return _split(_LINE_PATTERN, text)


def split_lsp_lines(text: str) -> list[str]:
    """Split ``text`` into LSP lines (``\\r\\n``, ``\\r``, ``\\n``), keeping terminators."""
    return _split(_LSP_LINE_PATTERN, text)


def utf16_length(text: str) -> int:
    """Return the length of ``text`` in UTF-16 code units."""
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


def utf16_column_to_index(line: str, column: int) -> int:
    """
    Convert a 0-based UTF-16 column to a code point index within ``line``.

    Columns past the end of the line clamp to ``len(line)``. A column that
    lands in the middle of a surrogate pair resolves to the character
    containing it.
    """
    units = 0
    for index, char in enumerate(line):
        units += 2 if ord(char) > 0xFFFF else 1
        if units > column:
            return index
    return len(line)


def line_content(line: str) -> str:
    """Strip the line terminator from a line produced by ``split_lines``."""
    return line.rstrip(_LINE_ENDINGS)


def line_column_to_offset(lines: list[str], row: int, column: int) -> int:
    """
    Resolve a 1-based row and 1-based UTF-16 column to a document offset.

    Args:
        lines: Document lines including their line endings, as produced
            by ``split_lines``.
        row: 1-based line number.
        column: 1-based column in UTF-16 code units.

    Returns:
        Offset into the document text. Rows past the last line resolve to
        the end of the document; columns past the end of a line resolve to
        the end of that line's content (before its terminator). A byte
        order mark at the start of the document is not counted as a column.
    """
    row_index = max(row, 1) - 1
    if row_index >= len(lines):
        return sum(len(line) for line in lines)

    offset = sum(len(line) for line in lines[:row_index])
    content = line_content(lines[row_index])
    if row_index == 0 and content.startswith(_BYTE_ORDER_MARK):
        offset += 1
        content = content[1:]
    return offset + utf16_column_to_index(content, max(column, 1) - 1)


def _is_token_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


def token_region(source: str, start: int) -> int:
    """
    Return the end offset of the token starting at ``start``.

    The region is the run of identifier characters beginning at ``start``.
    When ``start`` is not on an identifier character the region is a single
    character, or empty when ``start`` sits on a line ending or at the end
    of the document. The result never exceeds ``len(source)``.
    """
    length = len(source)
    if start >= length:
        return length

    end = start
    while end < length and _is_token_char(source[end]):
        end += 1
    if end > start:
        return end

    if source[start] in _LINE_ENDINGS:
        return start
    return start + 1
