# -*- encoding: utf-8 -*-
# @File   : escape.py
# @Time   : 2026/10/12 22:05:31
# @Author : Kariko Lin

"""Escaping of *text values* only.

Keys, section names and non-text scalars never pass through here.
"""

from ..errors import IniSyntaxError

# order matters: backslash first,
# or the ones inserted later get doubled.
ESCAPE_TABLE: tuple[tuple[str, str], ...] = (
    ('\\', '\\\\'),
    ('\n', '\\n'),
    ('\r', '\\r'),
    ('\t', '\\t'),
    ('"', '\\"'),
    (';', '\\;'),
    ('#', '\\#'),
)

_UNESCAPE_MAP: dict[str, str] = {
    seq: char for char, seq in ESCAPE_TABLE
}


def escape(value: str) -> str:
    for char, seq in ESCAPE_TABLE:
        value = value.replace(char, seq)
    return value


def unescape(value: str, lineno: int = 0) -> str:
    """Reverse `escape()`.

    Scans left to right instead of chained `str.replace()`,
    so that `\\\\n` gives back a backslash plus `n` rather than a newline.
    `lineno` is only used in the error message.
    """
    if '\\' not in value:
        return value
    ret: list[str] = []
    i = 0
    while i < len(value):
        c = value[i]
        if c != '\\':
            ret.append(c)
            i += 1
            continue
        seq = value[i:i + 2]
        if seq not in _UNESCAPE_MAP:
            raise IniSyntaxError(
                lineno, value,
                'dangling backslash' if len(seq) < 2
                else f'unknown escape sequence {seq!r}')
        ret.append(_UNESCAPE_MAP[seq])
        i += 2
    return ''.join(ret)
