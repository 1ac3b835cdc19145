"""Positional placeholder scanning and paramstyle translation.

SQL handed to the facade uses `?` markers. Markers inside quoted literals,
quoted identifiers and comments are left alone. Quoting rules differ per
backend: MySQL lets a backslash escape the next character inside a string,
PostgreSQL has $tag$...$tag$ dollar-quoted strings.
"""

import re
from typing import Iterator

QMARK = "?"
FORMAT = "%s"

_QUOTES = ("'", '"', "`")
_BACKSLASH_QUOTES = ("'", '"')
_DOLLAR_TAG = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _end_of_quoted(sql: str, i: int, backslash_escapes: bool) -> int:
    """Index just past the literal that opens at sql[i]."""
    quote = sql[i]
    n = len(sql)
    j = i + 1
    while j < n:
        ch = sql[j]
        if ch == "\\" and backslash_escapes and quote in _BACKSLASH_QUOTES:
            j += 2
            continue
        if ch == quote:
            # A doubled quote is an escaped quote inside the literal
            if j + 1 < n and sql[j + 1] == quote:
                j += 2
                continue
            return j + 1
        j += 1
    return n


def _tokens(
    sql: str,
    backslash_escapes: bool = False,
    dollar_quotes: bool = False,
) -> Iterator[tuple[str, bool]]:
    """Yield (chunk, is_code) pairs; is_code is False for literals and comments."""
    i = 0
    n = len(sql)
    start = 0
    while i < n:
        ch = sql[i]
        end = None
        if ch in _QUOTES:
            end = _end_of_quoted(sql, i, backslash_escapes)
        elif sql.startswith("--", i):
            j = sql.find("\n", i)
            end = n if j == -1 else j
        elif sql.startswith("/*", i):
            j = sql.find("*/", i + 2)
            end = n if j == -1 else j + 2
        elif ch == "$" and dollar_quotes and (i == 0 or not _is_word_char(sql[i - 1])):
            match = _DOLLAR_TAG.match(sql, i)
            if match:
                j = sql.find(match.group(), match.end())
                end = n if j == -1 else j + len(match.group())

        if end is None:
            i += 1
            continue
        if start < i:
            yield sql[start:i], True
        yield sql[i:end], False
        i = start = end
    if start < n:
        yield sql[start:], True


def count_placeholders(
    sql: str,
    backslash_escapes: bool = False,
    dollar_quotes: bool = False,
) -> int:
    """Count `?` markers outside literals and comments."""
    return sum(
        chunk.count(QMARK)
        for chunk, is_code in _tokens(sql, backslash_escapes, dollar_quotes)
        if is_code
    )


def to_paramstyle(
    sql: str,
    marker: str,
    backslash_escapes: bool = False,
    dollar_quotes: bool = False,
) -> str:
    """Rewrite `?` markers into `marker`.

    For the format paramstyle, bare `%` in code is doubled so the driver's
    %-interpolation leaves it intact.
    """
    if marker == QMARK:
        return sql
    parts = []
    for chunk, is_code in _tokens(sql, backslash_escapes, dollar_quotes):
        if marker == FORMAT:
            chunk = chunk.replace("%", "%%")
        if is_code:
            chunk = chunk.replace(QMARK, marker)
        parts.append(chunk)
    return "".join(parts)
