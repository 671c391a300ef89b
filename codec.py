from __future__ import annotations
from typing import Iterable

DELIM = "|"
ESC = "\\"


def escape(text: str) -> str:
    # backslashes pass through untouched; only the delimiter and newlines are escaped
    return text.replace(DELIM, ESC + DELIM).replace("\n", ESC + "n")


def unescape(encoded: str) -> str:
    out: list[str] = []
    i, n = 0, len(encoded)
    while i < n:
        c = encoded[i]
        if c == ESC and i + 1 < n:
            nxt = encoded[i + 1]
            out.append("\n" if nxt == "n" else nxt)
            i += 2
            continue
        out.append(c)
        i += 1
    return "".join(out)


def split_line(line: str) -> list[str]:
    """
    Split a record line on unescaped delimiters.
    Escape sequences are kept intact so each part can be unescaped afterwards.
    """
    parts: list[str] = []
    cur: list[str] = []
    i, n = 0, len(line)
    while i < n:
        c = line[i]
        if c == ESC and i + 1 < n:
            cur.append(line[i:i + 2])
            i += 2
            continue
        if c == DELIM:
            parts.append("".join(cur))
            cur = []
        else:
            cur.append(c)
        i += 1
    parts.append("".join(cur))
    return parts


def join_line(fields: Iterable[object]) -> str:
    return DELIM.join(escape(str(f)) for f in fields)


def decode_line(line: str) -> list[str]:
    return [unescape(p) for p in split_line(line)]
