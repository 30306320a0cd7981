"""Compact encoding of map rows.

Format:
  - Input: list of equal length row strings (e.g. ``["#####", "#...#"]``)
  - Rows are joined with ``/`` and each run of a repeated character becomes
    ``<count><char>``; runs of length 1 keep the bare character.
  - The result is prefixed with ``R:``. If it is not shorter than the plain
    joined rows, the plain form is returned instead.

Grammar:
  R:5#/1#3.1#  ->  ["#####", "#...#"]   (counts are optional for 1)

Limitations:
  - Row characters must not be digits or ``/``.
"""

from __future__ import annotations

from typing import List, Sequence

ROW_SEP = "/"
PREFIX = "R:"


def _encode_row(row: str) -> str:
    pieces = []
    i = 0
    while i < len(row):
        ch = row[i]
        j = i
        while j < len(row) and row[j] == ch:
            j += 1
        run = j - i
        pieces.append(f"{run}{ch}" if run > 1 else ch)
        i = j
    return "".join(pieces)


def compress_rows(rows: Sequence[str]) -> str:
    """Return the run-length form of ``rows`` or the plain ``/`` joined rows.

    Args:
        rows: Map rows, top row first.

    Returns:
        String starting with ``R:`` or the plain joined rows when encoding
        gives no size benefit.
    """
    raw = ROW_SEP.join(rows)
    if not rows:
        return raw
    for row in rows:
        if ROW_SEP in row or any(ch.isdigit() for ch in row):
            raise ValueError("row characters must not be digits or '/'")
    compressed = PREFIX + ROW_SEP.join(_encode_row(r) for r in rows)
    return compressed if len(compressed) < len(raw) else raw


def decompress_rows(data: str) -> List[str]:
    """Inverse of :func:`compress_rows`; plain joined rows are split as is."""
    if not data:
        return []
    if not data.startswith(PREFIX):
        return data.split(ROW_SEP)
    rows = []
    for token in data[len(PREFIX):].split(ROW_SEP):
        out = []
        count = ""
        for ch in token:
            if ch.isdigit():
                count += ch
                continue
            out.append(ch * (int(count) if count else 1))
            count = ""
        if count:
            raise ValueError(f"dangling run length in {token!r}")
        rows.append("".join(out))
    return rows


__all__ = ["compress_rows", "decompress_rows"]
