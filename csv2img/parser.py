from __future__ import annotations

from typing import Iterable, List, Optional, Set

import regex

from csv2img.table import ColumnName, Row, Table

ELLIPSIS = "..."

_LINE_BREAKS = regex.compile(r"[\r\n]")
# One user-perceived character (extended grapheme cluster).
_GRAPHEME = regex.compile(r"\X")


def split_lines(text: str) -> List[str]:
    """Split on any CR/LF character and drop the empty pieces."""
    return [line for line in _LINE_BREAKS.split(text) if line]


def _truncate(item: str, max_length: Optional[int]) -> str:
    if max_length is None:
        return item
    chars = _GRAPHEME.findall(item)
    if len(chars) <= max_length:
        return item
    print(f"[WARN] too long value: {item!r}, shortened to {max_length} chars")
    return "".join(chars[:max_length]) + ELLIPSIS


def parse_lines(
    lines: Iterable[str],
    separator: str = ",",
    max_length: Optional[int] = None,
) -> Table:
    """Build a Table from already-split, non-blank lines.

    The first line is the header. Empty header tokens are dropped and their
    positions are removed from every data row as well. ``max_length`` only
    applies to data cells and counts characters as grapheme clusters, so an
    accent or an emoji sequence is never split.
    """
    if max_length is not None and max_length < 0:
        raise ValueError(f"max_length must be >= 0, got {max_length}")

    table = Table(separator=separator)
    ignored: Set[int] = set()

    for i, line in enumerate(lines, start=1):
        items = line.split(separator)
        if i == 1:
            for j, name in enumerate(items):
                if name == "":
                    ignored.add(j)
                    continue
                table.column_names.append(ColumnName(value=name))
            continue

        values = [_truncate(item, max_length) for j, item in enumerate(items) if j not in ignored]
        table.rows.append(Row(index=i, values=values))

    return table


def parse(text: str, separator: str = ",", max_length: Optional[int] = None) -> Table:
    """Parse delimiter-separated *text* into a Table.

    No quoting or escaping: every occurrence of *separator* splits a cell and
    consecutive separators produce empty cells.
    """
    return parse_lines(split_lines(text), separator=separator, max_length=max_length)
