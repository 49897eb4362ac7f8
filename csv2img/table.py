from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd


@dataclass
class ColumnName:
    """A header cell. Identity is its position in ``Table.column_names``."""

    value: str


@dataclass
class Row:
    """One data line.

    ``index`` is the 1-based position of the source line among the non-blank
    lines (the header is line 1), so it is not contiguous when a line was
    skipped.
    """

    index: int
    values: List[str] = field(default_factory=list)


@dataclass
class Table:
    """Parsed CSV: header columns plus data rows in encounter order.

    Rows are not forced to the header width. A row can be shorter (no padding)
    or longer (tokens beyond the header span are kept).
    """

    separator: str = ","
    column_names: List[ColumnName] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)

    @property
    def headers(self) -> List[str]:
        return [c.value for c in self.column_names]

    @property
    def column_count(self) -> int:
        widest = max((len(r.values) for r in self.rows), default=0)
        return max(len(self.column_names), widest)

    def padded_headers(self) -> List[str]:
        n = self.column_count
        return self.headers + [""] * (n - len(self.column_names))

    def padded_rows(self) -> List[List[str]]:
        """Row values right-padded with empty cells to ``column_count``.

        Layout helper only; ``self.rows`` is left untouched.
        """
        n = self.column_count
        return [list(r.values) + [""] * (n - len(r.values)) for r in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        n = self.column_count
        cols = self.headers + [f"col_{i}" for i in range(len(self.column_names), n)]
        df = pd.DataFrame(self.padded_rows(), columns=cols, dtype=str)
        df.index = [r.index for r in self.rows]
        return df
