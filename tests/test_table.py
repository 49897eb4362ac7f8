from __future__ import annotations

from csv2img.parser import parse
from csv2img.table import Table


def test_column_count_uses_widest_row():
    table = parse("a,b\n1\n1,2,3")
    assert table.column_count == 3
    assert table.padded_headers() == ["a", "b", ""]
    assert table.padded_rows() == [["1", "", ""], ["1", "2", "3"]]


def test_padding_does_not_modify_rows():
    table = parse("a,b,c\n1")
    table.padded_rows()
    assert table.rows[0].values == ["1"]


def test_empty_table():
    table = Table()
    assert table.column_count == 0
    assert table.padded_rows() == []
    assert table.headers == []


def test_to_dataframe_names_extra_columns():
    table = parse("a,b\n1,2,3\n4")
    df = table.to_dataframe()
    assert list(df.columns) == ["a", "b", "col_2"]
    assert list(df.index) == [2, 3]
    assert df.loc[2].tolist() == ["1", "2", "3"]
    assert df.loc[3].tolist() == ["4", "", ""]
