# -------------------------------------
# Key extraction
# -------------------------------------
"""
Composite sort keys for columnar tables.

A key is the tuple of field values at one record index, taken across the
columns in order, so tuples compare lexicographically field by field. For a
table with the Record columns in declared order this is the same ordering as
comparing Records directly.

Any callable index -> comparable can stand in for key_function() when a
different field set or ordering is wanted; the permutation and application
steps do not care where the key comes from.
"""
from __future__ import annotations
from typing import Any, Callable, Sequence

from .table import _as_pylist, table_column_index, table_nrows, table_orientation

KeyFunc = Callable[[int], Any]


def _key_columns(table: dict[str, Any], columns: Sequence[str | int] | None) -> list[list]:
    """Materialise the key columns of a column/arrow table as Python lists."""
    if table_orientation(table) == "row":
        raise ValueError("Key extraction needs a column or arrow table, got row orientation")
    if columns is None:
        indices = range(len(table["columns"]))
    else:
        indices = [table_column_index(table, c) for c in columns]
    return [_as_pylist(table["rows"][i]) for i in indices]


def row_key(table: dict[str, Any], i: int, columns: Sequence[str | int] | None = None) -> tuple:
    """Return the composite key of record i.

    Args:
        table: Column or arrow table
        i: Record index, 0 <= i < N
        columns: Key columns in comparison order (default: all, table order)

    Returns:
        Tuple of field values at index i

    Raises:
        ValueError: If the table is row-oriented
        IndexError: If i is outside 0..N (negative indices are not wrapped)
    """
    if table_orientation(table) == "row":
        raise ValueError("Key extraction needs a column or arrow table, got row orientation")
    n = table_nrows(table)
    if not 0 <= i < n:
        raise IndexError(f"Record index {i} out of range for table of {n} rows")
    if columns is None:
        indices = range(len(table["columns"]))
    else:
        indices = [table_column_index(table, c) for c in columns]
    return tuple(_as_pylist(table["rows"][j][i:i + 1])[0] for j in indices)


def key_function(
    table: dict[str, Any],
    columns: Sequence[str | int] | None = None,
    checked: bool = True,
) -> KeyFunc:
    """Build an index -> key tuple function over a column or arrow table.

    Each key column is converted to a Python list once, so calling the
    returned function costs one list lookup per column and no allocation
    beyond the tuple.

    Args:
        table: Column or arrow table
        columns: Key columns in comparison order (default: all, table order)
        checked: If True, the function raises IndexError for indices outside
            0..N. Pass False only when indices come from range(N).

    Returns:
        Function mapping a record index to its key tuple
    """
    cols = _key_columns(table, columns)
    n = table_nrows(table)

    if len(cols) == 1:
        (col,) = cols

        def single_key(i: int) -> tuple:
            return (col[i],)

        key = single_key
    else:
        def multi_key(i: int) -> tuple:
            return tuple([c[i] for c in cols])

        key = multi_key

    if not checked:
        return key

    def checked_key(i: int) -> tuple:
        if not 0 <= i < n:
            raise IndexError(f"Record index {i} out of range for table of {n} rows")
        return key(i)

    return checked_key
