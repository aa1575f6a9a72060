# -------------------------------------
# Table sorting
# -------------------------------------
"""
Sort a table by a composite key.

For column and arrow tables the sort never moves data while comparing: it
computes one Permutation from the key, then applies it to every column. For
row tables the rows are sorted directly by the same key, which is the
reference the columnar result must match.

The key is either built from the table's columns (all of them, or the given
subset in the given order) or supplied by the caller as any
index -> comparable function.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Sequence

from . import state
from .apply import table_apply_permutation
from .keys import key_function
from .permutation import Permutation, permutation_by_key, permutation_lexsort
from .table import table_column_index, table_nrows, table_orientation, table_validate

logger = logging.getLogger(__name__)


def table_permutation(
    table: dict[str, Any],
    key: Callable[[int], Any] | None = None,
    columns: Sequence[str | int] | None = None,
    method: str | None = None,
) -> Permutation:
    """Compute the permutation that sorts a column or arrow table.

    Args:
        table: Column or arrow table
        key: Optional index -> comparable function; overrides columns/method
        columns: Key columns in comparison order (default: all, table order)
        method: "key" (key tuples + Python sort) or "lexsort" (numpy.lexsort);
            default from state

    Returns:
        Permutation sorting the table

    Raises:
        ValueError: If the table is row-oriented or method is invalid
        ContractViolation: If the columns differ in length
    """
    table_validate(table)
    if table_orientation(table) == "row":
        raise ValueError("table_permutation needs a column or arrow table, got row orientation")
    method = state.resolve("method", method)
    n = table_nrows(table)
    if key is not None:
        return permutation_by_key(n, key)
    if method == "lexsort":
        return permutation_lexsort(table, columns)
    # indices come from range(n), no per-call range check needed
    return permutation_by_key(n, key_function(table, columns, checked=False))


def _sort_rows(
    table: dict[str, Any],
    key: Callable[[list], Any] | None,
    columns: Sequence[str | int] | None,
    inplace: bool,
) -> dict[str, Any]:
    if key is None:
        if columns is None:
            key = tuple
        else:
            idxs = [table_column_index(table, c) for c in columns]

            def key(row: list) -> tuple:
                return tuple([row[i] for i in idxs])

    if inplace:
        table["rows"].sort(key=key)
        return table
    return {"orientation": "row", "columns": table["columns"][:], "rows": sorted(table["rows"], key=key)}


def table_sort(
    table: dict[str, Any],
    key: Callable[[Any], Any] | None = None,
    columns: Sequence[str | int] | None = None,
    *,
    method: str | None = None,
    strategy: str | None = None,
    parallel: bool | None = None,
    max_workers: int | None = None,
    inplace: bool = False,
) -> dict[str, Any]:
    """Sort a table by a composite key.

    Column/arrow tables: one permutation is computed from the key and
    applied to every column. Row tables: rows are sorted directly.

    The key is lexicographic over `columns` (default: every column in table
    order). Passing `key` replaces it: for column/arrow tables key receives
    a record index, for row tables it receives a row list. The order of
    records with equal keys is unspecified.

    Args:
        table: Table in any orientation
        key: Optional custom key function (see above)
        columns: Key columns in comparison order
        method: "key" or "lexsort" (column/arrow only; default from state)
        strategy: "copy" or "cycle" (column/arrow only; default from state)
        parallel: Apply columns from a thread pool (default from state)
        max_workers: Thread pool size (default from state)
        inplace: Replace the table's data instead of returning a new table

    Returns:
        Sorted table, same orientation as the input

    Raises:
        ValueError: Invalid table structure, column name or option
        ContractViolation: Columns of unequal length
    """
    table_validate(table)
    orientation = table_orientation(table)
    logger.debug("Sorting %s table with %d rows", orientation, table_nrows(table))

    if orientation == "row":
        return _sort_rows(table, key, columns, inplace)

    perm = table_permutation(table, key=key, columns=columns, method=method)
    return table_apply_permutation(
        table,
        perm,
        strategy=strategy,
        parallel=parallel,
        max_workers=max_workers,
        inplace=inplace,
    )
