# -------------------------------------
# Tables - row, column and arrow layouts
# -------------------------------------
"""
Dict-based tables holding one dataset in one of three layouts.

    row:    {"orientation": "row", "columns": names, "rows": [[v0, v1, ...], ...]}
    column: {"orientation": "column", "columns": names, "rows": [seq0, seq1, ...]}
    arrow:  {"orientation": "arrow", "columns": names, "rows": [pa.Array, ...]}

A row table is the array-of-structures view. Column and arrow tables are the
structure-of-arrays view: "rows" holds one sequence per field (list or numpy
array for column, PyArrow array for arrow), all of one length, and index i
across them is one record.

Those sequences belong together. Nothing in this package reorders one of
them on its own; soaperm.sort applies a single permutation to all of them.
"""
from __future__ import annotations
from typing import Any, Literal, TYPE_CHECKING

import numpy as np

from .errors import ContractViolation

# PyArrow is only needed for arrow-oriented tables
pa = None

def _import_pyarrow():
    """Import pyarrow lazily, raising a clear error if not installed."""
    global pa
    if pa is None:
        try:
            import pyarrow as _pa
        except ImportError:
            raise ImportError(
                "PyArrow is required for arrow-oriented tables. "
                "Install with: pip install pyarrow"
            )
        pa = _pa
    return pa

if TYPE_CHECKING:
    import pyarrow as pa


ORIENTATIONS = ("row", "column", "arrow")


def _as_pylist(col: Any) -> list:
    """Return a column's values as a list of plain Python scalars."""
    if isinstance(col, np.ndarray):
        return col.tolist()
    if hasattr(col, "to_pylist"):
        return col.to_pylist()
    return list(col)


def table_orientation(table: dict[str, Any]) -> Literal["row", "column", "arrow"]:
    """Return the table's layout; a missing key means "row".

    Raises:
        ValueError: If the orientation is not one of row, column, arrow
    """
    orientation = table.get("orientation", "row")
    if orientation not in ORIENTATIONS:
        raise ValueError(f"Unsupported orientation: {orientation}")
    return orientation


def table_nrows(table: dict[str, Any]) -> int:
    """Number of records, for any orientation."""
    if table_orientation(table) == "row":
        return len(table["rows"])
    # column/arrow: the length of any field sequence, the first by convention
    seqs = table["rows"]
    return len(seqs[0]) if seqs else 0


def table_validate(table: dict[str, Any]) -> None:
    """Check that a table is well formed.

    Column and arrow tables must have one sequence per column name, all of
    the same length; arrow sequences must be PyArrow arrays.

    Raises:
        ValueError: Missing keys, bad orientation, name/sequence count
            mismatch, or a non-Arrow sequence in an arrow table
        ContractViolation: Field sequences of different lengths
    """
    for key in ("columns", "rows"):
        if key not in table:
            raise ValueError(f"Table missing required key: '{key}'")

    orientation = table_orientation(table)
    if orientation == "row":
        return

    names = table["columns"]
    seqs = table["rows"]
    if len(seqs) != len(names):
        raise ValueError(
            f"Number of data columns ({len(seqs)}) does not match "
            f"column names ({len(names)})"
        )
    if not seqs:
        return

    expected = len(seqs[0])
    for name, seq in zip(names, seqs):
        if len(seq) != expected:
            raise ContractViolation(
                f"Column {name!r} has {len(seq)} values, expected {expected}"
            )

    if orientation == "arrow":
        _pa = _import_pyarrow()
        for name, seq in zip(names, seqs):
            if not isinstance(seq, (_pa.Array, _pa.ChunkedArray)):
                raise ValueError(
                    f"Column {name!r} is not a PyArrow Array, got {type(seq).__name__}"
                )


def table_to_arrow(table: dict[str, Any]) -> dict[str, Any]:
    """Return an arrow-oriented copy of a row or column table.

    Numpy columns keep their dtype (uint8 stays uint8, bool stays bool).
    Arrow tables are returned unchanged.
    """
    orientation = table_orientation(table)
    if orientation == "arrow":
        return table

    _pa = _import_pyarrow()
    if orientation == "column":
        seqs = table["rows"]
    else:
        seqs = [[row[i] for row in table["rows"]] for i in range(len(table["columns"]))]
    return {
        "orientation": "arrow",
        "columns": table["columns"][:],
        "rows": [_pa.array(seq) for seq in seqs],
    }


def table_column_index(table: dict[str, Any], column: str | int) -> int:
    """Resolve a column name or position to a position.

    Raises:
        ValueError: If the name is unknown or the position out of range
    """
    if isinstance(column, int):
        if column < 0 or column >= len(table["columns"]):
            raise ValueError(f"Column index {column} out of range")
        return column
    try:
        return table["columns"].index(column)
    except ValueError:
        raise ValueError(f"Column '{column}' not found in table columns: {table['columns']}")


def table_column(table: dict[str, Any], column: str | int) -> list[Any] | np.ndarray | pa.Array:
    """Extract one field's values.

    Returns:
        arrow table: the pa.Array itself (zero-copy)
        column table: a copy of the list or numpy array
        row table: a new list gathered from the rows

    Raises:
        ValueError: If the column is not found
    """
    idx = table_column_index(table, column)
    orientation = table_orientation(table)

    if orientation == "arrow":
        return table["rows"][idx]
    if orientation == "column":
        seq = table["rows"][idx]
        return seq.copy() if isinstance(seq, np.ndarray) else list(seq)
    return [row[idx] for row in table["rows"]]
