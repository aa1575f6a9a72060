# -------------------------------------
# Records - row-oriented dataset
# -------------------------------------
"""
The Record type and helpers for the row-oriented view of a dataset.

A Record holds all five fields of one logical entity together. A list of
Records is the row-oriented dataset; it is the reference that the columnar
sort is checked against. Records compare lexicographically over their
fields in declared order, so sorting a list of Records sorts by
(query_index, distance, attribute, word_index, is_exact).
"""
from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import Any

import numpy as np

from .table import _as_pylist, table_column


@dataclass(frozen=True, order=True)
class Record:
    """One logical record.

    Attributes:
        query_index: uint32
        distance: uint8
        attribute: uint16
        word_index: uint16
        is_exact: bool
    """
    query_index: int
    distance: int
    attribute: int
    word_index: int
    is_exact: bool

    def key(self) -> tuple:
        """Return the record's fields as a tuple in declared order."""
        return astuple(self)


FIELDS: tuple[str, ...] = tuple(f.name for f in fields(Record))

FIELD_DTYPES: dict[str, np.dtype] = {
    "query_index": np.dtype(np.uint32),
    "distance": np.dtype(np.uint8),
    "attribute": np.dtype(np.uint16),
    "word_index": np.dtype(np.uint16),
    "is_exact": np.dtype(np.bool_),
}


def records_sort(records: list[Record]) -> list[Record]:
    """Sort records in place by their total order and return the same list."""
    records.sort()
    return records


def records_to_table(records: list[Record]) -> dict[str, Any]:
    """Convert a list of Records to a row-oriented table."""
    return {
        "orientation": "row",
        "columns": list(FIELDS),
        "rows": [list(astuple(r)) for r in records],
    }


def records_to_columns(records: list[Record]) -> dict[str, Any]:
    """Convert a list of Records to a column-oriented table of typed numpy arrays."""
    cols = [
        np.fromiter((getattr(r, name) for r in records), dtype=FIELD_DTYPES[name], count=len(records))
        for name in FIELDS
    ]
    return {"orientation": "column", "columns": list(FIELDS), "rows": cols}


def table_to_records(table: dict[str, Any]) -> list[Record]:
    """Convert a table with the Record columns (any orientation) to Records.

    Columns are looked up by name, so extra columns are ignored and the
    column order of the table does not matter.

    Raises:
        ValueError: If a Record field is missing from the table
    """
    values = [_as_pylist(table_column(table, name)) for name in FIELDS]
    return [
        Record(int(q), int(d), int(a), int(w), bool(e))
        for q, d, a, w, e in zip(*values)
    ]
