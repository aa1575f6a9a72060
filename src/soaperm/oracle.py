# -------------------------------------
# Equivalence oracle
# -------------------------------------
"""
Check the columnar sort against the row-oriented reference.

Both views are built from the same seed, compared record by record, sorted
independently (Records directly, columns through a permutation), and
compared again. Equality after the sort is the correctness property of the
whole package.

Seeded construction mirrors a cloned random source: every field gets its own
generator created from the same seed, so the row and column builders draw
identical values without sharing any state.
"""
from __future__ import annotations
from typing import Any, Callable

import numpy as np

from .records import FIELD_DTYPES, FIELDS, Record, records_sort
from .sort import table_sort
from .table import _as_pylist, table_column, table_nrows

RngFactory = Callable[[Any], np.random.Generator]


def sample_fields(
    seed: Any,
    n: int,
    rng_factory: RngFactory | None = None,
) -> dict[str, np.ndarray]:
    """Draw n values for every Record field, uniformly over each field's type.

    Args:
        seed: Anything the rng_factory accepts as a seed
        n: Number of records
        rng_factory: seed -> numpy Generator (default: numpy.random.default_rng).
            Must be deterministic for a given seed.

    Returns:
        Field name -> numpy array of that field's dtype
    """
    factory = rng_factory or np.random.default_rng
    out = {}
    for name in FIELDS:
        rng = factory(seed)
        dtype = FIELD_DTYPES[name]
        if dtype.kind == "b":
            out[name] = rng.integers(0, 2, size=n, dtype=np.uint8).astype(np.bool_)
        else:
            out[name] = rng.integers(0, np.iinfo(dtype).max, size=n, dtype=dtype, endpoint=True)
    return out


def new_records(seed: Any, n: int, rng_factory: RngFactory | None = None) -> list[Record]:
    """Build the row-oriented dataset for a seed."""
    values = sample_fields(seed, n, rng_factory)
    q, d, a, w, e = (values[name].tolist() for name in FIELDS)
    return [Record(q[i], d[i], a[i], w[i], e[i]) for i in range(n)]


def new_columns(seed: Any, n: int, rng_factory: RngFactory | None = None) -> dict[str, Any]:
    """Build the columnar dataset (column table of numpy arrays) for a seed."""
    values = sample_fields(seed, n, rng_factory)
    return {"orientation": "column", "columns": list(FIELDS), "rows": [values[name] for name in FIELDS]}


def assert_aligned(records: list[Record], table: dict[str, Any]) -> None:
    """Assert that record i equals row i of the table, field by field.

    Raises:
        AssertionError: On the first differing length, index or field
    """
    n = table_nrows(table)
    if len(records) != n:
        raise AssertionError(f"{len(records)} records but table has {n} rows")
    cols = {name: _as_pylist(table_column(table, name)) for name in FIELDS}
    for i, rec in enumerate(records):
        for name in FIELDS:
            expected = getattr(rec, name)
            actual = cols[name][i]
            if expected != actual:
                raise AssertionError(
                    f"Record {i}: field {name!r} is {actual!r} in table, {expected!r} in records"
                )


def check_sort_equivalence(
    seed: Any,
    n: int,
    rng_factory: RngFactory | None = None,
    **sort_options: Any,
) -> tuple[list[Record], dict[str, Any]]:
    """Run the full oracle for one seed and size.

    Args:
        seed: Seed for both builders
        n: Number of records
        rng_factory: Optional generator factory (see sample_fields)
        **sort_options: Passed to table_sort (method, strategy, parallel, ...)

    Returns:
        (sorted records, sorted column table)

    Raises:
        AssertionError: If the views differ before or after sorting
    """
    records = new_records(seed, n, rng_factory)
    table = new_columns(seed, n, rng_factory)

    assert_aligned(records, table)

    records_sort(records)
    table = table_sort(table, **sort_options)

    assert_aligned(records, table)
    return records, table
