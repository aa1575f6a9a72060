# -------------------------------------
# Permutation application
# -------------------------------------
"""
Apply a Permutation to field sequences.

Two strategies produce identical results, out[j] = values[perm[j]]:

    copy  - allocate a new sequence of length N and copy each selected
            element into it. O(N) extra memory. Works for lists, numpy
            arrays and PyArrow arrays.
    cycle - reorder a mutable sequence in place by following the
            permutation's cycles. Only a visited mask is allocated; no
            second copy of the data. Works for lists and numpy arrays.

Every function here requires a Permutation, never a raw index list: a
Permutation is a permutation of 0..N by construction, which is what lets the
numba kernels index without bounds checks. Wrap external indices with
soaperm.permutation.permutation_from_indices first.

table_apply_permutation applies one permutation to every column of a column
or arrow table, sequentially or from a thread pool.
"""
from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np

from . import state
from .apply_numba import gather, permute_cycles, supports
from .errors import ContractViolation
from .permutation import Permutation
from .table import _import_pyarrow, table_nrows, table_orientation, table_validate

logger = logging.getLogger(__name__)


def _check_args(perm: Permutation, values: Any) -> None:
    if not isinstance(perm, Permutation):
        raise TypeError(
            f"Expected a Permutation, got {type(perm).__name__}; "
            "wrap external indices with permutation_from_indices()"
        )
    if len(perm) != len(values):
        raise ContractViolation(
            f"Permutation length {len(perm)} does not match sequence length {len(values)}"
        )


def _is_arrow_array(values: Any) -> bool:
    return hasattr(values, "to_pylist") and hasattr(values, "take")


# -------------------------------------
# Allocate-and-copy
# -------------------------------------

def apply_permutation(perm: Permutation, values: Any) -> Any:
    """Return a new sequence out with out[j] = values[perm[j]].

    The result has the same kind as the input: list -> list, numpy array ->
    numpy array of the same dtype, PyArrow array -> PyArrow array.
    Neither perm nor values is modified.

    Args:
        perm: Permutation of length N
        values: Sequence of length N

    Returns:
        Reordered copy of values

    Raises:
        TypeError: If perm is not a Permutation
        ContractViolation: If len(perm) != len(values)
    """
    _check_args(perm, values)
    idx = perm.indices

    if isinstance(values, np.ndarray):
        if supports(values):
            return gather(values, idx)
        return values.take(idx, axis=0)

    if _is_arrow_array(values):
        _pa = _import_pyarrow()
        return values.take(_pa.array(idx))

    return [values[i] for i in idx.tolist()]


# -------------------------------------
# In-place cycle following
# -------------------------------------

def _permute_cycles_list(values: Any, perm: list[int]) -> None:
    n = len(perm)
    done = bytearray(n)
    for start in range(n):
        if done[start]:
            continue
        tmp = values[start]
        if isinstance(tmp, np.ndarray):
            # rows of a 2-D array are views into it
            tmp = tmp.copy()
        j = start
        while True:
            done[j] = 1
            k = perm[j]
            if k == start:
                values[j] = tmp
                break
            values[j] = values[k]
            j = k


def _check_in_place(values: Any) -> None:
    """Raise TypeError unless values can be reordered in place."""
    if isinstance(values, np.ndarray):
        if not values.flags.writeable:
            raise TypeError("Cannot reorder a read-only numpy array in place")
        return
    if _is_arrow_array(values):
        raise TypeError("PyArrow arrays are immutable; use the 'copy' strategy")
    if not hasattr(values, "__setitem__"):
        raise TypeError(f"Cannot reorder {type(values).__name__} in place")


def apply_permutation_cycles(perm: Permutation, values: Any) -> Any:
    """Reorder a mutable sequence in place so values[j] becomes values[perm[j]].

    Produces exactly what apply_permutation returns, without allocating a
    second sequence.

    Args:
        perm: Permutation of length N
        values: list or writable numpy array of length N

    Returns:
        values (the same object, reordered)

    Raises:
        TypeError: If perm is not a Permutation, or values is immutable
            (PyArrow arrays, tuples, read-only numpy arrays)
        ContractViolation: If len(perm) != len(values)
    """
    _check_args(perm, values)
    _check_in_place(values)

    if isinstance(values, np.ndarray):
        if supports(values):
            permute_cycles(values, perm.indices)
        else:
            _permute_cycles_list(values, perm.indices.tolist())
        return values

    _permute_cycles_list(values, perm.indices.tolist())
    return values


# -------------------------------------
# Whole tables
# -------------------------------------

def _apply_one(perm: Permutation, values: Any, strategy: str) -> Any:
    if strategy == "cycle":
        return apply_permutation_cycles(perm, values)
    return apply_permutation(perm, values)


def table_apply_permutation(
    table: dict[str, Any],
    perm: Permutation,
    strategy: str | None = None,
    parallel: bool | None = None,
    max_workers: int | None = None,
    inplace: bool = False,
) -> dict[str, Any]:
    """Apply one permutation to every column of a column or arrow table.

    All columns are reordered with the same permutation, so index i still
    names one logical record afterwards. Columns are independent, so with
    parallel=True each is handled by its own thread-pool task and the call
    returns once all of them have finished.

    Args:
        table: Column or arrow table
        perm: Permutation of length table_nrows(table)
        strategy: "copy" or "cycle" (default: state option)
        parallel: Apply columns concurrently (default: state option)
        max_workers: Thread pool size (default: state option)
        inplace: If True, replace the columns inside `table` and return it;
            otherwise return a new table dict. With the "cycle" strategy the
            column objects themselves are always reordered in place.

    Returns:
        The reordered table

    Raises:
        ValueError: If table is row-oriented or an option is invalid
        TypeError: With the "cycle" strategy, if any column cannot be
            reordered in place (checked before any column is modified)
        ContractViolation: If columns differ in length, or perm does not
            match the number of rows
    """
    strategy = state.resolve("strategy", strategy)
    parallel = state.resolve("parallel", parallel)
    max_workers = state.resolve("max_workers", max_workers)

    orientation = table_orientation(table)
    if orientation == "row":
        raise ValueError("table_apply_permutation needs a column or arrow table, got row orientation")
    table_validate(table)

    n = table_nrows(table)
    if len(perm) != n:
        raise ContractViolation(f"Permutation length {len(perm)} does not match table length {n}")

    cols = table["rows"]
    if strategy == "cycle":
        # all columns or none: reject before the first one is touched
        for col in cols:
            _check_in_place(col)

    logger.debug(
        "Applying permutation to %d columns x %d rows (strategy=%s, parallel=%s)",
        len(cols), n, strategy, parallel,
    )

    if parallel and len(cols) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(_apply_one, perm, col, strategy) for col in cols]
            new_cols = [f.result() for f in futures]
    else:
        new_cols = [_apply_one(perm, col, strategy) for col in cols]

    if inplace:
        table["rows"] = new_cols
        return table
    return {"orientation": orientation, "columns": table["columns"][:], "rows": new_cols}
