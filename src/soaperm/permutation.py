# -------------------------------------
# Permutation computation
# -------------------------------------
"""
Permutations that describe a sort order without moving any data.

A Permutation of length N holds the indices 0..N reordered so that placing
the element at perm[j] into position j of every column yields the sorted
table. Instances are trusted: the builders in this module produce valid
permutations by construction, and permutation_from_indices() validates
anything that comes from outside. soaperm.apply relies on this to skip
bounds checks when it applies them.

The index array is read-only; applying a permutation never changes it.
"""
from __future__ import annotations
from typing import Any, Callable, Sequence

import numpy as np

from .apply_numba import is_permutation_kernel
from .errors import ContractViolation
from .table import table_column_index, table_nrows, table_orientation


def _frozen(indices: Sequence[int] | np.ndarray) -> np.ndarray:
    arr = np.array(indices, dtype=np.intp)
    arr.setflags(write=False)
    return arr


class Permutation:
    """A validated bijection of 0..N.

    Building one from an index sequence validates it; the sort builders in
    this module skip that check because their output is valid by construction.

    Attributes:
        indices: read-only intp[N] array, indices[j] = source position of
            the element that ends up at position j
    """

    __slots__ = ("indices",)

    def __init__(self, indices: Sequence[int] | np.ndarray):
        if not is_permutation(indices):
            raise ContractViolation(
                f"Index sequence of length {len(indices)} is not a permutation of 0..{len(indices)}"
            )
        self.indices = _frozen(indices)

    @classmethod
    def _trusted(cls, indices: np.ndarray) -> "Permutation":
        """Wrap indices that are a permutation by construction."""
        perm = cls.__new__(cls)
        perm.indices = _frozen(indices)
        return perm

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self):
        return iter(self.indices.tolist())

    def __getitem__(self, j: int) -> int:
        return int(self.indices[j])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return bool(np.array_equal(self.indices, other.indices))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Permutation({self.indices.tolist()!r})"

    def is_identity(self) -> bool:
        """True if every index maps to itself."""
        return bool(np.array_equal(self.indices, np.arange(len(self.indices))))

    def inverse(self) -> "Permutation":
        """Return the permutation that undoes this one.

        If out[j] = values[self[j]], applying the inverse to out gives back values.
        """
        inv = np.empty_like(self.indices)
        inv[self.indices] = np.arange(len(self.indices), dtype=np.intp)
        return Permutation._trusted(inv)


def is_permutation(indices: Sequence[int] | np.ndarray) -> bool:
    """Return True if indices contains every integer 0..len(indices) exactly once."""
    arr = np.asarray(indices)
    if arr.ndim != 1:
        return False
    if arr.size == 0:
        return True
    if arr.dtype.kind not in "iu":
        return False
    return bool(is_permutation_kernel(arr.astype(np.int64, copy=False)))


def permutation_from_indices(indices: Sequence[int] | np.ndarray) -> Permutation:
    """Validate an externally supplied index sequence and wrap it.

    Raises:
        ContractViolation: If indices is not a permutation of 0..N
    """
    return Permutation(indices)


def identity_permutation(n: int) -> Permutation:
    """Return the permutation that leaves every sequence unchanged."""
    return Permutation._trusted(np.arange(n, dtype=np.intp))


def permutation_by_key(n: int, key: Callable[[int], Any]) -> Permutation:
    """Order the indices 0..n so that key(index) is non-decreasing.

    Costs O(n log n) key comparisons. The relative order of indices with
    equal keys is not part of the contract.

    Args:
        n: Number of records
        key: Function mapping a record index to a comparable key

    Returns:
        Permutation sorting the records by key
    """
    order = sorted(range(n), key=key)
    return Permutation._trusted(np.fromiter(order, dtype=np.intp, count=n))


def _lexsort_column(col: Any) -> np.ndarray:
    if isinstance(col, np.ndarray):
        return col
    if hasattr(col, "to_numpy"):
        return col.to_numpy(zero_copy_only=False)
    return np.asarray(col)


def permutation_lexsort(
    table: dict[str, Any],
    columns: Sequence[str | int] | None = None,
) -> Permutation:
    """Vectorised permutation over the key columns using numpy.lexsort.

    Gives the same ordering as permutation_by_key(n, key_function(table, columns))
    for columns numpy can sort (ints, floats, bools, strings).

    Args:
        table: Column or arrow table
        columns: Key columns in comparison order (default: all, table order)

    Returns:
        Permutation sorting the records by the key columns
    """
    if table_orientation(table) == "row":
        raise ValueError("permutation_lexsort needs a column or arrow table, got row orientation")
    n = table_nrows(table)
    if columns is None:
        indices = list(range(len(table["columns"])))
    else:
        indices = [table_column_index(table, c) for c in columns]
    if not indices:
        return identity_permutation(n)
    # lexsort treats the last key as primary
    keys = [_lexsort_column(table["rows"][i]) for i in reversed(indices)]
    return Permutation._trusted(np.lexsort(keys))
