"""Numba kernels for permutation validation and application.

All kernels take the permutation as an integer array `perm` of length N where
output position j receives the element at input position perm[j]:

    out[j] = values[perm[j]]

Indexing inside the gather kernels is unchecked (numba's default,
boundscheck off). That is only sound because callers pass arrays held by a
soaperm.permutation.Permutation, which is validated when it is built.
is_permutation_kernel is the validator and checks every index itself.
"""

from __future__ import annotations

import numpy as np
from numba import njit

# Value dtypes the kernels handle; anything else falls back to numpy
NUMBA_DTYPES = frozenset(
    np.dtype(t)
    for t in (
        np.bool_,
        np.int8, np.int16, np.int32, np.int64,
        np.uint8, np.uint16, np.uint32, np.uint64,
        np.float32, np.float64,
    )
)


def supports(values: np.ndarray) -> bool:
    """True if values can go through the numba kernels."""
    return values.ndim == 1 and values.dtype.isnative and values.dtype in NUMBA_DTYPES


# -----------------------------
# Validation
# -----------------------------


@njit(cache=True)
def is_permutation_kernel(perm: np.ndarray) -> bool:
    """Return True if perm holds every index 0..N exactly once."""
    n = len(perm)
    seen = np.zeros(n, dtype=np.bool_)
    for j in range(n):
        k = perm[j]
        if k < 0 or k >= n:
            return False
        if seen[k]:
            return False
        seen[k] = True
    return True


# -----------------------------
# Allocate-and-copy
# -----------------------------


@njit(cache=True)
def gather(values: np.ndarray, perm: np.ndarray) -> np.ndarray:
    """Return a new array out with out[j] = values[perm[j]].

    O(N) extra memory: one output array of the same dtype.
    """
    n = len(perm)
    out = np.empty(n, dtype=values.dtype)
    for j in range(n):
        out[j] = values[perm[j]]
    return out


# -----------------------------
# In-place cycle following
# -----------------------------


@njit(cache=True)
def permute_cycles(values: np.ndarray, perm: np.ndarray) -> None:
    """Reorder values in place so that values[j] becomes values[perm[j]].

    Walks each cycle of the permutation once, holding a single element in a
    temporary. Visited positions are tracked in a separate mask so perm is
    never written to.

    Example:
        values = [a, b, c], perm = [2, 0, 1]
        cycle 0 -> 2 -> 1 -> 0: values[0] = c, values[2] = b, values[1] = a
        -> values = [c, a, b]
    """
    n = len(perm)
    done = np.zeros(n, dtype=np.bool_)
    for start in range(n):
        if done[start]:
            continue
        tmp = values[start]
        j = start
        while True:
            done[j] = True
            k = perm[j]
            if k == start:
                values[j] = tmp
                break
            values[j] = values[k]
            j = k
