"""
Core functions for index-set generation.

Every generator returns the complete, materialised sequence of index tuples
as a (count, size) array. Rows come out in backtracking order: position 0
varies slowest and the last position fastest, which for the monotonic sets
is plain lexicographic order.

Author: James R. Beattie
"""
import itertools
import numpy as np
from numba import njit
from scipy.special import comb
from .constants import *

##########################################################################################
# Cardinalities
##########################################################################################

def count_masked_monotonic(
    mask : np.ndarray,
    range_ : int) -> int:
    """
    Number of tuples increasing at the k masked positions:
    C(range, k) * range**(size - k)
    """
    size = len(mask)
    ordered = int(np.count_nonzero(mask))
    return int(comb(range_, ordered, exact=True)) * range_ ** (size - ordered)


##########################################################################################
# Core numba JIT functions for index generation
##########################################################################################

@njit(sig_masked_monotonic, cache=True)
def masked_monotonic_nb_core(
    mask,
    range_,
    out):
    """
    Iterative backtracking over tuples that increase strictly at the masked
    positions (relative to the previous masked position). Unmasked positions
    run freely over [0, range_).

    Args:
        mask: (size,) True where the position takes part in the ordering
        range_: number of values per position
        out: (count, size) preallocated, count from count_masked_monotonic
    """
    size = mask.shape[0]
    count = out.shape[0]

    # masked positions strictly to the right of each position
    remaining = np.zeros(size, dtype=np.int64)
    acc = 0
    for k in range(size - 1, -1, -1):
        remaining[k] = acc
        if mask[k]:
            acc += 1

    # first tuple: smallest admissible value everywhere
    cur = np.zeros(size, dtype=np.int64)
    last = -1
    for k in range(size):
        if mask[k]:
            cur[k] = last + 1
            last = cur[k]

    for row in range(count):
        for k in range(size):
            out[row, k] = cur[k]
        if row == count - 1:
            break

        # rightmost position that can still be raised with a feasible suffix
        pos = size - 1
        while pos >= 0:
            if mask[pos]:
                limit = range_ - 1 - remaining[pos]
            else:
                limit = range_ - 1
            if cur[pos] < limit:
                break
            pos -= 1
        cur[pos] += 1

        # reset the suffix to its smallest admissible values
        last = -1
        for k in range(pos + 1):
            if mask[k]:
                last = cur[k]
        for k in range(pos + 1, size):
            if mask[k]:
                cur[k] = last + 1
                last = cur[k]
            else:
                cur[k] = 0


##########################################################################################
# Core numpy functions for index generation
##########################################################################################

def _as_block(
    rows : list,
    size : int) -> np.ndarray:
    return np.array(rows, dtype=INDEX_DTYPE).reshape(len(rows), size)


def generate_all_np_core(
    size : int,
    range_ : int) -> np.ndarray:
    """
    Every tuple of size components in [0, range_).
    Returns:
        (range_**size, size) array of index tuples
    """
    return _as_block(list(itertools.product(range(range_), repeat=size)), size)


def generate_monotonic_np_core(
    size : int,
    range_ : int) -> np.ndarray:
    """
    Every strictly increasing tuple of size components in [0, range_).
    Returns:
        (C(range_, size), size) array of index tuples
    """
    return _as_block(list(itertools.combinations(range(range_), size)), size)


def generate_masked_monotonic_np_core(
    mask : np.ndarray,
    range_ : int) -> np.ndarray:
    """
    Every tuple strictly increasing at the masked positions.
    Filters the full product, which keeps the backtracking order.
    """
    positions = np.flatnonzero(mask)
    rows = [
        t for t in itertools.product(range(range_), repeat=len(mask))
        if all(t[a] < t[b] for a, b in zip(positions[:-1], positions[1:]))
    ]
    return _as_block(rows, len(mask))
