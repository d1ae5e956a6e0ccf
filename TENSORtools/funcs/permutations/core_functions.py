"""
Core functions for permutations of index positions.

A permutation of {0, ..., size-1} is stored as an int64 array. Under a mask
only the mask-true positions are permuted, and only among the mask-true
names; every mask-false position keeps its own name.

Author: James R. Beattie
"""
import itertools
import numpy as np
from numba import njit
from .constants import *

##########################################################################################
# Core numba JIT functions for permutations
##########################################################################################

@njit(sig_masked_permutations, cache=True)
def masked_permutations_nb_core(
    mask,
    out):
    """
    Explicit-stack backtracking over the permutations of the masked
    positions, with a reusable marker buffer of used names.

    Args:
        mask: (size,) True where the position is permutable
        out: (k!, size) preallocated, k = number of masked positions
    """
    size = mask.shape[0]
    k = 0
    for i in range(size):
        if mask[i]:
            k += 1
    slots = np.empty(k, dtype=np.int64)
    j = 0
    for i in range(size):
        if mask[i]:
            slots[j] = i
            j += 1

    cur = np.arange(size)
    if k == 0:
        out[0, :] = cur
        return

    used = np.zeros(k, dtype=np.bool_)
    choice = np.full(k, -1, dtype=np.int64)   # name chosen at each depth
    row = 0
    depth = 0
    while depth >= 0:
        c = choice[depth]
        if c >= 0:
            used[c] = False
        c += 1
        while c < k and used[c]:
            c += 1
        if c == k:
            choice[depth] = -1
            depth -= 1
            continue
        choice[depth] = c
        used[c] = True
        cur[slots[depth]] = slots[c]
        if depth == k - 1:
            out[row, :] = cur
            row += 1
        else:
            depth += 1


@njit(sig_parity, cache=True)
def parity_nb_core(
    permutation,
    mask):
    """
    Sign of the permutation restricted to the masked positions:
    +1 for an even number of inversions, -1 for an odd one
    """
    inversions = 0
    for i in range(permutation.shape[0]):
        if not mask[i]:
            continue
        for j in range(i):
            if mask[j] and permutation[j] > permutation[i]:
                inversions += 1
    if inversions % 2 == 0:
        return 1
    return -1


@njit(sig_parity_block, cache=True)
def parity_block_nb_core(
    permutations,
    mask,
    out):
    """
    Signs of every row of a permutation block
    """
    for r in range(permutations.shape[0]):
        out[r] = parity_nb_core(permutations[r], mask)


@njit(sig_substitute, cache=True)
def substitute_nb_core(
    permutation,
    names):
    """
    Relabel in place: permutation[i] <- names[permutation[i]]
    """
    for i in range(permutation.shape[0]):
        permutation[i] = names[permutation[i]]


##########################################################################################
# Core numpy functions for permutations
##########################################################################################

def masked_permutations_np_core(
    mask : np.ndarray) -> np.ndarray:
    """
    Permutations of the masked positions in lexicographic order of the
    masked names, built on itertools.permutations.
    Returns:
        (k!, size) array of permutations
    """
    size = len(mask)
    slots = np.flatnonzero(mask)
    rows = []
    for names in itertools.permutations(slots.tolist()):
        row = np.arange(size, dtype=INDEX_DTYPE)
        row[slots] = names
        rows.append(row)
    return np.array(rows, dtype=INDEX_DTYPE).reshape(len(rows), size)


def parity_np_core(
    permutation : np.ndarray,
    mask : np.ndarray) -> int:
    """
    Count inversions among masked pairs with a broadcast comparison.
    """
    values = np.asarray(permutation)[np.asarray(mask, dtype=MASK_DTYPE)]
    inversions = np.count_nonzero(np.triu(values[:, None] > values[None, :], k=1))
    return EVEN if inversions % 2 == 0 else ODD


def substitute_np_core(
    permutation : np.ndarray,
    names : np.ndarray) -> np.ndarray:
    """
    Relabel in place with fancy indexing.
    """
    permutation[:] = np.asarray(names)[permutation]
    return permutation
