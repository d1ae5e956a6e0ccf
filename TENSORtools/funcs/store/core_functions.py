"""
Core functions for the coordinate store.

A store of dimension d and range n keeps its n**d coordinates in one flat
buffer. The coordinate addressed by (i_0, ..., i_{d-1}) lives at the
mixed-radix offset sum_k i_k * n**(d-1-k), so the first index varies slowest.

Author: James R. Beattie
"""
import numpy as np
from numba import njit
from .constants import *

##########################################################################################
# Core numba JIT functions for flat addressing
##########################################################################################

@njit(sig_flat_offset, cache=True)
def flat_offset_nb_core(
    indices,
    range_):
    """
    Mixed-radix offset of one index tuple (Horner scheme)
    """
    offset = 0
    for k in range(indices.shape[0]):
        offset = offset * range_ + indices[k]
    return offset


@njit(sig_flat_offsets, cache=True)
def flat_offsets_nb_core(
    index_block,
    range_,
    out):
    """
    Mixed-radix offsets of every row of an index block

    Args:
        index_block: (count, arity) index tuples
        range_: number of values per index
        out: (count,) output offsets
    """
    for r in range(index_block.shape[0]):
        out[r] = flat_offset_nb_core(index_block[r], range_)


##########################################################################################
# Core numpy functions for flat addressing
##########################################################################################

def flat_offset_np_core(
    indices : np.ndarray,
    range_ : int) -> int:
    """
    Compute the flat offset of an index tuple with numpy.
    Args:
        indices (np.ndarray) : (arity,) index tuple
        range_ (int)         : number of values per index
    Returns:
        offset (int) : position of the coordinate in the flat buffer
    """
    if len(indices) == 0:
        return 0
    return int(np.ravel_multi_index(tuple(indices), (range_,) * len(indices)))


def flat_offsets_np_core(
    index_block : np.ndarray,
    range_ : int) -> np.ndarray:
    """
    Compute the flat offsets of a (count, arity) block of index tuples.
    """
    arity = index_block.shape[1]
    weights = range_ ** np.arange(arity - 1, -1, -1, dtype=INDEX_DTYPE)
    return index_block.astype(INDEX_DTYPE) @ weights
