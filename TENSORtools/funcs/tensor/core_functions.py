from numba import njit, prange
import numpy as np
from typing import Sequence, Tuple
from .constants import *
from ..store.core_functions import flat_offset_nb_core

##########################################################################################
# Core numba JIT functions for tensor operations
##########################################################################################

@njit(sig_iterate_rows, cache=True)
def iterate_rows_nb_core(
    depth,
    arity):
    """
    Packing rule: index 0 runs along rows, index 1 along columns, then even
    depths along columns and odd depths along rows. A lone index (arity 1)
    runs along the columns of a single row.
    """
    if arity == 1:
        return False
    return depth == 0 or (depth != 1 and depth % 2 == 1)


@njit(sig_pack_offsets, cache=True)
def pack_offsets_nb_core(
    index_block,
    range_,
    out_rows,
    out_cols):
    """
    Matrix cell of every index tuple. The index at depth d contributes
    index * n**(d // 2) to its row or column offset.
    """
    arity = index_block.shape[1]
    for r in range(index_block.shape[0]):
        row = 0
        col = 0
        for d in range(arity):
            weight = 1
            for _ in range(d // 2):
                weight *= range_
            if iterate_rows_nb_core(d, arity):
                row += index_block[r, d] * weight
            else:
                col += index_block[r, d] * weight
        out_rows[r] = row
        out_cols[r] = col


@njit([sig_evaluate_mlf_32, sig_evaluate_mlf_64], cache=True)
def evaluate_mlf_nb_core(
    coordinates,
    index_block,
    vectors,
    range_):
    """
    Sum over all index tuples i of prod_k vectors[k, i_k] * T[i]

    Args:
        coordinates: flat tensor coordinates (n**arity,)
        index_block: every index tuple (n**arity, arity)
        vectors: one vector per index slot (arity, n)
        range_: space dimension n
    """
    arity = index_block.shape[1]
    total = 0.0
    for r in range(index_block.shape[0]):
        prod = 1.0
        for k in range(arity):
            prod *= vectors[k, index_block[r, k]]
        total += prod * coordinates[flat_offset_nb_core(index_block[r], range_)]
    return total


@njit([sig_symmetrize_32, sig_symmetrize_64], parallel=True, cache=True)
def symmetrize_nb_core(
    coordinates,
    index_block,
    permutations,
    range_,
    out):
    """
    Fused kernel for symmetrization: out[i] = sum_s T[s(i)] over every
    permutation s, where s(i)[k] = i[s[k]]. Normalisation by k! is left
    to the caller.
    """
    arity = index_block.shape[1]
    for r in prange(index_block.shape[0]):
        idx = np.empty(arity, dtype=np.int64)
        total = 0.0
        for s in range(permutations.shape[0]):
            for k in range(arity):
                idx[k] = index_block[r, permutations[s, k]]
            total += coordinates[flat_offset_nb_core(idx, range_)]
        out[flat_offset_nb_core(index_block[r], range_)] = total


@njit([sig_alternate_32, sig_alternate_64], parallel=True, cache=True)
def alternate_nb_core(
    coordinates,
    monotonic_block,
    permutations,
    parities,
    range_,
    out):
    """
    Fused kernel for alternation. For every tuple i increasing on the
    permutable positions the signed sum sum_s sign(s) T[s(i)] is computed
    once and written, times sign(s), to every image s(i). Orbits of distinct
    rows are disjoint. Normalisation by k! is left to the caller.
    """
    arity = monotonic_block.shape[1]
    for r in prange(monotonic_block.shape[0]):
        idx = np.empty(arity, dtype=np.int64)
        total = 0.0
        for s in range(permutations.shape[0]):
            for k in range(arity):
                idx[k] = monotonic_block[r, permutations[s, k]]
            total += parities[s] * coordinates[flat_offset_nb_core(idx, range_)]
        for s in range(permutations.shape[0]):
            for k in range(arity):
                idx[k] = monotonic_block[r, permutations[s, k]]
            out[flat_offset_nb_core(idx, range_)] = parities[s] * total


@njit([sig_tensor_product_32, sig_tensor_product_64], cache=True)
def tensor_product_nb_core(
    lhs,
    rhs,
    lhs_block,
    rhs_block,
    lhs_p,
    lhs_q,
    rhs_p,
    rhs_q,
    range_,
    out):
    """
    Tensor product with the result index laid out as
    [lhs covariant, rhs covariant, lhs contravariant, rhs contravariant],
    each operand's own index reading [covariant, contravariant].
    """
    idx = np.empty(lhs_p + lhs_q + rhs_p + rhs_q, dtype=np.int64)
    for r in range(lhs_block.shape[0]):
        lhs_value = lhs[flat_offset_nb_core(lhs_block[r], range_)]
        for s in range(rhs_block.shape[0]):
            for k in range(lhs_q):
                idx[k] = lhs_block[r, k]
            for k in range(rhs_q):
                idx[lhs_q + k] = rhs_block[s, k]
            for k in range(lhs_p):
                idx[lhs_q + rhs_q + k] = lhs_block[r, lhs_q + k]
            for k in range(rhs_p):
                idx[lhs_q + rhs_q + lhs_p + k] = rhs_block[s, rhs_q + k]
            out[flat_offset_nb_core(idx, range_)] = \
                lhs_value * rhs[flat_offset_nb_core(rhs_block[s], range_)]


##########################################################################################
# Core numpy functions for tensor operations
##########################################################################################

def iterate_rows_np_core(
    depth : int,
    arity : int) -> bool:
    """
    Packing rule, see iterate_rows_nb_core.
    """
    if arity == 1:
        return False
    return depth == 0 or (depth != 1 and depth % 2 == 1)


def matrix_shape(
    arity : int,
    range_ : int) -> Tuple[int, int]:
    """
    Shape of the packed coordinate matrix: (n**(a//2), n**((a+1)//2))
    """
    return range_ ** (arity // 2), range_ ** ((arity + 1) // 2)


def pack_offsets_np_core(
    index_block : np.ndarray,
    range_ : int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the matrix cell of every index tuple.
    Args:
        index_block (np.ndarray) : (count, arity) array of index tuples
        range_ (int)             : space dimension n
    Returns:
        rows, cols (np.ndarray)  : (count,) row and column of each tuple
    """
    arity = index_block.shape[1]
    weights = np.array([range_ ** (d // 2) for d in range(arity)], dtype=np.int64)
    on_rows = np.array([iterate_rows_np_core(d, arity) for d in range(arity)], dtype=bool)
    rows = index_block[:, on_rows] @ weights[on_rows]
    cols = index_block[:, ~on_rows] @ weights[~on_rows]
    return rows.astype(np.int64), cols.astype(np.int64)


def evaluate_mlf_np_core(
    coordinates : np.ndarray,
    vectors : Sequence[np.ndarray]) -> float:
    """
    Contract a (n,)*arity coordinate array against one vector per index.
    Args:
        coordinates (np.ndarray) : (n,)*arity tensor coordinates
        vectors (Sequence)       : arity vectors of length n
    Returns:
        the value of the multilinear form
    """
    out = coordinates
    for vector in vectors:
        out = np.tensordot(vector, out, axes=([0], [0]))
    return float(out)


def permutation_sum_np_core(
    coordinates : np.ndarray,
    permutations : np.ndarray,
    signs : np.ndarray = None) -> np.ndarray:
    """
    Sum of the coordinate array over a group of index permutations,
    sum_s sign(s) T[s(i)], with s(i)[k] = i[s[k]].
    Args:
        coordinates (np.ndarray)  : (n,)*arity tensor coordinates
        permutations (np.ndarray) : (count, arity) permutation block
        signs (np.ndarray)        : (count,) weights, all ones if None
    Returns:
        (n,)*arity unnormalised sum
    """
    out = np.zeros_like(coordinates)
    for s, permutation in enumerate(permutations):
        term = np.transpose(coordinates, np.argsort(permutation))
        out += term if signs is None else signs[s] * term
    return out


def tensor_product_np_core(
    lhs : np.ndarray,
    rhs : np.ndarray,
    lhs_p : int,
    lhs_q : int,
    rhs_p : int,
    rhs_q : int) -> np.ndarray:
    """
    Outer product of two coordinate arrays, axes reordered to
    [lhs covariant, rhs covariant, lhs contravariant, rhs contravariant].
    """
    lhs_arity = lhs_p + lhs_q
    rhs_arity = rhs_p + rhs_q
    outer = np.multiply.outer(lhs, rhs)
    axes = (list(range(0, lhs_q))
            + list(range(lhs_arity, lhs_arity + rhs_q))
            + list(range(lhs_q, lhs_arity))
            + list(range(lhs_arity + rhs_q, lhs_arity + rhs_arity)))
    return np.ascontiguousarray(np.transpose(outer, axes))
