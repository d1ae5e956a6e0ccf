"""
TENSORtools: Permutation Operations

Generates permutations of index positions (optionally restricted to a masked
subset of positions), computes their parity and applies them to index tuples.

Author: James R. Beattie

"""

import numpy as np
from typing import Optional, Sequence
from .constants import *
from .core_functions import *
from ...exceptions import InvalidArgument, check_length


def factorial(k: int) -> int:
    """k! from the precomputed table, exact beyond it"""
    if k < 0:
        raise InvalidArgument("Factorial of a negative number", got=k)
    if k <= MAX_FACTORIAL:
        return FACTORIALS[k]
    out = FACTORIALS[MAX_FACTORIAL]
    for m in range(MAX_FACTORIAL + 1, k + 1):
        out *= m
    return out


class PermutationOperations:
    """
    A class to generate and apply permutations.
    No data objects. Only methods.

    """
    def __init__(
        self,
        use_numba: bool = True):
        """
        Initialize the PermutationOperations class.

        Args:
            use_numba (bool, optional): use Numba core functions. Defaults to True.
        """
        self.use_numba = use_numba


    def generate_all(
        self,
        size: int) -> np.ndarray:
        """All size! permutations of {0, ..., size-1}"""
        if size < 0:
            raise InvalidArgument("Size must be non-negative", got=size)
        return self.generate(np.ones(size, dtype=MASK_DTYPE))


    def generate(
        self,
        mask: Sequence[bool]) -> np.ndarray:
        """
        All permutations that reassign the mask-true positions among the
        mask-true names; mask-false positions stay fixed.

        Returns:
            (k!, size) array, k = number of mask-true positions
        """
        mask = np.asarray(mask, dtype=MASK_DTYPE)
        if self.use_numba:
            out = np.empty((factorial(int(np.count_nonzero(mask))), mask.shape[0]),
                           dtype=INDEX_DTYPE)
            masked_permutations_nb_core(np.ascontiguousarray(mask), out)
            return out
        return masked_permutations_np_core(mask)


    def get_parity(
        self,
        permutation: Sequence[int],
        mask: Optional[Sequence[bool]] = None) -> int:
        """
        Sign of the permutation: +1 if the number of inversions is even,
        -1 if odd. With a mask only pairs of mask-true positions count.
        """
        permutation = np.ascontiguousarray(permutation, dtype=INDEX_DTYPE)
        mask = self._mask_for(permutation.shape[0], mask)
        if self.use_numba:
            return int(parity_nb_core(permutation, mask))
        return parity_np_core(permutation, mask)


    def parities(
        self,
        permutations: np.ndarray,
        mask: Optional[Sequence[bool]] = None) -> np.ndarray:
        """Signs of every row of a (count, size) permutation block"""
        permutations = np.ascontiguousarray(permutations, dtype=INDEX_DTYPE)
        mask = self._mask_for(permutations.shape[1], mask)
        if self.use_numba:
            out = np.empty(permutations.shape[0], dtype=INDEX_DTYPE)
            parity_block_nb_core(permutations, mask, out)
            return out
        return np.array([parity_np_core(row, mask) for row in permutations],
                        dtype=INDEX_DTYPE)


    def substitute(
        self,
        permutation: np.ndarray,
        names: Sequence[int]) -> np.ndarray:
        """
        Apply a permutation to an index tuple: result[i] = names[permutation[i]].

        The result is written into the permutation buffer, which is returned.
        Pass a copy if the permutation is needed afterwards.
        """
        names = np.ascontiguousarray(names, dtype=INDEX_DTYPE)
        check_length("name tuple", names, len(permutation))
        if self.use_numba and isinstance(permutation, np.ndarray) \
                and permutation.dtype == INDEX_DTYPE and permutation.flags.c_contiguous:
            substitute_nb_core(permutation, names)
            return permutation
        return substitute_np_core(permutation, names)


    def compose(
        self,
        first: Sequence[int],
        second: Sequence[int]) -> np.ndarray:
        """(first o second)[i] = first[second[i]]"""
        check_length("permutation", second, len(first))
        return np.asarray(first, dtype=INDEX_DTYPE)[np.asarray(second, dtype=INDEX_DTYPE)]


    def inverse(
        self,
        permutation: Sequence[int]) -> np.ndarray:
        return np.argsort(np.asarray(permutation, dtype=INDEX_DTYPE)).astype(INDEX_DTYPE)


    @staticmethod
    def _mask_for(
        size: int,
        mask: Optional[Sequence[bool]]) -> np.ndarray:
        if mask is None:
            return np.ones(size, dtype=MASK_DTYPE)
        mask = np.ascontiguousarray(mask, dtype=MASK_DTYPE)
        check_length("mask", mask, size)
        return mask
