"""
TENSORtools: Index-Set Operations

Generators of index tuples for iterating over multi-indexed objects:
all tuples, strictly increasing tuples, and tuples increasing only on a
masked subset of positions.

Author: James R. Beattie

"""

import numpy as np
from typing import Sequence
from .constants import *
from .core_functions import *
from ...exceptions import InvalidArgument


class IndexOperations:
    """
    A class to generate index sets.
    No data objects. Only methods.

    """
    def __init__(
        self,
        use_numba: bool = True):
        """
        Initialize the IndexOperations class.

        Args:
            use_numba (bool, optional): use Numba core functions. Defaults to True.
        """
        self.use_numba = use_numba


    def count_all(
        self,
        size: int,
        range_: int) -> int:
        return range_ ** size


    def count_monotonic(
        self,
        size: int,
        range_: int) -> int:
        return count_masked_monotonic(np.ones(size, dtype=MASK_DTYPE), range_)


    def count_monotonic_masked(
        self,
        mask: Sequence[bool],
        range_: int) -> int:
        return count_masked_monotonic(np.asarray(mask, dtype=MASK_DTYPE), range_)


    def generate_all(
        self,
        size: int,
        range_: int) -> np.ndarray:
        """
        All tuples of length size with components in [0, range_).
        Position 0 varies slowest, so row r addresses flat offset r.
        """
        self._check_sizes(size, range_)
        if self.use_numba:
            return self._run_nb_core(np.zeros(size, dtype=MASK_DTYPE), range_)
        return generate_all_np_core(size, range_)


    def generate_monotonic(
        self,
        size: int,
        range_: int) -> np.ndarray:
        """
        All strictly increasing tuples of length size, in lexicographic order.
        """
        self._check_sizes(size, range_)
        self.check_monotonic_range(size, range_)
        if self.use_numba:
            return self._run_nb_core(np.ones(size, dtype=MASK_DTYPE), range_)
        return generate_monotonic_np_core(size, range_)


    def generate_monotonic_masked(
        self,
        mask: Sequence[bool],
        range_: int) -> np.ndarray:
        """
        All tuples increasing at the mask-true positions, each relative to the
        previous mask-true position. Mask-false positions are unconstrained.
        """
        mask = np.asarray(mask, dtype=MASK_DTYPE)
        self._check_sizes(mask.shape[0], range_)
        self.check_monotonic_range(int(np.count_nonzero(mask)), range_)
        if self.use_numba:
            return self._run_nb_core(mask, range_)
        return generate_masked_monotonic_np_core(mask, range_)


    def _run_nb_core(
        self,
        mask: np.ndarray,
        range_: int) -> np.ndarray:
        out = np.empty((count_masked_monotonic(mask, range_), mask.shape[0]),
                       dtype=INDEX_DTYPE)
        masked_monotonic_nb_core(np.ascontiguousarray(mask), range_, out)
        return out


    @staticmethod
    def check_monotonic_range(
        ordered: int,
        range_: int) -> None:
        """Strictly increasing runs of length ordered need range_ >= ordered"""
        if range_ < ordered:
            raise InvalidArgument("Unable to create monotonic index set",
                                  expected=f"range >= {ordered}", got=range_)


    @staticmethod
    def _check_sizes(size: int, range_: int) -> None:
        if size < 0 or range_ < 0:
            raise InvalidArgument("Size and range must be non-negative", got=(size, range_))
