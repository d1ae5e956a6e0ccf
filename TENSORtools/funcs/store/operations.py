"""
TENSORtools: Coordinate Store

A multi-indexed container of scalars. A store of dimension d > 0 has exactly
``range`` children of dimension d - 1; a store of dimension 0 is a single
scalar. All coordinates of a store live in one contiguous numpy buffer and
every child or leaf handed out is a view into that buffer, so writing through
it mutates the parent.

Author: James R. Beattie

"""

import numpy as np
from typing import Sequence, Union
from .constants import *
from .core_functions import *
from ...exceptions import InvalidArgument, check_length


class CoordinateStore:
    """
    Multi-indexed store of tensor coordinates over a flat buffer.

    """
    def __init__(
        self,
        data: np.ndarray,
        dimension: int,
        range_: int,
        use_numba: bool = True) -> None:
        """
        Wrap an existing flat buffer. The buffer is not copied.

        Args:
            data (np.ndarray): 1D buffer of range_**dimension coordinates.
            dimension (int): number of indices addressing a coordinate.
            range_ (int): number of values each index runs over.
            use_numba (bool, optional): use Numba core functions. Defaults to True.
        """
        if dimension < 0 or range_ < 0:
            raise InvalidArgument("Store dimension and range must be non-negative",
                                  got=(dimension, range_))
        if data.ndim != 1 or data.shape[0] != range_ ** dimension:
            raise InvalidArgument("Store buffer has the wrong size",
                                  expected=range_ ** dimension, got=data.shape)
        self.data = data
        self.dimension = dimension
        self.range = range_
        self.use_numba = use_numba


    @classmethod
    def deep_construct(
        cls,
        dimension: int,
        range_: int,
        precision: str = DEFAULT_PRECISION,
        use_numba: bool = True) -> "CoordinateStore":
        """
        Build a zero-initialised store of the given depth and per-level width.
        Dimension 0 yields a single zero scalar.
        """
        if precision not in SUPPORTED_PRECISIONS:
            raise InvalidArgument("Unsupported precision",
                                  expected=SUPPORTED_PRECISIONS, got=precision)
        if dimension < 0 or range_ < 0:
            raise InvalidArgument("Store dimension and range must be non-negative",
                                  got=(dimension, range_))
        data = np.zeros(range_ ** dimension, dtype=PRECISION_DTYPES[precision])
        return cls(data, dimension, range_, use_numba=use_numba)


    @property
    def size(self) -> int:
        return self.data.shape[0]


    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype


    @property
    def value(self) -> float:
        """The scalar held by a dimension-0 store"""
        if self.dimension != 0:
            raise InvalidArgument("Only a scalar store holds a value", got=self.dimension)
        return float(self.data[0])


    @value.setter
    def value(self, new_value: float) -> None:
        if self.dimension != 0:
            raise InvalidArgument("Only a scalar store holds a value", got=self.dimension)
        self.data[0] = new_value


    def offset(
        self,
        indices: Sequence[int]) -> int:
        """
        Flat buffer offset of the coordinate addressed by indices.
        """
        check_length("index tuple", indices, self.dimension)
        indices = np.asarray(indices)
        if indices.size > 0 and not np.issubdtype(indices.dtype, np.integer):
            raise InvalidArgument("Index components must be integers", got=indices.dtype)
        indices = indices.astype(INDEX_DTYPE, copy=False)
        if np.any(indices < 0) or np.any(indices >= self.range):
            raise InvalidArgument("Index out of range",
                                  expected=f"[0, {self.range})", got=tuple(indices.tolist()))
        if self.use_numba:
            return int(flat_offset_nb_core(np.ascontiguousarray(indices), self.range))
        return flat_offset_np_core(indices, self.range)


    def access(
        self,
        indices: Sequence[int]) -> "CoordinateStore":
        """
        Deep addressing: returns a dimension-0 store aliasing the addressed
        coordinate. Assigning to its ``value`` writes into this store.
        """
        start = self.offset(indices)
        return CoordinateStore(self.data[start:start + 1], 0, self.range,
                               use_numba=self.use_numba)


    def get_item(
        self,
        i: int) -> "CoordinateStore":
        """
        One-level addressing: the i-th child as a view of dimension - 1.
        """
        self._check_child_index(i)
        block = self.range ** (self.dimension - 1)
        return CoordinateStore(self.data[i * block:(i + 1) * block],
                               self.dimension - 1, self.range,
                               use_numba=self.use_numba)


    def set_item(
        self,
        i: int,
        child: "CoordinateStore") -> None:
        """
        One-level assignment: copy child's coordinates into the i-th slot.
        The child is copied, not attached, so later writes through it do not
        reach this store.
        """
        if child.dimension != self.dimension - 1:
            raise InvalidArgument("Inconsistent dimensions",
                                  expected=self.dimension - 1, got=child.dimension)
        if child.dimension > 0 and child.range != self.range:
            raise InvalidArgument("Inconsistent ranges", expected=self.range, got=child.range)
        self._check_child_index(i)
        block = self.range ** (self.dimension - 1)
        self.data[i * block:(i + 1) * block] = child.data


    def multiply(
        self,
        scalar: Union[float, "CoordinateStore"]) -> None:
        """
        Scale every coordinate in place.
        """
        if isinstance(scalar, CoordinateStore):
            scalar = scalar.value
        self.data *= self.data.dtype.type(scalar)


    def as_array(self) -> np.ndarray:
        """(n,)*dimension view of the buffer"""
        return self.data.reshape((self.range,) * self.dimension)


    def copy(self) -> "CoordinateStore":
        return CoordinateStore(self.data.copy(), self.dimension, self.range,
                               use_numba=self.use_numba)


    def __getitem__(self, i: int) -> "CoordinateStore":
        return self.get_item(i)


    def __setitem__(self, i: int, child: "CoordinateStore") -> None:
        self.set_item(i, child)


    def __len__(self) -> int:
        return self.range if self.dimension > 0 else 0


    def __repr__(self) -> str:
        if self.dimension == 0:
            return f"CoordinateStore(value={self.data[0]!r})"
        return (f"CoordinateStore(dimension={self.dimension}, range={self.range}, "
                f"dtype={self.data.dtype})")


    def _check_child_index(self, i: int) -> None:
        if self.dimension == 0:
            raise InvalidArgument("A scalar store has no children")
        if not 0 <= i < self.range:
            raise InvalidArgument("Child index out of range",
                                  expected=f"[0, {self.range})", got=i)
