"""
TENSORtools: Tensor Operations

This module provides the Tensor class: a tensor of valence (p, q) over an
n-dimensional space, with the operations of tensor algebra (multilinear form
evaluation, symmetrization, alternation, tensor and wedge products, scaling,
addition, and packing of the coordinates into a matrix).

Coordinates are held in a CoordinateStore. Iteration over the coordinates is
driven by the index-set and permutation generators, and the heavy loops run
in fused Numba kernels over the flat coordinate buffer. Every kernel has a
NumPy counterpart selected with use_numba=False.

Author: James R. Beattie

"""

import numpy as np
from typing import Dict, Optional, Sequence, Tuple, Union
from .constants import *
from .core_functions import *
from ..indices import IndexOperations
from ..permutations import PermutationOperations, factorial
from ..store import CoordinateStore
from ..store.constants import DEFAULT_PRECISION, PRECISION_DTYPES, SUPPORTED_PRECISIONS
from ...exceptions import InvalidArgument, check_length


class Tensor:
    """
    A tensor of valence (p, q) over an n-dimensional space.

    The p contravariant and q covariant slots give arity p + q; a coordinate
    is addressed by a tuple of arity indices in [0, n), covariant slots first.
    """
    def __init__(
        self,
        p: int,
        q: int,
        n: int,
        use_numba: bool = True,
        precision: str = DEFAULT_PRECISION,
        verbose: bool = False) -> None:
        """
        Construct a zero tensor of valence (p, q) over an n-dimensional space.

        Args:
            p (int): number of contravariant indices.
            q (int): number of covariant indices.
            n (int): dimension of the underlying space.
            use_numba (bool, optional): use Numba core functions. Defaults to True.
            precision (str, optional): 'float32' or 'float64'. Defaults to 'float64'.
            verbose (bool, optional): print progress of the heavy operations.
                Defaults to False.
        """
        if p < 0 or q < 0 or n < 0:
            raise InvalidArgument("Valence and dimension must be non-negative", got=(p, q, n))
        if precision not in SUPPORTED_PRECISIONS:
            raise InvalidArgument("precision must be 'float32' or 'float64'", got=precision)

        self.p = p
        self.q = q
        self.n = n
        self.arity = p + q
        self.use_numba = use_numba
        self.precision = precision
        self.verbose = verbose

        if precision == 'float32' and self.arity > FLOAT32_MAX_ARITY:
            print(f"Warning: float32 coordinates with arity {self.arity} lose precision "
                  f"under 1/{self.arity}! normalisation")

        self.store = CoordinateStore.deep_construct(self.arity, n, precision=precision,
                                                    use_numba=use_numba)
        self._index_ops = IndexOperations(use_numba=use_numba)
        self._permutation_ops = PermutationOperations(use_numba=use_numba)
        self._index_block = None


    @classmethod
    def from_matrix(
        cls,
        matrix: Union[np.ndarray, Sequence[Sequence[float]]],
        p: int,
        q: int,
        n: int,
        **kwargs) -> "Tensor":
        """
        Build a tensor from its packed coordinate matrix. The first index runs
        along the rows, the second along the columns, the third over
        first-level blocks along the columns, the fourth over first-level
        blocks along the rows, the fifth over second-level blocks along the
        columns, and so on.

        The matrix must have shape (n**(a//2), n**((a+1)//2)), a = p + q.
        """
        tensor = cls(p, q, n, **kwargs)
        shape = matrix_shape(tensor.arity, n)
        try:
            matrix = np.asarray(matrix, dtype=tensor.store.dtype)
        except ValueError as err:
            raise InvalidArgument("Invalid coordinate matrix", expected=shape,
                                  got=str(err)) from err
        if matrix.shape != shape:
            raise InvalidArgument("Invalid coordinate matrix shape", expected=shape,
                                  got=matrix.shape)
        rows, cols = tensor._pack_offsets()
        tensor.store.data[:] = matrix[rows, cols]
        return tensor


    def to_matrix(self) -> np.ndarray:
        """
        Pack the coordinates into a matrix, the inverse of from_matrix.
        """
        matrix = np.zeros(matrix_shape(self.arity, self.n), dtype=self.store.dtype)
        rows, cols = self._pack_offsets()
        matrix[rows, cols] = self.store.data
        return matrix


    def evaluate(
        self,
        *vectors: Sequence[float]) -> float:
        """
        Value of the multilinear form defined by the coordinates on the given
        vectors: sum_i (prod_k vectors[k][i_k]) * T[i].
        """
        if len(vectors) != self.arity:
            raise InvalidArgument("Invalid argument list", expected=self.arity, got=len(vectors))
        block = np.zeros((self.arity, self.n), dtype=np.float64)
        for k, vector in enumerate(vectors):
            vector = np.asarray(vector, dtype=np.float64)
            if vector.shape != (self.n,):
                raise InvalidArgument(f"Invalid vector {k}", expected=(self.n,), got=vector.shape)
            block[k] = vector

        if self.use_numba:
            return float(evaluate_mlf_nb_core(self.store.data, self._all_indices(),
                                              block, self.n))
        return evaluate_mlf_np_core(self.store.as_array(), block)


    def decompose_antisymmetric(self) -> Dict[Tuple[int, ...], float]:
        """
        Coefficients of an antisymmetric tensor in the basis of the subspace
        of antisymmetric tensors, keyed by strictly increasing index tuples.

        These coincide with the coordinates at the increasing tuples. The
        tensor is assumed to be antisymmetric; this is not checked.
        Arity above n raises InvalidArgument.
        """
        monotonic = self._index_ops.generate_monotonic(self.arity, self.n)
        return {
            tuple(int(i) for i in row): self.store.access(row).value
            for row in monotonic
        }


    def symmetrize(
        self,
        mask: Optional[Sequence[bool]] = None) -> "Tensor":
        """
        Symmetrize over the mask-true index positions (all of them by default).
        """
        mask = self._mask_for(mask, "symmetrizing")
        permutable = int(np.count_nonzero(mask))
        result = self._empty_like(self.p, self.q)
        permutations = self._permutation_ops.generate(mask)
        if self.verbose:
            print(f"Symmetrizing {self.store.size:,} coordinates over "
                  f"{permutations.shape[0]:,} permutations")

        if self.use_numba:
            symmetrize_nb_core(self.store.data, self._all_indices(), permutations,
                               self.n, result.store.data)
        else:
            result.store.data[:] = permutation_sum_np_core(
                self.store.as_array(), permutations).ravel()

        result.multiply(1.0 / factorial(permutable))
        return result


    def alternate(
        self,
        mask: Optional[Sequence[bool]] = None) -> "Tensor":
        """
        Alternate (antisymmetrize) over the mask-true index positions (all of
        them by default). Each orbit of an increasing index tuple is summed
        once and written to all of its images with the permutation's sign.
        More mask-true positions than n raises InvalidArgument.
        """
        mask = self._mask_for(mask, "alternating")
        permutable = int(np.count_nonzero(mask))
        self._index_ops.check_monotonic_range(permutable, self.n)
        result = self._empty_like(self.p, self.q)
        permutations = self._permutation_ops.generate(mask)
        parities = self._permutation_ops.parities(permutations, mask)
        if self.verbose:
            print(f"Alternating {self.store.size:,} coordinates over "
                  f"{permutations.shape[0]:,} permutations")

        if self.use_numba:
            monotonic = self._index_ops.generate_monotonic_masked(mask, self.n)
            alternate_nb_core(self.store.data, monotonic, permutations, parities,
                              self.n, result.store.data)
        else:
            result.store.data[:] = permutation_sum_np_core(
                self.store.as_array(), permutations, parities).ravel()

        result.multiply(1.0 / factorial(permutable))
        return result


    def tensor_product(
        self,
        rhs: "Tensor") -> "Tensor":
        """
        Tensor product. The result has valence (p + rhs.p, q + rhs.q) and its
        index reads [covariant of self, covariant of rhs,
        contravariant of self, contravariant of rhs].
        """
        if self.n != rhs.n:
            raise InvalidArgument("Invalid dimension", expected=self.n, got=rhs.n)
        result = self._empty_like(self.p + rhs.p, self.q + rhs.q)
        rhs_data = rhs.store.data.astype(result.store.dtype, copy=False)
        if self.verbose:
            print(f"Tensor product of {self.store.size:,} x {rhs.store.size:,} coordinates")

        if self.use_numba:
            tensor_product_nb_core(self.store.data, rhs_data,
                                   self._all_indices(), rhs._all_indices(),
                                   self.p, self.q, rhs.p, rhs.q,
                                   self.n, result.store.data)
        else:
            result.store.data[:] = tensor_product_np_core(
                self.store.as_array(), rhs_data.reshape((self.n,) * rhs.arity),
                self.p, self.q, rhs.p, rhs.q).ravel()
        return result


    def wedge_product(
        self,
        rhs: "Tensor") -> "Tensor":
        """
        Wedge product u ^ v = (a + b)! / (a! b!) * Alt(u (x) v).
        The operands are assumed to be antisymmetric; this is not checked.
        """
        if self.n != rhs.n:
            raise InvalidArgument("Invalid dimension", expected=self.n, got=rhs.n)
        product = self.tensor_product(rhs)
        return product.alternate().multiply(
            factorial(self.arity + rhs.arity)
            / (factorial(self.arity) * factorial(rhs.arity)))


    def multiply(
        self,
        scalar: float) -> "Tensor":
        """
        Scale the coordinates in place. Returns self.
        """
        self.store.multiply(scalar)
        return self


    def add(
        self,
        rhs: "Tensor") -> "Tensor":
        """
        Add rhs coordinate-wise in place. Returns self.
        """
        if rhs.n != self.n or rhs.p != self.p or rhs.q != self.q:
            raise InvalidArgument("Invalid operand", expected=(self.p, self.q, self.n),
                                  got=(rhs.p, rhs.q, rhs.n))
        self.store.data += rhs.store.data.astype(self.store.dtype, copy=False)
        return self


    def copy(self) -> "Tensor":
        result = self._empty_like(self.p, self.q)
        result.store.data[:] = self.store.data
        return result


    def allclose(
        self,
        other: "Tensor",
        atol: float = DEFAULT_ATOL) -> bool:
        """Same valence and dimension, coordinates equal within atol"""
        if (self.p, self.q, self.n) != (other.p, other.q, other.n):
            return False
        return bool(np.allclose(self.store.data, other.store.data, rtol=0.0, atol=atol))


    def is_symmetric(
        self,
        mask: Optional[Sequence[bool]] = None,
        atol: float = DEFAULT_ATOL) -> bool:
        return self.allclose(self.symmetrize(mask), atol=atol)


    def is_antisymmetric(
        self,
        mask: Optional[Sequence[bool]] = None,
        atol: float = DEFAULT_ATOL) -> bool:
        return self.allclose(self.alternate(mask), atol=atol)


    def __call__(self, *vectors: Sequence[float]) -> float:
        return self.evaluate(*vectors)


    def __getitem__(self, indices: Union[int, Sequence[int]]) -> float:
        return self.store.access(self._as_index(indices)).value


    def __setitem__(self, indices: Union[int, Sequence[int]], value: float) -> None:
        self.store.access(self._as_index(indices)).value = value


    def __add__(self, rhs: "Tensor") -> "Tensor":
        return self.copy().add(rhs)


    def __mul__(self, scalar: float) -> "Tensor":
        return self.copy().multiply(scalar)


    __rmul__ = __mul__


    def __matmul__(self, rhs: "Tensor") -> "Tensor":
        return self.tensor_product(rhs)


    def __xor__(self, rhs: "Tensor") -> "Tensor":
        return self.wedge_product(rhs)


    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return ((self.p, self.q, self.n) == (other.p, other.q, other.n)
                and bool(np.array_equal(self.store.data, other.store.data)))


    __hash__ = None


    def __repr__(self) -> str:
        return (f"Tensor(p={self.p}, q={self.q}, n={self.n}, "
                f"precision='{self.precision}')")


    def _empty_like(
        self,
        p: int,
        q: int) -> "Tensor":
        return Tensor(p, q, self.n, use_numba=self.use_numba,
                      precision=self.precision, verbose=self.verbose)


    def _all_indices(self) -> np.ndarray:
        # every index tuple; row r addresses flat offset r
        if self._index_block is None:
            self._index_block = self._index_ops.generate_all(self.arity, self.n)
        return self._index_block


    def _pack_offsets(self) -> Tuple[np.ndarray, np.ndarray]:
        if self.use_numba:
            rows = np.empty(self.store.size, dtype=np.int64)
            cols = np.empty(self.store.size, dtype=np.int64)
            pack_offsets_nb_core(self._all_indices(), self.n, rows, cols)
            return rows, cols
        return pack_offsets_np_core(self._all_indices(), self.n)


    def _mask_for(
        self,
        mask: Optional[Sequence[bool]],
        purpose: str) -> np.ndarray:
        if mask is None:
            return np.ones(self.arity, dtype=np.bool_)
        mask = np.asarray(mask, dtype=np.bool_)
        if mask.shape != (self.arity,):
            raise InvalidArgument(f"Invalid {purpose} mask", expected=self.arity,
                                  got=mask.shape[0] if mask.ndim == 1 else mask.shape)
        return mask


    def _as_index(
        self,
        indices: Union[int, Sequence[int]]) -> Sequence[int]:
        if np.isscalar(indices):
            indices = (indices,)
        check_length("index tuple", indices, self.arity)
        return indices
