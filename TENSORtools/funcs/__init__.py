"""
TENSORtools function modules.

Each submodule keeps its Numba type signatures in constants.py, its JIT
kernels and NumPy fallbacks in core_functions.py, and its public class in
operations.py.
"""

from .store import CoordinateStore
from .indices import IndexOperations
from .permutations import PermutationOperations, factorial
from .tensor import Tensor

__all__ = [
    'CoordinateStore',
    'IndexOperations',
    'PermutationOperations',
    'factorial',
    'Tensor'
]
