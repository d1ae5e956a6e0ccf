"""
TENSORtools

A toolkit (JIT compiled) for tensor algebra over finite-dimensional vector
spaces: tensors of valence (p, q) stored as multi-indexed coordinate arrays,
with multilinear form evaluation, symmetrization, alternation, tensor and
wedge products, and packing of the coordinates into a flat matrix.
"""

from .exceptions import InvalidArgument, TensorToolsError
from .funcs import (
    CoordinateStore,
    IndexOperations,
    PermutationOperations,
    Tensor,
    factorial
)

# Version info
__version__ = "0.1.0"
__author__ = "James R. Beattie"

__all__ = [
    'Tensor',
    'CoordinateStore',
    'IndexOperations',
    'PermutationOperations',
    'factorial',
    'InvalidArgument',
    'TensorToolsError'
]
