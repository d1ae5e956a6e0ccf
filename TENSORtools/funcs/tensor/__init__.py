"""
TENSORtools Tensor Module

Provides the Tensor class and the optimized kernels behind it: multilinear
form evaluation, symmetrization, alternation, tensor and wedge products, and
the packing of tensor coordinates into a flat matrix.
"""

# Import main classes
from .operations import Tensor


# Import core functions for advanced users
from .core_functions import (
    iterate_rows_nb_core,
    pack_offsets_nb_core,
    evaluate_mlf_nb_core,
    symmetrize_nb_core,
    alternate_nb_core,
    tensor_product_nb_core,
    iterate_rows_np_core,
    matrix_shape,
    pack_offsets_np_core,
    evaluate_mlf_np_core,
    permutation_sum_np_core,
    tensor_product_np_core
)

# Version info
__version__ = "1.0.0"
__author__ = "James R. Beattie"

# Define public API
__all__ = [
    'Tensor',
    # Core functions for advanced use
    'iterate_rows_nb_core',
    'pack_offsets_nb_core',
    'evaluate_mlf_nb_core',
    'symmetrize_nb_core',
    'alternate_nb_core',
    'tensor_product_nb_core',
    'iterate_rows_np_core',
    'matrix_shape',
    'pack_offsets_np_core',
    'evaluate_mlf_np_core',
    'permutation_sum_np_core',
    'tensor_product_np_core'
]
