"""
TENSORtools Permutation Module

Provides permutations of index positions under a mask of fixed and permutable
positions, permutation parity, and substitution of index tuples.
"""

# Import main classes
from .operations import PermutationOperations, factorial


# Import core functions for advanced users
from .core_functions import (
    masked_permutations_nb_core,
    parity_nb_core,
    parity_block_nb_core,
    substitute_nb_core,
    masked_permutations_np_core,
    parity_np_core,
    substitute_np_core
)

# Define public API
__all__ = [
    'PermutationOperations',
    'factorial',
    # Core functions for advanced use
    'masked_permutations_nb_core',
    'parity_nb_core',
    'parity_block_nb_core',
    'substitute_nb_core',
    'masked_permutations_np_core',
    'parity_np_core',
    'substitute_np_core'
]
