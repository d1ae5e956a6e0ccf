"""
TENSORtools Index-Set Module

Provides generators of index tuples for iterating over multi-indexed
objects: unconstrained, fully monotonic and mask-partial monotonic sets.
"""

# Import main classes
from .operations import IndexOperations


# Import core functions for advanced users
from .core_functions import (
    count_masked_monotonic,
    masked_monotonic_nb_core,
    generate_all_np_core,
    generate_monotonic_np_core,
    generate_masked_monotonic_np_core
)

# Define public API
__all__ = [
    'IndexOperations',
    # Core functions for advanced use
    'count_masked_monotonic',
    'masked_monotonic_nb_core',
    'generate_all_np_core',
    'generate_monotonic_np_core',
    'generate_masked_monotonic_np_core'
]
