"""
TENSORtools Coordinate Store Module

Provides the multi-indexed scalar container that holds tensor coordinates.
Coordinates live in one contiguous buffer addressed by the mixed-radix
encoding of the index tuple; children and scalar leaves are views into it.
"""

# Import main classes
from .operations import CoordinateStore


# Import core functions for advanced users
from .core_functions import (
    flat_offset_nb_core,
    flat_offsets_nb_core,
    flat_offset_np_core,
    flat_offsets_np_core
)

# Define public API
__all__ = [
    'CoordinateStore',
    # Core functions for advanced use
    'flat_offset_nb_core',
    'flat_offsets_nb_core',
    'flat_offset_np_core',
    'flat_offsets_np_core'
]
