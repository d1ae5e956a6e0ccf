"""
Type signatures and constants for index-set generation.

Author: James R. Beattie
"""
from numba import types
import numpy as np

##############################################################################
# Global constants
##############################################################################

INDEX_DTYPE = np.int64
MASK_DTYPE = np.bool_


##############################################################################
# Type signatures for Numba functions
##############################################################################

# Index tuples increasing at the masked positions. An all-false mask gives
# every tuple, an all-true mask the strictly increasing ones.
sig_masked_monotonic = types.void(
    types.boolean[:],       # mask: (size,)
    types.int64,            # range_
    types.int64[:, :]       # out: (count, size)
)
