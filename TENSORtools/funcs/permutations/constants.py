"""
Type signatures and constants for permutation generation.

Author: James R. Beattie
"""
from numba import types
import numpy as np
from scipy.special import factorial

##############################################################################
# Global constants
##############################################################################

INDEX_DTYPE = np.int64
MASK_DTYPE = np.bool_

EVEN, ODD = 1, -1       # permutation signs

# k! for every k that fits an int64; tensor arities stay well below this
MAX_FACTORIAL = 20
FACTORIALS = tuple(int(factorial(k, exact=True)) for k in range(MAX_FACTORIAL + 1))


##############################################################################
# Type signatures for Numba functions
##############################################################################

# Permutations of the masked positions among the masked names
sig_masked_permutations = types.void(
    types.boolean[:],       # mask: (size,)
    types.int64[:, :]       # out: (k!, size)
)

# Sign of a permutation restricted to the masked positions
sig_parity = types.int64(
    types.int64[:],         # permutation: (size,)
    types.boolean[:]        # mask: (size,)
)

# Signs of a block of permutations
sig_parity_block = types.void(
    types.int64[:, :],      # permutations: (count, size)
    types.boolean[:],       # mask: (size,)
    types.int64[:]          # out: (count,)
)

# In-place relabelling permutation[i] <- names[permutation[i]]
sig_substitute = types.void(
    types.int64[:],         # permutation: (size,)
    types.int64[:]          # names: (size,)
)
