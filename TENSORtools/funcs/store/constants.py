"""
Type signatures and constants for the coordinate store.

Author: James R. Beattie
"""
from numba import types
import numpy as np

##############################################################################
# Global constants
##############################################################################

DEFAULT_PRECISION = 'float64'
SUPPORTED_PRECISIONS = ('float32', 'float64')
PRECISION_DTYPES = {
    'float32': np.float32,
    'float64': np.float64,
}
INDEX_DTYPE = np.int64


##############################################################################
# Type signatures for Numba functions
##############################################################################

# Mixed-radix offset of a single index tuple
sig_flat_offset = types.int64(
    types.int64[:],     # indices: (arity,)
    types.int64         # range_ (n)
)

# Mixed-radix offsets of a block of index tuples
sig_flat_offsets = types.void(
    types.int64[:, :],  # index_block: (count, arity)
    types.int64,        # range_ (n)
    types.int64[:]      # out: (count,)
)
