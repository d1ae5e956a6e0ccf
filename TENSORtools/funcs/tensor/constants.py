from numba import types

##############################################################################
# Global constants
##############################################################################

DEFAULT_ATOL = 1e-10        # for symmetry checks and comparisons
FLOAT32_MAX_ARITY = 6       # above this 1/k! normalisation loses float32 digits


##############################################################################
# Type signatures for Numba functions
##############################################################################

# Packing rule: does the index at this depth run along the matrix rows
sig_iterate_rows = types.boolean(
    types.int64,                # depth
    types.int64                 # arity
)

# Matrix cell (row, col) of every index tuple
sig_pack_offsets = types.void(
    types.int64[:, :],          # index_block: (n**arity, arity)
    types.int64,                # range_ (n)
    types.int64[:],             # out_rows: (n**arity,)
    types.int64[:]              # out_cols: (n**arity,)
)

# Multilinear form evaluation
sig_evaluate_mlf_32 = types.float64(
    types.float32[:],           # coordinates: (n**arity,)
    types.int64[:, :],          # index_block: (n**arity, arity)
    types.float64[:, :],        # vectors: (arity, n)
    types.int64                 # range_ (n)
)
sig_evaluate_mlf_64 = types.float64(
    types.float64[:],           # coordinates: (n**arity,)
    types.int64[:, :],          # index_block: (n**arity, arity)
    types.float64[:, :],        # vectors: (arity, n)
    types.int64                 # range_ (n)
)

# Symmetrization (unnormalised permutation sums)
sig_symmetrize_32 = types.void(
    types.float32[:],           # coordinates: (n**arity,)
    types.int64[:, :],          # index_block: (n**arity, arity)
    types.int64[:, :],          # permutations: (k!, arity)
    types.int64,                # range_ (n)
    types.float32[:]            # out: (n**arity,)
)
sig_symmetrize_64 = types.void(
    types.float64[:],           # coordinates: (n**arity,)
    types.int64[:, :],          # index_block: (n**arity, arity)
    types.int64[:, :],          # permutations: (k!, arity)
    types.int64,                # range_ (n)
    types.float64[:]            # out: (n**arity,)
)

# Alternation (unnormalised signed permutation sums, one orbit per row)
sig_alternate_32 = types.void(
    types.float32[:],           # coordinates: (n**arity,)
    types.int64[:, :],          # monotonic_block: (count, arity)
    types.int64[:, :],          # permutations: (k!, arity)
    types.int64[:],             # parities: (k!,)
    types.int64,                # range_ (n)
    types.float32[:]            # out: (n**arity,)
)
sig_alternate_64 = types.void(
    types.float64[:],           # coordinates: (n**arity,)
    types.int64[:, :],          # monotonic_block: (count, arity)
    types.int64[:, :],          # permutations: (k!, arity)
    types.int64[:],             # parities: (k!,)
    types.int64,                # range_ (n)
    types.float64[:]            # out: (n**arity,)
)

# Tensor product
sig_tensor_product_32 = types.void(
    types.float32[:],           # lhs coordinates: (n**arity_lhs,)
    types.float32[:],           # rhs coordinates: (n**arity_rhs,)
    types.int64[:, :],          # lhs index block: (n**arity_lhs, arity_lhs)
    types.int64[:, :],          # rhs index block: (n**arity_rhs, arity_rhs)
    types.int64, types.int64,   # lhs p, q
    types.int64, types.int64,   # rhs p, q
    types.int64,                # range_ (n)
    types.float32[:]            # out: (n**(arity_lhs + arity_rhs),)
)
sig_tensor_product_64 = types.void(
    types.float64[:],           # lhs coordinates: (n**arity_lhs,)
    types.float64[:],           # rhs coordinates: (n**arity_rhs,)
    types.int64[:, :],          # lhs index block: (n**arity_lhs, arity_lhs)
    types.int64[:, :],          # rhs index block: (n**arity_rhs, arity_rhs)
    types.int64, types.int64,   # lhs p, q
    types.int64, types.int64,   # rhs p, q
    types.int64,                # range_ (n)
    types.float64[:]            # out: (n**(arity_lhs + arity_rhs),)
)
