import numpy as np
import pytest

from TENSORtools import InvalidArgument, Tensor, factorial

ATOL = 1e-12


@pytest.fixture
def square(use_numba):
    # p=0, q=2, n=2 tensor with T[0,1] = 2 and T[1,0] = 3
    return Tensor.from_matrix([[1, 2], [3, 4]], 0, 2, 2, use_numba=use_numba)


##########################################################################################
# Worked scenarios
##########################################################################################

def test_symmetrize_scenario(square):
    np.testing.assert_allclose(square.symmetrize().to_matrix(), [[1, 2.5], [2.5, 4]])


def test_alternate_scenario(square):
    np.testing.assert_allclose(square.alternate().to_matrix(), [[0, -0.5], [0.5, 0]])


def test_evaluate_scenario(square):
    assert square.evaluate([1, 0], [0, 1]) == pytest.approx(2.0)
    assert square([0, 1], [1, 0]) == pytest.approx(3.0)
    assert square.evaluate([1, 1], [1, 1]) == pytest.approx(10.0)


def test_add_and_multiply_scenario(use_numba):
    lhs = Tensor.from_matrix([[1, 2]], 0, 1, 2, use_numba=use_numba)
    rhs = Tensor.from_matrix([[3, 4]], 0, 1, 2, use_numba=use_numba)
    result = lhs.add(rhs)
    assert result is lhs
    np.testing.assert_array_equal(lhs.to_matrix(), [[4, 6]])
    assert lhs.multiply(2) is lhs
    np.testing.assert_array_equal(lhs.to_matrix(), [[8, 12]])
    np.testing.assert_array_equal(rhs.to_matrix(), [[3, 4]])


def test_operands_left_untouched(square):
    before = square.to_matrix().copy()
    square.symmetrize()
    square.alternate()
    square.tensor_product(square)
    scalar = Tensor.from_matrix([[2]], 0, 0, 2, use_numba=square.use_numba)
    square.wedge_product(scalar)
    with pytest.raises(InvalidArgument):
        square.wedge_product(square)
    np.testing.assert_array_equal(square.to_matrix(), before)


##########################################################################################
# Algebraic properties
##########################################################################################

@pytest.mark.parametrize("valence", [(0, 2), (1, 2), (2, 2), (0, 3)])
def test_symmetrize_idempotent(random_tensor, valence):
    tensor = random_tensor(*valence, 3)
    once = tensor.symmetrize()
    assert once.symmetrize().allclose(once, atol=ATOL)
    assert once.is_symmetric()


@pytest.mark.parametrize("valence", [(0, 2), (1, 2), (2, 1), (0, 3)])
def test_alternate_of_symmetric_vanishes(random_tensor, valence):
    tensor = random_tensor(*valence, 3)
    alternated = tensor.symmetrize().alternate()
    np.testing.assert_allclose(alternated.store.data, 0.0, atol=ATOL)


@pytest.mark.parametrize("valence", [(0, 2), (1, 2), (0, 3)])
def test_alternate_idempotent_and_antisymmetric(random_tensor, valence):
    tensor = random_tensor(*valence, 3)
    alt = tensor.alternate()
    assert alt.alternate().allclose(alt, atol=ATOL)
    assert alt.is_antisymmetric()
    coords = alt.store.as_array()
    np.testing.assert_allclose(coords, -np.swapaxes(coords, 0, 1), atol=ATOL)


def test_alternate_more_slots_than_dimension(random_tensor):
    tensor = random_tensor(0, 3, 2)
    before = tensor.store.data.copy()
    with pytest.raises(InvalidArgument):
        tensor.alternate()
    np.testing.assert_array_equal(tensor.store.data, before)
    # two permutable slots fit in n = 2
    assert tensor.alternate([True, False, True]).is_antisymmetric([True, False, True])


def test_wedge_more_slots_than_dimension(use_numba):
    e1 = Tensor.from_matrix([[1.0]], 0, 1, 1, use_numba=use_numba)
    with pytest.raises(InvalidArgument):
        e1.wedge_product(e1)


def test_symmetrize_partial_mask(random_tensor):
    tensor = random_tensor(0, 3, 2)
    coords = tensor.store.as_array()
    result = tensor.symmetrize([True, True, False])
    expected = 0.5 * (coords + np.transpose(coords, (1, 0, 2)))
    np.testing.assert_allclose(result.store.as_array(), expected, atol=ATOL)


def test_alternate_partial_mask(random_tensor):
    tensor = random_tensor(1, 2, 3)
    coords = tensor.store.as_array()
    result = tensor.alternate([True, False, True])
    expected = 0.5 * (coords - np.transpose(coords, (2, 1, 0)))
    np.testing.assert_allclose(result.store.as_array(), expected, atol=ATOL)


def test_full_alternation_matches_signed_sum(random_tensor):
    tensor = random_tensor(0, 3, 3)
    coords = tensor.store.as_array()
    expected = (coords
                - np.transpose(coords, (1, 0, 2))
                - np.transpose(coords, (2, 1, 0))
                - np.transpose(coords, (0, 2, 1))
                + np.transpose(coords, (1, 2, 0))
                + np.transpose(coords, (2, 0, 1))) / 6.0
    np.testing.assert_allclose(tensor.alternate().store.as_array(), expected, atol=ATOL)


def test_evaluate_matches_einsum(random_tensor):
    tensor = random_tensor(1, 2, 3)
    rng = np.random.default_rng(7)
    u, v, w = rng.standard_normal((3, 3))
    expected = np.einsum('ijk,i,j,k->', tensor.store.as_array(), u, v, w)
    assert tensor.evaluate(u, v, w) == pytest.approx(expected)


def test_evaluate_scalar_tensor(use_numba):
    tensor = Tensor.from_matrix([[4.5]], 0, 0, 3, use_numba=use_numba)
    assert tensor.evaluate() == pytest.approx(4.5)


def test_tensor_product_layout(random_tensor):
    lhs = random_tensor(1, 1, 2)
    rhs = random_tensor(1, 1, 2)
    product = lhs.tensor_product(rhs)
    assert (product.p, product.q, product.arity) == (2, 2, 4)
    # [lhs covariant, rhs covariant, lhs contravariant, rhs contravariant]
    expected = np.einsum('ac,bd->abcd', lhs.store.as_array(), rhs.store.as_array())
    np.testing.assert_allclose(product.store.as_array(), expected, atol=ATOL)


def test_tensor_product_mixed_valence(random_tensor):
    lhs = random_tensor(2, 0, 2)
    rhs = random_tensor(0, 1, 2)
    product = lhs.tensor_product(rhs)
    assert (product.p, product.q) == (2, 1)
    expected = np.einsum('ab,c->cab', lhs.store.as_array(), rhs.store.as_array())
    np.testing.assert_allclose(product.store.as_array(), expected, atol=ATOL)


def test_wedge_of_basis_covectors(use_numba):
    e1 = Tensor.from_matrix([[1, 0]], 0, 1, 2, use_numba=use_numba)
    e2 = Tensor.from_matrix([[0, 1]], 0, 1, 2, use_numba=use_numba)
    np.testing.assert_allclose(e1.wedge_product(e2).to_matrix(), [[0, 1], [-1, 0]])
    np.testing.assert_allclose((e2 ^ e1).to_matrix(), [[0, -1], [1, 0]])


def test_wedge_normalisation(random_tensor):
    u = random_tensor(0, 1, 3)
    v = random_tensor(0, 2, 3).alternate()
    wedge = u.wedge_product(v)
    expected = u.tensor_product(v).alternate().multiply(
        factorial(3) / (factorial(1) * factorial(2)))
    assert wedge.allclose(expected, atol=ATOL)
    assert wedge.is_antisymmetric()


def test_multiply_chains(square):
    assert square.multiply(2).multiply(0.5) is square
    np.testing.assert_allclose(square.to_matrix(), [[1, 2], [3, 4]])


##########################################################################################
# Matrix packing
##########################################################################################

@pytest.mark.parametrize("p,q,n", [
    (0, 0, 3), (0, 1, 3), (1, 0, 2), (1, 1, 2), (2, 1, 2),
    (2, 2, 2), (1, 4, 2), (3, 0, 3), (3, 3, 2)])
def test_matrix_round_trip(random_tensor, p, q, n):
    tensor = random_tensor(p, q, n)
    matrix = tensor.to_matrix()
    assert matrix.shape == (n ** ((p + q) // 2), n ** ((p + q + 1) // 2))
    rebuilt = Tensor.from_matrix(matrix, p, q, n, use_numba=tensor.use_numba)
    assert rebuilt == tensor


def test_matrix_layout_arity_three(use_numba):
    matrix = np.arange(8, dtype=np.float64).reshape(2, 4)
    tensor = Tensor.from_matrix(matrix, 0, 3, 2, use_numba=use_numba)
    # row = i0, column = i1 + 2 * i2
    assert tensor[1, 1, 0] == matrix[1, 1]
    assert tensor[0, 0, 1] == matrix[0, 2]
    assert tensor[1, 0, 1] == matrix[1, 2]


def test_matrix_layout_arity_four(use_numba):
    matrix = np.arange(16, dtype=np.float64).reshape(4, 4)
    tensor = Tensor.from_matrix(matrix, 2, 2, 2, use_numba=use_numba)
    # row = i0 + 2 * i3, column = i1 + 2 * i2
    assert tensor[0, 1, 0, 0] == matrix[0, 1]
    assert tensor[0, 0, 1, 0] == matrix[0, 2]
    assert tensor[0, 0, 0, 1] == matrix[2, 0]
    assert tensor[1, 1, 1, 1] == matrix[3, 3]


def test_numba_and_numpy_packing_agree(random_tensor):
    tensor = random_tensor(2, 3, 2)
    other = Tensor.from_matrix(tensor.to_matrix(), 2, 3, 2, use_numba=not tensor.use_numba)
    np.testing.assert_array_equal(other.to_matrix(), tensor.to_matrix())
    assert other == tensor


##########################################################################################
# Decomposition, indexing and operators
##########################################################################################

def test_decompose_antisymmetric(random_tensor):
    alt = random_tensor(0, 2, 3).alternate()
    decomposition = alt.decompose_antisymmetric()
    assert list(decomposition) == [(0, 1), (0, 2), (1, 2)]
    for key, value in decomposition.items():
        assert value == alt[key]


def test_decompose_too_many_slots(random_tensor):
    with pytest.raises(InvalidArgument):
        random_tensor(0, 3, 2).decompose_antisymmetric()


def test_item_access(use_numba):
    tensor = Tensor(1, 1, 3, use_numba=use_numba)
    tensor[2, 1] = 7.0
    assert tensor[2, 1] == 7.0
    assert tensor.store.as_array()[2, 1] == 7.0
    vector = Tensor(0, 1, 3, use_numba=use_numba)
    vector[2] = 1.5
    assert vector[2] == 1.5
    with pytest.raises(InvalidArgument):
        tensor[0]
    with pytest.raises(InvalidArgument):
        tensor[0, 3]


def test_operators(square):
    total = square + square
    assert total is not square
    np.testing.assert_allclose(total.to_matrix(), [[2, 4], [6, 8]])
    np.testing.assert_allclose((3 * square).to_matrix(), [[3, 6], [9, 12]])
    np.testing.assert_allclose(square.to_matrix(), [[1, 2], [3, 4]])
    assert (square @ square) == square.tensor_product(square)


def test_float32_precision(use_numba):
    tensor = Tensor.from_matrix([[1, 2], [3, 4]], 0, 2, 2, use_numba=use_numba,
                                precision='float32')
    result = tensor.symmetrize()
    assert result.store.dtype == np.float32
    np.testing.assert_allclose(result.to_matrix(), [[1, 2.5], [2.5, 4]])
    np.testing.assert_allclose(tensor.alternate().to_matrix(), [[0, -0.5], [0.5, 0]])


def test_verbose_progress(capsys):
    tensor = Tensor(0, 2, 2, verbose=True)
    tensor.symmetrize()
    assert "Symmetrizing" in capsys.readouterr().out


def test_numba_matches_numpy():
    rng = np.random.default_rng(42)
    matrix = rng.standard_normal((3, 9))
    fast = Tensor.from_matrix(matrix, 1, 2, 3, use_numba=True)
    slow = Tensor.from_matrix(matrix, 1, 2, 3, use_numba=False)
    assert fast.symmetrize().allclose(slow.symmetrize(), atol=ATOL)
    assert fast.alternate().allclose(slow.alternate(), atol=ATOL)
    assert fast.alternate([False, True, True]).allclose(
        slow.alternate([False, True, True]), atol=ATOL)
    assert fast.tensor_product(fast).allclose(slow.tensor_product(slow), atol=ATOL)
    vectors = rng.standard_normal((3, 3))
    assert fast.evaluate(*vectors) == pytest.approx(slow.evaluate(*vectors))


##########################################################################################
# Invalid arguments
##########################################################################################

def test_invalid_arguments(square):
    with pytest.raises(InvalidArgument):
        square.evaluate([1, 0])
    with pytest.raises(InvalidArgument):
        square.evaluate([1, 0], [1, 0, 0])
    with pytest.raises(InvalidArgument):
        square.symmetrize([True])
    with pytest.raises(InvalidArgument):
        square.alternate([True, True, True])
    other = Tensor(0, 2, 3)
    with pytest.raises(InvalidArgument):
        square.tensor_product(other)
    with pytest.raises(InvalidArgument):
        square.wedge_product(other)
    with pytest.raises(InvalidArgument):
        Tensor.from_matrix([[1, 2, 3]], 0, 2, 2)
    with pytest.raises(InvalidArgument):
        Tensor.from_matrix([[1, 2], [3]], 0, 2, 2)
    with pytest.raises(InvalidArgument):
        square[0.9, 1]
    with pytest.raises(InvalidArgument):
        square[0.9, 1] = 1.0
    with pytest.raises(InvalidArgument):
        Tensor(0, 2, 2, precision='float16')
    with pytest.raises(InvalidArgument):
        Tensor(-1, 2, 2)


def test_failed_add_leaves_receiver_unchanged(square):
    before = square.to_matrix().copy()
    with pytest.raises(InvalidArgument):
        square.add(Tensor(1, 1, 2))
    with pytest.raises(InvalidArgument):
        square.add(Tensor(0, 2, 3))
    np.testing.assert_array_equal(square.to_matrix(), before)


def test_invalid_argument_is_value_error(square):
    with pytest.raises(ValueError):
        square.evaluate()
