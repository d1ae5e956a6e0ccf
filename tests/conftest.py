import numpy as np
import pytest

from TENSORtools import Tensor
from TENSORtools.funcs.tensor import matrix_shape


@pytest.fixture(params=[True, False], ids=["numba", "numpy"])
def use_numba(request):
    """Run a test against both the fused Numba kernels and the NumPy cores."""
    return request.param


@pytest.fixture
def random_tensor(use_numba):
    """Factory for tensors with standard-normal coordinates."""
    rng = np.random.default_rng(1234)

    def _make(p, q, n, **kwargs):
        matrix = rng.standard_normal(matrix_shape(p + q, n))
        return Tensor.from_matrix(matrix, p, q, n, use_numba=use_numba, **kwargs)

    return _make
