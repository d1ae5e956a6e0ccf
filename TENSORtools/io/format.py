"""
Human-readable rendering of tensors and construction from nested sequences.
"""

import numpy as np
from typing import Dict, Sequence, Tuple
from ..funcs.tensor import Tensor


def _format_value(value: float) -> str:
    return f"{float(value):.7g}"


def to_string(tensor: Tensor) -> str:
    """
    Packed coordinate matrix, one row per line:

        1, 2;
        3, 4;
    """
    matrix = tensor.to_matrix()
    lines = []
    for row in matrix:
        if row.shape[0] > 0:
            lines.append(", ".join(_format_value(v) for v in row) + ";\n")
    return "".join(lines)


def to_line(tensor: Tensor) -> str:
    """
    Packed coordinate matrix on one line: [1, 2; 3, 4]
    """
    matrix = tensor.to_matrix()
    rows = [", ".join(_format_value(v) for v in row) for row in matrix]
    return "[" + "; ".join(rows) + "]"


def decomposition_to_string(decomposition: Dict[Tuple[int, ...], float]) -> str:
    """
    Non-zero terms of a decomposition in the antisymmetric basis, one per
    line, with 1-based indices: "2.5 [1, 3]"
    """
    lines = []
    for indices, coefficient in decomposition.items():
        if coefficient == 0:
            continue
        labels = ", ".join(str(i + 1) for i in indices)
        lines.append(f"{_format_value(coefficient)} [{labels}]\n")
    return "".join(lines)


def from_nested(
    nested: Sequence[Sequence[float]],
    p: int,
    q: int,
    n: int,
    **kwargs) -> Tensor:
    """
    Build a tensor from a nested list holding its packed coordinate matrix.
    """
    return Tensor.from_matrix(np.array(nested, dtype=np.float64), p, q, n, **kwargs)


def to_nested(tensor: Tensor) -> list:
    """Packed coordinate matrix as nested Python lists"""
    return tensor.to_matrix().tolist()
