"""
TENSORtools: exception types

Every argument check in the package raises InvalidArgument before any
coordinate is touched, so a failed call leaves the receiver unchanged.

Author: James R. Beattie
"""

from typing import Optional, Sequence


class TensorToolsError(Exception):
    """Base class for TENSORtools-specific exceptions."""


class InvalidArgument(TensorToolsError, ValueError):
    def __init__(
        self,
        message: str,
        *,
        expected: Optional[object] = None,
        got: Optional[object] = None):
        detail = _format_mismatch(expected, got)
        super().__init__(f"{message}{detail}")
        self.expected = expected
        self.got = got


def _format_mismatch(
    expected: Optional[object],
    got: Optional[object]) -> str:
    if expected is None and got is None:
        return ""
    parts = []
    if expected is not None:
        parts.append(f"expected {expected}")
    if got is not None:
        parts.append(f"got {got}")
    return f" ({', '.join(parts)})"


def check_length(
    name: str,
    values: Sequence,
    length: int) -> None:
    """Raise InvalidArgument unless ``len(values) == length``."""
    if len(values) != length:
        raise InvalidArgument(f"Invalid {name} length", expected=length, got=len(values))
