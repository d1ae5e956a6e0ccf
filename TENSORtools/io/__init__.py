from .format import (
    to_string,
    to_line,
    decomposition_to_string,
    from_nested,
    to_nested
)

__all__ = [
    'to_string',
    'to_line',
    'decomposition_to_string',
    'from_nested',
    'to_nested'
]
