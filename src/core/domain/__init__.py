"""
Domain models and value objects.

Contains the Matrix type, its value-equality rule, and MatrixSpec.
"""

from src.core.domain.matrix import (
    Matrix,
    MatrixSpec,
    make_matrix,
    values_equal,
)

__all__ = [
    "Matrix",
    "MatrixSpec",
    "make_matrix",
    "values_equal",
]
