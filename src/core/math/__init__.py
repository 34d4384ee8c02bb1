"""
Core math modules для cached matrix inverse

Проверки матриц и обращение через numpy.linalg.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_INVERSE_ATOL,
    EPS_INVERSE_RTOL,
    # Shape checks
    is_matrix,
    is_square,
    # NaN/Inf detection
    is_finite_matrix,
    # Epsilon comparisons
    is_identity_close,
)

# Inversion
from src.core.math.inversion import (
    InversionError,
    invert,
    verify_inverse,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_INVERSE_ATOL",
    "EPS_INVERSE_RTOL",
    # Numerical Safeguards — Shape checks
    "is_matrix",
    "is_square",
    # Numerical Safeguards — NaN/Inf detection
    "is_finite_matrix",
    # Numerical Safeguards — Epsilon comparisons
    "is_identity_close",
    # Inversion — Exceptions
    "InversionError",
    # Inversion — Functions
    "invert",
    "verify_inverse",
]
