"""
Numerical Safeguards — Matrix Sanity Primitives

Модуль содержит базовые проверки матриц перед обращением и после него:
- Проверка формы (2-D, квадратная)
- NaN/Inf детекция для предотвращения распространения невалидных значений
- Epsilon-сравнение произведения m @ inv с единичной матрицей

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Проверки никогда не модифицируют входные массивы
2. NaN/Inf всегда считаются невалидными
3. Сравнение с identity всегда учитывает машинную точность
"""

from typing import Final

import numpy as np

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для проверки m @ inv ≈ I
EPS_INVERSE_RTOL: Final[float] = 1e-9

# Абсолютная толерантность для проверки m @ inv ≈ I
# Нулевые элементы identity сравниваются только по abs_tol
EPS_INVERSE_ATOL: Final[float] = 1e-9


# =============================================================================
# ПРОВЕРКИ ФОРМЫ
# =============================================================================


def is_matrix(m: object) -> bool:
    """
    Проверка, является ли объект 2-D массивом numpy.

    Args:
        m: Проверяемый объект

    Returns:
        True если m — np.ndarray с ndim == 2
    """
    return isinstance(m, np.ndarray) and m.ndim == 2


def is_square(m: np.ndarray) -> bool:
    """
    Проверка, является ли матрица квадратной и непустой.

    Examples:
        >>> is_square(np.eye(3))
        True
        >>> is_square(np.zeros((2, 3)))
        False
        >>> is_square(np.zeros((0, 0)))
        False
    """
    return is_matrix(m) and m.shape[0] == m.shape[1] and m.shape[0] > 0


# =============================================================================
# NaN/Inf ДЕТЕКЦИЯ
# =============================================================================


def is_finite_matrix(m: np.ndarray) -> bool:
    """
    Проверка, что все элементы матрицы конечны (не NaN, не Inf).

    Для нечисловых dtype возвращает False.
    """
    if not np.issubdtype(m.dtype, np.number):
        return False
    return bool(np.all(np.isfinite(m)))


# =============================================================================
# EPSILON-СРАВНЕНИЕ С IDENTITY
# =============================================================================


def is_identity_close(
    m: np.ndarray,
    rtol: float = EPS_INVERSE_RTOL,
    atol: float = EPS_INVERSE_ATOL,
) -> bool:
    """
    Проверка, что матрица близка к единичной с учётом толерантности.

    Алгоритм (поэлементно):
        abs(m - I) <= atol + rtol * abs(I)

    Args:
        m: Квадратная матрица (обычно результат a @ inv(a))
        rtol: Относительная толерантность (default: EPS_INVERSE_RTOL)
        atol: Абсолютная толерантность (default: EPS_INVERSE_ATOL)

    Returns:
        True если m квадратная и поэлементно близка к identity

    Raises:
        ValueError: Если rtol или atol отрицательны

    Examples:
        >>> is_identity_close(np.eye(2) + 1e-12)
        True
        >>> is_identity_close(np.array([[1.0, 0.1], [0.0, 1.0]]))
        False
    """
    if rtol < 0 or atol < 0:
        raise ValueError(f"tolerances must be non-negative, got rtol={rtol}, atol={atol}")

    if not is_square(m):
        return False

    identity = np.identity(m.shape[0], dtype=float)
    return bool(np.allclose(m, identity, rtol=rtol, atol=atol))
