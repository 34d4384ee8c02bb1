"""
Inversion — Linear-Algebra Capability

Обращение квадратной матрицы через numpy.linalg.inv (LAPACK gesv).

Модуль отвечает только за вычисление; кэширование результатов выполняется
в src.cache. Результат возвращается как есть, без повторной проверки,
если вызывающий код явно не запросил verify_inverse.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входная матрица никогда не модифицируется
2. Любой отказ (не 2-D, не квадратная, NaN/Inf, сингулярная) → InversionError
3. Результат всегда новый float-массив той же формы
"""

import numpy as np

from src.core.math.numerical_safeguards import (
    EPS_INVERSE_ATOL,
    EPS_INVERSE_RTOL,
    is_finite_matrix,
    is_identity_close,
    is_matrix,
    is_square,
)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InversionError(Exception):
    """
    Матрица не может быть обращена.

    Причины:
    - объект не является 2-D матрицей
    - матрица не квадратная или пустая
    - матрица содержит NaN/Inf
    - матрица сингулярная (det == 0 в точной арифметике LAPACK)

    Повтор с теми же данными бессмысленен: сингулярная матрица не станет
    обратимой при следующем вызове.
    """

    def __init__(self, reason: str, shape: tuple[int, ...] | None = None):
        self.reason = reason
        self.shape = shape
        if shape is None:
            super().__init__(f"Matrix is not invertible: {reason}")
        else:
            super().__init__(f"Matrix of shape {shape} is not invertible: {reason}")


# =============================================================================
# INVERSION
# =============================================================================


def invert(m: np.ndarray) -> np.ndarray:
    """
    Вычисление обратной матрицы.

    Args:
        m: Квадратная 2-D матрица

    Returns:
        inv(m) как новый float-массив

    Raises:
        InversionError: если m не 2-D, не квадратная, пустая, содержит
            NaN/Inf или сингулярная
    """
    if not is_matrix(m):
        shape = getattr(m, "shape", None)
        raise InversionError("expected a 2-D matrix", shape=shape)

    if not is_square(m):
        raise InversionError("matrix must be square and non-empty", shape=m.shape)

    if not is_finite_matrix(m):
        raise InversionError("matrix contains NaN/Inf or non-numeric values", shape=m.shape)

    try:
        result = np.linalg.inv(m)
    except np.linalg.LinAlgError as e:
        raise InversionError(f"singular matrix ({e})", shape=m.shape) from e

    # LAPACK может вернуть Inf/NaN для почти сингулярных матриц без LinAlgError
    if not is_finite_matrix(result):
        raise InversionError("inverse contains NaN/Inf (numerically singular)", shape=m.shape)

    return result


def verify_inverse(
    m: np.ndarray,
    inv: np.ndarray,
    rtol: float = EPS_INVERSE_RTOL,
    atol: float = EPS_INVERSE_ATOL,
) -> bool:
    """
    Проверка m @ inv ≈ I.

    Args:
        m: Исходная матрица
        inv: Кандидат в обратные
        rtol: Относительная толерантность
        atol: Абсолютная толерантность

    Returns:
        True если формы совместимы и произведение близко к identity
    """
    if not (is_square(m) and is_matrix(inv)) or m.shape != inv.shape:
        return False
    return is_identity_close(m @ inv, rtol=rtol, atol=atol)
