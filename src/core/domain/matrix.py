"""
Matrix — Модель матрицы и правило value-equality

Matrix — 2-D np.ndarray, неизменяемый по соглашению.

Содержит:
- make_matrix: построение матрицы из плоского списка значений
  (column-major заполнение по умолчанию, row-major при byrow=True)
- values_equal: точное сравнение матриц (сначала размерности, затем элементы)
- MatrixSpec: immutable Pydantic модель описания матрицы

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. values_equal никогда не сравнивает элементы при несовпадении размерностей
2. Сравнение элементов точное (==), без epsilon
3. NaN не равен ничему, включая себя
"""

import math
from typing import Sequence, TypeAlias

import numpy as np
from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import is_matrix

Matrix: TypeAlias = np.ndarray


# =============================================================================
# ПОСТРОЕНИЕ МАТРИЦЫ
# =============================================================================


def _resolve_dims(size: int, nrow: int | None, ncol: int | None) -> tuple[int, int]:
    """Вычисление (nrow, ncol) по количеству значений и заданным размерностям."""
    if size <= 0:
        raise ValueError("matrix must contain at least one value")

    if nrow is not None and nrow <= 0:
        raise ValueError(f"nrow must be positive, got {nrow}")
    if ncol is not None and ncol <= 0:
        raise ValueError(f"ncol must be positive, got {ncol}")

    if nrow is None and ncol is None:
        nrow, ncol = size, 1
    elif nrow is None:
        nrow = math.ceil(size / ncol)
    elif ncol is None:
        ncol = math.ceil(size / nrow)

    if nrow * ncol != size:
        raise ValueError(
            f"{size} values do not fill a {nrow}x{ncol} matrix "
            f"(expected exactly {nrow * ncol})"
        )

    return nrow, ncol


def make_matrix(
    values: Sequence[float] | np.ndarray,
    nrow: int | None = None,
    ncol: int | None = None,
    byrow: bool = False,
) -> Matrix:
    """
    Построение float-матрицы из плоской последовательности значений.

    Если задана только одна размерность, вторая выводится из количества
    значений. Если не задана ни одна — получается столбец (n x 1).
    Повторение (recycling) значений не поддерживается.

    Args:
        values: Плоская последовательность чисел
        nrow: Количество строк (optional)
        ncol: Количество столбцов (optional)
        byrow: Заполнять по строкам (default: False — по столбцам)

    Returns:
        Новый np.ndarray формы (nrow, ncol), dtype float

    Raises:
        ValueError: Если значений нет, размерности неположительные или
            количество значений не равно nrow * ncol

    Examples:
        >>> make_matrix([1, 0, 5, 2, 1, 6, 3, 4, 0], ncol=3)
        array([[1., 2., 3.],
               [0., 1., 4.],
               [5., 6., 0.]])
    """
    flat = np.array(values, dtype=float).ravel()
    nrow, ncol = _resolve_dims(flat.size, nrow, ncol)
    return flat.reshape((nrow, ncol), order="C" if byrow else "F")


# =============================================================================
# VALUE-EQUALITY
# =============================================================================


def values_equal(a: object, b: object) -> bool:
    """
    Точное сравнение двух матриц.

    Алгоритм:
    1. Оба объекта должны быть 2-D матрицами, иначе False
    2. Несовпадение формы → False (элементы не сравниваются)
    3. Все элементы попарно равны (==) → True

    Examples:
        >>> values_equal(np.eye(2), np.eye(2))
        True
        >>> values_equal(np.eye(2), np.eye(3))
        False
        >>> values_equal(np.eye(2), np.eye(2) + 1e-15)
        False
    """
    if not (is_matrix(a) and is_matrix(b)):
        return False

    if a.shape != b.shape:
        return False

    return bool(np.all(a == b))


# =============================================================================
# MATRIX SPEC MODEL
# =============================================================================


class MatrixSpec(BaseModel):
    """
    Описание матрицы: плоский список значений + размерности.

    Immutable модель (frozen=True). Размерности проверяются при создании,
    поэтому to_matrix() для валидного MatrixSpec не падает.
    """

    values: list[float] = Field(..., min_length=1, description="Значения матрицы (плоский список)")
    nrow: int | None = Field(None, gt=0, description="Количество строк")
    ncol: int | None = Field(None, gt=0, description="Количество столбцов")
    byrow: bool = Field(default=False, description="Заполнение по строкам")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_dimensions(self) -> "MatrixSpec":
        """Проверка, что количество значений совпадает с nrow * ncol"""
        _resolve_dims(len(self.values), self.nrow, self.ncol)
        return self

    @property
    def shape(self) -> tuple[int, int]:
        return _resolve_dims(len(self.values), self.nrow, self.ncol)

    def to_matrix(self) -> Matrix:
        """Построение np.ndarray по описанию."""
        return make_matrix(self.values, nrow=self.nrow, ncol=self.ncol, byrow=self.byrow)
