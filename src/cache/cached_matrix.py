"""CachedMatrix — матрица с кэшированной обратной.

Состояния слота кэша (CacheState):
- EMPTY: обратная не вычислена или инвалидирована
- VALID: обратная вычислена для текущего значения матрицы

Переходы:
- EMPTY --replace(different)--> EMPTY
- EMPTY --store_inverse------->  VALID
- VALID --replace(equal)------>  VALID (кэш сохраняется)
- VALID --replace(different)-->  EMPTY
"""

import logging
import threading
from enum import Enum
from typing import Optional

from src.core.domain.matrix import Matrix, values_equal

logger = logging.getLogger(__name__)


class CacheState(str, Enum):
    """Состояние слота кэшированной обратной матрицы."""

    EMPTY = "EMPTY"
    VALID = "VALID"


class CachedMatrix:
    """Контейнер: текущая матрица + опциональная кэшированная обратная.

    Инвариант: cached inverse присутствует только если значение матрицы
    не изменилось (по value-equality) с момента store_inverse.

    Замена матрицы на value-equal, но другой экземпляр НЕ сбрасывает кэш.

    lock: re-entrant lock контейнера. InverseResolver держит его на всём
    протяжении check-then-compute-then-store.
    """

    def __init__(self, initial: Matrix):
        """
        Args:
            initial: начальная матрица (хранится как есть, без копирования)
        """
        self._value = initial
        self._cached_inverse: Optional[Matrix] = None
        self.lock = threading.RLock()

    def is_equal(self, other: Matrix) -> bool:
        """True если other value-equal текущей матрице."""
        return values_equal(self._value, other)

    def replace(self, new_matrix: Matrix) -> None:
        """Замена матрицы; кэш сбрасывается только при реальном изменении значения."""
        with self.lock:
            if not self.is_equal(new_matrix):
                if self._cached_inverse is not None:
                    logger.debug("Matrix value changed, dropping cached inverse")
                self._cached_inverse = None
            elif self._cached_inverse is not None:
                logger.debug("Replacement matrix is value-equal, keeping cached inverse")
            self._value = new_matrix

    def current(self) -> Matrix:
        return self._value

    def store_inverse(self, inv: Matrix) -> None:
        """Безусловная запись обратной матрицы в кэш (без валидации)."""
        with self.lock:
            self._cached_inverse = inv

    def cached_inverse_or_none(self) -> Optional[Matrix]:
        return self._cached_inverse

    @property
    def state(self) -> CacheState:
        if self._cached_inverse is None:
            return CacheState.EMPTY
        return CacheState.VALID

    def __repr__(self) -> str:
        shape = getattr(self._value, "shape", None)
        return f"CachedMatrix(shape={shape}, state={self.state.value})"
