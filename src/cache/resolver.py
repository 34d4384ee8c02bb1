"""InverseResolver — получение обратной матрицы с кэшированием.

Алгоритм resolve(container):
1. Кэш контейнера VALID → лог "Getting cached value of matrix inverse",
   возврат кэшированного значения без пересчёта
2. Кэш EMPTY → inverter(container.current()) → store_inverse → возврат

Шаги 1-2 выполняются под container.lock: не более одного вычисления на miss,
hit/miss учёт детерминирован.

Ошибки inverter (InversionError) пробрасываются без изменений, кэш остаётся EMPTY.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable

import numpy as np

from src.cache.cached_matrix import CachedMatrix
from src.core.domain.matrix import Matrix
from src.core.math.inversion import InversionError, invert, verify_inverse
from src.core.math.numerical_safeguards import EPS_INVERSE_ATOL, EPS_INVERSE_RTOL

logger = logging.getLogger(__name__)

CACHE_HIT_MESSAGE = "Getting cached value of matrix inverse"


@dataclass(frozen=True)
class ResolverConfig:
    """Конфигурация InverseResolver.

    - verify: проверять m @ inv ≈ I перед записью в кэш
    - rtol/atol: толерантности проверки
    - read_only_result: помечать вычисленную обратную как read-only,
      чтобы вызывающий код не испортил кэш in-place изменением
    """
    verify: bool = False
    rtol: float = EPS_INVERSE_RTOL
    atol: float = EPS_INVERSE_ATOL
    read_only_result: bool = True


@dataclass(frozen=True)
class ResolverStats:
    """Снапшот счётчиков resolver."""

    hits: int
    misses: int
    failures: int

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses + self.failures

    @property
    def hit_rate_percent(self) -> float:
        total = self.total_requests
        if total == 0:
            return 0.0
        return round(self.hits / total * 100, 1)


class InverseResolver:
    """Возвращает обратную матрицу, вычисляя её только при cache miss."""

    def __init__(
        self,
        config: ResolverConfig | None = None,
        inverter: Callable[[Matrix], Matrix] = invert,
    ):
        """
        Args:
            config: конфигурация (default: ResolverConfig())
            inverter: linear-algebra capability (default: numpy-based invert)

        Raises:
            ValueError: если толерантности отрицательны
        """
        self.config = config or ResolverConfig()
        if self.config.rtol < 0 or self.config.atol < 0:
            raise ValueError(
                f"tolerances must be non-negative, got rtol={self.config.rtol}, "
                f"atol={self.config.atol}"
            )
        self.inverter = inverter

        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._failures = 0

    def resolve(self, container: CachedMatrix) -> Matrix:
        """Обратная матрица для текущего значения контейнера.

        Raises:
            InversionError: если матрица необратима (или не прошла verify)
        """
        with container.lock:
            cached = container.cached_inverse_or_none()
            if cached is not None:
                logger.info(CACHE_HIT_MESSAGE)
                self._count("hit")
                return cached

            m = container.current()
            try:
                inv = self._compute(m)
            except InversionError as e:
                self._count("failure")
                logger.warning(f"Matrix inversion failed: {e}")
                raise

            container.store_inverse(inv)
            self._count("miss")
            logger.debug(f"Computed and cached inverse (shape={getattr(inv, 'shape', None)})")
            return inv

    def _compute(self, m: Matrix) -> Matrix:
        inv = self.inverter(m)

        if self.config.verify and not verify_inverse(
            m, inv, rtol=self.config.rtol, atol=self.config.atol
        ):
            raise InversionError(
                "computed inverse failed m @ inv ≈ I verification",
                shape=getattr(m, "shape", None),
            )

        if self.config.read_only_result and isinstance(inv, np.ndarray):
            inv.setflags(write=False)

        return inv

    def _count(self, event: str) -> None:
        with self._stats_lock:
            if event == "hit":
                self._hits += 1
            elif event == "miss":
                self._misses += 1
            else:
                self._failures += 1

    @property
    def stats(self) -> ResolverStats:
        with self._stats_lock:
            return ResolverStats(hits=self._hits, misses=self._misses, failures=self._failures)

    def reset_stats(self) -> None:
        with self._stats_lock:
            self._hits = 0
            self._misses = 0
            self._failures = 0


# Глобальный resolver для cache_solve
_DEFAULT_RESOLVER = InverseResolver()


def cache_solve(container: CachedMatrix) -> Matrix:
    """Обратная матрица через общий resolver по умолчанию."""
    return _DEFAULT_RESOLVER.resolve(container)
