"""Cache — матрица с кэшированной обратной и resolver.

- CachedMatrix: контейнер матрицы и слота обратной
- InverseResolver: вычисление обратной только при cache miss
- cache_solve: resolve через общий resolver
"""

from .cached_matrix import CacheState, CachedMatrix
from .resolver import (
    CACHE_HIT_MESSAGE,
    InverseResolver,
    ResolverConfig,
    ResolverStats,
    cache_solve,
)

__all__ = [
    "CacheState",
    "CachedMatrix",
    "CACHE_HIT_MESSAGE",
    "InverseResolver",
    "ResolverConfig",
    "ResolverStats",
    "cache_solve",
]
