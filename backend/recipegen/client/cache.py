# recipegen/client/cache.py
# 저장 레시피 목록 캐시 (세션당 1개, 항목 1개 = 목록 전체)

from __future__ import annotations
import time
from typing import Callable, Optional

from recipegen.core.config import settings


class RecipeListCache:
    """
    마지막 목록 조회 성공 시각만 기억한다.
    ttl 안이고 로컬 목록이 비어있지 않으면 네트워크를 건너뛴다.
    저장/삭제가 끝나면 invalidate() 로 바로 무효화.
    """

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = settings.RECIPE_CACHE_TTL_SECONDS if ttl is None else ttl
        self._clock = clock
        self._fetched_at: Optional[float] = None

    def mark_fetched(self) -> None:
        self._fetched_at = self._clock()

    def invalidate(self) -> None:
        self._fetched_at = None

    def is_fresh(self, has_items: bool) -> bool:
        if not has_items or self._fetched_at is None:
            return False
        return (self._clock() - self._fetched_at) < self.ttl
