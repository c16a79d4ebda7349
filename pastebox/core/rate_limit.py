import logging
import math
import time
from collections import defaultdict, deque
from functools import lru_cache
from typing import Callable, Deque, Dict, Optional, Tuple

from fastapi import Depends, Request

from pastebox.core.config import get_settings
from pastebox.core.errors import RateLimitedError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Скользящее окно в памяти: не более max_requests за window_seconds на ключ"""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_purge = clock()

    def check(self, key: str) -> Tuple[bool, Optional[int]]:
        """Регистрация запроса; возвращает (разрешен, через сколько секунд повторить)"""
        now = self._clock()
        if now - self._last_purge >= self.window_seconds:
            self._purge(now)
        hits = self._hits[key]

        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

        if len(hits) >= self.max_requests:
            retry_after = max(1, math.ceil(hits[0] + self.window_seconds - now))
            logger.warning("Rate limit exceeded", extra={"client": key})
            return False, retry_after

        hits.append(now)
        return True, None

    def _purge(self, now: float) -> None:
        """Удаление клиентов без запросов в текущем окне"""
        cutoff = now - self.window_seconds
        for key in [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[key]
        self._last_purge = now

    def reset(self, key: Optional[str] = None) -> None:
        """Сброс счетчиков (одного ключа или всех)"""
        if key is None:
            self._hits.clear()
        else:
            self._hits.pop(key, None)


@lru_cache
def get_rate_limiter() -> RateLimiter:
    settings = get_settings()
    return RateLimiter(settings.rate_limit_max, settings.rate_limit_window_seconds)


def client_key(request: Request) -> str:
    """Сетевой идентификатор клиента"""
    return request.client.host if request.client else "unknown"


async def enforce_create_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_rate_limiter)
) -> None:
    """Ограничение частоты создания документов"""
    allowed, retry_after = limiter.check(client_key(request))
    if not allowed:
        raise RateLimitedError(retry_after)
