import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from briefy.core.config import settings

logger = logging.getLogger(__name__)

Overrides = dict[str, str]


@dataclass(frozen=True)
class CacheEntry:
    value: Overrides
    expires_at: float


class GlobalPromptCache:
    """
    Process-wide cache of the resolved global prompt overrides.

    An entry lives for ``ttl_seconds``. Anything that edits global prompts
    must call ``invalidate()``, otherwise generations keep using the old
    overrides until the entry expires.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._lock = Lock()

    def peek(self) -> Overrides | None:
        with self._lock:
            entry = self._entry
            if entry is None or entry.expires_at <= self._clock():
                return None
            return dict(entry.value)

    def get(self, loader: Callable[[], Overrides]) -> Overrides:
        cached = self.peek()
        if cached is not None:
            return cached

        value = loader()
        with self._lock:
            self._entry = CacheEntry(value=dict(value), expires_at=self._clock() + self.ttl_seconds)
        logger.debug("Global prompt cache refreshed with %s override(s)", len(value))
        return dict(value)

    def invalidate(self) -> None:
        with self._lock:
            self._entry = None
        logger.info("Global prompt cache invalidated")


prompt_cache = GlobalPromptCache(ttl_seconds=settings.PROMPT_CACHE_TTL_SECONDS)
