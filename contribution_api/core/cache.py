from collections import OrderedDict
from collections.abc import Callable
from threading import RLock
from time import monotonic
from typing import Generic
from typing import TypeVar

from loguru import logger


T = TypeVar("T")


class TTLCache(Generic[T]):
    """In-memory read-through cache with a per-call time to live.

    Concurrent misses for the same key may both run the loader; the last
    result stored wins. Loader exceptions propagate and nothing is stored.
    """

    def __init__(
        self, max_entries: int = 256, clock: Callable[[], float] = monotonic
    ) -> None:
        self.max_entries = max(1, max_entries)
        self._clock = clock
        # key -> (expires_at, value), oldest insertion first.
        self._entries: OrderedDict[str, tuple[float, T]] = OrderedDict()
        self._lock = RLock()

    def get_or_fetch(
        self, key: str, ttl_seconds: float, loader: Callable[[], T]
    ) -> T:
        now = self._clock()

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                expires_at, value = entry
                if expires_at > now:
                    logger.debug(f"Cache hit for {key}")
                    return value
                del self._entries[key]

        logger.debug(f"Cache miss for {key}")
        # Loader runs outside the lock so a slow upstream doesn't block other keys.
        value = loader()

        if ttl_seconds <= 0:
            return value

        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock() + ttl_seconds, value)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
