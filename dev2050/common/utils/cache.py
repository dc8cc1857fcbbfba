# dev2050/common/utils/cache.py

import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

class TTLCache:
    """
    Small in-process cache with a fixed expiry window per entry.

    Used to keep outbound fetches (news pages, CMS queries) from being repeated
    within the revalidation window. Entries expire lazily on read.
    """
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def clear(self) -> None:
        self._entries.clear()
