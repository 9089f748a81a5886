"""
Analytics Result Cache
Optional memoization of engine results keyed by log version and parameters

The engine is correct without it; the log version is part of every key, so
results computed from an older snapshot are never handed out for a newer one.
"""

import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Hashable, Tuple

logger = logging.getLogger(__name__)


class AnalyticsCache:
    """Bounded LRU cache for derived statistics"""

    def __init__(self, max_entries: int = 256, enabled: bool = True):
        self.max_entries = max_entries
        self.enabled = enabled
        self._entries: "OrderedDict[Tuple, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self,
                       log_version: int,
                       operation: str,
                       params: Tuple[Hashable, ...],
                       compute: Callable[[], Any]) -> Any:
        if not self.enabled:
            return compute()

        key = (log_version, operation, params)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                logger.debug("Cache hit for %s %s", operation, params)
                return self._entries[key]
            self.misses += 1

        logger.debug("Cache miss for %s %s", operation, params)
        value = compute()

        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return value

    def invalidate(self) -> None:
        """Drop every cached result, e.g. after the log was modified"""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
