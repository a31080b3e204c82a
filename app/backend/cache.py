import logging
import threading
from collections import OrderedDict


DEFAULT_CACHE_RETENTION = 7

logger = logging.getLogger("uvicorn.error")


class DayCache:
    """Per-date results kept in insertion order.

    Only the ``capacity`` most recently inserted dates are retained. Reads do
    not change the eviction order.
    """

    def __init__(self, capacity=DEFAULT_CACHE_RETENTION):
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1.")
        self.capacity = capacity
        self._entries = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, date_key):
        return date_key in self._entries

    def keys(self):
        with self._lock:
            return list(self._entries.keys())

    def get(self, date_key):
        return self._entries.get(date_key)

    def put(self, date_key, result):
        with self._lock:
            existing = self._entries.get(date_key)
            if existing is not None:
                return existing
            self._entries[date_key] = result
            self._evict()
        logger.info("Cached prices for %s (%s/%s entries)", date_key, len(self._entries), self.capacity)
        return result

    def replace(self, date_key, result):
        with self._lock:
            self._entries.pop(date_key, None)
            self._entries[date_key] = result
            self._evict()
        return result

    def discard(self, date_key):
        with self._lock:
            return self._entries.pop(date_key, None) is not None

    def clear(self):
        with self._lock:
            self._entries.clear()

    def _evict(self):
        while len(self._entries) > self.capacity:
            evicted_key, _ = self._entries.popitem(last=False)
            logger.info("Evicted cached prices for %s", evicted_key)

    def status(self):
        keys = self.keys()
        return {
            "capacity": self.capacity,
            "count": len(keys),
            "keys": keys,
            "latest": max(keys) if keys else None,
        }
