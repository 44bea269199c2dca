"""
Request-deduplicating cache for API reads.

One ``QueryCache`` lives for one UI session. It is created with the session's
``ApiClient`` and cleared on logout.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Iterable, List

logger = logging.getLogger(__name__)


class QueryCache:
    """
    Cache of resolved values keyed by request key (endpoint path plus query).

    ``fetch`` runs the loader at most once per key: callers arriving while a
    load is in flight wait for that same load. Resolved values stay cached
    until invalidated. Failed loads are not cached.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._values: Dict[str, Any] = {}
        self._in_flight: Dict[str, Future] = {}

    def fetch(self, key: str, loader: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._values:
                return self._values[key]
            future = self._in_flight.get(key)
            is_owner = future is None
            if is_owner:
                future = Future()
                self._in_flight[key] = future

        if not is_owner:
            return future.result()

        try:
            value = loader()
        except BaseException as exc:
            with self._lock:
                if self._in_flight.get(key) is future:
                    del self._in_flight[key]
            future.set_exception(exc)
            raise

        with self._lock:
            # An invalidation during the load drops the in-flight entry;
            # the value is then handed to waiters but not cached.
            if self._in_flight.get(key) is future:
                del self._in_flight[key]
                self._values[key] = value
        future.set_result(value)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def invalidate(self, *prefixes: str) -> List[str]:
        """Drop every cached or in-flight key starting with one of ``prefixes``."""
        with self._lock:
            dropped = [
                key
                for key in set(self._values) | set(self._in_flight)
                if key.startswith(prefixes)
            ]
            for key in dropped:
                self._values.pop(key, None)
                self._in_flight.pop(key, None)

        if dropped:
            logger.debug(f"Invalidated cache keys: {sorted(dropped)}")
        return dropped

    def clear(self) -> None:
        with self._lock:
            self._values.clear()
            self._in_flight.clear()

    def keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._values)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
