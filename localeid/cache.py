"""Process-wide memoization caches."""

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SimpleCache(Generic[K, V]):
    """
    A thread-safe cache with lazy population and no eviction.

    Reads do not take the lock. Inserts are published under a lock and the
    first value stored for a key wins, so concurrent writers computing the
    same entry never replace one another and readers never observe a
    partially written entry.
    """

    _data: Dict[K, V]
    """The cached entries."""

    _lock: threading.Lock
    """Guards inserts."""

    def __init__(self) -> None:
        self._data = {}
        self._lock = threading.Lock()

    def get(self, key: K) -> Optional[V]:
        """
        Return the cached value for ``key``, or None.

        :param key: The cache key.
        :type key: K
        :return: The cached value, or None if absent.
        :rtype: Optional[V]
        """
        return self._data.get(key)

    def put(self, key: K, value: V) -> V:
        """
        Store ``value`` unless another value has already been stored for ``key``.

        :param key: The cache key.
        :type key: K
        :param value: The value to publish.
        :type value: V
        :return: The value held by the cache after the call.
        :rtype: V
        """
        with self._lock:
            return self._data.setdefault(key, value)

    def get_or_compute(self, key: K, factory: Callable[[K], V]) -> V:
        """
        Return the cached value for ``key``, computing and storing it if absent.

        :param key: The cache key.
        :type key: K
        :param factory: Computes the value from the key.
        :type factory: Callable[[K], V]
        :return: The cached value.
        :rtype: V
        """
        value = self._data.get(key)
        if value is None:
            value = self.put(key, factory(key))
        return value

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._data = {}

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
