import logging
import threading
from typing import Any, Callable, Dict, Type

from grafter.domain import ISingletonCache, qualified_name

logger = logging.getLogger(__name__)


class SingletonCache(ISingletonCache):
    """Holds the instances of singleton-scoped types for the lifetime of one injector.

    Entries are only added once an instance is fully constructed and populated,
    and are never evicted. Each type is built under its own re-entrant lock and
    the cache is re-checked once that lock is held, so concurrent callers never
    both build the same type while unrelated singletons still build in parallel.

    Attributes:
        _instances: Cached instances keyed by concrete type.
        _locks: One construction lock per singleton type.
        _locks_guard: Protects ``_locks``, held only while looking a lock up.
    """

    def __init__(self) -> None:
        self._instances: Dict[Type, Any] = {}
        self._locks: Dict[Type, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def get(self, cls: Type) -> Any:
        return self._instances.get(cls)

    def contains(self, cls: Type) -> bool:
        return cls in self._instances

    def get_or_create(self, cls: Type, factory: Callable[[], Any]) -> Any:
        """Return the cached instance for ``cls``, building and caching it if absent.

        Args:
            cls: The singleton-scoped type.
            factory: Builds a fully populated instance. If it raises, nothing is cached.

        Returns:
            The single instance of ``cls`` owned by this cache.

        Example:
            >>> cache = SingletonCache()
            >>> first = cache.get_or_create(Engine, Engine)
            >>> assert cache.get_or_create(Engine, Engine) is first
        """
        if cls in self._instances:
            return self._instances[cls]

        with self._lock_for(cls):
            if cls not in self._instances:
                instance = factory()
                self._instances[cls] = instance
                logger.debug("Cached singleton instance of %s", qualified_name(cls))
            return self._instances[cls]

    def _lock_for(self, cls: Type) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(cls)
            if lock is None:
                lock = self._locks[cls] = threading.RLock()
            return lock

    def __len__(self) -> int:
        return len(self._instances)
