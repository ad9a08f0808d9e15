"""Append-only cache of computed parents lists."""

import logging
import threading
from collections.abc import Callable

from classmeta.types import ParentsList

logger = logging.getLogger(__name__)


class ParentsCache:
    """Thread-safe, append-only mapping from type name to parents list.

    Entries are never invalidated: class hierarchies are assumed immutable
    for the lifetime of the cache. One instance is meant to be created at
    start-up and shared by every reader that should see the same entries.
    """

    def __init__(self) -> None:
        """Initialise an empty cache."""
        self._entries: dict[str, ParentsList] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> ParentsList | None:
        """Return the cached parents list for a type name, if any."""
        with self._lock:
            return self._entries.get(key)

    def get_or_compute(self, key: str, compute: Callable[[], ParentsList]) -> ParentsList:
        """Return the cached entry, computing and storing it on first access.

        The check and the insert happen under one lock, so concurrent callers
        never compute the same entry twice. If compute() raises, nothing is
        stored.

        Args:
            key: Type name the entry is stored under
            compute: Zero-argument callable producing the parents list

        Returns:
            The cached (possibly just computed) parents list

        """
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                logger.debug(f"Parents cache hit: {key}")
                return cached

            logger.debug(f"Parents cache miss: {key}")
            result = compute()
            self._entries[key] = result
            return result

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
