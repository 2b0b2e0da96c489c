"""Explicit cache of prepared levels, keyed by level id."""
import logging
from typing import Callable, Dict, Generic, Hashable, Iterator, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LevelCache(Generic[T]):
    """
    Caller-owned cache for generated or validated levels.

    Nothing in the engine holds one of these; whoever loads levels creates
    a cache and passes it where it is needed.
    """

    def __init__(self):
        self._entries: Dict[Hashable, T] = {}

    def get(self, level_id: Hashable) -> Optional[T]:
        return self._entries.get(level_id)

    def put(self, level_id: Hashable, level: T) -> None:
        self._entries[level_id] = level

    def get_or_create(self, level_id: Hashable, factory: Callable[[], T]) -> T:
        """Return the cached level, building and storing it on a miss."""
        if level_id in self._entries:
            return self._entries[level_id]
        logger.debug(f"Level cache miss for {level_id!r}")
        level = factory()
        self._entries[level_id] = level
        return level

    def invalidate(self, level_id: Hashable) -> bool:
        """Drop one level. Returns True if it was cached."""
        return self._entries.pop(level_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, level_id: Hashable) -> bool:
        return level_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._entries))
