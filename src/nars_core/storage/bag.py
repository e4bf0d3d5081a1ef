"""Priority-bucketed bag with probabilistic selection, decay and eviction."""

from __future__ import annotations

import logging
from typing import Generic, Iterator, Protocol, TypeVar

import numpy as np

from nars_core.entity.budget import BudgetValue
from nars_core.exceptions import ConfigurationError, InvariantError
from nars_core.inference.budget_functions import forget

logger = logging.getLogger(__name__)


class Item(Protocol):
    budget: BudgetValue

    @property
    def key(self) -> str: ...

    def merge(self, other) -> None: ...


T = TypeVar("T", bound=Item)


class Bag(Generic[T]):
    """Items keyed by identity and bucketed by priority.

    Each of the ``levels`` buckets is an insertion-ordered dict, so FIFO
    selection and removal by key are both O(1). An item's bucket is
    ``floor(priority * levels)`` clamped to ``[0, levels - 1]``.
    """

    def __init__(
        self,
        capacity: int,
        forget_cycle: int,
        levels: int = 100,
        threshold: int = 10,
        rng: np.random.Generator | None = None,
        name: str = "Bag",
    ) -> None:
        if capacity <= 0:
            raise ConfigurationError(f"{name}: capacity must be positive, got {capacity}")
        if levels <= 0:
            raise ConfigurationError(f"{name}: level count must be positive, got {levels}")
        if forget_cycle <= 0:
            raise ConfigurationError(f"{name}: forget cycle must be positive, got {forget_cycle}")
        self.capacity = capacity
        self.forget_cycle = forget_cycle
        self.levels = levels
        self.relative_threshold = threshold / levels
        self.name = name
        self._rng = rng if rng is not None else np.random.default_rng()
        self._items: dict[str, T] = {}
        self._buckets: list[dict[str, None]] = [{} for _ in range(levels)]
        self._level_of: dict[str, int] = {}
        self.mass = 0

    # -- inspection --------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def size(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[T]:
        """Items from the highest bucket down, oldest first within a bucket."""
        for level in range(self.levels - 1, -1, -1):
            for key in self._buckets[level]:
                yield self._items[key]

    def get(self, key: str) -> T | None:
        return self._items.get(key)

    def level_of(self, key: str) -> int | None:
        return self._level_of.get(key)

    def average_priority(self) -> float:
        if not self._items:
            return 0.01
        return min(self.mass / (len(self._items) * self.levels), 1.0)

    def bucket_index(self, priority: float) -> int:
        level = int(priority * self.levels)
        return min(max(level, 0), self.levels - 1)

    # -- mutation ----------------------------------------------------------

    def put_in(self, item: T) -> bool:
        """Insert ``item``, merging with any resident item of the same key.

        Returns True only when a new key was created and survived eviction.
        """
        key = item.key
        old = self._items.get(key)
        if old is not None:
            self._remove(key)
            if old is not item:
                item.merge(old)
        self._insert(item)
        if len(self._items) > self.capacity:
            evicted = self._evict()
            if evicted is item:
                return False
        return old is None

    def put_back(self, item: T) -> bool:
        """Decay ``item`` by one forgetting step, then reinsert it."""
        forget(item.budget, self.forget_cycle, self.relative_threshold)
        return self.put_in(item)

    def take_out(self) -> T | None:
        """Remove and return one item, biased towards high buckets.

        The walk starts at the highest non-empty bucket and takes from each
        bucket with probability ``(level + 1) / levels``. The lowest
        non-empty bucket is always taken when reached.
        """
        if not self._items:
            return None
        occupied = [level for level in range(self.levels - 1, -1, -1) if self._buckets[level]]
        chosen = occupied[-1]
        for level in occupied[:-1]:
            if self._rng.random() < (level + 1) / self.levels:
                chosen = level
                break
        key = next(iter(self._buckets[chosen]))
        return self._remove(key)

    def pick_out(self, key: str) -> T | None:
        if key not in self._items:
            return None
        return self._remove(key)

    def age(self) -> None:
        """Apply one forgetting step to every item and re-bucket it."""
        for item in list(self._items.values()):
            self._remove(item.key)
            forget(item.budget, self.forget_cycle, self.relative_threshold)
            self._insert(item)

    def clear(self) -> None:
        self._items.clear()
        self._level_of.clear()
        for bucket in self._buckets:
            bucket.clear()
        self.mass = 0

    # -- internals ---------------------------------------------------------

    def _insert(self, item: T) -> None:
        key = item.key
        level = self.bucket_index(item.budget.priority)
        self._items[key] = item
        self._buckets[level][key] = None
        self._level_of[key] = level
        self.mass += level + 1

    def _remove(self, key: str) -> T:
        item = self._items.pop(key)
        level = self._level_of.pop(key)
        bucket = self._buckets[level]
        if key not in bucket:
            raise InvariantError(f"{self.name}: {key!r} missing from bucket {level}")
        del bucket[key]
        self.mass -= level + 1
        return item

    def _evict(self) -> T:
        for level in range(self.levels):
            bucket = self._buckets[level]
            if bucket:
                item = self._remove(next(iter(bucket)))
                logger.debug("%s evicted %s at level %d", self.name, item.key, level)
                return item
        raise InvariantError(f"{self.name}: overflow with no occupied bucket")

    # -- display -----------------------------------------------------------

    def show_sizes(self) -> str:
        occupied = [(level, len(b)) for level, b in enumerate(self._buckets) if b]
        sizes = ", ".join(f"{level}:{count}" for level, count in reversed(occupied))
        return f" {self.name} Size: {len(self._items)} Levels: {len(occupied)} [{sizes}]"

    def to_string_long(self) -> str:
        lines = [" BAG " + self.name, self.show_sizes()]
        for level in range(self.levels - 1, -1, -1):
            bucket = self._buckets[level]
            if not bucket:
                continue
            lines.append(f" --- LEVEL {level}:")
            lines.extend(" " + str(self._items[key]) for key in bucket)
        lines.append(">>>> end of Bag " + self.name)
        return "\n".join(lines)
