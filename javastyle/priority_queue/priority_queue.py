import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, Iterable, Iterator, NamedTuple, Optional, TypeVar

import numpy as np

from javastyle.util.comparators import (
    Comparator,
    Equals,
    natural_order,
    reverse_order,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")

DEFAULT_INITIAL_CAPACITY = 11


class EqualityNotSupportedError(TypeError):
    """Raised when elements can't be matched by ``remove``/``contains``."""

    def __init__(self, item_type: type):
        super().__init__(
            "type is not equality-comparable and no equality function was "
            f"configured: {item_type.__name__}"
        )
        self.item_type = item_type


class QueueFullError(RuntimeError):
    """Raised by ``add`` when an element could not be inserted."""


class InsertResult(NamedTuple):
    ok: bool
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class QueueConfig:
    """
    Construction options of a PriorityQueue.

    Parameters
    ----------
    initial_capacity : int
        Number of slots pre-allocated in the backing storage. Does not
        change the logical size of the queue.
    comparator : Comparator, optional
        Ordering of the elements, by default the natural ordering.
    equals : Equals, optional
        Equality used by ``remove``/``contains`` for element types that only
        have identity equality.
    """
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    comparator: Optional[Comparator] = None
    equals: Optional[Equals] = None

    def __post_init__(self):
        capacity = self.initial_capacity
        if isinstance(capacity, bool) or not isinstance(
            capacity, (int, np.integer)
        ):
            raise ValueError(
                f"initial_capacity must be an integer, got {capacity!r}"
            )
        if capacity < 1:
            raise ValueError(
                f"initial_capacity must be at least 1, got {capacity}"
            )


@lru_cache(maxsize=256)
def _supports_native_equality(item_type: type) -> bool:
    # Types inheriting object.__eq__ only compare by identity. numpy arrays
    # compare element-wise, which has no single truth value.
    if item_type is type(None):
        return True
    if issubclass(item_type, np.ndarray):
        return False
    return item_type.__eq__ is not object.__eq__


class PriorityQueue(Generic[E]):
    """
    Unbounded priority queue backed by a binary min-heap.

    The head of the queue is the least element with respect to the
    comparator. Ties are broken arbitrarily. Not safe for concurrent
    mutation without external locking.

    Parameters
    ----------
    items : Iterable, optional
        Initial elements, heapified in linear time.
    initial_capacity : int, optional
        Pre-allocated slots, by default 11.
    comparator : Comparator, optional
        Three-way ordering function, by default ``natural_order()``.
    equals : Equals, optional
        Equality function for element types without value equality.
    config : QueueConfig, optional
        All of the above options at once. Can't be combined with the
        individual keyword options.
    """

    def __init__(
        self,
        items: Optional[Iterable[E]] = None,
        *,
        initial_capacity: Optional[int] = None,
        comparator: Optional[Comparator] = None,
        equals: Optional[Equals] = None,
        config: Optional[QueueConfig] = None
    ):
        if config is None:
            config = QueueConfig(
                initial_capacity=(
                    DEFAULT_INITIAL_CAPACITY
                    if initial_capacity is None
                    else initial_capacity
                ),
                comparator=comparator,
                equals=equals,
            )
        elif not (
            initial_capacity is None and comparator is None and equals is None
        ):
            raise ValueError(
                "Pass either config or individual options, not both"
            )

        self._config = config
        self._comparator = (
            config.comparator
            if config.comparator is not None
            else natural_order()
        )
        self._equals = config.equals

        elements = list(items) if items is not None else []
        capacity = max(int(config.initial_capacity), len(elements))
        self._items: list[Any] = elements + [None] * (capacity - len(elements))
        self._size = len(elements)
        if self._size > 1:
            self._heapify()

        logger.debug(
            "Created PriorityQueue with capacity %d and %d elements",
            capacity, self._size
        )

    @classmethod
    def min_heap(
        cls,
        items: Optional[Iterable[E]] = None,
        comparator: Optional[Comparator] = None,
        **options
    ) -> "PriorityQueue[E]":
        """Queue whose head is the least element under ``comparator``."""
        return cls(items, comparator=comparator, **options)

    @classmethod
    def max_heap(
        cls,
        items: Optional[Iterable[E]] = None,
        comparator: Optional[Comparator] = None,
        **options
    ) -> "PriorityQueue[E]":
        """Queue whose head is the greatest element under ``comparator``."""
        return cls(items, comparator=reverse_order(comparator), **options)

    @property
    def config(self) -> QueueConfig:
        return self._config

    @property
    def capacity(self) -> int:
        return len(self._items)

    def add(self, item: E) -> bool:
        """
        Insert ``item`` into the queue.

        Returns
        -------
        bool
            Always True.

        Raises
        ------
        QueueFullError
            If the backing storage could not make room for the element.
        """
        result = self._insert(item)
        if not result.ok:
            raise QueueFullError("Queue is full") from result.error
        return True

    def offer(self, item: E) -> bool:
        """
        Insert ``item`` into the queue.

        Returns
        -------
        bool
            True if the element was inserted, False if the backing storage
            could not make room for it.
        """
        result = self._insert(item)
        if not result.ok:
            logger.warning(
                "Failed to offer element at size %d: %s",
                self._size, result.error
            )
        return result.ok

    def add_all(self, items: Iterable[E]) -> bool:
        """
        Add every element of ``items``.

        Returns
        -------
        bool
            True if the queue changed as a result of the call.

        Raises
        ------
        ValueError
            If ``items`` is this queue.
        """
        if items is self:
            raise ValueError("Can't add a queue to itself")
        modified = False
        for item in items:
            if self.add(item):
                modified = True
        return modified

    def poll(self) -> Optional[E]:
        """
        Remove and return the head of the queue.

        An empty queue returns None, which can't be told apart from a stored
        None element; check ``size()`` or ``is_empty()`` first when that
        matters.
        """
        if self._size == 0:
            return None
        return self._remove_at(0)

    def peek(self) -> Optional[E]:
        """Return the head of the queue without removing it, or None."""
        if self._size == 0:
            return None
        return self._items[0]

    def remove(self, item: E) -> bool:
        """
        Remove a single element equal to ``item``.

        The backing storage is scanned in heap order, not sorted order, and
        the first match is removed.

        Returns
        -------
        bool
            True if an element was removed.

        Raises
        ------
        EqualityNotSupportedError
            If ``item`` only has identity equality and no ``equals`` was
            configured.
        """
        index = self._index_of(item)
        if index < 0:
            return False
        self._remove_at(index)
        return True

    def contains(self, item: E) -> bool:
        """
        Whether the queue holds an element equal to ``item``.

        Raises
        ------
        EqualityNotSupportedError
            If ``item`` only has identity equality and no ``equals`` was
            configured.
        """
        return self._index_of(item) >= 0

    def contains_multiple(self, items: Iterable[E]) -> np.ndarray:
        """
        Membership test for many elements at once.

        Parameters
        ----------
        items : Iterable
            Elements to look up.

        Returns
        -------
        np.ndarray
            Boolean array, one entry per element of ``items``.
        """
        return np.fromiter(
            (self.contains(item) for item in items), dtype=bool
        )

    def remove_multiple(self, items: Iterable[E]) -> int:
        """
        Remove one matching element for each entry of ``items``.

        Returns
        -------
        int
            The number of elements removed.
        """
        removed = 0
        for item in items:
            if self.remove(item):
                removed += 1
        return removed

    def clear(self) -> None:
        """Remove all elements. The capacity is kept."""
        for i in range(self._size):
            self._items[i] = None
        self._size = 0
        logger.debug("Cleared PriorityQueue")

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def comparator(self) -> Comparator:
        """The ordering in effect, caller supplied or natural."""
        return self._comparator

    def to_array(self) -> list[E]:
        """Copy of the elements in heap order (not sorted)."""
        return self._items[:self._size]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __contains__(self, item) -> bool:
        return self.contains(item)

    def __iter__(self) -> Iterator[E]:
        # Snapshot, in heap order
        return iter(self.to_array())

    def __repr__(self) -> str:
        return f"PriorityQueue({self.to_array()!r})"

    def _matcher(self, item):
        equals = self._equals
        if not _supports_native_equality(type(item)):
            if equals is None:
                raise EqualityNotSupportedError(type(item))
            return lambda other: equals(other, item)

        def matches(other) -> bool:
            if other is item:
                return True
            if _supports_native_equality(type(other)):
                return bool(other == item)
            # Stored arrays and identity-only objects never match by ==
            return equals is not None and bool(equals(other, item))
        return matches

    def _index_of(self, item) -> int:
        matches = self._matcher(item)
        for i in range(self._size):
            if matches(self._items[i]):
                return i
        return -1

    def _insert(self, item) -> InsertResult:
        if self._size == len(self._items):
            try:
                self._grow()
            except MemoryError as exc:
                return InsertResult(False, exc)
        self._items[self._size] = item
        self._size += 1
        self._sift_up(self._size - 1)
        return InsertResult(True)

    def _grow(self) -> None:
        self._items.extend([None] * len(self._items))

    def _remove_at(self, index: int):
        last = self._size - 1
        removed = self._items[index]
        moved = self._items[last]
        self._items[last] = None
        self._size = last
        if index < last:
            self._items[index] = moved
            self._sift_down(index)
            self._sift_up(index)
        return removed

    def _heapify(self) -> None:
        for i in range(self._size // 2 - 1, -1, -1):
            self._sift_down(i)
        logger.debug("Heapified %d elements", self._size)

    def _sift_up(self, index: int) -> None:
        items, compare = self._items, self._comparator
        while index > 0:
            parent = (index - 1) // 2
            if compare(items[index], items[parent]) >= 0:
                break
            items[index], items[parent] = items[parent], items[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        items, compare, size = self._items, self._comparator, self._size
        while True:
            smallest = index
            left = 2 * index + 1
            right = left + 1
            if left < size and compare(items[left], items[smallest]) < 0:
                smallest = left
            if right < size and compare(items[right], items[smallest]) < 0:
                smallest = right
            if smallest == index:
                return
            items[index], items[smallest] = items[smallest], items[index]
            index = smallest

    def _validate(self) -> bool:
        """Check the heap property over the live elements."""
        compare = self._comparator
        for child in range(1, self._size):
            parent = (child - 1) // 2
            if compare(self._items[parent], self._items[child]) > 0:
                return False
        return True
