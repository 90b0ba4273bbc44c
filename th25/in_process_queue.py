"""Bounded single-producer single-consumer message queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Optional

DEFAULT_MESSAGE_BUS_CAPACITY = 4096


class InProcessQueue:
    """Bounded FIFO queue for one producer thread and one consumer thread.

    ``capacity`` must be a power of two of at least 2. As in a classic
    ring buffer with one sentinel slot, at most ``capacity - 1`` messages
    are held at once. ``try_consume`` returns ``None`` when empty.
    """

    def __init__(self, capacity: int = DEFAULT_MESSAGE_BUS_CAPACITY) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError("capacity must be an int")
        if capacity < 2:
            raise ValueError("capacity must be at least 2")
        if capacity & (capacity - 1):
            raise ValueError("capacity must be a power of two")
        self._capacity = capacity
        self._items: Deque[Any] = deque()
        self._lock = threading.Lock()

    def capacity(self) -> int:
        """Return the configured capacity."""
        return self._capacity

    def try_publish(self, value: Any) -> bool:
        """Append ``value``; return False if the queue is full."""
        with self._lock:
            if len(self._items) >= self._capacity - 1:
                return False
            self._items.append(value)
            return True

    def try_consume(self) -> Optional[Any]:
        """Remove and return the oldest message, or None if empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def approximate_size(self) -> int:
        """Number of queued messages; may be stale under concurrent use."""
        return len(self._items)

    def empty_approx(self) -> bool:
        """Whether the queue looks empty; may be stale under concurrent use."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)