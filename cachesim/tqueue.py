"""A FIFO queue that is safe to share between threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, Generic, Optional, TypeVar

T = TypeVar("T")


class ThreadSafeQueue(Generic[T]):
    """First-in first-out queue guarded by a lock and a condition variable."""

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._cond = threading.Condition()

    def push(self, value: T) -> None:
        """Append a value and wake one waiting consumer."""
        with self._cond:
            self._items.append(value)
            self._cond.notify()

    def wait_and_pop(self, stop_token: Callable[[], bool]) -> Optional[T]:
        """Block until an item is available or ``stop_token()`` is true.

        Returns the front item, or None if stopped while the queue is empty.
        """
        with self._cond:
            self._cond.wait_for(lambda: stop_token() or bool(self._items))
            if not self._items:
                return None
            return self._items.popleft()

    def try_pop(self) -> Optional[T]:
        """Return the front item without blocking, or None if the queue is empty."""
        with self._cond:
            return self._items.popleft() if self._items else None

    def empty(self) -> bool:
        """Whether the queue currently holds no items."""
        with self._cond:
            return not self._items