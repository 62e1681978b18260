"""Monotonic id generation for the in-memory stores."""

import threading


class IdAllocator:
    """Hands out increasing integer ids, starting at ``start``.

    Safe to share between threads. Ids are never reused until :meth:`reset`.
    """

    def __init__(self, start: int = 1) -> None:
        self._start = start
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def peek(self) -> int:
        """Return the id the next call to :meth:`next_id` will hand out."""
        with self._lock:
            return self._next

    def reset(self) -> None:
        with self._lock:
            self._next = self._start
