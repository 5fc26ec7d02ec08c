"""
Bounded history of recently emitted guidance, for the anti-repetition check.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, List

DEFAULT_CAPACITY = 10


class RecentOutputHistory:
    """
    Most-recent-first ring buffer of guidance strings.

    Owned by a composer instance. The lock makes check-and-remember safe when
    FastAPI runs sync endpoints on its worker threads.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: Deque[str] = deque(maxlen=capacity)
        self.lock = threading.RLock()

    def remember(self, text: str) -> None:
        with self.lock:
            self._items.appendleft(text)

    def snapshot(self) -> List[str]:
        with self.lock:
            return list(self._items)

    def clear(self) -> None:
        with self.lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
