# src/sliding_window.py
from collections import deque
from typing import Deque, Iterator, List

from errors import InvalidConfiguration

DEFAULT_WINDOW_SIZE = 300


class SlidingWindow:
    """
    Fixed-capacity FIFO buffer of the most recently observed values.

    Duplicates are kept as they arrive, so the contents are not a statistical
    sample of the stream. The window is only used to read off the literal
    minimum and maximum of recent data.
    """
    def __init__(self, capacity: int = DEFAULT_WINDOW_SIZE):
        if capacity < 1:
            raise InvalidConfiguration(f"Sliding window capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        # deque(maxlen=...) drops the oldest entry when full
        self._values: Deque[float] = deque(maxlen=capacity)

    def push(self, value: float) -> None:
        self._values.append(float(value))

    def current_min(self) -> float:
        if not self._values:
            raise ValueError("current_min() on an empty sliding window")
        return min(self._values)

    def current_max(self) -> float:
        if not self._values:
            raise ValueError("current_max() on an empty sliding window")
        return max(self._values)

    def values(self) -> List[float]:
        """Returns the contents, oldest first."""
        return list(self._values)

    def clear(self) -> None:
        self._values.clear()

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"SlidingWindow(capacity={self.capacity}, size={len(self._values)})"
