# src/range_tracker.py
import logging
import math

from sliding_window import DEFAULT_WINDOW_SIZE, SlidingWindow

logger = logging.getLogger(__name__)

SENTINEL_VALUE_FOR_MISSING_DATA = None


def is_missing(value) -> bool:
    """True for the missing-data sentinel, NaN and infinities."""
    if value is SENTINEL_VALUE_FOR_MISSING_DATA:
        return True
    try:
        return not math.isfinite(value)
    except TypeError:
        return False


class RangeTracker:
    """
    Keeps the known [min_val, max_val] of a stream and widens it whenever a
    recent observation falls outside it.

    The tracker starts Uninitialized unless given distinct initial bounds. The
    first real observation bootstraps a unit-width range [x, x + 1]; after that
    the bounds only ever grow towards the extremes of the sliding window.
    """
    def __init__(self, min_val: float = 0.0, max_val: float = 0.0, window_size: int = DEFAULT_WINDOW_SIZE,
                 name: str = "[adaptive]", verbosity: int = 0):
        self.window = SlidingWindow(window_size)
        self.name = name
        self.verbosity = verbosity
        self.min_val = float(min_val)
        self.max_val = float(max_val)
        # Zero-valued bounds are legitimate data, so bootstrap state is tracked explicitly.
        self.bootstrapped = self.min_val < self.max_val

    def observe(self, value: float) -> bool:
        """
        Feeds one observation into the tracker.

        Args:
            value (float): The observed value. Missing data, NaN and infinities are ignored.

        Returns:
            bool: True if either bound moved.
        """
        if is_missing(value):
            return False

        value = float(value)
        self.window.push(value)

        if not self.bootstrapped:
            self.min_val = value
            # value + 1 rounds back to value for large magnitudes
            self.max_val = max(value + 1, math.nextafter(value, math.inf))
            self.bootstrapped = True
            if self.verbosity >= 1:
                logger.debug(f"Encoder {self.name} bootstrapped with range [{self.min_val}, {self.max_val}]")
            return True

        changed = False
        min_over_window = self.window.current_min()
        max_over_window = self.window.current_max()

        if min_over_window < self.min_val:
            if self.verbosity >= 2:
                logger.info(f"Input {self.name}={value} smaller than minval {self.min_val}. "
                            f"Adjusting minval to {min_over_window}")
            self.min_val = min_over_window
            changed = True

        if max_over_window > self.max_val:
            if self.verbosity >= 2:
                logger.info(f"Input {self.name}={value} greater than maxval {self.max_val}. "
                            f"Adjusting maxval to {max_over_window}")
            self.max_val = max_over_window
            changed = True

        return changed

    def __repr__(self) -> str:
        return (f"RangeTracker(min_val={self.min_val}, max_val={self.max_val}, "
                f"bootstrapped={self.bootstrapped}, window={len(self.window)}/{self.window.capacity})")
