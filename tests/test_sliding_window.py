import pytest
from sliding_window import SlidingWindow
from errors import InvalidConfiguration


@pytest.fixture
def window():
    """Provides a small window so eviction is easy to observe."""
    return SlidingWindow(capacity=3)


def test_push_keeps_insertion_order(window):
    for value in (4.0, 1.0, 4.0):
        window.push(value)
    # Duplicates are retained.
    assert window.values() == [4.0, 1.0, 4.0]
    assert len(window) == 3


def test_oldest_value_is_evicted_first(window):
    for value in (1.0, 2.0, 3.0, 4.0, 5.0):
        window.push(value)
    assert len(window) == window.capacity
    assert window.values() == [3.0, 4.0, 5.0]
    assert window.current_min() == 3.0
    assert window.current_max() == 5.0


def test_extremes_follow_contents(window):
    window.push(-2.5)
    window.push(7.0)
    assert window.current_min() == -2.5
    assert window.current_max() == 7.0


def test_empty_window_has_no_extremes(window):
    with pytest.raises(ValueError):
        window.current_min()
    with pytest.raises(ValueError):
        window.current_max()


def test_clear_empties_window(window):
    window.push(1.0)
    window.clear()
    assert len(window) == 0


@pytest.mark.parametrize("capacity", [0, -5])
def test_capacity_must_be_positive(capacity):
    with pytest.raises(InvalidConfiguration):
        SlidingWindow(capacity=capacity)
