"""
slots.py - Fixed-width slot expansion.

Tiles [start, start + duration) with slots of ``slot_width`` minutes. A slot
is only produced if it fits completely; there is no partial trailing slot.
"""

from typing import Iterator

DEFAULT_SLOT_WIDTH = 10  # minutes


def expand(start_minutes: int, duration_minutes: int,
           slot_width: int = DEFAULT_SLOT_WIDTH) -> Iterator[int]:
    """Return an iterator of slot start times (minute-of-day, unwrapped).

    Each call returns a fresh iterator, so the sequence can be replayed by
    calling again with the same arguments.
    """
    if slot_width <= 0:
        raise ValueError("slot_width must be positive")
    return _tile(start_minutes, start_minutes + duration_minutes, slot_width)


def _tile(start: int, end: int, width: int) -> Iterator[int]:
    t = start
    while t + width <= end:
        yield t
        t += width
