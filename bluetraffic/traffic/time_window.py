# bluetraffic/traffic/time_window.py
from __future__ import annotations

from itertools import chain
from typing import List, Sequence, Tuple, TypeVar

from .trip_index import MINUTES_PER_DAY

T = TypeVar("T")

ANY_TIME = -1
WINDOW_MINUTES = 60


def validate_time_filter(value) -> int:
    """
    Coerce a slider value to an int in [-1, 1439].
    -1 means "any time".
    """
    try:
        minute = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"time filter must be an integer, got {value!r}") from None

    if minute != value and not isinstance(value, str):
        raise ValueError(f"time filter must be a whole minute, got {value!r}")

    if minute < ANY_TIME or minute >= MINUTES_PER_DAY:
        raise ValueError(
            f"time filter must be in [{ANY_TIME}, {MINUTES_PER_DAY - 1}], got {minute}"
        )
    return minute


def window_bounds(minute: int) -> Tuple[int, int] | None:
    """
    Half-open [min_minute, max_minute) around `minute`, modulo one day.
    When min_minute > max_minute the window crosses midnight.
    """
    if minute == ANY_TIME:
        return None
    min_minute = (minute - WINDOW_MINUTES + MINUTES_PER_DAY) % MINUTES_PER_DAY
    max_minute = (minute + WINDOW_MINUTES) % MINUTES_PER_DAY
    return min_minute, max_minute


def filter_by_minute(buckets: Sequence[Sequence[T]], minute: int) -> List[T]:
    if minute == ANY_TIME:
        return list(chain.from_iterable(buckets))

    min_minute, max_minute = window_bounds(minute)

    if min_minute > max_minute:
        before_midnight = buckets[min_minute:]
        after_midnight = buckets[:max_minute]
        return list(chain.from_iterable(chain(before_midnight, after_midnight)))

    return list(chain.from_iterable(buckets[min_minute:max_minute]))
